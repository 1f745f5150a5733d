"""
Runtime support: the state registry and data context resolution.
"""
