"""
Core package: transitions, state configuration, event handlers and the
execution engine.
"""
