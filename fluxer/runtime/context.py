"""
Resolution of the user data handed to guards, resolvers and handlers.
"""

from typing import Any, Optional


class DataContext:
    """
    Holds the machine's configured data context: either a static value or a
    zero-argument callable producing the value on demand. An explicit
    per-call argument always takes precedence.
    """

    def __init__(self, value_or_resolver: Optional[Any] = None) -> None:
        self._source = value_or_resolver

    @property
    def source(self) -> Optional[Any]:
        """The configured value or resolver, unevaluated."""
        return self._source

    @property
    def is_dynamic(self) -> bool:
        return callable(self._source)

    def set(self, value_or_resolver: Optional[Any]) -> None:
        """Replace the configured context; None clears it."""
        self._source = value_or_resolver

    def current(self) -> Optional[Any]:
        """The configured context, evaluated if it is a resolver."""
        if callable(self._source):
            return self._source()
        return self._source

    def resolve(self, args: Optional[Any] = None) -> Optional[Any]:
        """
        Data for one operation.

        :param args: Explicit per-call data; used as-is unless None.
        """
        if args is not None:
            return args
        return self.current()
