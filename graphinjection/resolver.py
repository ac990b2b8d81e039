"""
Resolver Module

This module provides the Resolver abstract interface used by the instance
factory to obtain the dependencies it injects. The resolver is usually the
container itself: it looks up the definition of an entry name and builds
(or returns a cached) value for it.
"""

from abc import ABC, abstractmethod
from typing import Any


class Resolver(ABC):
    """Abstract interface for resolving entry names to values.

    Example::

        class DictResolver(Resolver):
            def __init__(self, entries):
                self._entries = entries

            def resolve(self, entry_name, lazy=False):
                try:
                    return self._entries[entry_name]
                except KeyError:
                    raise NotFoundError(f"No entry named '{entry_name}'") from None
    """

    @abstractmethod
    def resolve(self, entry_name: str, lazy: bool = False) -> Any:
        """Resolve an entry name to a value.

        Args:
            entry_name: The entry to resolve
            lazy: Return a lazy handle instead of the value itself

        Returns:
            The resolved value (or lazy handle)

        Raises:
            NotFoundError: When the entry name is unknown
            DependencyError: When the entry could not be built
            DefinitionError: When the entry's definition is invalid
        """
        pass
