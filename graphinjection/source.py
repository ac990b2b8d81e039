"""
Definition Sources

This module provides the DefinitionSource interface and its two built-in
implementations:

- DictDefinitionSource: definitions held in memory, keyed by name
- CombinedDefinitionSource: merges the definitions of several sub-sources

Loaders that parse annotations or configuration files implement
DefinitionSource themselves and are combined with CombinedDefinitionSource.

Example::

    defaults = DictDefinitionSource([
        ClassDefinition("mailer", SmtpMailer, scope=Scope.SINGLETON),
    ])
    overrides = DictDefinitionSource([
        ValueDefinition("mailer.host", "localhost"),
    ])

    source = CombinedDefinitionSource([overrides, defaults])
    definition = source.get_definition("mailer")
"""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from .definition import ClassDefinition, Definition, ValueDefinition

logger = logging.getLogger(__name__)


class DefinitionSource(ABC):
    """Abstract provider of definitions."""

    @abstractmethod
    def get_definition(self, name: str) -> Optional[Definition]:
        """Return the definition for an entry name.

        Args:
            name: The entry name to look up

        Returns:
            The definition, or None if this source has none for the name
        """
        pass


class DictDefinitionSource(DefinitionSource):
    """In-memory source of ready-made definitions.

    Example::

        source = DictDefinitionSource()
        source.add_definition(ValueDefinition("db.host", "localhost"))
        source.get_definition("db.host").value  # "localhost"
    """

    def __init__(self, definitions: Optional[Iterable[Definition]] = None):
        self._definitions: Dict[str, Definition] = {}
        for definition in definitions or ():
            self.add_definition(definition)

    def add_definition(self, definition: Definition) -> None:
        """Add a definition, replacing any previous one with the same name."""
        self._definitions[definition.name] = definition

    def get_definition(self, name: str) -> Optional[Definition]:
        return self._definitions.get(name)


class CombinedDefinitionSource(DefinitionSource):
    """A source that merges the definitions of several sub-sources.

    Sub-sources are queried in the order they were added. A ValueDefinition
    returned by any sub-source wins immediately; other definitions are merged
    into the first one found.

    Attributes:
        _sub_sources: Ordered list of sub-sources (duplicates allowed)

    Note:
        Combined sources may be nested, but must not contain themselves,
        directly or indirectly: lookups would never terminate.
        No locking is done, so the sub-source list must not be modified
        while a lookup is running in another thread.
    """

    def __init__(self, sources: Optional[Iterable[DefinitionSource]] = None):
        """Initialize the combined source.

        Args:
            sources: Sub-sources to add initially, highest priority first
        """
        self._sub_sources: List[DefinitionSource] = []
        for source in sources or ():
            self.add_source(source)

    def get_definition(self, name: str) -> Optional[Definition]:
        """Return the merged definition of all sub-sources for a name.

        Args:
            name: The entry name to look up

        Returns:
            The ValueDefinition of the first sub-source having one, otherwise
            the merged definition, or None if no sub-source knows the name

        Note:
            The definitions owned by sub-sources are never modified: when a
            second definition has to be merged, it is merged into a
            copy of the first one.
        """
        definition: Optional[Definition] = None
        owned = False

        for sub_source in self._sub_sources:
            sub_definition = sub_source.get_definition(name)
            if sub_definition is None:
                continue

            # A ValueDefinition always prevails on others
            if isinstance(sub_definition, ValueDefinition):
                return sub_definition

            if definition is None:
                definition = sub_definition
                continue

            if not owned:
                definition = _working_copy(definition)
                owned = True

            logger.debug("Merging definition '%s' from %r", name, sub_source)
            definition.merge(sub_definition)

        return definition

    def add_source(self, source: DefinitionSource) -> None:
        """Add a sub-source with the lowest priority.

        Args:
            source: The source to append
        """
        self._sub_sources.append(source)
        logger.debug("Added definition source %r", source)

    def remove_source(self, source: DefinitionSource) -> None:
        """Remove every occurrence of a sub-source.

        Sources are compared by identity, so an equal but distinct source is
        kept. Removing a source that was never added has no effect.

        Args:
            source: The source to remove
        """
        self._sub_sources = [s for s in self._sub_sources if s is not source]
        logger.debug("Removed definition source %r", source)

    def get_sources(self) -> List[DefinitionSource]:
        """Return the sub-sources, highest priority first.

        Returns:
            A snapshot list; modifying it does not change this source
        """
        return list(self._sub_sources)


def _working_copy(definition: Definition) -> Definition:
    if isinstance(definition, ClassDefinition):
        return definition.copy()
    return copy.copy(definition)
