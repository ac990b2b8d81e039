"""
Definition

Data classes representing named entry definitions.

A definition describes how to produce the value of a named entry:

- ValueDefinition: a constant, returned as-is
- ClassDefinition: a class to instantiate, with its injections

Definitions for the same name coming from several sources are combined with
``merge()``, whose semantics belong to each variant.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Type, Union

from .injection import MethodInjection, PropertyInjection
from .scope import Scope


# Target of a class definition: the class itself or a dotted import path
ClassReference = Union[str, Type]


class Definition(ABC):
    """Abstract definition of a named entry.

    Subclasses expose a ``name`` attribute and implement ``merge()``.
    """

    name: str

    @abstractmethod
    def merge(self, other: 'Definition') -> None:
        """Complete this definition in place with another one for the same name.

        Args:
            other: Definition contributed by a lower-priority source
        """
        pass


@dataclass(frozen=True)
class ValueDefinition(Definition):
    """Definition of a constant value.

    A value definition is terminal: when combining sources it takes
    precedence over every other definition for the same name.
    """
    name: str
    value: Any

    def merge(self, other: Definition) -> None:
        # Terminal: nothing can be added to a constant
        pass


@dataclass
class ClassDefinition(Definition):
    """Definition of an object built by instantiating a class.

    Attributes:
        name: Entry name
        class_name: Class to instantiate, as a class object or a dotted
            import path. ``None`` for partial definitions that only
            contribute injections.
        constructor_injection: Parameters of ``__init__``, if any
        method_injections: Methods to call after construction, in order
        property_injections: Attributes to set before construction, in order
        scope: Scope hint for the container (None = unset)
        lazy: Lazy hint for the container (None = unset)

    Example::

        definition = ClassDefinition(
            "user_repository",
            "myapp.repositories.UserRepository",
            constructor_injection=MethodInjection("__init__", (
                ParameterInjection("db", entry_name="database"),
            )),
            property_injections=[PropertyInjection("logger", "logger")],
        )
    """
    name: str
    class_name: Optional[ClassReference] = None
    constructor_injection: Optional[MethodInjection] = None
    method_injections: List[MethodInjection] = field(default_factory=list)
    property_injections: List[PropertyInjection] = field(default_factory=list)
    scope: Optional[Scope] = None
    lazy: Optional[bool] = None

    def merge(self, other: Definition) -> None:
        """Merge another class definition into this one.

        Unset fields (class, scope, lazy) are filled without overwriting set
        ones, injection lists are concatenated with this definition's
        injections first, and constructor parameters are completed position
        by position. Other definition variants are ignored.

        Args:
            other: Definition contributed by a lower-priority source
        """
        if not isinstance(other, ClassDefinition):
            return

        if self.class_name is None:
            self.class_name = other.class_name
        if self.scope is None:
            self.scope = other.scope
        if self.lazy is None:
            self.lazy = other.lazy

        if other.constructor_injection is not None:
            if self.constructor_injection is None:
                self.constructor_injection = other.constructor_injection
            else:
                self.constructor_injection = self.constructor_injection.merge(
                    other.constructor_injection
                )

        self.method_injections.extend(other.method_injections)
        self.property_injections.extend(other.property_injections)

    def copy(self) -> 'ClassDefinition':
        """Return a copy whose injection lists can be modified independently."""
        return replace(
            self,
            method_injections=list(self.method_injections),
            property_injections=list(self.property_injections),
        )
