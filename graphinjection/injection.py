"""
Injections

Data classes describing where a class definition injects its dependencies:

- ParameterInjection: one formal parameter of a constructor or method
- PropertyInjection: one attribute set directly on the instance
- MethodInjection: a method (or the constructor) and its parameters
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple


class _NoValue:
    """Marker type for a parameter injection without a literal value."""

    def __repr__(self) -> str:
        return "NO_VALUE"


NO_VALUE = _NoValue()


@dataclass(frozen=True)
class ParameterInjection:
    """Injection of a single constructor or method parameter.

    Attributes:
        parameter_name: Name of the formal parameter (used in error messages
            and for keyword-only parameters).
        entry_name: Name of the entry to resolve for this parameter.
        value: Literal value to pass instead of resolving an entry.
            ``NO_VALUE`` when unset; ``None`` is a legal literal.
    """

    parameter_name: str
    entry_name: Optional[str] = None
    value: Any = NO_VALUE

    @property
    def has_value(self) -> bool:
        return self.value is not NO_VALUE

    @property
    def is_resolvable(self) -> bool:
        """True when the parameter carries a literal or an entry name."""
        return self.has_value or self.entry_name is not None


@dataclass(frozen=True)
class PropertyInjection:
    """Injection of an attribute on the instance.

    Attributes:
        property_name: Attribute name as written in the class body. Private
            names (``__name``) are mangled by the factory.
        entry_name: Name of the entry to resolve.
        lazy: Request a lazy handle instead of the resolved value.
    """

    property_name: str
    entry_name: Optional[str] = None
    lazy: bool = False


@dataclass(frozen=True)
class MethodInjection:
    """Injection through a method call (the constructor uses ``__init__``)."""

    method_name: str
    parameter_injections: Tuple[ParameterInjection, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept lists for convenience, store an immutable tuple
        object.__setattr__(self, "parameter_injections", tuple(self.parameter_injections))

    def merge(self, other: 'MethodInjection') -> 'MethodInjection':
        """Return a new injection completing this one with another.

        Parameters that are unresolvable here are taken from ``other`` at the
        same position; trailing parameters only ``other`` defines are appended.

        Args:
            other: The injection contributed by a lower-priority source

        Returns:
            The merged MethodInjection (neither operand is modified)
        """
        merged = []
        for index, parameter in enumerate(self.parameter_injections):
            if not parameter.is_resolvable and index < len(other.parameter_injections):
                parameter = other.parameter_injections[index]
            merged.append(parameter)
        merged.extend(other.parameter_injections[len(self.parameter_injections):])
        return MethodInjection(self.method_name, tuple(merged))
