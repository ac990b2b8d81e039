from importlib.metadata import PackageNotFoundError, version as _distribution_version

# Public API
from .definition import ClassDefinition, Definition, ValueDefinition
from .exceptions import (
    DefinitionError,
    DependencyError,
    GraphInjectionError,
    NotFoundError,
)
from .factory import InstanceFactory
from .injection import NO_VALUE, MethodInjection, ParameterInjection, PropertyInjection
from .resolver import Resolver
from .scope import Scope
from .source import CombinedDefinitionSource, DefinitionSource, DictDefinitionSource

__all__ = [
    # Definitions
    "Definition",
    "ValueDefinition",
    "ClassDefinition",
    "Scope",
    # Injections
    "ParameterInjection",
    "PropertyInjection",
    "MethodInjection",
    "NO_VALUE",
    # Sources
    "DefinitionSource",
    "DictDefinitionSource",
    "CombinedDefinitionSource",
    # Instantiation
    "InstanceFactory",
    "Resolver",
    # Exceptions
    "GraphInjectionError",
    "DefinitionError",
    "DependencyError",
    "NotFoundError",
]

# Version comes from the installed distribution metadata (pyproject.toml)
try:
    __version__ = _distribution_version("graphinjection")
except PackageNotFoundError:
    # Fallback for development
    __version__ = '0.0.0'
