"""
InstanceFactory

This module builds objects from class definitions. For each definition the
factory:

1. Allocates an instance of the target class without calling ``__init__``
2. Injects properties (attributes set directly on the instance)
3. Calls the constructor with its injected parameters
4. Calls each injected method with its parameters

Every dependency is obtained from a Resolver, which usually is the container
itself. The factory keeps no state between calls: caching instances is the
resolver's job.

Example::

    factory = InstanceFactory(container)
    repository = factory.create_instance(ClassDefinition(
        "user_repository",
        UserRepository,
        constructor_injection=MethodInjection("__init__", (
            ParameterInjection("db", entry_name="database"),
        )),
    ))
"""

import importlib
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from .definition import ClassDefinition
from .exceptions import DefinitionError, DependencyError
from .injection import MethodInjection, ParameterInjection, PropertyInjection
from .resolver import Resolver

logger = logging.getLogger(__name__)


class InstanceFactory:
    """Creates instances from class definitions.

    Attributes:
        _resolver: Resolver used to obtain every injected dependency
    """

    def __init__(self, resolver: Resolver):
        """Initialize the factory.

        Args:
            resolver: The resolver to obtain dependencies from
        """
        self._resolver = resolver

    def create_instance(self, class_definition: ClassDefinition) -> Any:
        """Create a fully injected instance of a class definition.

        Properties are injected before the constructor is called, and
        methods are called last, on the constructed object.

        Args:
            class_definition: Definition of the object to create

        Returns:
            The new instance

        Raises:
            DependencyError: When the class cannot be instantiated or a
                dependency cannot be resolved
            DefinitionError: When the definition does not match the class
                (missing parameters, missing entry names, unknown methods)
        """
        cls = self._get_class(class_definition)
        instance = self._new_instance_without_constructor(cls)
        logger.debug("Allocated %s for entry '%s'", cls.__name__, class_definition.name)

        for property_injection in class_definition.property_injections:
            self._inject_property(instance, cls, property_injection)

        self._inject_constructor(instance, cls, class_definition.constructor_injection)

        for method_injection in class_definition.method_injections:
            self._inject_method(instance, cls, method_injection)

        return instance

    def _get_class(self, class_definition: ClassDefinition) -> type:
        """Return the class targeted by a definition.

        Raises:
            DefinitionError: When the definition has no class
            DependencyError: When the class cannot be imported or is not
                instantiable (abstract class, Protocol, not a class)
        """
        reference = class_definition.class_name
        if reference is None:
            raise DefinitionError(
                f"The definition of '{class_definition.name}' has no class to instantiate"
            )

        if isinstance(reference, str):
            cls = _import_class(reference)
        else:
            cls = reference

        if not isinstance(cls, type):
            raise DependencyError(f"{reference!r} is not a class")

        if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
            raise DependencyError(f"{cls.__name__} is not instantiable")

        return cls

    @staticmethod
    def _new_instance_without_constructor(cls: type) -> Any:
        """Create a new instance of a class without calling its constructor.

        User-defined ``__new__`` methods are skipped: the instance is
        allocated by the nearest built-in ``__new__`` of the MRO
        (``object.__new__``, ``int.__new__``...).
        """
        for base in cls.__mro__:
            allocator = vars(base).get("__new__")
            if allocator is None:
                continue
            if isinstance(allocator, staticmethod):
                allocator = allocator.__func__
            if inspect.isfunction(allocator):
                continue
            try:
                return base.__new__(cls)
            except TypeError as e:
                raise DependencyError(f"{cls.__name__} is not instantiable: {e}") from e

        raise DependencyError(f"{cls.__name__} is not instantiable")

    def _inject_property(self, instance: Any, cls: type, property_injection: PropertyInjection) -> None:
        """Inject a dependency into an attribute of the instance.

        Private attributes (``__name``) are injected under their mangled name,
        and custom ``__setattr__`` implementations are bypassed.

        Raises:
            DefinitionError: When the injection has no entry name or the
                attribute cannot be set
            DependencyError: When the dependency cannot be resolved
        """
        property_name = property_injection.property_name
        member = f"{cls.__name__}.{property_name}"

        if property_injection.entry_name is None:
            raise DefinitionError(f"{member} has no entry name defined")

        value = self._resolve(property_injection.entry_name, property_injection.lazy, member)

        try:
            object.__setattr__(instance, _attribute_name(cls, property_name), value)
        except AttributeError as e:
            raise DefinitionError(f"Cannot inject into {member}: {e}") from e

        logger.debug("Injected '%s' into %s", property_injection.entry_name, member)

    def _inject_constructor(
        self,
        instance: Any,
        cls: type,
        constructor_injection: Optional[MethodInjection]
    ) -> None:
        """Call the constructor of the instance with its injected parameters."""
        # No constructor
        if cls.__init__ is object.__init__:
            return

        parameter_injections = constructor_injection.parameter_injections if constructor_injection else ()
        self._invoke(instance.__init__, parameter_injections, f"{cls.__name__}.__init__")

    def _inject_method(self, instance: Any, cls: type, method_injection: MethodInjection) -> None:
        """Call an injected method on the instance.

        Private methods (``__name``) are looked up under their mangled name.
        """
        method_name = method_injection.method_name
        member = f"{cls.__name__}.{method_name}"

        method = getattr(instance, _attribute_name(cls, method_name), None)
        if not callable(method):
            raise DefinitionError(f"{member} is not a method")

        self._invoke(method, method_injection.parameter_injections, member)

    def _invoke(
        self,
        function: Callable,
        parameter_injections: Tuple[ParameterInjection, ...],
        member: str
    ) -> None:
        """Check the parameter count, resolve the parameters and call a function.

        Args:
            function: Bound constructor or method to call
            parameter_injections: Injected parameters, in declared order
            member: Qualified name used in error messages (Type.method)

        Raises:
            DefinitionError: When the number of injected parameters does not
                match the signature, or a parameter cannot be resolved
            DependencyError: When a dependency cannot be resolved
        """
        signature = _signature(function)
        required, accepted, keyword_only = _arity(signature)
        supplied = len(parameter_injections)

        # Check the definition and the function parameter number match
        if supplied < required:
            raise DefinitionError(
                f"{member} takes {required} parameters, {supplied} defined"
            )
        if accepted is not None and supplied > accepted:
            raise DefinitionError(
                f"{member} takes at most {accepted} parameters, {supplied} defined"
            )

        # No parameters
        if supplied == 0:
            function()
            return

        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        for parameter_injection in parameter_injections:
            parameter_name = parameter_injection.parameter_name
            if not parameter_injection.is_resolvable:
                raise DefinitionError(
                    f"The parameter '{parameter_name}' of {member} has no entry name or value defined"
                )

            if parameter_injection.has_value:
                value = parameter_injection.value
            else:
                value = self._resolve(parameter_injection.entry_name, False, member)

            if parameter_name in keyword_only:
                kwargs[parameter_name] = value
            else:
                args.append(value)

        logger.debug("Calling %s with %d injected parameters", member, supplied)
        function(*args, **kwargs)

    def _resolve(self, entry_name: str, lazy: bool, member: str) -> Any:
        """Resolve a dependency, adding the injection point to unexpected errors."""
        try:
            return self._resolver.resolve(entry_name, lazy=lazy)
        except (DependencyError, DefinitionError):
            raise
        except Exception as e:
            raise DependencyError(
                f"Error while injecting '{entry_name}' in {member}: {e}"
            ) from e


def _import_class(path: str) -> Any:
    """Import a class from a dotted path ("package.module.ClassName")."""
    module_name, _, class_name = path.rpartition(".")
    if not module_name:
        raise DependencyError(f"Class '{path}' must be given as 'module.ClassName'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise DependencyError(f"Cannot import module '{module_name}' for class '{path}': {e}") from e

    try:
        return getattr(module, class_name)
    except AttributeError as e:
        raise DependencyError(f"Class '{path}' does not exist") from e


def _attribute_name(cls: type, name: str) -> str:
    """Return the name an attribute or method is stored under, applying name mangling.

    A private name is mangled with the first class of the MRO that declares
    it (annotation, class attribute or method), or with the target
    class otherwise.
    """
    if not name.startswith("__") or name.endswith("__"):
        return name

    for klass in cls.__mro__:
        mangled = _mangle(klass, name)
        if mangled in vars(klass) or mangled in inspect.get_annotations(klass):
            return mangled

    return _mangle(cls, name)


def _mangle(cls: type, name: str) -> str:
    class_name = cls.__name__.lstrip("_")
    if not class_name:
        return name
    return f"_{class_name}{name}"


def _signature(function: Callable) -> Optional[inspect.Signature]:
    try:
        return inspect.signature(function)
    except (ValueError, TypeError):
        # Built-in callables without introspectable signatures
        return None


def _arity(signature: Optional[inspect.Signature]) -> Tuple[int, Optional[int], frozenset]:
    """Return (required count, accepted count or None, keyword-only names)."""
    if signature is None:
        return 0, None, frozenset()

    required = 0
    accepted: Optional[int] = 0
    keyword_only = set()
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            accepted = None
            continue
        if parameter.kind is inspect.Parameter.VAR_KEYWORD:
            continue
        if parameter.kind is inspect.Parameter.KEYWORD_ONLY:
            keyword_only.add(parameter.name)
        if parameter.default is inspect.Parameter.empty:
            required += 1
        if accepted is not None:
            accepted += 1

    return required, accepted, frozenset(keyword_only)
