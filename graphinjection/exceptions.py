"""
GraphInjection Exceptions

Custom exception hierarchy for the GraphInjection object-graph assembler
"""


class GraphInjectionError(Exception):
    """
    Base exception for all GraphInjection errors.

    All GraphInjection-specific exceptions inherit from this class.
    You can catch this to handle any GraphInjection error generically.

    Example:
        >>> try:
        ...     service = factory.create_instance(definition)
        ... except GraphInjectionError as e:
        ...     print(f"DI error: {e}")
    """

    pass


class DefinitionError(GraphInjectionError):
    """
    Raised when a definition is structurally insufficient to build an object.

    This error signals an authoring bug in the definitions, never a problem
    caused by runtime data.

    Common causes:
        - Fewer parameter injections than the constructor or method requires
        - More parameter injections than the signature accepts
        - A parameter injection with neither an entry name nor a value
        - A property injection without an entry name
        - A method injection naming a method the class does not have

    Solution:
        Complete the definition before handing it to the factory::

            definition = ClassDefinition(
                "repository",
                UserRepository,
                constructor_injection=MethodInjection("__init__", (
                    ParameterInjection("db", entry_name="database"),
                )),
            )
    """

    pass


class DependencyError(GraphInjectionError):
    """
    Raised when a dependency cannot be created or resolved at runtime.

    The original error, if any, is available as ``__cause__``.

    Common causes:
        - The target class is abstract, a Protocol, or cannot be imported
        - The resolver does not know an entry name used by an injection
        - The resolver failed while building a nested dependency

    Solution:
        Make sure every entry name used in the definition can be resolved,
        and that the definition targets a concrete class::

            # Bad - abstract base class
            ClassDefinition("db", IDatabase)

            # Good - concrete implementation
            ClassDefinition("db", PostgresDatabase)
    """

    pass


class NotFoundError(GraphInjectionError):
    """
    Raised by a resolver when an entry name is unknown.

    The instance factory never lets this error escape directly: it is
    wrapped into a ``DependencyError`` naming the class and member that
    required the missing entry.

    Example::

        class DictResolver(Resolver):
            def resolve(self, entry_name, lazy=False):
                try:
                    return self._entries[entry_name]
                except KeyError:
                    raise NotFoundError(f"No entry named '{entry_name}'") from None
    """

    pass
