"""
Test Fixtures

Common test classes and resolvers used across test modules
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Protocol

from graphinjection import NotFoundError, Resolver


@dataclass(frozen=True)
class LazyHandle:
    """Stand-in for the lazy proxy a container would return"""
    entry_name: str
    value: Any


class RecordingResolver(Resolver):
    """Dict-backed resolver recording every call it receives"""

    def __init__(self, entries=None):
        self.entries = dict(entries or {})
        self.calls = []

    def resolve(self, entry_name, lazy=False):
        self.calls.append((entry_name, lazy))
        if entry_name not in self.entries:
            raise NotFoundError(f"No entry or class found for '{entry_name}'")
        value = self.entries[entry_name]
        if lazy:
            return LazyHandle(entry_name, value)
        return value


class FailingResolver(Resolver):
    """Resolver raising the given error for every entry"""

    def __init__(self, error: Exception):
        self.error = error
        self.calls = []

    def resolve(self, entry_name, lazy=False):
        self.calls.append((entry_name, lazy))
        raise self.error


class Database:
    """Test database class"""

    def __init__(self):
        self.name = "TestDB"


class CacheService:
    """Test cache service"""

    def __init__(self):
        self.cache = {}


class Empty:
    """Class without constructor, properties or methods"""
    pass


class UserRepository:
    """Test repository with two required dependencies"""

    def __init__(self, db: Database, cache: CacheService):
        self.db = db
        self.cache = cache


class Mailer:
    """Service with one optional constructor parameter"""

    def __init__(self, host: str, port: int = 25):
        self.host = host
        self.port = port


class KeywordOnlyService:
    """Service with a keyword-only parameter"""

    def __init__(self, db: Database, *, timeout: int):
        self.db = db
        self.timeout = timeout


class VariadicService:
    """Service accepting any number of handlers"""

    def __init__(self, *handlers):
        self.handlers = handlers


class PrivateService:
    """Service storing its dependency in a private attribute"""

    __db: Database

    @property
    def db(self):
        return self.__db


class BasePrivateService:
    """Base class declaring a private attribute"""

    __cache: CacheService = None

    @property
    def base_cache(self):
        return self.__cache


class DerivedPrivateService(BasePrivateService):
    """Subclass inheriting the base private attribute"""
    pass


class GuardedService:
    """Service refusing attribute assignment through __setattr__"""

    def __setattr__(self, name, value):
        raise AttributeError("GuardedService is read-only")


class SlottedService:
    """Service without __dict__"""

    __slots__ = ("db",)


class OrderedService:
    """Service recording the order of its injections"""

    def __init__(self, cache: CacheService):
        self.db_seen_by_constructor = getattr(self, "db", None)
        self.cache = cache
        self.events = ["constructor"]

    def set_mailer(self, mailer: Mailer):
        self.mailer = mailer
        self.events.append("set_mailer")

    def start(self):
        self.events.append("start")


class FailingConstructorService:
    """Service whose constructor always fails"""

    def __init__(self):
        raise RuntimeError("constructor failed")


class IRepository(ABC):
    """Abstract repository interface"""

    @abstractmethod
    def get_data(self) -> str:
        pass


class RepositoryProtocol(Protocol):
    """Structural repository interface"""

    def get_data(self) -> str:
        ...


class CustomNewService:
    """Service whose __new__ requires the constructor argument"""

    def __new__(cls, config):
        instance = super().__new__(cls)
        instance.allocated_with = config
        return instance

    def __init__(self, config):
        self.config = config


class SideEffectNewService:
    """Service recording every call to its __new__"""

    new_calls = []

    def __new__(cls):
        cls.new_calls.append(cls.__name__)
        return super().__new__(cls)


class IntSubclass(int):
    """Built-in subclass allocated by int.__new__"""
    pass


class PrivateMethodService:
    """Service configured through a private method"""

    def __configure(self, db: Database):
        self.db = db


class DerivedPrivateMethodService(PrivateMethodService):
    """Subclass inheriting the private method"""
    pass
