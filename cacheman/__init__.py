from .backends import MemoryStorageBackend, StorageBackend
from .cache import Cache, create_cache
from .cacheman import CacheMan
from .checker import Checker
from .errors import CachemanError, ConfigurationError
from .validator import Validator

__all__ = [
    "Cache",
    "CacheMan",
    "CachemanError",
    "Checker",
    "ConfigurationError",
    "MemoryStorageBackend",
    "StorageBackend",
    "Validator",
    "create_cache",
]
