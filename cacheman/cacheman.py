from typing import Any, Callable, Mapping, Optional, Union

from pydantic import ValidationError

from .backends import MemoryStorageBackend
from .cache import Cache, create_cache
from .config import config
from .errors import ConfigurationError
from .schemas import CacheOptions
from .validator import Validator


class CacheMan:
    @staticmethod
    def create(
        upstream: Callable[..., Any],
        options: Optional[Union[Mapping[str, Any], CacheOptions]] = None,
    ) -> Cache:
        """Create a Cache for ``upstream``.

        options:
          timeout: TTL in milliseconds for the default memory backend
          backend: a StorageBackend or a list of them
          name: label for logs and metrics
        """
        if options is None:
            opts = CacheOptions()
        elif isinstance(options, CacheOptions):
            opts = options
        else:
            try:
                opts = CacheOptions.model_validate(dict(options))
            except (ValidationError, TypeError, ValueError) as exc:
                raise ConfigurationError(f"invalid cache options: {exc}") from exc

        timeout = config.DEFAULT_TIMEOUT_MS if opts.timeout is None else opts.timeout
        timeout = Validator.timeout(timeout)

        backend = opts.backend
        if backend is None:
            backend = MemoryStorageBackend(timeout)

        return create_cache(upstream, backend, name=opts.name)
