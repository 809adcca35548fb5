from .checker import Checker
from .errors import ConfigurationError


class Validator:
    """Same checks as Checker, but raises ConfigurationError and returns the value on success."""

    @staticmethod
    def resolver(resolver):
        if not Checker.resolver(resolver):
            raise ConfigurationError("upstream must be a callable (...) -> value or awaitable")
        return resolver

    @staticmethod
    def timeout(timeout_ms):
        if not Checker.timeout(timeout_ms):
            raise ConfigurationError(f"timeout must be greater than 0 and less than 2^53 - 1, got {timeout_ms!r}")
        return timeout_ms

    @staticmethod
    def backend(backend):
        if not Checker.backend(backend):
            raise ConfigurationError(
                "backend must be an object with get() and set(data, access_time) methods and, if present, a valid timeout"
            )
        return backend

    @staticmethod
    def backends(backend) -> tuple:
        """Normalize one backend or a list of backends into a non-empty tuple."""
        if isinstance(backend, (list, tuple)):
            if not backend:
                raise ConfigurationError("backend list must not be empty")
            return tuple(Validator.backend(b) for b in backend)
        return (Validator.backend(backend),)
