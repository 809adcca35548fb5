import math
from numbers import Real

# Largest integer a double represents exactly, 2^53 - 1
MAX_SAFE_INTEGER = 2 ** 53 - 1


class Checker:
    """Boolean checks on construction arguments. Never raises."""

    @staticmethod
    def resolver(resolver) -> bool:
        return resolver is not None and callable(resolver)

    @staticmethod
    def timeout(timeout_ms) -> bool:
        # bool is an int subclass; True is not a timeout
        if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, Real):
            return False
        return math.isfinite(timeout_ms) and 0 < timeout_ms < MAX_SAFE_INTEGER

    @staticmethod
    def backend(backend) -> bool:
        """Callable get() and set() are required. ``timeout`` is optional, but must be valid when present."""
        if backend is None:
            return False
        if not (callable(getattr(backend, "get", None)) and callable(getattr(backend, "set", None))):
            return False
        timeout_ms = getattr(backend, "timeout", None)
        return timeout_ms is None or Checker.timeout(timeout_ms)
