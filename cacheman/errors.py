class CachemanError(Exception):
    pass


class ConfigurationError(CachemanError, ValueError):
    """Raised at construction time when a resolver, timeout or backend is unusable."""
