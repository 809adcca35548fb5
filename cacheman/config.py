import os
from dataclasses import dataclass


def _bool_env(name, default=False):
    v = os.getenv(name)
    if v is None:
        return default
    return v.lower() in ("1", "true", "yes", "y")


@dataclass
class Config:
    # TTL used when CacheMan.create gets no timeout, in milliseconds
    DEFAULT_TIMEOUT_MS: int
    LOG_LEVEL: str
    LOG_JSON: bool
    # install an SDK tracer provider with a console exporter
    TRACING: bool


def load_config() -> Config:
    return Config(
        DEFAULT_TIMEOUT_MS=int(os.getenv("CACHEMAN_DEFAULT_TIMEOUT_MS", str(2 * 60 * 1000))),
        LOG_LEVEL=os.getenv("CACHEMAN_LOG_LEVEL", "INFO"),
        LOG_JSON=_bool_env("CACHEMAN_LOG_JSON", default=True),
        TRACING=_bool_env("CACHEMAN_TRACING", default=False),
    )


config = load_config()
