from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class CacheOptions(BaseModel):
    """Options accepted by CacheMan.create. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    # TTL in milliseconds; None falls back to config.DEFAULT_TIMEOUT_MS
    timeout: Optional[Any] = None
    # a backend or a list of backends; None means one MemoryStorageBackend
    backend: Optional[Any] = None
    name: Optional[str] = None
