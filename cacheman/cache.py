import asyncio
import inspect
import logging
import time
from typing import Any, Callable, Optional

from . import metrics
from .backends import now_millis
from .tracer import start_span_async
from .validator import Validator

log = logging.getLogger(__name__)


def _consume_exception(task: asyncio.Task) -> None:
    # every caller may have been cancelled before the failure landed
    if not task.cancelled():
        task.exception()


class Cache:
    """Memoizes the single result of ``upstream`` across one or more backends.

    Concurrent misses share one upstream call. The result is written to every
    backend with the time the fetch started; a failure resets every backend
    and reaches all waiting callers unchanged.
    """

    def __init__(
        self,
        upstream: Callable[..., Any],
        backend,
        name: Optional[str] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self._upstream = Validator.resolver(upstream)
        self._backends = Validator.backends(backend)
        self.name = name or getattr(upstream, "__qualname__", None) or repr(upstream)
        self._clock = clock or now_millis
        # task of the upstream call currently running, if any
        self._inflight: Optional[asyncio.Task] = None

    @property
    def backends(self) -> tuple:
        return self._backends

    @property
    def fetching(self) -> bool:
        return self._inflight is not None

    async def get(self, *args, **kwargs) -> Any:
        """Return a fresh cached value, or the result of the (shared) upstream fetch.

        While a fetch is running, later callers join it and their arguments
        are ignored.
        """
        now = self._clock()

        for backend in self._backends:
            cached = backend.get()
            if cached is not getattr(backend, "empty", None):
                metrics.cache_hits.labels(self.name).inc()
                return cached

        metrics.cache_misses.labels(self.name).inc()
        if self._inflight is None:
            log.debug("starting upstream fetch", extra={"cache": self.name, "event": "fetch-start"})
            self._inflight = asyncio.ensure_future(self._fetch(now, args, kwargs))
            self._inflight.add_done_callback(_consume_exception)
        else:
            metrics.inflight_joins.labels(self.name).inc()
            log.debug("joining in-flight fetch", extra={"cache": self.name, "event": "fetch-join"})

        # a cancelled caller must not cancel the fetch other callers share
        return await asyncio.shield(self._inflight)

    def clear(self) -> None:
        """Reset every backend to empty. A fetch already running is not cancelled and still writes through."""
        metrics.cache_clears.labels(self.name).inc()
        log.debug("clearing backends", extra={"cache": self.name, "event": "clear"})
        self._reset_backends()

    async def _fetch(self, started_at: float, args: tuple, kwargs: dict) -> Any:
        metrics.upstream_calls.labels(self.name).inc()
        start = time.perf_counter()
        try:
            async with start_span_async("cacheman.fetch", cache=self.name):
                result = self._upstream(*args, **kwargs)
                if inspect.isawaitable(result):
                    result = await result
        except BaseException as exc:
            metrics.upstream_failures.labels(self.name).inc()
            log.warning(
                "upstream fetch failed",
                extra={"cache": self.name, "event": "fetch-fail", "err": type(exc).__name__},
            )
            self._reset_backends()
            raise
        else:
            self._set_backends(result, started_at)
            return result
        finally:
            metrics.fetch_duration_seconds.labels(self.name).observe(time.perf_counter() - start)
            self._inflight = None

    def _set_backends(self, value: Any, write_time: float) -> None:
        # best effort: a failing backend does not stop the others
        for backend in self._backends:
            try:
                backend.set(value, write_time)
            except Exception:
                metrics.backend_errors.labels(self.name).inc()
                log.exception("backend set failed", extra={"cache": self.name, "backend": repr(backend)})

    def _reset_backends(self) -> None:
        for backend in self._backends:
            try:
                reset = getattr(backend, "clear", None)
                if callable(reset):
                    reset()
                else:
                    backend.set(None, 0)
            except Exception:
                metrics.backend_errors.labels(self.name).inc()
                log.exception("backend reset failed", extra={"cache": self.name, "backend": repr(backend)})

    def __repr__(self) -> str:
        return f"Cache(name={self.name!r}, backends={len(self._backends)})"


def create_cache(upstream: Callable[..., Any], backend, name: Optional[str] = None, clock=None) -> Cache:
    """Build a Cache over an explicit backend or list of backends."""
    return Cache(upstream, backend, name=name, clock=clock)
