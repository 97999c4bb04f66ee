"""FastAPI/Starlette integration: one TimingRegistry per request.

    app = FastAPI()
    app.add_middleware(ServerTimingMiddleware)

    @app.get("/items")
    def items(timing: TimingRegistry = Depends(get_registry)):
        timing.profile("db")
        rows = load()
        timing.profile("db")
        return rows

Every profiled metric becomes its own ``Server-Timing`` response header.
The per-request registries share the process default registry's log
file, so ``servertiming.set_log_file`` at startup applies to ``log``
calls made inside requests.
"""
from __future__ import annotations

from typing import Callable, Optional

try:
    from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp
except ImportError as exc:  # pragma: no cover - executed when fastapi missing
    raise ImportError(
        "ASGI integration requires the 'api' extra: install via "
        "`pip install servertiming[api]`."
    ) from exc

from .context import default_registry, use_registry
from .registry import TimingRegistry
from .sinks import HEADER_NAME, HeaderCollector
from .telemetry.logging import get_logger

_log = get_logger("servertiming.asgi")


class ServerTimingMiddleware(BaseHTTPMiddleware):
    """Scope a fresh registry to each request and flush its headers."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        header_precision: Optional[int] = None,
        total_metric: Optional[str] = "total",
        registry_factory: Optional[Callable[[HeaderCollector], TimingRegistry]] = None,
    ) -> None:
        super().__init__(app)
        self.header_precision = header_precision
        self.total_metric = total_metric
        self.registry_factory = registry_factory

    def _new_registry(self, collector: HeaderCollector) -> TimingRegistry:
        if self.registry_factory is not None:
            return self.registry_factory(collector)
        return default_registry().child(header_sink=collector, header_precision=self.header_precision)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        collector = HeaderCollector()
        registry = self._new_registry(collector)
        request.state.server_timing = registry
        with use_registry(registry):
            if self.total_metric:
                registry.profile(self.total_metric)
            response = await call_next(request)
            if self.total_metric and registry.is_running(self.total_metric):
                registry.profile(self.total_metric)
        for value in collector.values(HEADER_NAME):
            response.headers.append(HEADER_NAME, value)
        _log.debug("%s %s: %d timing header(s)", request.method, request.url.path, len(collector))
        return response


def get_registry(request: Request) -> TimingRegistry:
    """FastAPI dependency returning the registry of the current request."""
    registry = getattr(request.state, "server_timing", None)
    if registry is None:
        raise RuntimeError("ServerTimingMiddleware is not installed")
    return registry


__all__ = ["ServerTimingMiddleware", "get_registry"]
