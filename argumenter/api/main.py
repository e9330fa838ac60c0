from __future__ import annotations

from fastapi import FastAPI

from argumenter import __version__
from argumenter.api.endpoints import generate, health, metrics_export
from argumenter.api.middleware.error_shaping import SafeErrorMiddleware
from argumenter.api.middleware.request_context import RequestContextMiddleware

app = FastAPI(
    title="argumenter API",
    version=__version__,
)

# ------------------------------------------------------------
# Middleware stack (ORDER MATTERS)
# Starlette reverses add_middleware order: the LAST call is the OUTERMOST wrapper.
#   SafeErrorMiddleware → RequestContext → handler
# ------------------------------------------------------------
app.add_middleware(RequestContextMiddleware)
app.add_middleware(SafeErrorMiddleware)


app.include_router(health.router)
app.include_router(metrics_export.router)
app.include_router(generate.router, prefix="/api/v1")
