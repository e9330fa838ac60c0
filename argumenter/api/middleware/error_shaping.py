from __future__ import annotations

import logging
import traceback
from typing import Any, Callable, Dict, Tuple

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from argumenter.core.errors import (
    ArgumenterError,
    AssemblyError,
    ConfigError,
    FormatError,
    SourceError,
)

log = logging.getLogger("argumenter.errors")


def error_detail(exc: ArgumenterError) -> Tuple[int, Dict[str, Any]]:
    """Status code and structured body for a generation failure."""
    if isinstance(exc, SourceError):
        return 400, {"error": "source_error", "message": exc.reason, "line": exc.line}
    if isinstance(exc, ConfigError):
        return 400, {"error": "config_error", "message": str(exc)}
    if isinstance(exc, FormatError):
        return 422, {"error": "format_error", "message": str(exc), "line": exc.line, "raw": exc.raw}
    if isinstance(exc, AssemblyError):
        return 500, {"error": "assembly_error", "message": str(exc)}
    return 500, {"error": "generation_error", "message": str(exc)}


class SafeErrorMiddleware(BaseHTTPMiddleware):
    """
    - ArgumenterError subclasses become {"detail": {"error": ..., "message": ...}}
    - Anything else is a bare 500; stack traces never reach clients
    - Preserve request_id if present
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except ArgumenterError as e:
            rid = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
            status, detail = error_detail(e)
            log.warning("%s rid=%s path=%s: %s", detail["error"], rid, request.url.path, str(e))
            return self._respond(status, {"detail": detail}, rid)
        except Exception as e:
            rid = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
            log.error(
                "Unhandled error: %s rid=%s path=%s\n%s",
                str(e),
                rid,
                request.url.path,
                traceback.format_exc(),
            )
            return self._respond(500, {"detail": "Internal Server Error"}, rid)

    @staticmethod
    def _respond(status: int, payload: Dict[str, Any], rid: Any) -> JSONResponse:
        headers = {}
        if rid:
            payload["request_id"] = rid
            headers["X-Request-Id"] = rid
        return JSONResponse(status_code=status, content=payload, headers=headers)
