from __future__ import annotations

from fastapi import APIRouter
from starlette.responses import JSONResponse

from argumenter.core.observability.metrics import inc_named
from argumenter.core.rendering import STATEMENT_TEMPLATES, TEMPLATES_DIR

router = APIRouter()


@router.get("/health/live")
def live():
    inc_named("health_live")
    return {"status": "ok"}


@router.get("/health/ready")
def ready():
    """Ready once the bundled statement templates are present."""
    inc_named("health_ready")

    problems: list[str] = []
    for name in ["preamble.go.j2", "header.go.j2", "footer.go.j2", *STATEMENT_TEMPLATES.values()]:
        if not (TEMPLATES_DIR / name).is_file():
            problems.append(f"missing_template:{name}")

    if problems:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "problems": problems},
        )
    return {"status": "ready"}
