from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)

from argumenter.core.config import GeneratorConfig
from argumenter.core.errors import AssemblyError
from argumenter.core.models import Statement

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
TEMPLATES_DIR = PACKAGE_ROOT / "templates" / "go"

STATEMENT_TEMPLATES = {
    "default": "default.go.j2",
    "guard": "guard.go.j2",
}


def build_environment(config: GeneratorConfig) -> Environment:
    loaders: List[FileSystemLoader] = []
    if config.templates_dir:
        loaders.append(FileSystemLoader(str(config.templates_dir)))
    loaders.append(FileSystemLoader(str(TEMPLATES_DIR)))

    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(enabled_extensions=()),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )


class TemplateRenderer:
    """Renders the fixed Go statement shapes for one generation run."""

    def __init__(self, config: GeneratorConfig):
        self.config = config
        self.env = build_environment(config)

    def _render(self, name: str, **context) -> str:
        try:
            return self.env.get_template(name).render(**context)
        except TemplateError as exc:
            raise AssemblyError(f"failed to render {name}: {exc}") from exc

    def preamble(self, package: str, types: Sequence[str], imports: Sequence[str] = ()) -> str:
        return self._render(
            "preamble.go.j2",
            tool=self.config.tool_name,
            types=",".join(types),
            package=package,
            imports=list(imports),
        )

    def header(self, receiver: str, entity: str, type_params: Sequence[str] = ()) -> str:
        return self._render(
            "header.go.j2",
            receiver=receiver,
            entity=entity,
            type_params=list(type_params),
            method=self.config.method_name,
        )

    def footer(self) -> str:
        return self._render("footer.go.j2")

    def statement(self, stmt: Statement) -> str:
        name = STATEMENT_TEMPLATES.get(stmt.kind)
        if name is None:
            raise AssemblyError(f"no template for statement kind {stmt.kind!r}")
        return self._render(name, **stmt.model_dump())
