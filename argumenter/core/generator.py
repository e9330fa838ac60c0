from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from argumenter.core.assembler import AssembledProcedure, assemble_procedure
from argumenter.core.config import GeneratorConfig
from argumenter.core.emit.gofmt import format_source
from argumenter.core.emit.writer import default_output_path, write_output
from argumenter.core.errors import ArgumenterError
from argumenter.core.models import EntityDecl, PackageDecl
from argumenter.core.observability.metrics import inc_generation
from argumenter.core.rendering import TemplateRenderer
from argumenter.core.source.go_reader import read_file

_log = logging.getLogger("argumenter.generator")


@dataclass
class GenerationResult:
    package: str
    types: List[str]
    code: str
    output_path: Path


def select_entities(entities: Sequence[EntityDecl], names: Sequence[str]) -> List[EntityDecl]:
    """
    Entities named in `names`, in the order of `names`.

    A name listed twice is emitted once, at its first position. Names with no
    matching entity select nothing.
    """
    by_name = {}
    for e in entities:
        by_name.setdefault(e.name, e)

    out: List[EntityDecl] = []
    seen = set()
    for n in names:
        if n in seen:
            continue
        seen.add(n)
        entity = by_name.get(n)
        if entity is None:
            _log.warning("type %s not found", n)
            continue
        out.append(entity)
    return out


def generate(package: PackageDecl, names: Sequence[str], config: Optional[GeneratorConfig] = None) -> str:
    """
    Emit the Go source holding one validation method per selected type.

    Raises AssemblyError when a template fails to render and FormatError when
    the concatenated output is not well-formed; nothing partial is returned.
    """
    config = config or GeneratorConfig()
    renderer = TemplateRenderer(config)

    try:
        procedures: List[AssembledProcedure] = [
            assemble_procedure(e, renderer) for e in select_entities(package.entities, names)
        ]
        imports = ["errors"] if any(p.uses_errors for p in procedures) else []
        preamble = renderer.preamble(package.name, list(names), imports)

        raw = "\n\n".join([preamble] + [p.text for p in procedures])
        code = format_source(raw, config)
    except ArgumenterError as exc:
        inc_generation("error")
        _log.debug("generation failed for package %s: %s", package.name, exc)
        raise

    inc_generation("ok")
    _log.info("generated %s for %d types in package %s", config.method_name, len(procedures), package.name)
    return code


def generate_file(
    path: Union[str, Path],
    names: Sequence[str],
    config: Optional[GeneratorConfig] = None,
) -> GenerationResult:
    config = config or GeneratorConfig()
    package = read_file(path, tag_key=config.tag_key)
    code = generate(package, names, config)
    return GenerationResult(
        package=package.name,
        types=list(names),
        code=code,
        output_path=default_output_path(package, config),
    )


def run(
    path: Union[str, Path],
    names: Sequence[str],
    out: Optional[Union[str, Path]] = None,
    config: Optional[GeneratorConfig] = None,
) -> GenerationResult:
    """Read `path`, generate for `names` and write the result (to `out` or the default path)."""
    result = generate_file(path, names, config)
    if out is not None:
        result.output_path = Path(out)
    write_output(result.output_path, result.code)
    return result
