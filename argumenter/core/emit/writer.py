from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from argumenter.core.config import GeneratorConfig
from argumenter.core.models import PackageDecl

_log = logging.getLogger("argumenter.emit")


def default_output_path(package: PackageDecl, config: GeneratorConfig) -> Path:
    """`<dir>/<file minus .go><suffix>`, e.g. `models/pill.go` -> `models/pill_argumenter.go`."""
    stem = package.file
    if stem.endswith(".go"):
        stem = stem[: -len(".go")]
    return Path(package.dir) / f"{stem}{config.output_suffix}"


def write_output(path: Union[str, Path], text: str) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(text.encode("utf-8"))
    _log.info("wrote %s (%d bytes)", p, len(text))
    return p
