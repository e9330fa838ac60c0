from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from argumenter.core.config import load_config
from argumenter.core.errors import ArgumenterError, FormatError
from argumenter.core.generator import run

_log = logging.getLogger("argumenter.cli")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="argumenter",
        description="Generate Valid() methods from arg struct tags.",
    )
    ap.add_argument("file", nargs="?", help="Go source file")
    ap.add_argument(
        "-type",
        "--type",
        dest="types",
        default="",
        help="comma-separated list of type names; must be set",
    )
    ap.add_argument(
        "-out",
        "--out",
        dest="out",
        default=None,
        help="output file name; default srcdir/<input_file_name>_argumenter.go",
    )
    ap.add_argument("--config", default=None, help="YAML or JSON config file")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def split_types(raw: str) -> List[str]:
    return [t.strip() for t in (raw or "").split(",") if t.strip()]


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    types = split_types(args.types)
    if not args.file or not types:
        ap.print_usage(sys.stderr)
        print("argumenter: a source file and -type are required", file=sys.stderr)
        return 2

    try:
        config = load_config(Path(args.config) if args.config else None)
    except ArgumenterError as exc:
        print(f"argumenter: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = run(args.file, types, out=args.out, config=config)
    except FormatError as exc:
        _log.error("generated code is not valid Go: %s", exc)
        if exc.raw:
            _log.debug("raw output:\n%s", exc.raw)
        return 1
    except ArgumenterError as exc:
        _log.error("%s", exc)
        return 1
    except OSError as exc:
        _log.error("writing output: %s", exc)
        return 1

    _log.info("generated %s", result.output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
