"""
Generation endpoints.

Domain failures (SourceError, FormatError, ...) are left to propagate;
SafeErrorMiddleware turns them into structured 4xx/5xx bodies.
"""
from __future__ import annotations

import os
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from argumenter.core.config import load_config
from argumenter.core.emit.writer import default_output_path
from argumenter.core.generator import generate
from argumenter.core.source.go_reader import read_source

router = APIRouter(tags=["generate"])


class ParseRequest(BaseModel):
    source: str
    filename: str = "input.go"
    tag_key: Optional[str] = None


class GenerateRequest(ParseRequest):
    types: List[str] = Field(min_length=1)
    method_name: Optional[str] = None


@router.post("/parse")
def parse_source(req: ParseRequest):
    config = load_config(tag_key=req.tag_key)
    package = read_source(req.source, filename=req.filename, tag_key=config.tag_key)
    return {
        "package": package.name,
        "entities": [e.model_dump(mode="json") for e in package.entities],
    }


@router.post("/generate")
def generate_code(req: GenerateRequest):
    types = [t.strip() for t in req.types if t and t.strip()]
    if not types:
        raise HTTPException(status_code=400, detail={"error": "no_types", "message": "types must not be empty"})

    config = load_config(tag_key=req.tag_key, method_name=req.method_name)
    package = read_source(req.source, filename=req.filename, tag_key=config.tag_key)
    code = generate(package, types, config)

    return {
        "package": package.name,
        "types": types,
        "output_name": os.path.basename(str(default_output_path(package, config))),
        "code": code,
    }
