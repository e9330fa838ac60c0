from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from argumenter.core.compiler import compile_field
from argumenter.core.models import EntityDecl, Statement
from argumenter.core.observability.metrics import inc_statement
from argumenter.core.rendering import TemplateRenderer

_log = logging.getLogger("argumenter.assembler")


def receiver_name(entity_name: str) -> str:
    """Lowercased first character of the type name (`Pill` -> `p`)."""
    return entity_name[:1].lower() or "r"


@dataclass
class AssembledProcedure:
    entity: str
    receiver: str
    text: str
    statements: List[Statement] = field(default_factory=list)

    @property
    def uses_errors(self) -> bool:
        return any(s.kind == "guard" for s in self.statements)


def assemble_procedure(entity: EntityDecl, renderer: TemplateRenderer) -> AssembledProcedure:
    receiver = receiver_name(entity.name)

    statements: List[Statement] = []
    for f in entity.fields:
        statements.extend(compile_field(f, receiver))

    parts = [renderer.header(receiver, entity.name, entity.type_params)]
    for stmt in statements:
        parts.append(renderer.statement(stmt))
        inc_statement(stmt.kind)
    parts.append(renderer.footer())

    _log.debug("assembled %s.%s with %d statements", entity.name, renderer.config.method_name, len(statements))
    return AssembledProcedure(
        entity=entity.name,
        receiver=receiver,
        text="\n\n".join(parts) + "\n",
        statements=statements,
    )


def assemble(entity: EntityDecl, renderer: TemplateRenderer) -> str:
    return assemble_procedure(entity, renderer).text
