from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class TypeCategory(str, Enum):
    INTEGER = "integer"
    UNSIGNED = "unsigned"
    FLOAT = "float"
    COMPLEX = "complex"
    BOOLEAN = "boolean"
    STRING = "string"
    SLICE = "slice"
    MAP = "map"
    CHANNEL = "channel"
    FUNCTION = "function"
    INTERFACE = "interface"
    POINTER = "pointer"
    OTHER = "other"


NUMBER_CATEGORIES = frozenset(
    {TypeCategory.INTEGER, TypeCategory.UNSIGNED, TypeCategory.FLOAT, TypeCategory.COMPLEX}
)

NILABLE_CATEGORIES = frozenset(
    {
        TypeCategory.MAP,
        TypeCategory.SLICE,
        TypeCategory.CHANNEL,
        TypeCategory.FUNCTION,
        TypeCategory.INTERFACE,
        TypeCategory.POINTER,
    }
)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class TypeDescriptor(_Frozen):
    """Classified Go type expression. Built once by the classifier."""

    expr: str
    category: TypeCategory
    zero: str

    # element type for slices/arrays/pointers/channels/maps
    elem: Optional[str] = None
    # map key type
    key: Optional[str] = None
    # array length expression, "" for slices
    length: Optional[str] = None

    @property
    def is_number(self) -> bool:
        return self.category in NUMBER_CATEGORIES

    @property
    def is_sequence(self) -> bool:
        return self.category == TypeCategory.SLICE


class Constraint(_Frozen):
    name: str
    value: str = ""


class FieldDecl(_Frozen):
    name: str
    type: TypeDescriptor
    tag: str = ""
    constraints: List[Constraint] = Field(default_factory=list)


class EntityDecl(_Frozen):
    name: str
    # generic type parameter names, e.g. ["K", "V"] for Pair[K comparable, V any]
    type_params: List[str] = Field(default_factory=list)
    fields: List[FieldDecl] = Field(default_factory=list)


class PackageDecl(_Frozen):
    name: str
    dir: str = "."
    file: str = ""
    entities: List[EntityDecl] = Field(default_factory=list)


StatementKind = Literal["default", "guard"]


class Statement(_Frozen):
    """
    One compiled constraint.

    kind="default": `if subject == operand { subject = value }`
    kind="guard":   `if subject <op> operand { return errors.New(message) }`

    `message` is already a quoted Go string literal.
    """

    kind: StatementKind
    field: str
    constraint: str
    subject: str
    op: str
    operand: str
    value: Optional[str] = None
    message: Optional[str] = None
