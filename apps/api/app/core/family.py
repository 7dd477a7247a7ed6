from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple, Type

from sqlmodel import SQLModel

from app.core.query import ListSpec
from app.core.validation import FieldRule


@dataclass(frozen=True)
class Dependent:
    """Rows in `model` whose `column` points at the guarded family's id."""

    model: Type[SQLModel]
    column: str
    label: str
    where: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Reference:
    """A foreign-key field on the family that must point at an existing row."""

    field: str
    model: Type[SQLModel]
    label: str
    many: bool = False


@dataclass(frozen=True)
class Family:
    """Static description of one catalog family (model, field rules, list/integrity config)."""

    key: str
    model: Type[SQLModel]
    label: str
    plural: str
    fields: Tuple[FieldRule, ...]
    list_spec: ListSpec
    dependents: Tuple[Dependent, ...] = ()
    references: Tuple[Reference, ...] = ()

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(r.name for r in self.fields)
