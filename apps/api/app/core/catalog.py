"""
Generic catalog service: list / get / create / update / delete for one Family.

Per-family modules build a Family descriptor and subclass CatalogService only
when they need related summaries in responses (present) or extra routes.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Type

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select

from app.core.errors import bad_request
from app.core.family import Family
from app.core.integrity import IntegrityGuard
from app.core.observability import emit
from app.core.query import ListQuery, translate
from app.core.repository import Repository
from app.core.validation import validate_payload


@dataclass(frozen=True)
class Page:
    items: List[Dict[str, Any]]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def pagination(self) -> Dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "total_pages": self.total_pages,
            "has_next": self.has_next,
            "has_prev": self.has_prev,
        }


def summary(row: Optional[SQLModel], *keys: str) -> Optional[Dict[str, Any]]:
    if row is None:
        return None
    return {k: getattr(row, k) for k in keys}


class CatalogService:
    def __init__(self, family: Family, session: Session):
        self.family = family
        self.session = session
        self.repo: Repository = Repository(session, family.model)
        self.guard = IntegrityGuard(session)

    # --- read shapes ---
    def serialize(self, row: SQLModel) -> Dict[str, Any]:
        return row.model_dump()

    def present(self, rows: List[SQLModel]) -> List[Dict[str, Any]]:
        """Rows -> response dicts; override to attach related summaries in batch."""
        return [self.serialize(r) for r in rows]

    def present_one(self, row: SQLModel) -> Dict[str, Any]:
        return self.present([row])[0]

    def lookup(self, model: Type[SQLModel], ids: Iterable[Optional[int]]) -> Dict[int, SQLModel]:
        wanted = sorted({i for i in ids if i is not None})
        if not wanted:
            return {}
        rows = self.session.exec(select(model).where(model.id.in_(wanted))).all()  # type: ignore[attr-defined]
        return {r.id: r for r in rows}  # type: ignore[attr-defined]

    # --- operations ---
    def list(self, raw: Mapping[str, Any], fixed_filters: Optional[Mapping[str, Any]] = None) -> Page:
        spec = self.family.list_spec
        query: ListQuery = translate(raw, spec)
        if fixed_filters:
            query = replace(query, filters={**query.filters, **fixed_filters})

        conds = self.repo.conditions_for(query, spec.search_columns)
        total = self.repo.count(*conds)
        rows = self.repo.find_all(query, conds)
        return Page(items=self.present(rows), total=total, page=query.page, limit=query.limit)

    def get(self, item_id: int) -> Dict[str, Any]:
        return self.present_one(self.guard.ensure_exists(self.family, item_id))

    def create(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        values = self._validate(body, partial=False)
        self.guard.ensure_references(self.family, values)
        self.guard.ensure_name_available(self.family, values["name"])

        row = self._write(lambda: self.repo.create(values), values["name"])
        emit("info", "catalog.created", f"{self.family.key} {row.id} created", module=__name__, family=self.family.key, id=row.id)
        return self.present_one(row)

    def update(self, item_id: int, body: Mapping[str, Any]) -> Dict[str, Any]:
        if not body:
            raise bad_request("NO_FIELDS_PROVIDED", "No fields provided for update")

        row = self.guard.ensure_exists(self.family, item_id)
        values = self._validate(body, partial=True)
        if not values:
            raise bad_request("NO_FIELDS_PROVIDED", "No fields provided for update")

        self.guard.ensure_references(self.family, values)
        name = values.get("name")
        if name is not None:
            self.guard.ensure_name_available(self.family, name, exclude_id=item_id)

        row = self._write(lambda: self.repo.update(row, values), name, exclude_id=item_id)
        emit(
            "info",
            "catalog.updated",
            f"{self.family.key} {item_id} updated",
            module=__name__,
            family=self.family.key,
            id=item_id,
            fields=sorted(values),
        )
        return self.present_one(row)

    def delete(self, item_id: int) -> Dict[str, Any]:
        row = self.guard.ensure_exists(self.family, item_id)
        self.guard.ensure_no_dependents(self.family, item_id)

        name = getattr(row, "name", None)
        self.repo.destroy(row)
        emit("info", "catalog.deleted", f"{self.family.key} {item_id} deleted", module=__name__, family=self.family.key, id=item_id)
        return {"id": item_id, "name": name, "deleted": True}

    # --- helpers ---
    def _validate(self, body: Mapping[str, Any], *, partial: bool) -> Dict[str, Any]:
        cleaned, violation = validate_payload(self.family.fields, body, partial=partial)
        if violation is not None:
            raise bad_request(violation.code, violation.message)
        return cleaned

    def _write(self, fn: Callable[[], SQLModel], name: Optional[str], exclude_id: Optional[int] = None) -> SQLModel:
        try:
            return fn()
        except IntegrityError:
            # lost a race with a concurrent writer; the unique index caught it
            self.session.rollback()
            if name is not None:
                self.guard.ensure_name_available(self.family, name, exclude_id=exclude_id)
            raise
