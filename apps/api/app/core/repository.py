from __future__ import annotations

from typing import Any, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, or_
from sqlmodel import Session, SQLModel, select

from app.core.observability import now_iso
from app.core.query import ListQuery

M = TypeVar("M", bound=SQLModel)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def equals(model: Type[SQLModel], values: Mapping[str, Any]) -> List[Any]:
    return [getattr(model, k) == v for k, v in values.items()]


class Repository(Generic[M]):
    """Thin persistence adapter: findOne/findAll/count/create/update/destroy for one table."""

    def __init__(self, session: Session, model: Type[M]):
        self.session = session
        self.model = model

    def _has(self, column: str) -> bool:
        return column in self.model.model_fields

    def get(self, item_id: int) -> Optional[M]:
        return self.session.get(self.model, item_id)

    def find_one(self, *conditions: Any) -> Optional[M]:
        stmt = select(self.model).where(*conditions).limit(1)
        return self.session.exec(stmt).first()

    def count(self, *conditions: Any) -> int:
        stmt = select(func.count()).select_from(self.model).where(*conditions)
        return int(self.session.exec(stmt).one())

    def conditions_for(self, query: ListQuery, search_columns: Sequence[str] = ()) -> List[Any]:
        conds = equals(self.model, query.filters)
        for column, (lo, hi) in query.ranges.items():
            col = getattr(self.model, column)
            if lo is not None:
                conds.append(col >= lo)
            if hi is not None:
                conds.append(col <= hi)
        if query.search and search_columns:
            pattern = f"%{_escape_like(query.search)}%"
            conds.append(or_(*[getattr(self.model, c).ilike(pattern, escape="\\") for c in search_columns]))
        return conds

    def find_all(self, query: ListQuery, conditions: Sequence[Any] = ()) -> List[M]:
        col = getattr(self.model, query.sort_by)
        order = col.desc() if query.sort_order == "DESC" else col.asc()
        stmt = (
            select(self.model)
            .where(*conditions)
            .order_by(order, self.model.id.asc())  # type: ignore[attr-defined]
            .offset(query.offset)
            .limit(query.limit)
        )
        return list(self.session.exec(stmt).all())

    def create(self, values: Mapping[str, Any]) -> M:
        data = dict(values)
        now = now_iso()
        if self._has("created_at") and "created_at" not in data:
            data["created_at"] = now
        if self._has("updated_at") and "updated_at" not in data:
            data["updated_at"] = now

        row = self.model(**data)
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return row

    def update(self, row: M, values: Mapping[str, Any]) -> M:
        for k, v in values.items():
            setattr(row, k, v)
        if self._has("updated_at"):
            setattr(row, "updated_at", now_iso())
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return row

    def destroy(self, row: M) -> None:
        self.session.delete(row)
        self.session.commit()
