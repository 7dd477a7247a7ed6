from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from sqlmodel import Session, SQLModel

from app.core.errors import bad_request, conflict, not_found
from app.core.family import Family, Reference
from app.core.repository import Repository, equals


class IntegrityGuard:
    """Existence, name-uniqueness and dependent-row checks for one session.

    Every check is a plain read issued before the mutation; the unique index on
    `name` is the storage-level backstop for concurrent writers.
    """

    def __init__(self, session: Session):
        self.session = session

    def ensure_exists(self, family: Family, item_id: int) -> SQLModel:
        row = Repository(self.session, family.model).get(item_id)
        if row is None:
            raise not_found(family.label, item_id)
        return row

    def ensure_name_available(self, family: Family, name: str, exclude_id: Optional[int] = None) -> None:
        model = family.model
        conds = [model.name == name]  # type: ignore[attr-defined]
        if exclude_id is not None:
            conds.append(model.id != exclude_id)  # type: ignore[attr-defined]
        if Repository(self.session, model).find_one(*conds) is not None:
            raise conflict("DUPLICATE_NAME", f"{family.label} with this name already exists")

    def count_dependents(self, family: Family, item_id: int) -> Dict[str, int]:
        breakdown: Dict[str, int] = {}
        for dep in family.dependents:
            conds = [getattr(dep.model, dep.column) == item_id, *equals(dep.model, dep.where)]
            n = Repository(self.session, dep.model).count(*conds)
            if n:
                breakdown[dep.label] = breakdown.get(dep.label, 0) + n
        return breakdown

    def ensure_no_dependents(self, family: Family, item_id: int) -> None:
        breakdown = self.count_dependents(family, item_id)
        total = sum(breakdown.values())
        if total:
            raise conflict(
                "HAS_ASSOCIATIONS",
                f"Cannot delete {family.label.lower()} because it has associated {', '.join(breakdown)}",
                {"associated_count": total, "breakdown": breakdown},
            )

    def ensure_reference(self, ref: Reference, value: Any) -> None:
        """FK values on create/update must point at an existing row (None = cleared, skip)."""
        if value is None:
            return
        ids: Iterable[int] = value if ref.many else (value,)
        repo = Repository(self.session, ref.model)
        for target_id in ids:
            if repo.get(target_id) is None:
                raise bad_request(f"INVALID_{ref.field.upper()}", f"{ref.label} with ID {target_id} does not exist")

    def ensure_references(self, family: Family, values: Dict[str, Any]) -> None:
        for ref in family.references:
            if ref.field in values:
                self.ensure_reference(ref, values[ref.field])
