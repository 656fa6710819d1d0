"""Mapping between checklist ORM rows and the ChecklistItem entity."""

from typing import Iterable, List, Union

from domain.entities.checklist import ChecklistItem
from domain.entities.common import as_naive_utc
from infrastructure.models.checklist_orm import NoteChecklistItemORM, TaskChecklistItemORM

ChecklistItemORM = Union[NoteChecklistItemORM, TaskChecklistItemORM]


def item_to_entity(item_orm: ChecklistItemORM) -> ChecklistItem:
    return ChecklistItem(
        id=item_orm.id,
        parent_id=item_orm.parent_id,
        title=item_orm.title,
        completed=bool(item_orm.completed),
        order_index=item_orm.order_index,
        created_at=as_naive_utc(item_orm.created_at),
    )


def items_to_entities(items: Iterable[ChecklistItemORM]) -> List[ChecklistItem]:
    """Convert rows to entities ordered by order index, then creation time."""
    entities = [item_to_entity(item) for item in items]
    return sorted(entities, key=lambda item: (item.order_index, item.created_at))
