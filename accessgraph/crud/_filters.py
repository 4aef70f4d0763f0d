"""Shared WHERE-clause builders for permission queries."""

from typing import AbstractSet, Iterator, List, Sequence, TypeVar

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from accessgraph.core.shared_models import EntityKind
from accessgraph.models.entity import Entity
from accessgraph.schemas.entity import EntityRef

T = TypeVar("T")


def is_entity(entity: EntityRef) -> ColumnElement[bool]:
    """Match the exact entity row."""
    return and_(Entity.name == entity.identifier, Entity.type == entity.kind)


def holder_filters(
    entity: EntityRef, effective_groups: AbstractSet[str], inherit: bool, chunk_size: int
) -> List[ColumnElement[bool]]:
    """Match rows stored against the entity, or against its effective groups.

    Returns one predicate per chunk of at most ``chunk_size`` group names; each
    also matches the entity itself. Together they cover every holder. With
    ``inherit`` false the effective groups are ignored entirely.
    """
    if not inherit or not effective_groups:
        return [is_entity(entity)]
    return [
        or_(
            is_entity(entity),
            and_(Entity.type == EntityKind.USER_GROUP, Entity.name.in_(chunk)),
        )
        for chunk in chunked(sorted(effective_groups), chunk_size)
    ]


def chunked(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """Yield consecutive slices of at most ``size`` items."""
    for start in range(0, len(items), size):
        yield list(items[start : start + size])
