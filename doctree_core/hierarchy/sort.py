"""Deterministic ordering of sibling entities."""

from collections.abc import Callable, Sequence
from typing import Any

from doctree_core.comments import Entity, Kind, Members, qualified_path
from doctree_core.settings import SortPolicy

KIND_ORDER: tuple[Kind, ...] = (
    Kind.CLASS,
    Kind.INTERFACE,
    Kind.NAMESPACE,
    Kind.MIXIN,
    Kind.TYPEDEF,
    Kind.CONSTANT,
    Kind.MEMBER,
    Kind.FUNCTION,
    Kind.EVENT,
    Kind.EXTERNAL,
)

SortKey = Callable[[Entity], Any]


def _source_key(entity: Entity) -> int:
    return entity.index


def _alpha_key(entity: Entity) -> tuple[str, str]:
    name = entity.name or ""
    return name.casefold(), name


def _kind_key(entity: Entity) -> int:
    return KIND_ORDER.index(entity.kind) if entity.kind in KIND_ORDER else len(KIND_ORDER)


def _explicit_key(order: Sequence[str]) -> SortKey:
    """Listed names or dotted paths first, in list order; everything else after."""
    positions: dict[str, int] = {}
    for position, item in enumerate(order):
        positions.setdefault(item, position)
    unlisted = len(positions)

    def key(entity: Entity) -> int:
        path = ".".join(qualified_path(entity))
        if path in positions:
            return positions[path]
        return positions.get(entity.name or "", unlisted)

    return key


def sort_key(order: SortPolicy | Sequence[str]) -> SortKey:
    if isinstance(order, str):
        order = SortPolicy(order)
    if isinstance(order, SortPolicy):
        return {SortPolicy.SOURCE: _source_key, SortPolicy.ALPHA: _alpha_key, SortPolicy.KIND: _kind_key}[order]
    return _explicit_key(order)


def sort_entities(entities: Sequence[Entity], order: SortPolicy | Sequence[str] = SortPolicy.SOURCE) -> list[Entity]:
    """Sort siblings at every depth with the same policy.

    Entities with equal keys keep their original source order.
    """
    key = sort_key(order)

    def ordered(siblings: Sequence[Entity]) -> list[Entity]:
        stable = sorted(siblings, key=_source_key)
        return [visit(entity) for entity in sorted(stable, key=key)]

    def visit(entity: Entity) -> Entity:
        if entity.members.is_empty():
            return entity
        members = Members(
            static=tuple(ordered(entity.members.static)),
            instance=tuple(ordered(entity.members.instance)),
            inner=tuple(ordered(entity.members.inner)),
            events=tuple(ordered(entity.members.events)),
        )
        return entity.model_copy(update={"members": members})

    return ordered(entities)


__all__ = ["KIND_ORDER", "sort_entities", "sort_key"]
