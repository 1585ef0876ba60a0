"""Access-level filtering of the entity forest."""

from collections.abc import Iterable, Sequence

from doctree_core.comments import Access, Entity, Members


def filter_access(levels: Iterable[Access | str], entities: Sequence[Entity]) -> list[Entity]:
    """Keep only entities whose access is in ``levels``.

    An excluded entity takes its whole subtree with it; children are never
    promoted. Sibling order is preserved.
    """
    allowed = frozenset(Access(level) for level in levels)

    def keep(siblings: Sequence[Entity]) -> tuple[Entity, ...]:
        return tuple(visit(entity) for entity in siblings if entity.access in allowed)

    def visit(entity: Entity) -> Entity:
        if entity.members.is_empty():
            return entity
        members = Members(
            static=keep(entity.members.static),
            instance=keep(entity.members.instance),
            inner=keep(entity.members.inner),
            events=keep(entity.members.events),
        )
        return entity.model_copy(update={"members": members})

    return list(keep(entities))


__all__ = ["filter_access"]
