"""Final cleanup of the entity forest."""

from collections.abc import Sequence

from doctree_core.comments import Entity, Members, Resolution
from doctree_core.logging import get_pipeline_logger

logger = get_pipeline_logger(__name__)


def is_collectable(entity: Entity) -> bool:
    """Whether an entity is unclassifiable or hangs off an unresolved owner."""
    return not entity.name or entity.kind is None or entity.resolution is Resolution.DANGLING


def garbage_collect(entities: Sequence[Entity]) -> list[Entity]:
    """Remove unclassifiable, dangling and duplicate entities, with their subtrees.

    Duplicates are repeated occurrences of the same stream position; the first
    one in depth-first order survives. Running this on its own output returns
    an equal forest.
    """
    seen: set[int] = set()
    dropped = 0

    def keep(siblings: Sequence[Entity]) -> tuple[Entity, ...]:
        nonlocal dropped
        kept: list[Entity] = []
        for entity in siblings:
            if entity.index in seen or is_collectable(entity):
                dropped += 1
                continue
            seen.add(entity.index)
            kept.append(visit(entity))
        return tuple(kept)

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

    roots = list(keep(entities))
    if dropped:
        logger.debug("garbage collection dropped %d entities", dropped)
    return roots


__all__ = ["garbage_collect", "is_collectable"]
