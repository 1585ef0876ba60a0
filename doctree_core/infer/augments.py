"""Inheritance inference."""

from doctree_core.comments import Entity, TagKind
from doctree_core.exceptions import TagPayloadError

from ._payload import payload_str


def infer_augments(entity: Entity) -> Entity:
    """Collect ``@augments`` targets, or fall back to the declared superclass."""
    augments: list[str] = []
    for tag in entity.tags_of(TagKind.AUGMENTS):
        try:
            name = payload_str(tag, "name", required=True)
        except TagPayloadError as exc:
            entity = entity.with_error(str(exc))
            continue
        if name not in augments:
            augments.append(name)

    if not augments and entity.context.syntax.superclass:
        augments.append(entity.context.syntax.superclass)
    if not augments:
        return entity
    return entity.model_copy(update={"augments": tuple(augments)})
