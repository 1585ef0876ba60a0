"""Access level inference."""

import re

from doctree_core.comments import Access, Entity, TagKind
from doctree_core.exceptions import TagPayloadError

from ._payload import Stage, payload_str

_TAGGED_ACCESS: tuple[tuple[str, Access], ...] = (
    (TagKind.PRIVATE, Access.PRIVATE),
    (TagKind.PROTECTED, Access.PROTECTED),
    (TagKind.PUBLIC, Access.PUBLIC),
)
_EXPLICIT_LEVELS = frozenset({Access.PUBLIC, Access.PRIVATE, Access.PROTECTED})


def infer_access(pattern: re.Pattern[str] | None = None) -> Stage:
    """Build an access inferencer.

    Precedence: ``@access <level>``, then ``@private``, then ``@protected`` /
    ``@public``, then ``pattern`` matched against the name (private on match),
    otherwise the access stays undefined.
    """

    def infer(entity: Entity) -> Entity:
        for tag in entity.tags_of(TagKind.ACCESS):
            try:
                level = payload_str(tag, "access", required=True)
            except TagPayloadError as exc:
                entity = entity.with_error(str(exc))
                continue
            if level in _EXPLICIT_LEVELS:
                return entity.model_copy(update={"access": Access(level)})
            entity = entity.with_error(f"@access has unknown level '{level}'")

        for kind, access in _TAGGED_ACCESS:
            if entity.has_tag(kind):
                return entity.model_copy(update={"access": access})

        if pattern is not None and entity.name and pattern.search(entity.name):
            return entity.model_copy(update={"access": Access.PRIVATE})
        return entity

    return infer
