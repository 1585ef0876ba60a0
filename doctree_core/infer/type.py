"""Type inference for members, constants and typedefs."""

from doctree_core.comments import Entity, Kind, TagKind
from doctree_core.exceptions import TagPayloadError

from ._payload import payload_type

_ANNOTATED_KINDS = frozenset({Kind.MEMBER, Kind.CONSTANT, Kind.TYPEDEF})


def infer_type(entity: Entity) -> Entity:
    """Take the type from ``@type`` or, for value-like kinds, the declared annotation."""
    tag = entity.first_tag(TagKind.TYPE)
    if tag is not None:
        try:
            type_ = payload_type(tag)
        except TagPayloadError as exc:
            return entity.with_error(f"@type: {exc}")
        if type_:
            return entity.model_copy(update={"type": type_})

    annotation = entity.context.syntax.type_annotation
    if annotation and entity.kind in _ANNOTATED_KINDS:
        return entity.model_copy(update={"type": annotation})
    return entity
