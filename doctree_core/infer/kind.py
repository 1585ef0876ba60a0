"""Kind inference."""

from doctree_core.comments import DeclarationKind, Entity, Kind, TagKind
from doctree_core.exceptions import TagPayloadError

from ._payload import payload_str

# Tags that mark a kind directly, e.g. "@namespace" or "@typedef".
MARKER_KINDS: dict[str, Kind] = {
    TagKind.CLASS: Kind.CLASS,
    TagKind.FUNCTION: Kind.FUNCTION,
    TagKind.CONSTANT: Kind.CONSTANT,
    TagKind.MEMBER: Kind.MEMBER,
    TagKind.TYPEDEF: Kind.TYPEDEF,
    TagKind.EVENT: Kind.EVENT,
    TagKind.MIXIN: Kind.MIXIN,
    TagKind.NAMESPACE: Kind.NAMESPACE,
    TagKind.INTERFACE: Kind.INTERFACE,
    TagKind.EXTERNAL: Kind.EXTERNAL,
}

_KIND_VALUES = frozenset(Kind)

DECLARATION_KINDS: dict[DeclarationKind, Kind] = {
    DeclarationKind.CLASS: Kind.CLASS,
    DeclarationKind.FUNCTION: Kind.FUNCTION,
    DeclarationKind.METHOD: Kind.FUNCTION,
    DeclarationKind.CONSTANT: Kind.CONSTANT,
    DeclarationKind.VARIABLE: Kind.MEMBER,
    DeclarationKind.PROPERTY: Kind.MEMBER,
    DeclarationKind.ASSIGNMENT: Kind.MEMBER,
}


def infer_kind(entity: Entity) -> Entity:
    """Classify the entity from tags, falling back to the declaration kind."""
    if entity.kind is not None:
        return entity

    for tag in entity.tags_of(TagKind.KIND):
        try:
            value = payload_str(tag, "kind", required=True)
        except TagPayloadError as exc:
            entity = entity.with_error(str(exc))
            continue
        if value in _KIND_VALUES:
            return entity.model_copy(update={"kind": Kind(value)})
        entity = entity.with_error(f"@kind has unknown value '{value}'")

    for tag in entity.tags:
        if tag.kind in MARKER_KINDS:
            return entity.model_copy(update={"kind": MARKER_KINDS[tag.kind]})

    declaration = entity.context.syntax.declaration
    if declaration is not None:
        return entity.model_copy(update={"kind": DECLARATION_KINDS[declaration]})
    return entity
