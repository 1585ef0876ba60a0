"""Property inference from ``@property`` tags."""

from doctree_core.comments import Entity, Property, TagKind
from doctree_core.exceptions import TagPayloadError

from ._nesting import nest_dotted
from ._payload import payload_flag, payload_str
from .params import read_marked_type


def infer_properties(entity: Entity) -> Entity:
    collected: list[Property] = []
    for tag in entity.tags_of(TagKind.PROPERTY):
        try:
            name = payload_str(tag, "name", required=True)
            default = payload_str(tag, "default")
            description = payload_str(tag, "description") or ""
            optional = payload_flag(tag, "optional")
        except TagPayloadError as exc:
            entity = entity.with_error(str(exc))
            continue
        type_, type_optional, _, error = read_marked_type(tag)
        if error:
            entity = entity.with_error(f"@property {name}: {error}")
        collected.append(
            Property(
                name=name,
                type=type_,
                description=description,
                optional=optional or type_optional or default is not None,
                default=default,
            )
        )

    if not collected:
        return entity
    properties, errors = nest_dotted(collected, "property")
    for message in errors:
        entity = entity.with_error(message)
    return entity.model_copy(update={"properties": properties})
