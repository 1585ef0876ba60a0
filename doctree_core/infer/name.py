"""Name inference."""

from doctree_core.comments import Entity, TagKind
from doctree_core.exceptions import TagPayloadError

from ._payload import payload_str

# Kind-marker tags that may carry the documented name, e.g. "@class Mesh".
NAMING_TAGS: tuple[str, ...] = (
    TagKind.CLASS,
    TagKind.FUNCTION,
    TagKind.CONSTANT,
    TagKind.MEMBER,
    TagKind.TYPEDEF,
    TagKind.EVENT,
    TagKind.MIXIN,
    TagKind.NAMESPACE,
    TagKind.INTERFACE,
    TagKind.EXTERNAL,
)


def infer_name(entity: Entity) -> Entity:
    """Set the entity name from an explicit tag or the declared identifier.

    Precedence: ``@name``, then the first kind-marker tag carrying a name, then
    the identifier of the annotated construct. The name stays unset when none
    is available; such entities are removed by garbage collection.
    """
    if entity.name:
        return entity

    for tag in (*entity.tags_of(TagKind.NAME), *entity.tags_of(*NAMING_TAGS)):
        try:
            name = payload_str(tag, "name")
        except TagPayloadError as exc:
            entity = entity.with_error(str(exc))
            continue
        if name:
            return entity.model_copy(update={"name": name})

    identifier = entity.context.syntax.identifier
    if identifier:
        return entity.model_copy(update={"name": identifier})
    return entity
