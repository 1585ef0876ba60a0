"""Return value inference."""

from doctree_core.comments import Entity, Kind, ReturnValue, TagKind
from doctree_core.exceptions import TagPayloadError

from ._payload import payload_str, payload_type


def infer_returns(entity: Entity) -> Entity:
    """Read ``@returns`` tags; the declared return annotation fills a missing type.

    Functions without a ``@returns`` tag still get a return value when the
    signature declares a return type.
    """
    annotation = entity.context.syntax.return_type
    returns: list[ReturnValue] = []
    for tag in entity.tags_of(TagKind.RETURNS):
        try:
            description = payload_str(tag, "description") or ""
        except TagPayloadError as exc:
            entity = entity.with_error(str(exc))
            description = ""
        try:
            type_ = payload_type(tag)
        except TagPayloadError as exc:
            entity = entity.with_error(f"@returns: {exc}")
            type_ = None
        returns.append(ReturnValue(type=type_ or annotation, description=description))

    if not returns and annotation and entity.kind is Kind.FUNCTION:
        returns.append(ReturnValue(type=annotation))
    if not returns:
        return entity
    return entity.model_copy(update={"returns": tuple(returns)})
