"""Parameter inference: ``@param`` tags merged with the declared signature."""

from doctree_core.comments import Entity, Param, Tag, TagKind
from doctree_core.exceptions import TagPayloadError

from ._nesting import nest_dotted
from ._payload import payload_flag, payload_str, payload_type


def read_marked_type(tag: Tag) -> tuple[str | None, bool, bool, str | None]:
    """Read a tag's type, splitting off optional (``T=``) and rest (``...T``) markers.

    Returns ``(type, optional, rest, error)``. A malformed type yields
    ``type=None`` and an error message instead of raising.
    """
    try:
        type_ = payload_type(tag)
    except TagPayloadError as exc:
        return None, False, False, str(exc)
    optional = rest = False
    if type_ and type_.endswith("="):
        type_, optional = type_[:-1].strip() or None, True
    if type_ and type_.startswith("..."):
        type_, rest = type_[3:].strip() or None, True
    return type_, optional, rest, None


def param_from_tag(tag: Tag) -> tuple[Param, str | None]:
    """Build a Param from a tag payload; the second item is a type error, if any."""
    name = payload_str(tag, "name", required=True)
    assert name is not None
    default = payload_str(tag, "default")
    description = payload_str(tag, "description") or ""
    type_, type_optional, type_rest, error = read_marked_type(tag)
    param = Param(
        name=name,
        type=type_,
        description=description,
        optional=payload_flag(tag, "optional") or type_optional or default is not None,
        default=default,
        rest=payload_flag(tag, "rest") or type_rest,
    )
    return param, error and f"@param {name}: {error}"


def infer_params(entity: Entity) -> Entity:
    """Merge documented and declared parameters.

    Declared parameters keep signature order; documented parameters that the
    signature does not declare follow in tag order. Undocumented declared
    parameters are still listed so the signature is complete.
    """
    documented: list[Param] = []
    for tag in entity.tags_of(TagKind.PARAM):
        try:
            param, error = param_from_tag(tag)
        except TagPayloadError as exc:
            entity = entity.with_error(str(exc))
            continue
        documented.append(param)
        if error:
            entity = entity.with_error(error)

    declared = entity.context.syntax.params
    if not documented and not declared:
        return entity

    by_name = {param.name: param for param in documented}
    merged: list[Param] = []
    for code_param in declared:
        tagged = by_name.pop(code_param.name, None)
        if tagged is None:
            merged.append(
                Param(
                    name=code_param.name,
                    type=code_param.type,
                    optional=code_param.default is not None,
                    default=code_param.default,
                    rest=code_param.rest,
                )
            )
            continue
        default = tagged.default if tagged.default is not None else code_param.default
        merged.append(
            tagged.model_copy(
                update={
                    "type": tagged.type or code_param.type,
                    "default": default,
                    "optional": tagged.optional or default is not None,
                    "rest": tagged.rest or code_param.rest,
                }
            )
        )
    merged.extend(param for param in documented if param.name in by_name)

    params, errors = nest_dotted(merged, "parameter")
    for message in errors:
        entity = entity.with_error(message)
    return entity.model_copy(update={"params": params})
