"""Folding of dotted parameter/property names into nested structures."""

from collections import defaultdict
from collections.abc import Sequence
from typing import TypeVar

from doctree_core.comments import Param, Property

F = TypeVar("F", Param, Property)


def _parent_name(name: str, known: dict[str, F]) -> str | None:
    parent = name.rpartition(".")[0]
    if not parent:
        return None
    if parent not in known and parent.endswith("[]"):
        parent = parent.removesuffix("[]")
    return parent


def nest_dotted(fields: Sequence[F], label: str) -> tuple[tuple[F, ...], list[str]]:
    """Attach ``parent.child`` entries to their parent's ``properties``.

    Children keep their full dotted name. A dotted entry whose parent is not
    documented stays at the top level and yields an error message. Repeated
    names keep the first occurrence.
    """
    known: dict[str, F] = {}
    errors: list[str] = []
    for field in fields:
        if field.name in known:
            errors.append(f"{label} '{field.name}' is documented more than once")
            continue
        known[field.name] = field

    top: list[str] = []
    children: defaultdict[str, list[str]] = defaultdict(list)
    for name in known:
        parent = _parent_name(name, known)
        if parent is None:
            top.append(name)
        elif parent in known:
            children[parent].append(name)
        else:
            errors.append(f"{label} '{name}' found without its parent '{parent}'")
            top.append(name)

    def assemble(name: str) -> F:
        field = known[name]
        nested = tuple(assemble(child) for child in children[name])
        if not nested:
            return field
        return field.model_copy(update={"properties": (*field.properties, *nested)})

    return tuple(assemble(name) for name in top), errors
