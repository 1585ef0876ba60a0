"""Name path parsing for membership references.

Paths use ``.`` for static members, ``#`` for instance members and ``~`` for
inner members; ``Foo.prototype`` is an alias for ``Foo#``. Only the trailing
separator matters for scope: ``Foo#`` names the owner ``Foo`` with instance
scope, while ``ns.Foo`` names ``Foo`` inside ``ns`` with no scope hint.
"""

import re

from .entity import Entity
from .types import Scope

_SEPARATOR = re.compile(r"[.#~]")
_TRAILING_SCOPE = {"#": Scope.INSTANCE, "~": Scope.INNER, ".": Scope.STATIC}


def parse_path(reference: str) -> tuple[tuple[str, ...], Scope | None]:
    """Split a reference into name segments and an optional trailing scope."""
    reference = reference.strip()
    scope: Scope | None = None

    if reference.endswith(".prototype"):
        reference = reference.removesuffix(".prototype")
        scope = Scope.INSTANCE
    elif reference and reference[-1] in _TRAILING_SCOPE:
        scope = _TRAILING_SCOPE[reference[-1]]
        reference = reference[:-1]

    segments = tuple(part for part in _SEPARATOR.split(reference) if part and part != "prototype")
    return segments, scope


def join_path(segments: tuple[str, ...]) -> str | None:
    return ".".join(segments) or None


def qualified_path(entity: Entity) -> tuple[str, ...]:
    """Declared path of an entity: its owner path followed by its own name."""
    if not entity.name:
        return ()
    owner = parse_path(entity.member_of)[0] if entity.member_of else ()
    return (*owner, entity.name)


__all__ = ["join_path", "parse_path", "qualified_path"]
