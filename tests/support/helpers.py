"""Factories for raw comments and entities used across the test suite."""

from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from doctree_core.comments import (
    Access,
    CodeParam,
    CommentContext,
    DeclarationKind,
    Entity,
    Kind,
    Position,
    RawComment,
    Scope,
    SourceRange,
    SyntaxContext,
    SyntaxOwner,
    Tag,
)


def tag(tag_kind: str, /, **payload: Any) -> Tag:
    """Build a Tag; the kind is positional so payloads may carry a ``kind`` key."""
    return Tag(kind=tag_kind, payload=payload)


def make_comment(
    name: str | None = None,
    *,
    kind: str | None = None,
    member_of: str | None = None,
    scope: str | None = None,
    access: str | None = None,
    tags: tuple[Tag, ...] = (),
    description: str = "",
    file: str = "src/app.js",
    line: int = 1,
    end_line: int | None = None,
    identifier: str | None = None,
    declaration: DeclarationKind | None = None,
    owners: tuple[SyntaxOwner, ...] = (),
    block: str | None = None,
    params: tuple[CodeParam, ...] = (),
    superclass: str | None = None,
    return_type: str | None = None,
    type_annotation: str | None = None,
    code: str | None = None,
) -> RawComment:
    """Build a RawComment whose shorthand fields become the matching tags."""
    shorthand: list[Tag] = []
    if name is not None:
        shorthand.append(tag("name", name=name))
    if kind is not None:
        shorthand.append(tag("kind", kind=kind))
    if member_of is not None:
        shorthand.append(tag("memberof", name=member_of))
    if scope is not None:
        shorthand.append(tag(scope))
    if access is not None:
        shorthand.append(tag("access", access=access))
    return RawComment(
        description=description,
        tags=(*shorthand, *tags),
        context=CommentContext(
            file=file,
            loc=SourceRange(start=Position(line=line), end=Position(line=end_line or line)),
            code=code,
            syntax=SyntaxContext(
                declaration=declaration,
                identifier=identifier,
                owners=owners,
                block=block,
                params=params,
                superclass=superclass,
                return_type=return_type,
                type_annotation=type_annotation,
            ),
        ),
    )


def make_entity(
    name: str | None,
    index: int,
    *,
    kind: Kind | None = Kind.FUNCTION,
    member_of: str | None = None,
    scope: Scope | None = None,
    access: Access = Access.UNDEFINED,
    file: str = "src/app.js",
    **fields: Any,
) -> Entity:
    """Build an already-inferred Entity; ``index`` doubles as its source line."""
    comment = make_comment(file=file, line=index + 1)
    return Entity.from_comment(comment, index).model_copy(
        update={"name": name, "kind": kind, "member_of": member_of, "scope": scope, "access": access, **fields}
    )


def names(entities) -> list[str | None]:
    return [entity.name for entity in entities]


def structure(entities) -> dict[str, Any]:
    """Order-insensitive shape of a forest: name -> member group -> sorted child shapes."""
    result: dict[str, Any] = {}
    for entity in entities:
        result[entity.name] = {
            group: structure(getattr(entity.members, group))
            for group in ("static", "instance", "inner", "events")
            if getattr(entity.members, group)
        }
    return dict(sorted(result.items()))


def write_comments(path: Path, comments: list[RawComment]) -> Path:
    """Serialize comments the way an external extractor would."""
    path.write_bytes(TypeAdapter(list[RawComment]).dump_json(comments))
    return path
