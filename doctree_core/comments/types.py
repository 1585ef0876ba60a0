"""Raw comment records produced by the upstream source parser.

These models are the input contract: each RawComment pairs a documentation
comment's tags with the location and syntactic shape of the code it annotates.
They are validated once on load and never mutated afterwards.
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TagKind(StrEnum):
    """Tag kinds understood by the field inferencers.

    Tags are free-form strings on input; anything not listed here is carried
    through untouched and ignored by inference.
    """

    NAME = "name"
    KIND = "kind"
    PARAM = "param"
    RETURNS = "returns"
    PROPERTY = "property"
    MEMBEROF = "memberof"
    LENDS = "lends"
    ACCESS = "access"
    PRIVATE = "private"
    PROTECTED = "protected"
    PUBLIC = "public"
    TYPE = "type"
    AUGMENTS = "augments"
    STATIC = "static"
    INSTANCE = "instance"
    INNER = "inner"
    GLOBAL = "global"
    CLASS = "class"
    FUNCTION = "function"
    CONSTANT = "constant"
    MEMBER = "member"
    TYPEDEF = "typedef"
    EVENT = "event"
    MIXIN = "mixin"
    NAMESPACE = "namespace"
    INTERFACE = "interface"
    EXTERNAL = "external"


# Alternate spellings normalized on input. Values are canonical tag kinds.
TAG_SYNONYMS: dict[str, str] = {
    "return": TagKind.RETURNS,
    "arg": TagKind.PARAM,
    "argument": TagKind.PARAM,
    "prop": TagKind.PROPERTY,
    "extends": TagKind.AUGMENTS,
    "func": TagKind.FUNCTION,
    "method": TagKind.FUNCTION,
    "const": TagKind.CONSTANT,
    "var": TagKind.MEMBER,
    "callback": TagKind.TYPEDEF,
    "constructor": TagKind.CLASS,
    "host": TagKind.EXTERNAL,
}


class DeclarationKind(StrEnum):
    """Kind of code construct a comment is attached to."""

    CLASS = "class"
    FUNCTION = "function"
    METHOD = "method"
    VARIABLE = "variable"
    CONSTANT = "constant"
    PROPERTY = "property"
    ASSIGNMENT = "assignment"


class Scope(StrEnum):
    """How a member is reached from its owner."""

    STATIC = "static"
    INSTANCE = "instance"
    INNER = "inner"


class Tag(BaseModel):
    """A single parsed tag: its kind plus a kind-specific payload."""

    model_config = ConfigDict(frozen=True)

    kind: str
    payload: dict[str, Any] = Field(default_factory=dict)

    @field_validator("kind")
    @classmethod
    def normalize_kind(cls, value: str) -> str:
        """Lower-case the tag kind and fold known synonyms."""
        lowered = value.strip().lower()
        return str(TAG_SYNONYMS.get(lowered, lowered))


class Position(BaseModel):
    """1-based line and 0-based column within a source file."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=1)
    column: int = Field(default=0, ge=0)


class SourceRange(BaseModel):
    """Start and end of the annotated code construct."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position


class SyntaxOwner(BaseModel):
    """An enclosing named construct (object literal, class body, assignment target)."""

    model_config = ConfigDict(frozen=True)

    path: str
    scope: Scope | None = None


class CodeParam(BaseModel):
    """A parameter as declared in the code signature."""

    model_config = ConfigDict(frozen=True)

    name: str
    default: str | None = None
    rest: bool = False
    type: str | None = None


class SyntaxContext(BaseModel):
    """Syntactic signals about the annotated construct.

    ``owners`` lists enclosing named constructs outermost first, so the last
    entry is the innermost one.
    """

    model_config = ConfigDict(frozen=True)

    declaration: DeclarationKind | None = None
    identifier: str | None = None
    owners: tuple[SyntaxOwner, ...] = ()
    block: str | None = None
    params: tuple[CodeParam, ...] = ()
    superclass: str | None = None
    return_type: str | None = None
    type_annotation: str | None = None


class CommentContext(BaseModel):
    """Where a comment lives and what it annotates."""

    model_config = ConfigDict(frozen=True)

    file: str
    loc: SourceRange
    code: str | None = None
    syntax: SyntaxContext = Field(default_factory=SyntaxContext)


class RawComment(BaseModel):
    """A documentation comment as handed over by the source parser."""

    model_config = ConfigDict(frozen=True)

    description: str = ""
    tags: tuple[Tag, ...] = ()
    context: CommentContext

    def tags_of(self, *kinds: str) -> list[Tag]:
        """Return tags of the given kinds in comment order."""
        return [tag for tag in self.tags if tag.kind in kinds]

    def first_tag(self, *kinds: str) -> Tag | None:
        """Return the first tag of any of the given kinds, if present."""
        return next((tag for tag in self.tags if tag.kind in kinds), None)

    def has_tag(self, *kinds: str) -> bool:
        return any(tag.kind in kinds for tag in self.tags)


__all__ = [
    "TAG_SYNONYMS",
    "CodeParam",
    "CommentContext",
    "DeclarationKind",
    "Position",
    "RawComment",
    "Scope",
    "SourceRange",
    "SyntaxContext",
    "SyntaxOwner",
    "Tag",
    "TagKind",
]
