"""Entities: raw comments after field inference and nesting."""

from collections.abc import Iterator
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from .types import RawComment, Scope


class Access(StrEnum):
    """Visibility classification. UNDEFINED means unspecified, not public."""

    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    UNDEFINED = "undefined"


class Kind(StrEnum):
    """Structural classification of a documented construct."""

    FUNCTION = "function"
    CLASS = "class"
    MEMBER = "member"
    CONSTANT = "constant"
    TYPEDEF = "typedef"
    EVENT = "event"
    MIXIN = "mixin"
    NAMESPACE = "namespace"
    INTERFACE = "interface"
    EXTERNAL = "external"


class Resolution(StrEnum):
    """Outcome of membership resolution for one entity."""

    ROOT = "root"
    NESTED = "nested"
    DANGLING = "dangling"
    CYCLE_BROKEN = "cycle_broken"


class Property(BaseModel):
    """A documented property; dotted names nest under ``properties``."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str | None = None
    description: str = ""
    optional: bool = False
    default: str | None = None
    properties: tuple["Property", ...] = ()


class Param(BaseModel):
    """A documented or declared parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str | None = None
    description: str = ""
    optional: bool = False
    default: str | None = None
    rest: bool = False
    properties: tuple["Param", ...] = ()


class ReturnValue(BaseModel):
    """A documented return value."""

    model_config = ConfigDict(frozen=True)

    type: str | None = None
    description: str = ""


class Entity(RawComment):
    """A comment enriched by inference.

    Fields left at their defaults mean the corresponding inferencer found
    nothing (``kind=None`` is the "undefined" kind). ``index`` is the position
    in the original comment stream; it drives source ordering and identifies
    the entity during nesting and garbage collection, so it is required.
    """

    index: int
    name: str | None = None
    kind: Kind | None = None
    member_of: str | None = None
    scope: Scope | None = None
    access: Access = Access.UNDEFINED
    augments: tuple[str, ...] = ()
    params: tuple[Param, ...] = ()
    properties: tuple[Property, ...] = ()
    returns: tuple[ReturnValue, ...] = ()
    type: str | None = None
    source_code: str | None = None
    errors: tuple[str, ...] = ()
    resolution: Resolution = Resolution.ROOT
    members: "Members" = Field(default_factory=lambda: Members())

    @classmethod
    def from_comment(cls, comment: RawComment, index: int) -> "Entity":
        """Wrap a raw comment so inference can start enriching it."""
        return cls(description=comment.description, tags=comment.tags, context=comment.context, index=index)

    @property
    def position_key(self) -> tuple[str, int, int, str]:
        """Input-order independent sort key: file, line, column, name."""
        start = self.context.loc.start
        return (self.context.file, start.line, start.column, self.name or "")

    def with_error(self, message: str) -> "Entity":
        return self.model_copy(update={"errors": (*self.errors, message)})

    def iter_members(self) -> Iterator["Entity"]:
        """Yield direct children across all member groups."""
        yield from self.members.static
        yield from self.members.instance
        yield from self.members.inner
        yield from self.members.events

    def walk(self) -> Iterator["Entity"]:
        """Depth-first pre-order traversal of this entity and its descendants."""
        yield self
        for child in self.iter_members():
            yield from child.walk()


class Members(BaseModel):
    """Children of an entity, grouped by how they are reached."""

    model_config = ConfigDict(frozen=True)

    static: tuple[Entity, ...] = ()
    instance: tuple[Entity, ...] = ()
    inner: tuple[Entity, ...] = ()
    events: tuple[Entity, ...] = ()

    def is_empty(self) -> bool:
        return not (self.static or self.instance or self.inner or self.events)


Entity.model_rebuild()


class DiagnosticKind(StrEnum):
    CYCLE = "cycle"
    DANGLING_REFERENCE = "dangling_reference"
    ENTITY_ERROR = "entity_error"


class Diagnostic(BaseModel):
    """A non-fatal problem found while building the tree."""

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    message: str
    file: str
    line: int
    name: str | None = None


__all__ = [
    "Access",
    "Diagnostic",
    "DiagnosticKind",
    "Entity",
    "Kind",
    "Members",
    "Param",
    "Property",
    "Resolution",
    "ReturnValue",
]
