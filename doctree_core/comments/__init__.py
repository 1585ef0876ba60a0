"""Comment and entity models shared by every pipeline stage."""

from .entity import (
    Access,
    Diagnostic,
    DiagnosticKind,
    Entity,
    Kind,
    Members,
    Param,
    Property,
    Resolution,
    ReturnValue,
)
from .paths import join_path, parse_path, qualified_path
from .types import (
    CodeParam,
    CommentContext,
    DeclarationKind,
    Position,
    RawComment,
    Scope,
    SourceRange,
    SyntaxContext,
    SyntaxOwner,
    Tag,
    TagKind,
)

__all__ = [
    "Access",
    "CodeParam",
    "CommentContext",
    "DeclarationKind",
    "Diagnostic",
    "DiagnosticKind",
    "Entity",
    "Kind",
    "Members",
    "Param",
    "Position",
    "Property",
    "RawComment",
    "Resolution",
    "ReturnValue",
    "Scope",
    "SourceRange",
    "SyntaxContext",
    "SyntaxOwner",
    "Tag",
    "TagKind",
    "join_path",
    "parse_path",
    "qualified_path",
]
