"""DocTree Core - turns documentation comments into a validated API tree.

@public

Raw comments from a source parser pass through a fixed sequence of field
inferencers (name, access, kind, params, ...), are nested by membership into a
forest, then sorted, filtered by access level and garbage-collected. The
result is ready for a renderer.

Quick Start:
    >>> from doctree_core import BuildConfig, build
    >>> result = build(comments, BuildConfig(access=("public",), order="alpha"))
    >>> for root in result.roots:
    ...     print(root.name, [member.name for member in root.members.instance])

Environment Variables:
    - DOCTREE_ACCESS, DOCTREE_ORDER, DOCTREE_INFER_PRIVATE, DOCTREE_OUTPUT_SOURCE_CODE
    - DOCTREE_LOGGING_CONFIG, DOCTREE_LOG_LEVEL
"""

from .comments import (
    Access,
    CodeParam,
    CommentContext,
    DeclarationKind,
    Diagnostic,
    DiagnosticKind,
    Entity,
    Kind,
    Members,
    Param,
    Position,
    Property,
    RawComment,
    Resolution,
    ReturnValue,
    Scope,
    SourceRange,
    SyntaxContext,
    SyntaxOwner,
    Tag,
    TagKind,
)
from .exceptions import ConfigurationError, DocTreeError, SourceParserError, TagPayloadError
from .hierarchy import filter_access, garbage_collect, nest, sort_entities
from .logging import LoggingConfig, get_pipeline_logger, setup_logging
from .logging import get_pipeline_logger as get_logger
from .output import JsonRenderer, Renderer, dump_forest, load_forest
from .pipeline import BuildResult, build, build_files, pipeline
from .settings import BuildConfig, SortPolicy
from .sources import JsonCommentParser, SourceParser, extract_comments

__version__ = "0.1.0"

__all__ = [
    "Access",
    "BuildConfig",
    "BuildResult",
    "CodeParam",
    "CommentContext",
    "ConfigurationError",
    "DeclarationKind",
    "Diagnostic",
    "DiagnosticKind",
    "DocTreeError",
    "Entity",
    "JsonCommentParser",
    "JsonRenderer",
    "Kind",
    "LoggingConfig",
    "Members",
    "Param",
    "Position",
    "Property",
    "RawComment",
    "Renderer",
    "Resolution",
    "ReturnValue",
    "Scope",
    "SortPolicy",
    "SourceParser",
    "SourceParserError",
    "SourceRange",
    "SyntaxContext",
    "SyntaxOwner",
    "Tag",
    "TagKind",
    "TagPayloadError",
    "build",
    "build_files",
    "dump_forest",
    "extract_comments",
    "filter_access",
    "garbage_collect",
    "get_logger",
    "get_pipeline_logger",
    "load_forest",
    "nest",
    "pipeline",
    "setup_logging",
    "sort_entities",
]
