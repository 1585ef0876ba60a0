"""Upstream seam: turning input files into raw comments.

Parsing source text and tag grammar belong to the source parser. This module
defines the parser protocol, a parser for pre-extracted comments serialized
as JSON, and concurrent per-file extraction.
"""

import asyncio
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import TypeAdapter, ValidationError

from doctree_core.comments import RawComment
from doctree_core.exceptions import SourceParserError
from doctree_core.logging import get_pipeline_logger

logger = get_pipeline_logger(__name__)

_COMMENT_LIST = TypeAdapter(list[RawComment])


@runtime_checkable
class SourceParser(Protocol):
    """Produces the ordered raw comments of one input file."""

    def parse(self, path: Path) -> list[RawComment]:
        """Return comments in source order. Raise SourceParserError on undecodable input."""
        ...


class JsonCommentParser:
    """Reads a JSON array of RawComment records written by an external extractor."""

    def parse(self, path: Path) -> list[RawComment]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SourceParserError(f"cannot read {path}: {exc}") from exc
        try:
            return _COMMENT_LIST.validate_json(text)
        except ValidationError as exc:
            raise SourceParserError(f"{path} is not a list of raw comments: {exc.error_count()} errors") from exc


async def extract_comments(files: Sequence[Path], parser: SourceParser) -> list[RawComment]:
    """Parse files concurrently and concatenate their comments in file order.

    Each file is parsed in its own worker thread; there is no ordering
    requirement between files, only on the concatenated result.
    """
    batches = await asyncio.gather(*(asyncio.to_thread(parser.parse, Path(file)) for file in files))
    comments = [comment for batch in batches for comment in batch]
    logger.debug("extracted %d comments from %d files", len(comments), len(files))
    return comments


async def load_sources(comments: Iterable[RawComment]) -> dict[str, str]:
    """Read the source text of every file the comments point at, where readable."""
    files = sorted({comment.context.file for comment in comments})

    async def read(file: str) -> str | None:
        try:
            return await asyncio.to_thread(Path(file).read_text, encoding="utf-8")
        except OSError:
            logger.debug("source %s is not readable; snippets fall back to parser code", file)
            return None

    texts = await asyncio.gather(*(read(file) for file in files))
    return {file: text for file, text in zip(files, texts) if text is not None}


__all__ = ["JsonCommentParser", "SourceParser", "extract_comments", "load_sources"]
