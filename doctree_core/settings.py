"""Build configuration for the comment-to-tree pipeline.

@public

Settings are loaded from keyword arguments, environment variables and a .env
file via pydantic-settings, and are frozen once created.

Environment variables:
    DOCTREE_ACCESS: JSON list of access levels to keep, e.g. '["public"]'
    DOCTREE_ORDER: "source", "alpha", "kind" or a JSON list of names/paths
    DOCTREE_INFER_PRIVATE: Regular expression marking names as private, e.g. '^_'
    DOCTREE_OUTPUT_SOURCE_CODE: Attach code snippets to entities (true/false)

Example:
    >>> from doctree_core.settings import BuildConfig
    >>> config = BuildConfig(access=("public",), order="alpha", infer_private="^_")
    >>> config.private_pattern.search("_helper") is not None
    True
"""

import re
from enum import StrEnum
from functools import cached_property

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from doctree_core.comments import Access


class SortPolicy(StrEnum):
    """Named sibling ordering policies. An explicit name list is the fourth option."""

    SOURCE = "source"
    ALPHA = "alpha"
    KIND = "kind"


DEFAULT_ACCESS: tuple[Access, ...] = (Access.PUBLIC, Access.UNDEFINED, Access.PROTECTED)


class BuildConfig(BaseSettings):
    """Options consumed by the build pipeline.

    @public

    Attributes:
        access: Access levels kept by the access filter, in order.
        order: Sibling ordering, a SortPolicy or an explicit list of names/paths.
        infer_private: Naming-convention regex for implicit private detection.
        output_source_code: Attach each entity's code snippet.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCTREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    access: tuple[Access, ...] = DEFAULT_ACCESS
    order: SortPolicy | tuple[str, ...] = SortPolicy.SOURCE
    infer_private: str | None = None
    output_source_code: bool = False

    @field_validator("infer_private")
    @classmethod
    def validate_pattern(cls, value: str | None) -> str | None:
        """Reject patterns that do not compile as regular expressions."""
        if value is None:
            return value
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"infer_private is not a valid regular expression: {exc}") from exc
        return value

    @cached_property
    def private_pattern(self) -> re.Pattern[str] | None:
        return re.compile(self.infer_private) if self.infer_private else None


__all__ = ["DEFAULT_ACCESS", "BuildConfig", "SortPolicy"]
