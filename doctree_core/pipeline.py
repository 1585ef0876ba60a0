"""Pipeline driver: raw comments in, sorted and filtered entity forest out.

Stage order is a fixed contract:

1. Field inference, per comment: name, access, augments, kind, params,
   properties, returns, membership, type, source code. Any stage may drop the
   comment by returning None.
2. Nesting over the full entity set.
3. Sorting, then access filtering, then garbage collection.

No stage raises; problems surface as entity errors and diagnostics.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from doctree_core.comments import Diagnostic, DiagnosticKind, Entity, RawComment
from doctree_core.hierarchy import filter_access, garbage_collect, nest, sort_entities
from doctree_core.infer import (
    Stage,
    collect_lends,
    infer_access,
    infer_augments,
    infer_kind,
    infer_membership,
    infer_name,
    infer_params,
    infer_properties,
    infer_returns,
    infer_source_code,
    infer_type,
)
from doctree_core.logging import get_pipeline_logger
from doctree_core.settings import BuildConfig
from doctree_core.sources import SourceParser, extract_comments, load_sources

logger = get_pipeline_logger(__name__)


def pipeline(*stages: Stage | None) -> Callable[[Entity], Entity | None]:
    """Compose stages left to right.

    ``None`` stages are skipped, which lets optional stages be switched off
    inline. Once a stage returns None the remaining stages do not run.
    """
    active = [stage for stage in stages if stage is not None]

    def run(entity: Entity | None) -> Entity | None:
        for stage in active:
            if entity is None:
                break
            entity = stage(entity)
        return entity

    return run


def inference_stages(
    config: BuildConfig,
    lends: Mapping[int, str] | None = None,
    sources: Mapping[str, str] | None = None,
) -> tuple[Stage | None, ...]:
    """The field inferencers in their required order."""
    return (
        infer_name,
        infer_access(config.private_pattern),
        infer_augments,
        infer_kind,
        infer_params,
        infer_properties,
        infer_returns,
        infer_membership(lends),
        infer_type,
        infer_source_code(sources, config.output_source_code),
    )


@dataclass
class BuildResult:
    """The final forest plus everything worth reporting about how it was built."""

    roots: list[Entity]
    diagnostics: list[Diagnostic] = field(default_factory=list)


def infer_entities(comments: Sequence[RawComment], config: BuildConfig, sources: Mapping[str, str] | None = None) -> list[Entity]:
    """Run field inference over the stream; dropped comments are left out."""
    run = pipeline(*inference_stages(config, collect_lends(comments), sources))
    entities: list[Entity] = []
    for index, comment in enumerate(comments):
        entity = run(Entity.from_comment(comment, index))
        if entity is not None:
            entities.append(entity)
    return entities


def _entity_diagnostics(entities: Sequence[Entity]) -> list[Diagnostic]:
    return [
        Diagnostic(
            kind=DiagnosticKind.ENTITY_ERROR,
            message=message,
            file=entity.context.file,
            line=entity.context.loc.start.line,
            name=entity.name,
        )
        for entity in entities
        for message in entity.errors
    ]


def build(
    comments: Sequence[RawComment],
    config: BuildConfig | None = None,
    sources: Mapping[str, str] | None = None,
) -> BuildResult:
    """Build the documented API forest from raw comments.

    Args:
        comments: The merged comment stream, in file order then source order.
        config: Build options; defaults are read from the environment.
        sources: Source text by file path, used for code snippets when the
            parser did not supply them.

    Example:
        >>> result = build(comments, BuildConfig(access=("public",), order="alpha"))
        >>> [root.name for root in result.roots]
    """
    config = config or BuildConfig()
    comments = list(comments)

    entities = infer_entities(comments, config, sources)
    nested = nest(entities)
    roots = garbage_collect(filter_access(config.access, sort_entities(nested.roots, config.order)))

    diagnostics = [*_entity_diagnostics(entities), *nested.diagnostics]
    logger.info(
        "built %d root entities from %d comments (%d inferred, %d diagnostics)",
        len(roots),
        len(comments),
        len(entities),
        len(diagnostics),
    )
    return BuildResult(roots=roots, diagnostics=diagnostics)


async def build_files(files: Sequence[Path], parser: SourceParser, config: BuildConfig | None = None) -> BuildResult:
    """Extract comments from files concurrently, then build."""
    config = config or BuildConfig()
    comments = await extract_comments(files, parser)
    sources = await load_sources(comments) if config.output_source_code else None
    return build(comments, config, sources)


__all__ = ["BuildResult", "build", "build_files", "infer_entities", "inference_stages", "pipeline"]
