"""Attach the annotated code snippet to entities."""

from collections.abc import Mapping

from doctree_core.comments import Entity

from ._payload import Stage


def infer_source_code(sources: Mapping[str, str] | None, enabled: bool) -> Stage | None:
    """Build a snippet stage, or return None when snippets are disabled.

    The parser-supplied ``context.code`` is used when present; otherwise the
    lines spanned by ``context.loc`` are cut from the file's source text. Tabs
    are expanded to four spaces.
    """
    if not enabled:
        return None
    sources = sources or {}

    def infer(entity: Entity) -> Entity:
        snippet = entity.context.code
        if snippet is None:
            source = sources.get(entity.context.file)
            if source is None:
                return entity
            loc = entity.context.loc
            snippet = "\n".join(source.split("\n")[loc.start.line - 1 : loc.end.line])
        return entity.model_copy(update={"source_code": snippet.replace("\t", "    ")})

    return infer
