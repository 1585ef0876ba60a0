"""Downstream seam: handing the finished forest to a renderer."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from pydantic import TypeAdapter

from doctree_core.comments import Entity
from doctree_core.settings import BuildConfig

_FOREST = TypeAdapter(list[Entity])


@runtime_checkable
class Renderer(Protocol):
    """Turns the final forest into output. Must not mutate the entities."""

    def render(self, roots: Sequence[Entity], config: BuildConfig) -> str: ...


def dump_forest(roots: Sequence[Entity], *, indent: int | None = 2) -> str:
    """Serialize the forest as JSON, omitting fields left at their defaults."""
    return _FOREST.dump_json(list(roots), indent=indent, exclude_defaults=True).decode()


def load_forest(text: str) -> list[Entity]:
    return _FOREST.validate_json(text)


class JsonRenderer:
    """Renderer emitting the forest as JSON."""

    def __init__(self, indent: int | None = 2):
        self.indent = indent

    def render(self, roots: Sequence[Entity], config: BuildConfig) -> str:
        return dump_forest(roots, indent=self.indent)


__all__ = ["JsonRenderer", "Renderer", "dump_forest", "load_forest"]
