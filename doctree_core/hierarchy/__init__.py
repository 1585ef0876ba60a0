"""Tree construction and pruning: nesting, sorting, access filtering, garbage collection."""

from .filter_access import filter_access
from .garbage_collect import garbage_collect, is_collectable
from .nest import NestResult, PathIndex, nest
from .sort import KIND_ORDER, sort_entities, sort_key

__all__ = [
    "KIND_ORDER",
    "NestResult",
    "PathIndex",
    "filter_access",
    "garbage_collect",
    "is_collectable",
    "nest",
    "sort_entities",
    "sort_key",
]
