"""Build the entity forest from resolved membership references.

Resolution runs in two passes: a path index is built over every entity first,
then each ``member_of`` reference is looked up in it. Nothing depends on the
order entities arrive in, so a child may precede its parent in the stream.
"""

from collections import defaultdict
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from doctree_core.comments import (
    Diagnostic,
    DiagnosticKind,
    Entity,
    Kind,
    Members,
    Resolution,
    Scope,
    parse_path,
    qualified_path,
)
from doctree_core.logging import get_pipeline_logger

logger = get_pipeline_logger(__name__)


@dataclass(frozen=True)
class PathIndex:
    """Read-only lookup from qualified paths to entities, built once per run.

    Every entity is indexed under its declared path (its own ``member_of``
    text plus its name) and under its canonical path, found by resolving the
    ``member_of`` chain up to a root. ``ns.Foo.bar`` therefore finds ``bar``
    even when ``bar`` only declares ``@memberof Foo``.
    """

    by_path: Mapping[tuple[str, ...], tuple[Entity, ...]]
    by_name: Mapping[str, tuple[Entity, ...]]
    paths: Mapping[int, tuple[tuple[str, ...], ...]]

    @classmethod
    def build(cls, entities: Sequence[Entity]) -> "PathIndex":
        named = sorted((entity for entity in entities if entity.name), key=_position)
        declared: defaultdict[tuple[str, ...], list[Entity]] = defaultdict(list)
        by_name: defaultdict[str, list[Entity]] = defaultdict(list)
        for entity in named:
            path = qualified_path(entity)
            declared[path].append(entity)
            by_name[path[-1]].append(entity)

        canonical: dict[int, tuple[str, ...]] = {}

        def lookup(segments: tuple[str, ...], visiting: frozenset[int]) -> Entity | None:
            exact = declared.get(segments)
            if exact:
                return exact[0]
            for candidate in by_name.get(segments[-1], ()):
                if _ends_with(qualified_path(candidate), segments):
                    return candidate
                if candidate.index not in visiting and _ends_with(canonical_path(candidate, visiting), segments):
                    return candidate
            return None

        def canonical_path(entity: Entity, visiting: frozenset[int] = frozenset()) -> tuple[str, ...]:
            if entity.index in canonical:
                return canonical[entity.index]
            path = qualified_path(entity)
            segments = parse_path(entity.member_of)[0] if entity.member_of else ()
            if segments:
                inner = visiting | {entity.index}
                owner = lookup(segments, inner)
                if owner is not None and owner.index not in inner:
                    path = (*canonical_path(owner, inner), path[-1])
            # nested results may be cut short by a cycle; only top-level ones are cached
            if not visiting:
                canonical[entity.index] = path
            return path

        by_path: defaultdict[tuple[str, ...], list[Entity]] = defaultdict(list)
        paths: dict[int, tuple[tuple[str, ...], ...]] = {}
        for entity in named:
            own = tuple(dict.fromkeys((qualified_path(entity), canonical_path(entity))))
            paths[entity.index] = own
            for path in own:
                by_path[path].append(entity)

        return cls(
            by_path=MappingProxyType({key: tuple(group) for key, group in by_path.items()}),
            by_name=MappingProxyType({key: tuple(group) for key, group in by_name.items()}),
            paths=MappingProxyType(paths),
        )

    def resolve(self, reference: str) -> Entity | None:
        """Find the entity a reference names.

        An exact match on a declared or canonical path wins; otherwise the
        reference may name the tail of a longer path (``Foo`` finds
        ``ns.Foo``). Among several matches the earliest by source position is
        chosen.
        """
        segments = parse_path(reference)[0]
        if not segments:
            return None
        exact = self.by_path.get(segments)
        if exact:
            return exact[0]
        for candidate in self.by_name.get(segments[-1], ()):
            if any(_ends_with(path, segments) for path in self.paths[candidate.index]):
                return candidate
        return None


def _position(entity: Entity) -> tuple[tuple[str, int, int, str], int]:
    return entity.position_key, entity.index


def _ends_with(path: tuple[str, ...], segments: tuple[str, ...]) -> bool:
    return len(path) >= len(segments) and path[-len(segments) :] == segments


@dataclass
class NestResult:
    roots: list[Entity]
    diagnostics: list[Diagnostic] = field(default_factory=list)


def _diagnostic(kind: DiagnosticKind, entity: Entity, message: str) -> Diagnostic:
    return Diagnostic(
        kind=kind,
        message=message,
        file=entity.context.file,
        line=entity.context.loc.start.line,
        name=entity.name,
    )


def _break_cycles(entities: Sequence[Entity], parents: dict[int, int | None]) -> list[int]:
    """Cut membership cycles in place; return the indexes promoted to root.

    Entities are visited in source-position order. When the ancestry walk from
    one of them revisits an entity already on the walk, the last entity on the
    walk (whose parent edge closes the loop) loses its parent.
    """
    broken: list[int] = []
    cleared: set[int] = set()
    for entity in sorted(entities, key=_position):
        chain: list[int] = []
        on_chain: set[int] = set()
        current: int | None = entity.index
        while current is not None and current not in cleared:
            if current in on_chain:
                offender = chain[-1]
                parents[offender] = None
                broken.append(offender)
                break
            chain.append(current)
            on_chain.add(current)
            current = parents[current]
        cleared.update(chain)
    return broken


def nest(entities: Sequence[Entity]) -> NestResult:
    """Attach every entity to its resolved owner and return the root entities.

    Children are grouped by scope (events always go to ``events``) and keep
    their input order. Entities whose reference cannot be resolved become
    roots marked DANGLING so garbage collection can remove them; entities
    whose membership closes a cycle become roots marked CYCLE_BROKEN.
    """
    by_index = {entity.index: entity for entity in entities}
    index = PathIndex.build(entities)
    parents: dict[int, int | None] = {}
    resolution: dict[int, Resolution] = {}
    diagnostics: list[Diagnostic] = []

    for entity in entities:
        if entity.member_of is None:
            parents[entity.index] = None
            resolution[entity.index] = Resolution.ROOT
            continue
        owner = index.resolve(entity.member_of)
        if owner is None:
            parents[entity.index] = None
            resolution[entity.index] = Resolution.DANGLING
            message = f"@memberof reference to {entity.member_of} not found"
            diagnostics.append(_diagnostic(DiagnosticKind.DANGLING_REFERENCE, entity, message))
            logger.debug("%s: %s", entity.name, message)
            continue
        parents[entity.index] = owner.index
        resolution[entity.index] = Resolution.NESTED

    errors: dict[int, str] = {}
    for broken in _break_cycles(entities, parents):
        entity = by_index[broken]
        resolution[broken] = Resolution.CYCLE_BROKEN
        errors[broken] = f"membership cycle through {entity.member_of} broken; promoted to root"
        diagnostics.append(_diagnostic(DiagnosticKind.CYCLE, entity, errors[broken]))
        logger.warning("%s: %s", entity.name, errors[broken])

    children: defaultdict[int, list[Entity]] = defaultdict(list)
    for entity in entities:
        parent = parents[entity.index]
        if parent is not None:
            children[parent].append(entity)

    def assemble(entity: Entity) -> Entity:
        groups: dict[str, list[Entity]] = {"static": [], "instance": [], "inner": [], "events": []}
        for child in children[entity.index]:
            groups[_member_group(child)].append(assemble(child))
        update: dict[str, object] = {
            "members": Members(**{group: tuple(items) for group, items in groups.items()}),
            "resolution": resolution[entity.index],
        }
        if entity.index in errors:
            update["errors"] = (*entity.errors, errors[entity.index])
        return entity.model_copy(update=update)

    roots = [assemble(entity) for entity in entities if parents[entity.index] is None]
    return NestResult(roots=roots, diagnostics=diagnostics)


def _member_group(entity: Entity) -> str:
    if entity.kind is Kind.EVENT:
        return "events"
    if entity.scope is Scope.INSTANCE:
        return "instance"
    if entity.scope is Scope.INNER:
        return "inner"
    return "static"


__all__ = ["NestResult", "PathIndex", "nest"]
