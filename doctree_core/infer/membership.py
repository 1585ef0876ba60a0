"""Membership inference: which entity owns this one, and through which scope.

Every signal becomes a MembershipCandidate. Candidates are ranked by
SIGNAL_PRIORITY first and by owner depth second, so explicit tags always beat
syntax and, among syntactic owners, the innermost enclosing construct wins.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum

from doctree_core.comments import Entity, RawComment, Scope, TagKind, join_path, parse_path
from doctree_core.exceptions import TagPayloadError
from doctree_core.logging import get_pipeline_logger

from ._payload import Stage, payload_str

logger = get_pipeline_logger(__name__)


class MembershipSource(StrEnum):
    EXPLICIT_TAG = "explicit_tag"
    LENDS = "lends"
    SYNTACTIC = "syntactic"


SIGNAL_PRIORITY: dict[MembershipSource, int] = {
    MembershipSource.EXPLICIT_TAG: 3,
    MembershipSource.LENDS: 2,
    MembershipSource.SYNTACTIC: 1,
}

_SCOPE_TAGS: tuple[tuple[str, Scope], ...] = (
    (TagKind.STATIC, Scope.STATIC),
    (TagKind.INSTANCE, Scope.INSTANCE),
    (TagKind.INNER, Scope.INNER),
)
_SCOPE_VALUES = frozenset(Scope)


@dataclass(frozen=True, slots=True)
class MembershipCandidate:
    """One signal proposing an owner. An empty ``path`` means top level."""

    source: MembershipSource
    path: tuple[str, ...]
    scope: Scope | None = None
    depth: int = 0

    @property
    def rank(self) -> tuple[int, int]:
        return SIGNAL_PRIORITY[self.source], self.depth


def rank_candidates(candidates: Sequence[MembershipCandidate]) -> MembershipCandidate | None:
    """Pick the strongest candidate; the earliest one wins a tie."""
    best: MembershipCandidate | None = None
    for candidate in candidates:
        if best is None or candidate.rank > best.rank:
            best = candidate
    return best


def collect_lends(comments: Sequence[RawComment]) -> dict[int, str]:
    """Map stream positions to the lends target active for them.

    A comment carrying ``@lends <path>`` applies to every later comment in the
    same file and syntactic block, until another lends directive in that block
    replaces it. Comments outside any parser-reported block are never lent.
    """
    active: dict[tuple[str, str], str] = {}
    lent: dict[int, str] = {}
    for index, comment in enumerate(comments):
        if comment.context.syntax.block is None:
            if comment.has_tag(TagKind.LENDS):
                logger.debug("ignoring @lends outside a block at %s:%d", comment.context.file, comment.context.loc.start.line)
            continue
        block = (comment.context.file, comment.context.syntax.block)
        tag = comment.first_tag(TagKind.LENDS)
        if tag is not None:
            try:
                target = payload_str(tag, "name", required=True)
            except TagPayloadError:
                continue
            assert target is not None
            active[block] = target
        elif block in active:
            lent[index] = active[block]
    return lent


def membership_candidates(entity: Entity, lent_to: str | None = None) -> tuple[list[MembershipCandidate], list[str]]:
    """Collect every membership signal for an entity, unranked, plus payload errors."""
    candidates: list[MembershipCandidate] = []
    errors: list[str] = []

    for tag in entity.tags_of(TagKind.MEMBEROF):
        try:
            reference = payload_str(tag, "name", required=True)
            declared_scope = payload_str(tag, "scope")
        except TagPayloadError as exc:
            errors.append(str(exc))
            continue
        assert reference is not None
        path, scope = parse_path(reference)
        if declared_scope in _SCOPE_VALUES:
            scope = Scope(declared_scope)
        candidates.append(MembershipCandidate(MembershipSource.EXPLICIT_TAG, path, scope))
    if entity.has_tag(TagKind.GLOBAL):
        candidates.append(MembershipCandidate(MembershipSource.EXPLICIT_TAG, ()))

    if lent_to:
        path, scope = parse_path(lent_to)
        candidates.append(MembershipCandidate(MembershipSource.LENDS, path, scope))

    for depth, owner in enumerate(entity.context.syntax.owners):
        path, scope = parse_path(owner.path)
        candidates.append(MembershipCandidate(MembershipSource.SYNTACTIC, path, owner.scope or scope, depth))
    return candidates, errors


def infer_membership(lends: Mapping[int, str] | None = None) -> Stage:
    """Build a membership inferencer.

    ``lends`` comes from collect_lends over the same stream. Comments that are
    themselves lends directives are dropped. Explicit ``@static``,
    ``@instance`` and ``@inner`` tags override the scope implied by the chosen
    candidate; members without any scope signal are static.
    """
    lends = lends or {}

    def infer(entity: Entity) -> Entity | None:
        if entity.has_tag(TagKind.LENDS):
            return None

        candidates, errors = membership_candidates(entity, lends.get(entity.index))
        for message in errors:
            entity = entity.with_error(message)
        best = rank_candidates(candidates)

        member_of = join_path(best.path) if best else None
        scope = next((scope for kind, scope in _SCOPE_TAGS if entity.has_tag(kind)), None)
        if scope is None and best is not None:
            scope = best.scope
        if scope is None and member_of is not None:
            scope = Scope.STATIC
        return entity.model_copy(update={"member_of": member_of, "scope": scope})

    return infer


__all__ = [
    "SIGNAL_PRIORITY",
    "MembershipCandidate",
    "MembershipSource",
    "collect_lends",
    "infer_membership",
    "membership_candidates",
    "rank_candidates",
]
