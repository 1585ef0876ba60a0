"""Field inferencers.

Each inferencer takes an Entity and returns an enriched copy, or None to drop
it. Factories (infer_access, infer_membership, infer_source_code) close over
configuration and return such a stage.
"""

from ._payload import Stage
from .access import infer_access
from .augments import infer_augments
from .kind import infer_kind
from .membership import (
    SIGNAL_PRIORITY,
    MembershipCandidate,
    MembershipSource,
    collect_lends,
    infer_membership,
    rank_candidates,
)
from .name import infer_name
from .params import infer_params
from .properties import infer_properties
from .returns import infer_returns
from .source_code import infer_source_code
from .type import infer_type

__all__ = [
    "SIGNAL_PRIORITY",
    "Stage",
    "MembershipCandidate",
    "MembershipSource",
    "collect_lends",
    "infer_access",
    "infer_augments",
    "infer_kind",
    "infer_membership",
    "infer_name",
    "infer_params",
    "infer_properties",
    "infer_returns",
    "infer_source_code",
    "infer_type",
    "rank_candidates",
]
