"""
Matching Logic Module

Provides the deterministic eligibility matching engine: per-requirement
evaluation of verified qualifications against program requirements.

Only pure modules are exported here; the runner, adapter and cache touch the
ORM and are imported from their own modules.
"""

from .contracts import (
    QualificationRecord,
    RequirementRecord,
    ProgramCandidate,
    RequirementVerdict,
    QualificationMatch,
    RequirementMatch,
    MatchResult,
    MatchOutput,
    EstimateProfile,
    EstimateTarget,
    FitEstimate,
)
from .constants import (
    QualificationType,
    RequirementType,
    RequirementStatus,
    GradeScaleConvention,
)
from .config import MatchingConfig, MatchingWeights, load_matching_config
from .requirement_matcher import evaluate_requirement
from .evaluator import evaluate_program, batch_evaluate, compute_match_score
from .ranker import rank_matches
from .quick_match import estimate_fit

__all__ = [
    # Engine
    "evaluate_requirement",
    "evaluate_program",
    "batch_evaluate",
    "compute_match_score",
    "rank_matches",
    "estimate_fit",

    # Config
    "MatchingConfig",
    "MatchingWeights",
    "load_matching_config",

    # Contracts
    "QualificationRecord",
    "RequirementRecord",
    "ProgramCandidate",
    "RequirementVerdict",
    "QualificationMatch",
    "RequirementMatch",
    "MatchResult",
    "MatchOutput",
    "EstimateProfile",
    "EstimateTarget",
    "FitEstimate",

    # Enums
    "QualificationType",
    "RequirementType",
    "RequirementStatus",
    "GradeScaleConvention",
]
