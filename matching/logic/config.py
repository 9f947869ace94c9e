"""
Matching configuration.

All tunables of the matching engine live on an explicit MatchingConfig that is
passed into the runner; values are read from the environment (and .env) once
via load_matching_config().
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .constants import (
    GradeScaleConvention,
    DEFAULT_MINIMUM_MATCH_SCORE,
    DEFAULT_CACHE_TTL_HOURS,
    DEFAULT_ESTIMATE_WEIGHTS,
)

load_dotenv()


class MatchingWeights(BaseModel):
    grade: float = Field(DEFAULT_ESTIMATE_WEIGHTS["grade"], ge=0.0)
    language: float = Field(DEFAULT_ESTIMATE_WEIGHTS["language"], ge=0.0)
    extracurricular: float = Field(DEFAULT_ESTIMATE_WEIGHTS["extracurricular"], ge=0.0)
    work_experience: float = Field(DEFAULT_ESTIMATE_WEIGHTS["work_experience"], ge=0.0)

    @property
    def total(self) -> float:
        return self.grade + self.language + self.extracurricular + self.work_experience


class MatchingConfig(BaseModel):
    minimum_match_score: int = Field(DEFAULT_MINIMUM_MATCH_SCORE, ge=0, le=100)
    grade_scale_convention: GradeScaleConvention = GradeScaleConvention.WASSCE
    weights: MatchingWeights = Field(default_factory=MatchingWeights)
    cache_ttl_hours: float = Field(DEFAULT_CACHE_TTL_HOURS, ge=0.0)


_ENV_FIELDS = {
    "MATCH_MIN_SCORE": "minimum_match_score",
    "MATCH_GRADE_SCALE": "grade_scale_convention",
    "MATCH_CACHE_TTL_HOURS": "cache_ttl_hours",
}

_ENV_WEIGHTS = {
    "MATCH_WEIGHT_GRADE": "grade",
    "MATCH_WEIGHT_LANGUAGE": "language",
    "MATCH_WEIGHT_EXTRACURRICULAR": "extracurricular",
    "MATCH_WEIGHT_WORK_EXPERIENCE": "work_experience",
}


def load_matching_config() -> MatchingConfig:
    """Build a MatchingConfig from MATCH_* environment variables."""
    values = {field: os.getenv(env) for env, field in _ENV_FIELDS.items() if os.getenv(env)}
    weights = {field: os.getenv(env) for env, field in _ENV_WEIGHTS.items() if os.getenv(env)}
    if "grade_scale_convention" in values:
        values["grade_scale_convention"] = values["grade_scale_convention"].strip().lower()
    try:
        return MatchingConfig(**values, weights=MatchingWeights(**weights))
    except ValidationError as e:
        raise RuntimeError(f"Invalid matching configuration: {e}") from e
