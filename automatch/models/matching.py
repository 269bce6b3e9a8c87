"""Matching configuration and result models."""
import logging
from enum import Enum
from typing import List
from pydantic import ConfigDict, Field, model_validator
from automatch.models.base import AMBaseModel

logger = logging.getLogger(__name__)


class MatchConfidence(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class MatchType(str, Enum):
    EXACT = "EXACT"
    FUZZY = "FUZZY"


class MatchingConfig(AMBaseModel):
    """
    Weights, thresholds, tolerances and feature toggles for one matching run.

    Weights act as per-factor score ceilings and are not required to sum
    to 100. Thresholds are expected to satisfy
    minimum <= medium <= high; a config that breaks this is still accepted.
    """

    model_config = ConfigDict(frozen=True)

    # Scoring weights
    amount_weight: float = Field(default=40, ge=0)
    date_weight: float = Field(default=30, ge=0)
    reference_weight: float = Field(default=20, ge=0)
    description_weight: float = Field(default=10, ge=0)

    # Thresholds
    minimum_match_score: float = Field(default=50, ge=0)
    high_confidence_threshold: float = Field(default=80, ge=0)
    medium_confidence_threshold: float = Field(default=65, ge=0)

    # Tolerances
    amount_tolerance_percent: float = Field(default=0.01, ge=0)
    amount_tolerance_fixed: float = Field(default=0.01, ge=0)
    date_tolerance_days: float = Field(default=7, ge=0)

    # Features
    enable_fuzzy_matching: bool = True
    enable_multi_transaction_matching: bool = True
    enable_pattern_matching: bool = True  # reserved, no matcher reads it
    reserve_multi_match_members: bool = False

    @model_validator(mode="after")
    def warn_on_threshold_order(self) -> "MatchingConfig":
        if not (
            self.minimum_match_score
            <= self.medium_confidence_threshold
            <= self.high_confidence_threshold
        ):
            logger.warning(
                "Matching thresholds out of order (minimum=%s, medium=%s, high=%s); "
                "confidence tiers may be inconsistent",
                self.minimum_match_score,
                self.medium_confidence_threshold,
                self.high_confidence_threshold,
            )
        return self


DEFAULT_MATCHING_CONFIG = MatchingConfig()


class MatchSuggestion(AMBaseModel):
    bank_transaction_id: str
    accounting_transaction_id: str
    match_score: float
    match_reasons: List[str] = Field(default_factory=list)
    amount_match: bool = False
    date_match: bool = False
    description_match: bool = False
    confidence: MatchConfidence
    match_type: MatchType
    amount_variance: float = Field(..., ge=0)
    date_variance_days: float = Field(..., ge=0)
    description_similarity: float = Field(default=0.0, ge=0, le=1)
    explanation: str = ""


class MultiTransactionMatch(AMBaseModel):
    bank_transaction_id: str
    accounting_transaction_ids: List[str]
    match_score: float
    total_amount: float
    amount_variance: float = Field(..., ge=0)
    match_reasons: List[str] = Field(default_factory=list)
    confidence: MatchConfidence


class BatchMatchResult(AMBaseModel):
    high_confidence: List[MatchSuggestion] = Field(default_factory=list)
    medium_confidence: List[MatchSuggestion] = Field(default_factory=list)
    low_confidence: List[MatchSuggestion] = Field(default_factory=list)
    multi_matches: List[MultiTransactionMatch] = Field(default_factory=list)

    @property
    def matched_count(self) -> int:
        return (
            len(self.high_confidence)
            + len(self.medium_confidence)
            + len(self.low_confidence)
            + len(self.multi_matches)
        )

    def all_suggestions(self) -> List[MatchSuggestion]:
        """Single-transaction suggestions ordered HIGH, MEDIUM, LOW."""
        return [*self.high_confidence, *self.medium_confidence, *self.low_confidence]


class MatchStatistics(AMBaseModel):
    total_bank_transactions: int = Field(..., ge=0)
    total_accounting_transactions: int = Field(..., ge=0)
    matchable_transactions: int = Field(..., ge=0)
    high_confidence_matches: int = Field(..., ge=0)
    medium_confidence_matches: int = Field(..., ge=0)
    low_confidence_matches: int = Field(..., ge=0)
    multi_transaction_matches: int = Field(..., ge=0)
    unmatchable: int = Field(..., ge=0)
    estimated_match_rate: float = Field(default=0.0, ge=0)
