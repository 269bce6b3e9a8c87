"""
Multi-factor scoring for bank-to-ledger auto-matching

Each factor is scored independently up to its configured weight:
- Amount match: 0-amount_weight points (default 40)
- Date proximity: 0-date_weight points (default 30)
- Reference / cheque match: 0-reference_weight points (default 20)
- Description similarity: 0-description_weight points (default 10)

The total is the plain sum of the four factors. It is neither normalized
nor capped, so weights summing above 100 can produce scores above 100.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from automatch.models.matching import DEFAULT_MATCHING_CONFIG, MatchingConfig
from automatch.models.transactions import AccountingTransaction, BankTransaction
from automatch.services.fuzzy_matching import description_similarity
from automatch.services.tolerance import amount_match, date_match

# Reported when the ledger side has no date, distinct from "0 days apart".
UNKNOWN_DATE_VARIANCE_DAYS = 999.0

# (similarity floor, share of description weight, reason)
DESCRIPTION_TIERS = (
    (0.9, 1.0, "Very high description similarity"),
    (0.7, 0.8, "High description similarity"),
    (0.5, 0.5, "Moderate description similarity"),
    (0.3, 0.3, "Low description similarity"),
)


@dataclass
class ScoreDetails:
    """Per-factor breakdown of a match score."""
    amount_score: float = 0.0
    date_score: float = 0.0
    reference_score: float = 0.0
    description_score: float = 0.0
    amount_variance: float = 0.0
    date_variance_days: float = UNKNOWN_DATE_VARIANCE_DAYS
    description_similarity: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount_score": self.amount_score,
            "date_score": self.date_score,
            "reference_score": self.reference_score,
            "description_score": self.description_score,
            "amount_variance": self.amount_variance,
            "date_variance_days": self.date_variance_days,
            "description_similarity": self.description_similarity,
        }


@dataclass
class MatchScore:
    score: float
    reasons: List[str] = field(default_factory=list)
    details: ScoreDetails = field(default_factory=ScoreDetails)


class MultiFactorScorer:
    """Scores one bank transaction against one accounting transaction."""

    def __init__(self, config: Optional[MatchingConfig] = None):
        self.config = config or DEFAULT_MATCHING_CONFIG

    def score_match(
        self,
        bank_txn: BankTransaction,
        accounting_txn: AccountingTransaction,
    ) -> MatchScore:
        details = ScoreDetails()
        reasons: List[str] = []

        details.amount_score, details.amount_variance, reason = self._score_amount(
            bank_txn.amount, accounting_txn.match_amount
        )
        _append(reasons, reason)

        if accounting_txn.date is not None:
            details.date_score, details.date_variance_days, reason = self._score_date(
                bank_txn, accounting_txn
            )
            _append(reasons, reason)

        details.reference_score, ref_reasons = self._score_reference(bank_txn, accounting_txn)
        reasons.extend(ref_reasons)

        if self.config.enable_fuzzy_matching and accounting_txn.description:
            details.description_similarity = description_similarity(
                bank_txn.description, accounting_txn.description
            )
            details.description_score, reason = self._score_description(
                details.description_similarity
            )
            _append(reasons, reason)

        total = (
            details.amount_score
            + details.date_score
            + details.reference_score
            + details.description_score
        )
        return MatchScore(score=total, reasons=reasons, details=details)

    def _score_amount(
        self, bank_amount: float, accounting_amount: float
    ) -> Tuple[float, float, Optional[str]]:
        """
        Score amount match.

        Scoring:
        - Within fixed tolerance: full weight
        - Within either tolerance: 80% of weight
        - Otherwise: up to 30% of weight, decaying with relative variance
        """
        weight = self.config.amount_weight
        match = amount_match(bank_amount, accounting_amount, self.config)

        if match.exact:
            return weight, match.variance, "Exact amount match"
        if match.close:
            return weight * 0.8, match.variance, f"Close amount match (variance: {match.variance:.2f})"

        if bank_amount <= 0:
            return 0.0, match.variance, None
        closeness = max(0.0, 1.0 - match.variance / bank_amount)
        return weight * 0.3 * closeness, match.variance, None

    def _score_date(
        self, bank_txn: BankTransaction, accounting_txn: AccountingTransaction
    ) -> Tuple[float, float, Optional[str]]:
        weight = self.config.date_weight
        match = date_match(bank_txn.transaction_date, accounting_txn.date, self.config)

        if match.exact:
            return weight, match.variance_days, "Same date"
        if match.close:
            # close implies variance >= 1 day, so the tolerance is non-zero here
            decay = 1.0 - match.variance_days / self.config.date_tolerance_days
            return (
                weight * (0.5 + 0.5 * decay),
                match.variance_days,
                f"Date within {math.floor(match.variance_days)} days",
            )
        return 0.0, match.variance_days, None

    def _score_reference(
        self, bank_txn: BankTransaction, accounting_txn: AccountingTransaction
    ) -> Tuple[float, List[str]]:
        """Best of the cheque-number and reference comparisons, never their sum."""
        weight = self.config.reference_weight
        score = 0.0
        reasons: List[str] = []

        if bank_txn.cheque_number and accounting_txn.cheque_number:
            if bank_txn.cheque_number == accounting_txn.cheque_number:
                score = weight
                reasons.append("Cheque number match")

        if bank_txn.reference and accounting_txn.reference:
            ref1 = bank_txn.reference.lower()
            ref2 = accounting_txn.reference.lower()

            if ref1 == ref2:
                score = max(score, weight)
                reasons.append("Exact reference match")
            elif ref1 in ref2 or ref2 in ref1:
                score = max(score, weight * 0.8)
                reasons.append("Partial reference match")

        return score, reasons

    def _score_description(self, desc_similarity: float) -> Tuple[float, Optional[str]]:
        for floor, share, reason in DESCRIPTION_TIERS:
            if desc_similarity > floor:
                return self.config.description_weight * share, reason
        return 0.0, None


def calculate_match_score(
    bank_txn: BankTransaction,
    accounting_txn: AccountingTransaction,
    config: Optional[MatchingConfig] = None,
) -> MatchScore:
    return MultiFactorScorer(config).score_match(bank_txn, accounting_txn)


def _append(reasons: List[str], reason: Optional[str]) -> None:
    if reason:
        reasons.append(reason)
