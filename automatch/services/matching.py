"""
Matching service for bank reconciliation.

Single matching ranks every ledger candidate for one bank line by its
multi-factor score. Multi-transaction matching looks for a handful of
ledger entries whose amounts sum to the bank line (bulk vendor payments,
consolidated transfers).
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from automatch.models.matching import (
    DEFAULT_MATCHING_CONFIG,
    MatchConfidence,
    MatchingConfig,
    MatchSuggestion,
    MatchType,
    MultiTransactionMatch,
)
from automatch.models.transactions import AccountingTransaction, BankTransaction
from automatch.services.combinations import generate_combinations
from automatch.services.multi_factor_scoring import MultiFactorScorer
from automatch.services.reconciliation_inputs import (
    AccountingInput,
    BankInput,
    to_accounting_transactions,
    to_bank_transaction,
)
from automatch.services.tolerance import amount_match, date_match

logger = logging.getLogger(__name__)

# Only the candidates nearest in date enter the combination search.
MULTI_MATCH_POOL_SIZE = 10
MULTI_MATCH_MIN_SIZE = 2
MULTI_MATCH_MAX_SIZE = 5
MULTI_MATCH_RESULT_LIMIT = 5

MULTI_MATCH_EXACT_SCORE = 90.0
MULTI_MATCH_CLOSE_SCORE = 75.0
# Fixed cutoff, independent of the configured single-match thresholds.
MULTI_MATCH_HIGH_CONFIDENCE_SCORE = 80.0


def find_best_matches(
    bank_txn: BankInput,
    accounting_txns: Iterable[AccountingInput],
    config: Optional[MatchingConfig] = None,
) -> List[MatchSuggestion]:
    """
    Rank ledger candidates for one bank transaction.

    Returns every candidate scoring at least ``minimum_match_score``,
    best first. Ties keep input order.
    """
    config = config or DEFAULT_MATCHING_CONFIG
    bank = to_bank_transaction(bank_txn)
    candidates = to_accounting_transactions(accounting_txns)
    scorer = MultiFactorScorer(config)

    suggestions: List[MatchSuggestion] = []
    for candidate in candidates:
        result = scorer.score_match(bank, candidate)
        if result.score < config.minimum_match_score:
            continue

        details = result.details
        suggestions.append(
            MatchSuggestion(
                bank_transaction_id=bank.id,
                accounting_transaction_id=candidate.id,
                match_score=result.score,
                match_reasons=result.reasons,
                amount_match=details.amount_score >= config.amount_weight * 0.8,
                date_match=details.date_score >= config.date_weight * 0.8,
                description_match=details.description_score >= config.description_weight * 0.5,
                confidence=_confidence_for(result.score, config),
                match_type=MatchType.EXACT if details.amount_score == config.amount_weight else MatchType.FUZZY,
                amount_variance=details.amount_variance,
                date_variance_days=details.date_variance_days,
                description_similarity=details.description_similarity,
                explanation=f"Score: {result.score:.1f}/100 - {', '.join(result.reasons)}",
            )
        )

    # sorted() is stable, so equal scores keep candidate order
    return sorted(suggestions, key=lambda s: s.match_score, reverse=True)


def find_multi_transaction_matches(
    bank_txn: BankInput,
    accounting_txns: Iterable[AccountingInput],
    config: Optional[MatchingConfig] = None,
) -> List[MultiTransactionMatch]:
    """
    Find combinations of 2-5 ledger entries that together explain one bank line.

    A combination qualifies when its summed amount is within tolerance of
    the bank amount and every member is individually within the date
    tolerance. Returns at most five matches, best first.
    """
    config = config or DEFAULT_MATCHING_CONFIG
    if not config.enable_multi_transaction_matching:
        return []

    bank = to_bank_transaction(bank_txn)
    candidates = to_accounting_transactions(accounting_txns)
    bank_amount = bank.amount

    by_proximity = sorted(
        candidates,
        key=lambda txn: _date_distance_seconds(bank.transaction_date, txn.date),
    )
    pool = by_proximity[:MULTI_MATCH_POOL_SIZE]

    matches: List[MultiTransactionMatch] = []
    max_size = min(MULTI_MATCH_MAX_SIZE, len(pool))
    for size in range(MULTI_MATCH_MIN_SIZE, max_size + 1):
        for combo in generate_combinations(pool, size):
            total_amount = sum(txn.match_amount for txn in combo)
            total_match = amount_match(bank_amount, total_amount, config)
            if not total_match.close:
                continue

            if not all(_within_date_tolerance(bank, txn, config) for txn in combo):
                continue

            score = MULTI_MATCH_EXACT_SCORE if total_match.exact else MULTI_MATCH_CLOSE_SCORE
            matches.append(
                MultiTransactionMatch(
                    bank_transaction_id=bank.id,
                    accounting_transaction_ids=[txn.id for txn in combo],
                    match_score=score,
                    total_amount=total_amount,
                    amount_variance=total_match.variance,
                    match_reasons=[
                        f"{len(combo)} transactions totaling {total_amount:.2f}",
                        "Exact total match" if total_match.exact else "Close total match",
                        "All dates within tolerance",
                    ],
                    confidence=(
                        MatchConfidence.HIGH
                        if score >= MULTI_MATCH_HIGH_CONFIDENCE_SCORE
                        else MatchConfidence.MEDIUM
                    ),
                )
            )

    logger.debug(
        "Bank transaction %s: %d multi-transaction combinations from pool of %d",
        bank.id, len(matches), len(pool),
    )
    matches.sort(key=lambda m: m.match_score, reverse=True)
    return matches[:MULTI_MATCH_RESULT_LIMIT]


def _confidence_for(score: float, config: MatchingConfig) -> MatchConfidence:
    if score >= config.high_confidence_threshold:
        return MatchConfidence.HIGH
    if score >= config.medium_confidence_threshold:
        return MatchConfidence.MEDIUM
    return MatchConfidence.LOW


def _date_distance_seconds(bank_date: datetime, txn_date: Optional[datetime]) -> float:
    # Undated entries sort last; they can never pass the per-member date check.
    if txn_date is None:
        return float("inf")
    return abs((bank_date - txn_date).total_seconds())


def _within_date_tolerance(
    bank: BankTransaction, txn: AccountingTransaction, config: MatchingConfig
) -> bool:
    if txn.date is None:
        return False
    return date_match(bank.transaction_date, txn.date, config).close
