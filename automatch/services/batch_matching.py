"""
Batch auto-matching across a bank statement.

Bank transactions are processed strictly in input order: a HIGH-confidence
single match reserves its ledger entry, which removes it from the pool
offered to every later bank transaction in the same run.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set

from automatch.models.matching import (
    DEFAULT_MATCHING_CONFIG,
    BatchMatchResult,
    MatchConfidence,
    MatchingConfig,
    MatchStatistics,
    MatchSuggestion,
)
from automatch.services.matching import find_best_matches, find_multi_transaction_matches
from automatch.services.reconciliation_inputs import (
    AccountingInput,
    BankInput,
    to_accounting_transactions,
    to_bank_transactions,
)

logger = logging.getLogger(__name__)


def batch_auto_match(
    bank_txns: Iterable[BankInput],
    accounting_txns: Iterable[AccountingInput],
    config: Optional[MatchingConfig] = None,
) -> BatchMatchResult:
    """
    Propose the best match for every unreconciled bank transaction.

    Single matches are filed by confidence tier. A bank transaction with no
    qualifying single match falls back to multi-transaction matching and
    files only its best combination.

    Only HIGH-confidence single matches reserve their ledger entry. MEDIUM
    and LOW suggestions leave it available, and multi-match members are
    reserved only when ``config.reserve_multi_match_members`` is set.
    """
    config = config or DEFAULT_MATCHING_CONFIG
    bank_transactions = to_bank_transactions(bank_txns)
    candidates = to_accounting_transactions(accounting_txns)

    result = BatchMatchResult()
    used_accounting_ids: Set[str] = set()

    for bank_txn in bank_transactions:
        if bank_txn.is_reconciled:
            continue

        available = [txn for txn in candidates if txn.id not in used_accounting_ids]
        suggestions = find_best_matches(bank_txn, available, config)

        if suggestions:
            best = suggestions[0]
            if best.confidence == MatchConfidence.HIGH:
                result.high_confidence.append(best)
                used_accounting_ids.add(best.accounting_transaction_id)
            elif best.confidence == MatchConfidence.MEDIUM:
                result.medium_confidence.append(best)
            else:
                result.low_confidence.append(best)
            logger.debug(
                "Bank transaction %s -> %s (%s, score %.1f)",
                bank_txn.id, best.accounting_transaction_id, best.confidence.value, best.match_score,
            )
            continue

        multi = find_multi_transaction_matches(bank_txn, available, config)
        if multi:
            best_multi = multi[0]
            result.multi_matches.append(best_multi)
            if config.reserve_multi_match_members:
                used_accounting_ids.update(best_multi.accounting_transaction_ids)
            logger.debug(
                "Bank transaction %s -> %d ledger entries (score %.1f)",
                bank_txn.id, len(best_multi.accounting_transaction_ids), best_multi.match_score,
            )

    logger.info(
        "Auto-match run: %d bank / %d ledger transactions -> %d high, %d medium, %d low, %d multi",
        len(bank_transactions),
        len(candidates),
        len(result.high_confidence),
        len(result.medium_confidence),
        len(result.low_confidence),
        len(result.multi_matches),
    )
    return result


def get_match_statistics(
    bank_txns: Iterable[BankInput],
    accounting_txns: Iterable[AccountingInput],
    config: Optional[MatchingConfig] = None,
) -> MatchStatistics:
    bank_transactions = to_bank_transactions(bank_txns)
    candidates = to_accounting_transactions(accounting_txns)
    result = batch_auto_match(bank_transactions, candidates, config)

    total_bank = len(bank_transactions)
    matchable = result.matched_count
    match_rate = (matchable / total_bank) * 100 if total_bank > 0 else 0.0

    return MatchStatistics(
        total_bank_transactions=total_bank,
        total_accounting_transactions=len(candidates),
        matchable_transactions=matchable,
        high_confidence_matches=len(result.high_confidence),
        medium_confidence_matches=len(result.medium_confidence),
        low_confidence_matches=len(result.low_confidence),
        multi_transaction_matches=len(result.multi_matches),
        unmatchable=total_bank - matchable,
        estimated_match_rate=match_rate,
    )


def select_auto_matches(
    result: BatchMatchResult,
    match_high: bool = True,
    match_medium: bool = False,
) -> List[MatchSuggestion]:
    """
    Suggestions a caller may accept without review.

    HIGH suggestions come first, then MEDIUM when enabled. LOW suggestions
    and multi-transaction matches always need a human decision.
    """
    selected: List[MatchSuggestion] = []
    if match_high:
        selected.extend(result.high_confidence)
    if match_medium:
        selected.extend(result.medium_confidence)
    return selected
