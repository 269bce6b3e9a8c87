from automatch.models.base import AMBaseModel
from automatch.models.transactions import AccountingTransaction, BankTransaction
from automatch.models.matching import (
    DEFAULT_MATCHING_CONFIG,
    BatchMatchResult,
    MatchConfidence,
    MatchingConfig,
    MatchStatistics,
    MatchSuggestion,
    MatchType,
    MultiTransactionMatch,
)

__all__ = [
    "AMBaseModel",
    "AccountingTransaction",
    "BankTransaction",
    "BatchMatchResult",
    "DEFAULT_MATCHING_CONFIG",
    "MatchConfidence",
    "MatchingConfig",
    "MatchStatistics",
    "MatchSuggestion",
    "MatchType",
    "MultiTransactionMatch",
]
