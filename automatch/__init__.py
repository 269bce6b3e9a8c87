"""Bank reconciliation auto-matching engine."""
from automatch.core.config import load_matching_config
from automatch.models import (
    DEFAULT_MATCHING_CONFIG,
    AccountingTransaction,
    BankTransaction,
    BatchMatchResult,
    MatchConfidence,
    MatchingConfig,
    MatchStatistics,
    MatchSuggestion,
    MatchType,
    MultiTransactionMatch,
)
from automatch.services.batch_matching import batch_auto_match, get_match_statistics, select_auto_matches
from automatch.services.errors import (
    AutoMatchError,
    ConfigError,
    ErrorCode,
    InvalidInputError,
    InvalidTransactionError,
)
from automatch.services.matching import find_best_matches, find_multi_transaction_matches
from automatch.services.multi_factor_scoring import calculate_match_score

__all__ = [
    "AccountingTransaction",
    "AutoMatchError",
    "BankTransaction",
    "BatchMatchResult",
    "ConfigError",
    "DEFAULT_MATCHING_CONFIG",
    "ErrorCode",
    "InvalidInputError",
    "InvalidTransactionError",
    "MatchConfidence",
    "MatchingConfig",
    "MatchStatistics",
    "MatchSuggestion",
    "MatchType",
    "MultiTransactionMatch",
    "batch_auto_match",
    "calculate_match_score",
    "find_best_matches",
    "find_multi_transaction_matches",
    "get_match_statistics",
    "load_matching_config",
    "select_auto_matches",
]
