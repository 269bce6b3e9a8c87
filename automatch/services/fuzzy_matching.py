"""
Fuzzy text matching for auto-matching

Compares free-text transaction descriptions two ways:
- Levenshtein edit distance, normalized to a 0-1 similarity
- Keyword overlap (Jaccard over meaningful tokens)

The description similarity used by the scorer is the even blend of both.
"""
import re
from typing import Set


STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
    "be", "have", "has", "had", "do", "does", "did", "will", "would",
    "could", "should", "may", "might", "can",
})

MIN_KEYWORD_LENGTH = 3


def levenshtein_distance(str1: str, str2: str) -> int:
    """Case-insensitive edit distance (insert, delete, substitute at unit cost)."""
    s1 = str1.lower()
    s2 = str2.lower()
    m = len(s1)
    n = len(s2)

    if m == 0:
        return n
    if n == 0:
        return m

    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if s1[i - 1] == s2[j - 1]:
                dp[i][j] = dp[i - 1][j - 1]
            else:
                dp[i][j] = min(dp[i - 1][j], dp[i][j - 1], dp[i - 1][j - 1]) + 1

    return dp[m][n]


def similarity(str1: str, str2: str) -> float:
    """
    Edit-distance similarity between two strings.

    Returns:
        float: 1.0 for identical strings (including two empty strings),
        down to 0.0 for completely different ones.
    """
    # Lower-casing can lengthen a string ("İ" becomes two code points), so
    # the length must come from the same strings the distance is taken on.
    s1 = str1.lower()
    s2 = str2.lower()
    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 1.0

    return 1.0 - levenshtein_distance(s1, s2) / max_len


def extract_keywords(text: str) -> Set[str]:
    """
    Extract meaningful keywords from a description.

    Examples:
        "Payment to ABC Supplies" -> {"payment", "abc", "supplies"}
    """
    normalized = re.sub(r"[^a-z0-9]+", " ", text.lower())
    return {
        word for word in normalized.split()
        if len(word) >= MIN_KEYWORD_LENGTH and word not in STOP_WORDS
    }


def keyword_overlap(str1: str, str2: str) -> float:
    """Jaccard overlap of keywords; 0.0 when neither side has any."""
    keywords1 = extract_keywords(str1)
    keywords2 = extract_keywords(str2)

    union = keywords1 | keywords2
    if not union:
        return 0.0

    return len(keywords1 & keywords2) / len(union)


def description_similarity(desc1: str, desc2: str) -> float:
    return 0.5 * similarity(desc1, desc2) + 0.5 * keyword_overlap(desc1, desc2)
