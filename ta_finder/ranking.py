"""
Fuzzy ranking of cards against the search box.

The matcher follows the skim / fzf "v2" scheme: the query has to appear in the
card as a subsequence, and among all the ways it can be aligned the one with
the best score wins. Matches at the start of a word, right after punctuation,
or on a camelCase hump earn a bonus; runs of consecutive matches earn a bonus;
skipped characters between two matches cost a gap penalty.

Public API:
    scores = score_all(cards, "lovelace")
    order  = stable_order(scores)      # ascending, ties keep card order
"""

from __future__ import annotations

from typing import Sequence

SCORE_MATCH = 16
GAP_START = -3
GAP_EXTENSION = -1
BONUS_FIRST_CHAR_MULTIPLIER = 2
BONUS_HEAD = SCORE_MATCH // 2
BONUS_BREAK = SCORE_MATCH // 2 + GAP_EXTENSION
BONUS_CAMEL = SCORE_MATCH // 2 + 2 * GAP_EXTENSION
BONUS_CONSECUTIVE = -(GAP_START + GAP_EXTENSION)
PENALTY_CASE_MISMATCH = GAP_EXTENSION * 2

# Card scores for a query that does not match at all.
NO_MATCH_SCORE = 0

HARD_SEPARATORS = frozenset("/\\|()[]{}")
SOFT_SEPARATORS = frozenset("!\"#$%&'*+,-.:;<=>?@^_`~")

_EMPTY, _HARD_SEP, _SOFT_SEP, _NUMBER, _UPPER, _LOWER = range(6)
_UNREACHABLE = -(10 ** 9)


def _char_type(ch: str | None) -> int:
    if ch is None or ch.isspace():
        return _EMPTY
    if ch in HARD_SEPARATORS:
        return _HARD_SEP
    if ch in SOFT_SEPARATORS:
        return _SOFT_SEP
    if ch.isascii() and ch.isdigit():
        return _NUMBER
    if ch.isascii() and ch.isupper():
        return _UPPER
    return _LOWER


def _position_bonus(prev: str | None, cur: str) -> int:
    prev_type = _char_type(prev)
    if prev_type in (_EMPTY, _HARD_SEP):
        return BONUS_HEAD
    if prev_type == _SOFT_SEP:
        return BONUS_BREAK
    if _char_type(cur) == _UPPER and prev_type in (_LOWER, _NUMBER):
        return BONUS_CAMEL
    return 0


class SkimMatcher:
    """Smart-case fuzzy matcher: case-insensitive unless the query has capitals."""

    def fuzzy_match(self, choice: str, pattern: str) -> int | None:
        if not pattern:
            return 0

        case_sensitive = any(ch.isupper() for ch in pattern)
        if case_sensitive:
            folded = list(choice)
            wanted = list(pattern)
        else:
            folded = [ch.lower() for ch in choice]
            wanted = [ch.lower() for ch in pattern]

        m, n = len(wanted), len(folded)
        if m > n:
            return None

        # Cheap subsequence check before the quadratic pass.
        first = []
        j = 0
        for want in wanted:
            while j < n and folded[j] != want:
                j += 1
            if j == n:
                return None
            first.append(j)
            j += 1

        bonuses = [
            _position_bonus(choice[j - 1] if j else None, choice[j])
            for j in range(n)
        ]

        prev_row: list[int] = []
        for i, want in enumerate(wanted):
            row = [_UNREACHABLE] * n
            gap_best = _UNREACHABLE
            start = first[i - 1] + 1 if i else first[0]
            for j in range(start, n):
                if i > 0 and j >= 2 and prev_row[j - 2] > _UNREACHABLE:
                    gap_best = max(gap_best + GAP_EXTENSION, prev_row[j - 2] + GAP_START)
                elif i > 0 and gap_best > _UNREACHABLE:
                    gap_best += GAP_EXTENSION

                if folded[j] != want:
                    continue

                char_score = SCORE_MATCH
                if not case_sensitive and choice[j] != pattern[i]:
                    char_score += PENALTY_CASE_MISMATCH
                bonus = bonuses[j]

                if i == 0:
                    row[j] = char_score + bonus * BONUS_FIRST_CHAR_MULTIPLIER
                    continue

                best = _UNREACHABLE
                if prev_row[j - 1] > _UNREACHABLE:
                    best = prev_row[j - 1] + char_score + max(bonus, BONUS_CONSECUTIVE)
                if gap_best > _UNREACHABLE:
                    best = max(best, gap_best + char_score + bonus)
                row[j] = best
            prev_row = row

        score = max(prev_row)
        return score if score > _UNREACHABLE else None


def score_all(cards: Sequence[str], query: str, matcher: SkimMatcher | None = None) -> list[int]:
    """Score every card against ``query``; a card the query misses scores 0."""
    matcher = matcher or SkimMatcher()
    scores = []
    for card in cards:
        score = matcher.fuzzy_match(card, query)
        scores.append(NO_MATCH_SCORE if score is None else score)
    return scores


def stable_order(scores: Sequence[int]) -> list[int]:
    """
    Positions sorted ascending by score.

    Works from a snapshot of (position, score) pairs, and Python's sort is
    stable, so equal scores keep their card order.
    """
    snapshot = tuple(enumerate(scores))
    return [position for position, _ in sorted(snapshot, key=lambda pair: pair[1])]
