# File: db/history.py
# Session history of reaction checks: newest first, capped. Lives in the caller's session only.

from typing import List, Sequence

from .schema import ReactionResult

HISTORY_LIMIT = 4


def add_to_history(history: Sequence[ReactionResult], result: ReactionResult,
                   limit: int = HISTORY_LIMIT) -> List[ReactionResult]:
    """Returns a new list with `result` first and the oldest entries dropped past `limit`."""
    if limit < 1:
        return []
    return [result] + list(history[: limit - 1])
