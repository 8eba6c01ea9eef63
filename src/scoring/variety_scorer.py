"""
Variety scoring against recent outfit history.

The candidate's item-id set is compared with every history entry
(Jaccard).  Entries at or above the similarity threshold penalize by
``similarity * recency``, where recency falls linearly from 1 (now) to
0 at ``variety_decay_days``.  Entries without a timestamp count as
fully recent.  Score is ``1 - worst penalty``.

The history is supplied per call; nothing is remembered between calls.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from config.constants import DEFAULT_SCORING_CONFIG, ScoringConfig
from core.utils import jaccard
from scoring.context import OutfitHistoryEntry, ScoreContext
from scoring.normalizer import NormalizedAttributes

_SECONDS_PER_DAY = 86400.0


def _aware(ts: datetime) -> datetime:
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def recency_weight(
    occurred_at: Optional[datetime],
    now: datetime,
    decay_days: float,
) -> float:
    if occurred_at is None or decay_days <= 0:
        return 1.0
    age_days = (_aware(now) - _aware(occurred_at)).total_seconds() / _SECONDS_PER_DAY
    if age_days <= 0:
        return 1.0
    return max(0.0, 1.0 - age_days / decay_days)


def _item_ids(items: Iterable) -> frozenset:
    return frozenset(
        item.item_id if isinstance(item, NormalizedAttributes) else item.id
        for item in items
    )


def variety_score(
    items: Sequence,
    history: Sequence[OutfitHistoryEntry],
    now: Optional[datetime] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    if not history:
        return 1.0
    ids = _item_ids(items)
    now = now or datetime.now(timezone.utc)

    worst = 0.0
    for entry in history:
        similarity = jaccard(ids, entry.item_ids)
        if similarity < config.variety_similarity_threshold:
            continue
        penalty = similarity * recency_weight(entry.occurred_at, now, config.variety_decay_days)
        worst = max(worst, penalty)
    return max(0.0, min(1.0, 1.0 - worst))


def variety(
    items: Sequence,
    context: Optional[ScoreContext] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> Optional[float]:
    """Variety dimension; ``None`` when no history list is supplied."""
    if context is None or context.history is None:
        return None
    return variety_score(items, context.history, context.reference_time, config)
