"""Health score history - latest snapshot, trends, and decision timeline correlation"""

from datetime import date
from typing import Iterable, List, Optional, Sequence

from account_dashboard.domain.models import Decision, HealthScore, TimelineEntry, Trend

# Score moves within +/- this band are reported as stable
TREND_THRESHOLD = 5


def newest_first(scores: Iterable[HealthScore]) -> List[HealthScore]:
    """Sort by date descending; same-day snapshots keep their list order"""
    return sorted(scores, key=lambda s: s.date, reverse=True)


def latest_health_score(scores: Sequence[HealthScore]) -> Optional[HealthScore]:
    ordered = newest_first(scores)
    return ordered[0] if ordered else None


def classify_trend(diff: float, threshold: float = TREND_THRESHOLD) -> Trend:
    if diff > threshold:
        return Trend.UP
    if diff < -threshold:
        return Trend.DOWN
    return Trend.STABLE


def health_trend(
    scores: Sequence[HealthScore], threshold: float = TREND_THRESHOLD
) -> Optional[Trend]:
    """
    Trend between the two most recent snapshots.

    Returns None with fewer than two snapshots.
    """
    ordered = newest_first(scores)
    if len(ordered) < 2:
        return None
    return classify_trend(ordered[0].score - ordered[1].score, threshold)


def health_score_as_of(scores: Sequence[HealthScore], as_of: date) -> Optional[HealthScore]:
    """Latest snapshot dated on or before as_of (first in list order wins a tie)"""
    best = None
    for score in scores:
        if score.date > as_of:
            continue
        if best is None or score.date > best.date:
            best = score
    return best


def _previous_score(scores: Sequence[HealthScore], before: date) -> Optional[HealthScore]:
    best = None
    for score in scores:
        if score.date >= before:
            continue
        if best is None or score.date > best.date:
            best = score
    return best


def decision_trend(
    scores: Sequence[HealthScore], decision_date: date, threshold: float = TREND_THRESHOLD
) -> Optional[Trend]:
    """
    Health movement leading into a decision.

    Compares the snapshot in effect on the decision date with the snapshot
    immediately before that one. None when either is missing.

    The baseline is the snapshot preceding the one in effect, not the latest
    snapshot dated before the decision. A decision made days after a snapshot
    therefore still reports the move into that snapshot rather than stable.
    """
    current = health_score_as_of(scores, decision_date)
    if current is None:
        return None
    previous = _previous_score(scores, current.date)
    if previous is None:
        return None
    return classify_trend(current.score - previous.score, threshold)


def build_timeline(
    decisions: Iterable[Decision],
    scores: Sequence[HealthScore],
    threshold: float = TREND_THRESHOLD,
) -> List[TimelineEntry]:
    """Decisions newest first, each with the health score and trend at that time"""
    ordered = sorted(decisions, key=lambda d: d.date, reverse=True)
    return [
        TimelineEntry(
            decision=decision,
            health_score=health_score_as_of(scores, decision.date),
            trend=decision_trend(scores, decision.date, threshold),
        )
        for decision in ordered
    ]
