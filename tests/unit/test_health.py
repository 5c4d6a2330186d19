"""Unit tests for health score history and decision timeline correlation"""

from datetime import date

from account_dashboard.domain.health import (
    build_timeline,
    decision_trend,
    health_score_as_of,
    health_trend,
    latest_health_score,
)
from account_dashboard.domain.models import Trend


def test_latest_score_sorts_by_date(make_score):
    """Stored order is not trusted; the newest date wins"""
    scores = (make_score(30, date(2024, 11, 1)), make_score(70, date(2024, 12, 1)))

    assert latest_health_score(scores).score == 70
    assert latest_health_score(()) is None


def test_health_trend_up_beyond_threshold(make_score):
    d1, d2 = date(2024, 11, 1), date(2024, 12, 1)
    scores = (make_score(80, d2), make_score(50, d1))

    assert health_trend(scores) == Trend.UP


def test_health_trend_down_and_stable(make_score):
    d1, d2 = date(2024, 11, 1), date(2024, 12, 1)

    assert health_trend((make_score(40, d2), make_score(50, d1))) == Trend.DOWN
    assert health_trend((make_score(55, d2), make_score(50, d1))) == Trend.STABLE
    assert health_trend((make_score(45, d2), make_score(50, d1))) == Trend.STABLE


def test_health_trend_requires_two_scores(make_score):
    assert health_trend(()) is None
    assert health_trend((make_score(80, date(2024, 12, 1)),)) is None


def test_health_trend_uses_dates_not_list_order(make_score):
    scores = (make_score(50, date(2024, 11, 1)), make_score(80, date(2024, 12, 1)))

    assert health_trend(scores) == Trend.UP


def test_health_trend_custom_threshold(make_score):
    scores = (make_score(54, date(2024, 12, 1)), make_score(50, date(2024, 11, 1)))

    assert health_trend(scores, threshold=3) == Trend.UP


def test_score_as_of_picks_latest_on_or_before(make_score):
    scores = (
        make_score(60, date(2024, 11, 1)),
        make_score(70, date(2024, 12, 1)),
        make_score(65, date(2024, 11, 15)),
    )

    assert health_score_as_of(scores, date(2024, 11, 20)).score == 65
    assert health_score_as_of(scores, date(2024, 12, 1)).score == 70
    assert health_score_as_of(scores, date(2024, 10, 1)) is None


def test_score_as_of_tie_keeps_list_order(make_score):
    same_day = date(2024, 12, 1)
    scores = (make_score(40, same_day), make_score(90, same_day))

    assert health_score_as_of(scores, same_day).score == 40


def test_decision_trend_compares_with_previous_snapshot(make_score):
    d1, d2 = date(2024, 11, 1), date(2024, 12, 1)
    scores = (make_score(80, d2), make_score(50, d1))

    assert decision_trend(scores, date(2024, 12, 5)) == Trend.UP
    assert decision_trend(scores, d2) == Trend.UP
    # Only the first snapshot is in effect; nothing earlier to compare with
    assert decision_trend(scores, date(2024, 11, 10)) is None


def test_decision_after_snapshot_reports_move_into_it(make_score):
    """Baseline is the snapshot before the one in effect, not the decision date"""
    scores = (
        make_score(40, date(2024, 10, 1)),
        make_score(60, date(2024, 11, 1)),
        make_score(62, date(2024, 12, 1)),
    )

    assert decision_trend(scores, date(2024, 11, 20)) == Trend.UP
    assert decision_trend(scores, date(2024, 12, 20)) == Trend.STABLE


def test_build_timeline_newest_first_with_scores(make_decision, make_score):
    decisions = (
        make_decision("older", date(2024, 11, 5)),
        make_decision("newer", date(2024, 12, 3)),
    )
    scores = (
        make_score(50, date(2024, 11, 1)),
        make_score(80, date(2024, 12, 1)),
    )

    timeline = build_timeline(decisions, scores)

    assert [e.decision.id for e in timeline] == ["newer", "older"]
    assert timeline[0].health_score.score == 80
    assert timeline[0].trend == Trend.UP
    assert timeline[1].health_score.score == 50
    assert timeline[1].trend is None


def test_build_timeline_without_scores(make_decision):
    timeline = build_timeline((make_decision("d1", date(2024, 12, 3)),), ())

    assert timeline[0].health_score is None
    assert timeline[0].trend is None
