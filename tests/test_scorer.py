"""Tests for relevance scoring: ratio, constituent boosting, variance shaping."""

import pytest

from riptide import EngineConfig, RelevanceScorer, TokenStatsStore


def _ranked(topics):
    return [t.token for t in topics]


def test_empty_local_map(scorer):
    assert scorer.score({}, 0, {}, 0, 10) == []


def test_non_positive_limit(scorer):
    assert scorer.score({"kernel": 1}, 1, {}, 0, 0) == []
    assert scorer.global_top({"kernel": 1}, -1) == []


def test_zero_totals_are_guarded(scorer):
    result = scorer.score({"kernel": 2}, 0, {}, 0, 10)
    assert len(result) == 1
    assert result[0].score > 0


def test_ratio_and_variance_shaping(scorer):
    """Locally common but globally rare tokens rank first."""
    local = {"alpha": 2, "beta": 2}
    global_table = {"alpha": 1, "beta": 4}
    result = scorer.score(local, 4, global_table, 5, 10)
    assert _ranked(result) == ["alpha", "beta"]
    # tf=0.5, global freq 0.2 -> 2.5; beta 0.5/0.8 -> 0.625
    assert result[0].score == pytest.approx(2.5 ** 1.3)
    assert result[1].score == pytest.approx(0.625 ** 1.3)
    assert result[0].count == 2


def test_unseen_global_token_counts_as_one(scorer):
    result = scorer.score({"novel": 1}, 1, {}, 10, 10)
    # tf=1, global freq 1/10 -> 10
    assert result[0].score == pytest.approx(10 ** 1.3)


def test_monotonic_raw_score(scorer):
    """Raising a token's local count strictly raises its raw score."""
    global_table = {"kernel": 3, "driver": 7}
    previous = None
    for count in (1, 2, 5, 10, 50):
        local = {"kernel": count, "driver": 4}
        raw = dict(scorer.raw_scores(local, count + 4, global_table, 10))
        if previous is not None:
            assert raw["kernel"] > previous
        previous = raw["kernel"]


def test_limit_is_respected(scorer):
    local = {f"token{i}": i + 1 for i in range(100)}
    assert len(scorer.score(local, sum(local.values()), {}, 0, 7)) == 7


def test_constituent_boost():
    """A word inside several top phrases is boosted above each phrase."""
    store = TokenStatsStore()
    scorer = RelevanceScorer()
    local = {}
    total = store.merge(local, {
        "machine learning": 1, "deep learning": 1, "learning": 1,
    })
    result = scorer.score(local, total, store.tokens, store.total, 10)
    scores = {t.token: t.score for t in result}
    # All raw scores are 1; "learning" sits in two phrases: 1 + 2 * 1.5
    assert scores["learning"] == pytest.approx(4.0 ** 1.3)
    assert scores["machine learning"] == pytest.approx(1.0)
    assert _ranked(result)[0] == "learning"


def test_constituent_counted_once_per_phrase(scorer):
    local = {"echo echo": 1, "echo": 1}
    result = scorer.score(local, 2, local, 2, 10)
    scores = {t.token: t.score for t in result}
    assert scores["echo"] == pytest.approx(2.5 ** 1.3)


def test_stop_words_are_not_boosted(scorer):
    local = {"with kernel": 1, "with": 1, "kernel": 1}
    result = scorer.score(local, 3, local, 3, 10)
    scores = {t.token: t.score for t in result}
    assert scores["with"] == pytest.approx(1.0)
    assert scores["kernel"] == pytest.approx(2.5 ** 1.3)


def test_phrase_separators(scorer):
    """Hyphens and underscores split phrases like spaces do."""
    local = {"state-machine": 1, "state_vector": 1, "state": 1}
    result = scorer.score(local, 3, local, 3, 10)
    scores = {t.token: t.score for t in result}
    assert scores["state"] == pytest.approx(4.0 ** 1.3)


def test_boost_window_limits_phrase_scan():
    """Only phrases inside the boost window contribute."""
    scorer = RelevanceScorer(EngineConfig(boost_window=1))
    local = {"alpha": 1, "beta alpha": 1}
    global_table = {"alpha": 1, "beta alpha": 10}
    result = scorer.score(local, 2, global_table, 11, 10)
    scores = {t.token: t.score for t in result}
    # "beta alpha" ranks second, outside the window, so no boost
    raw_alpha = (1 / 2) / (1 / 11)
    assert scores["alpha"] == pytest.approx(raw_alpha ** 1.3)


def test_ties_keep_observation_order(scorer):
    local = {"zeta": 1, "alpha": 1, "mu": 1}
    result = scorer.score(local, 3, local, 3, 10)
    assert _ranked(result) == ["zeta", "alpha", "mu"]


def test_overridable_constants():
    scorer = RelevanceScorer(
        EngineConfig(constituent_boost=0.0, variance_exponent=1.0),
    )
    local = {"deep learning": 1, "learning": 1}
    result = scorer.score(local, 2, local, 2, 10)
    assert all(t.score == pytest.approx(1.0) for t in result)


def test_scenario_phrase_and_constituents():
    """The phrase stays ranked alongside its boosted constituent words."""
    store = TokenStatsStore(EngineConfig(min_token_length=2))
    scorer = RelevanceScorer(EngineConfig(min_token_length=2))
    local = {}
    total = store.merge(local, {"ai": 5, "model": 5, "ai model": 8})
    result = scorer.score(local, total, store.tokens, store.total, 10)
    scores = {t.token: t.score for t in result}

    assert set(scores) == {"ai", "model", "ai model"}
    # Empty global table before the merge: every raw ratio is 1
    assert scores["ai model"] == pytest.approx(1.0)
    assert scores["ai"] == pytest.approx(2.5 ** 1.3)
    assert scores["model"] == pytest.approx(2.5 ** 1.3)


def test_global_top_ranks_by_count(scorer):
    table = {"kernel": 10, "driver": 30, "module": 20}
    result = scorer.global_top(table, 2)
    assert _ranked(result) == ["driver", "module"]
    assert result[0].score == pytest.approx(30 ** 1.3)
    assert result[0].count == 30


def test_global_top_applies_constituent_boost(scorer):
    table = {"learning": 10, "deep learning": 12, "machine learning": 11}
    result = scorer.global_top(table, 3)
    assert _ranked(result)[0] == "learning"
    assert result[0].score == pytest.approx((10 * 4.0) ** 1.3)
