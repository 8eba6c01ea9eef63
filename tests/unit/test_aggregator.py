"""
Tests for score aggregation and the OutfitScorer orchestrator.

Covers:
- aggregate: renormalized weights, missing dimensions, clamping, rounding
- score_outfit: end-to-end pipeline, optional dimensions, failing scorers
- OutfitScorer.explain: weights used and coverage
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

import scoring.aggregator as aggregator
from config.constants import DEFAULT_SCORING_CONFIG, DEFAULT_WEIGHTS
from scoring.aggregator import aggregate, score_outfit
from scoring.context import (
    Occasion,
    OutfitHistoryEntry,
    ScoreContext,
    UserPreferences,
    WeatherContext,
)
from scoring.models import Dimension, OutfitScore
from scoring.scorer import OutfitScorer

REQUIRED = {"color_harmony", "style_matching", "season_suitability", "occasion_suitability"}


# =====================================================================
# aggregate
# =====================================================================

class TestAggregate:
    def test_renormalizes_over_present_dimensions(self):
        score = aggregate({"color_harmony": 0.8, "style_matching": 1.0, "weather": None})
        assert score.total == pytest.approx(0.9)
        assert score.breakdown == {"color_harmony": 0.8, "style_matching": 1.0}

    def test_all_dimensions(self):
        scores = {key: 0.5 for key in DEFAULT_WEIGHTS}
        assert aggregate(scores).total == pytest.approx(0.5)

    def test_missing_dimension_not_zero(self):
        with_weather = aggregate({"color_harmony": 1.0, "weather": 0.0})
        without = aggregate({"color_harmony": 1.0, "weather": None})
        assert without.total > with_weather.total
        assert "weather" not in without.breakdown

    def test_no_weighted_dimension(self):
        score = aggregate({"unknown": 0.5})
        assert score.total == 0.0
        assert score.breakdown == {"unknown": 0.5}
        assert aggregate({}).total == 0.0

    def test_zero_weight_kept_in_breakdown(self):
        score = aggregate({"color_harmony": 0.2, "variety": 1.0}, weights={"color_harmony": 1.0, "variety": 0.0})
        assert score.total == pytest.approx(0.2)
        assert score.breakdown["variety"] == 1.0

    def test_clamped_and_rounded(self):
        score = aggregate({"color_harmony": 1.7, "style_matching": 0.123456})
        assert score.breakdown["color_harmony"] == 1.0
        assert score.breakdown["style_matching"] == 0.1235
        assert 0.0 <= score.total <= 1.0

    def test_accepts_dimension_keys(self):
        score = aggregate({Dimension.COLOR_HARMONY: 0.6})
        assert score.breakdown == {"color_harmony": 0.6}

    def test_deterministic(self):
        scores = {"color_harmony": 0.71, "style_matching": 0.42, "variety": 0.9}
        assert aggregate(scores) == aggregate(dict(scores))


# =====================================================================
# score_outfit
# =====================================================================

class TestScoreOutfit:
    def test_empty_items(self):
        score = score_outfit([])
        assert score == OutfitScore(total=0.0, breakdown={})

    def test_required_dimensions_only(self, basic_outfit):
        score = score_outfit(basic_outfit)
        assert set(score.breakdown) == REQUIRED
        assert "weather" not in score.breakdown
        assert score.total > 0

    def test_optional_dimensions_when_supplied(self, basic_outfit):
        ctx = ScoreContext(
            occasion=Occasion.CASUAL,
            weather=WeatherContext(temperature_c=15),
            preferences=UserPreferences(),
            history=[],
        )
        score = score_outfit(basic_outfit, ctx)
        assert set(score.breakdown) == set(DEFAULT_WEIGHTS)
        assert score.breakdown["variety"] == 1.0

    def test_duplicate_ids_collapsed(self, basic_outfit):
        duplicated = basic_outfit + [basic_outfit[0]]
        assert score_outfit(duplicated) == score_outfit(basic_outfit)

    def test_single_item(self, item_factory):
        score = score_outfit([item_factory("a", "tops", "red")])
        assert score.breakdown["color_harmony"] == 0.75
        assert score.breakdown["style_matching"] == 1.0

    def test_failing_scorer_is_dropped(self, basic_outfit, monkeypatch):
        def boom(items, context, config):
            raise RuntimeError("scorer exploded")

        scorers = tuple(
            (dim, boom if dim == Dimension.COLOR_HARMONY else fn)
            for dim, fn in aggregator.DIMENSION_SCORERS
        )
        monkeypatch.setattr(aggregator, "DIMENSION_SCORERS", scorers)

        score = score_outfit(basic_outfit)
        assert "color_harmony" not in score.breakdown
        assert score.total > 0

    def test_custom_weights(self, basic_outfit):
        config = DEFAULT_SCORING_CONFIG.with_weights(
            color_harmony=1.0, style_matching=0.0, season_suitability=0.0, occasion_suitability=0.0,
        )
        score = score_outfit(basic_outfit, config=config)
        assert score.total == pytest.approx(score.breakdown["color_harmony"], abs=1e-4)

    def test_total_in_unit_interval(self, sample_wardrobe):
        ctx = ScoreContext(
            weather=WeatherContext(temperature_c=-3, condition="snow"),
            preferences=UserPreferences(formality=0.9, boldness=0.1),
            history=[OutfitHistoryEntry.of(["t1", "b1", "s1"])],
        )
        score = score_outfit(sample_wardrobe, ctx)
        assert 0.0 <= score.total <= 1.0
        assert all(0.0 <= v <= 1.0 for v in score.breakdown.values())


# =====================================================================
# OutfitScorer
# =====================================================================

class TestOutfitScorer:
    def test_matches_score_outfit(self, basic_outfit):
        assert OutfitScorer().score(basic_outfit) == score_outfit(basic_outfit)

    def test_score_many(self, basic_outfit):
        scores = OutfitScorer().score_many([basic_outfit, basic_outfit[:1], []])
        assert len(scores) == 3
        assert scores[2].total == 0.0

    def test_explain_reports_coverage(self, basic_outfit):
        report = OutfitScorer().explain(basic_outfit)
        assert report["coverage"] == pytest.approx(0.8)
        assert report["missing_dimensions"] == ["user_preference", "variety", "weather"]
        assert set(report["weights_used"]) == REQUIRED
        assert report["tier"] in {"excellent", "good", "fair", "poor"}

    def test_explain_full_coverage(self, basic_outfit):
        ctx = ScoreContext(
            weather=WeatherContext(temperature_c=20),
            preferences=UserPreferences(),
            history=[],
        )
        report = OutfitScorer().explain(basic_outfit, ctx)
        assert report["coverage"] == pytest.approx(1.0)
        assert report["missing_dimensions"] == []
