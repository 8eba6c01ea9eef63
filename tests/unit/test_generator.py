"""
Tests for the outfit candidate generator (src/recs/).

Covers:
- Completeness rules and suggestion texts
- Insufficient / incomplete wardrobes
- Every returned outfit is complete, unique and ranked
- Constraints: include / exclude, slots on/off, min_score
- Sampling path for large wardrobes
- Diversity filter with backfill
"""

import os
import sys
from itertools import combinations

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from config.constants import ScoringConfig
from core.utils import jaccard
from recs.completeness import check_completeness
from recs.generator import (
    GenerationConstraints,
    GenerationStatus,
    OutfitGenerator,
    ScoredOutfit,
    diversify,
    generate,
)
from scoring.models import ClothingCategory, ClothingItem, OutfitCandidate, OutfitScore


def _item(item_id, category, color="black", **kwargs) -> ClothingItem:
    return ClothingItem.create(id=item_id, category=category, color=color, **kwargs)


def _all_open(**kwargs) -> GenerationConstraints:
    """Constraints that keep every candidate (no diversity filtering)."""
    return GenerationConstraints(max_similarity=1.0, **kwargs)


# =====================================================================
# Completeness
# =====================================================================

class TestCompleteness:
    def test_top_bottom_shoes(self, basic_outfit):
        report = check_completeness(basic_outfit)
        assert report.is_complete
        assert report.missing_slots == []

    def test_dress_covers_top_and_bottom(self):
        report = check_completeness([_item("d", "dresses"), _item("s", "shoes")])
        assert report.is_complete

    def test_missing_everything(self):
        report = check_completeness([_item("a", "accessories")])
        assert report.missing_slots == ["top", "bottom", "shoes"]
        assert report.suggestions == [
            "Add a shirt, blouse, or sweater",
            "Add pants, skirt, or shorts",
            "Add appropriate footwear",
        ]

    def test_shoes_optional(self):
        items = [_item("t", "tops"), _item("b", "bottoms")]
        assert not check_completeness(items).is_complete
        assert check_completeness(items, require_shoes=False).is_complete


# =====================================================================
# Generator basics
# =====================================================================

class TestGenerate:
    def test_basic_wardrobe_single_outfit(self, basic_outfit):
        result = generate(basic_outfit, 5)
        assert len(result) == 1
        outfit = result.candidates[0]
        assert outfit.candidate.item_ids == {"top-navy", "jeans-black", "sneakers-white"}
        assert outfit.score.total > 0
        assert outfit.score.breakdown["style_matching"] > 0.7
        assert result.status == GenerationStatus.PARTIAL
        assert result.shortfall == 4

    def test_one_item_is_insufficient(self):
        result = generate([_item("t", "tops")], 3)
        assert list(result) == []
        assert result.status == GenerationStatus.INSUFFICIENT_ITEMS
        assert result.insufficient
        assert result.shortfall == 3

    def test_empty_wardrobe(self):
        result = generate([], 3)
        assert result.status == GenerationStatus.INSUFFICIENT_ITEMS

    def test_zero_count(self, sample_wardrobe):
        result = generate(sample_wardrobe, 0)
        assert result.status == GenerationStatus.OK
        assert len(result) == 0
        assert not result.insufficient

    def test_incomplete_wardrobe(self):
        wardrobe = [_item("t", "tops"), _item("b", "bottoms"), _item("t2", "tops", "white")]
        result = generate(wardrobe, 3)
        assert result.status == GenerationStatus.INCOMPLETE_WARDROBE
        assert result.missing_slots == ["shoes"]
        assert result.insufficient
        assert len(result) == 0

    def test_shoes_not_required(self):
        wardrobe = [_item("t", "tops"), _item("b", "bottoms", "navy")]
        result = generate(wardrobe, 3, constraints=GenerationConstraints(require_shoes=False))
        assert len(result) == 1
        assert result.candidates[0].candidate.item_ids == {"t", "b"}

    def test_unknown_category_items_skipped(self, basic_outfit):
        wardrobe = basic_outfit + [_item("gizmo", "gadgets")]
        result = generate(wardrobe, 5)
        assert len(result) == 1
        assert "gizmo" not in result.candidates[0].candidate.item_ids

    def test_duplicate_wardrobe_ids(self, basic_outfit):
        result = generate(basic_outfit + basic_outfit, 5)
        assert len(result) == 1


class TestGeneratedOutfits:
    def test_every_outfit_complete(self, sample_wardrobe):
        result = generate(sample_wardrobe, 100, constraints=_all_open())
        assert len(result) > 0
        for outfit in result:
            assert check_completeness(outfit.items).is_complete

    def test_all_combinations_evaluated(self, sample_wardrobe):
        # 7 bases x 2 shoes x (none, o1) x (none, a1)
        result = generate(sample_wardrobe, 500, constraints=_all_open())
        assert result.evaluated == 56
        assert len(result) == 56
        assert result.sampled is False
        assert result.status == GenerationStatus.PARTIAL
        assert result.shortfall == 500 - 56

    def test_unique_and_ranked(self, sample_wardrobe):
        result = generate(sample_wardrobe, 50, constraints=_all_open())
        keys = [o.candidate.key for o in result]
        assert len(keys) == len(set(keys))
        ranks = [(-o.score.total, o.candidate.key) for o in result]
        assert ranks == sorted(ranks)

    def test_deterministic(self, sample_wardrobe):
        first = generate(sample_wardrobe, 10)
        second = generate(sample_wardrobe, 10)
        assert [o.candidate.key for o in first] == [o.candidate.key for o in second]

    def test_requested_count_respected(self, sample_wardrobe):
        result = generate(sample_wardrobe, 5)
        assert len(result) == 5
        assert result.status == GenerationStatus.OK
        assert result.shortfall == 0

    def test_no_unwearable_categories(self, sample_wardrobe):
        wardrobe = sample_wardrobe + [_item("pj", "sleepwear"), _item("sw", "swimwear")]
        result = generate(wardrobe, 200, constraints=_all_open())
        for outfit in result:
            assert not outfit.candidate.item_ids & {"pj", "sw"}

    def test_result_to_dict(self, basic_outfit):
        data = generate(basic_outfit, 1).to_dict()
        assert data["status"] == "ok"
        assert data["outfits"][0]["item_ids"] == ["jeans-black", "sneakers-white", "top-navy"]
        assert set(data["outfits"][0]["score"]) == {"total", "breakdown"}


# =====================================================================
# Constraints
# =====================================================================

class TestConstraints:
    def test_exclude_ids(self, sample_wardrobe):
        result = generate(sample_wardrobe, 100, constraints=_all_open(exclude_ids={"t1", "s1"}))
        assert len(result) > 0
        for outfit in result:
            assert not outfit.candidate.item_ids & {"t1", "s1"}

    def test_include_ids(self, sample_wardrobe):
        result = generate(sample_wardrobe, 100, constraints=_all_open(include_ids={"o1", "t3"}))
        assert len(result) > 0
        for outfit in result:
            assert {"o1", "t3"} <= outfit.candidate.item_ids

    def test_unknown_include_id(self, sample_wardrobe):
        result = generate(sample_wardrobe, 3, constraints=GenerationConstraints(include_ids={"nope"}))
        assert len(result) == 0
        assert result.status == GenerationStatus.PARTIAL
        assert result.shortfall == 3

    def test_no_outerwear_or_accessories(self, sample_wardrobe):
        constraints = _all_open(allow_outerwear=False, allow_accessories=False)
        result = generate(sample_wardrobe, 100, constraints=constraints)
        assert len(result) == 14
        for outfit in result:
            cats = set(outfit.candidate.categories)
            assert ClothingCategory.OUTERWEAR not in cats
            assert ClothingCategory.ACCESSORIES not in cats

    def test_min_score_filters_everything(self, sample_wardrobe):
        result = generate(sample_wardrobe, 4, constraints=GenerationConstraints(min_score=0.999))
        assert len(result) == 0
        assert result.status == GenerationStatus.PARTIAL
        assert result.shortfall == 4
        assert result.evaluated > 0

    def test_min_score_threshold(self, sample_wardrobe):
        result = generate(sample_wardrobe, 100, constraints=_all_open(min_score=0.6))
        assert all(o.score.total >= 0.6 for o in result)


# =====================================================================
# Sampling
# =====================================================================

class TestSampling:
    def _generator(self) -> OutfitGenerator:
        return OutfitGenerator(ScoringConfig(exhaustive_limit=10, sample_budget=40))

    def test_sampling_used_above_limit(self, sample_wardrobe):
        result = self._generator().generate(sample_wardrobe, 10, constraints=GenerationConstraints(seed=7))
        assert result.sampled is True
        assert 0 < result.evaluated <= 40
        for outfit in result:
            assert check_completeness(outfit.items).is_complete

    def test_seed_reproducible(self, sample_wardrobe):
        gen = self._generator()
        a = gen.generate(sample_wardrobe, 10, constraints=GenerationConstraints(seed=42))
        b = gen.generate(sample_wardrobe, 10, constraints=GenerationConstraints(seed=42))
        assert [o.candidate.key for o in a] == [o.candidate.key for o in b]


# =====================================================================
# Diversity
# =====================================================================

def _scored(ids, total) -> ScoredOutfit:
    items = [_item(i, "tops") for i in ids]
    return ScoredOutfit(candidate=OutfitCandidate.of(items), score=OutfitScore(total=total))


class TestDiversify:
    def test_skips_near_duplicates(self):
        ranked = [_scored("abc", 0.9), _scored("abd", 0.8), _scored("efg", 0.7)]
        picked = diversify(ranked, 2, max_similarity=0.4)
        assert [o.candidate.key for o in picked] == ["a|b|c", "e|f|g"]

    def test_backfills_in_rank_order(self):
        ranked = [_scored("abc", 0.9), _scored("abd", 0.8), _scored("efg", 0.7)]
        picked = diversify(ranked, 3, max_similarity=0.4)
        assert [o.candidate.key for o in picked] == ["a|b|c", "a|b|d", "e|f|g"]

    def test_generated_results_are_diverse(self, sample_wardrobe):
        result = generate(sample_wardrobe, 3, constraints=GenerationConstraints(max_similarity=0.5))
        assert len(result) == 3
        for a, b in combinations(result.candidates, 2):
            assert jaccard(a.candidate.item_ids, b.candidate.item_ids) <= 0.5


class TestFromSettings:
    def test_settings_drive_limits_and_seed(self, sample_wardrobe):
        from config.settings import get_settings_for_testing

        settings = get_settings_for_testing(
            generator_exhaustive_limit=10,
            generator_sample_budget=30,
            generator_seed=3,
            score_weights={"variety": 0.0},
        )
        gen = OutfitGenerator.from_settings(settings)
        assert gen.default_seed == 3
        assert gen.config.sample_budget == 30
        assert gen.config.weights["variety"] == 0.0

        a = gen.generate(sample_wardrobe, 5)
        b = gen.generate(sample_wardrobe, 5)
        assert a.sampled is True
        assert [o.candidate.key for o in a] == [o.candidate.key for o in b]


class TestUseAllItems:
    def _all_items(self, **kwargs) -> GenerationConstraints:
        return GenerationConstraints(use_all_items=True, **kwargs)

    def test_every_item_worn(self, sample_wardrobe):
        result = generate(sample_wardrobe, 2, constraints=self._all_items())
        worn = set().union(*(o.candidate.item_ids for o in result))
        assert worn == {item.id for item in sample_wardrobe}
        assert result.utilization == 1.0
        assert result.unused_ids == []
        assert result.status == GenerationStatus.OK

    def test_returns_at_least_a_third_of_the_wardrobe(self, sample_wardrobe):
        result = generate(sample_wardrobe, 1, constraints=self._all_items())
        assert len(result) >= 4

    def test_outfits_unique_complete_and_ranked(self, sample_wardrobe):
        result = generate(sample_wardrobe, 20, constraints=self._all_items())
        keys = [o.candidate.key for o in result]
        assert len(keys) == len(set(keys))
        for outfit in result:
            assert check_completeness(outfit.items).is_complete
        ranks = [(-o.score.total, o.candidate.key) for o in result]
        assert ranks == sorted(ranks)

    def test_excluded_items_not_counted(self, sample_wardrobe):
        result = generate(sample_wardrobe, 2, constraints=self._all_items(exclude_ids={"a1"}))
        assert "a1" not in result.unused_ids
        assert result.utilization == 1.0
        for outfit in result:
            assert "a1" not in outfit.candidate.item_ids

    def test_nothing_qualifies(self, sample_wardrobe):
        result = generate(sample_wardrobe, 3, constraints=self._all_items(min_score=0.999))
        assert len(result) == 0
        assert result.utilization == 0.0
        assert sorted(result.unused_ids) == sorted(item.id for item in sample_wardrobe)
        assert result.status == GenerationStatus.PARTIAL
        assert result.shortfall == 3

    def test_to_dict_reports_utilization(self, basic_outfit):
        data = generate(basic_outfit, 1, constraints=self._all_items()).to_dict()
        assert data["utilization"] == 1.0
        assert data["unused_ids"] == []
        assert len(data["outfits"]) == 1

    def test_plain_runs_leave_utilization_unset(self, basic_outfit):
        assert generate(basic_outfit, 1).utilization is None


class TestWardrobeExample:
    def test_three_piece_casual_wardrobe(self):
        every_season = ["spring", "summer", "fall", "winter"]
        wardrobe = [
            _item("top-navy", "tops", "navy", seasons=["fall", "winter"], occasions=["casual"]),
            _item("jeans-black", "bottoms", "black", seasons=every_season, occasions=["casual"],
                  tags=["denim"]),
            _item("sneakers-white", "shoes", "white", seasons=every_season, occasions=["casual"],
                  tags=["sneakers"]),
        ]
        result = generate(wardrobe, 1)
        assert result.status == GenerationStatus.OK
        assert len(result) == 1
        outfit = result.candidates[0]
        assert outfit.candidate.item_ids == {"top-navy", "jeans-black", "sneakers-white"}
        assert outfit.score.total > 0
        assert outfit.score.breakdown["style_matching"] > 0.7
