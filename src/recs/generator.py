"""
Outfit Candidate Generator.

Builds ranked, complete outfits from a wardrobe snapshot.

Pipeline:
  1. Filter      - drop unusable items (unknown category, repeated ids,
                   caller exclusions)
  2. Partition   - group by category, build bases (top x bottom, dress)
  3. Slots       - shoes (required unless switched off), optional
                   outerwear, optional accessory
  4. Enumerate   - ``itertools.product`` when the combination count is
                   within ``exhaustive_limit``; otherwise a seeded random
                   sample of ``sample_budget`` combinations
  5. Complete?   - incomplete combinations are rejected before scoring
  6. Score       - OutfitScorer, then ``min_score`` filter
  7. Rank        - total desc, key asc (deterministic)
  8. Diversify   - greedy filter on item-set similarity, backfilled
                   from the ranked list when too few survive

With ``use_all_items`` steps 3-7 run once per usable item with that item
pinned, and selection first covers every item that made it into some
qualifying outfit before filling up to ``max(count, ceil(n / 3))``.

"No good combination" is reported through ``GenerationResult.status``,
never raised.
"""

import itertools
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from config.constants import DEFAULT_SCORING_CONFIG, ScoringConfig
from core.logging import get_logger
from core.utils import convert_numpy, jaccard
from recs.completeness import check_completeness
from scoring.context import ScoreContext
from scoring.models import ClothingCategory, ClothingItem, OutfitCandidate, OutfitScore
from scoring.scorer import OutfitScorer

logger = get_logger(__name__)

MIN_USABLE_ITEMS = 2


class GenerationStatus(str, Enum):
    OK = "ok"
    PARTIAL = "partial"
    INSUFFICIENT_ITEMS = "insufficient_items"
    INCOMPLETE_WARDROBE = "incomplete_wardrobe"


@dataclass
class GenerationConstraints:
    """Caller restrictions on which combinations may be produced."""
    exclude_ids: FrozenSet[str] = frozenset()
    include_ids: FrozenSet[str] = frozenset()   # every candidate must contain these
    require_shoes: bool = True
    allow_outerwear: bool = True
    allow_accessories: bool = True
    min_score: float = 0.0
    max_similarity: float = 0.7                 # item-set Jaccard between results
    seed: Optional[int] = None                  # sampling RNG seed
    use_all_items: bool = False                 # every usable item in at least one outfit

    def __post_init__(self) -> None:
        self.exclude_ids = frozenset(str(i) for i in self.exclude_ids)
        self.include_ids = frozenset(str(i) for i in self.include_ids)


@dataclass
class ScoredOutfit:
    candidate: OutfitCandidate
    score: OutfitScore

    @property
    def items(self) -> Tuple[ClothingItem, ...]:
        return self.candidate.items

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item_ids": sorted(self.candidate.item_ids),
            "categories": [c.value for c in self.candidate.categories if c is not None],
            "score": self.score.to_dict(),
        }


@dataclass
class GenerationResult:
    candidates: List[ScoredOutfit] = field(default_factory=list)
    status: GenerationStatus = GenerationStatus.OK
    requested: int = 0
    shortfall: int = 0
    missing_slots: List[str] = field(default_factory=list)
    evaluated: int = 0
    sampled: bool = False
    utilization: Optional[float] = None         # set by use_all_items runs only
    unused_ids: List[str] = field(default_factory=list)

    @property
    def insufficient(self) -> bool:
        return self.status in (GenerationStatus.INSUFFICIENT_ITEMS, GenerationStatus.INCOMPLETE_WARDROBE)

    def __len__(self) -> int:
        return len(self.candidates)

    def __iter__(self) -> Iterator[ScoredOutfit]:
        return iter(self.candidates)

    def to_dict(self) -> Dict[str, Any]:
        return convert_numpy({
            "status": self.status.value,
            "requested": self.requested,
            "shortfall": self.shortfall,
            "missing_slots": list(self.missing_slots),
            "evaluated": self.evaluated,
            "sampled": self.sampled,
            "utilization": self.utilization,
            "unused_ids": list(self.unused_ids),
            "outfits": [c.to_dict() for c in self.candidates],
        })


# =============================================================================
# Helpers
# =============================================================================

def _usable_items(wardrobe: Iterable[ClothingItem], exclude_ids: FrozenSet[str]) -> List[ClothingItem]:
    seen = set()
    usable = []
    for item in wardrobe:
        if not item.is_usable or item.id in exclude_ids or item.id in seen:
            continue
        seen.add(item.id)
        usable.append(item)
    return usable


def _partition(items: Sequence[ClothingItem]) -> Dict[ClothingCategory, List[ClothingItem]]:
    groups: Dict[ClothingCategory, List[ClothingItem]] = {}
    for item in items:
        groups.setdefault(item.category, []).append(item)
    return groups


def _restrict(options: List[ClothingItem], include_ids: FrozenSet[str]) -> List[ClothingItem]:
    """Pinned items replace the rest of their category."""
    pinned = [item for item in options if item.id in include_ids]
    return pinned or options


def diversify(
    ranked: Sequence[ScoredOutfit],
    count: int,
    max_similarity: float,
) -> List[ScoredOutfit]:
    """
    Greedy diversity filter over an already ranked list.

    Takes candidates in rank order, skipping any whose item set is more
    similar than ``max_similarity`` to one already taken; if that leaves
    fewer than ``count``, the skipped ones are added back in rank order.
    """
    selected: List[ScoredOutfit] = []
    for outfit in ranked:
        if len(selected) >= count:
            break
        ids = outfit.candidate.item_ids
        if all(jaccard(ids, s.candidate.item_ids) <= max_similarity for s in selected):
            selected.append(outfit)

    if len(selected) < count:
        picked = {s.candidate.key for s in selected}
        for outfit in ranked:
            if len(selected) >= count:
                break
            if outfit.candidate.key not in picked:
                selected.append(outfit)
                picked.add(outfit.candidate.key)
        # keep rank order after backfill
        order = {o.candidate.key: i for i, o in enumerate(ranked)}
        selected.sort(key=lambda o: order[o.candidate.key])
    return selected


# =============================================================================
# Generator
# =============================================================================

class OutfitGenerator:
    """
    Generates ranked outfit candidates.

    Stateless apart from its config; the only randomness is the
    sampling RNG, seeded per call from the constraints (falling back
    to ``default_seed``).
    """

    def __init__(self, config: Optional[ScoringConfig] = None, default_seed: Optional[int] = None) -> None:
        self.config = config or DEFAULT_SCORING_CONFIG
        self.default_seed = default_seed
        self.scorer = OutfitScorer(self.config)

    @classmethod
    def from_settings(cls, settings=None) -> "OutfitGenerator":
        if settings is None:
            from config.settings import get_settings
            settings = get_settings()
        return cls(settings.scoring_config(), default_seed=settings.generator_seed)

    def generate(
        self,
        wardrobe: Iterable[ClothingItem],
        count: int,
        context: Optional[ScoreContext] = None,
        constraints: Optional[GenerationConstraints] = None,
    ) -> GenerationResult:
        constraints = constraints or GenerationConstraints()
        if count < 1:
            return GenerationResult(status=GenerationStatus.OK, requested=count)

        usable = _usable_items(wardrobe, constraints.exclude_ids)
        if len(usable) < MIN_USABLE_ITEMS:
            logger.info("outfit_generation_insufficient", usable=len(usable), requested=count)
            return GenerationResult(
                status=GenerationStatus.INSUFFICIENT_ITEMS,
                requested=count,
                shortfall=count,
            )

        report = check_completeness(usable, require_shoes=constraints.require_shoes)
        if not report.is_complete:
            logger.info("outfit_generation_incomplete", missing=report.missing_slots, requested=count)
            return GenerationResult(
                status=GenerationStatus.INCOMPLETE_WARDROBE,
                requested=count,
                shortfall=count,
                missing_slots=report.missing_slots,
            )

        missing_pins = constraints.include_ids - {item.id for item in usable}
        if missing_pins:
            logger.warning("outfit_generation_unknown_includes", include_ids=sorted(missing_pins))
            return GenerationResult(status=GenerationStatus.PARTIAL, requested=count, shortfall=count)

        seed = constraints.seed if constraints.seed is not None else self.default_seed
        if constraints.use_all_items:
            return self._generate_all_items(usable, count, context, constraints, seed)

        scored, evaluated, sampled = self._score_combinations(
            usable, constraints.include_ids, context, constraints, seed
        )
        selected = diversify(scored, count, constraints.max_similarity)

        shortfall = count - len(selected)
        result = GenerationResult(
            candidates=selected,
            status=GenerationStatus.OK if shortfall == 0 else GenerationStatus.PARTIAL,
            requested=count,
            shortfall=shortfall,
            evaluated=evaluated,
            sampled=sampled,
        )
        logger.info(
            "outfits_generated",
            requested=count,
            count=len(selected),
            status=result.status.value,
            evaluated=evaluated,
            sampled=sampled,
        )
        return result

    def _score_combinations(
        self,
        usable: Sequence[ClothingItem],
        pins: FrozenSet[str],
        context: Optional[ScoreContext],
        constraints: GenerationConstraints,
        seed: Optional[int],
    ) -> Tuple[List[ScoredOutfit], int, bool]:
        """Ranked, de-duplicated outfits containing every id in ``pins``."""
        slots = self._build_slots(usable, pins, constraints)
        combos, sampled = self._enumerate(slots, seed)

        scored: List[ScoredOutfit] = []
        seen_keys = set()
        evaluated = 0
        for combo in combos:
            items = [item for part in combo for item in part]
            if not pins <= {item.id for item in items}:
                continue
            if not check_completeness(items, require_shoes=constraints.require_shoes).is_complete:
                continue
            candidate = OutfitCandidate.of(items)
            if candidate.key in seen_keys:
                continue
            seen_keys.add(candidate.key)

            score = self.scorer.score(candidate.items, context)
            evaluated += 1
            if score.total < constraints.min_score:
                continue
            scored.append(ScoredOutfit(candidate=candidate, score=score))

        scored.sort(key=lambda s: (-s.score.total, s.candidate.key))
        return scored, evaluated, sampled

    def _generate_all_items(
        self,
        usable: Sequence[ClothingItem],
        count: int,
        context: Optional[ScoreContext],
        constraints: GenerationConstraints,
        seed: Optional[int],
    ) -> GenerationResult:
        """Build outfits around each usable item in turn so every item gets worn."""
        pool: Dict[str, ScoredOutfit] = {}
        evaluated = 0
        sampled = False
        for star in usable:
            scored, star_evaluated, star_sampled = self._score_combinations(
                usable, constraints.include_ids | {star.id}, context, constraints, seed
            )
            evaluated += star_evaluated
            sampled = sampled or star_sampled
            for outfit in scored:
                pool.setdefault(outfit.candidate.key, outfit)

        ranked = sorted(pool.values(), key=lambda s: (-s.score.total, s.candidate.key))
        target = max(count, math.ceil(len(usable) / 3))

        # best outfit per uncovered item first, then the rest of the ranking
        selected: List[ScoredOutfit] = []
        picked = set()
        covered = set()
        for star in usable:
            if star.id in covered:
                continue
            best = next((o for o in ranked if star.id in o.candidate.item_ids), None)
            if best is None:
                continue
            selected.append(best)
            picked.add(best.candidate.key)
            covered |= best.candidate.item_ids
        for outfit in ranked:
            if len(selected) >= target:
                break
            if outfit.candidate.key not in picked:
                selected.append(outfit)
                picked.add(outfit.candidate.key)
        selected.sort(key=lambda s: (-s.score.total, s.candidate.key))

        worn = set().union(*(o.candidate.item_ids for o in selected))
        unused = [item.id for item in usable if item.id not in worn]
        shortfall = max(0, count - len(selected))
        result = GenerationResult(
            candidates=selected,
            status=GenerationStatus.OK if shortfall == 0 else GenerationStatus.PARTIAL,
            requested=count,
            shortfall=shortfall,
            evaluated=evaluated,
            sampled=sampled,
            utilization=(len(usable) - len(unused)) / len(usable),
            unused_ids=unused,
        )
        logger.info(
            "outfits_generated_all_items",
            requested=count,
            count=len(selected),
            status=result.status.value,
            utilization=round(result.utilization, 3),
            unused=len(unused),
        )
        return result

    # ── Slots ─────────────────────────────────────────────────────

    def _build_slots(
        self,
        usable: Sequence[ClothingItem],
        pins: FrozenSet[str],
        constraints: GenerationConstraints,
    ) -> List[List[Tuple[ClothingItem, ...]]]:
        """Option lists per slot; each option is a tuple of items (possibly empty)."""
        groups = _partition(usable)

        def options(category: ClothingCategory) -> List[ClothingItem]:
            return _restrict(groups.get(category, []), pins)

        bases: List[Tuple[ClothingItem, ...]] = [
            (top, bottom)
            for top in options(ClothingCategory.TOPS)
            for bottom in options(ClothingCategory.BOTTOMS)
        ]
        bases.extend((dress,) for dress in options(ClothingCategory.DRESSES))

        shoes: List[Tuple[ClothingItem, ...]] = [(s,) for s in options(ClothingCategory.SHOES)]
        if not constraints.require_shoes:
            shoes.insert(0, ())

        outerwear: List[Tuple[ClothingItem, ...]] = [()]
        if constraints.allow_outerwear:
            outerwear.extend((o,) for o in options(ClothingCategory.OUTERWEAR))

        accessories: List[Tuple[ClothingItem, ...]] = [()]
        if constraints.allow_accessories and self.config.max_accessories > 0:
            pool = options(ClothingCategory.ACCESSORIES)
            for size in range(1, self.config.max_accessories + 1):
                accessories.extend(itertools.combinations(pool, size))

        return [bases, shoes, outerwear, accessories]

    # ── Enumeration ───────────────────────────────────────────────

    def _enumerate(
        self,
        slots: List[List[Tuple[ClothingItem, ...]]],
        seed: Optional[int],
    ) -> Tuple[Iterable[Tuple[Tuple[ClothingItem, ...], ...]], bool]:
        sizes = [len(options) for options in slots]
        total = int(np.prod(sizes, dtype=np.int64)) if sizes else 0
        if total == 0:
            return [], False
        if total <= self.config.exhaustive_limit:
            return itertools.product(*slots), False

        rng = np.random.default_rng(seed)
        picks = np.stack(
            [rng.integers(0, size, size=self.config.sample_budget) for size in sizes],
            axis=1,
        )
        logger.debug("outfit_generation_sampling", combinations=total, budget=self.config.sample_budget)
        combos = [
            tuple(slots[slot][int(idx)] for slot, idx in enumerate(row))
            for row in picks
        ]
        return combos, True


def generate(
    wardrobe: Iterable[ClothingItem],
    count: int,
    context: Optional[ScoreContext] = None,
    constraints: Optional[GenerationConstraints] = None,
    config: Optional[ScoringConfig] = None,
) -> GenerationResult:
    """Module-level shortcut for ``OutfitGenerator(config).generate(...)``."""
    return OutfitGenerator(config).generate(wardrobe, count, context, constraints)
