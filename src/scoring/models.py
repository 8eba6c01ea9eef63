"""
Wardrobe and score types the engine operates on.

``ClothingItem`` instances are owned by the wardrobe store; the engine
only reads them.  ``OutfitCandidate`` and ``OutfitScore`` are built per
call and handed back to the caller.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from core.logging import get_logger
from scoring.context import Occasion, Season

logger = get_logger(__name__)


class ClothingCategory(str, Enum):
    TOPS = "tops"
    BOTTOMS = "bottoms"
    DRESSES = "dresses"
    OUTERWEAR = "outerwear"
    SHOES = "shoes"
    ACCESSORIES = "accessories"
    UNDERWEAR = "underwear"
    ACTIVEWEAR = "activewear"
    SLEEPWEAR = "sleepwear"
    SWIMWEAR = "swimwear"


class Dimension(str, Enum):
    """Scored aspects of outfit compatibility (breakdown keys)."""
    COLOR_HARMONY = "color_harmony"
    STYLE_MATCHING = "style_matching"
    SEASON_SUITABILITY = "season_suitability"
    OCCASION_SUITABILITY = "occasion_suitability"
    WEATHER = "weather"
    USER_PREFERENCE = "user_preference"
    VARIETY = "variety"


REQUIRED_DIMENSIONS: Tuple[Dimension, ...] = (
    Dimension.COLOR_HARMONY,
    Dimension.STYLE_MATCHING,
    Dimension.SEASON_SUITABILITY,
    Dimension.OCCASION_SUITABILITY,
)
OPTIONAL_DIMENSIONS: Tuple[Dimension, ...] = (
    Dimension.WEATHER,
    Dimension.USER_PREFERENCE,
    Dimension.VARIETY,
)


def _coerce_enum_set(values: Any, enum_cls) -> FrozenSet:
    """Map raw strings onto enum members, dropping anything unknown."""
    if values is None:
        return frozenset()
    if isinstance(values, (str, enum_cls)):
        values = [values]
    out = set()
    for v in values:
        if isinstance(v, enum_cls):
            out.add(v)
            continue
        if not isinstance(v, str):
            continue
        try:
            out.add(enum_cls(v.strip().lower()))
        except ValueError:
            logger.debug("unknown_enum_value", enum=enum_cls.__name__, value=v)
    return frozenset(out)


def _coerce_tags(values: Any) -> FrozenSet[str]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        values = [values]
    return frozenset(t.strip() for t in values if isinstance(t, str) and t.strip())


def _coerce_category(value: Any) -> Optional[ClothingCategory]:
    if isinstance(value, ClothingCategory):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return ClothingCategory(value.strip().lower())
        except ValueError:
            pass
    logger.debug("unknown_category", value=value)
    return None


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.debug("bad_timestamp", value=value)
    return None


@dataclass(frozen=True)
class ClothingItem:
    """
    One wardrobe piece.

    ``category`` is ``None`` only for rows whose category could not be
    recognised; such items still score (with neutral values) but are
    never placed in a generated outfit.
    """
    id: str
    category: Optional[ClothingCategory]
    color: str
    name: str = ""
    subcategory: str = ""
    seasons: FrozenSet[Season] = frozenset()
    occasions: FrozenSet[Occasion] = frozenset()
    tags: FrozenSet[str] = frozenset()
    brand: Optional[str] = None
    size: Optional[str] = None
    price: Optional[float] = None
    is_favorite: bool = False
    times_worn: int = 0
    last_worn: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        id: str,
        category: Any,
        color: str,
        seasons: Iterable[Any] = (),
        occasions: Iterable[Any] = (),
        tags: Iterable[str] = (),
        **kwargs: Any,
    ) -> "ClothingItem":
        """Build an item from loose values (strings or enum members)."""
        return cls(
            id=str(id),
            category=_coerce_category(category),
            color=color if isinstance(color, str) else "",
            seasons=_coerce_enum_set(seasons, Season),
            occasions=_coerce_enum_set(occasions, Occasion),
            tags=_coerce_tags(tags),
            **kwargs,
        )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ClothingItem":
        """Build an item from a ``clothing_items`` row."""
        price = row.get("price")
        return cls.create(
            id=row["id"],
            category=row.get("category"),
            color=row.get("color") or "",
            name=row.get("name") or "",
            subcategory=row.get("subcategory") or "",
            seasons=row.get("seasons") or row.get("season") or (),
            occasions=row.get("occasions") or row.get("occasion") or (),
            tags=row.get("tags") or (),
            brand=row.get("brand"),
            size=row.get("size"),
            price=float(price) if price is not None else None,
            is_favorite=bool(row.get("is_favorite", False)),
            times_worn=int(row.get("times_worn") or 0),
            last_worn=_parse_timestamp(row.get("last_worn")),
        )

    @property
    def is_usable(self) -> bool:
        return self.category is not None


@dataclass(frozen=True)
class OutfitCandidate:
    """A combination of distinct items under evaluation."""
    items: Tuple[ClothingItem, ...]

    def __post_init__(self) -> None:
        ids = [item.id for item in self.items]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate item ids in outfit: {sorted(ids)}")

    @classmethod
    def of(cls, items: Iterable[ClothingItem]) -> "OutfitCandidate":
        return cls(items=tuple(items))

    @property
    def item_ids(self) -> FrozenSet[str]:
        return frozenset(item.id for item in self.items)

    @property
    def key(self) -> str:
        """Order-independent identity of the combination."""
        return "|".join(sorted(self.item_ids))

    @property
    def categories(self) -> List[Optional[ClothingCategory]]:
        return [item.category for item in self.items]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


@dataclass
class OutfitScore:
    """
    Weighted total plus the per-dimension breakdown.

    Optional dimensions appear in ``breakdown`` only when computed, so
    ``"weather" not in score.breakdown`` means "no weather supplied",
    never "scored zero".
    """
    total: float
    breakdown: Dict[str, float] = field(default_factory=dict)

    def get(self, dimension: Any, default: Optional[float] = None) -> Optional[float]:
        key = dimension.value if isinstance(dimension, Dimension) else dimension
        return self.breakdown.get(key, default)

    def has(self, dimension: Any) -> bool:
        key = dimension.value if isinstance(dimension, Dimension) else dimension
        return key in self.breakdown

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": round(self.total, 4),
            "breakdown": {k: round(v, 4) for k, v in self.breakdown.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OutfitScore":
        breakdown = data.get("breakdown") or {}
        return cls(
            total=float(data.get("total", 0.0)),
            breakdown={str(k): float(v) for k, v in breakdown.items() if v is not None},
        )
