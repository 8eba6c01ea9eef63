"""
Scoring context dataclasses.

Everything the caller may supply on top of the items themselves.  Each
field is optional; a missing field disables the dimension that needs it
(weather -> ``weather``, preferences -> ``user_preference``,
history -> ``variety``) instead of scoring it as zero.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import FrozenSet, List, Optional, Sequence


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"


class Occasion(str, Enum):
    CASUAL = "casual"
    WORK = "work"
    FORMAL = "formal"
    PARTY = "party"
    SPORT = "sport"
    TRAVEL = "travel"
    DATE = "date"
    SPECIAL = "special"


_WET_CONDITIONS = frozenset({"rain", "rainy", "drizzle", "thunderstorm", "snow", "snowy", "sleet"})
_WINDY_CONDITIONS = frozenset({"wind", "windy", "squall", "tornado"})

# Above this wind speed layering / windproof pieces matter
WINDY_THRESHOLD_KMH = 20.0
# Probability of precipitation that counts as a wet day
WET_PRECIPITATION_THRESHOLD = 0.5


@dataclass
class WeatherContext:
    """Weather snapshot for the place and day the outfit is worn."""
    temperature_c: float
    condition: str = "clear"            # "clear", "clouds", "rain", "snow", "windy", ...
    feels_like_c: Optional[float] = None
    temp_min_c: Optional[float] = None
    temp_max_c: Optional[float] = None
    precipitation: float = 0.0          # probability 0-1
    humidity: float = 0.5               # 0-1
    wind_speed_kmh: float = 0.0

    @property
    def effective_temp_c(self) -> float:
        """Temperature used for banding (feels-like wins when known)."""
        if self.feels_like_c is not None:
            return self.feels_like_c
        return self.temperature_c

    @property
    def temperature_spread(self) -> float:
        if self.temp_min_c is None or self.temp_max_c is None:
            return 0.0
        return max(0.0, self.temp_max_c - self.temp_min_c)

    @property
    def is_wet(self) -> bool:
        return (
            self.precipitation > WET_PRECIPITATION_THRESHOLD
            or (self.condition or "").lower() in _WET_CONDITIONS
        )

    @property
    def is_windy(self) -> bool:
        return (
            self.wind_speed_kmh > WINDY_THRESHOLD_KMH
            or (self.condition or "").lower() in _WINDY_CONDITIONS
        )


@dataclass
class UserPreferences:
    """Preference vector; each axis in [0, 1]."""
    formality: float = 0.5       # casual -> formal
    boldness: float = 0.5        # conservative -> bold
    layering: float = 0.5        # minimal -> maximal
    colorfulness: float = 0.5    # monochrome -> colorful
    preferred_colors: List[str] = field(default_factory=list)

    def as_vector(self) -> List[float]:
        return [self.formality, self.boldness, self.layering, self.colorfulness]


@dataclass(frozen=True)
class OutfitHistoryEntry:
    """A recently generated or worn combination."""
    item_ids: FrozenSet[str]
    occurred_at: Optional[datetime] = None

    @classmethod
    def of(cls, item_ids, occurred_at: Optional[datetime] = None) -> "OutfitHistoryEntry":
        return cls(item_ids=frozenset(str(i) for i in item_ids), occurred_at=occurred_at)


@dataclass
class ScoreContext:
    """
    Caller-supplied scoring context.  Built per request and passed
    through to every scorer; never mutated by the engine.
    """
    occasion: Optional[Occasion] = None
    season: Optional[Season] = None
    weather: Optional[WeatherContext] = None
    preferences: Optional[UserPreferences] = None
    history: Optional[Sequence[OutfitHistoryEntry]] = None
    reference_time: Optional[datetime] = None
