"""
Context Resolver -- builds ScoreContext from available data sources.

**Weather**
    1. In-memory cache (TTL per city, ``weather_cache_ttl_seconds``)
    2. OpenWeatherMap current-weather API
    3. Fallback: no weather at all (the weather dimension is skipped)

**Season**
    Explicit season wins; otherwise derived from the date and the
    hemisphere of the user's country.
"""

import threading
import time
from datetime import date
from typing import Any, Dict, Optional, Sequence, Tuple

import requests

from core.logging import get_logger
from core.utils import safe_get
from scoring.context import (
    Occasion,
    OutfitHistoryEntry,
    ScoreContext,
    Season,
    UserPreferences,
    WeatherContext,
)

logger = get_logger(__name__)

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"

_MPS_TO_KMH = 3.6

# ── Southern-hemisphere countries (ISO-2 and full names) ──────────
_SOUTHERN_COUNTRIES = frozenset({
    "au", "australia", "nz", "new zealand", "za", "south africa",
    "ar", "argentina", "br", "brazil", "cl", "chile", "py", "paraguay",
    "uy", "uruguay", "pe", "peru", "bw", "botswana", "mz", "mozambique",
    "mg", "madagascar", "na", "namibia", "zw", "zimbabwe",
    "id", "indonesia", "fj", "fiji",
})

_WET_MAIN_CONDITIONS = frozenset({"rain", "drizzle", "thunderstorm", "snow"})


def _coerce_enum(value: Any, enum_cls):
    """Enum member for a loose value, or ``None`` when it is empty or unknown."""
    if value is None or isinstance(value, enum_cls):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        logger.debug("unknown_enum_value", enum=enum_cls.__name__, value=value)
        return None


class ContextResolver:
    """
    Builds :class:`ScoreContext` objects for scoring requests.

    Thread-safe.  Designed to be instantiated once per application
    lifetime and reused across requests.
    """

    def __init__(
        self,
        weather_api_key: str = "",
        cache_ttl_seconds: float = 600,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._weather_api_key = weather_api_key
        self._ttl = cache_ttl_seconds
        self._timeout = timeout_seconds
        # {cache_key: (timestamp, WeatherContext)}
        self._weather_cache: Dict[str, Tuple[float, WeatherContext]] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings=None) -> "ContextResolver":
        if settings is None:
            from config.settings import get_settings
            settings = get_settings()
        return cls(
            weather_api_key=settings.openweather_api_key or "",
            cache_ttl_seconds=settings.weather_cache_ttl_seconds,
            timeout_seconds=settings.weather_request_timeout_seconds,
        )

    # ── Public API ────────────────────────────────────────────────

    def build_context(
        self,
        occasion: Optional[Any] = None,
        season: Optional[Any] = None,
        city: Optional[str] = None,
        country: Optional[str] = None,
        preferences: Optional[UserPreferences] = None,
        history: Optional[Sequence[OutfitHistoryEntry]] = None,
        on_date: Optional[date] = None,
    ) -> ScoreContext:
        """
        Assemble a :class:`ScoreContext`.

        Best-effort: anything that cannot be resolved stays ``None`` and
        the matching dimension is skipped.
        """
        ctx = ScoreContext(
            occasion=_coerce_enum(occasion, Occasion),
            season=_coerce_enum(season, Season),
            preferences=preferences,
            history=history,
        )
        if ctx.season is None and country:
            ctx.season = season_for_date(on_date or date.today(), country)
        if city:
            ctx.weather = self.resolve_weather(city, country)
        return ctx

    def resolve_weather(self, city: str, country: Optional[str] = None) -> Optional[WeatherContext]:
        """Current weather for a city, or ``None`` when unavailable."""
        if not self._weather_api_key:
            return None

        cache_key = f"{city}:{country or ''}".lower()
        with self._lock:
            cached = self._weather_cache.get(cache_key)
        if cached and (time.time() - cached[0]) < self._ttl:
            return cached[1]

        try:
            weather = _fetch_openweathermap(city, country, self._weather_api_key, self._timeout)
        except (requests.RequestException, KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning("weather_lookup_failed", city=city, country=country, error=str(exc))
            return None

        with self._lock:
            self._weather_cache[cache_key] = (time.time(), weather)
        return weather

    def clear_cache(self) -> None:
        with self._lock:
            self._weather_cache.clear()


# ── Pure helpers (no I/O, easily testable) ────────────────────────

def season_for_date(on_date: date, country: Optional[str] = None) -> Season:
    """Meteorological season for a date, flipped for the southern hemisphere."""
    month = on_date.month
    southern = (country or "").lower().strip() in _SOUTHERN_COUNTRIES

    if month in (12, 1, 2):
        season = Season.WINTER
    elif month in (3, 4, 5):
        season = Season.SPRING
    elif month in (6, 7, 8):
        season = Season.SUMMER
    else:
        season = Season.FALL

    if southern:
        return {
            Season.WINTER: Season.SUMMER,
            Season.SUMMER: Season.WINTER,
            Season.SPRING: Season.FALL,
            Season.FALL: Season.SPRING,
        }[season]
    return season


def parse_openweathermap(data: dict) -> WeatherContext:
    """Map an OpenWeatherMap current-weather payload onto WeatherContext."""
    main = data["main"]
    condition = (safe_get(data, "weather", 0, "main", default="clear") or "clear").lower()
    wet = condition in _WET_MAIN_CONDITIONS or "rain" in data or "snow" in data
    humidity = main.get("humidity")

    return WeatherContext(
        temperature_c=float(main["temp"]),
        condition=condition,
        feels_like_c=main.get("feels_like"),
        temp_min_c=main.get("temp_min"),
        temp_max_c=main.get("temp_max"),
        precipitation=1.0 if wet else 0.0,
        humidity=humidity / 100.0 if humidity is not None else 0.5,
        wind_speed_kmh=float(safe_get(data, "wind", "speed", default=0.0)) * _MPS_TO_KMH,
    )


def _fetch_openweathermap(
    city: str, country: Optional[str], api_key: str, timeout: float,
) -> WeatherContext:
    """Call OpenWeatherMap Current Weather API."""
    query = f"{city},{country}" if country else city
    resp = requests.get(
        OPENWEATHER_URL,
        params={
            "q": query,
            "appid": api_key,
            "units": "metric",
        },
        timeout=timeout,
    )
    resp.raise_for_status()
    return parse_openweathermap(resp.json())
