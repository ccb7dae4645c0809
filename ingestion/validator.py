"""External data validation and normalization.

Takes whatever the external source returned (a dict in snake_case or
camelCase, an ExternalAttributes, or nothing at all) and produces a fully
populated ExternalAttributes plus a list of the corrections applied:

  - out-of-range scores are clamped into their documented range
  - missing or invalid values are replaced with defaults
  - missing key fields are remembered in `imputed_fields` for quality scoring

Never raises. If the input is unusable, a synthetic record is derived from the
listing (or global defaults) instead. Logging the corrections is left to the
caller.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Optional

from pydantic.alias_generators import to_snake

from config import defaults
from ingestion.fallback import synthesize_external
from models.enums import MarketTrend
from models.neighborhood import ExternalAttributes, ListingRecord, as_utc

# Key fields counted by the completeness score
KEY_FIELDS = ("average_rent", "safety_score", "walk_score", "school_rating", "population")


@dataclass
class NormalizationResult:
    record: ExternalAttributes
    corrections: list[str] = field(default_factory=list)


def normalize(
    raw: Any,
    listing: Optional[ListingRecord] = None,
    now: Optional[datetime] = None,
) -> NormalizationResult:
    """Validate and clean raw external attributes."""
    now = now or datetime.now(UTC)

    if isinstance(raw, ExternalAttributes):
        raw = raw.model_dump()

    if not isinstance(raw, Mapping):
        return _synthetic_result(listing, now, "No external data received, synthetic record used")

    try:
        return _normalize_mapping(raw, now)
    except Exception as e:
        return _synthetic_result(
            listing, now, f"Validation failed ({type(e).__name__}: {e}), synthetic record used"
        )


def _synthetic_result(
    listing: Optional[ListingRecord], now: datetime, reason: str
) -> NormalizationResult:
    try:
        result = _normalize_mapping(synthesize_external(listing, now), now)
    except Exception:
        # The listing itself is unusable, fall back to global defaults
        result = _normalize_mapping(synthesize_external(None, now), now)
    result.corrections.insert(0, reason)
    return result


def _normalize_mapping(raw: Mapping, now: datetime) -> NormalizationResult:
    data = _snake_keys(raw)
    corrections: list[str] = []
    imputed: list[str] = [f for f in data.get("imputed_fields") or [] if f in KEY_FIELDS]

    def note_missing(key_field: Optional[str]) -> None:
        if key_field and key_field not in imputed:
            imputed.append(key_field)

    # Identity
    for key in ("id", "name", "city", "state"):
        data[key] = str(data.get(key) or "")
    data["coordinates"] = _coordinates(data.get("coordinates"))

    # Real estate
    real_estate = _section(data, "real_estate", corrections)
    _positive(real_estate, "average_rent", defaults.DEFAULT_RENT, "rent", corrections, note_missing)
    _positive(real_estate, "price_per_sq_ft", defaults.DEFAULT_PRICE_PER_SQ_FT, "price per sqft", corrections)
    trend = real_estate.get("market_trend")
    if isinstance(trend, MarketTrend):
        real_estate["market_trend"] = trend.value
    elif trend not in {t.value for t in MarketTrend}:
        real_estate["market_trend"] = defaults.DEFAULT_MARKET_TREND
        corrections.append(f"Invalid market trend {trend!r} set to {defaults.DEFAULT_MARKET_TREND}")
    _clamped(real_estate, "availability", 0, 100, defaults.DEFAULT_AVAILABILITY, "availability", corrections)

    # Crime
    crime = _section(data, "crime", corrections)
    _clamped(crime, "safety_score", 0, 5, defaults.DEFAULT_SAFETY_SCORE, "safety score", corrections, note_missing)
    _non_negative(crime, "crime_rate", defaults.DEFAULT_CRIME_RATE, "crime rate", corrections)
    _non_negative(crime, "recent_incidents", defaults.DEFAULT_RECENT_INCIDENTS, "recent incidents", corrections)
    crime["recent_incidents"] = int(round(crime["recent_incidents"]))

    # Transit
    transit = _section(data, "transit", corrections)
    _clamped(transit, "walk_score", 0, 100, defaults.DEFAULT_WALK_SCORE, "walk score", corrections, note_missing)
    _clamped(transit, "transit_score", 0, 100, defaults.DEFAULT_TRANSIT_SCORE, "transit score", corrections)
    _clamped(transit, "bike_score", 0, 100, defaults.DEFAULT_BIKE_SCORE, "bike score", corrections)
    _string_list(transit, "nearby_stations", defaults.DEFAULT_NEARBY_STATIONS, "nearby stations", corrections)

    # Schools
    schools = _section(data, "schools", corrections)
    school_missing = _number(schools.get("average_rating")) is None
    _clamped(schools, "average_rating", 0, 5, defaults.DEFAULT_SCHOOL_RATING, "school rating", corrections)
    if school_missing:
        note_missing("school_rating")
    _string_list(schools, "top_schools", defaults.DEFAULT_TOP_SCHOOLS, "top schools", corrections)
    _non_negative(
        schools, "student_teacher_ratio", defaults.DEFAULT_STUDENT_TEACHER_RATIO,
        "student/teacher ratio", corrections,
    )

    # Demographics
    demographics = _section(data, "demographics", corrections)
    _positive(demographics, "population", defaults.DEFAULT_POPULATION, "population", corrections, note_missing)
    demographics["population"] = max(1, int(round(demographics["population"])))
    median_age = _number(demographics.get("median_age"))
    if median_age is None or median_age <= 0 or median_age > 100:
        demographics["median_age"] = defaults.DEFAULT_MEDIAN_AGE
        corrections.append(f"Invalid median age {median_age} corrected to {defaults.DEFAULT_MEDIAN_AGE}")
    else:
        demographics["median_age"] = median_age
    _clamped(
        demographics, "diversity_index", 0, 1, defaults.DEFAULT_DIVERSITY_INDEX,
        "diversity index", corrections,
    )
    median_income = _number(demographics.get("median_income"))
    demographics["median_income"] = median_income if median_income and median_income > 0 else None

    # Amenities
    amenities = _section(data, "amenities", corrections)
    for key, default in defaults.DEFAULT_AMENITIES.items():
        _non_negative(amenities, key, default, f"{key} count", corrections)
        amenities[key] = int(round(amenities[key]))

    # Timestamp
    last_updated = _timestamp(data.get("last_updated"))
    if last_updated is None:
        last_updated = now
        corrections.append("Missing last updated timestamp set to now")
    data["last_updated"] = last_updated

    data["imputed_fields"] = imputed
    return NormalizationResult(ExternalAttributes.model_validate(data), corrections)


# --- helpers ---


def _snake_keys(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {to_snake(str(k)): _snake_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_snake_keys(v) for v in value]
    return value


def _number(value: Any) -> Optional[float]:
    """Coerce to a finite float, or None if that isn't possible."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _section(data: dict, name: str, corrections: list[str]) -> dict:
    section = data.get(name)
    if isinstance(section, Mapping):
        section = dict(section)
    else:
        section = {}
        corrections.append(f"Missing {name.replace('_', ' ')} data filled with defaults")
    data[name] = section
    return section


def _positive(section, key, default, label, corrections, on_missing=None) -> None:
    value = _number(section.get(key))
    if value is None:
        section[key] = default
        corrections.append(f"Missing {label} set to default {default}")
        if on_missing:
            on_missing(key)
    elif value <= 0:
        section[key] = default
        corrections.append(f"Invalid {label} {value} corrected to {default}")
    else:
        section[key] = value


def _non_negative(section, key, default, label, corrections) -> None:
    value = _number(section.get(key))
    if value is None:
        section[key] = default
        corrections.append(f"Missing {label} set to default {default}")
    elif value < 0:
        section[key] = default
        corrections.append(f"Invalid {label} {value} corrected to {default}")
    else:
        section[key] = value


def _clamped(section, key, low, high, default, label, corrections, on_missing=None) -> None:
    value = _number(section.get(key))
    if value is None:
        section[key] = default
        corrections.append(f"Missing {label} set to default {default}")
        if on_missing:
            on_missing(key)
        return
    clamped = min(high, max(low, value))
    if clamped != value:
        corrections.append(f"{label.capitalize()} normalized from {value} to {clamped}")
    section[key] = clamped


def _string_list(section, key, default, label, corrections) -> None:
    value = section.get(key)
    if not isinstance(value, list):
        section[key] = list(default)
        corrections.append(f"Missing {label} filled with defaults")
    else:
        section[key] = [str(v) for v in value]


def _coordinates(value: Any) -> Optional[dict]:
    if not isinstance(value, Mapping):
        return None
    lat, lng = _number(value.get("lat")), _number(value.get("lng"))
    if lat is None or lng is None:
        return None
    return {"lat": lat, "lng": lng}


def _timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None
    else:
        return None
    return as_utc(parsed)
