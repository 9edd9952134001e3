"""Deterministic clothing recommendation from daily stats.

Tier selection and modifiers are encoded as ordered tables so tie-breaks and
display order can be tested on their own. Preference offsets shift the
temperatures used for comparisons only; rain and wind thresholds, and the
temperatures shown in the reasoning, always use the raw stats.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Sequence, Tuple

from app.domain import (
    DailyStats,
    Icon,
    Modifier,
    Preference,
    PREFERENCE_OFFSETS,
    Recommendation,
)
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="outfit_engine")

RAIN_PROBABILITY_THRESHOLD = 50.0  # percent
WIND_SPEED_THRESHOLD = 15.0  # same unit as the forecast wind speed
LAYERING_SWING = 4.0  # degrees C between effective low and high
NO_MODIFIER_REASON = "No strong rain or wind expected."


@dataclass(frozen=True)
class ClothingTier:
    """Base clothing for effective highs up to and including `max_high`."""
    max_high: float
    clothing: str
    icon: Icon


@dataclass(frozen=True)
class ModifierRule:
    """Advisory added when `applies(stats, effective_high, effective_low)` holds."""
    name: str
    text: str
    icon: Icon
    applies: Callable[[DailyStats, float, float], bool]


# Evaluated low-to-high, first match wins; a tie at a boundary goes to the colder tier.
CLOTHING_TIERS: Tuple[ClothingTier, ...] = (
    ClothingTier(10.0, "Heavy coat / warm layers", Icon.COAT),
    ClothingTier(17.0, "Jacket / sweater", Icon.COAT),
    ClothingTier(23.0, "Light jacket or long sleeve", Icon.SCARF),
    ClothingTier(math.inf, "Light clothes (T-shirt)", Icon.TSHIRT),
)

# Display order: rain, wind, layering.
MODIFIER_RULES: Tuple[ModifierRule, ...] = (
    ModifierRule(
        name="rain",
        text="Bring umbrella or rain jacket",
        icon=Icon.UMBRELLA,
        applies=lambda stats, _high, _low: stats.max_precipitation >= RAIN_PROBABILITY_THRESHOLD,
    ),
    ModifierRule(
        name="wind",
        text="Windproof layer recommended",
        icon=Icon.WIND,
        applies=lambda stats, _high, _low: stats.max_wind >= WIND_SPEED_THRESHOLD,
    ),
    ModifierRule(
        name="layering",
        text="Layer up — mornings/evenings will be cooler",
        icon=Icon.SCARF,
        applies=lambda _stats, high, low: low + LAYERING_SWING <= high,
    ),
)


def preference_offset(pref: Preference | str | None) -> float:
    """Offset in degrees C for a preference; unrecognized values get 0."""
    try:
        return PREFERENCE_OFFSETS[Preference(pref)]
    except (ValueError, KeyError):
        logger.debug("Unrecognized preference; using neutral offset", extra={"preference": pref})
        return 0.0


def select_tier(effective_high: float) -> ClothingTier:
    """Return the first tier whose upper bound covers `effective_high`."""
    return next(tier for tier in CLOTHING_TIERS if effective_high <= tier.max_high)


def collect_modifiers(stats: DailyStats, effective_high: float, effective_low: float) -> Tuple[Modifier, ...]:
    """Evaluate every modifier rule independently, keeping table order."""
    return tuple(
        Modifier(text=rule.text, icon=rule.icon)
        for rule in MODIFIER_RULES
        if rule.applies(stats, effective_high, effective_low)
    )


def round_half_up(value: float) -> int:
    """Round to the nearest whole number with .5 going up (-2.5 -> -2)."""
    return math.floor(value + 0.5)


def build_reasoning(stats: DailyStats, modifiers: Sequence[Modifier]) -> str:
    """Raw high/low sentence followed by modifier texts or the fallback sentence."""
    parts = [f"Day high {round_half_up(stats.high)}°C, low {round_half_up(stats.low)}°C."]
    if modifiers:
        parts.append("; ".join(m.text for m in modifiers))
    else:
        parts.append(NO_MODIFIER_REASON)
    return " ".join(parts)


def build_label(clothing: str, modifiers: Sequence[Modifier]) -> str:
    """Clothing text plus the modifier icons in firing order."""
    if not modifiers:
        return clothing
    return f"{clothing} + " + "".join(m.icon.value for m in modifiers)


def recommend_outfit(stats: DailyStats, pref: Preference | str | None = Preference.NORMAL) -> Recommendation:
    """Map daily stats and a temperature preference to a clothing recommendation."""
    offset = preference_offset(pref)
    effective_high = stats.high + offset
    effective_low = stats.low + offset

    tier = select_tier(effective_high)
    modifiers = collect_modifiers(stats, effective_high, effective_low)

    return Recommendation(
        icon=tier.icon,
        label=build_label(tier.clothing, modifiers),
        reasoning=build_reasoning(stats, modifiers),
        clothing=tier.clothing,
        modifiers=modifiers,
    )
