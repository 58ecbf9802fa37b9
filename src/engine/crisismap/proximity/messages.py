"""Human-readable text for proximity results.

Wording lives in per-locale catalogs so it can change without touching the
distance math. ``en`` is the default; ``fa`` carries the Persian wording of
the public map.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from crisismap.proximity.areas import AreaMatch
from crisismap.proximity.engine import NearbyPoint, ProximityResult

DEFAULT_LOCALE = "en"

# Property keys holding a point's display name, most specific first.
NAME_PROPERTIES = ("SiteTargeted", "Site", "BASES_CLUSTER", "name")


@dataclass(frozen=True)
class MessageCatalog:
    """Wording for one locale."""

    safe: str
    warning: str  # {distance_phrase}, {label}
    warning_with_others: str  # {distance_phrase}, {label}, {others}
    distance: str  # {distance}
    under_one_km: str
    other_points: str  # {count}, singular
    other_points_plural: str  # {count}
    more_points: str  # {count}
    unknown_point: str
    point_line: str  # {name}, {distance}
    inside_area: str  # {label}, {name}
    labels: dict[str, str]
    default_label: str


CATALOGS: dict[str, MessageCatalog] = {
    "en": MessageCatalog(
        safe="You are in a safe area",
        warning="⚠️ Warning: you are {distance_phrase} the nearest {label}",
        warning_with_others="⚠️ Warning: you are {distance_phrase} the nearest {label} and {others}",
        distance="{distance} km from",
        under_one_km="less than one kilometer from",
        other_points="{count} other dangerous point",
        other_points_plural="{count} other dangerous points",
        more_points="and {count} more points...",
        unknown_point="Unknown point",
        point_line="{name}: {distance} km",
        inside_area="⚠️ Warning: you are inside the {label} ({name})",
        labels={
            "strikes": "confirmed strike area",
            "sites": "missile base",
            "nuclear": "nuclear facility",
            "evac": "evacuation area",
        },
        default_label="danger zone",
    ),
    "fa": MessageCatalog(
        safe="شما در منطقه امنی قرار دارید",
        warning="⚠️ هشدار: شما در فاصله {distance_phrase} {label} قرار دارید",
        warning_with_others="⚠️ هشدار: شما در فاصله {distance_phrase} {label} و {others} قرار دارید",
        distance="{distance} کیلومتری",
        under_one_km="کمتر از یک کیلومتری",
        other_points="{count} نقطه خطرناک دیگر",
        other_points_plural="{count} نقطه خطرناک دیگر",
        more_points="و {count} نقطه دیگر...",
        unknown_point="نقطه نامشخص",
        point_line="{name}: {distance} کیلومتر",
        inside_area="⚠️ هشدار: شما داخل {label} ({name}) قرار دارید",
        labels={
            "strikes": "منطقه حمله شده",
            "sites": "پایگاه موشکی",
            "nuclear": "مرکز هسته‌ای",
            "evac": "منطقه تخلیه",
        },
        default_label="منطقه خطرناک",
    ),
}


def get_catalog(locale: str | None = None) -> MessageCatalog:
    """Get the message catalog for a locale.

    Raises:
        ValueError: If the locale has no catalog.
    """
    locale = locale or DEFAULT_LOCALE
    try:
        return CATALOGS[locale]
    except KeyError:
        raise ValueError(f"Unsupported locale: {locale!r} (available: {', '.join(CATALOGS)})") from None


def format_distance(distance_km: float) -> str:
    """Format a rounded distance without trailing zeros (3.0 -> "3")."""
    return f"{distance_km:g}"


def category_label(category: str, locale: str | None = None) -> str:
    """Localized label for a category tag, or the generic danger zone label."""
    catalog = get_catalog(locale)
    return catalog.labels.get(str(category), catalog.default_label)


def feature_name(properties: Mapping[str, Any], locale: str | None = None) -> str:
    """Display name from a feature's properties, or the "unknown point" text."""
    for key in NAME_PROPERTIES:
        value = properties.get(key)
        if value not in (None, ""):
            return str(value)
    return get_catalog(locale).unknown_point


def point_name(point: NearbyPoint, locale: str | None = None) -> str:
    """Display name of a nearby point taken from its properties."""
    return feature_name(point.properties, locale)


def describe(result: ProximityResult, locale: str | None = None) -> str:
    """Build the status line for a proximity result.

    Closest points under one kilometer (including those that round to 0) are
    phrased as "less than one kilometer" rather than printing the number.
    """
    catalog = get_catalog(locale)
    closest = result.closest
    if not result.is_in_danger or closest is None:
        return catalog.safe

    if closest.distance_km < 1:
        distance_phrase = catalog.under_one_km
    else:
        distance_phrase = catalog.distance.format(distance=format_distance(closest.distance_km))

    label = category_label(closest.category, locale)
    others = len(result.nearby_points) - 1
    if others == 0:
        return catalog.warning.format(distance_phrase=distance_phrase, label=label)

    template = catalog.other_points if others == 1 else catalog.other_points_plural
    return catalog.warning_with_others.format(
        distance_phrase=distance_phrase,
        label=label,
        others=template.format(count=others),
    )


def summarize(result: ProximityResult, limit: int = 5, locale: str | None = None) -> list[str]:
    """List the nearest points as display lines, capped at ``limit``."""
    catalog = get_catalog(locale)
    limit = max(limit, 0)
    lines = [
        catalog.point_line.format(name=point_name(p, locale), distance=format_distance(p.distance_km))
        for p in result.nearby_points[:limit]
    ]
    hidden = len(result.nearby_points) - limit
    if hidden > 0:
        lines.append(catalog.more_points.format(count=hidden))
    return lines


def describe_areas(areas: Sequence[AreaMatch], locale: str | None = None) -> list[str]:
    """One warning line per area that contains the user."""
    catalog = get_catalog(locale)
    return [
        catalog.inside_area.format(
            label=category_label(a.category, locale),
            name=feature_name(a.properties, locale),
        )
        for a in areas
    ]


def headline(result: ProximityResult, areas: Sequence[AreaMatch] = (), locale: str | None = None) -> str:
    """Single status line for a location.

    A nearby point takes precedence, then the first containing area. The
    safe message is only returned when there is neither.
    """
    if (result.is_in_danger and result.nearby_points) or not areas:
        return describe(result, locale)
    return describe_areas(areas[:1], locale)[0]
