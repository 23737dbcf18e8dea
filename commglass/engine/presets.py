"""Quick filter presets: named facet combinations applied in one step."""

from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml
from loguru import logger

from .errors import CommGlassError, DatasetError, UnknownPresetError
from .models import ContentType, DateRange, FilterPreset, Platform, Priority


QUICK_FILTER_PRESETS: Sequence[FilterPreset] = (
    FilterPreset(
        name="High Priority Today",
        icon="exclamationmark.triangle.fill",
        color="red",
        priorities=(Priority.HIGH,),
        date_range=DateRange.TODAY,
    ),
    FilterPreset(
        name="Team Discussions",
        icon="bubble.left.and.bubble.right.fill",
        color="blue",
        platforms=(Platform.SLACK, Platform.TEAMS),
        content_types=(ContentType.MESSAGE, ContentType.CONVERSATION),
    ),
    FilterPreset(
        name="This Week's Work",
        icon="calendar.badge.clock",
        color="green",
        priorities=(Priority.HIGH, Priority.MEDIUM),
        date_range=DateRange.THIS_WEEK,
    ),
    FilterPreset(
        name="Email Communications",
        icon="envelope.fill",
        color="orange",
        platforms=(Platform.GMAIL, Platform.OUTLOOK),
        content_types=(ContentType.MESSAGE, ContentType.CONVERSATION),
    ),
    FilterPreset(
        name="Research & Discovery",
        icon="magnifyingglass.circle.fill",
        color="purple",
        search_terms=("research", "discovery", "user", "analysis"),
    ),
    FilterPreset(
        name="Design & UX",
        icon="paintbrush.fill",
        color="pink",
        search_terms=("design", "UX", "UI", "wireframe", "prototype"),
    ),
)


def find_preset(name: str, presets: Sequence[FilterPreset] = QUICK_FILTER_PRESETS) -> FilterPreset:
    """Look a preset up by name, ignoring case and surrounding whitespace."""
    wanted = name.strip().lower()
    for preset in presets:
        if preset.name.lower() == wanted:
            return preset
    raise UnknownPresetError(name)


def preset_from_dict(data: Dict[str, Any]) -> FilterPreset:
    """Build a preset from a plain mapping (e.g. one YAML list entry)."""
    if not data.get("name"):
        raise ValueError("preset is missing a name")
    return FilterPreset(
        name=str(data["name"]),
        icon=str(data.get("icon", "")),
        color=str(data.get("color", "")),
        priorities=tuple(Priority.parse(v) for v in data.get("priorities") or ()),
        platforms=tuple(Platform.parse(v) for v in data.get("platforms") or ()),
        content_types=tuple(ContentType.parse(v) for v in data.get("content_types") or ()),
        date_range=DateRange.parse(data.get("date_range") or DateRange.ALL_TIME),
        search_terms=tuple(str(t) for t in data.get("search_terms") or ()),
    )


def load_presets(path: Path) -> List[FilterPreset]:
    """Load a list of presets from a YAML file."""
    path = Path(path)
    try:
        with open(path, "r") as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise DatasetError(f"Preset file not found: {path}") from e
    except yaml.YAMLError as e:
        raise DatasetError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw, list):
        raise DatasetError(f"Expected a list of presets in {path}")

    presets = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise DatasetError("preset must be a mapping", index=i)
        try:
            presets.append(preset_from_dict(entry))
        except (CommGlassError, ValueError) as e:
            raise DatasetError(str(e), index=i) from e

    logger.info(f"Loaded {len(presets)} filter presets from {path}")
    return presets
