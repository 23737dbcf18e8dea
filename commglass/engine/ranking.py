"""Result ordering and grouping for the search engine."""

from dataclasses import dataclass
from typing import Collection, List, Optional, Sequence, Tuple

from .models import ContentRecord, ContentType, FilterCategory, Platform, Priority


# Results are grouped only when more than this many records matched.
DEFAULT_GROUP_MIN_RESULTS = 4

Group = Tuple[str, List[ContentRecord]]


def sort_results(records: Sequence[ContentRecord]) -> List[ContentRecord]:
    """
    Order records by priority (high first), then by timestamp label descending.

    The label comparison is a plain string comparison. It only reads as
    "most recent first" because the labels are produced in a consistent
    format. Python's sort is stable, so full ties keep dataset order.
    """
    by_label = sorted(records, key=lambda r: r.timestamp_label, reverse=True)
    return sorted(by_label, key=lambda r: r.priority.rank, reverse=True)


def should_group(
    active_filter_count: int,
    result_count: int,
    min_results: int = DEFAULT_GROUP_MIN_RESULTS
) -> bool:
    """Group only when several facet categories are active and results are plentiful."""
    return active_filter_count > 1 and result_count > min_results


def choose_grouping(
    priorities: Collection[Priority],
    platforms: Collection[Platform]
) -> FilterCategory:
    """Pick the single grouping dimension by precedence."""
    if len(priorities) > 1:
        return FilterCategory.PRIORITY
    if len(platforms) > 1:
        return FilterCategory.PLATFORM
    return FilterCategory.CONTENT_TYPE


_GROUP_KEYS = {
    FilterCategory.PRIORITY: (Priority, lambda r: r.priority),
    FilterCategory.PLATFORM: (Platform, lambda r: r.platform),
    FilterCategory.CONTENT_TYPE: (ContentType, lambda r: r.type),
}


def group_results(
    records: Sequence[ContentRecord],
    category: FilterCategory
) -> List[Group]:
    """
    Split already-sorted records into labelled groups.

    Groups follow the category's enum declaration order, empty groups are
    dropped, and each group keeps the incoming order.
    """
    if category not in _GROUP_KEYS:
        raise ValueError(f"Cannot group results by {category.label}")

    enum_cls, key = _GROUP_KEYS[category]
    groups: List[Group] = []
    for member in enum_cls:
        members = [r for r in records if key(r) == member]
        if members:
            groups.append((member.label, members))
    return groups


@dataclass(frozen=True)
class ResultSummary:
    """Header text shown above a result list."""
    result_count: str
    organized_by: str = ""
    group_count: str = ""


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def summarize(
    results: Sequence[ContentRecord],
    groups: Sequence[Group] = (),
    category: Optional[FilterCategory] = None
) -> ResultSummary:
    """Build the result header strings; group lines appear only when grouped."""
    if not groups or category is None:
        return ResultSummary(result_count=_plural(len(results), "result"))
    return ResultSummary(
        result_count=_plural(len(results), "result"),
        organized_by=f"Organized by {category.label}",
        group_count=_plural(len(groups), "group"),
    )
