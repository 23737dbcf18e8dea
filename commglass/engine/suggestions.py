"""Filter-aware search suggestions and placeholder text.

These are presentation helpers derived from the current facet selection;
they never feed back into matching.
"""

from typing import Dict, Iterable, List, Tuple

from .models import ContentType, DateRange, FacetEnum, Platform, Priority, SearchFilterState


DEFAULT_SUGGESTION_LIMIT = 6
DEFAULT_PLACEHOLDER = "Search by name, topic, or keyword"

POPULAR_SEARCHES: Tuple[str, ...] = (
    "User Research", "Design System", "Product Roadmap", "A/B Testing",
)
RECENT_SEARCHES: Tuple[str, ...] = (
    "UX Research", "Design Review", "Product Sprint", "User Journey",
)

# Several platforms share a phrase set; the union is what the user sees.
_PRIORITY_PHRASES: Dict[Priority, Tuple[str, ...]] = {
    Priority.HIGH: ("Critical Issues", "Urgent Reviews", "Immediate Actions"),
    Priority.MEDIUM: ("Weekly Sync", "Progress Update", "Team Meeting"),
    Priority.LOW: ("Documentation", "Best Practices", "Process Improvements"),
}

_EMAIL = ("Email Thread", "Stakeholder Update", "External Communication")
_MEETING = ("Meeting Notes", "Video Call", "Collaboration Session")

_PLATFORM_PHRASES: Dict[Platform, Tuple[str, ...]] = {
    Platform.SLACK: ("Team Chat", "Quick Updates", "Notifications"),
    Platform.GMAIL: _EMAIL,
    Platform.OUTLOOK: _EMAIL,
    Platform.TEAMS: _MEETING,
    Platform.ZOOM: _MEETING,
}

_CONTENT_TYPE_PHRASES: Dict[ContentType, Tuple[str, ...]] = {
    ContentType.MESSAGE: ("Discussion", "Announcement", "Update"),
    ContentType.CONVERSATION: ("Thread", "Dialogue", "Exchange"),
    ContentType.CONTACT: ("Team Member", "Stakeholder", "Expert"),
}

_DATE_RANGE_PHRASES: Dict[DateRange, Tuple[str, ...]] = {
    DateRange.TODAY: ("Today's Updates", "Recent Changes", "Latest News"),
    DateRange.THIS_WEEK: ("This Week", "Weekly Report", "Current Sprint"),
    DateRange.THIS_QUARTER: ("Quarterly Review", "Q1 Goals", "Strategic Planning"),
    DateRange.LAST_QUARTER: ("Previous Quarter", "Historical Data", "Past Results"),
}

_SUGGESTION_ICONS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("vincent", "chase", "team", "standup"), "person.circle.fill"),
    (("budget", "review", "report", "q3", "data"), "doc.text.fill"),
    (("meeting", "client", "call", "sync"), "calendar.circle.fill"),
    (("product", "launch", "release", "feature"), "rocket.fill"),
    (("project", "sigma", "initiative"), "folder.fill"),
    (("marketing", "campaign", "promotion", "ads"), "megaphone.fill"),
    (("analytics", "metrics", "performance", "stats"), "chart.bar.fill"),
)
_DEFAULT_SUGGESTION_ICON = "magnifyingglass"


def _canonical(values: Iterable[FacetEnum], enum_cls) -> List[FacetEnum]:
    selected = set(values)
    return [member for member in enum_cls if member in selected]


def _phrases_for(state: SearchFilterState) -> List[str]:
    phrases: List[str] = []
    for priority in _canonical(state.selected_priorities, Priority):
        phrases.extend(_PRIORITY_PHRASES[priority])
    # Gmail and Outlook (and Teams and Zoom) contribute their shared set once.
    seen_sets = []
    for platform in _canonical(state.selected_platforms, Platform):
        group = _PLATFORM_PHRASES.get(platform, ())
        if group and group not in seen_sets:
            seen_sets.append(group)
            phrases.extend(group)
    for content_type in _canonical(state.selected_content_types, ContentType):
        phrases.extend(_CONTENT_TYPE_PHRASES.get(content_type, ()))
    phrases.extend(_DATE_RANGE_PHRASES.get(state.selected_date_range, ()))
    return phrases


def smart_suggestions(
    state: SearchFilterState,
    limit: int = DEFAULT_SUGGESTION_LIMIT
) -> List[str]:
    """
    Canned phrases for the active facets, deduplicated and capped at `limit`.

    Deduplication goes through a set before truncation, so which phrases
    survive the cap and in what order is unspecified.
    """
    return list(set(_phrases_for(state)))[:limit]


def smart_placeholder(state: SearchFilterState) -> str:
    """Describe the active filters, e.g. "Search high priority in Slack from today..."."""
    context: List[str] = []

    if state.selected_priorities:
        names = ", ".join(
            p.label.lower() for p in _canonical(state.selected_priorities, Priority)
        )
        context.append(f"{names} priority")

    if state.selected_platforms:
        names = ", ".join(
            p.label for p in _canonical(state.selected_platforms, Platform)
        )
        context.append(f"in {names}")

    if state.selected_content_types:
        names = ", ".join(
            t.label for t in _canonical(state.selected_content_types, ContentType)
        )
        context.append(f"{names} content")

    if state.selected_date_range is not DateRange.ALL_TIME:
        context.append(f"from {state.selected_date_range.label.lower()}")

    if not context:
        return DEFAULT_PLACEHOLDER
    return f"Search {' '.join(context)}..."


def icon_for_suggestion(text: str) -> str:
    """Pick an icon for a suggestion pill from keywords in its text."""
    lowered = text.lower()
    for keywords, icon in _SUGGESTION_ICONS:
        if any(keyword in lowered for keyword in keywords):
            return icon
    return _DEFAULT_SUGGESTION_ICON
