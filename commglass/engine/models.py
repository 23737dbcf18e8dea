"""Data models for the commglass search engine.

Facet enums carry their display metadata (labels, icons, colors) through
static lookup tables rather than per-member branching.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple, Type, TypeVar, Union

import ulid

from .errors import UnknownFacetValueError


E = TypeVar("E", bound="FacetEnum")


def _normalize(text: str) -> str:
    return "".join(ch for ch in text.lower() if ch not in " _-")


@dataclass(frozen=True)
class FacetMeta:
    """Display metadata attached to a facet value."""
    label: str
    icon: str = ""
    color: str = ""
    description: str = ""


class FacetEnum(Enum):
    """Base for enums that can be parsed from user input and carry metadata."""

    @classmethod
    def facet_name(cls) -> str:
        return cls.__name__

    @classmethod
    def _meta_table(cls) -> Dict["FacetEnum", FacetMeta]:
        return _META_TABLES[cls]

    @property
    def meta(self) -> FacetMeta:
        return self._meta_table()[self]

    @property
    def label(self) -> str:
        return self.meta.label

    @property
    def icon(self) -> str:
        return self.meta.icon

    @property
    def color(self) -> str:
        return self.meta.color

    @classmethod
    def parse(cls: Type[E], value: Union[str, E]) -> E:
        """
        Resolve a member from itself, its value, its name or its label.

        Matching ignores case, spaces, hyphens and underscores, so
        "This Week", "this_week" and "thisWeek" all name the same range.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = _normalize(value)
            for member in cls:
                candidates = (member.value, member.name, member.label)
                if any(_normalize(c) == wanted for c in candidates):
                    return member
        raise UnknownFacetValueError(
            cls.facet_name(), value, [m.value for m in cls]
        )


class ContentType(FacetEnum):
    MESSAGE = "message"
    CONTACT = "contact"
    CONVERSATION = "conversation"
    TOPIC = "topic"

    @classmethod
    def facet_name(cls) -> str:
        return "content type"


class Platform(FacetEnum):
    SLACK = "slack"
    GMAIL = "gmail"
    OUTLOOK = "outlook"
    TEAMS = "teams"
    DISCORD = "discord"
    ZOOM = "zoom"

    @classmethod
    def facet_name(cls) -> str:
        return "platform"


class Priority(FacetEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def facet_name(cls) -> str:
        return "priority"

    @property
    def rank(self) -> int:
        """Higher rank sorts first."""
        return _PRIORITY_RANK[self]


class DateRange(FacetEnum):
    TODAY = "today"
    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"
    THIS_QUARTER = "this_quarter"
    LAST_QUARTER = "last_quarter"
    ALL_TIME = "all_time"

    @classmethod
    def facet_name(cls) -> str:
        return "date range"

    @property
    def description(self) -> str:
        return self.meta.description

    def matches(self, timestamp_label: str) -> bool:
        """
        Check a relative-time label against this range.

        This is coarse substring bucketing on the label text, not date
        arithmetic. Buckets overlap on purpose ("3 months ago" is both this
        quarter and last quarter).
        """
        return _DATE_RULES[self](timestamp_label)


class FilterCategory(FacetEnum):
    PRIORITY = "priority"
    PLATFORM = "platform"
    CONTENT_TYPE = "content_type"
    DATE_RANGE = "date_range"

    @classmethod
    def facet_name(cls) -> str:
        return "filter category"


_META_TABLES: Dict[type, Dict[FacetEnum, FacetMeta]] = {
    ContentType: {
        ContentType.MESSAGE: FacetMeta("message", icon="bubble.left.and.bubble.right.fill"),
        ContentType.CONTACT: FacetMeta("contact", icon="person.circle.fill"),
        ContentType.CONVERSATION: FacetMeta("conversation", icon="bubble.left.and.bubble.right"),
        ContentType.TOPIC: FacetMeta("topic", icon="tag.fill"),
    },
    Platform: {
        Platform.SLACK: FacetMeta("Slack", icon="message.fill", color="purple"),
        Platform.GMAIL: FacetMeta("Gmail", icon="envelope.fill", color="red"),
        Platform.OUTLOOK: FacetMeta("Outlook", icon="mail.fill", color="blue"),
        Platform.TEAMS: FacetMeta("Teams", icon="video.fill", color="orange"),
        Platform.DISCORD: FacetMeta("Discord", icon="mic.fill", color="indigo"),
        Platform.ZOOM: FacetMeta("Zoom", icon="video.circle.fill", color="cyan"),
    },
    Priority: {
        Priority.HIGH: FacetMeta("High", color="red"),
        Priority.MEDIUM: FacetMeta("Medium", color="orange"),
        Priority.LOW: FacetMeta("Low", color="yellow"),
    },
    DateRange: {
        DateRange.TODAY: FacetMeta("Today", icon="clock.fill", description="Last 24 hours"),
        DateRange.THIS_WEEK: FacetMeta("This Week", icon="calendar.day.timeline.leading", description="Last 7 days"),
        DateRange.THIS_MONTH: FacetMeta("This Month", icon="calendar", description="Last 30 days"),
        DateRange.THIS_QUARTER: FacetMeta("This Quarter", icon="calendar.badge.clock", description="Last 3 months"),
        DateRange.LAST_QUARTER: FacetMeta("Last Quarter", icon="clock.arrow.circlepath", description="3-6 months ago"),
        DateRange.ALL_TIME: FacetMeta("All Time", icon="infinity", description="No time limit"),
    },
    FilterCategory: {
        FilterCategory.PRIORITY: FacetMeta("Priority"),
        FilterCategory.PLATFORM: FacetMeta("Platform"),
        FilterCategory.CONTENT_TYPE: FacetMeta("Type"),
        FilterCategory.DATE_RANGE: FacetMeta("Date"),
    },
}

_PRIORITY_RANK: Dict[Priority, int] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


def _contains_any(*needles: str) -> Callable[[str], bool]:
    return lambda label: any(n in label for n in needles)


_DATE_RULES: Dict[DateRange, Callable[[str], bool]] = {
    DateRange.TODAY: _contains_any("mins ago", "hour ago"),
    DateRange.THIS_WEEK: _contains_any("mins ago", "hour", "day ago", "days ago"),
    DateRange.THIS_MONTH: lambda label: not _contains_any(
        "months ago", "year ago", "quarter ago"
    )(label),
    DateRange.THIS_QUARTER: lambda label: (
        "months ago" not in label
        or _contains_any("1 month ago", "2 months ago", "3 months ago")(label)
    ),
    DateRange.LAST_QUARTER: _contains_any(
        "3 months ago", "4 months ago", "5 months ago", "6 months ago", "quarter ago"
    ),
    DateRange.ALL_TIME: lambda label: True,
}


@dataclass
class ActionItem:
    """A follow-up attached to a record; only `completed` ever changes."""
    text: str
    completed: bool = False


@dataclass
class ContentRecord:
    """A single searchable item in the unified inbox."""
    type: ContentType
    platform: Platform
    priority: Priority
    title: str
    subtitle: str = ""
    body_text: str = ""
    timestamp_label: str = ""
    action_items: List[ActionItem] = field(default_factory=list)
    participants: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    id: str = ""

    def __post_init__(self):
        if not self.id:
            self.id = str(ulid.ULID())

    @property
    def searchable_text(self) -> str:
        return " ".join([
            self.title,
            self.subtitle,
            self.body_text,
            " ".join(self.participants),
            " ".join(self.tags),
        ])

    @property
    def senders(self) -> str:
        return ", ".join(self.participants)

    @property
    def pending_action_count(self) -> int:
        return sum(1 for item in self.action_items if not item.completed)

    def toggle_action_item(self, index: int) -> ActionItem:
        """Flip completion of one action item. Search state is unaffected."""
        item = self.action_items[index]
        item.completed = not item.completed
        return item


@dataclass(frozen=True)
class FilterPreset:
    """A named bundle of facet selections applied in one step."""
    name: str
    icon: str = ""
    color: str = ""
    priorities: Tuple[Priority, ...] = ()
    platforms: Tuple[Platform, ...] = ()
    content_types: Tuple[ContentType, ...] = ()
    date_range: DateRange = DateRange.ALL_TIME
    search_terms: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "priorities", tuple(Priority.parse(p) for p in self.priorities))
        object.__setattr__(self, "platforms", tuple(Platform.parse(p) for p in self.platforms))
        object.__setattr__(
            self, "content_types", tuple(ContentType.parse(t) for t in self.content_types)
        )
        object.__setattr__(self, "date_range", DateRange.parse(self.date_range))
        object.__setattr__(self, "search_terms", tuple(self.search_terms))

    @property
    def query_text(self) -> Optional[str]:
        """Search terms joined by spaces, or None when the preset has none."""
        if not self.search_terms:
            return None
        return " ".join(self.search_terms)


@dataclass(frozen=True)
class SearchFilterState:
    """Immutable snapshot of the engine's query and facet selections."""
    query_text: str = ""
    selected_pill: Optional[str] = None
    selected_priorities: FrozenSet[Priority] = frozenset()
    selected_platforms: FrozenSet[Platform] = frozenset()
    selected_content_types: FrozenSet[ContentType] = frozenset()
    selected_date_range: DateRange = DateRange.ALL_TIME

    @property
    def trimmed_query(self) -> str:
        return self.query_text.strip()

    @property
    def has_active_filters(self) -> bool:
        return self.active_filter_count > 0

    @property
    def active_filter_count(self) -> int:
        """Number of facet categories with a restriction, 0 to 4."""
        return sum([
            bool(self.selected_priorities),
            bool(self.selected_platforms),
            bool(self.selected_content_types),
            self.selected_date_range is not DateRange.ALL_TIME,
        ])

    @property
    def is_idle(self) -> bool:
        return not self.trimmed_query and not self.has_active_filters

    def matches(self, record: ContentRecord) -> bool:
        """True when the record satisfies every active predicate."""
        query = self.trimmed_query
        if query and query.casefold() not in record.searchable_text.casefold():
            return False
        if self.selected_priorities and record.priority not in self.selected_priorities:
            return False
        if self.selected_platforms and record.platform not in self.selected_platforms:
            return False
        if self.selected_content_types and record.type not in self.selected_content_types:
            return False
        return self.selected_date_range.matches(record.timestamp_label)
