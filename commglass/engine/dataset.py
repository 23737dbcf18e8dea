"""Content datasets: the built-in mock inbox and YAML-backed datasets."""

from pathlib import Path
from typing import Any, Dict, List

import yaml
from loguru import logger

from .errors import CommGlassError, DatasetError
from .models import ActionItem, ContentRecord, ContentType, Platform, Priority


def _items(*texts: str) -> List[ActionItem]:
    return [ActionItem(text=t) for t in texts]


def mock_content() -> List[ContentRecord]:
    """
    The prototype's fixed inbox.

    A fresh list of fresh records is built on every call, so action-item
    toggles in one session never leak into another.
    """
    return [
        ContentRecord(
            type=ContentType.MESSAGE,
            platform=Platform.SLACK,
            priority=Priority.HIGH,
            title="User Research Findings",
            subtitle="Emily Chen, Product Research",
            body_text="Latest user interviews reveal 73% of users struggle with our onboarding flow. "
                      "Need to prioritize UX improvements before Q4 launch.",
            timestamp_label="20 mins ago",
            action_items=_items(
                "Review user interview recordings",
                "Update onboarding wireframes",
                "Schedule design sprint",
                "Validate solutions with PM team",
            ),
            participants=["Emily Chen", "Product Research"],
            tags=["user research", "onboarding", "UX", "interviews", "Q4"],
        ),
        ContentRecord(
            type=ContentType.MESSAGE,
            platform=Platform.TEAMS,
            priority=Priority.MEDIUM,
            title="Design System Updates",
            subtitle="Design Team",
            body_text="New component library ready for review. Updated button styles, form elements, "
                      "and navigation patterns based on accessibility guidelines.",
            timestamp_label="1 hour ago",
            action_items=_items(
                "Review component library",
                "Test accessibility compliance",
                "Update design documentation",
                "Schedule implementation with dev team",
            ),
            participants=["Design Team", "UI/UX Lead"],
            tags=["design system", "components", "accessibility", "documentation"],
        ),
        ContentRecord(
            type=ContentType.CONVERSATION,
            platform=Platform.OUTLOOK,
            priority=Priority.LOW,
            title="Product Roadmap Planning",
            subtitle="Sarah Martinez - Senior PM",
            body_text="Quarterly roadmap review focusing on feature prioritization, user impact metrics, "
                      "and resource allocation for next quarter.",
            timestamp_label="2 hours ago",
            action_items=_items(
                "Analyze feature impact scores",
                "Review resource capacity",
                "Update roadmap timeline",
                "Prepare stakeholder presentation",
            ),
            participants=["Sarah Martinez"],
            tags=["product roadmap", "feature prioritization", "metrics", "planning"],
        ),
        ContentRecord(
            type=ContentType.CONTACT,
            platform=Platform.SLACK,
            priority=Priority.HIGH,
            title="Dr. Alex Rivera - Head of Product Research",
            subtitle="Leading user research and product discovery",
            body_text="Senior Product Researcher specializing in user behavior analysis, usability testing, "
                      "and product discovery methodologies.",
            timestamp_label="5 mins ago",
            action_items=_items(
                "Schedule research planning session",
                "Review user testing protocols",
            ),
            participants=["Dr. Alex Rivera"],
            tags=["product research", "user behavior", "usability testing", "discovery"],
        ),
        ContentRecord(
            type=ContentType.MESSAGE,
            platform=Platform.GMAIL,
            priority=Priority.HIGH,
            title="A/B Test Results Critical",
            subtitle="Product Analytics Team",
            body_text="Checkout flow experiment shows 15% conversion drop. Need immediate product decision "
                      "on whether to rollback or iterate based on user feedback data.",
            timestamp_label="15 mins ago",
            action_items=_items(
                "Analyze user behavior data",
                "Review heatmap recordings",
                "Consult with UX research team",
                "Make rollback decision by EOD",
            ),
            participants=["Product Analytics Team", "Data Science"],
            tags=["A/B testing", "conversion", "checkout", "user feedback", "analytics"],
        ),
        ContentRecord(
            type=ContentType.CONVERSATION,
            platform=Platform.TEAMS,
            priority=Priority.MEDIUM,
            title="Weekly Product Discovery",
            subtitle="Product Research Team",
            body_text="User interview insights, competitor analysis findings, and market research updates "
                      "for upcoming feature development sprint.",
            timestamp_label="45 mins ago",
            action_items=_items(
                "Synthesize user interview data",
                "Update competitor feature matrix",
                "Prepare research insights report",
                "Plan next week's user sessions",
            ),
            participants=["Product Research Team", "UX Researchers"],
            tags=["product discovery", "user interviews", "competitor analysis", "market research"],
        ),
        ContentRecord(
            type=ContentType.TOPIC,
            platform=Platform.DISCORD,
            priority=Priority.LOW,
            title="Design Critique Guidelines",
            subtitle="Design Team & Product",
            body_text="Updated design review process, feedback frameworks, and collaboration protocols "
                      "between design and product management teams.",
            timestamp_label="1 day ago",
            action_items=_items(
                "Review critique framework",
                "Schedule design review sessions",
                "Update feedback templates",
            ),
            participants=["Design Team", "Product Team"],
            tags=["design critique", "feedback", "collaboration", "review process"],
        ),
        ContentRecord(
            type=ContentType.MESSAGE,
            platform=Platform.ZOOM,
            priority=Priority.HIGH,
            title="User Journey Mapping Session",
            subtitle="UX Design & Product Team",
            body_text="Critical mapping session for new user onboarding experience. Need product "
                      "requirements, design wireframes, and user research insights.",
            timestamp_label="30 mins ago",
            action_items=_items(
                "Complete user journey maps",
                "Define key user touchpoints",
                "Create wireframe prototypes",
                "Validate with user research data",
            ),
            participants=["UX Designer", "Product Manager", "User Researcher"],
            tags=["user journey", "onboarding", "wireframes", "touchpoints"],
        ),
        ContentRecord(
            type=ContentType.CONTACT,
            platform=Platform.OUTLOOK,
            priority=Priority.MEDIUM,
            title="Maria Santos - Lead Product Designer",
            subtitle="Senior designer focused on user experience",
            body_text="Lead Product Designer responsible for end-to-end user experience, design system "
                      "maintenance, and cross-functional product collaboration.",
            timestamp_label="2 hours ago",
            action_items=_items(
                "Schedule design system review",
                "Plan user testing sessions",
            ),
            participants=["Maria Santos"],
            tags=["product design", "user experience", "design system", "collaboration"],
        ),
        ContentRecord(
            type=ContentType.MESSAGE,
            platform=Platform.SLACK,
            priority=Priority.MEDIUM,
            title="Prototype Testing Results",
            subtitle="UX Research & Design",
            body_text="Interactive prototype testing reveals navigation confusion in 60% of users. Need "
                      "design iterations before development handoff next week.",
            timestamp_label="3 hours ago",
            action_items=_items(
                "Analyze prototype test recordings",
                "Redesign navigation flow",
                "Create updated interactive prototype",
                "Schedule follow-up user testing",
            ),
            participants=["UX Research", "Product Design Team"],
            tags=["prototype testing", "navigation", "user testing", "design iteration"],
        ),
        ContentRecord(
            type=ContentType.CONVERSATION,
            platform=Platform.TEAMS,
            priority=Priority.LOW,
            title="Product Design All-Hands",
            subtitle="All Product & Design Teams",
            body_text="Monthly sync covering design system updates, research insights, product feature "
                      "prioritization, and cross-team collaboration.",
            timestamp_label="1 day ago",
            action_items=_items(
                "Review design system changelog",
                "Share research findings",
                "Align on feature priorities",
            ),
            participants=["Product Team", "Design Team", "Research Team"],
            tags=["design all-hands", "design system", "research insights", "collaboration"],
        ),
        ContentRecord(
            type=ContentType.TOPIC,
            platform=Platform.GMAIL,
            priority=Priority.HIGH,
            title="Product Discovery Workshop",
            subtitle="Product Management & Research",
            body_text="Intensive 2-day workshop on user needs identification, problem validation "
                      "methodologies, and product opportunity assessment.",
            timestamp_label="4 hours ago",
            action_items=_items(
                "Prepare user persona research",
                "Define problem hypotheses",
                "Create opportunity scoring framework",
                "Schedule stakeholder interviews",
            ),
            participants=["Product Managers", "Product Researchers"],
            tags=["product discovery", "user needs", "problem validation", "opportunity assessment"],
        ),
        ContentRecord(
            type=ContentType.MESSAGE,
            platform=Platform.SLACK,
            priority=Priority.HIGH,
            title="Q1 Performance Review",
            subtitle="Product Team Quarterly Review",
            body_text="Comprehensive review of Q1 goals, metrics achieved, and strategic learnings for "
                      "upcoming quarter planning.",
            timestamp_label="1 month ago",
            action_items=_items(
                "Analyze Q1 metrics",
                "Document key learnings",
                "Prepare Q2 strategic plan",
            ),
            participants=["Product Team", "Leadership"],
            tags=["quarterly review", "performance", "metrics", "strategy"],
        ),
        ContentRecord(
            type=ContentType.CONVERSATION,
            platform=Platform.TEAMS,
            priority=Priority.MEDIUM,
            title="Design System Migration",
            subtitle="Design & Engineering Teams",
            body_text="Major design system overhaul completed, migrating legacy components to new design "
                      "tokens and component architecture.",
            timestamp_label="2 months ago",
            action_items=_items(
                "Complete component audit",
                "Update design documentation",
                "Train teams on new system",
            ),
            participants=["Design System Team", "Engineering"],
            tags=["design system", "migration", "components", "design tokens"],
        ),
        ContentRecord(
            type=ContentType.TOPIC,
            platform=Platform.OUTLOOK,
            priority=Priority.LOW,
            title="Annual Product Strategy",
            subtitle="Strategic Planning Session",
            body_text="Annual product roadmap and strategic direction setting for the upcoming year based "
                      "on market research and user feedback.",
            timestamp_label="4 months ago",
            action_items=_items(
                "Conduct market analysis",
                "Review user feedback",
                "Define strategic priorities",
            ),
            participants=["Product Leadership", "Strategy Team"],
            tags=["annual planning", "product strategy", "roadmap", "market analysis"],
        ),
        ContentRecord(
            type=ContentType.MESSAGE,
            platform=Platform.DISCORD,
            priority=Priority.MEDIUM,
            title="User Research Initiative",
            subtitle="Research Team Retrospective",
            body_text="Last quarter's user research initiative results, methodology improvements, and "
                      "recommendations for ongoing research programs.",
            timestamp_label="5 months ago",
            action_items=_items(
                "Analyze research outcomes",
                "Improve research methodology",
                "Plan ongoing research program",
            ),
            participants=["Research Team", "Product Team"],
            tags=["user research", "retrospective", "methodology", "research program"],
        ),
        ContentRecord(
            type=ContentType.CONTACT,
            platform=Platform.ZOOM,
            priority=Priority.HIGH,
            title="Product Leadership Sync",
            subtitle="Executive Team Alignment",
            body_text="Strategic alignment session between product leadership and executive team on "
                      "company direction and product priorities.",
            timestamp_label="3 months ago",
            action_items=_items(
                "Align on strategic direction",
                "Review product priorities",
                "Plan resource allocation",
            ),
            participants=["Product Leadership", "Executive Team"],
            tags=["leadership", "strategy", "alignment", "priorities"],
        ),
    ]


def _action_item_from(raw: Any) -> ActionItem:
    if isinstance(raw, str):
        return ActionItem(text=raw)
    if isinstance(raw, dict) and "text" in raw:
        return ActionItem(text=str(raw["text"]), completed=bool(raw.get("completed", False)))
    raise ValueError(f"invalid action item: {raw!r}")


def record_from_dict(data: Dict[str, Any]) -> ContentRecord:
    """Build a record from a plain mapping, parsing facet fields strictly."""
    for required in ("type", "platform", "priority", "title"):
        if required not in data:
            raise ValueError(f"missing required field '{required}'")

    return ContentRecord(
        id=str(data.get("id") or ""),
        type=ContentType.parse(data["type"]),
        platform=Platform.parse(data["platform"]),
        priority=Priority.parse(data["priority"]),
        title=str(data["title"]),
        subtitle=str(data.get("subtitle", "")),
        body_text=str(data.get("body_text", data.get("content", ""))),
        timestamp_label=str(data.get("timestamp_label", data.get("timestamp", ""))),
        action_items=[_action_item_from(i) for i in data.get("action_items") or []],
        participants=[str(p) for p in data.get("participants") or []],
        tags=[str(t) for t in data.get("tags") or []],
    )


def load_dataset(path: Path) -> List[ContentRecord]:
    """
    Load records from a YAML file holding a list of mappings.

    Raises DatasetError naming the offending record on the first bad entry.
    """
    path = Path(path)
    logger.info(f"Loading dataset from: {path}")
    try:
        with open(path, "r") as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise DatasetError(f"Dataset file not found: {path}") from e
    except yaml.YAMLError as e:
        raise DatasetError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        logger.warning(f"Dataset file is empty: {path}")
        return []
    if not isinstance(raw, list):
        raise DatasetError(f"Expected a list of records in {path}, got {type(raw).__name__}")

    records = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise DatasetError("record must be a mapping", index=i)
        try:
            records.append(record_from_dict(entry))
        except (CommGlassError, ValueError) as e:
            raise DatasetError(str(e), index=i) from e

    logger.debug(f"Loaded {len(records)} records from {path}")
    return records
