"""
Models — input schema and loaders for a channel analysis snapshot.

Every stage of the engine works on the frozen records built here. Raw
snapshot data (dicts decoded from the YouTube API, YAML or JSON) is
validated once at the boundary; malformed numbers are coerced to 0 and
contract violations raise InvalidInputError.
"""

import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional, Tuple


class InvalidInputError(Exception):
    """Raised when analysis input violates the call contract."""
    pass


@dataclass(frozen=True)
class ContentItem:
    """One published video and its raw counters."""
    video_id: str
    title: str
    published_at: datetime
    duration_seconds: int = 0
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    tags: Tuple[str, ...] = ()
    description: str = ""

    @property
    def like_to_view_ratio(self) -> float:
        """Likes per view as a fraction (0 when the video has no views)."""
        if self.view_count <= 0:
            return 0.0
        return self.like_count / self.view_count


@dataclass(frozen=True)
class ChannelAggregates:
    subscriber_count: int
    view_count: int
    video_count: int


@dataclass(frozen=True)
class MarketSignals:
    """Presence flags for externally supplied market data."""
    competitors: bool = False
    audience: bool = False
    trends: bool = False
    business_profile: bool = False


# Each required aggregate accepts its camelCase or snake_case spelling
REQUIRED_AGGREGATE_FIELDS = {
    "subscriber_count": ("subscriberCount", "subscriber_count"),
    "view_count": ("viewCount", "view_count"),
    "video_count": ("videoCount", "video_count"),
}

ITEM_FIELD_ALIASES = {
    "video_id": ("id", "videoId", "video_id"),
    "title": ("title",),
    "published_at": ("publishedAt", "published_at"),
    "duration": ("duration", "durationSeconds", "duration_seconds"),
    "view_count": ("viewCount", "view_count"),
    "like_count": ("likeCount", "like_count"),
    "comment_count": ("commentCount", "comment_count"),
    "tags": ("tags",),
    "description": ("description",),
}

MARKET_FIELD_ALIASES = {
    "competitors": ("competitors",),
    "audience": ("audience",),
    "trends": ("trends",),
    "business_profile": ("businessProfile", "business_profile", "business"),
}

_ISO_DURATION = re.compile(r"^P(?:(\d+)D)?T?(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?$")


def _lookup(data: Mapping, aliases: Iterable[str], default: Any = None) -> Any:
    for key in aliases:
        if key in data:
            return data[key]
    return default


def to_count(value: Any) -> int:
    """Coerce a raw counter to a non-negative int; junk becomes 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if number != number or number in (float("inf"), float("-inf")):
        return 0
    return max(int(number), 0)


def parse_duration(value: Any) -> int:
    """Parse seconds or an ISO-8601 duration (PT1H2M3S) into seconds."""
    if isinstance(value, str):
        match = _ISO_DURATION.match(value.strip().upper())
        if match and value.strip():
            days, hours, minutes, seconds = match.groups()
            return (
                int(days or 0) * 86400
                + int(hours or 0) * 3600
                + int(minutes or 0) * 60
                + int(float(seconds or 0))
            )
    return to_count(value)


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO 8601 timestamp (or datetime) to an aware UTC datetime.

    Raises:
        InvalidInputError: If the value is missing or unparseable.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise InvalidInputError(f"Unparseable timestamp: {value!r}")
    else:
        raise InvalidInputError(f"Expected an ISO 8601 timestamp, got {value!r}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def load_item(data: Any, index: int = 0) -> ContentItem:
    """Build a ContentItem from a raw record."""
    if isinstance(data, ContentItem):
        # Naive or non-UTC datetimes on prebuilt items are normalised like raw ones
        return replace(data, published_at=parse_timestamp(data.published_at))
    if not isinstance(data, Mapping):
        raise InvalidInputError(
            f"Item #{index + 1} must be a mapping, got {type(data).__name__}"
        )

    video_id = _lookup(data, ITEM_FIELD_ALIASES["video_id"])
    if video_id is None or str(video_id).strip() == "":
        raise InvalidInputError(f"Item #{index + 1} has no identifier")

    published_raw = _lookup(data, ITEM_FIELD_ALIASES["published_at"])
    if published_raw is None:
        raise InvalidInputError(f"Item '{video_id}' has no publish timestamp")

    tags = _lookup(data, ITEM_FIELD_ALIASES["tags"]) or ()
    if isinstance(tags, str):
        tags = (tags,)
    elif not isinstance(tags, (list, tuple)):
        tags = ()

    title = _lookup(data, ITEM_FIELD_ALIASES["title"])
    description = _lookup(data, ITEM_FIELD_ALIASES["description"])

    return ContentItem(
        video_id=str(video_id),
        title=str(title) if title is not None else "",
        published_at=parse_timestamp(published_raw),
        duration_seconds=parse_duration(_lookup(data, ITEM_FIELD_ALIASES["duration"])),
        view_count=to_count(_lookup(data, ITEM_FIELD_ALIASES["view_count"])),
        like_count=to_count(_lookup(data, ITEM_FIELD_ALIASES["like_count"])),
        comment_count=to_count(_lookup(data, ITEM_FIELD_ALIASES["comment_count"])),
        tags=tuple(str(t) for t in tags if t is not None),
        description=str(description) if description is not None else "",
    )


def load_items(items: Any) -> Tuple[ContentItem, ...]:
    """Validate and convert the item batch. The input is never mutated."""
    if not isinstance(items, (list, tuple)):
        raise InvalidInputError(
            f"items must be a list, got {type(items).__name__}"
        )
    return tuple(load_item(raw, i) for i, raw in enumerate(items))


def load_aggregates(data: Any) -> ChannelAggregates:
    """Build ChannelAggregates; every counter key must be present."""
    if isinstance(data, ChannelAggregates):
        return data
    if not isinstance(data, Mapping):
        raise InvalidInputError(
            f"channel aggregates must be a mapping, got {type(data).__name__}"
        )

    missing = [
        aliases[0] for aliases in REQUIRED_AGGREGATE_FIELDS.values()
        if not any(key in data for key in aliases)
    ]
    if missing:
        raise InvalidInputError(f"channel aggregates are missing: {missing}")

    return ChannelAggregates(**{
        field_name: to_count(_lookup(data, aliases))
        for field_name, aliases in REQUIRED_AGGREGATE_FIELDS.items()
    })


def load_market_signals(data: Any) -> MarketSignals:
    """Reduce market data to presence flags. None means no signals."""
    if data is None:
        return MarketSignals()
    if isinstance(data, MarketSignals):
        return data
    if not isinstance(data, Mapping):
        raise InvalidInputError(
            f"market signals must be a mapping, got {type(data).__name__}"
        )
    return MarketSignals(**{
        field_name: bool(_lookup(data, aliases))
        for field_name, aliases in MARKET_FIELD_ALIASES.items()
    })


def resolve_now(now: Optional[Any]) -> datetime:
    """Return the analysis clock as an aware UTC datetime."""
    if now is None:
        return datetime.now(timezone.utc)
    return parse_timestamp(now)
