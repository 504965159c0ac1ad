"""
Record Contracts

Immutable data structures for jump scare records, catalog items and
derived display intervals.

BOUNDARY: every layer exchanges data through these contracts.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# 10,000,000 units = 1 second (host's native tick resolution)
UNITS_PER_SECOND = 10_000_000

DEFAULT_START_DELTA_SECONDS = -2
DEFAULT_END_DELTA_SECONDS = 2


# =============================================================================
# ENUMS
# =============================================================================

@dataclass(frozen=True)
class ParsedEnum:
    """
    Outcome of parsing free text into an enum member.

    `recognized` is False when the text matched nothing and `value`
    holds the documented default instead.
    """
    value: Enum
    recognized: bool


class _LenientEnum(Enum):
    """Enum parsed case-insensitively by member name, with a default."""

    @classmethod
    def default(cls) -> Enum:
        raise NotImplementedError

    @classmethod
    def from_name(cls, text: Optional[str]) -> Optional[Enum]:
        if text is None:
            return None
        wanted = text.strip().lower()
        for member in cls:
            if member.name.lower() == wanted:
                return member
        return None

    @classmethod
    def parse(cls, text: Optional[str]) -> ParsedEnum:
        member = cls.from_name(text)
        if member is None:
            return ParsedEnum(value=cls.default(), recognized=False)
        return ParsedEnum(value=member, recognized=True)


class ScareIntensity(_LenientEnum):
    """Intensity level. Maps to the community "Major"/"Minor" split."""
    Minor = "Minor"
    Major = "Major"

    @classmethod
    def default(cls) -> ScareIntensity:
        return cls.Minor


class ScareType(_LenientEnum):
    """What kind of scare it is."""
    Visual = "Visual"
    Audio = "Audio"
    Combined = "Combined"
    Other = "Other"

    @classmethod
    def default(cls) -> ScareType:
        return cls.Other


class ItemKind(Enum):
    """Kinds of catalog items."""
    MOVIE = "Movie"
    EPISODE = "Episode"
    VIDEO = "Video"
    MUSIC_VIDEO = "MusicVideo"
    SERIES = "Series"
    SEASON = "Season"
    AUDIO = "Audio"


VIDEO_KINDS = frozenset({
    ItemKind.MOVIE, ItemKind.EPISODE, ItemKind.VIDEO, ItemKind.MUSIC_VIDEO
})


# =============================================================================
# CATALOG CONTRACTS
# =============================================================================

@dataclass(frozen=True)
class CatalogItem:
    """A canonical media item as exposed by the host catalog."""
    item_id: str
    name: str
    production_year: Optional[int] = None
    provider_ids: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)
    kind: ItemKind = ItemKind.MOVIE

    def provider_id(self, provider: str) -> Optional[str]:
        """Get an external id by provider name (case-insensitive)."""
        wanted = provider.lower()
        for name, value in self.provider_ids:
            if name.lower() == wanted:
                return value
        return None

    @property
    def is_video(self) -> bool:
        return self.kind in VIDEO_KINDS

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CatalogItem:
        year = data.get('production_year')
        return cls(
            item_id=str(data['id']),
            name=data['name'],
            production_year=int(year) if year is not None else None,
            provider_ids=tuple(
                (str(k), str(v)) for k, v in (data.get('provider_ids') or {}).items()
            ),
            kind=ItemKind(data.get('kind', ItemKind.MOVIE.value))
        )


@dataclass(frozen=True)
class CatalogMatch:
    """Which item a name resolved to, and how."""
    item_id: str
    method: str  # "exact", "contains", "title_year", "title_only"
    ambiguous: bool = False


# =============================================================================
# RECORD CONTRACTS
# =============================================================================

def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _from_iso(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class CanonicalRecord:
    """
    One jump scare event bound to a catalog item.

    Single point in time; display intervals are derived on demand
    from the configured offsets and never stored.
    """
    record_id: str
    item_id: str
    timestamp_units: int
    description: Optional[str] = None
    scare_type: Optional[ScareType] = None
    intensity: Optional[ScareIntensity] = None
    item_name: Optional[str] = None
    source: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.item_id:
            raise ValueError("item_id must be a non-empty string")
        if self.timestamp_units < 0:
            raise ValueError("timestamp_units must be non-negative")

    @property
    def dedup_key(self) -> Tuple[str, int]:
        return (self.item_id, self.timestamp_units)

    def to_dict(self) -> dict:
        return {
            'id': self.record_id,
            'item_id': self.item_id,
            'timestamp_ticks': self.timestamp_units,
            'description': self.description,
            'type': self.scare_type.name if self.scare_type else None,
            'intensity': self.intensity.name if self.intensity else None,
            'item_name': self.item_name,
            'source': self.source,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CanonicalRecord:
        return cls(
            record_id=str(data['id']),
            item_id=str(data['item_id']),
            timestamp_units=int(data['timestamp_ticks']),
            description=data.get('description'),
            scare_type=ScareType.from_name(data.get('type')),
            intensity=ScareIntensity.from_name(data.get('intensity')),
            item_name=data.get('item_name'),
            source=data.get('source'),
            created_at=_from_iso(data.get('created_at')),
            updated_at=_from_iso(data.get('updated_at'))
        )


@dataclass(frozen=True)
class DisplayInterval:
    """Derived [start, end) window shown on the playback timeline."""
    segment_id: str
    item_id: str
    start_units: int
    end_units: int

    def __post_init__(self):
        if self.start_units < 0:
            raise ValueError("start_units must be non-negative")
        if self.start_units >= self.end_units:
            raise ValueError("start_units must be before end_units")

    def to_dict(self) -> dict:
        return {
            'id': self.segment_id,
            'item_id': self.item_id,
            'start_ticks': self.start_units,
            'end_ticks': self.end_units
        }


# =============================================================================
# CONFIGURATION CONTRACT
# =============================================================================

@dataclass
class PluginConfiguration:
    """Persisted plugin state: offsets plus the record collection."""
    start_delta_seconds: int = DEFAULT_START_DELTA_SECONDS
    end_delta_seconds: int = DEFAULT_END_DELTA_SECONDS
    records: List[CanonicalRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'start_delta_seconds': self.start_delta_seconds,
            'end_delta_seconds': self.end_delta_seconds,
            'records': [r.to_dict() for r in self.records]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PluginConfiguration:
        return cls(
            start_delta_seconds=int(data.get('start_delta_seconds', DEFAULT_START_DELTA_SECONDS)),
            end_delta_seconds=int(data.get('end_delta_seconds', DEFAULT_END_DELTA_SECONDS)),
            records=[CanonicalRecord.from_dict(r) for r in data.get('records', [])]
        )


# =============================================================================
# OUTCOME CONTRACTS
# =============================================================================

@dataclass(frozen=True)
class MergeResult:
    """Outcome of a deduplicating merge into the store."""
    added_count: int
    skipped_count: int


@dataclass(frozen=True)
class ImportStatistics:
    """Aggregate counts over the stored records."""
    total_records: int = 0
    distinct_items: int = 0
    major_count: int = 0
    minor_count: int = 0

    def to_dict(self) -> dict:
        return {
            'total_records': self.total_records,
            'distinct_items': self.distinct_items,
            'major_count': self.major_count,
            'minor_count': self.minor_count
        }


@dataclass(frozen=True)
class ImportResult:
    """
    Outcome of an import.

    Only aggregate figures are surfaced; individual row failures are
    logged, never returned.
    """
    success: bool
    message: str
    total_rows: int = 0
    imported_count: int = 0
    skipped_count: int = 0

    def to_dict(self) -> dict:
        return {
            'success': self.success,
            'message': self.message,
            'total_rows': self.total_rows,
            'imported_count': self.imported_count,
            'skipped_count': self.skipped_count
        }
