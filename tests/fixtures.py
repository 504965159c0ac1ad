"""
Shared Test Fixtures

Explicit, deterministic builders. No random generation.
"""

from datetime import datetime, timezone
from typing import Optional

from jumpscare.catalog import InMemoryCatalog
from jumpscare.contracts.records import (
    CanonicalRecord, CatalogItem, ItemKind, ScareIntensity, ScareType,
    UNITS_PER_SECOND,
)


# =============================================================================
# FIXED TIMESTAMPS (deterministic)
# =============================================================================

T_CREATED = datetime(2026, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return T_CREATED


# =============================================================================
# CATALOG FIXTURES
# =============================================================================

WEAPONS_ID = "item-weapons-2025"
WEAPONS_IMDB = "tt26581740"
WEAPONS_TMDB = "1078605"

WEAPONS = CatalogItem(
    item_id=WEAPONS_ID,
    name="Weapons",
    production_year=2025,
    provider_ids=(("Imdb", WEAPONS_IMDB), ("Tmdb", WEAPONS_TMDB)),
    kind=ItemKind.MOVIE
)

SINISTER = CatalogItem(
    item_id="item-sinister",
    name="Sinister",
    production_year=2012,
    provider_ids=(("Imdb", "tt1922777"),),
    kind=ItemKind.MOVIE
)

INSIDIOUS_CHAPTER_2 = CatalogItem(
    item_id="item-insidious-2",
    name="Insidious: Chapter 2",
    production_year=2013,
    provider_ids=(("Tmdb", "91586"),),
    kind=ItemKind.MOVIE
)

HILL_HOUSE_EPISODE = CatalogItem(
    item_id="item-hill-house-s01e05",
    name="The Bent-Neck Lady",
    production_year=2018,
    provider_ids=(("Imdb", "tt6763680"),),
    kind=ItemKind.EPISODE
)

HILL_HOUSE_SERIES = CatalogItem(
    item_id="item-hill-house",
    name="The Haunting of Hill House",
    production_year=2018,
    kind=ItemKind.SERIES
)


def create_catalog(*extra: CatalogItem) -> InMemoryCatalog:
    """Standard catalog used across tests."""
    return InMemoryCatalog([
        WEAPONS, SINISTER, INSIDIOUS_CHAPTER_2, HILL_HOUSE_EPISODE, HILL_HOUSE_SERIES,
        *extra
    ])


class BrokenCatalog:
    """Catalog collaborator that is unreachable."""

    def query_video_items(self, recursive=True):
        raise ConnectionError("library offline")


# =============================================================================
# RECORD FIXTURES
# =============================================================================

def seconds(value: int) -> int:
    return value * UNITS_PER_SECOND


def make_record(
    item_id: str = WEAPONS_ID,
    timestamp_units: int = 711 * UNITS_PER_SECOND,
    record_id: Optional[str] = None,
    intensity: Optional[ScareIntensity] = ScareIntensity.Minor,
    scare_type: Optional[ScareType] = ScareType.Visual,
    item_name: Optional[str] = "Weapons (2025)",
) -> CanonicalRecord:
    return CanonicalRecord(
        record_id=record_id or f"rec_{item_id}_{timestamp_units}",
        item_id=item_id,
        timestamp_units=timestamp_units,
        description="Ghost appears",
        scare_type=scare_type,
        intensity=intensity,
        item_name=item_name,
        source="manual",
        created_at=T_CREATED
    )


# =============================================================================
# CSV FIXTURES
# =============================================================================

CSV_HEADER = "ItemName,IMDb,TMDb,Timestamp,Intensity,Description,Type"

WEAPONS_ROW = "Weapons (2025),tt26581740,1078605,00:11:51,Minor,Ghost appears,Visual"


def csv_of(*rows: str) -> str:
    return "\n".join((CSV_HEADER,) + rows) + "\n"


def weapons_csv_17() -> str:
    """17 distinct Weapons scares: 3 Major, 14 Minor."""
    rows = []
    for i in range(17):
        intensity = "Major" if i < 3 else "Minor"
        minute, second = divmod(60 + i * 37, 60)
        rows.append(
            f"Weapons (2025),tt26581740,1078605,{minute:02d}:{second:02d},"
            f"{intensity},Scare {i + 1},Combined"
        )
    return csv_of(*rows)
