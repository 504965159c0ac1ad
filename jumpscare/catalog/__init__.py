"""
Catalog Collaborator

The host media library, seen only through a read-only query interface.

WHAT THIS LAYER MUST NOT DO:
============================
- Mutate catalog items
- Cache lookups across calls (the host owns freshness)
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence
import json
from pathlib import Path

from ..contracts.records import CatalogItem

from .matcher import CatalogMatcher


# =============================================================================
# CATALOG INTERFACE (Dependency Inversion)
# =============================================================================

class Catalog:
    """
    Abstract catalog interface.

    Implementations must return movies and episodes and expose at least
    the IMDb and TMDb provider ids of each item.
    """

    def query_video_items(self, recursive: bool = True) -> Sequence[CatalogItem]:
        """Enumerate all video-kind items."""
        raise NotImplementedError


# =============================================================================
# IN-MEMORY CATALOG (Reference Implementation)
# =============================================================================

class InMemoryCatalog(Catalog):
    """
    Catalog backed by a fixed list of items.

    Enumeration order is insertion order, which decides first-match-wins
    ties in the matcher.
    """

    def __init__(self, items: Optional[Iterable[CatalogItem]] = None):
        self._items: List[CatalogItem] = list(items or [])

    @classmethod
    def load(cls, path: Path) -> 'InMemoryCatalog':
        """Load items from a JSON list of {id, name, production_year, provider_ids, kind}."""
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls(CatalogItem.from_dict(entry) for entry in data)

    def query_video_items(self, recursive: bool = True) -> Sequence[CatalogItem]:
        return tuple(item for item in self._items if item.is_video)

    def add(self, item: CatalogItem):
        self._items.append(item)

    def __len__(self) -> int:
        return len(self._items)


__all__ = [
    'Catalog',
    'InMemoryCatalog',
    'CatalogMatcher',
]
