"""
Catalog Matcher

Resolves free-text titles and external ids to exactly one catalog item.

PRIORITY (first hit wins):
==========================
By external id:
1. IMDb id equality (more reliable)
2. TMDb id equality

By name:
1. Case-insensitive exact name
2. Case-insensitive substring (catalog name contains input)
3. "<title> (<year>)": title equality AND production year equality
4. Title equality alone (year mismatch tolerated, logged as a warning)

Ties inside a rule go to the first item in catalog enumeration order.
The tie is flagged on CatalogMatch.ambiguous but never re-decided.
"""

from __future__ import annotations
import logging
import re
from typing import Callable, List, Optional, Sequence, Tuple

from ..contracts.base import CollaboratorUnavailableError, Error, ErrorCode
from ..contracts.records import CatalogItem, CatalogMatch

logger = logging.getLogger(__name__)

IMDB_PROVIDER = "Imdb"
TMDB_PROVIDER = "Tmdb"

_TITLE_YEAR = re.compile(r'^(.+?)\s*\((\d{4})\)$')


def _first(items: Sequence[CatalogItem],
           predicate: Callable[[CatalogItem], bool]) -> Tuple[Optional[CatalogItem], bool]:
    """Return (first matching item, whether more than one matched)."""
    found: Optional[CatalogItem] = None
    for item in items:
        if predicate(item):
            if found is not None:
                return found, True
            found = item
    return found, False


class CatalogMatcher:
    """
    Read-only matcher over a catalog collaborator.

    Each lookup enumerates the catalog once; nothing is cached.
    """

    def __init__(self, catalog):
        self._catalog = catalog

    def _video_items(self) -> Sequence[CatalogItem]:
        try:
            return self._catalog.query_video_items(recursive=True)
        except Exception as e:
            raise CollaboratorUnavailableError(Error(
                code=ErrorCode.CATALOG_UNAVAILABLE,
                message=f"Catalog query failed: {e}"
            )) from e

    # =========================================================================
    # EXTERNAL ID LOOKUP
    # =========================================================================

    def find_by_external_id(self, imdb_id: Optional[str],
                            tmdb_id: Optional[str]) -> Optional[str]:
        """Find an item by IMDb id, falling back to TMDb id."""
        imdb_id = (imdb_id or '').strip()
        tmdb_id = (tmdb_id or '').strip()

        if not imdb_id and not tmdb_id:
            logger.warning("Both IMDb and TMDb IDs are null or empty")
            return None

        logger.debug("Searching for item with IMDb: %s, TMDb: %s", imdb_id, tmdb_id)
        items = self._video_items()

        for provider, wanted in ((IMDB_PROVIDER, imdb_id), (TMDB_PROVIDER, tmdb_id)):
            if not wanted:
                continue
            item, _ = _first(items, lambda i: i.provider_id(provider) == wanted)
            if item is not None:
                logger.info("Found match by %s ID '%s': %s - %s",
                            provider, wanted, item.item_id, item.name)
                return item.item_id

        logger.warning("No match found for IMDb: %s, TMDb: %s", imdb_id, tmdb_id)
        return None

    # =========================================================================
    # NAME LOOKUP
    # =========================================================================

    def find_by_name(self, item_name: Optional[str]) -> Optional[str]:
        """Find an item by display name; see module docstring for rule order."""
        match = self.match_by_name(item_name)
        return match.item_id if match else None

    def match_by_name(self, item_name: Optional[str]) -> Optional[CatalogMatch]:
        """Like find_by_name, but reports which rule matched and whether it tied."""
        if item_name is None or not item_name.strip():
            logger.warning("Item name is null or empty")
            return None

        logger.debug("Searching for item with name: %s", item_name)
        items = self._video_items()
        wanted = item_name.casefold()

        rules: List[Tuple[str, Callable[[CatalogItem], bool]]] = [
            ("exact", lambda i: i.name.casefold() == wanted),
            ("contains", lambda i: wanted in i.name.casefold()),
        ]

        title_year = _TITLE_YEAR.match(item_name)
        if title_year:
            title = title_year.group(1).strip().casefold()
            year = int(title_year.group(2))
            logger.debug("Extracted title '%s' and year %d", title, year)
            rules.append(("title_year", lambda i: i.name.casefold() == title
                          and i.production_year == year))
            rules.append(("title_only", lambda i: i.name.casefold() == title))

        for method, predicate in rules:
            item, ambiguous = _first(items, predicate)
            if item is None:
                continue

            if method == "title_only":
                logger.warning(
                    "Found title match but year mismatch for '%s': %s - %s (Year: %s)",
                    item_name, item.item_id, item.name, item.production_year)
            else:
                logger.info("Found %s match for '%s': %s - %s",
                            method, item_name, item.item_id, item.name)

            if ambiguous:
                logger.warning(
                    "Ambiguous %s match for '%s': several catalog items qualify, using %s",
                    method, item_name, item.item_id)

            return CatalogMatch(item_id=item.item_id, method=method, ambiguous=ambiguous)

        logger.warning("No match found for item '%s'", item_name)
        return None
