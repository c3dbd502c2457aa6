"""Load the rule catalog once and hand out the same immutable instance."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from rule_router.catalog.catalog import RuleCatalog
from rule_router.catalog.parser import parse_index, parse_rule_directory
from rule_router.constants import CATALOG_INDEX_FILENAME

logger = logging.getLogger(__name__)

BUNDLED_CATALOG_PATH = (
    Path(__file__).resolve().parent.parent / "data" / CATALOG_INDEX_FILENAME
)


def resolve_catalog_source(
    explicit: Optional[Path] = None, configured: Optional[str] = None
) -> Path:
    """Pick the catalog source: explicit path, then user config, then bundled."""
    if explicit is not None:
        return Path(explicit).expanduser()
    if configured:
        return Path(configured).expanduser()
    return BUNDLED_CATALOG_PATH


class CatalogRepository:
    def __init__(self, source: Optional[Path] = None) -> None:
        self._source = source or BUNDLED_CATALOG_PATH
        self._catalog: Optional[RuleCatalog] = None
        self._lock = threading.Lock()

    @property
    def source(self) -> Path:
        return self._source

    @property
    def is_ready(self) -> bool:
        return self._catalog is not None

    def load_catalog(self) -> RuleCatalog:
        if self._catalog is not None:
            return self._catalog
        with self._lock:
            if self._catalog is None:
                self._catalog = self._build()
        return self._catalog

    def _build(self) -> RuleCatalog:
        source = self._source
        index = source / CATALOG_INDEX_FILENAME if source.is_dir() else None
        if index is not None and index.is_file():
            rules = parse_index(index)
        elif source.is_dir():
            rules = parse_rule_directory(source)
        else:
            rules = parse_index(source)
        catalog = RuleCatalog(rules)
        logger.debug("Loaded %d rule(s) from %s", len(catalog), source)
        return catalog
