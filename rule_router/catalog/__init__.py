from rule_router.catalog.catalog import RuleCatalog
from rule_router.catalog.parser import parse_index, parse_rule_directory
from rule_router.catalog.repository import CatalogRepository, resolve_catalog_source

__all__ = [
    "RuleCatalog",
    "CatalogRepository",
    "parse_index",
    "parse_rule_directory",
    "resolve_catalog_source",
]
