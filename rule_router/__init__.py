"""Select the rule documents an AI coding assistant should load for a context."""

from rule_router.catalog import CatalogRepository, RuleCatalog
from rule_router.models import (
    AutoInclude,
    ContextSignals,
    ContextTier,
    IncludeCondition,
    ManifestTrigger,
    MatchTier,
    ResolutionResult,
    RuleCategory,
    RuleDescriptor,
)
from rule_router.resolver import resolve
from rule_router.signals import build_signals

__version__ = "0.1.0"

__all__ = [
    "AutoInclude",
    "CatalogRepository",
    "ContextSignals",
    "ContextTier",
    "IncludeCondition",
    "ManifestTrigger",
    "MatchTier",
    "ResolutionResult",
    "RuleCatalog",
    "RuleCategory",
    "RuleDescriptor",
    "build_signals",
    "resolve",
]
