"""Context-to-rule resolution: match, expand, then deduplicate and limit."""

from __future__ import annotations

import logging

from rule_router.catalog.catalog import RuleCatalog
from rule_router.expander import expand_matches
from rule_router.limiter import limit_candidates
from rule_router.matcher import match_rules
from rule_router.models import ContextSignals, ContextTier, ResolutionResult, RuleMatch

logger = logging.getLogger(__name__)


def resolve(
    catalog: RuleCatalog,
    signals: ContextSignals,
    tier: ContextTier = ContextTier.FEATURE_BUILD,
) -> ResolutionResult:
    """Pick the ordered, capped set of rule ids that apply to ``signals``.

    Never raises on input anomalies: unknown explicit ids, absent manifests
    and empty requests only shrink the result.
    """
    tier = ContextTier(tier)
    candidates: list[RuleMatch] = []
    if not signals.disable_auto_load:
        candidates = expand_matches(catalog, match_rules(catalog, signals), signals)

    result = limit_candidates(catalog, candidates, signals, tier)
    logger.debug(
        "Resolved %d rule(s) for tier %s: %s",
        len(result.ordered_rule_ids),
        tier.value,
        ", ".join(result.ordered_rule_ids) or "-",
    )
    return result
