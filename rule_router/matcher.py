"""Map context signals to candidate rules, tagged with the tier that matched."""

from __future__ import annotations

import logging

from rule_router.catalog.catalog import RuleCatalog
from rule_router.models import ContextSignals, MatchTier, RuleMatch

logger = logging.getLogger(__name__)


def match_rules(catalog: RuleCatalog, signals: ContextSignals) -> list[RuleMatch]:
    """Return one entry per (rule, tier) pair that matched.

    A rule may appear several times under different tiers; only the
    limiter collapses them.
    """
    if signals.disable_auto_load:
        return []

    matches: list[RuleMatch] = []

    for rule_id in sorted(signals.explicit_rule_ids):
        rule = catalog.get_by_id(rule_id)
        if rule is None:
            logger.debug("Dropping unknown explicit rule id %r", rule_id)
            continue
        matches.append(RuleMatch(rule, MatchTier.EXPLICIT_MENTION))

    if signals.active_extension:
        for rule in catalog.find_by_extension(signals.active_extension):
            matches.append(RuleMatch(rule, MatchTier.FILE_EXTENSION))

    if signals.manifest_contents:
        for rule in catalog.find_by_manifest(signals.manifest_contents):
            matches.append(RuleMatch(rule, MatchTier.PROJECT_MANIFEST))

    if signals.request_text:
        for rule in catalog.find_by_keyword(signals.request_text):
            matches.append(RuleMatch(rule, MatchTier.KEYWORD))

    logger.debug("Matched %d (rule, tier) pairs", len(matches))
    return matches
