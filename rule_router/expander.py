"""Follow ``auto_includes`` edges from matched rules."""

from __future__ import annotations

import heapq
import logging
from typing import Iterable

from rule_router.catalog.catalog import RuleCatalog
from rule_router.models import ContextSignals, MatchTier, RuleMatch

logger = logging.getLogger(__name__)


def inherited_tier(tier: MatchTier) -> MatchTier:
    """Tier given to a rule pulled in by a rule matched at ``tier``."""
    return min(tier, MatchTier.FILE_EXTENSION)


def expand_matches(
    catalog: RuleCatalog,
    matches: Iterable[RuleMatch],
    signals: ContextSignals,
) -> list[RuleMatch]:
    """Return the matches plus every rule reachable through include edges.

    Candidates are visited highest tier first (catalog order within a tier),
    and each rule id is expanded at most once. Tiers never rise along an
    edge, so the first visit is always at the best reachable tier and
    include cycles terminate.
    """
    queue: list[tuple[int, int, int, str]] = []
    sequence = 0
    for match in matches:
        heapq.heappush(
            queue,
            (-match.tier, catalog.position(match.rule.id), sequence, match.rule.id),
        )
        sequence += 1

    visited: dict[str, MatchTier] = {}
    expanded: list[RuleMatch] = []
    while queue:
        negative_tier, _, _, rule_id = heapq.heappop(queue)
        if rule_id in visited:
            continue
        tier = MatchTier(-negative_tier)
        visited[rule_id] = tier
        rule = catalog.get_by_id(rule_id)
        if rule is None:
            continue
        expanded.append(RuleMatch(rule, tier))

        child_tier = inherited_tier(tier)
        for edge in rule.auto_includes:
            if edge.target in visited:
                continue
            if not edge.applies(signals.manifest_contents):
                logger.debug(
                    "Skipping include %s -> %s (%s not satisfied)",
                    rule_id,
                    edge.target,
                    edge.condition.describe() if edge.condition else "condition",
                )
                continue
            if edge.target not in catalog:
                continue
            heapq.heappush(
                queue,
                (-child_tier, catalog.position(edge.target), sequence, edge.target),
            )
            sequence += 1

    return expanded
