"""Collapse candidates to one tier per rule, order them and apply the cap."""

from __future__ import annotations

import logging
from typing import Iterable

from rule_router.catalog.catalog import RuleCatalog
from rule_router.models import (
    ContextSignals,
    ContextTier,
    MatchTier,
    ResolutionResult,
    RuleMatch,
)

logger = logging.getLogger(__name__)


def best_tiers(candidates: Iterable[RuleMatch]) -> dict[str, MatchTier]:
    best: dict[str, MatchTier] = {}
    for candidate in candidates:
        current = best.get(candidate.rule.id)
        if current is None or candidate.tier > current:
            best[candidate.rule.id] = candidate.tier
    return best


def limit_candidates(
    catalog: RuleCatalog,
    candidates: Iterable[RuleMatch],
    signals: ContextSignals,
    tier: ContextTier,
) -> ResolutionResult:
    explicit = [rule_id for rule_id in catalog.ids() if rule_id in signals.explicit_rule_ids]

    if signals.disable_auto_load:
        return ResolutionResult(
            ordered_rule_ids=tuple(explicit),
            dropped_for_limit=(),
            tiers={rule_id: MatchTier.EXPLICIT_MENTION for rule_id in explicit},
        )

    tiers = best_tiers(candidates)
    ordered = sorted(tiers, key=lambda rule_id: (-tiers[rule_id], catalog.position(rule_id)))

    explicit_set = set(explicit)
    kept: list[str] = []
    dropped: list[str] = []
    budget = tier.cap
    for rule_id in ordered:
        if rule_id in explicit_set:
            kept.append(rule_id)
        elif budget > 0:
            kept.append(rule_id)
            budget -= 1
        else:
            dropped.append(rule_id)

    if dropped:
        logger.debug(
            "Context tier %s (cap %d) dropped %d rule(s): %s",
            tier.value,
            tier.cap,
            len(dropped),
            ", ".join(dropped),
        )

    return ResolutionResult(
        ordered_rule_ids=tuple(kept),
        dropped_for_limit=tuple(dropped),
        tiers=tiers,
    )
