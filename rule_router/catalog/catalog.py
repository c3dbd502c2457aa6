"""Immutable registry of rule descriptors with trigger indexes."""

from __future__ import annotations

from collections import Counter
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from rule_router.errors import (
    DuplicateRuleIdError,
    SelfIncludeError,
    UnknownIncludeTargetError,
)
from rule_router.models import RuleCategory, RuleDescriptor
from rule_router.signals import normalize_extension


class RuleCatalog:
    """Read-only set of rules, in registration order.

    Construction validates the whole catalog: ids must be unique and every
    include edge must point at another known rule. Once built, the catalog
    is never mutated, so it can be shared between threads.
    """

    def __init__(self, rules: Iterable[RuleDescriptor] = ()) -> None:
        ordered = tuple(rules)
        by_id: dict[str, RuleDescriptor] = {}
        positions: dict[str, int] = {}
        for index, rule in enumerate(ordered):
            if rule.id in by_id:
                raise DuplicateRuleIdError(rule.id)
            by_id[rule.id] = rule
            positions[rule.id] = index

        for rule in ordered:
            for edge in rule.auto_includes:
                if edge.target == rule.id:
                    raise SelfIncludeError(rule.id)
                if edge.target not in by_id:
                    raise UnknownIncludeTargetError(rule.id, edge.target)

        by_extension: dict[str, list[RuleDescriptor]] = {}
        by_manifest: dict[str, list[RuleDescriptor]] = {}
        for rule in ordered:
            for extension in sorted(rule.extension_triggers):
                normalized = normalize_extension(extension)
                if normalized is None:
                    continue
                bucket = by_extension.setdefault(normalized, [])
                if rule not in bucket:
                    bucket.append(rule)
            for trigger in rule.manifest_triggers:
                bucket = by_manifest.setdefault(trigger.filename, [])
                if rule not in bucket:
                    bucket.append(rule)

        self._rules = ordered
        self._by_id: Mapping[str, RuleDescriptor] = MappingProxyType(by_id)
        self._positions: Mapping[str, int] = MappingProxyType(positions)
        self._by_extension = MappingProxyType(
            {key: tuple(value) for key, value in by_extension.items()}
        )
        self._by_manifest = MappingProxyType(
            {key: tuple(value) for key, value in by_manifest.items()}
        )

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[RuleDescriptor]:
        return iter(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._by_id

    def __repr__(self) -> str:
        return f"RuleCatalog({len(self._rules)} rules)"

    def ids(self) -> list[str]:
        return [rule.id for rule in self._rules]

    def get_by_id(self, rule_id: str) -> RuleDescriptor | None:
        return self._by_id.get(rule_id)

    def position(self, rule_id: str) -> int:
        """Registration index of ``rule_id``; used as the ordering tie-break."""
        return self._positions[rule_id]

    def find_by_extension(self, extension: str) -> list[RuleDescriptor]:
        normalized = normalize_extension(extension)
        if normalized is None:
            return []
        return list(self._by_extension.get(normalized, ()))

    def find_by_manifest(self, manifest_contents: Mapping[str, str]) -> list[RuleDescriptor]:
        matched: set[str] = set()
        for filename in manifest_contents:
            for rule in self._by_manifest.get(filename, ()):
                if rule.id in matched:
                    continue
                if any(
                    trigger.matches(manifest_contents)
                    for trigger in rule.manifest_triggers
                ):
                    matched.add(rule.id)
        return [rule for rule in self._rules if rule.id in matched]

    def find_by_keyword(self, request_text: str) -> list[RuleDescriptor]:
        haystack = request_text.lower()
        if not haystack.strip():
            return []
        return [
            rule
            for rule in self._rules
            if any(
                keyword and keyword.lower() in haystack
                for keyword in rule.keyword_triggers
            )
        ]

    def by_category(self, category: RuleCategory | str) -> list[RuleDescriptor]:
        wanted = RuleCategory(category)
        return [rule for rule in self._rules if rule.category == wanted]

    def categories(self) -> dict[str, int]:
        counts = Counter(rule.category.value for rule in self._rules)
        return dict(sorted(counts.items()))
