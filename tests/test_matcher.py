from rule_router.catalog.catalog import RuleCatalog
from rule_router.matcher import match_rules
from rule_router.models import (
    ContextSignals,
    ManifestTrigger,
    MatchTier,
    RuleCategory,
    RuleDescriptor,
)


def _catalog() -> RuleCatalog:
    return RuleCatalog(
        [
            RuleDescriptor(
                id="flutter",
                category=RuleCategory.MOBILE,
                extension_triggers=frozenset({".dart"}),
                manifest_triggers=(ManifestTrigger("pubspec.yaml", "flutter"),),
                keyword_triggers=("flutter",),
            ),
            RuleDescriptor(
                id="debugging",
                category=RuleCategory.COMMON,
                keyword_triggers=("fix", "debug"),
            ),
        ]
    )


def _pairs(matches) -> list[tuple[str, MatchTier]]:
    return [(match.rule.id, match.tier) for match in matches]


def test_no_signals_no_matches() -> None:
    assert match_rules(_catalog(), ContextSignals()) == []


def test_rule_emitted_once_per_matching_tier() -> None:
    signals = ContextSignals(
        active_extension=".dart",
        manifest_contents={"pubspec.yaml": "dependencies:\n  flutter:\n    sdk: flutter\n"},
        request_text="fix the flutter layout",
        explicit_rule_ids=frozenset({"flutter"}),
    )
    assert _pairs(match_rules(_catalog(), signals)) == [
        ("flutter", MatchTier.EXPLICIT_MENTION),
        ("flutter", MatchTier.FILE_EXTENSION),
        ("flutter", MatchTier.PROJECT_MANIFEST),
        ("flutter", MatchTier.KEYWORD),
        ("debugging", MatchTier.KEYWORD),
    ]


def test_unknown_explicit_ids_are_dropped() -> None:
    signals = ContextSignals(explicit_rule_ids=frozenset({"ghost", "debugging"}))
    assert _pairs(match_rules(_catalog(), signals)) == [
        ("debugging", MatchTier.EXPLICIT_MENTION)
    ]


def test_disable_auto_load_returns_nothing() -> None:
    signals = ContextSignals(
        active_extension=".dart",
        explicit_rule_ids=frozenset({"flutter"}),
        disable_auto_load=True,
    )
    assert match_rules(_catalog(), signals) == []


def test_absent_manifest_contributes_nothing() -> None:
    signals = ContextSignals(manifest_contents={"package.json": '{"flutter": true}'})
    assert match_rules(_catalog(), signals) == []
