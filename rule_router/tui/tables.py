from collections import Counter

from rich.table import Column, Table

from rule_router.health import CatalogHealthReport
from rule_router.manifests import ManifestDetection
from rule_router.models import (
    ContextSignals,
    ContextTier,
    MatchTier,
    ResolutionResult,
    RuleDescriptor,
)
from rule_router.tui.enums import MATCH_TIER_STYLE, UIStyle
from rule_router.utils import compact_home_path


def _tier_text(tier: MatchTier) -> str:
    style = MATCH_TIER_STYLE.get(tier, UIStyle.WHITE.value)
    return f"[{style}]{tier.label}[/{style}]"


class ResolutionTable:
    @staticmethod
    def summary_block(result: ResolutionResult, signals: ContextSignals, tier: ContextTier):
        counts = Counter(result.tiers[rule_id].label for rule_id in result.ordered_rule_ids)
        chips = [f"{key}={value}" for key, value in sorted(counts.items()) if value > 0]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Tier", f"{tier.value} (cap {tier.cap})")
        table.add_row("Extension", signals.active_extension or "-")
        table.add_row(
            "Manifests", ", ".join(sorted(signals.manifest_contents)) or "-"
        )
        table.add_row("Request", signals.request_text or "-")
        if signals.disable_auto_load:
            table.add_row("Auto-load", "[yellow]disabled[/yellow]")
        table.add_row("Rules", str(len(result.ordered_rule_ids)))
        table.add_row("Tiers", "  ".join(chips))
        return table

    @staticmethod
    def rules_table(rule_ids: tuple[str, ...], result: ResolutionResult) -> Table:
        table = Table(
            Column(header="#", width=3, justify="right"),
            Column(header="Rule", overflow="fold"),
            Column(header="Tier", width=10),
            expand=True,
            header_style="bold",
        )
        for index, rule_id in enumerate(rule_ids, start=1):
            table.add_row(str(index), rule_id, _tier_text(result.tiers[rule_id]))
        return table


class CatalogTable:
    @staticmethod
    def rules_table(rules: list[RuleDescriptor]) -> Table:
        table = Table(
            Column(header="Rule", overflow="fold", max_width=40),
            Column(header="Category", width=20),
            Column(header="Triggers", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for rule in rules:
            table.add_row(rule.id, rule.category.value, CatalogTable.trigger_summary(rule))
        return table

    @staticmethod
    def trigger_summary(rule: RuleDescriptor) -> str:
        parts: list[str] = []
        if rule.extension_triggers:
            parts.append(" ".join(sorted(rule.extension_triggers)))
        if rule.manifest_triggers:
            parts.append(", ".join(sorted({item.filename for item in rule.manifest_triggers})))
        if rule.keyword_triggers:
            parts.append(f"{len(rule.keyword_triggers)} keyword(s)")
        return " | ".join(parts) or "-"

    @staticmethod
    def detail_block(rule: RuleDescriptor):
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column(overflow="fold")
        table.add_row("Id", rule.id)
        table.add_row("Category", rule.category.value)
        table.add_row("Description", rule.description or "-")
        table.add_row("Document", compact_home_path(rule.path) if rule.path else "-")
        table.add_row("Extensions", ", ".join(sorted(rule.extension_triggers)) or "-")
        table.add_row(
            "Manifests",
            "\n".join(
                f"{item.filename} contains {item.substring!r}"
                for item in rule.manifest_triggers
            )
            or "-",
        )
        table.add_row("Keywords", ", ".join(rule.keyword_triggers) or "-")
        table.add_row(
            "Includes",
            "\n".join(
                f"{edge.target} (when {edge.condition.describe()})"
                if edge.condition
                else edge.target
                for edge in rule.auto_includes
            )
            or "-",
        )
        return table


class DetectionTable:
    @staticmethod
    def manifests_table(items: list[ManifestDetection]) -> Table:
        table = Table(
            Column(header="Manifest", width=24),
            Column(header="Rules", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for item in items:
            rules = ", ".join(item.rule_ids) if item.rule_ids else "(no rules triggered)"
            table.add_row(item.filename, rules)
        return table


class HealthTable:
    @staticmethod
    def summary_block(report: CatalogHealthReport):
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column(overflow="fold")
        table.add_row("Source", compact_home_path(report.source))
        table.add_row("Rules", str(report.rule_count))
        for category, count in report.categories.items():
            table.add_row(f"  {category}", str(count))
        status = "healthy" if report.is_healthy() else "degraded"
        status_style = UIStyle.GREEN.value if report.is_healthy() else UIStyle.RED.value
        table.add_row("Status", f"[{status_style}]{status}[/{status_style}]")
        return table
