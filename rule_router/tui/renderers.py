from rich.console import Console

from rule_router.config import RouterConfig
from rule_router.health import CatalogHealthReport
from rule_router.manifests import ManifestDetection
from rule_router.models import (
    ContextSignals,
    ContextTier,
    ResolutionResult,
    RuleDescriptor,
)
from rule_router.tui.enums import UIStyle
from rule_router.tui.sections import UISection
from rule_router.tui.tables import (
    CatalogTable,
    DetectionTable,
    HealthTable,
    ResolutionTable,
)
from rule_router.utils import compact_home_path, compact_home_paths_in_text


class RouterConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_resolution(
        self, result: ResolutionResult, signals: ContextSignals, tier: ContextTier
    ) -> None:
        self.console.print(
            UISection.wrap(
                "context",
                ResolutionTable.summary_block(result, signals, tier),
                style=UIStyle.BLUE.value,
            )
        )

        if result.is_empty():
            self.console.print(
                UISection.note(
                    "rules",
                    "No rules apply. Proceeding with base knowledge only.",
                    style=UIStyle.DIM.value,
                )
            )
        else:
            self.console.print(
                UISection.counted(
                    "rules",
                    ResolutionTable.rules_table(result.ordered_rule_ids, result),
                    len(result.ordered_rule_ids),
                    style=UIStyle.GREEN.value,
                )
            )

        if result.dropped_for_limit:
            self.console.print(
                UISection.counted(
                    "dropped for limit",
                    ResolutionTable.rules_table(result.dropped_for_limit, result),
                    len(result.dropped_for_limit),
                    style=UIStyle.YELLOW.value,
                )
            )

    def render_rules(self, rules: list[RuleDescriptor]) -> None:
        if not rules:
            self.console.print(
                UISection.note("rules", "No rules in catalog.", style=UIStyle.YELLOW.value)
            )
            return
        self.console.print(
            UISection.counted("rules", CatalogTable.rules_table(rules), len(rules))
        )

    def render_rule(self, rule: RuleDescriptor) -> None:
        self.console.print(
            UISection.wrap("rule", CatalogTable.detail_block(rule), style=UIStyle.CYAN.value)
        )

    def render_detection(self, root: str, items: list[ManifestDetection]) -> None:
        if not items:
            self.console.print(
                UISection.note(
                    "detect",
                    f"No known manifests found in {compact_home_path(root)}.",
                    style=UIStyle.YELLOW.value,
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "detect",
                DetectionTable.manifests_table(items),
                style=UIStyle.BLUE.value,
                subtitle=compact_home_path(root),
            )
        )

    def render_health(self, report: CatalogHealthReport) -> None:
        style = UIStyle.GREEN.value if report.is_healthy() else UIStyle.RED.value
        self.console.print(
            UISection.wrap("catalog health", HealthTable.summary_block(report), style=style)
        )
        if report.error:
            self.console.print(
                UISection.note(
                    "errors",
                    f"- {compact_home_paths_in_text(report.error)}",
                    style=UIStyle.RED.value,
                )
            )
        if report.missing_documents:
            missing_text = "\n".join(
                [
                    f"- {rule_id}: {compact_home_path(path)}"
                    for rule_id, path in report.missing_documents
                ]
            )
            self.console.print(
                UISection.note("missing documents", missing_text, style=UIStyle.YELLOW.value)
            )

    def render_config(self, config: RouterConfig, path: str) -> None:
        lines = [
            f"[bold]catalog[/bold]: {compact_home_path(config.catalog) if config.catalog else '(bundled)'}",
            f"[bold]default tier[/bold]: {config.default_tier.value}",
            f"[bold]extra manifests[/bold]: {', '.join(config.extra_manifests) or '-'}",
        ]
        self.console.print(
            UISection.note(
                f"config ({compact_home_path(path)})",
                "\n".join(lines),
                style=UIStyle.BLUE.value,
            )
        )
