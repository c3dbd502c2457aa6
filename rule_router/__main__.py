import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from rule_router.catalog import CatalogRepository, RuleCatalog, resolve_catalog_source
from rule_router.config import ConfigService
from rule_router.errors import RuleRouterError
from rule_router.health import check_catalog
from rule_router.manifests import detect_stack, read_manifests
from rule_router.models import ContextTier, RuleCategory
from rule_router.resolver import resolve
from rule_router.signals import build_signals
from rule_router.tui import RouterConsoleUI


TIER_VALUES = [tier.value for tier in ContextTier]
CATEGORY_VALUES = [category.value for category in RuleCategory]


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("rule_router")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _root_option() -> Callable:
    return click.option(
        "--root",
        type=click.Path(path_type=Path, file_okay=False),
        default=Path("."),
        show_default=True,
        help="Project root to read manifests from.",
    )


def _config_service(_obj: Dict[str, Any]) -> ConfigService:
    return ConfigService()


def _catalog_repository(obj: Dict[str, Any]) -> CatalogRepository:
    config = _config_service(obj).load()
    return CatalogRepository(resolve_catalog_source(obj.get("catalog"), config.catalog))


def _load_catalog(obj: Dict[str, Any]) -> RuleCatalog:
    try:
        return _catalog_repository(obj).load_catalog()
    except RuleRouterError as exc:
        raise click.ClickException(str(exc))


def _dump_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Rule catalog index file or rule directory (overrides config).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log resolution details.")
@click.pass_context
def cli(ctx: click.Context, catalog_path: Optional[Path], verbose: bool) -> None:
    """Pick the rule documents that apply to an editing context."""
    _configure_logging(verbose)
    ctx.obj = {"catalog": catalog_path}


@cli.command("resolve", help="Resolve the ordered rule set for a context.")
@click.argument("file", required=False)
@_root_option()
@click.option("-r", "--request", default="", help="Free-text request to match keywords.")
@click.option("--rule", "rules", multiple=True, help="Force-load a rule id (repeatable).")
@click.option("--no-auto", is_flag=True, help="Skip auto-loading; only forced rules.")
@click.option(
    "--tier",
    type=click.Choice(TIER_VALUES, case_sensitive=False),
    default=None,
    help="Context tier selecting the rule cap (default from config).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_obj
def resolve_command(
    obj: Dict[str, Any],
    file: Optional[str],
    root: Path,
    request: str,
    rules: tuple[str, ...],
    no_auto: bool,
    tier: Optional[str],
    as_json: bool,
) -> None:
    config = _config_service(obj).load()
    catalog = _load_catalog(obj)
    context_tier = ContextTier(tier.lower()) if tier else config.default_tier

    signals = build_signals(
        file_path=file,
        manifest_contents=read_manifests(root, extra=config.extra_manifests),
        request_text=request,
        explicit_rule_ids=rules,
        disable_auto_load=no_auto,
    )
    result = resolve(catalog, signals, context_tier)

    if as_json:
        payload = {"tier": context_tier.value, "cap": context_tier.cap}
        payload.update(result.as_dict())
        _dump_json(payload)
        return

    RouterConsoleUI(Console()).render_resolution(result, signals, context_tier)


@cli.group(help="Inspect the rule catalog.")
def rules() -> None:
    pass


@rules.command("list", help="List rules in catalog order.")
@click.option(
    "--category",
    type=click.Choice(CATEGORY_VALUES, case_sensitive=False),
    default=None,
)
@click.option("--json", "as_json", is_flag=True, help="Print rules as JSON.")
@click.pass_obj
def rules_list(obj: Dict[str, Any], category: Optional[str], as_json: bool) -> None:
    catalog = _load_catalog(obj)
    items = catalog.by_category(category.lower()) if category else list(catalog)
    if as_json:
        _dump_json([rule.as_dict() for rule in items])
        return
    RouterConsoleUI(Console()).render_rules(items)


@rules.command("show", help="Show one rule and its triggers.")
@click.argument("rule_id")
@click.pass_obj
def rules_show(obj: Dict[str, Any], rule_id: str) -> None:
    catalog = _load_catalog(obj)
    rule = catalog.get_by_id(rule_id)
    if rule is None:
        raise click.ClickException(f"Rule not found: {rule_id}")
    RouterConsoleUI(Console()).render_rule(rule)


@cli.command(help="Show project manifests found and the rules they trigger.")
@_root_option()
@click.pass_obj
def detect(obj: Dict[str, Any], root: Path) -> None:
    config = _config_service(obj).load()
    catalog = _load_catalog(obj)
    manifests = read_manifests(root, extra=config.extra_manifests)
    RouterConsoleUI(Console()).render_detection(
        str(root.expanduser().resolve()), detect_stack(catalog, manifests)
    )


@cli.command(help="Validate the rule catalog and report its health.")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.pass_obj
def check(obj: Dict[str, Any], as_json: bool) -> None:
    report = check_catalog(_catalog_repository(obj))
    if as_json:
        _dump_json(report.as_dict())
    else:
        RouterConsoleUI(Console()).render_health(report)
    if not report.is_healthy():
        raise click.exceptions.Exit(1)


@cli.group(help="Manage user configuration.")
def config() -> None:
    pass


@config.command("show", help="Show the effective configuration.")
@click.pass_obj
def config_show(obj: Dict[str, Any]) -> None:
    service = _config_service(obj)
    RouterConsoleUI(Console()).render_config(service.load(), str(service.config_path))


@config.command("set-tier", help="Set the default context tier.")
@click.argument("tier", type=click.Choice(TIER_VALUES, case_sensitive=False))
@click.pass_obj
def config_set_tier(obj: Dict[str, Any], tier: str) -> None:
    service = _config_service(obj)
    updated = service.set_default_tier(tier.lower())
    RouterConsoleUI(Console()).render_config(updated, str(service.config_path))


@config.command("set-catalog", help="Point at a catalog index file or rule directory.")
@click.argument("path", type=click.Path(path_type=Path, exists=True))
@click.pass_obj
def config_set_catalog(obj: Dict[str, Any], path: Path) -> None:
    service = _config_service(obj)
    try:
        CatalogRepository(path.expanduser().resolve()).load_catalog()
    except RuleRouterError as exc:
        raise click.ClickException(str(exc))
    updated = service.set_catalog(path)
    RouterConsoleUI(Console()).render_config(updated, str(service.config_path))


@config.command("reset", help="Remove the user configuration file.")
@click.pass_obj
def config_reset(obj: Dict[str, Any]) -> None:
    service = _config_service(obj)
    removed = service.reset()
    click.echo("Configuration reset." if removed else "No configuration to reset.")


def main() -> int:
    try:
        code = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
