from pathlib import Path

from rule_router.catalog.catalog import RuleCatalog
from rule_router.manifests import detect_stack, manifest_names, read_manifests
from rule_router.models import ManifestTrigger, RuleCategory, RuleDescriptor


def test_read_manifests_only_known_files(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text('{"name": "web"}', encoding="utf-8")
    (tmp_path / "composer.json").write_text('{"require": {}}', encoding="utf-8")
    (tmp_path / "random.json").write_text("{}", encoding="utf-8")

    contents = read_manifests(tmp_path)

    assert contents == {"package.json": '{"name": "web"}', "composer.json": '{"require": {}}'}


def test_read_manifests_nested_known_path(tmp_path: Path) -> None:
    schema = tmp_path / "prisma" / "schema.prisma"
    schema.parent.mkdir()
    schema.write_text("datasource db {}", encoding="utf-8")
    assert read_manifests(tmp_path) == {"prisma/schema.prisma": "datasource db {}"}


def test_read_manifests_missing_root(tmp_path: Path) -> None:
    assert read_manifests(tmp_path / "nowhere") == {}


def test_read_manifests_skips_undecodable(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_bytes(b"\xff\xfe\x00garbage")
    (tmp_path / "go.mod").write_text("module example.com/app\n", encoding="utf-8")
    assert read_manifests(tmp_path) == {"go.mod": "module example.com/app\n"}


def test_read_manifests_restricted_to_present(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text("{}", encoding="utf-8")
    (tmp_path / "Cargo.toml").write_text("[package]", encoding="utf-8")
    assert read_manifests(tmp_path, present={"Cargo.toml"}) == {"Cargo.toml": "[package]"}


def test_read_manifests_extra_names(tmp_path: Path) -> None:
    (tmp_path / "Gemfile").write_text("gem 'rails'", encoding="utf-8")
    assert read_manifests(tmp_path) == {}
    assert read_manifests(tmp_path, extra=["Gemfile"]) == {"Gemfile": "gem 'rails'"}


def test_manifest_names_deduplicates() -> None:
    names = manifest_names(["package.json", "Gemfile"])
    assert names.count("package.json") == 1
    assert names[-1] == "Gemfile"


def test_detect_stack_per_manifest() -> None:
    catalog = RuleCatalog(
        [
            RuleDescriptor(
                id="laravel",
                category=RuleCategory.BACKEND_FRAMEWORKS,
                manifest_triggers=(ManifestTrigger("composer.json", "laravel/framework"),),
            ),
            RuleDescriptor(
                id="react",
                category=RuleCategory.FRONTEND_FRAMEWORKS,
                manifest_triggers=(ManifestTrigger("package.json", '"react"'),),
            ),
        ]
    )
    detections = detect_stack(
        catalog,
        {"composer.json": '{"laravel/framework": "^11"}', "package.json": "{}"},
    )
    assert [item.as_dict() for item in detections] == [
        {"manifest": "composer.json", "rules": ["laravel"]},
        {"manifest": "package.json", "rules": []},
    ]
