"""Tests for catalog source resolution and one-time loading."""

import json
from pathlib import Path

import pytest

from rule_router.catalog.catalog import RuleCatalog
from rule_router.catalog.repository import (
    BUNDLED_CATALOG_PATH,
    CatalogRepository,
    resolve_catalog_source,
)
from rule_router.errors import DuplicateRuleIdError, MissingCatalogFileError
from rule_router.models import RuleCategory


def test_resolve_catalog_source_precedence(tmp_path: Path) -> None:
    explicit = tmp_path / "explicit.yml"
    assert resolve_catalog_source(explicit, "/configured.yml") == explicit
    assert resolve_catalog_source(None, "/configured.yml") == Path("/configured.yml")
    assert resolve_catalog_source(None, None) == BUNDLED_CATALOG_PATH


def test_load_index_file(sample_index: Path) -> None:
    repository = CatalogRepository(sample_index)
    assert not repository.is_ready
    catalog = repository.load_catalog()
    assert isinstance(catalog, RuleCatalog)
    assert catalog.ids() == ["vue3", "tailwind", "flutter", "debugging"]
    assert repository.is_ready


def test_load_is_cached(sample_index: Path) -> None:
    repository = CatalogRepository(sample_index)
    first = repository.load_catalog()
    sample_index.write_text("not: [valid", encoding="utf-8")
    assert repository.load_catalog() is first


def test_directory_with_index_prefers_index(sample_index: Path) -> None:
    (sample_index.parent / "extra.md").write_text(
        "---\ncategory: common\n---\nignored\n", encoding="utf-8"
    )
    catalog = CatalogRepository(sample_index.parent).load_catalog()
    assert "extra" not in catalog
    assert "vue3" in catalog


def test_directory_of_documents(tmp_path: Path) -> None:
    root = tmp_path / "rules"
    root.mkdir()
    (root / "python.md").write_text(
        "---\ncategory: python\ntriggers:\n  extensions: ['.py']\n---\nbody\n",
        encoding="utf-8",
    )
    catalog = CatalogRepository(root).load_catalog()
    assert catalog.ids() == ["python"]


def test_missing_source(tmp_path: Path) -> None:
    with pytest.raises(MissingCatalogFileError):
        CatalogRepository(tmp_path / "missing.yml").load_catalog()


def test_configuration_anomaly_propagates(write_index) -> None:
    path = write_index(
        [
            {"id": "dup", "category": "common"},
            {"id": "dup", "category": "python"},
        ]
    )
    with pytest.raises(DuplicateRuleIdError):
        CatalogRepository(path).load_catalog()


def test_bundled_catalog_loads() -> None:
    catalog = CatalogRepository().load_catalog()
    assert len(catalog) > 20
    assert "frontend-frameworks/vue3" in catalog
    assert "frontend-frameworks/tailwind" in catalog
    assert all(rule.path is None for rule in catalog)


def test_schema_categories_match_enum() -> None:
    schema_path = Path(__file__).resolve().parents[2] / "rule_router" / "catalog" / "schema.json"
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    assert schema["$defs"]["category"]["enum"] == [item.value for item in RuleCategory]
