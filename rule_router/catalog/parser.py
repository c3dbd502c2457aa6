"""Parse rule catalogs from a YAML index or from rule documents with frontmatter."""

from __future__ import annotations

import json
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator

from rule_router.constants import CATALOG_IGNORED_DIRS, CATALOG_VERSION, RULE_DOCUMENT_SUFFIX
from rule_router.errors import (
    InvalidCatalogSchemaError,
    InvalidYamlFormatError,
    MissingCatalogFileError,
    UnreadableCatalogFileError,
)
from rule_router.models import (
    AutoInclude,
    IncludeCondition,
    ManifestTrigger,
    RuleCategory,
    RuleDescriptor,
)
from rule_router.signals import normalize_extension

logger = logging.getLogger(__name__)

_FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)
SCHEMA_PATH = Path(__file__).resolve().parent / "schema.json"


@lru_cache(maxsize=1)
def catalog_validator() -> Draft202012Validator:
    schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    return Draft202012Validator(schema)


def _schema_error_message(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


def validate_catalog_payload(payload: Any, source: Path) -> None:
    if not isinstance(payload, dict):
        raise InvalidCatalogSchemaError(source, "must be a YAML mapping")
    error = next(iter(catalog_validator().iter_errors(payload)), None)
    if error is not None:
        raise InvalidCatalogSchemaError(source, _schema_error_message(error))


def _read_catalog_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise UnreadableCatalogFileError(path, str(exc)) from exc


def _load_yaml(text: str, source: Path) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidYamlFormatError(source, str(exc).splitlines()[0]) from exc


def descriptor_from_entry(entry: dict[str, Any], base_dir: Path | None = None) -> RuleDescriptor:
    """Build a descriptor from a schema-valid catalog entry."""
    triggers = entry.get("triggers") or {}

    extensions = frozenset(
        ext
        for ext in (normalize_extension(str(item)) for item in triggers.get("extensions", []))
        if ext is not None
    )
    manifests = tuple(
        ManifestTrigger(filename=str(item["file"]), substring=str(item["contains"]))
        for item in triggers.get("manifests", [])
    )
    keywords: list[str] = []
    for item in triggers.get("keywords", []):
        keyword = str(item).strip().lower()
        if keyword and keyword not in keywords:
            keywords.append(keyword)

    includes: list[AutoInclude] = []
    for item in entry.get("includes", []):
        if isinstance(item, str):
            includes.append(AutoInclude(target=item))
            continue
        when = item.get("when")
        condition = (
            IncludeCondition(manifest=str(when["manifest"]), contains=str(when["contains"]))
            if when
            else None
        )
        includes.append(AutoInclude(target=str(item["rule"]), condition=condition))

    path = None
    raw_path = entry.get("path")
    if raw_path:
        path = Path(raw_path)
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path

    return RuleDescriptor(
        id=str(entry["id"]),
        category=RuleCategory(entry["category"]),
        extension_triggers=extensions,
        manifest_triggers=manifests,
        keyword_triggers=tuple(keywords),
        auto_includes=tuple(includes),
        description=str(entry.get("description", "")),
        path=path,
    )


def parse_index(path: Path) -> list[RuleDescriptor]:
    if not path.is_file():
        raise MissingCatalogFileError(path)
    payload = _load_yaml(_read_catalog_text(path), path)
    validate_catalog_payload(payload, path)
    version = payload.get("version", CATALOG_VERSION)
    if version != CATALOG_VERSION:
        raise InvalidCatalogSchemaError(
            path, f"unsupported catalog version {version!r}, expected {CATALOG_VERSION}"
        )
    base_dir = path.parent
    return [descriptor_from_entry(entry, base_dir) for entry in payload.get("rules", [])]


def _known_rule_fields(raw: dict[Any, Any], source: Path) -> dict[str, Any]:
    """Keep the catalog fields of a frontmatter block; other tools share it."""
    known = catalog_validator().schema["$defs"]["rule"]["properties"]
    ignored = sorted(str(key) for key in raw if key not in known)
    if ignored:
        logger.debug("Ignoring frontmatter keys in %s: %s", source, ", ".join(ignored))
    return {key: value for key, value in raw.items() if key in known}


def parse_rule_document(path: Path, root: Path) -> RuleDescriptor | None:
    """Parse one Markdown rule document; ``None`` when it has no frontmatter."""
    text = _read_catalog_text(path)
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return None

    raw = _load_yaml(match.group(1), path) or {}
    if not isinstance(raw, dict):
        raise InvalidCatalogSchemaError(path, "frontmatter must be a YAML mapping")

    entry = _known_rule_fields(raw, path)
    entry.setdefault("id", path.relative_to(root).with_suffix("").as_posix())
    entry.setdefault("path", path.relative_to(root).as_posix())
    validate_catalog_payload({"rules": [entry]}, path)
    return descriptor_from_entry(entry, root)


def _iter_rule_documents(root: Path) -> list[Path]:
    found: list[Path] = []
    for candidate in sorted(root.rglob(f"*{RULE_DOCUMENT_SUFFIX}")):
        relative = candidate.relative_to(root)
        if any(
            part.startswith(".") or part in CATALOG_IGNORED_DIRS
            for part in relative.parts
        ):
            continue
        if candidate.is_file():
            found.append(candidate)
    return found


def parse_rule_directory(root: Path) -> list[RuleDescriptor]:
    if not root.is_dir():
        raise MissingCatalogFileError(root)
    rules: list[RuleDescriptor] = []
    for document in _iter_rule_documents(root):
        rule = parse_rule_document(document, root)
        if rule is None:
            logger.debug("Skipping %s: no frontmatter", document)
            continue
        rules.append(rule)
    return rules
