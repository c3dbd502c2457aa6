from typing import Final


APP_NAME: Final[str] = "rule-router"
CONFIG_FILENAME: Final[str] = "config.json"

CATALOG_INDEX_FILENAME: Final[str] = "rules-index.yml"
CATALOG_VERSION: Final[int] = 1
RULE_DOCUMENT_SUFFIX: Final[str] = ".md"

# Manifests above this size are skipped rather than read into memory.
MANIFEST_MAX_BYTES: Final[int] = 1_000_000

KNOWN_MANIFESTS: Final[tuple[str, ...]] = (
    "package.json",
    "composer.json",
    "pubspec.yaml",
    "requirements.txt",
    "pyproject.toml",
    "Cargo.toml",
    "go.mod",
    "tsconfig.json",
    "prisma/schema.prisma",
    "Dockerfile",
    "docker-compose.yml",
    "compose.yaml",
)

# Hidden and vendored directories are never scanned for rule documents.
CATALOG_IGNORED_DIRS: Final[tuple[str, ...]] = (
    "node_modules",
    ".venv",
    ".git",
)
