from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from rule_router.catalog.repository import CatalogRepository
from rule_router.errors import CatalogError


@dataclass(frozen=True)
class CatalogHealthReport:
    source: Path
    rule_count: int = 0
    categories: dict[str, int] = field(default_factory=dict)
    missing_documents: tuple[tuple[str, Path], ...] = ()
    error: Optional[str] = None

    def is_healthy(self) -> bool:
        return self.error is None and not self.missing_documents

    def as_dict(self) -> dict[str, Any]:
        return {
            "source": str(self.source),
            "rules": self.rule_count,
            "categories": dict(self.categories),
            "missing_documents": [
                {"id": rule_id, "path": str(path)} for rule_id, path in self.missing_documents
            ],
            "error": self.error,
        }


def check_catalog(repository: CatalogRepository) -> CatalogHealthReport:
    try:
        catalog = repository.load_catalog()
    except CatalogError as exc:
        return CatalogHealthReport(source=repository.source, error=str(exc))

    missing = tuple(
        (rule.id, rule.path)
        for rule in catalog
        if rule.path is not None and not rule.path.exists()
    )
    return CatalogHealthReport(
        source=repository.source,
        rule_count=len(catalog),
        categories=catalog.categories(),
        missing_documents=missing,
    )
