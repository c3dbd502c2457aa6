from pathlib import Path


class RuleRouterError(Exception):
    """Base user-facing application error."""


class CatalogError(RuleRouterError):
    """Rule catalog is ambiguous or cannot be put into service."""


class DuplicateRuleIdError(CatalogError):
    def __init__(self, rule_id: str) -> None:
        self.rule_id = rule_id
        super().__init__(f"Duplicate rule id in catalog: {rule_id}")


class SelfIncludeError(CatalogError):
    def __init__(self, rule_id: str) -> None:
        self.rule_id = rule_id
        super().__init__(f"Rule includes itself: {rule_id}")


class UnknownIncludeTargetError(CatalogError):
    def __init__(self, rule_id: str, target: str) -> None:
        self.rule_id = rule_id
        self.target = target
        super().__init__(f"Rule {rule_id} includes unknown rule: {target}")


class CatalogFileError(CatalogError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MissingCatalogFileError(CatalogFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Missing rule catalog")


class InvalidYamlFormatError(CatalogFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid YAML format ({detail})")


class InvalidCatalogSchemaError(CatalogFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid catalog schema ({detail})")


class UnreadableCatalogFileError(CatalogFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Unreadable catalog file ({detail})")
