from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional


class RuleCategory(str, Enum):
    COMMON = "common"
    DATABASE = "database"
    MOBILE = "mobile"
    BACKEND_FRAMEWORKS = "backend-frameworks"
    TYPESCRIPT = "typescript"
    FRONTEND_FRAMEWORKS = "frontend-frameworks"
    NEXTJS = "nextjs"
    PYTHON = "python"
    WEB_DEVELOPMENT = "web-development"
    AGENTIC_AI = "agentic-ai"
    TESTING = "testing"
    SECURITY = "security"
    DEVOPS = "devops"


class MatchTier(int, Enum):
    """Signal priority, compared numerically: higher wins."""

    KEYWORD = 1
    PROJECT_MANIFEST = 2
    FILE_EXTENSION = 3
    EXPLICIT_MENTION = 4

    @property
    def label(self) -> str:
        return _MATCH_TIER_LABELS[self]


_MATCH_TIER_LABELS = {
    MatchTier.KEYWORD: "keyword",
    MatchTier.PROJECT_MANIFEST: "manifest",
    MatchTier.FILE_EXTENSION: "extension",
    MatchTier.EXPLICIT_MENTION: "explicit",
}


class ContextTier(str, Enum):
    SINGLE_FILE_EDIT = "single-file-edit"
    FEATURE_BUILD = "feature-build"
    MULTI_FILE_TASK = "multi-file-task"
    ARCHITECTURE = "architecture"

    @property
    def cap(self) -> int:
        return _CONTEXT_TIER_CAPS[self]


_CONTEXT_TIER_CAPS = {
    ContextTier.SINGLE_FILE_EDIT: 3,
    ContextTier.FEATURE_BUILD: 5,
    ContextTier.MULTI_FILE_TASK: 7,
    # Architecture work is nominally unbounded; keep a soft ceiling.
    ContextTier.ARCHITECTURE: 10,
}


@dataclass(frozen=True)
class ManifestTrigger:
    filename: str
    substring: str

    def matches(self, manifest_contents: Mapping[str, str]) -> bool:
        text = manifest_contents.get(self.filename)
        if not isinstance(text, str):
            return False
        return self.substring in text


@dataclass(frozen=True)
class IncludeCondition:
    manifest: str
    contains: str

    def evaluate(self, manifest_contents: Mapping[str, str]) -> bool:
        text = manifest_contents.get(self.manifest)
        if not isinstance(text, str):
            return False
        return self.contains in text

    def describe(self) -> str:
        return f"{self.manifest} contains {self.contains!r}"


@dataclass(frozen=True)
class AutoInclude:
    target: str
    condition: Optional[IncludeCondition] = None

    def applies(self, manifest_contents: Mapping[str, str]) -> bool:
        if self.condition is None:
            return True
        return self.condition.evaluate(manifest_contents)


@dataclass(frozen=True)
class RuleDescriptor:
    id: str
    category: RuleCategory
    extension_triggers: frozenset[str] = frozenset()
    manifest_triggers: tuple[ManifestTrigger, ...] = ()
    keyword_triggers: tuple[str, ...] = ()
    auto_includes: tuple[AutoInclude, ...] = ()
    description: str = ""
    path: Optional[Path] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category.value,
            "description": self.description,
            "path": str(self.path) if self.path is not None else None,
            "extensions": sorted(self.extension_triggers),
            "manifests": [
                {"file": item.filename, "contains": item.substring}
                for item in self.manifest_triggers
            ],
            "keywords": list(self.keyword_triggers),
            "includes": [
                {
                    "rule": item.target,
                    "when": item.condition.describe() if item.condition else None,
                }
                for item in self.auto_includes
            ],
        }


@dataclass(frozen=True)
class ContextSignals:
    active_extension: Optional[str] = None
    manifest_contents: Mapping[str, str] = field(default_factory=dict)
    request_text: str = ""
    explicit_rule_ids: frozenset[str] = frozenset()
    disable_auto_load: bool = False


@dataclass(frozen=True)
class RuleMatch:
    rule: RuleDescriptor
    tier: MatchTier


@dataclass(frozen=True)
class ResolutionResult:
    ordered_rule_ids: tuple[str, ...]
    dropped_for_limit: tuple[str, ...] = ()
    tiers: Mapping[str, MatchTier] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.ordered_rule_ids

    def as_dict(self) -> dict[str, Any]:
        return {
            "rules": [
                {"id": rule_id, "tier": self.tiers[rule_id].label}
                for rule_id in self.ordered_rule_ids
            ],
            "dropped": [
                {"id": rule_id, "tier": self.tiers[rule_id].label}
                for rule_id in self.dropped_for_limit
            ],
        }
