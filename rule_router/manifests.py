"""Read project manifests from disk for the signal extractor."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional

from rule_router.catalog.catalog import RuleCatalog
from rule_router.constants import KNOWN_MANIFESTS
from rule_router.utils import read_text_safe

logger = logging.getLogger(__name__)


def manifest_names(extra: Iterable[str] = ()) -> list[str]:
    names = list(KNOWN_MANIFESTS)
    for name in extra:
        if name and name not in names:
            names.append(name)
    return names


def read_manifests(
    root: Path,
    present: Optional[Iterable[str]] = None,
    extra: Iterable[str] = (),
) -> dict[str, str]:
    """Return ``{filename: text}`` for the known manifests found under ``root``.

    ``present`` optionally restricts the lookup to names the caller already
    knows exist. Missing or unreadable files are left out.
    """
    allowed = set(present) if present is not None else None
    contents: dict[str, str] = {}
    for name in manifest_names(extra):
        if allowed is not None and name not in allowed:
            continue
        text, error = read_text_safe(root / name)
        if error is not None:
            logger.debug("Skipping unreadable manifest %s: %s", root / name, error)
            continue
        if text is None:
            continue
        contents[name] = text
    return contents


@dataclass(frozen=True)
class ManifestDetection:
    filename: str
    rule_ids: tuple[str, ...]

    def as_dict(self) -> dict[str, object]:
        return {"manifest": self.filename, "rules": list(self.rule_ids)}


def detect_stack(
    catalog: RuleCatalog, manifest_contents: Mapping[str, str]
) -> list[ManifestDetection]:
    """Per manifest found, the rules it triggers on its own."""
    detections: list[ManifestDetection] = []
    for filename, text in manifest_contents.items():
        rules = catalog.find_by_manifest({filename: text})
        detections.append(
            ManifestDetection(filename=filename, rule_ids=tuple(rule.id for rule in rules))
        )
    return detections
