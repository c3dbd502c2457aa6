"""Normalize raw editing context into ``ContextSignals``."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from rule_router.models import ContextSignals

logger = logging.getLogger(__name__)


def _last_segment(value: str) -> str:
    return value.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]


def normalize_extension(value: Optional[str]) -> Optional[str]:
    """Return ``value`` as a lowercase extension with a single leading dot.

    Accepts bare extensions (``"vue"``), dotted ones (``".VUE"``) and file
    names or paths (``"src/Component.VUE"``); only the last suffix is kept.
    """
    if value is None:
        return None
    name = _last_segment(value.strip())
    suffix = name.rsplit(".", 1)[-1].strip().lower()
    if not suffix:
        return None
    return f".{suffix}"


def extension_from_path(path: Optional[str]) -> Optional[str]:
    if not path:
        return None
    name = _last_segment(path.strip())
    if "." not in name.lstrip("."):
        return None
    return normalize_extension(name)


def build_signals(
    *,
    file_path: Optional[str] = None,
    extension: Optional[str] = None,
    manifest_contents: Optional[Mapping[str, object]] = None,
    request_text: Optional[str] = None,
    explicit_rule_ids: Iterable[str] = (),
    disable_auto_load: bool = False,
) -> ContextSignals:
    active_extension = normalize_extension(extension) if extension else None
    if active_extension is None:
        active_extension = extension_from_path(file_path)

    manifests: dict[str, str] = {}
    for filename, text in (manifest_contents or {}).items():
        if not isinstance(text, str):
            logger.debug("Ignoring manifest %s with non-text content", filename)
            continue
        manifests[filename] = text

    explicit = frozenset(
        item.strip() for item in explicit_rule_ids if item and item.strip()
    )

    return ContextSignals(
        active_extension=active_extension,
        manifest_contents=manifests,
        request_text=(request_text or "").strip(),
        explicit_rule_ids=explicit,
        disable_auto_load=disable_auto_load,
    )
