import json
import os
from pathlib import Path
from typing import Any

from rule_router.constants import MANIFEST_MAX_BYTES


def read_json_object_safe(path: Path) -> tuple[dict[str, Any] | None, str | None]:
    """Read a JSON object; a missing or empty file is ``(None, None)``."""
    if not path.is_file() or path.stat().st_size == 0:
        return None, None
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, ValueError) as exc:
        return None, str(exc)
    if not isinstance(payload, dict):
        return None, f"expected a JSON object in {path}"
    return payload, None


def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    staging = path.with_name(f".{path.name}.tmp")
    with staging.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=False)
        handle.write("\n")
    os.replace(staging, path)


def read_text_safe(path: Path, max_bytes: int = MANIFEST_MAX_BYTES) -> tuple[str | None, str | None]:
    if not path.is_file():
        return None, None
    try:
        if path.stat().st_size > max_bytes:
            return None, f"larger than {max_bytes} bytes"
        return path.read_text(encoding="utf-8"), None
    except (OSError, UnicodeDecodeError) as exc:
        return None, str(exc)


def _home_prefix() -> str:
    return f"{Path.home()}/"


def compact_home_path(path: str | Path) -> str:
    text = str(path)
    prefix = _home_prefix()
    if text == prefix.rstrip("/"):
        return "~"
    if text.startswith(prefix):
        return f"~/{text[len(prefix):]}"
    return text


def compact_home_paths_in_text(text: str) -> str:
    prefix = _home_prefix()
    if text == prefix.rstrip("/"):
        return "~"
    return text.replace(prefix, "~/")
