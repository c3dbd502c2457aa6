import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

from rule_router.constants import APP_NAME, CONFIG_FILENAME
from rule_router.models import ContextTier
from rule_router.utils import read_json_object_safe, write_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouterConfig:
    catalog: Optional[str] = None
    default_tier: ContextTier = ContextTier.FEATURE_BUILD
    extra_manifests: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "catalog": self.catalog,
            "default_tier": self.default_tier.value,
            "extra_manifests": list(self.extra_manifests),
        }


class ConfigService:
    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = root or (Path.home() / ".config" / APP_NAME)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILENAME

    def load(self) -> RouterConfig:
        payload, error = read_json_object_safe(self.config_path)
        if error is not None:
            logger.warning("Ignoring unreadable config %s: %s", self.config_path, error)
        if payload is None:
            return RouterConfig()

        catalog = payload.get("catalog")
        if not isinstance(catalog, str) or not catalog.strip():
            catalog = None

        try:
            default_tier = ContextTier(payload.get("default_tier"))
        except ValueError:
            default_tier = ContextTier.FEATURE_BUILD

        extra = payload.get("extra_manifests")
        if not isinstance(extra, list):
            extra = []

        return RouterConfig(
            catalog=catalog,
            default_tier=default_tier,
            extra_manifests=tuple(item for item in extra if isinstance(item, str) and item),
        )

    def save(self, config: RouterConfig) -> None:
        write_json(self.config_path, config.as_dict())

    def set_default_tier(self, tier: ContextTier | str) -> RouterConfig:
        config = replace(self.load(), default_tier=ContextTier(tier))
        self.save(config)
        return config

    def set_catalog(self, catalog: Optional[Path]) -> RouterConfig:
        value = str(Path(catalog).expanduser().resolve()) if catalog else None
        config = replace(self.load(), catalog=value)
        self.save(config)
        return config

    def reset(self) -> bool:
        if not self.config_path.exists():
            return False
        self.config_path.unlink()
        return True
