import sys
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest
import yaml


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def config_root(tmp_path: Path) -> Path:
    return tmp_path / ".config" / "rule-router"


@pytest.fixture
def write_index(tmp_path: Path):
    def _write(rules: list[dict], path: Path | None = None) -> Path:
        target = path or (tmp_path / "catalog" / "rules-index.yml")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            yaml.safe_dump({"version": 1, "rules": rules}, sort_keys=False),
            encoding="utf-8",
        )
        return target

    return _write


@pytest.fixture
def sample_index(write_index) -> Path:
    return write_index(
        [
            {
                "id": "vue3",
                "category": "frontend-frameworks",
                "triggers": {"extensions": [".vue"], "keywords": ["vue"]},
                "includes": [
                    {
                        "rule": "tailwind",
                        "when": {"manifest": "package.json", "contains": "tailwind"},
                    }
                ],
            },
            {
                "id": "tailwind",
                "category": "frontend-frameworks",
                "triggers": {"keywords": ["tailwind"]},
            },
            {
                "id": "flutter",
                "category": "mobile",
                "triggers": {
                    "extensions": [".dart"],
                    "manifests": [{"file": "pubspec.yaml", "contains": "flutter"}],
                },
            },
            {
                "id": "debugging",
                "category": "common",
                "triggers": {"keywords": ["fix", "debug"]},
            },
        ]
    )


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("XDG_CONFIG_HOME", str(tmp_path / ".config"))
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
