"""Run configuration.

Settings come from an optional YAML rc file and are then overridden by
command-line flags:

    # .lifecyclerc.yml
    paths: [suites]
    timeout: 5000
    reporter: tree
    grep: "User model"
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional, Union

import yaml

DEFAULT_CONFIG_NAMES = (".lifecyclerc.yml", ".lifecyclerc.yaml")
DEFAULT_TIMEOUT_MS = 2000
VALID_REPORTERS = {"tree", "json"}

# rc file key -> RunConfig attribute
_RC_KEYS = {
    "paths": "suite_paths",
    "timeout": "timeout_ms",
    "grep": "grep",
    "invert": "invert",
    "reporter": "reporter",
    "save-report": "save_report",
    "report-dir": "report_dir",
    "report-url": "report_url",
    "color": "color",
}


@dataclass
class RunConfig:
    """Configuration for a run."""
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    grep: Optional[str] = None
    invert: bool = False
    reporter: str = "tree"
    save_report: bool = False
    report_dir: Optional[Path] = None
    report_url: Optional[str] = None
    color: bool = True
    suite_paths: list[str] = field(default_factory=list)

    def __post_init__(self):
        timeout = self.timeout_ms
        if not isinstance(timeout, int) or isinstance(timeout, bool) or timeout < 0:
            raise ValueError(f"timeout must be a non-negative integer, got {timeout!r}")
        if not isinstance(self.reporter, str) or self.reporter not in VALID_REPORTERS:
            raise ValueError(
                f"Invalid reporter '{self.reporter}'. Must be one of: "
                f"{', '.join(sorted(VALID_REPORTERS))}"
            )
        for name in ("invert", "save_report", "color"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be true or false, got {getattr(self, name)!r}")
        if self.grep is not None and not isinstance(self.grep, str):
            raise ValueError(f"grep must be a string, got {self.grep!r}")
        if self.report_url is not None and not isinstance(self.report_url, str):
            raise ValueError(f"report-url must be a string, got {self.report_url!r}")
        if self.report_dir is not None and not isinstance(self.report_dir, (str, Path)):
            raise ValueError(f"report-dir must be a path, got {self.report_dir!r}")
        if self.report_dir is not None:
            self.report_dir = Path(self.report_dir)

    def with_overrides(self, **overrides: Any) -> "RunConfig":
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown config option(s): {', '.join(sorted(unknown))}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def find_config(directory: Union[str, Path, None] = None) -> Optional[Path]:
    """Find an rc file in ``directory`` (default: working directory)."""
    base = Path(directory) if directory else Path.cwd()
    for name in DEFAULT_CONFIG_NAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Union[str, Path, None] = None) -> RunConfig:
    """Load a RunConfig from a YAML rc file.

    Args:
        path: Explicit rc file. None looks for a default rc file in the
              working directory and falls back to defaults.

    Raises:
        FileNotFoundError: If an explicit path doesn't exist.
        ValueError: If the file is malformed or has unknown keys.
    """
    if path is None:
        path = find_config()
        if path is None:
            return RunConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return RunConfig()
    return config_from_data(data, source=str(path))


def config_from_data(data: Any, source: str = "<inline>") -> RunConfig:
    """Build a RunConfig from an already-loaded rc mapping."""
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping in {source}")

    unknown = set(data) - set(_RC_KEYS)
    if unknown:
        raise ValueError(
            f"Unknown config key(s) in {source}: {', '.join(sorted(unknown))}"
        )

    values = {_RC_KEYS[k]: v for k, v in data.items()}
    paths = values.get("suite_paths")
    if isinstance(paths, str):
        values["suite_paths"] = [paths]
    elif "suite_paths" in values and paths is None:
        values["suite_paths"] = []
    elif paths is not None and not (
        isinstance(paths, list) and all(isinstance(p, str) for p in paths)
    ):
        raise ValueError(f"'paths' must be a path or list of paths in {source}")

    return RunConfig(**values)
