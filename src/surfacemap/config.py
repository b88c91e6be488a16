"""Global configuration — XDG paths, YAML file, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from surfacemap.scanner.engine import DEFAULT_MAX_FILE_SIZE, DEFAULT_SKIP_DIRS


def _default_data_dir() -> Path:
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "surfacemap"
    return Path.home() / ".local" / "share" / "surfacemap"


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "surfacemap"
    return Path.home() / ".config" / "surfacemap"


@dataclass
class SurfaceMapConfig:
    """Application-wide configuration."""

    data_dir: Path = field(default_factory=_default_data_dir)
    config_dir: Path = field(default_factory=_default_config_dir)
    skip_dirs: set[str] = field(default_factory=lambda: set(DEFAULT_SKIP_DIRS))
    exclude_patterns: list[str] = field(default_factory=list)
    max_file_size: int | None = DEFAULT_MAX_FILE_SIZE
    workers: int = 1
    web_host: str = "127.0.0.1"
    web_port: int = 8471
    verbose: bool = False

    @property
    def db_path(self) -> Path:
        return self.data_dir / "surfacemap.db"

    @classmethod
    def load(cls, path: str | Path | None = None) -> SurfaceMapConfig:
        """Load config: defaults, then a YAML file, then environment variables.

        Without an explicit ``path`` the file ``<config_dir>/config.yaml``
        is used when it exists.
        """
        config = cls()

        if path is None:
            default_file = config.config_dir / "config.yaml"
            if default_file.is_file():
                path = default_file
        if path is not None:
            config.apply_yaml(Path(path).read_text(encoding="utf-8"))

        env_workers = os.environ.get("SURFACEMAP_WORKERS")
        if env_workers:
            config.workers = _positive_int("SURFACEMAP_WORKERS", env_workers)

        env_size = os.environ.get("SURFACEMAP_MAX_FILE_SIZE")
        if env_size:
            config.max_file_size = _positive_int("SURFACEMAP_MAX_FILE_SIZE", env_size)

        env_port = os.environ.get("SURFACEMAP_WEB_PORT")
        if env_port:
            config.web_port = _positive_int("SURFACEMAP_WEB_PORT", env_port)

        return config

    def apply_yaml(self, text: str) -> None:
        """Overlay settings from a YAML document onto this config."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid config YAML: {e}") from e
        if data is None:
            return
        if not isinstance(data, dict):
            raise ValueError("Config YAML must be a mapping")

        scan = data.get("scan", {}) or {}
        if not isinstance(scan, dict):
            raise ValueError("'scan' section must be a mapping")

        if "skip_dirs" in scan:
            self.skip_dirs = {str(d) for d in _as_list(scan["skip_dirs"])}
        for extra in _as_list(scan.get("extra_skip_dirs", [])):
            self.skip_dirs.add(str(extra))
        if "exclude" in scan:
            self.exclude_patterns = [str(p) for p in _as_list(scan["exclude"])]
        if "max_file_size" in scan:
            size = scan["max_file_size"]
            self.max_file_size = (
                None if size is None else _positive_int("max_file_size", size)
            )
        if "workers" in scan:
            self.workers = _positive_int("workers", scan["workers"])

        web = data.get("web", {}) or {}
        if not isinstance(web, dict):
            raise ValueError("'web' section must be a mapping")
        if "port" in web:
            self.web_port = _positive_int("port", web["port"])

        if "data_dir" in data:
            self.data_dir = Path(data["data_dir"]).expanduser()


def _as_list(value: object) -> list:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set)):
        return list(value)
    raise ValueError(f"Expected a string or list, got {type(value).__name__}")


def _positive_int(name: str, value: object) -> int:
    try:
        number = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e
    if number < 1:
        raise ValueError(f"{name} must be positive, got {number}")
    return number
