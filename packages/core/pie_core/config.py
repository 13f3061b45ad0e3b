"""Persistent downloader settings schema and load/save helpers."""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 1
DEFAULT_GITHUB_API_BASE_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "pie-downloading/0.1 (+https://github.com/php/pie)"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class GithubConfig:
    api_base_url: str = DEFAULT_GITHUB_API_BASE_URL


@dataclass
class HttpConfig:
    timeout_s: int = 30
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class DownloadConfig:
    config_version: int = CONFIG_VERSION
    github: GithubConfig = field(default_factory=GithubConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def log_level(self) -> int:
        return getattr(logging, self.logging.level, logging.WARNING)


def config_path() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "PIE" / "downloading.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "PIE" / "downloading.json"
    return Path.home() / ".config" / "pie" / "downloading.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_github(cfg: DownloadConfig) -> None:
    base = str(cfg.github.api_base_url or "").strip().rstrip("/")
    cfg.github.api_base_url = base or DEFAULT_GITHUB_API_BASE_URL


def _normalize_http(cfg: DownloadConfig) -> None:
    try:
        timeout = int(cfg.http.timeout_s)
    except (TypeError, ValueError):
        timeout = HttpConfig.timeout_s
    cfg.http.timeout_s = max(1, min(300, timeout))
    if not cfg.http.user_agent:
        cfg.http.user_agent = DEFAULT_USER_AGENT


def _normalize_logging(cfg: DownloadConfig) -> None:
    level = str(cfg.logging.level or "").upper()
    cfg.logging.level = level if level in _LOG_LEVELS else "WARNING"


def _apply_env(cfg: DownloadConfig) -> None:
    base = os.environ.get("PIE_GITHUB_API_BASE_URL", "").strip()
    if base:
        cfg.github.api_base_url = base

    timeout = os.environ.get("PIE_HTTP_TIMEOUT", "").strip()
    if timeout:
        cfg.http.timeout_s = timeout  # type: ignore[assignment]


def load_config(path: Path | None = None) -> DownloadConfig:
    path = path or config_path()
    data: dict[str, Any] = {}
    if path.exists():
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            raw = {}
        if isinstance(raw, dict):
            data = raw

    cfg = DownloadConfig(
        config_version=CONFIG_VERSION,
        github=_merge(GithubConfig, data.get("github", {})),
        http=_merge(HttpConfig, data.get("http", {})),
        logging=_merge(LoggingConfig, data.get("logging", {})),
    )

    _apply_env(cfg)
    _normalize_github(cfg)
    _normalize_http(cfg)
    _normalize_logging(cfg)
    return cfg


def save_config(cfg: DownloadConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
