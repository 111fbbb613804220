########## ini_config.py

from __future__ import annotations

import os
from configparser import ConfigParser, Error as ConfigParserError
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from spec_simplifier.domain.errors import ConfigError

INI_DEFAULT_NAME = "spec_simplifier.ini"


@dataclass(frozen=True)
class AppSettings:
    # Review service
    api_url: str
    model: str
    max_tokens: int
    timeout_seconds: float
    api_key_env: str
    anthropic_version: str

    # Retry
    max_attempts: int
    base_delay_seconds: float

    # Discovery
    spec_suffixes: tuple[str, ...]
    spec_marker: str

    # Report / run
    report_prefix: str
    max_files: int                # 0 = process everything

    # Logging
    log_level: str
    log_file: Optional[Path]

    def api_key(self) -> Optional[str]:
        return os.getenv(self.api_key_env)


class IniConfig:
    """
    Adapter around ConfigParser.
    Keeps INI handling out of the service code.
    """

    def __init__(self, ini_path: Optional[Path], *, required: bool = True):
        self._ini_path = ini_path
        self._cfg = ConfigParser()
        if ini_path is None:
            return
        try:
            read_ok = self._cfg.read(str(ini_path), encoding="utf-8-sig")
        except ConfigParserError as e:
            raise ConfigError(f"INI file could not be parsed: {ini_path}: {e}") from e
        if not read_ok and required:
            raise ConfigError(f"INI file not found or unreadable: {ini_path}")

    @property
    def ini_path(self) -> Optional[Path]:
        return self._ini_path

    @staticmethod
    def from_env_or_default(explicit: Optional[str] = None) -> "IniConfig":
        ini_raw = (explicit or os.getenv("APP_INI") or "").strip()
        if ini_raw:
            return IniConfig(Path(os.path.expandvars(os.path.expanduser(ini_raw))))
        # If APP_INI is not set, default to repo-root-relative ini location; built-in defaults if absent
        return IniConfig(Path(__file__).resolve().parents[2] / INI_DEFAULT_NAME, required=False)

    def _str(self, section: str, key: str, default: str) -> str:
        return (self._cfg.get(section, key, fallback=default) or "").strip() or default

    def _int(self, section: str, key: str, default: int) -> int:
        try:
            return self._cfg.getint(section, key, fallback=default)
        except ValueError as e:
            raise ConfigError(f"[{section}] {key} must be an integer") from e

    def _float(self, section: str, key: str, default: float) -> float:
        try:
            return self._cfg.getfloat(section, key, fallback=default)
        except ValueError as e:
            raise ConfigError(f"[{section}] {key} must be a number") from e

    def load_settings(self) -> AppSettings:
        # Review service
        api_url = self._str("review", "api_url", "https://api.anthropic.com/v1/messages")
        model = self._str("review", "model", "claude-3-sonnet-20240229")
        max_tokens = self._int("review", "max_tokens", 4096)
        timeout_seconds = self._float("review", "timeout_seconds", 120.0)
        api_key_env = self._str("review", "api_key_env", "CLAUDE_API_KEY")
        anthropic_version = self._str("review", "anthropic_version", "2023-06-01")

        # Retry
        max_attempts = self._int("retry", "max_attempts", 3)
        base_delay_seconds = self._float("retry", "base_delay_seconds", 1.0)

        # Discovery
        spec_suffixes = tuple(
            s.strip()
            for s in self._str("discovery", "spec_suffixes", ".spec.js, .spec.ts, .spec.vue").split(",")
            if s.strip()
        )
        spec_marker = self._str("discovery", "spec_marker", ".spec.")

        # Report / run
        report_prefix = self._str("report", "file_prefix", "simplify_report_")
        max_files = self._int("run", "max_files", 0)

        # Logging
        log_level = self._str("logging", "level", "WARNING").upper()
        log_file_raw = (self._cfg.get("logging", "file", fallback="") or "").strip()
        log_file = Path(os.path.expanduser(log_file_raw)).resolve() if log_file_raw else None

        # Validate
        if max_attempts < 1:
            raise ConfigError("[retry] max_attempts must be at least 1")
        if base_delay_seconds < 0:
            raise ConfigError("[retry] base_delay_seconds must not be negative")
        if max_files < 0:
            raise ConfigError("[run] max_files must not be negative")
        if not spec_suffixes:
            raise ConfigError("[discovery] spec_suffixes is empty")

        return AppSettings(
            api_url=api_url,
            model=model,
            max_tokens=max_tokens,
            timeout_seconds=timeout_seconds,
            api_key_env=api_key_env,
            anthropic_version=anthropic_version,
            max_attempts=max_attempts,
            base_delay_seconds=base_delay_seconds,
            spec_suffixes=spec_suffixes,
            spec_marker=spec_marker,
            report_prefix=report_prefix,
            max_files=max_files,
            log_level=log_level,
            log_file=log_file,
        )
