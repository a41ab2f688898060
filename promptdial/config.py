"""Configuration loading for promptdial (.promptdial.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".promptdial.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CompilerConfig:
    """Defaults applied to compile requests that omit them."""

    dial: int = 3
    token_budget: int = 0
    template: Optional[str] = None


@dataclass
class StoreConfig:
    """Artifact store location and seeding behaviour."""

    path: Optional[Path] = None
    seed: bool = True


@dataclass
class ServiceConfig:
    """HTTP service bind settings."""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class PromptDialConfig:
    """Represents the settings defined in .promptdial.yml."""

    root: Path
    compiler: CompilerConfig = field(default_factory=CompilerConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)


def load_config(config_path: Path) -> PromptDialConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return PromptDialConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    compiler = CompilerConfig()
    compiler_data = _as_dict(data.get("compiler"))
    if compiler_data:
        dial = _as_int(compiler_data.get("dial"))
        if dial is not None:
            if not 0 <= dial <= 5:
                raise ConfigError(f"compiler.dial must be between 0 and 5, got {dial}")
            compiler.dial = dial
        budget = _as_int(compiler_data.get("token_budget"))
        if budget is not None:
            if budget < 0:
                raise ConfigError("compiler.token_budget must not be negative")
            compiler.token_budget = budget
        compiler.template = _as_str(compiler_data.get("template"))

    store = StoreConfig()
    store_data = _as_dict(data.get("store"))
    if store_data:
        path_str = _as_str(store_data.get("path"))
        store.path = root / path_str if path_str else None
        seed = _as_bool(store_data.get("seed"))
        if seed is not None:
            store.seed = seed

    service = ServiceConfig()
    service_data = _as_dict(data.get("service"))
    if service_data:
        service.host = _as_str(service_data.get("host")) or service.host
        service.port = _as_int(service_data.get("port")) or service.port

    return PromptDialConfig(root=root, compiler=compiler, store=store, service=service)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "CompilerConfig",
    "ConfigError",
    "PromptDialConfig",
    "ServiceConfig",
    "StoreConfig",
    "load_config",
]
