"""Configuration loader and merger."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

import yaml

from batwifi.registry.catalog import Platform

DEFAULTS: Dict[str, Any] = {
    "server": {"host": "0.0.0.0", "port": 8080},
    "log_level": "INFO",
    "platform": "auto",
    "linux": {"battery_device": "battery_BAT0", "wifi_interface": "wlan0"},
    "static_dir": "public",
    "demo_page": "demo.html",
    "audit_log": "",
}


def deep_merge(base: Dict[str, Any], incoming: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(base)
    for key, value in (incoming or {}).items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"invalid yaml mapping: {path}")
    return data


def load_configs(paths: Iterable[str]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    for path in paths:
        if not path or not os.path.exists(path):
            continue
        merged = deep_merge(merged, load_yaml_file(path))
    return merged


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply multi-environment overrides.

    runtime.yaml may carry named override blocks under ``environments``
    (the shipped one has ``dev``, which turns on DEBUG logs and the audit
    log). BATWIFI_ENV picks one; unknown names leave the config unchanged.
    """
    env = (os.getenv("BATWIFI_ENV") or "").strip()
    envs = config.get("environments") if isinstance(config, dict) else None
    if not env or not isinstance(envs, dict) or env not in envs:
        return config
    return deep_merge(config, envs.get(env) or {})


def load_runtime_env() -> Dict[str, Any]:
    return {
        "server": {
            "host": os.getenv("BATWIFI_HOST"),
            "port": os.getenv("BATWIFI_PORT"),
        },
        "log_level": os.getenv("BATWIFI_LOG_LEVEL"),
        "platform": os.getenv("BATWIFI_PLATFORM"),
        "audit_log": os.getenv("BATWIFI_AUDIT_LOG"),
    }


def merge_env_config(config: Dict[str, Any], env_cfg: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(config)
    for key, value in env_cfg.items():
        if isinstance(value, dict):
            merged[key] = {**merged.get(key, {}), **{k: v for k, v in value.items() if v}}
        elif value:
            merged[key] = value
    return merged


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    log_level: str
    platform: str
    battery_device: str
    wifi_interface: str
    static_dir: str
    demo_page: str
    audit_log: str

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "Settings":
        cfg = deep_merge(DEFAULTS, data or {})
        server = cfg.get("server") or {}
        linux = cfg.get("linux") or {}
        platform = str(cfg.get("platform") or "auto").strip().lower()
        if platform != "auto" and platform not in [p.value for p in Platform]:
            raise ValueError(f"unknown platform: {platform}")
        return cls(
            host=str(server.get("host")),
            port=int(server.get("port")),
            log_level=str(cfg.get("log_level") or "INFO").upper(),
            platform=platform,
            battery_device=str(linux.get("battery_device") or ""),
            wifi_interface=str(linux.get("wifi_interface") or ""),
            static_dir=str(cfg.get("static_dir") or ""),
            demo_page=str(cfg.get("demo_page") or ""),
            audit_log=str(cfg.get("audit_log") or ""),
        )


def load_settings(config_path: Optional[str] = None) -> Settings:
    cfg = apply_env_overrides(load_configs([config_path or ""]))
    cfg = merge_env_config(cfg, load_runtime_env())
    return Settings.from_mapping(cfg)
