"""
基础设施层 - 配置模块

配置来源（后者覆盖前者）：
1. 代码内默认值
2. config/portal.yaml（可选）
3. config/.env.local（通过 python-dotenv 载入环境变量）
4. 进程环境变量 PORTAL_*
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigError, handle_errors

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DATA_DIR = PROJECT_ROOT / "data"
LOGS_DIR = DATA_DIR / "logs"

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_BACKEND_URL = "http://localhost:5000"

# yaml key -> env var
_ENV_KEYS = {
    "api_base_url": "PORTAL_API_URL",
    "backend_url": "PORTAL_BACKEND_URL",
    "storage_file": "PORTAL_STORAGE_FILE",
    "log_level": "PORTAL_LOG_LEVEL",
    "log_file": "PORTAL_LOG_FILE",
}


@dataclass(frozen=True)
class PortalSettings:
    api_base_url: str = DEFAULT_API_URL
    backend_url: str = DEFAULT_BACKEND_URL  # media (resumes, avatars)
    storage_file: Path = DATA_DIR / "local_storage.json"
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @classmethod
    def from_sources(
        cls,
        yaml_path: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> "PortalSettings":
        """Build settings from an optional YAML file and an env mapping."""
        values: Dict[str, Any] = {}
        if yaml_path is not None and yaml_path.exists():
            values.update(_read_yaml(yaml_path))

        env = os.environ if env is None else env
        for key, env_key in _ENV_KEYS.items():
            v = env.get(env_key)
            if v is not None and str(v).strip():
                values[key] = str(v).strip()

        settings = cls()
        if "api_base_url" in values:
            settings = replace(settings, api_base_url=_strip_url(values["api_base_url"], "api_base_url"))
        if "backend_url" in values:
            settings = replace(settings, backend_url=_strip_url(values["backend_url"], "backend_url"))
        if "storage_file" in values:
            settings = replace(settings, storage_file=_resolve_path(values["storage_file"]))
        if "log_level" in values:
            settings = replace(settings, log_level=str(values["log_level"]).upper())
        if values.get("log_file"):
            settings = replace(settings, log_file=_resolve_path(values["log_file"]))
        return settings


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"配置文件解析失败: {e}", config_key=str(path)) from e
    if not isinstance(data, dict):
        raise ConfigError("配置文件顶层必须是映射", config_key=str(path))
    return {k: v for k, v in data.items() if k in _ENV_KEYS}


def _strip_url(value: Any, key: str) -> str:
    url = str(value or "").strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        raise ConfigError(f"无效的 URL: {value!r}", config_key=key)
    return url


def _resolve_path(value: Any) -> Path:
    p = Path(str(value)).expanduser()
    return p if p.is_absolute() else PROJECT_ROOT / p


_settings: Optional[PortalSettings] = None


@handle_errors()
def get_settings() -> PortalSettings:
    """获取全局配置（首次调用时加载 .env.local）"""
    global _settings
    if _settings is None:
        load_dotenv(CONFIG_DIR / ".env.local")
        _settings = PortalSettings.from_sources(yaml_path=CONFIG_DIR / "portal.yaml")
    return _settings


def reset_settings() -> None:
    """清除配置缓存（测试用）"""
    global _settings
    _settings = None
