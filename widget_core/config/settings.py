"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置。
后端地址只有一个外部注入入口：CHATBOT_API_URL，缺省为本地开发地址。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_WELCOME_TEXT = (
    "Hello! I'm your AI-powered cybersecurity tutor. I can help you understand "
    "security concepts, attack types, and terminology. Ask me anything!"
)


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("WIDGET_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class WidgetSettings(BaseSettings):
    """配置设置（使用 Pydantic）。"""

    chatbot_api_url: str = Field(
        default=DEFAULT_API_URL,
        description="问答服务基础URL，请求发往 {chatbot_api_url}/api/chat",
    )
    min_request_interval_ms: int = Field(
        default=3000,
        ge=0,
        description="两次被接受的发送之间的最小间隔（毫秒）",
    )
    # 默认不设超时：后端卡住时组件会一直处于 pending
    http_timeout: Optional[float] = Field(default=None, gt=0, description="HTTP 超时时间（秒）")
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")
    welcome_text: str = Field(default=DEFAULT_WELCOME_TEXT, description="打开组件时展示的欢迎语")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("chatbot_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            return DEFAULT_API_URL
        return v.rstrip("/")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = WidgetSettings()
