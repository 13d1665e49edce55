"""
kakao_api/utils/settings.py

WHAT THIS FILE IS FOR
---------------------
This module defines the *single source of truth* for process-wide
defaults of the kakao_api client.

It is responsible for:
- Defining all supported configuration fields (via Pydantic BaseSettings)
- Loading default values from parameters/parameters.yaml
- Overriding defaults with environment variables (KAKAO_API_*)
- Exposing a cached, fully-validated Settings object

LOAD & PRECEDENCE MODEL
-----------------------
Configuration is loaded in the following order (last wins):

1) Field defaults declared on Settings
2) YAML defaults from:
       parameters/parameters.yaml
3) Environment variables:
       KAKAO_API_*

HOW SETTINGS REACH THE BUILDERS
-------------------------------
Settings are resolved once per process by get_settings() and then passed
*explicitly* into each capability factory:

    coord_to_district(127.1, 37.4, settings=my_settings)

A factory called without `settings=` falls back to get_settings().
No builder reads module-level state after construction.

WHAT THIS FILE IS NOT FOR
-------------------------
This module is NOT responsible for:
- HTTP calls
- Request building
- Key formatting (see key_formatter.py)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml
from pydantic import AnyHttpUrl, Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from kakao_api.utils.key_formatter import DEFAULT_KEY_PREFIX

logger = structlog.get_logger(__name__)

PARAMETERS_PATH = Path(__file__).resolve().parents[2] / "parameters" / "parameters.yaml"

VIDEO_UPLOAD_LIMIT_BYTES = 50 * 1024 * 1024


class Settings(BaseSettings):
    """
    Process-wide defaults for the Kakao API client.

    Load order / precedence:
        1) YAML defaults (parameters/parameters.yaml)
        2) Environment variables (KAKAO_API_*), overriding YAML
    """

    model_config = SettingsConfigDict(
        env_prefix="KAKAO_API_",
        extra="ignore",
        validate_default=True,
    )

    # Authorization
    key_prefix: str = Field(
        default=DEFAULT_KEY_PREFIX,
        min_length=1,
        description="Scheme prefix of the Authorization header value.",
    )
    rest_api_key: Optional[SecretStr] = Field(
        default=None,
        description="Default REST API key used until a builder calls authorize_with().",
    )

    # API origins, one per capability family
    local_api_base_url: AnyHttpUrl = "https://dapi.kakao.com/v2/local"
    vision_api_base_url: AnyHttpUrl = "https://dapi.kakao.com/v2/vision"
    pose_api_base_url: AnyHttpUrl = "https://cv-api.kakaobrain.com/pose"

    # Deadline on the single network call of collect()
    http_timeout_seconds: float = Field(default=60.0, gt=0)

    # Upload limits
    max_video_upload_bytes: int = Field(default=VIDEO_UPLOAD_LIMIT_BYTES, gt=0)

    def default_secret(self) -> str:
        return self.rest_api_key.get_secret_value() if self.rest_api_key else ""


def base_url(url: Any) -> str:
    return str(url).rstrip("/")


@lru_cache(maxsize=1)
def _load_yaml_parameters() -> Dict[str, Any]:
    """
    Load base configuration from parameters/parameters.yaml.

    A missing or unreadable file is not fatal: field defaults apply.
    """
    if not PARAMETERS_PATH.exists():
        logger.warning("parameters_yaml_missing", expected=str(PARAMETERS_PATH))
        return {}

    try:
        with PARAMETERS_PATH.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.error("parameters_yaml_load_error", path=str(PARAMETERS_PATH), error=str(exc))
        return {}

    if not isinstance(data, dict):
        logger.warning(
            "parameters_yaml_not_dict",
            path=str(PARAMETERS_PATH),
            type=type(data).__name__,
        )
        return {}
    logger.info("parameters_yaml_loaded", path=str(PARAMETERS_PATH))
    return data


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Construct and return the process-wide Settings object.

    Cached: resolved once per process, then threaded explicitly into
    builders by the capability factories.
    """
    # 1) YAML defaults
    yaml_data = _load_yaml_parameters()

    # 2) env overrides (partial)
    try:
        env_settings = Settings()
        env_data = env_settings.model_dump(exclude_unset=True)
        logger.info("settings_loaded_env_only_partial", fields=list(env_data.keys()))
    except ValidationError as exc:
        logger.warning("settings_env_validation_error", errors=exc.errors())
        env_data = {}

    # 3) merge + final validation
    merged: Dict[str, Any] = {**yaml_data, **env_data}
    settings = Settings.model_validate(merged)

    logger.info(
        "settings_loaded",
        key_prefix=settings.key_prefix,
        has_rest_api_key=settings.rest_api_key is not None,
        local_api_base_url=str(settings.local_api_base_url),
        vision_api_base_url=str(settings.vision_api_base_url),
        pose_api_base_url=str(settings.pose_api_base_url),
        http_timeout_seconds=settings.http_timeout_seconds,
        max_video_upload_bytes=settings.max_video_upload_bytes,
    )

    return settings
