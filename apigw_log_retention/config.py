import json
import os
from pathlib import Path
from typing import Mapping

from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict

from apigw_log_retention.models import HookConfig, TransportConfig

# Checked in this order, first non-empty value wins.
PROXY_ENV_VARS = ("proxy", "HTTP_PROXY", "http_proxy", "HTTPS_PROXY", "https_proxy")


class Settings(BaseSettings):
    """Settings for the log retention hook."""

    logging_level: str = "INFO"
    default_stage: str = "dev"
    default_region: str = "us-east-1"
    page_size: int = 500
    user_agent_extra: str = "apigw-log-retention"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )


settings = Settings()


def resolve_transport_config(
    environ: Mapping[str, str] | None = None, profile: str | None = None
) -> TransportConfig:
    """Resolve the proxy and credential profile used by every AWS client of a run.

    Args:
        environ: Environment to read proxy variables from, defaults to os.environ
        profile: Named credential profile from the deployment provider configuration

    Returns:
        TransportConfig: The resolved settings, with unset fields left as None
    """
    environ = os.environ if environ is None else environ

    proxy_url = next((environ[name] for name in PROXY_ENV_VARS if environ.get(name)), None)
    if proxy_url:
        logger.debug(f"Using proxy {proxy_url} for AWS calls")
    if profile:
        logger.debug(f"Using AWS credential profile {profile}")

    return TransportConfig(proxy_url=proxy_url, credential_profile=profile or None)


def load_hook_config(path: str | Path | None) -> HookConfig:
    """Load the deployment configuration file.

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
        pydantic.ValidationError: If a retention setting is invalid
    """
    if path is None:
        return HookConfig()

    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return HookConfig.model_validate(json.loads(config_path.read_text(encoding="utf-8")))
