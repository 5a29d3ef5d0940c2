from __future__ import annotations

from dataclasses import dataclass

from dotenv import load_dotenv

from .env import EnvReader


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 30.0
    retries: int = 0
    retry_backoff_seconds: float = 0.3
    max_connections: int = 20
    verify_ssl: bool = True

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build the client config from ``ERP_*`` variables, after loading ``env_file`` if given."""
    load_dotenv(env_file)
    env = EnvReader(ConfigError)

    env_name = env.text("ERP_ENV", "dev")
    # A profile-specific URL (ERP_API_BASE_URL_STAGING) beats the generic one.
    api_base_url = env.text(f"ERP_API_BASE_URL_{env_name.upper()}") or env.text("ERP_API_BASE_URL")
    if not api_base_url:
        raise ConfigError("Missing required config values: ERP_API_BASE_URL")

    timeout = env.number("ERP_TIMEOUT_SECONDS", 30.0, minimum=0.0, strict=True)
    connect_timeout = env.number("ERP_CONNECT_TIMEOUT_SECONDS", min(timeout, 5.0), minimum=0.0, strict=True)
    read_timeout = env.number("ERP_READ_TIMEOUT_SECONDS", max(timeout, connect_timeout), minimum=0.0, strict=True)

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout,
        read_timeout_seconds=read_timeout,
        retries=env.number("ERP_RETRIES", 0, minimum=0),
        retry_backoff_seconds=env.number("ERP_RETRY_BACKOFF_SECONDS", 0.3, minimum=0.0),
        max_connections=env.number("ERP_MAX_CONNECTIONS", 20, minimum=1),
        verify_ssl=env.flag("ERP_VERIFY_SSL", True),
    )
