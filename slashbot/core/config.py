import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_SUCCESS = "\U0001F603"
DEFAULT_WARNING = "\U0001F62E"
DEFAULT_ERROR = "\U0001F626"


def _parse_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"Invalid {name} value: {raw!r}")


def _parse_id_list(name: str) -> List[int]:
    raw = os.getenv(name, "")
    if not raw:
        return []
    try:
        return [int(part.strip()) for part in raw.split(",") if part.strip()]
    except ValueError:
        raise ConfigurationError(f"Invalid {name} format in .env file")


@dataclass
class BotConfig:

    token: str
    owner_id: int = 0
    co_owner_ids: List[int] = field(default_factory=list)
    success_emoji: str = DEFAULT_SUCCESS
    warning_emoji: str = DEFAULT_WARNING
    error_emoji: str = DEFAULT_ERROR
    shard_id: int = 0
    cooldown_cleanup_interval_sec: int = 600
    metrics_host: str = "127.0.0.1"
    metrics_port: int = 9000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "BotConfig":

        token = os.getenv("BOT_TOKEN") or ""
        if not token:
            logger.warning("BOT_TOKEN not set; using empty token (test mode)")

        owner_id = _parse_int("OWNER_ID", "0")
        if owner_id == 0:
            logger.warning("OWNER_ID not set; owner-only commands are disabled")

        return cls(
            token=token,
            owner_id=owner_id,
            co_owner_ids=_parse_id_list("CO_OWNER_IDS"),
            success_emoji=os.getenv("SUCCESS_EMOJI", DEFAULT_SUCCESS),
            warning_emoji=os.getenv("WARNING_EMOJI", DEFAULT_WARNING),
            error_emoji=os.getenv("ERROR_EMOJI", DEFAULT_ERROR),
            shard_id=_parse_int("SHARD_ID", "0"),
            cooldown_cleanup_interval_sec=_parse_int(
                "COOLDOWN_CLEANUP_INTERVAL_SEC", "600"
            ),
            metrics_host=os.getenv("METRICS_HOST", "127.0.0.1"),
            metrics_port=_parse_int("METRICS_PORT", "9000"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


class ConfigProvider(ABC):

    @abstractmethod
    def get(self) -> BotConfig:

        raise NotImplementedError


class EnvConfigProvider(ConfigProvider):

    def __init__(self) -> None:

        self._config: Optional[BotConfig] = None

    def get(self) -> BotConfig:

        if self._config is None:
            self._config = BotConfig.from_env()
        return self._config

    def reset(self) -> None:

        self._config = None


class StaticConfigProvider(ConfigProvider):

    def __init__(self, config: BotConfig) -> None:

        self._config = config

    def get(self) -> BotConfig:

        return self._config


_config_provider: ConfigProvider = EnvConfigProvider()


def get_config_provider() -> ConfigProvider:

    return _config_provider


def set_config_provider(provider: ConfigProvider) -> None:

    global _config_provider
    _config_provider = provider


def reset_config_provider() -> None:

    set_config_provider(EnvConfigProvider())


def get_config() -> BotConfig:

    return _config_provider.get()


def set_config(config_instance: BotConfig) -> None:

    set_config_provider(StaticConfigProvider(config_instance))
