import os
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_TIMEOUT = 90.0
DEFAULT_BUZZSUMO_BASE_URL = "https://api.buzzsumo.com/search/articles.json"
DEFAULT_BUZZSUMO_TIMEOUT = 10.0

DEFAULT_URL_RESOLVE_TIMEOUT = 10.0
DEFAULT_URL_VALIDATE_TIMEOUT = 8.0


@dataclass(frozen=True)
class SourceConfig:
    api_key: str
    base_url: str
    timeout: float  # seconds


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid value for {name}: {raw!r}, using {default}")
        return default


def load_gemini_config() -> SourceConfig:
    """
    Build the AI-search source config from the environment.
    base_url holds the model name, since the SDK owns the endpoint.
    """
    return SourceConfig(
        api_key=os.getenv("GEMINI_API_KEY", ""),
        base_url=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        timeout=_float_env("GEMINI_TIMEOUT", DEFAULT_GEMINI_TIMEOUT),
    )


def load_buzzsumo_config() -> SourceConfig:
    return SourceConfig(
        api_key=os.getenv("BUZZSUMO_API_KEY", ""),
        base_url=os.getenv("BUZZSUMO_API_BASE", DEFAULT_BUZZSUMO_BASE_URL),
        timeout=_float_env("BUZZSUMO_TIMEOUT", DEFAULT_BUZZSUMO_TIMEOUT),
    )


@dataclass(frozen=True)
class UrlRepairTimeouts:
    resolve: float  # per redirect hop
    validate: float  # liveness check


def load_url_repair_timeouts() -> UrlRepairTimeouts:
    return UrlRepairTimeouts(
        resolve=_float_env("URL_RESOLVE_TIMEOUT", DEFAULT_URL_RESOLVE_TIMEOUT),
        validate=_float_env("URL_VALIDATE_TIMEOUT", DEFAULT_URL_VALIDATE_TIMEOUT),
    )
