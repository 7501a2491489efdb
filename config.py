"""
Configuration management for the LINE fortune relay.

Loads environment variables from .env file and provides typed access to configuration.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional, Tuple

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


LLMBackendType = Literal["openai", "stub"]
UnentitledPolicyType = Literal["abort_batch", "skip_event"]

SUPPORTED_LLM_BACKENDS = ("openai", "stub")
SUPPORTED_UNENTITLED_POLICIES = ("abort_batch", "skip_event")

DEFAULT_PAID_USER_IDS = "user_id_1,user_id_2"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""
    pass


def _split_ids(raw: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _parse_number(name: str, default, cast, problems: list):
    """Read a numeric variable, recording a problem instead of raising."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        problems.append(f"{name}={raw!r} is not a valid {cast.__name__}")
        return default


@dataclass(frozen=True)
class Config:
    """Typed configuration for the relay."""

    # LINE Messaging API
    line_access_token: str = ""
    line_channel_secret: str = ""

    # Completion backend
    llm_backend: LLMBackendType = "openai"
    openai_api_key: str = ""
    openai_model: str = "gpt-4"
    openai_temperature: float = 0.7
    openai_max_tokens: int = 100

    # Entitlements
    paid_user_ids: Tuple[str, ...] = field(default_factory=lambda: _split_ids(DEFAULT_PAID_USER_IDS))
    unentitled_policy: UnentitledPolicyType = "abort_batch"
    admin_token: Optional[str] = None

    # Server
    http_timeout_s: float = 30.0
    port: int = 3000
    environment: str = "development"
    log_level: str = "INFO"

    # Problems found while reading the environment, reported by validate()
    parse_errors: Tuple[str, ...] = ()

    @classmethod
    def from_env(cls) -> "Config":
        """
        Load configuration from environment variables.

        Never raises: malformed values fall back to their defaults and are
        reported by validate(), which must run before serving traffic.
        """
        problems: list = []
        temperature = _parse_number("OPENAI_TEMPERATURE", 0.7, float, problems)
        max_tokens = _parse_number("OPENAI_MAX_TOKENS", 100, int, problems)
        http_timeout_s = _parse_number("HTTP_TIMEOUT_S", 30.0, float, problems)
        port = _parse_number("PORT", 3000, int, problems)

        return cls(
            line_access_token=os.getenv("LINE_ACCESS_TOKEN", ""),
            line_channel_secret=os.getenv("LINE_CHANNEL_SECRET", ""),
            llm_backend=os.getenv("LLM_BACKEND", "openai").strip().lower(),  # type: ignore
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4"),
            openai_temperature=temperature,
            openai_max_tokens=max_tokens,
            paid_user_ids=_split_ids(os.getenv("PAID_USER_IDS", DEFAULT_PAID_USER_IDS)),
            unentitled_policy=os.getenv("UNENTITLED_POLICY", "abort_batch").strip().lower(),  # type: ignore
            admin_token=os.getenv("ADMIN_TOKEN") or None,
            http_timeout_s=http_timeout_s,
            port=port,
            environment=os.getenv("ENVIRONMENT", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            parse_errors=tuple(problems),
        )

    def validate(self) -> "Config":
        """
        Fail fast on missing or invalid values.

        Raises:
            ConfigurationError: listing every problem found

        Returns:
            self, so calls can be chained off from_env()
        """
        problems = list(self.parse_errors)

        if not self.line_access_token:
            problems.append("LINE_ACCESS_TOKEN is not set")
        if not self.line_channel_secret:
            problems.append("LINE_CHANNEL_SECRET is not set")

        if self.llm_backend not in SUPPORTED_LLM_BACKENDS:
            problems.append(
                f"LLM_BACKEND={self.llm_backend!r} is not one of {SUPPORTED_LLM_BACKENDS}"
            )
        elif self.llm_backend == "openai" and not self.openai_api_key:
            problems.append("OPENAI_API_KEY is not set")

        if self.unentitled_policy not in SUPPORTED_UNENTITLED_POLICIES:
            problems.append(
                f"UNENTITLED_POLICY={self.unentitled_policy!r} is not one of "
                f"{SUPPORTED_UNENTITLED_POLICIES}"
            )

        if self.openai_max_tokens <= 0:
            problems.append("OPENAI_MAX_TOKENS must be positive")
        if self.http_timeout_s <= 0:
            problems.append("HTTP_TIMEOUT_S must be positive")
        if self.log_level not in LOG_LEVELS:
            problems.append(f"LOG_LEVEL={self.log_level!r} is not one of {LOG_LEVELS}")

        if problems:
            raise ConfigurationError(
                "Invalid configuration: " + "; ".join(problems)
            )

        return self


def get_config() -> Config:
    """Get configuration from the current environment."""
    return Config.from_env()


if __name__ == "__main__":
    # Test configuration loading
    config = get_config()
    print("Configuration loaded:")
    print(f"  LINE access token: {'✓ Set' if config.line_access_token else '✗ Missing'}")
    print(f"  LINE channel secret: {'✓ Set' if config.line_channel_secret else '✗ Missing'}")
    print(f"  LLM backend: {config.llm_backend} ({config.openai_model})")
    print(f"  Seeded paid users: {len(config.paid_user_ids)}")
    print(f"  Unentitled policy: {config.unentitled_policy}")
    print(f"  Admin token: {'✓ Set' if config.admin_token else '✗ Not set (admin endpoints open)'}")
    print(f"  Port: {config.port}")
    try:
        config.validate()
        print("\n  Validation: ✓ PASSED")
    except ConfigurationError as e:
        print(f"\n  Validation: ✗ FAILED ({e})")
