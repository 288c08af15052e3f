"""
Configuration for the provenance engine.

Environment variables are read once into a DetectionConfig that is injected
into the detection service. The only other environment reads are the
LOG_LEVEL and LOG_FORMAT defaults in provenance.core.log.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from provenance.core.exceptions import ConfigurationError


AI_CONFIDENCE_THRESHOLD = 0.7

DEFAULT_CLOUDFLARE_MODELS = (
    "@cf/meta/llama-3-8b-instruct",
    "@cf/mistral/mistral-7b-instruct-v0.1",
)
DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-20250514"


@dataclass
class DetectionConfig:
    """Configuration for providers, timeouts and classification"""
    cloudflare_api_token: Optional[str] = None
    cloudflare_account_id: Optional[str] = None
    cloudflare_models: Tuple[str, ...] = DEFAULT_CLOUDFLARE_MODELS
    anthropic_api_key: Optional[str] = None
    anthropic_model: str = DEFAULT_ANTHROPIC_MODEL
    anthropic_char_budget: int = 2000
    provider_timeout: float = 20.0   # seconds, per provider call
    deadline: Optional[float] = 30.0  # seconds, per provider including model fallbacks
    ai_threshold: float = AI_CONFIDENCE_THRESHOLD
    max_text_length: int = 15000
    history_size: int = 100

    def __post_init__(self):
        """Validate configuration values"""
        self.cloudflare_models = tuple(m for m in self.cloudflare_models if m)
        if not 0.0 <= self.ai_threshold <= 1.0:
            raise ConfigurationError("ai_threshold", f"must be 0-1, got {self.ai_threshold}")
        if self.provider_timeout <= 0:
            raise ConfigurationError(
                "provider_timeout", f"must be positive, got {self.provider_timeout}"
            )
        if self.deadline is not None and self.deadline <= 0:
            raise ConfigurationError("deadline", f"must be positive, got {self.deadline}")
        if self.anthropic_char_budget <= 0:
            raise ConfigurationError(
                "anthropic_char_budget", f"must be positive, got {self.anthropic_char_budget}"
            )
        if self.max_text_length <= 0:
            raise ConfigurationError(
                "max_text_length", f"must be positive, got {self.max_text_length}"
            )
        if self.history_size <= 0:
            raise ConfigurationError("history_size", f"must be positive, got {self.history_size}")

    @property
    def cloudflare_enabled(self) -> bool:
        return bool(self.cloudflare_api_token and self.cloudflare_account_id)

    @property
    def anthropic_enabled(self) -> bool:
        return bool(self.anthropic_api_key)

    @classmethod
    def from_env(cls, env: Mapping[str, str] = None) -> "DetectionConfig":
        """
        Build configuration from environment variables.

        Args:
            env: Mapping to read from. Defaults to os.environ after loading
                 a .env file if one is present.

        Returns:
            Validated DetectionConfig

        Raises:
            ConfigurationError: If a value cannot be parsed or is out of range
        """
        if env is None:
            load_dotenv()
            env = os.environ

        kwargs = {
            "cloudflare_api_token": env.get("CLOUDFLARE_API_TOKEN") or None,
            "cloudflare_account_id": env.get("CLOUDFLARE_ACCOUNT_ID") or None,
            "anthropic_api_key": env.get("ANTHROPIC_API_KEY") or None,
        }

        models = env.get("PROVENANCE_CLOUDFLARE_MODELS")
        if models:
            kwargs["cloudflare_models"] = tuple(m.strip() for m in models.split(","))
        if env.get("PROVENANCE_ANTHROPIC_MODEL"):
            kwargs["anthropic_model"] = env["PROVENANCE_ANTHROPIC_MODEL"].strip()

        for key, name, cast in (
            ("PROVENANCE_PROVIDER_TIMEOUT", "provider_timeout", float),
            ("PROVENANCE_DEADLINE", "deadline", float),
            ("PROVENANCE_AI_THRESHOLD", "ai_threshold", float),
            ("PROVENANCE_MAX_TEXT_LENGTH", "max_text_length", int),
            ("PROVENANCE_ANTHROPIC_CHAR_BUDGET", "anthropic_char_budget", int),
        ):
            raw = env.get(key)
            if raw is None or raw.strip() == "":
                continue
            try:
                kwargs[name] = cast(raw)
            except ValueError as e:
                raise ConfigurationError(key, f"cannot parse {raw!r}: {e}")

        return cls(**kwargs)
