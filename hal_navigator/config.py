"""
HAL Navigator Configuration
===========================

Reads from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass, field
from typing import Dict

HAL_ACCEPT = "application/hal+json, application/json"


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class TransportConfig:
    """Settings for the default httpx transport."""
    timeout: float = 30.0
    verify: bool = True
    headers: Dict[str, str] = field(default_factory=lambda: {"Accept": HAL_ACCEPT})


@dataclass
class NavigatorConfig:
    """Master configuration for a navigation session."""

    follow_redirects: bool = True
    transport: TransportConfig = field(default_factory=TransportConfig)

    log_level: str = "INFO"
    log_format: str = "text"

    @classmethod
    def from_env(cls, prefix: str = "HAL_NAVIGATOR") -> "NavigatorConfig":
        """Load configuration from environment variables."""
        return cls(
            follow_redirects=_env_bool(f"{prefix}_FOLLOW_REDIRECTS", True),
            transport=TransportConfig(
                timeout=float(os.environ.get(f"{prefix}_TIMEOUT", "30.0")),
                verify=_env_bool(f"{prefix}_VERIFY_TLS", True),
                headers={"Accept": os.environ.get(f"{prefix}_ACCEPT", HAL_ACCEPT)},
            ),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            log_format=os.environ.get("LOG_FORMAT", "text"),
        )

    def configure_logging(self, stream=None):
        """Apply log_level/log_format to the hal_navigator logger."""
        from .logging_config import configure_logging

        return configure_logging(self.log_level, self.log_format, stream=stream)

    def to_options(self, **overrides):
        """Build NavigatorOptions backed by an HttpxTransport using these settings."""
        from .navigator import NavigatorOptions
        from .transport import HttpxTransport

        transport = HttpxTransport(config=self.transport)
        options = NavigatorOptions(
            get=transport.get,
            post=transport.post,
            follow_redirects=self.follow_redirects,
        )
        return options.with_overrides(overrides)
