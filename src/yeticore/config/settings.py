"""
Configuration management for the engine.
"""

from pathlib import Path
from typing import Optional, List

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings

from yeticore.core.state.capabilities import DEFAULT_CAPABILITIES


class EngineSettings(BaseSettings):
    """Engine configuration settings with environment variable support."""

    # Planning
    seconds_per_action: int = Field(default=30, description="Estimated seconds per planned action")

    # Capabilities
    default_capabilities: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CAPABILITIES),
        description="Capability tags declared at startup"
    )
    enforce_capabilities: bool = Field(
        default=False,
        description="Fail actions whose type is not a declared capability"
    )

    # Memory
    max_context_entries: Optional[int] = Field(
        default=None, description="Cap on the context log; unbounded when unset"
    )

    # Remote capability functions
    functions_base_url: Optional[str] = Field(
        default=None, description="Base URL of the hosted capability functions"
    )
    functions_api_key: Optional[str] = Field(default=None, description="Bearer token for the functions")
    request_timeout_seconds: float = Field(default=30.0, description="HTTP timeout per function call")

    # Debug settings
    log_level: str = Field(default="WARNING", description="CLI logging level; --debug overrides it")

    model_config = {
        "env_file": ".env",
        "env_prefix": "YETI_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @classmethod
    def load_from_file(cls, config_path: Path) -> "EngineSettings":
        """Load settings from a YAML configuration file."""
        if not config_path.exists():
            return cls()

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)

    def save_to_file(self, config_path: Path) -> None:
        """Save settings to a YAML configuration file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)

        config_data = self.model_dump()
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config_data, f, default_flow_style=False, indent=2)
