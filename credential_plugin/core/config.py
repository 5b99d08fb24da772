"""
Configuration management for credential_plugin.

Provides centralized, type-safe configuration with environment variable overrides
and sensible defaults for the prebuild pipeline and the runtime bridge.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()


class PluginDefaultsConfig(BaseModel):
    """Fallbacks used when neither the plugin props nor the app config name a package."""

    default_android_package: str = Field(
        default="com.app", min_length=1, description="Last-resort Android package"
    )
    app_config_file: str = Field(default="app.json", description="Project config file name")


class PlatformConfig(BaseModel):
    """Target platform selection."""

    target: Literal["android", "ios"] = Field(
        default="android", description="Platform the prebuild runs for"
    )
    platform_dir: str = Field(
        default="android", description="Native project directory under the project root"
    )


class Config(BaseModel):
    """Root configuration for credential_plugin."""

    project_name: str = Field(default="credential_plugin", description="Project identifier")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    defaults: PluginDefaultsConfig = Field(default_factory=PluginDefaultsConfig)
    platform: PlatformConfig = Field(default_factory=PlatformConfig)

    model_config = {"extra": "ignore"}

    @property
    def default_android_package(self) -> str:
        return self.defaults.default_android_package

    def platform_root(self, project_dir: Path) -> Path:
        """Native project root for a project directory."""
        return project_dir / self.platform.platform_dir

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables."""
        return cls(
            log_level=os.environ.get("GSI_LOG_LEVEL", "INFO"),  # type: ignore
            defaults=PluginDefaultsConfig(
                default_android_package=os.environ.get("GSI_DEFAULT_ANDROID_PACKAGE", "com.app"),
                app_config_file=os.environ.get("GSI_APP_CONFIG_FILE", "app.json"),
            ),
            platform=PlatformConfig(
                target=os.environ.get("GSI_PLATFORM", "android"),  # type: ignore
                platform_dir=os.environ.get("GSI_PLATFORM_DIR", "android"),
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
