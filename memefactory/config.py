from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Keys
    youtube_api_key: str = Field(default="")
    openai_api_key: str = Field(default="")
    runwayml_api_secret: str = Field(default="")

    # LLM Configuration
    llm_model: str = Field(default="gpt-4o-mini")

    # Runway
    runway_base_url: str = Field(default="https://api.dev.runwayml.com")
    runway_api_version: str = Field(default="2024-11-06")

    # Application
    base_url: str = Field(default="http://localhost:3000")
    debug: bool = Field(default=False)


class TrendsConfig:
    """Trend digest configuration from config.yml."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.default_region: str = data.get("default_region", "GB")
        self.default_max_results: int = data.get("default_max_results", 25)
        self.min_results: int = data.get("min_results", 1)
        self.max_results: int = data.get("max_results", 30)
        self.tags_per_item: int = data.get("tags_per_item", 6)
        self.temperature: float = data.get("temperature", 0.6)
        self.max_tokens: int = data.get("max_tokens", 500)
        self.timeout_seconds: float = data.get("timeout_seconds", 30.0)


class StoryConfig:
    """Prompt synthesis configuration from config.yml."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.temperature: float = data.get("temperature", 0.9)
        self.default_title: str = data.get("default_title", "Trending meme")
        self.max_entities: int = data.get("max_entities", 3)
        self.max_hooks: int = data.get("max_hooks", 1)
        self.max_styles: int = data.get("max_styles", 2)


class GenerationConfig:
    """Media generation configuration from config.yml."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.image_model: str = data.get("image_model", "gen4_image")
        self.image_turbo_model: str = data.get("image_turbo_model", "gen4_image_turbo")
        self.video_model: str = data.get("video_model", "gen4_turbo")
        self.ratio: str = data.get("ratio", "720:1280")
        self.duration: int = data.get("duration", 5)
        self.max_reference_images: int = data.get("max_reference_images", 3)
        self.poll_interval_seconds: float = data.get("poll_interval_seconds", 5.0)
        self.max_wait_seconds: float = data.get("max_wait_seconds", 600.0)
        self.rate_limit: str = data.get("rate_limit", "10/minute")


class AppConfig:
    """Combined application configuration from .env and config.yml."""

    def __init__(self) -> None:
        self.settings = Settings()
        self._load_yaml()

    def _load_yaml(self) -> None:
        config_path = Path("config.yml")
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        else:
            data = {}

        self.trends = TrendsConfig(data.get("trends", {}))
        self.story = StoryConfig(data.get("story", {}))
        self.generation = GenerationConfig(data.get("generation", {}))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_config() -> AppConfig:
    """Get cached full config instance."""
    return AppConfig()
