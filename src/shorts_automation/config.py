"""
Runtime configuration.
Values come from the environment, optionally seeded from a .env file.
"""

import logging
import os
from typing import Annotated, Any, List, Optional

from dotenv import find_dotenv
from pydantic import Field, ValidationError, ValidationInfo, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from shorts_automation.errors import ConfigError

TEXT_PROVIDERS = ("openai", "ollama")


class Settings(BaseSettings):
    """Application settings. Field names map to env vars unless an alias is given."""

    app_name: str = "YouTube Shorts AI Bot"

    # Text generation (OpenAI-compatible chat completions, or Ollama)
    text_ai_provider: str = "openai"
    text_ai_endpoint: str = "http://localhost:8000/v1/chat/completions"
    text_ai_api_key: str = ""
    text_ai_model: str = "qwen3"
    max_tokens_general: int = Field(default=1024, validation_alias="TEXT_AI_MAX_TOKENS_GENERAL")
    max_tokens_detailed: int = Field(default=512, validation_alias="TEXT_AI_MAX_TOKENS_DETAILED")
    temperature: float = Field(default=0.7, validation_alias="TEXT_AI_TEMPERATURE")
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.1:8b"

    # Video generation
    video_ai_endpoint: str = "http://localhost:8081/v1/video/generations"
    video_ai_api_key: str = ""
    resolution: str = Field(default="1080x1920", validation_alias="VIDEO_RESOLUTION")  # Vertical 9:16 for Shorts
    output_format: str = Field(default="mp4", validation_alias="VIDEO_OUTPUT_FORMAT")
    fps: int = Field(default=30, validation_alias="VIDEO_FPS")
    http_timeout: float = 300.0

    # Filesystem / tools
    work_dir: str = "temp_videos"
    output_dir: str = "output_shorts"
    ffmpeg_binary: str = "ffmpeg"

    # Publishing
    publish_platforms: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["youtube", "tiktok"])
    youtube_credentials_file: str = "client_secret.json"
    youtube_token_file: str = "token.pickle"
    youtube_privacy_status: str = "public"  # public, unlisted, private
    youtube_category_id: str = "22"  # 22 = People & Blogs
    tiktok_access_token: str = ""
    tiktok_privacy_level: str = "SELF_ONLY"
    tiktok_account: str = "youraccount"

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        validate_default=True,
        validate_assignment=True,
    )

    @field_validator("text_ai_provider", mode="before")
    @classmethod
    def _known_provider(cls, value: Any) -> Any:
        provider = str(value).strip().lower()
        if provider not in TEXT_PROVIDERS:
            raise ValueError(f"TEXT_AI_PROVIDER must be one of {', '.join(TEXT_PROVIDERS)}, got '{value}'")
        return provider

    @field_validator("video_ai_endpoint")
    @classmethod
    def _video_endpoint_set(cls, value: str) -> str:
        if not value:
            raise ValueError("VIDEO_AI_ENDPOINT is not set")
        return value

    @field_validator("video_ai_api_key")
    @classmethod
    def _video_key_set(cls, value: str) -> str:
        if not value:
            raise ValueError("VIDEO_AI_API_KEY is not set")
        return value

    @field_validator("fps", "max_tokens_general", "max_tokens_detailed")
    @classmethod
    def _positive(cls, value: int, info: ValidationInfo) -> int:
        if value <= 0:
            raise ValueError(f"{info.field_name} must be positive, got {value}")
        return value

    @field_validator("output_format", mode="before")
    @classmethod
    def _bare_extension(cls, value: Any) -> Any:
        fmt = str(value).strip().lstrip(".")
        if not fmt:
            raise ValueError("VIDEO_OUTPUT_FORMAT is not set")
        return fmt

    @field_validator("publish_platforms", mode="before")
    @classmethod
    def _split_platforms(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.split(",")
        return [str(item).strip().lower() for item in value if str(item).strip()]

    @model_validator(mode="after")
    def _text_endpoint_for_openai(self) -> "Settings":
        if self.text_ai_provider == "openai" and not self.text_ai_endpoint:
            raise ValueError("TEXT_AI_ENDPOINT is not set")
        return self

    def warn_missing_credentials(self, logger: logging.Logger) -> None:
        """Credentials are only needed at publish time, so startup just warns."""
        if "youtube" in self.publish_platforms and not (
            os.path.exists(self.youtube_credentials_file) or os.path.exists(self.youtube_token_file)
        ):
            logger.warning("YouTube credentials not found (%s). Upload to YouTube will fail.",
                           self.youtube_credentials_file)
        if "tiktok" in self.publish_platforms and not self.tiktok_access_token:
            logger.warning("TIKTOK_ACCESS_TOKEN is not set. Upload to TikTok will fail.")


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item["loc"]).upper()
        message = item["msg"].replace("Value error, ", "")
        parts.append(f"{field}: {message}" if field else message)
    return "; ".join(parts)


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build validated Settings from the environment and a .env file (if present)."""
    try:
        return Settings(_env_file=env_file or find_dotenv(usecwd=True) or None)
    except ValidationError as e:
        raise ConfigError(_describe(e)) from e
