"""
Adapters – concrete implementations of ports.
default_adapters() wires them from Settings; pass overrides for testing or
to plug in another backend.
"""

import logging
from typing import Any, Dict, Optional

from shorts_automation.adapters.ffmpeg import FFmpegConcatenator
from shorts_automation.adapters.text import ChatCompletionTextGenerator, OllamaTextGenerator
from shorts_automation.adapters.tiktok import TikTokUploader
from shorts_automation.adapters.upload import PLATFORM_TIKTOK, PLATFORM_YOUTUBE, MultiPlatformUploader
from shorts_automation.adapters.video import HttpVideoGenerator
from shorts_automation.adapters.youtube import YouTubeUploader
from shorts_automation.config import Settings


def build_text_generator(settings: Settings, logger: Optional[logging.Logger] = None):
    if settings.text_ai_provider == "ollama":
        return OllamaTextGenerator(
            host=settings.ollama_base_url,
            model=settings.ollama_model,
            max_tokens_general=settings.max_tokens_general,
            max_tokens_detailed=settings.max_tokens_detailed,
            temperature=settings.temperature,
            timeout=settings.http_timeout,
            logger=logger,
        )
    return ChatCompletionTextGenerator(
        endpoint=settings.text_ai_endpoint,
        model=settings.text_ai_model,
        max_tokens_general=settings.max_tokens_general,
        max_tokens_detailed=settings.max_tokens_detailed,
        temperature=settings.temperature,
        api_key=settings.text_ai_api_key,
        timeout=settings.http_timeout,
        logger=logger,
    )


def build_uploader(settings: Settings, logger: Optional[logging.Logger] = None) -> MultiPlatformUploader:
    return MultiPlatformUploader(
        {
            PLATFORM_YOUTUBE: YouTubeUploader(
                credentials_file=settings.youtube_credentials_file,
                token_file=settings.youtube_token_file,
                category_id=settings.youtube_category_id,
                privacy_status=settings.youtube_privacy_status,
                logger=logger,
            ),
            PLATFORM_TIKTOK: TikTokUploader(
                access_token=settings.tiktok_access_token,
                privacy_level=settings.tiktok_privacy_level,
                account=settings.tiktok_account,
                timeout=settings.http_timeout,
                logger=logger,
            ),
        },
        logger=logger,
    )


def default_adapters(
    settings: Settings,
    logger: Optional[logging.Logger] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    """
    Build default adapter instances.
    Overrides: text_generator=..., video_generator=..., concatenator=..., uploader=...
    """
    defaults: Dict[str, Any] = {
        "text_generator": build_text_generator(settings, logger),
        "video_generator": HttpVideoGenerator(
            endpoint=settings.video_ai_endpoint,
            api_key=settings.video_ai_api_key,
            resolution=settings.resolution,
            output_format=settings.output_format,
            fps=settings.fps,
            timeout=settings.http_timeout,
            logger=logger,
        ),
        "concatenator": FFmpegConcatenator(ffmpeg_binary=settings.ffmpeg_binary, logger=logger),
        "uploader": build_uploader(settings, logger),
    }
    defaults.update(overrides)
    return defaults
