"""Publish registry: routes an upload to the uploader registered for a platform tag."""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from shorts_automation.errors import PublishError, UnknownPlatformError
from shorts_automation.ports.interfaces import IPublisher, IVideoUploader

PLATFORM_YOUTUBE = "youtube"
PLATFORM_TIKTOK = "tiktok"


class MultiPlatformUploader(IPublisher):
    """Manages uploads to several platforms."""

    def __init__(
        self,
        uploaders: Optional[Dict[str, IVideoUploader]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._uploaders: Dict[str, IVideoUploader] = dict(uploaders or {})
        self._logger = logger or logging.getLogger(__name__)

    def register(self, platform: str, uploader: IVideoUploader) -> None:
        self._uploaders[platform] = uploader

    def platforms(self) -> List[str]:
        return list(self._uploaders)

    def upload(self, platform: str, video_path: Path, title: str, description: str, tags: str) -> str:
        """Upload to one platform; raises UnknownPlatformError or PublishError."""
        uploader = self._uploaders.get(platform)
        if uploader is None:
            raise UnknownPlatformError(platform)

        self._logger.info("Uploading video '%s' to platform: %s", video_path, platform)
        try:
            url = uploader.upload(video_path, title, description, tags)
        except PublishError as e:
            self._logger.error("Upload to %s failed: %s", platform, e)
            raise
        self._logger.info("Video successfully uploaded to %s. URL: %s", platform, url)
        return url
