"""TikTok uploader using the Content Posting API (direct post, single-chunk file upload)."""

import logging
import os
from pathlib import Path
from typing import Optional

import requests

from shorts_automation.errors import PublishError
from shorts_automation.ports.interfaces import IVideoUploader

PLATFORM = "tiktok"
INIT_URL = "https://open.tiktokapis.com/v2/post/publish/video/init/"
# Container formats accepted by the Content Posting API
CONTENT_TYPES = {"mp4": "video/mp4", "mov": "video/quicktime", "webm": "video/webm"}


class TikTokUploader(IVideoUploader):
    """Needs a user access token with the video.publish scope."""

    def __init__(
        self,
        access_token: str,
        privacy_level: str = "SELF_ONLY",
        account: str = "youraccount",
        timeout: float = 300.0,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.access_token = access_token
        self.privacy_level = privacy_level
        self.account = account
        self.timeout = timeout
        self._session = session or requests.Session()
        self._logger = logger or logging.getLogger(__name__)

    def upload(self, video_path: Path, title: str, description: str, tags: str) -> str:
        self._logger.info("Starting TikTok upload: %s", video_path)
        self._logger.info("Title: %s, Description: %s, Tags: %s", title, description, tags)

        if not self.access_token:
            raise PublishError(PLATFORM, "TikTok access token is not configured")
        if not os.path.exists(video_path):
            raise PublishError(PLATFORM, f"video file not found: {video_path}")
        extension = Path(video_path).suffix.lstrip(".").lower()
        content_type = CONTENT_TYPES.get(extension)
        if content_type is None:
            raise PublishError(PLATFORM, f"unsupported video format for TikTok: '{extension}'")

        video_size = os.path.getsize(video_path)
        hashtags = " ".join(f"#{t.strip()}" for t in tags.split(",") if t.strip())
        caption = " ".join(part for part in (title, description, hashtags) if part)[:2200]

        init_body = {
            "post_info": {
                "title": caption,
                "privacy_level": self.privacy_level,
                "disable_duet": False,
                "disable_comment": False,
                "disable_stitch": False,
            },
            "source_info": {
                "source": "FILE_UPLOAD",
                "video_size": video_size,
                "chunk_size": video_size,
                "total_chunk_count": 1,
            },
        }
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json; charset=UTF-8",
        }

        try:
            response = self._session.post(INIT_URL, json=init_body, headers=headers, timeout=self.timeout)
            if response.status_code != 200:
                raise PublishError(PLATFORM, f"TikTok init returned {response.status_code}: {response.text[:500]}")
            data = response.json().get("data") or {}
            publish_id = data.get("publish_id")
            upload_url = data.get("upload_url")
            if not publish_id or not upload_url:
                raise PublishError(PLATFORM, f"TikTok init response missing publish_id/upload_url: {data}")

            with open(video_path, "rb") as video:
                put = self._session.put(
                    upload_url,
                    data=video,
                    headers={
                        "Content-Type": content_type,
                        "Content-Length": str(video_size),
                        "Content-Range": f"bytes 0-{video_size - 1}/{video_size}",
                    },
                    timeout=self.timeout,
                )
            if put.status_code not in (200, 201):
                raise PublishError(PLATFORM, f"TikTok upload returned {put.status_code}: {put.text[:500]}")
        except (requests.RequestException, ValueError, OSError) as e:
            raise PublishError(PLATFORM, f"TikTok upload failed: {e}") from e

        self._logger.info("TikTok accepted upload, publish_id=%s", publish_id)
        return f"https://www.tiktok.com/@{self.account}?publish_id={publish_id}"
