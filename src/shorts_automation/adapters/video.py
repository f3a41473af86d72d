"""IVideoGenerator adapter for an HTTP video-generation service that returns a video URL."""

import json
import logging
from pathlib import Path
from typing import Optional

import requests

from shorts_automation.errors import (
    DownloadError,
    EmptyLocatorError,
    RequestEncodingError,
    ResponseDecodeError,
    ServiceError,
    ServiceStatusError,
)
from shorts_automation.ports.interfaces import IVideoGenerator

DOWNLOAD_CHUNK_SIZE = 1024 * 1024


class HttpVideoGenerator(IVideoGenerator):
    """POSTs {prompt, resolution, output_format, fps}, then downloads the returned video_url."""

    service_name = "video generation service"

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        resolution: str,
        output_format: str,
        fps: int,
        timeout: float = 300.0,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.endpoint = endpoint
        self.api_key = api_key
        self.resolution = resolution
        self.output_format = output_format
        self.fps = fps
        self.timeout = timeout
        self._session = session or requests.Session()
        self._logger = logger or logging.getLogger(__name__)

    def segment_path(self, work_dir: Path, position: int) -> Path:
        return Path(work_dir) / f"segment_{position}.{self.output_format}"

    def generate_segment(self, prompt: str, position: int, work_dir: Path) -> Path:
        self._logger.info("Requesting video segment %d for prompt: %s", position, prompt)

        payload = {
            "prompt": prompt,
            "resolution": self.resolution,
            "output_format": self.output_format,
            "fps": self.fps,
        }
        try:
            body = json.dumps(payload)
        except (TypeError, ValueError) as e:
            raise RequestEncodingError(f"could not encode video request: {e}") from e

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        try:
            response = self._session.post(self.endpoint, data=body, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise ServiceError(f"request to {self.service_name} failed: {e}") from e

        if response.status_code != 200:
            raise ServiceStatusError(self.service_name, response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise ResponseDecodeError(
                f"could not decode {self.service_name} response: {e}\nResponse: {response.text[:500]}"
            ) from e

        video_url = data.get("video_url") if isinstance(data, dict) else None
        if not video_url:
            raise EmptyLocatorError(f"no video_url in {self.service_name} response")

        video_path = self.segment_path(work_dir, position)
        self._download(video_url, video_path)
        self._logger.info("Video segment %d generated and saved: %s", position, video_path)
        return video_path

    def _download(self, url: str, path: Path) -> None:
        self._logger.info("Downloading %s to %s", url, path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with self._session.get(url, stream=True, timeout=self.timeout) as response:
                if response.status_code != 200:
                    raise DownloadError(f"download of {url} returned status {response.status_code}")
                with open(path, "wb") as out:
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            out.write(chunk)
        except DownloadError:
            path.unlink(missing_ok=True)
            raise
        except (requests.RequestException, OSError) as e:
            path.unlink(missing_ok=True)
            raise DownloadError(f"could not save {url} to {path}: {e}") from e
