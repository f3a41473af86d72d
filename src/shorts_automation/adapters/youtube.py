"""
YouTube uploader.
Uploads and publishes videos to a YouTube channel using YouTube Data API v3.
"""

import logging
import os
import pickle
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from google.auth.transport.requests import Request
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaFileUpload

from shorts_automation.errors import PublishError
from shorts_automation.ports.interfaces import IVideoUploader

# YouTube API scopes
SCOPES = ["https://www.googleapis.com/auth/youtube.upload"]

PLATFORM = "youtube"


def split_tags(tags: str) -> List[str]:
    return [t.strip() for t in tags.split(",") if t.strip()]


class YouTubeUploader(IVideoUploader):
    """
    Handles uploading videos to a YouTube channel.

    Needs either a stored OAuth token (token_file) or the OAuth client secrets
    (credentials_file) to run the consent flow; without one of them upload
    fails before any network call.
    """

    def __init__(
        self,
        credentials_file: str = "client_secret.json",
        token_file: str = "token.pickle",
        category_id: str = "22",
        privacy_status: str = "public",
        service_factory: Optional[Callable[[Any], Any]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.credentials_file = credentials_file
        self.token_file = token_file
        self.category_id = category_id
        self.privacy_status = privacy_status
        self._service_factory = service_factory or (lambda creds: build("youtube", "v3", credentials=creds))
        self._logger = logger or logging.getLogger(__name__)
        self.youtube = None
        self.credentials = None

    def has_credentials(self) -> bool:
        return os.path.exists(self.token_file) or os.path.exists(self.credentials_file)

    def authenticate(self) -> None:
        """Load, refresh or obtain OAuth2 credentials and build the API client."""
        if not self.has_credentials():
            raise PublishError(
                PLATFORM,
                f"YouTube credentials not found: neither {self.token_file} nor {self.credentials_file} exists. "
                "Download OAuth2 client credentials from Google Cloud Console.",
            )
        try:
            if os.path.exists(self.token_file):
                with open(self.token_file, "rb") as token:
                    self.credentials = pickle.load(token)

            if not self.credentials or not self.credentials.valid:
                if self.credentials and self.credentials.expired and self.credentials.refresh_token:
                    self.credentials.refresh(Request())
                else:
                    if not os.path.exists(self.credentials_file):
                        raise PublishError(
                            PLATFORM,
                            f"stored YouTube token is invalid and {self.credentials_file} is missing",
                        )
                    flow = InstalledAppFlow.from_client_secrets_file(self.credentials_file, SCOPES)
                    self.credentials = flow.run_local_server(port=0)

                # Save credentials for next time
                with open(self.token_file, "wb") as token:
                    pickle.dump(self.credentials, token)

            self.youtube = self._service_factory(self.credentials)
            self._logger.info("YouTube API authenticated successfully")
        except PublishError:
            raise
        except Exception as e:
            raise PublishError(PLATFORM, f"YouTube authentication failed: {e}") from e

    def upload(self, video_path: Path, title: str, description: str, tags: str) -> str:
        self._logger.info("Starting YouTube upload: %s", video_path)
        self._logger.info("Title: %s, Description: %s, Tags: %s", title, description, tags)

        if not self.has_credentials():
            raise PublishError(PLATFORM, "YouTube credentials are not configured")
        if not os.path.exists(video_path):
            raise PublishError(PLATFORM, f"video file not found: {video_path}")
        if not self.youtube:
            self.authenticate()

        body = {
            "snippet": {
                "title": title[:100],  # YouTube title limit
                "description": description,
                "tags": split_tags(tags),
                "categoryId": self.category_id,
            },
            "status": {
                "privacyStatus": self.privacy_status,
                "selfDeclaredMadeForKids": False,
            },
        }
        media = MediaFileUpload(str(video_path), chunksize=-1, resumable=True, mimetype="video/*")

        try:
            insert_request = self.youtube.videos().insert(
                part=",".join(body.keys()),
                body=body,
                media_body=media,
            )
            response = self._resumable_upload(insert_request)
        except HttpError as e:
            raise PublishError(PLATFORM, f"YouTube API error: {e}") from e

        video_id = response["id"]
        return f"https://www.youtube.com/watch?v={video_id}"

    def _resumable_upload(self, insert_request) -> Dict[str, Any]:
        """Drive the resumable upload to completion, logging progress."""
        response = None
        while response is None:
            status, response = insert_request.next_chunk()
            if response is None and status:
                self._logger.info("Upload progress: %d%%", int(status.progress() * 100))
        if "id" not in response:
            raise PublishError(PLATFORM, f"unexpected upload response: {response}")
        return response
