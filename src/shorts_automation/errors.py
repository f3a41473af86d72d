"""Exception taxonomy shared by the pipeline and its adapters."""

from typing import Optional


class ShortsAutomationError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(ShortsAutomationError):
    """Missing or malformed configuration; fatal before the pipeline starts."""


class ServiceError(ShortsAutomationError):
    """A text or video generation service call failed."""


class RequestEncodingError(ServiceError):
    """The request payload could not be serialized."""


class ServiceStatusError(ServiceError):
    """The service answered with a non-success HTTP status."""

    def __init__(self, service: str, status_code: int, body: str = ""):
        self.service = service
        self.status_code = status_code
        self.body = body
        super().__init__(f"{service} returned status {status_code}: {body[:500]}")


class ResponseDecodeError(ServiceError):
    """The response body was not the JSON we expected."""


class EmptyResponseError(ServiceError):
    """The response decoded fine but carried no usable completion."""


class EmptyLocatorError(ServiceError):
    """The video service response did not include a video URL."""


class DownloadError(ServiceError):
    """Fetching or writing a rendered segment failed."""


class ParseError(ShortsAutomationError):
    """Generated idea/scene text could not be decomposed."""

    MISSING_IDEA = "missing_idea"
    NO_SCENES = "no_scenes"

    def __init__(self, reason: str, message: str):
        self.reason = reason
        super().__init__(message)


class ToolError(ShortsAutomationError):
    """The external concatenation tool failed."""

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
    ):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(message)


class ResourceError(ShortsAutomationError):
    """A filesystem resource could not be created or removed."""


class PublishError(ShortsAutomationError):
    """Uploading the final video to one platform failed."""

    def __init__(self, platform: str, message: str):
        self.platform = platform
        super().__init__(message)


class UnknownPlatformError(PublishError):
    """No uploader is registered for the requested platform tag."""

    def __init__(self, platform: str):
        super().__init__(platform, f"no uploader registered for platform '{platform}'")
