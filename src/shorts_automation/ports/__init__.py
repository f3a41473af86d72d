"""Ports (interfaces) – depend on these, implement in adapters."""

from shorts_automation.ports.interfaces import (
    ITextGenerator,
    IVideoGenerator,
    IVideoConcatenator,
    IVideoUploader,
    IPublisher,
)

__all__ = [
    "ITextGenerator",
    "IVideoGenerator",
    "IVideoConcatenator",
    "IVideoUploader",
    "IPublisher",
]
