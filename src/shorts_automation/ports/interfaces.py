"""
Port interfaces (SOLID – Dependency Inversion).
Implement these in adapters; the application layer depends only on these abstractions.
Another text backend, video model or publish platform implements the matching port.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence


class ITextGenerator(ABC):
    """Text generation: the idea/scene outline and per-scene detailed prompts."""

    @abstractmethod
    def generate_idea_and_scenes(self, topic: str) -> str:
        """Return raw text in the 'Idea:' / 'Scene N:' format. Raises ServiceError."""
        pass

    @abstractmethod
    def generate_scene_prompt(self, overall_idea: str, scene_description: str) -> str:
        """Return a detailed video prompt for one scene. Raises ServiceError."""
        pass


class IVideoGenerator(ABC):
    """Video generation: render one prompt into a local segment file."""

    @abstractmethod
    def generate_segment(self, prompt: str, position: int, work_dir: Path) -> Path:
        """Render and persist a segment named by position. Raises ServiceError."""
        pass


class IVideoConcatenator(ABC):
    """Assembly of ordered segments into one output file."""

    @abstractmethod
    def concatenate(
        self,
        segment_paths: Sequence[Path],
        output_path: Path,
        fps: int,
        work_dir: Optional[Path] = None,
    ) -> Path:
        """Return output_path. Raises ToolError or ResourceError."""
        pass


class IVideoUploader(ABC):
    """Publish capability for one platform."""

    @abstractmethod
    def upload(self, video_path: Path, title: str, description: str, tags: str) -> str:
        """Upload the video; return its URL. Raises PublishError."""
        pass


class IPublisher(ABC):
    """Routes an upload to the capability registered for a platform tag."""

    @abstractmethod
    def upload(self, platform: str, video_path: Path, title: str, description: str, tags: str) -> str:
        """Return the URL; raises PublishError (UnknownPlatformError for unregistered tags)."""
        pass
