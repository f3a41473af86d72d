import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pytest

from shorts_automation.adapters.upload import MultiPlatformUploader
from shorts_automation.application.pipeline import ShortsPipeline
from shorts_automation.config import Settings
from shorts_automation.errors import PublishError, ServiceError, ToolError
from shorts_automation.ports.interfaces import (
    ITextGenerator,
    IVideoConcatenator,
    IVideoGenerator,
    IVideoUploader,
)

OUTLINE = "Idea: Y\nScene 1: A\nScene 2: B"


class FakeTextGenerator(ITextGenerator):
    def __init__(self, outline: str = OUTLINE, fail_scenes: Sequence[str] = (), fail_outline: bool = False):
        self.outline = outline
        self.fail_scenes = set(fail_scenes)
        self.fail_outline = fail_outline
        self.topics: List[str] = []
        self.prompt_calls: List[tuple] = []

    def generate_idea_and_scenes(self, topic: str) -> str:
        self.topics.append(topic)
        if self.fail_outline:
            raise ServiceError("text service down")
        return self.outline

    def generate_scene_prompt(self, overall_idea: str, scene_description: str) -> str:
        self.prompt_calls.append((overall_idea, scene_description))
        if scene_description in self.fail_scenes:
            raise ServiceError(f"cannot elaborate {scene_description}")
        return f"detailed {scene_description}"


class FakeVideoGenerator(IVideoGenerator):
    def __init__(self, fail_prompts: Sequence[str] = ()):
        self.fail_prompts = set(fail_prompts)
        self.calls: List[tuple] = []

    def generate_segment(self, prompt: str, position: int, work_dir: Path) -> Path:
        self.calls.append((prompt, position, Path(work_dir)))
        if prompt in self.fail_prompts:
            raise ServiceError(f"render failed for {prompt}")
        path = Path(work_dir) / f"segment_{position}.mp4"
        path.write_bytes(b"video")
        return path


class FakeConcatenator(IVideoConcatenator):
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls: List[tuple] = []

    def concatenate(self, segment_paths, output_path, fps, work_dir=None) -> Path:
        self.calls.append((list(segment_paths), Path(output_path), fps, work_dir))
        if self.error:
            raise self.error
        if not segment_paths:
            raise ToolError("no input segments to concatenate")
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        Path(output_path).write_bytes(b"final")
        return Path(output_path)


class FakeUploader(IVideoUploader):
    def __init__(self, platform: str, url: Optional[str] = None, fail: bool = False):
        self.platform = platform
        self.url = url or f"https://{platform}.example/video/1"
        self.fail = fail
        self.calls: List[tuple] = []

    def upload(self, video_path, title, description, tags) -> str:
        self.calls.append((Path(video_path), title, description, tags))
        if self.fail:
            raise PublishError(self.platform, f"{self.platform} rejected the upload")
        return self.url


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        video_ai_api_key="key",
        work_dir=str(tmp_path / "work"),
        output_dir=str(tmp_path / "out"),
        fps=30,
        publish_platforms=["youtube", "tiktok"],
    )


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("tests.shorts")


@pytest.fixture
def make_pipeline(settings, logger):
    def _make(
        text: Optional[FakeTextGenerator] = None,
        video: Optional[FakeVideoGenerator] = None,
        concat: Optional[FakeConcatenator] = None,
        uploaders: Optional[Dict[str, IVideoUploader]] = None,
        **kwargs,
    ):
        parts = {
            "text": text or FakeTextGenerator(),
            "video": video or FakeVideoGenerator(),
            "concat": concat or FakeConcatenator(),
            "uploaders": uploaders if uploaders is not None else {
                "youtube": FakeUploader("youtube"),
                "tiktok": FakeUploader("tiktok"),
            },
        }
        pipeline = ShortsPipeline(
            text_generator=parts["text"],
            video_generator=parts["video"],
            concatenator=parts["concat"],
            uploader=MultiPlatformUploader(parts["uploaders"], logger=logger),
            settings=settings,
            logger=logger,
            run_id_factory=kwargs.pop("run_id_factory", lambda: "run-1"),
            **kwargs,
        )
        return pipeline, parts

    return _make
