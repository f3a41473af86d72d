"""Domain models – one run's intermediate values and its final report."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class Scene:
    """A coarse scene description. index is its 1-based position in the generated text."""
    index: int
    description: str


@dataclass(frozen=True)
class ScenePlan:
    idea: str
    scenes: List[Scene]


@dataclass(frozen=True)
class DetailedPrompt:
    scene_index: int
    text: str


@dataclass(frozen=True)
class VideoSegment:
    """A rendered segment. position is its 1-based place among surviving prompts."""
    path: Path
    position: int
    scene_index: int


@dataclass(frozen=True)
class FinalVideo:
    path: Path


@dataclass(frozen=True)
class PublishTarget:
    """One destination plus the metadata templates rendered for it ({idea}, {topic})."""
    platform: str
    title: str = "AI Shorts: {idea}"
    description: str = "A YouTube Short generated entirely by AI on the theme: {idea}."
    tags: str = "AI,Shorts,YouTubeShorts,AIgenerated"


@dataclass
class PublishResult:
    platform: str
    url: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SkippedItem:
    stage: str
    scene_index: int
    reason: str


class RunStage(str, Enum):
    INIT = "init"
    IDEA_GENERATED = "idea_generated"
    PROMPTS_GENERATED = "prompts_generated"
    SEGMENTS_GENERATED = "segments_generated"
    CONCATENATED = "concatenated"
    PUBLISHED = "published"
    DONE = "done"
    FAILED = "failed"


class RunStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass
class RunReport:
    """Everything one run produced, plus where it stopped."""
    topic: str
    run_id: str
    stage: RunStage = RunStage.INIT
    idea: str = ""
    scenes: List[Scene] = field(default_factory=list)
    prompts: List[DetailedPrompt] = field(default_factory=list)
    segments: List[VideoSegment] = field(default_factory=list)
    final_video: Optional[FinalVideo] = None
    publish_results: List[PublishResult] = field(default_factory=list)
    skipped: List[SkippedItem] = field(default_factory=list)
    last_good_stage: Optional[RunStage] = None
    error: Optional[str] = None

    @property
    def status(self) -> RunStatus:
        if self.stage == RunStage.FAILED:
            return RunStatus.FAILED
        if self.skipped or any(not r.ok for r in self.publish_results):
            return RunStatus.PARTIAL
        return RunStatus.SUCCESS

    @property
    def exit_code(self) -> int:
        return 1 if self.status == RunStatus.FAILED else 0
