"""Domain models, value objects and the scene parser."""

from shorts_automation.domain.models import (
    DetailedPrompt,
    FinalVideo,
    PublishResult,
    PublishTarget,
    RunReport,
    RunStage,
    RunStatus,
    Scene,
    ScenePlan,
    SkippedItem,
    VideoSegment,
)
from shorts_automation.domain.scene_parser import classify_line, parse_idea_and_scenes

__all__ = [
    "DetailedPrompt",
    "FinalVideo",
    "PublishResult",
    "PublishTarget",
    "RunReport",
    "RunStage",
    "RunStatus",
    "Scene",
    "ScenePlan",
    "SkippedItem",
    "VideoSegment",
    "classify_line",
    "parse_idea_and_scenes",
]
