"""
Shorts pipeline – single responsibility: orchestrate
idea/scenes → detailed prompts → video segments → concatenation → publish.
Depends only on port interfaces (SOLID – Dependency Inversion).

Per-item stages (prompts, segments) skip failed items and continue with the
surviving sequence; publishing is best effort. Everything else is fatal.
"""

import logging
import shutil
import uuid
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

from shorts_automation.config import Settings
from shorts_automation.domain.models import (
    DetailedPrompt,
    FinalVideo,
    PublishResult,
    PublishTarget,
    RunReport,
    RunStage,
    SkippedItem,
    VideoSegment,
)
from shorts_automation.domain.scene_parser import parse_idea_and_scenes
from shorts_automation.errors import (
    ParseError,
    PublishError,
    ResourceError,
    ServiceError,
    ToolError,
)
from shorts_automation.ports.interfaces import (
    IPublisher,
    ITextGenerator,
    IVideoConcatenator,
    IVideoGenerator,
)

FINAL_SUFFIX = "_final_short"
MAX_SLUG_LENGTH = 80

DEFAULT_TARGETS: Dict[str, PublishTarget] = {
    "youtube": PublishTarget(
        platform="youtube",
        title="AI Shorts: {idea}",
        description="This YouTube Short was generated entirely by AI on the theme: {idea}.",
        tags="AI,Shorts,YouTubeShorts,AIgenerated",
    ),
    "tiktok": PublishTarget(
        platform="tiktok",
        title="AI Shorts: {idea}",
        description="AI generation for TikTok! #AI #Shorts",
        tags="AI,shorts",
    ),
}


def slugify(text: str) -> str:
    """Filesystem-safe name: whitespace to '_', keep alphanumerics, '-' and '_'."""
    safe = "".join(c for c in "_".join(text.split()) if c.isalnum() or c in ("-", "_"))
    safe = safe.strip("_-")[:MAX_SLUG_LENGTH].rstrip("_-")
    return safe or "short"


def default_run_id() -> str:
    return f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"


def targets_for(platforms: List[str]) -> List[PublishTarget]:
    return [DEFAULT_TARGETS.get(p, PublishTarget(platform=p)) for p in platforms]


class StageFailed(Exception):
    """Internal: a fatal condition ended the run at the given stage."""

    def __init__(self, stage: RunStage, message: str):
        self.stage = stage
        super().__init__(message)


class ShortsPipeline:
    """
    Orchestrates the full short-video generation pipeline.
    All dependencies are injected; no concrete service clients here.
    """

    def __init__(
        self,
        *,
        text_generator: ITextGenerator,
        video_generator: IVideoGenerator,
        concatenator: IVideoConcatenator,
        uploader: IPublisher,
        settings: Settings,
        publish_targets: Optional[List[PublishTarget]] = None,
        logger: Optional[logging.Logger] = None,
        run_id_factory: Callable[[], str] = default_run_id,
    ):
        self._text = text_generator
        self._video = video_generator
        self._concat = concatenator
        self._uploader = uploader
        self._settings = settings
        self._targets = (
            publish_targets if publish_targets is not None else targets_for(settings.publish_platforms)
        )
        self._logger = logger or logging.getLogger(__name__)
        self._new_run_id = run_id_factory

    def run(self, topic: str) -> RunReport:
        """Run every stage for one topic. Never raises for pipeline failures; see report.status."""
        report = RunReport(topic=topic, run_id=self._new_run_id())
        self._banner(f"Generating short for topic: {topic} (run {report.run_id})")

        try:
            with self._working_directory(report.run_id) as work_dir:
                self._generate_plan(report)
                self._generate_prompts(report)
                self._generate_segments(report, work_dir)
                self._concatenate(report, work_dir)
                self._publish(report)
                report.stage = RunStage.DONE
        except StageFailed as e:
            self._fail(report, e.stage, str(e))
        except ResourceError as e:
            self._fail(report, RunStage.INIT, str(e))

        self._log_summary(report)
        return report

    @contextmanager
    def _working_directory(self, run_id: str) -> Iterator[Path]:
        work_dir = Path(self._settings.work_dir) / run_id
        try:
            work_dir.mkdir(parents=True, exist_ok=False)
        except OSError as e:
            raise ResourceError(f"could not create working directory {work_dir}: {e}") from e
        try:
            yield work_dir
        finally:
            self._logger.info("Cleaning up temporary video files in %s...", work_dir)
            try:
                shutil.rmtree(work_dir)
                self._logger.info("Temporary video files removed.")
            except OSError as e:
                self._logger.warning("Could not remove working directory '%s': %s", work_dir, e)

    def _generate_plan(self, report: RunReport) -> None:
        self._banner("[1/5] Generating overall idea and scenes")
        try:
            content = self._text.generate_idea_and_scenes(report.topic)
        except ServiceError as e:
            raise StageFailed(RunStage.INIT, f"idea/scene generation failed: {e}") from e

        self._logger.info("Generated idea and scenes:\n%s", content)
        try:
            plan = parse_idea_and_scenes(content, logger=self._logger)
        except ParseError as e:
            raise StageFailed(RunStage.INIT, f"could not extract idea or scenes ({e.reason}): {e}") from e

        report.idea = plan.idea
        report.scenes = list(plan.scenes)
        report.stage = RunStage.IDEA_GENERATED
        self._logger.info("Overall idea: %s", plan.idea)
        for scene in plan.scenes:
            self._logger.info("Scene %d: %s", scene.index, scene.description)

    def _generate_prompts(self, report: RunReport) -> None:
        self._banner("[2/5] Generating detailed video prompts")
        prompts: List[DetailedPrompt] = []
        for scene in report.scenes:
            try:
                text = self._text.generate_scene_prompt(report.idea, scene.description)
            except ServiceError as e:
                self._skip(report, RunStage.PROMPTS_GENERATED, scene.index, f"prompt generation failed: {e}")
                continue
            prompts.append(DetailedPrompt(scene_index=scene.index, text=text))
            self._logger.info("Detailed prompt for scene %d:\n%s", scene.index, text)

        if not prompts:
            raise StageFailed(RunStage.IDEA_GENERATED, "no detailed prompt could be generated")
        report.prompts = prompts
        report.stage = RunStage.PROMPTS_GENERATED

    def _generate_segments(self, report: RunReport, work_dir: Path) -> None:
        self._banner("[3/5] Generating video segments")
        segments: List[VideoSegment] = []
        for position, prompt in enumerate(report.prompts, start=1):
            try:
                path = self._video.generate_segment(prompt.text, position, work_dir)
            except ServiceError as e:
                self._skip(report, RunStage.SEGMENTS_GENERATED, prompt.scene_index, f"video generation failed: {e}")
                continue
            segments.append(VideoSegment(path=Path(path), position=position, scene_index=prompt.scene_index))
            self._logger.info("Segment %d (scene %d) saved: %s", position, prompt.scene_index, path)

        if not segments:
            raise StageFailed(RunStage.PROMPTS_GENERATED, "no video segment could be generated")
        report.segments = segments
        report.stage = RunStage.SEGMENTS_GENERATED

    def _concatenate(self, report: RunReport, work_dir: Path) -> None:
        self._banner("[4/5] Concatenating segments")
        output_path = self.final_video_path(report.idea)
        try:
            compiled = self._concat.concatenate(
                [s.path for s in report.segments],
                output_path,
                self._settings.fps,
                work_dir=work_dir,
            )
        except (ToolError, ResourceError) as e:
            details = ""
            if isinstance(e, ToolError) and e.stderr:
                details = f"\nstderr: {e.stderr.strip()[-1000:]}"
            raise StageFailed(RunStage.SEGMENTS_GENERATED, f"concatenation failed: {e}{details}") from e

        report.final_video = FinalVideo(path=Path(compiled))
        report.stage = RunStage.CONCATENATED
        self._logger.info("Final video compiled: %s", compiled)

    def final_video_path(self, idea: str) -> Path:
        filename = f"{slugify(idea)}{FINAL_SUFFIX}.{self._settings.output_format}"
        return Path(self._settings.output_dir) / filename

    def _publish(self, report: RunReport) -> None:
        self._banner("[5/5] Uploading final video to platforms")
        for target in self._targets:
            values = {"idea": report.idea, "topic": report.topic}
            try:
                url = self._uploader.upload(
                    target.platform,
                    report.final_video.path,
                    target.title.format(**values),
                    target.description.format(**values),
                    target.tags.format(**values),
                )
            except PublishError as e:
                self._logger.error("Upload to %s failed: %s", target.platform, e)
                report.publish_results.append(PublishResult(platform=target.platform, error=str(e)))
                continue
            except Exception as e:
                self._logger.exception("Unexpected error uploading to %s", target.platform)
                report.publish_results.append(PublishResult(platform=target.platform, error=repr(e)))
                continue
            self._logger.info("Video uploaded to %s: %s", target.platform, url)
            report.publish_results.append(PublishResult(platform=target.platform, url=url))
        report.stage = RunStage.PUBLISHED

    def _skip(self, report: RunReport, stage: RunStage, scene_index: int, reason: str) -> None:
        self._logger.error("Skipping scene %d: %s", scene_index, reason)
        report.skipped.append(SkippedItem(stage=stage.value, scene_index=scene_index, reason=reason))

    def _fail(self, report: RunReport, reached: RunStage, message: str) -> None:
        self._logger.error("Run failed after stage '%s': %s", reached.value, message)
        report.last_good_stage = reached
        report.stage = RunStage.FAILED
        report.error = message

    def _banner(self, title: str) -> None:
        self._logger.info("=" * 60)
        self._logger.info(title)
        self._logger.info("=" * 60)

    def _log_summary(self, report: RunReport) -> None:
        self._banner(f"Run {report.run_id} finished: {report.status.value}")
        for item in report.skipped:
            self._logger.info("  skipped scene %d at %s: %s", item.scene_index, item.stage, item.reason)
        for result in report.publish_results:
            if result.ok:
                self._logger.info("  %s: %s", result.platform, result.url)
            else:
                self._logger.info("  %s: FAILED (%s)", result.platform, result.error)
        if report.final_video:
            self._logger.info("  final video: %s", report.final_video.path)
