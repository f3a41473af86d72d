"""IVideoConcatenator adapter using the ffmpeg concat demuxer."""

import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from shorts_automation.errors import ResourceError, ToolError
from shorts_automation.ports.interfaces import IVideoConcatenator


def manifest_line(path: Path) -> str:
    """One concat-demuxer entry; ffmpeg wants forward slashes and escaped quotes."""
    escaped = Path(path).resolve().as_posix().replace("'", "'\\''")
    return f"file '{escaped}'\n"


class FFmpegConcatenator(IVideoConcatenator):
    """
    Joins same-codec segments with stream copy and forces the output frame rate.
    The runner is injectable so the command can be exercised without ffmpeg installed.
    """

    def __init__(
        self,
        ffmpeg_binary: str = "ffmpeg",
        runner: Optional[Callable[..., subprocess.CompletedProcess]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.ffmpeg_binary = ffmpeg_binary
        self._run = runner or subprocess.run
        self._logger = logger or logging.getLogger(__name__)

    def build_command(self, manifest_path: Path, output_path: Path, fps: int) -> List[str]:
        return [
            self.ffmpeg_binary,
            "-y",
            "-f", "concat",
            "-safe", "0",  # manifest holds absolute paths
            "-i", str(manifest_path),
            "-c", "copy",
            "-r", str(fps),
            str(output_path),
        ]

    def concatenate(
        self,
        segment_paths: Sequence[Path],
        output_path: Path,
        fps: int,
        work_dir: Optional[Path] = None,
    ) -> Path:
        self._logger.info("Concatenating %d segments with ffmpeg into %s", len(segment_paths), output_path)
        if not segment_paths:
            raise ToolError("no input segments to concatenate")

        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ResourceError(f"could not create output directory {output_path.parent}: {e}") from e

        manifest_dir = Path(work_dir) if work_dir else output_path.parent
        try:
            fd, manifest_name = tempfile.mkstemp(prefix="concat_list_", suffix=".txt", dir=manifest_dir)
        except OSError as e:
            raise ResourceError(f"could not create concat manifest in {manifest_dir}: {e}") from e

        manifest_path = Path(manifest_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as manifest:
                for path in segment_paths:
                    manifest.write(manifest_line(path))
            self._invoke(self.build_command(manifest_path, output_path, fps))
        finally:
            try:
                manifest_path.unlink(missing_ok=True)
            except OSError as e:
                self._logger.warning("Could not remove concat manifest %s: %s", manifest_path, e)

        self._logger.info("Video successfully concatenated into: %s", output_path)
        return output_path

    def _invoke(self, command: List[str]) -> None:
        self._logger.info("Running: %s", " ".join(command))
        try:
            result = self._run(command, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise ToolError(f"ffmpeg binary not found: {self.ffmpeg_binary}") from e
        except OSError as e:
            raise ToolError(f"could not start ffmpeg: {e}") from e

        if result.returncode != 0:
            self._logger.error("ffmpeg stdout: %s", result.stdout)
            self._logger.error("ffmpeg stderr: %s", result.stderr)
            raise ToolError(
                f"ffmpeg exited with code {result.returncode}",
                returncode=result.returncode,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
            )
        self._logger.debug("ffmpeg stdout: %s", result.stdout)
