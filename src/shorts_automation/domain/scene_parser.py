"""
Decomposes generated idea/scene text into a ScenePlan.

Grammar (one item per line, surrounding whitespace ignored):
  Idea: <text>
  Scene <digits>: <text>
Every other non-blank line is ignored.
"""

import logging
import re
from typing import List, Optional, Tuple

from shorts_automation.domain.models import Scene, ScenePlan
from shorts_automation.errors import ParseError

IDEA_LINE = re.compile(r"^Idea:(?: (.*))?$")
SCENE_LINE = re.compile(r"^Scene [0-9]+:(?: (.*))?$")

_logger = logging.getLogger(__name__)


def classify_line(line: str) -> Optional[Tuple[str, str]]:
    """Return ("idea", text), ("scene", text) or None for an already stripped line."""
    for kind, pattern in (("idea", IDEA_LINE), ("scene", SCENE_LINE)):
        match = pattern.match(line)
        if match:
            return kind, (match.group(1) or "").strip()
    return None


def parse_idea_and_scenes(content: str, logger: Optional[logging.Logger] = None) -> ScenePlan:
    """
    Extract the overall idea and the ordered scene descriptions.

    Scenes keep the order they appear in; the numeric label is ignored.
    A later idea line replaces an earlier one.

    Raises:
        ParseError: no idea line with text, or no scene line with text.
    """
    log = logger or _logger
    idea = ""
    scenes: List[Scene] = []

    for raw in content.splitlines():
        line = raw.strip()
        if not line:
            continue

        classified = classify_line(line)
        if classified is None:
            continue

        kind, text = classified
        if kind == "idea":
            if not text:
                log.warning("Empty idea in line: %s", line)
                continue
            idea = text
            log.info("Extracted idea: %s", idea)
        elif not text:
            log.warning("Empty description for scene in line: %s", line)
        else:
            scenes.append(Scene(index=len(scenes) + 1, description=text))
            log.info("Extracted scene: %s", text)

    if not idea:
        log.warning("Could not find 'Idea:' in the generated content.")
        raise ParseError(ParseError.MISSING_IDEA, "no 'Idea:' line found in generated content")
    if not scenes:
        log.warning("Could not find any 'Scene' lines in the generated content.")
        raise ParseError(ParseError.NO_SCENES, "no 'Scene N:' lines found in generated content")

    return ScenePlan(idea=idea, scenes=scenes)
