import logging

import pytest

from shorts_automation.domain.scene_parser import classify_line, parse_idea_and_scenes
from shorts_automation.errors import ParseError


def test_parses_idea_and_scenes_in_file_order():
    content = """
    Idea: A lone pilot holds the line

    Scene 3: Fleet appears over the moon
    Scene 1: Pilot scrambles to the hangar
    Some commentary the model added
    Scene 7: Final explosion
    """
    plan = parse_idea_and_scenes(content)

    assert plan.idea == "A lone pilot holds the line"
    assert [s.description for s in plan.scenes] == [
        "Fleet appears over the moon",
        "Pilot scrambles to the hangar",
        "Final explosion",
    ]
    assert [s.index for s in plan.scenes] == [1, 2, 3]


def test_duplicate_scene_labels_are_kept():
    plan = parse_idea_and_scenes("Idea: X\nScene 1: first\nScene 1: second")
    assert [s.description for s in plan.scenes] == ["first", "second"]


def test_last_idea_line_wins():
    plan = parse_idea_and_scenes("Idea: first\nScene 1: A\nIdea: second")
    assert plan.idea == "second"


def test_empty_scene_text_is_dropped_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        plan = parse_idea_and_scenes("Idea: X\nScene 1:   \nScene 2: kept")

    assert [s.description for s in plan.scenes] == ["kept"]
    assert "Empty description for scene" in caplog.text


def test_missing_idea_fails():
    with pytest.raises(ParseError) as exc:
        parse_idea_and_scenes("Scene 1: A\nScene 2: B")
    assert exc.value.reason == ParseError.MISSING_IDEA


def test_no_scenes_fails():
    with pytest.raises(ParseError) as exc:
        parse_idea_and_scenes("Idea: only an idea\nScene one: not numbered")
    assert exc.value.reason == ParseError.NO_SCENES


def test_empty_idea_does_not_count():
    with pytest.raises(ParseError) as exc:
        parse_idea_and_scenes("Idea:\nScene 1: A")
    assert exc.value.reason == ParseError.MISSING_IDEA


def test_empty_idea_after_valid_one_keeps_earlier_idea(caplog):
    with caplog.at_level(logging.WARNING):
        plan = parse_idea_and_scenes("Idea: first\nScene 1: A\nIdea:")

    assert plan.idea == "first"
    assert "Empty idea" in caplog.text


def test_empty_input_reports_missing_idea_first():
    with pytest.raises(ParseError) as exc:
        parse_idea_and_scenes("")
    assert exc.value.reason == ParseError.MISSING_IDEA


def test_parser_is_deterministic():
    content = "Idea: Y\nScene 2: B\nScene 1: A"
    assert parse_idea_and_scenes(content) == parse_idea_and_scenes(content)


@pytest.mark.parametrize(
    "line, expected",
    [
        ("Idea: Y", ("idea", "Y")),
        ("Scene 12: text here", ("scene", "text here")),
        ("Scene 4:", ("scene", "")),
        ("Scene: missing digits", None),
        ("scene 1: lowercase label", None),
        ("The Idea: is not at the start", None),
        ("Narrator: hello", None),
        ("Scene 1:no space", None),
        ("Idea:no space", None),
        ("Scene \u0661: arabic-indic digit", None),
        ("Idea:", ("idea", "")),
    ],
)
def test_classify_line(line, expected):
    assert classify_line(line) == expected
