import logging
import os

import pytest

from shorts_automation.config import Settings, load_settings
from shorts_automation.errors import ConfigError

ENV_KEYS = [
    "TEXT_AI_PROVIDER", "TEXT_AI_ENDPOINT", "VIDEO_AI_ENDPOINT", "VIDEO_AI_API_KEY",
    "VIDEO_FPS", "PUBLISH_PLATFORMS", "TEXT_AI_MAX_TOKENS_GENERAL", "TEXT_AI_TEMPERATURE",
    "VIDEO_OUTPUT_FORMAT", "TIKTOK_ACCESS_TOKEN",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    # keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)


def test_loads_defaults_with_required_key(monkeypatch):
    monkeypatch.setenv("VIDEO_AI_API_KEY", "vk")

    settings = load_settings()

    assert settings.video_ai_api_key == "vk"
    assert settings.fps == 30
    assert settings.output_format == "mp4"
    assert settings.publish_platforms == ["youtube", "tiktok"]


def test_missing_video_key_is_config_error():
    with pytest.raises(ConfigError, match="VIDEO_AI_API_KEY"):
        load_settings()


def test_empty_endpoint_is_config_error(monkeypatch):
    monkeypatch.setenv("VIDEO_AI_API_KEY", "vk")
    monkeypatch.setenv("TEXT_AI_ENDPOINT", "")

    with pytest.raises(ConfigError, match="TEXT_AI_ENDPOINT"):
        load_settings()


def test_ollama_provider_does_not_need_text_endpoint(monkeypatch):
    monkeypatch.setenv("VIDEO_AI_API_KEY", "vk")
    monkeypatch.setenv("TEXT_AI_PROVIDER", "Ollama")
    monkeypatch.setenv("TEXT_AI_ENDPOINT", "")

    assert load_settings().text_ai_provider == "ollama"


def test_unknown_provider(monkeypatch):
    monkeypatch.setenv("VIDEO_AI_API_KEY", "vk")
    monkeypatch.setenv("TEXT_AI_PROVIDER", "magic")

    with pytest.raises(ConfigError):
        load_settings()


@pytest.mark.parametrize("key, value", [("VIDEO_FPS", "fast"), ("VIDEO_FPS", "0"),
                                        ("TEXT_AI_TEMPERATURE", "warm"),
                                        ("TEXT_AI_MAX_TOKENS_GENERAL", "-1")])
def test_bad_numbers(monkeypatch, key, value):
    monkeypatch.setenv("VIDEO_AI_API_KEY", "vk")
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigError):
        load_settings()


def test_platform_list_and_format(monkeypatch):
    monkeypatch.setenv("VIDEO_AI_API_KEY", "vk")
    monkeypatch.setenv("PUBLISH_PLATFORMS", " YouTube , ,tiktok")
    monkeypatch.setenv("VIDEO_OUTPUT_FORMAT", ".webm")

    settings = load_settings()

    assert settings.publish_platforms == ["youtube", "tiktok"]
    assert settings.output_format == "webm"


def test_env_file_is_read(tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text("VIDEO_AI_API_KEY=from-file\nVIDEO_FPS=25\n")

    settings = load_settings(str(env_file))

    assert settings.video_ai_api_key == "from-file"
    assert settings.fps == 25


def test_missing_credentials_only_warn(tmp_path, caplog):
    settings = Settings(
        video_ai_api_key="vk",
        youtube_credentials_file=str(tmp_path / "none.json"),
        youtube_token_file=str(tmp_path / "none.pickle"),
    )
    with caplog.at_level(logging.WARNING):
        settings.warn_missing_credentials(logging.getLogger("tests.config"))

    assert "YouTube credentials not found" in caplog.text
    assert "TIKTOK_ACCESS_TOKEN" in caplog.text


def test_env_file_does_not_leak_into_environment(tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text("VIDEO_AI_API_KEY=from-file\nUNRELATED_SETTING=1\n")

    load_settings(str(env_file))

    assert "VIDEO_AI_API_KEY" not in os.environ


def test_dotenv_in_working_directory_is_found(tmp_path):
    (tmp_path / ".env").write_text("VIDEO_AI_API_KEY=cwd-key\nPUBLISH_PLATFORMS=TikTok\n")

    settings = load_settings()

    assert settings.video_ai_api_key == "cwd-key"
    assert settings.publish_platforms == ["tiktok"]


def test_errors_name_the_variable(monkeypatch):
    monkeypatch.setenv("VIDEO_AI_API_KEY", "vk")
    monkeypatch.setenv("VIDEO_FPS", "-5")

    with pytest.raises(ConfigError, match="VIDEO_FPS"):
        load_settings()


def test_platform_override_is_normalised():
    settings = Settings(video_ai_api_key="vk")

    settings.publish_platforms = ["YouTube "]

    assert settings.publish_platforms == ["youtube"]
