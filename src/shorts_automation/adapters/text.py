"""ITextGenerator adapters: OpenAI-compatible chat completions, or a local Ollama server."""

import json
import logging
from typing import Any, Dict, Optional

import httpx
import ollama
import requests

from shorts_automation.errors import (
    EmptyResponseError,
    RequestEncodingError,
    ResponseDecodeError,
    ServiceError,
    ServiceStatusError,
)
from shorts_automation.ports.interfaces import ITextGenerator

IDEA_AND_SCENES_PROMPT = """Come up with an idea for a YouTube Short about "{topic}".
The answer format is strictly the following:
Idea: [short description of the idea]

Scene 1: [short description]
Scene 2: [short description]
Scene 3: [short description]
... (up to 5-7 scenes if appropriate)
"""

SCENE_PROMPT = """Based on the overall idea "{idea}" and the scene description "{scene}",
create a very detailed prompt suitable for direct video generation.
Describe: what happens in the frame, which objects are present, their actions, background, lighting, mood, style.
Focus on visual details.
"""


class ChatCompletionTextGenerator(ITextGenerator):
    """Talks to an OpenAI-compatible /chat/completions endpoint."""

    service_name = "text generation service"

    def __init__(
        self,
        endpoint: str,
        model: str,
        max_tokens_general: int,
        max_tokens_detailed: int,
        temperature: float,
        api_key: str = "",
        timeout: float = 300.0,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.endpoint = endpoint
        self.model = model
        self.max_tokens_general = max_tokens_general
        self.max_tokens_detailed = max_tokens_detailed
        self.temperature = temperature
        self.api_key = api_key
        self.timeout = timeout
        self._session = session or requests.Session()
        self._logger = logger or logging.getLogger(__name__)

    def generate_idea_and_scenes(self, topic: str) -> str:
        self._logger.info("Requesting idea and scenes for topic: %s", topic)
        return self._call(IDEA_AND_SCENES_PROMPT.format(topic=topic), self.max_tokens_general)

    def generate_scene_prompt(self, overall_idea: str, scene_description: str) -> str:
        self._logger.info("Requesting detailed video prompt for scene: %s", scene_description)
        content = SCENE_PROMPT.format(idea=overall_idea, scene=scene_description)
        return self._call(content, self.max_tokens_detailed)

    def _call(self, content: str, max_tokens: int) -> str:
        payload = {
            "model": self.model,
            "chat_template_kwargs": {"enable_thinking": False},
            "messages": [{"role": "user", "content": content}],
            "max_tokens": max_tokens,
            "temperature": self.temperature,
        }
        try:
            body = json.dumps(payload)
        except (TypeError, ValueError) as e:
            raise RequestEncodingError(f"could not encode chat request: {e}") from e

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = self._session.post(self.endpoint, data=body, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise ServiceError(f"request to {self.service_name} failed: {e}") from e

        if response.status_code != 200:
            raise ServiceStatusError(self.service_name, response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise ResponseDecodeError(
                f"could not decode {self.service_name} response: {e}\nResponse: {response.text[:500]}"
            ) from e

        return self._first_choice(data)

    def _first_choice(self, data: Any) -> str:
        choices = data.get("choices") if isinstance(data, dict) else None
        if choices is not None and not isinstance(choices, list):
            raise ResponseDecodeError(f"'choices' in {self.service_name} response is not a list")
        if not choices:
            raise EmptyResponseError(f"no 'choices' in {self.service_name} response")
        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        if not isinstance(message, dict) or not isinstance(message.get("content"), str):
            raise ResponseDecodeError(f"first choice from {self.service_name} has no message content")
        return message["content"]


class OllamaTextGenerator(ITextGenerator):
    """Local fallback using the Ollama chat API."""

    def __init__(
        self,
        host: str,
        model: str,
        max_tokens_general: int,
        max_tokens_detailed: int,
        temperature: float,
        timeout: Optional[float] = None,
        client: Optional[Any] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.model = model
        self.max_tokens_general = max_tokens_general
        self.max_tokens_detailed = max_tokens_detailed
        self.temperature = temperature
        self._client = client or ollama.Client(host=host, timeout=timeout)
        self._logger = logger or logging.getLogger(__name__)

    def generate_idea_and_scenes(self, topic: str) -> str:
        self._logger.info("Requesting idea and scenes from Ollama (%s) for topic: %s", self.model, topic)
        return self._chat(IDEA_AND_SCENES_PROMPT.format(topic=topic), self.max_tokens_general)

    def generate_scene_prompt(self, overall_idea: str, scene_description: str) -> str:
        self._logger.info("Requesting detailed video prompt from Ollama for scene: %s", scene_description)
        content = SCENE_PROMPT.format(idea=overall_idea, scene=scene_description)
        return self._chat(content, self.max_tokens_detailed)

    def _chat(self, content: str, num_predict: int) -> str:
        options: Dict[str, Any] = {"temperature": self.temperature, "num_predict": num_predict}
        try:
            response = self._client.chat(
                model=self.model,
                messages=[{"role": "user", "content": content}],
                options=options,
            )
        except ollama.ResponseError as e:
            raise ServiceStatusError("ollama", e.status_code, e.error) from e
        except (ollama.RequestError, httpx.HTTPError, ConnectionError, OSError) as e:
            raise ServiceError(f"request to ollama failed: {e}") from e

        try:
            text = response["message"]["content"]
        except (KeyError, TypeError) as e:
            raise ResponseDecodeError(f"unexpected ollama response: {response!r}") from e
        if not text:
            raise EmptyResponseError("ollama returned an empty message")
        return text
