from typing import Any, Callable, Optional, TypeVar

from openai import OpenAI

from receptro.config import Config
from receptro.metrics import inference_calls_total, inference_errors_total

T = TypeVar("T")


class MissingCredentialsError(RuntimeError):
    """Raised at startup when no provider API key is configured."""


class InferenceClient:
    """
    Thin wrapper over the OpenAI SDK exposing the four capabilities the
    pipelines need. Builds provider requests and unwraps responses; nothing
    else.
    """

    def __init__(self, openai_client: OpenAI):
        self._client = openai_client

    def _call(self, capability: str, fn: Callable[[], T]) -> T:
        inference_calls_total.labels(capability=capability).inc()
        try:
            return fn()
        except Exception:
            inference_errors_total.labels(capability=capability).inc()
            raise

    def vision_extract(
        self, model: str, instruction: str, image_url: str, detail: str = "auto"
    ) -> Optional[str]:
        """Send an image data URL plus an instruction, asking for a JSON object."""
        messages: list[Any] = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": instruction},
                    {
                        "type": "image_url",
                        "image_url": {"url": image_url, "detail": detail},
                    },
                ],
            }
        ]
        return self._call(
            "vision_extract", lambda: self._complete_json(model, messages)
        )

    def chat_json(self, model: str, system: str, user_text: str) -> Optional[str]:
        """Run a system + user chat completion constrained to a JSON object."""
        messages: list[Any] = [
            {"role": "system", "content": system},
            {"role": "user", "content": [{"type": "text", "text": user_text}]},
        ]
        return self._call("chat_json", lambda: self._complete_json(model, messages))

    def transcribe(
        self, model: str, filename: str, content: bytes, mime_type: str
    ) -> str:
        """Transcribe an audio file in a single request."""
        transcription = self._call(
            "transcribe",
            lambda: self._client.audio.transcriptions.create(
                model=model,
                file=(filename, content, mime_type),
            ),
        )
        return transcription.text

    def synthesize_speech(
        self, model: str, voice: str, text: str, instructions: str
    ) -> bytes:
        """Synthesize speech and return the raw MP3 bytes."""
        response = self._call(
            "synthesize_speech",
            lambda: self._client.audio.speech.create(
                model=model,
                voice=voice,
                input=text,
                instructions=instructions,
                response_format="mp3",
            ),
        )
        return response.content

    def _complete_json(self, model: str, messages: list[Any]) -> Optional[str]:
        response = self._client.chat.completions.create(
            model=model,
            messages=messages,
            response_format={"type": "json_object"},
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    def close(self) -> None:
        self._client.close()


def create_inference_client(api_key: Optional[str] = None) -> InferenceClient:
    """Build the provider client; a missing API key is a fatal configuration error."""
    api_key = api_key or Config.API_KEYS.OPENAI
    if not api_key:
        raise MissingCredentialsError(
            "OPENAI_API_KEY is not set (export it or add it to .env)"
        )

    return InferenceClient(
        OpenAI(
            api_key=api_key,
            base_url=Config.OPENAI.BASE_URL,
            timeout=Config.OPENAI.TIMEOUT,
        )
    )
