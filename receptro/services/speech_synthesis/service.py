from receptro.clients.llm import InferenceClient
from receptro.config import Config
from receptro.encoding import to_data_url
from receptro.logging_utils import StructuredLogger

logger = StructuredLogger("speech_synthesis")


class EmptySpeechError(RuntimeError):
    """The text-to-speech model returned no audio."""


def synthesize_reply(client: InferenceClient, text: str, request_id: str) -> str:
    """Speak `text` and return it as a data:audio/mpeg;base64 URL."""
    logger.info(
        "Synthesizing speech",
        context={
            "model": Config.SPEECH.MODEL_NAME,
            "voice": Config.SPEECH.VOICE,
            "text_length": len(text),
        },
        request_id=request_id,
    )

    audio = client.synthesize_speech(
        model=Config.SPEECH.MODEL_NAME,
        voice=Config.SPEECH.VOICE,
        text=text,
        instructions=Config.SPEECH.INSTRUCTIONS,
    )

    if not audio:
        raise EmptySpeechError("Speech synthesis returned no audio")

    logger.info(
        "Speech synthesized",
        context={"audio_bytes": len(audio)},
        request_id=request_id,
    )
    return to_data_url(audio, Config.SPEECH.OUTPUT_MIME_TYPE)
