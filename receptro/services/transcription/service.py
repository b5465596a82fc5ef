from receptro.clients.llm import InferenceClient
from receptro.config import Config
from receptro.logging_utils import StructuredLogger

logger = StructuredLogger("transcription")


def transcribe_audio(
    client: InferenceClient,
    content: bytes,
    filename: str,
    mime_type: str,
    request_id: str,
) -> str:
    """Transcribe an audio file with one speech-to-text call, whatever its length."""
    logger.info(
        "Transcribing audio",
        context={
            "model": Config.TRANSCRIPTION.MODEL_NAME,
            "file_name": filename,
            "size": len(content),
        },
        request_id=request_id,
    )

    text = client.transcribe(
        model=Config.TRANSCRIPTION.MODEL_NAME,
        filename=filename,
        content=content,
        mime_type=mime_type,
    )

    logger.info(
        "Transcription complete",
        context={"transcript_length": len(text)},
        request_id=request_id,
    )
    return text
