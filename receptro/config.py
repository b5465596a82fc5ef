import os

from dotenv import load_dotenv

load_dotenv()


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    class API_KEYS:
        OPENAI = os.getenv("OPENAI_API_KEY")

    # === Inference Provider ===

    class OPENAI:
        BASE_URL = os.getenv("OPENAI_BASE_URL") or None
        TIMEOUT = float(os.getenv("OPENAI_TIMEOUT", "120"))

    # === Pipelines ===

    class IMAGE_EXTRACTION:
        MODEL_NAME = os.getenv("IMAGE_EXTRACTION_MODEL", "gpt-4.1")
        DETAIL = os.getenv("IMAGE_EXTRACTION_DETAIL", "high")

    class TRANSCRIPTION:
        MODEL_NAME = os.getenv("TRANSCRIPTION_MODEL", "gpt-4o-transcribe")

    class INTENT:
        MODEL_NAME = os.getenv("INTENT_MODEL", "gpt-4.1")

    class SPEECH:
        MODEL_NAME = os.getenv("SPEECH_MODEL", "gpt-4o-mini-tts")
        VOICE = os.getenv("SPEECH_VOICE", "coral")
        INSTRUCTIONS = os.getenv(
            "SPEECH_INSTRUCTIONS", "Speak in a cheerful and positive tone."
        )
        OUTPUT_MIME_TYPE = "audio/mpeg"

    # === Input Processing ===

    class UPLOAD:
        MAX_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(25 * 1024 * 1024)))

    # === Logging ===

    class LOGGING:
        LOG_DIR = os.getenv("LOG_DIR", "logs")
        TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() == "true"
        KEEP_DAYS = int(os.getenv("LOG_KEEP_DAYS", "7"))

    # === HTTP ===

    class HTTP:
        CORS_ALLOW_ORIGINS = _split_csv(os.getenv("CORS_ALLOW_ORIGINS", "*"))

    class UI:
        PORT = int(os.getenv("UI_PORT", "3000"))
        API_URL = os.getenv("API_URL", "http://localhost:8000")
