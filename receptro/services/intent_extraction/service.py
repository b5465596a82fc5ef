import json

from pydantic import ValidationError

from receptro.clients.llm import InferenceClient
from receptro.config import Config
from receptro.logging_utils import StructuredLogger
from receptro.metrics import intent_extraction_failures_total
from receptro.models.schemas import (
    IntentFailure,
    IntentFailureReason,
    IntentOutcome,
    IntentParsed,
)
from receptro.services.intent_extraction.prompts import (
    EMPTY_RESPONSE_MESSAGE,
    INTENT_SYSTEM_PROMPT,
    INVALID_JSON_MESSAGE,
    MISSING_RESPONSE_MESSAGE,
)

logger = StructuredLogger("intent_extraction")


class IntentExtractionError(RuntimeError):
    """Intent extraction finished but produced no usable parameters."""

    def __init__(self, failure: IntentFailure):
        super().__init__(failure.message)
        self.failure = failure


def _failure(
    reason: IntentFailureReason, message: str, raw: str | None, request_id: str
) -> IntentFailure:
    intent_extraction_failures_total.labels(reason=reason.value).inc()
    logger.warning(
        "Intent extraction failed",
        context={"reason": reason.value, "raw_length": len(raw or "")},
        request_id=request_id,
    )
    return IntentFailure(reason=reason, message=message, raw=raw)


def extract_intent(
    client: InferenceClient, transcription: str, request_id: str
) -> IntentOutcome:
    """
    Interpret a transcript as a command.

    Returns IntentParsed when the model produced a JSON object with a
    non-empty "response" string, otherwise an IntentFailure naming why.
    Upstream errors from the client are not caught.
    """
    logger.info(
        "Extracting intent",
        context={
            "model": Config.INTENT.MODEL_NAME,
            "transcript_length": len(transcription),
        },
        request_id=request_id,
    )

    content = client.chat_json(
        model=Config.INTENT.MODEL_NAME,
        system=INTENT_SYSTEM_PROMPT,
        user_text=transcription,
    )

    if not content:
        return _failure(
            IntentFailureReason.EMPTY_RESPONSE,
            EMPTY_RESPONSE_MESSAGE,
            content,
            request_id,
        )

    try:
        parameters = json.loads(content)
    except json.JSONDecodeError:
        return _failure(
            IntentFailureReason.INVALID_JSON,
            INVALID_JSON_MESSAGE,
            content,
            request_id,
        )

    if not isinstance(parameters, dict):
        return _failure(
            IntentFailureReason.MISSING_RESPONSE_FIELD,
            MISSING_RESPONSE_MESSAGE,
            content,
            request_id,
        )

    try:
        parsed = IntentParsed(parameters=parameters)
    except ValidationError:
        return _failure(
            IntentFailureReason.MISSING_RESPONSE_FIELD,
            MISSING_RESPONSE_MESSAGE,
            content,
            request_id,
        )

    logger.info(
        "Intent extracted",
        context={"keys": ",".join(sorted(parameters))},
        request_id=request_id,
    )
    return parsed
