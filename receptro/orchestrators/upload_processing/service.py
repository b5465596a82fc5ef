import asyncio
import time
from typing import Any, Callable, TypeVar

from fastapi import HTTPException

from receptro.clients.llm import InferenceClient
from receptro.logging_utils import StructuredLogger
from receptro.metrics import (
    pipeline_step_duration_seconds,
    processing_errors_total,
    unsupported_uploads_total,
    uploads_total,
)
from receptro.models.schemas import (
    AudioResult,
    AudioResultData,
    ImageResult,
    ImageResultData,
    IntentFailure,
    ProcessingResult,
    UploadedFile,
)
from receptro.services.image_extraction.service import extract_fields
from receptro.services.intent_extraction.service import (
    IntentExtractionError,
    extract_intent,
)
from receptro.services.speech_synthesis.service import synthesize_reply
from receptro.services.transcription.service import transcribe_audio

logger = StructuredLogger("orchestrator")

T = TypeVar("T")

IMAGE_PREFIX = "image/"
AUDIO_PREFIX = "audio/"


async def _run_step(
    step: str, request_id: str, fn: Callable[..., T], *args: Any
) -> T:
    """Run one blocking pipeline step off the event loop, timing it."""
    start_time = time.time()
    logger.info(f"  → {step}", request_id=request_id)
    try:
        # Pipeline functions use the sync OpenAI SDK
        result = await asyncio.to_thread(fn, *args)
    except Exception as e:
        duration = time.time() - start_time
        pipeline_step_duration_seconds.labels(step=step).observe(duration)
        processing_errors_total.labels(error_type=f"{step}_error").inc()
        logger.error(
            f"{step} error ({duration:.1f}s): {str(e)}",
            context={"error_type": type(e).__name__},
            request_id=request_id,
        )
        raise

    duration = time.time() - start_time
    pipeline_step_duration_seconds.labels(step=step).observe(duration)
    logger.info(f"  ✓ {step} ({duration:.1f}s)", request_id=request_id)
    return result


async def _process_image(
    upload: UploadedFile, client: InferenceClient, request_id: str
) -> ImageResult:
    content = await _run_step(
        "image_extraction",
        request_id,
        extract_fields,
        client,
        upload.content,
        upload.mime_type,
        request_id,
    )
    return ImageResult(data=ImageResultData(content=content))


async def _process_audio(
    upload: UploadedFile, client: InferenceClient, request_id: str
) -> AudioResult:
    # Each step consumes the previous one's output, so they run in sequence
    transcription = await _run_step(
        "transcription",
        request_id,
        transcribe_audio,
        client,
        upload.content,
        upload.name,
        upload.mime_type,
        request_id,
    )

    outcome = await _run_step(
        "intent_extraction", request_id, extract_intent, client, transcription, request_id
    )
    if isinstance(outcome, IntentFailure):
        processing_errors_total.labels(error_type="intent_extraction_failed").inc()
        raise IntentExtractionError(outcome)

    audio_response = await _run_step(
        "speech_synthesis",
        request_id,
        synthesize_reply,
        client,
        outcome.response,
        request_id,
    )

    return AudioResult(
        data=AudioResultData(
            transcription=transcription,
            audio_response=audio_response,
            intent_parameters=outcome.parameters,
        )
    )


def classify_upload(name: str, mime_type: str, request_id: str) -> str:
    """
    Return the pipeline branch ("image" or "audio") for a MIME type.

    Raises a 400 for anything else. Callers run this before touching the
    file content so unsupported types never reach decoding or inference.
    """
    normalized = mime_type.strip().lower()

    if normalized.startswith(IMAGE_PREFIX):
        return "image"
    if normalized.startswith(AUDIO_PREFIX):
        return "audio"

    unsupported_uploads_total.inc()
    logger.warning(
        "Unsupported file type",
        context={"file_name": name, "mime_type": mime_type},
        request_id=request_id,
    )
    raise HTTPException(status_code=400, detail=f"Unsupported file type: {mime_type}")


async def process_upload(
    upload: UploadedFile, client: InferenceClient, request_id: str
) -> ProcessingResult:
    """
    Route an upload by MIME-type prefix and run its pipeline.

    image/* -> field extraction.
    audio/* -> transcription -> intent extraction -> speech synthesis.
    Anything else is rejected with a 400 before any inference call. The first
    failing step aborts the request; no partial result is returned.
    """
    kind = classify_upload(upload.name, upload.mime_type, request_id)
    pipeline_start = time.time()

    logger.info(
        f"Upload Pipeline ({kind}): Started",
        context={"file_name": upload.name, "size": upload.size},
        request_id=request_id,
    )

    result: ProcessingResult
    if kind == "image":
        result = await _process_image(upload, client, request_id)
    else:
        result = await _process_audio(upload, client, request_id)

    uploads_total.labels(kind=kind).inc()
    logger.info(
        f"Upload Pipeline ({kind}): Completed",
        context={"total_latency_s": round(time.time() - pipeline_start, 3)},
        request_id=request_id,
    )
    return result
