import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from fastapi import Request as FastAPIRequest
from fastapi.middleware.cors import CORSMiddleware
from openai import APIError

from receptro.clients.llm import InferenceClient, create_inference_client
from receptro.config import Config
from receptro.logging_utils import StructuredLogger, generate_request_id
from receptro.metrics import (
    http_request_duration_seconds,
    http_requests_total,
    processing_errors_total,
    service_health_status,
)
from receptro.models.schemas import ProcessingResult, ProcessRequest, UploadedFile
from receptro.orchestrators import classify_upload, process_upload
from receptro.routes.admin import router as admin_router
from receptro.services.input_processor.service import build_upload, decode_upload
from receptro.services.intent_extraction.service import IntentExtractionError
from receptro.services.speech_synthesis.service import EmptySpeechError

logger = StructuredLogger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the inference client on startup, close it on shutdown."""
    logger.info("Starting app...")

    # Raises MissingCredentialsError without OPENAI_API_KEY, aborting startup
    app.state.inference_client = create_inference_client()

    service_health_status.labels(service="app").set(2)
    logger.info("App ready")

    yield

    logger.info("Shutting down...")
    app.state.inference_client.close()
    app.state.inference_client = None
    service_health_status.labels(service="app").set(0)
    logger.info("App stopped")


app = FastAPI(title="Receptro Upload API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.HTTP.CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

app.include_router(admin_router)


def get_inference_client(request: FastAPIRequest) -> InferenceClient:
    client = getattr(request.app.state, "inference_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Inference client not ready")
    return client


@app.middleware("http")
async def logging_and_metrics_middleware(request: FastAPIRequest, call_next):
    """Log requests and record HTTP metrics."""
    request_id = request.headers.get("X-Request-ID") or generate_request_id()
    start_time = time.time()

    is_metrics_endpoint = request.url.path == "/metrics"

    if not is_metrics_endpoint:
        logger.info(
            "Incoming request",
            context={
                "endpoint": request.url.path,
                "method": request.method,
                "client": request.client.host if request.client else "unknown",
            },
            request_id=request_id,
        )

    request.state.request_id = request_id

    try:
        response = await call_next(request)
    except Exception as e:
        duration = time.time() - start_time
        http_requests_total.labels(
            service="app",
            endpoint=request.url.path,
            method=request.method,
            status=500,
        ).inc()
        http_request_duration_seconds.labels(
            service="app",
            endpoint=request.url.path,
            method=request.method,
        ).observe(duration)
        logger.error(
            "Request failed",
            context={
                "endpoint": request.url.path,
                "method": request.method,
                "error": str(e),
                "duration_seconds": round(duration, 3),
            },
            request_id=request_id,
        )
        raise

    duration = time.time() - start_time

    if not is_metrics_endpoint:
        http_requests_total.labels(
            service="app",
            endpoint=request.url.path,
            method=request.method,
            status=response.status_code,
        ).inc()
        http_request_duration_seconds.labels(
            service="app",
            endpoint=request.url.path,
            method=request.method,
        ).observe(duration)
        logger.info(
            "Request completed",
            context={
                "endpoint": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "duration_seconds": round(duration, 3),
            },
            request_id=request_id,
        )

    response.headers["X-Request-ID"] = request_id
    return response


async def _run_pipeline(
    upload: UploadedFile, client: InferenceClient, request_id: str
) -> ProcessingResult:
    """Run the orchestrator, mapping failures onto HTTP errors."""
    try:
        return await process_upload(upload, client, request_id)

    except HTTPException:
        raise
    except IntentExtractionError as e:
        logger.error(
            "Intent extraction produced no usable parameters",
            context={"reason": e.failure.reason.value},
            request_id=request_id,
        )
        raise HTTPException(
            status_code=502, detail=f"Intent extraction failed: {e.failure.message}"
        )
    except (APIError, EmptySpeechError) as e:
        logger.error(
            "Upstream inference failed",
            context={"error": str(e), "error_type": type(e).__name__},
            request_id=request_id,
        )
        raise HTTPException(
            status_code=502, detail=f"Upstream inference failed: {str(e)}"
        )
    except Exception as e:
        processing_errors_total.labels(error_type=type(e).__name__).inc()
        logger.error(
            "Internal error in upload processing",
            context={"error": str(e), "error_type": type(e).__name__},
            request_id=request_id,
        )
        raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")


@app.post("/api/process", response_model=ProcessingResult)
async def process(
    body: ProcessRequest,
    fastapi_request: FastAPIRequest,
    client: InferenceClient = Depends(get_inference_client),
):
    """Process a base64-encoded upload from the browser."""
    request_id = getattr(fastapi_request.state, "request_id", generate_request_id())

    classify_upload(body.file.name, body.file.type, request_id)
    upload = decode_upload(body.file, request_id)
    return await _run_pipeline(upload, client, request_id)


@app.post("/api/upload", response_model=ProcessingResult)
async def upload_form(
    fastapi_request: FastAPIRequest,
    file: UploadFile = File(...),
    client: InferenceClient = Depends(get_inference_client),
):
    """Process a multipart/form-data upload."""
    request_id = getattr(fastapi_request.state, "request_id", generate_request_id())

    name = file.filename or "upload"
    mime_type = file.content_type or "application/octet-stream"
    classify_upload(name, mime_type, request_id)

    # One byte past the limit is enough for build_upload to reject it
    content = await file.read(Config.UPLOAD.MAX_BYTES + 1)
    upload = build_upload(name, mime_type, content, request_id)
    return await _run_pipeline(upload, client, request_id)
