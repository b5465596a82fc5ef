from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from receptro.config import Config
from receptro.logging_utils import get_logs_by_request_id

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Health check. Degraded until the inference client has been created."""
    client_ready = getattr(request.app.state, "inference_client", None) is not None

    return {
        "status": "healthy" if client_ready else "degraded",
        "service": "receptro",
        "components": {
            "inference_client": {
                "ready": client_ready,
                "models": {
                    "image_extraction": Config.IMAGE_EXTRACTION.MODEL_NAME,
                    "transcription": Config.TRANSCRIPTION.MODEL_NAME,
                    "intent": Config.INTENT.MODEL_NAME,
                    "speech": Config.SPEECH.MODEL_NAME,
                },
            },
        },
    }


@router.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.get("/logs/{request_id}")
async def get_logs(request_id: str):
    """Get logs filtered by request ID"""
    logs = get_logs_by_request_id(request_id)
    return {"request_id": request_id, "logs": logs, "log_count": len(logs)}
