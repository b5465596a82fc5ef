from receptro.clients.llm import InferenceClient
from receptro.config import Config
from receptro.encoding import to_data_url
from receptro.logging_utils import StructuredLogger
from receptro.services.image_extraction.prompts import (
    EXTRACTION_INSTRUCTION,
    NO_CONTENT_PLACEHOLDER,
)

logger = StructuredLogger("image_extraction")


def extract_fields(
    client: InferenceClient, content: bytes, mime_type: str, request_id: str
) -> str:
    """
    Ask the vision model for the labeled fields in an image.

    Returns the model's text verbatim. The text is requested as JSON but is
    not parsed or validated here; callers that need a dict must parse it.
    """
    image_url = to_data_url(content, mime_type)

    logger.info(
        "Extracting fields from image",
        context={
            "model": Config.IMAGE_EXTRACTION.MODEL_NAME,
            "mime_type": mime_type,
            "size": len(content),
        },
        request_id=request_id,
    )

    text = client.vision_extract(
        model=Config.IMAGE_EXTRACTION.MODEL_NAME,
        instruction=EXTRACTION_INSTRUCTION,
        image_url=image_url,
        detail=Config.IMAGE_EXTRACTION.DETAIL,
    )

    if not text:
        logger.warning(
            "Vision model returned no content, using placeholder",
            request_id=request_id,
        )
        return NO_CONTENT_PLACEHOLDER

    return text
