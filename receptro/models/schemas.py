from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Open map of JSON values; only "response" (a string) is guaranteed.
IntentParameters = dict[str, Any]


# === Request Boundary Schemas ===


class FileData(BaseModel):
    """A file as submitted by the browser, content base64-encoded"""

    name: str = Field(..., description="Original file name")
    type: str = Field(..., description="Declared MIME type, e.g. 'image/jpeg'")
    data: str = Field(..., description="File content as standard base64")


class ProcessRequest(BaseModel):
    """Request to process a single uploaded file"""

    file: FileData


class UploadedFile(BaseModel):
    """A decoded upload, consumed once by the orchestrator"""

    name: str
    mime_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


# === Processing Result Schemas ===


class ImageResultData(BaseModel):
    content: str = Field(
        ..., description="Extracted fields as returned by the vision model"
    )


class ImageResult(BaseModel):
    """Result of the image branch"""

    kind: Literal["image"] = "image"
    data: ImageResultData


class AudioResultData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transcription: str = Field(..., description="Transcript of the uploaded audio")
    audio_response: str = Field(
        ...,
        alias="audioResponse",
        description="Spoken reply as a data:audio/mpeg;base64 URL",
    )
    intent_parameters: IntentParameters = Field(
        ...,
        alias="intentParameters",
        description="Structured intent; always contains a 'response' string",
    )


class AudioResult(BaseModel):
    """Result of the audio branch"""

    kind: Literal["audio"] = "audio"
    data: AudioResultData


ProcessingResult = Annotated[
    Union[ImageResult, AudioResult], Field(discriminator="kind")
]


# === Intent Extraction Schemas ===


class IntentFailureReason(str, Enum):
    """Why intent extraction produced no usable parameters"""

    EMPTY_RESPONSE = "empty_response"
    INVALID_JSON = "invalid_json"
    MISSING_RESPONSE_FIELD = "missing_response_field"


class IntentParsed(BaseModel):
    status: Literal["parsed"] = "parsed"
    parameters: IntentParameters

    @model_validator(mode="after")
    def _require_response(self) -> "IntentParsed":
        response = self.parameters.get("response")
        if not isinstance(response, str) or not response.strip():
            raise ValueError("intent parameters need a non-empty 'response' string")
        return self

    @property
    def response(self) -> str:
        return self.parameters["response"]


class IntentFailure(BaseModel):
    status: Literal["failed"] = "failed"
    reason: IntentFailureReason
    message: str
    raw: Optional[str] = Field(None, description="Model output that failed to parse")


IntentOutcome = Annotated[
    Union[IntentParsed, IntentFailure], Field(discriminator="status")
]
