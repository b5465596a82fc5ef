from receptro.orchestrators.upload_processing.service import (
    classify_upload,
    process_upload,
)

__all__ = ["classify_upload", "process_upload"]
