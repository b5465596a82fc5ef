EXTRACTION_INSTRUCTION = (
    "Extract all clearly labeled fields from this image of a printed card or "
    "document and return them as a JSON object with key-value pairs. "
    "Respond in JSON"
)

NO_CONTENT_PLACEHOLDER = "No response generated"
