INTENT_SYSTEM_PROMPT = (
    "Extract intent and parameters from the user's command. Respond in JSON as "
    "a single object. The object must always have a 'response' property whose "
    "value is a string that naturally responds to the transcription text. You "
    "may include other properties as needed."
)

EMPTY_RESPONSE_MESSAGE = "No response generated"
INVALID_JSON_MESSAGE = "Failed to parse response JSON"
MISSING_RESPONSE_MESSAGE = "Response JSON has no 'response' string"
