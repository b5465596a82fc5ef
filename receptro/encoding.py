"""Helpers for moving file content between bytes, base64 and data URLs."""

import base64
import binascii


class InvalidBase64Error(ValueError):
    """Raised when a payload is not valid standard base64."""


def encode_base64(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")


def decode_base64(data: str) -> bytes:
    """
    Decode standard base64, rejecting characters outside the alphabet.

    ASCII whitespace is dropped first so line-wrapped (MIME-style) payloads
    decode.
    """
    try:
        return base64.b64decode("".join(data.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidBase64Error(str(e)) from e


def to_data_url(content: bytes, mime_type: str) -> str:
    """Embed bytes as `data:<mime>;base64,<payload>`."""
    return f"data:{mime_type};base64,{encode_base64(content)}"


def parse_data_url(data_url: str) -> tuple[str, bytes]:
    """Split a base64 data URL back into its MIME type and bytes."""
    if not data_url.startswith("data:"):
        raise ValueError("Not a data URL")

    header, sep, payload = data_url[len("data:") :].partition(",")
    if not sep or not header.endswith(";base64"):
        raise ValueError("Data URL is not base64-encoded")

    mime_type = header[: -len(";base64")]
    return mime_type, decode_base64(payload)
