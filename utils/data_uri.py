"""
Helpers for base64 image payloads in data-URI form (data:image/png;base64,....).
"""
import base64
import binascii

from utils.exceptions import MalformedAttachmentError

DEFAULT_MEDIA_TYPE = "image/jpeg"


def split_data_uri(payload: str) -> tuple[str, str]:
    """Split a data URI into (header, base64 body).

    A bare base64 string (no comma) is returned with an empty header.
    """
    if not isinstance(payload, str) or not payload.strip():
        raise MalformedAttachmentError(
            "Image attachment is empty", status_code=422, error_code="malformed_attachment"
        )

    header, sep, body = payload.partition(",")
    if not sep:
        return "", payload.strip()

    if not header.startswith("data:") or not header.endswith(";base64"):
        raise MalformedAttachmentError(
            f"Image attachment is not a base64 data URI (header: '{header[:40]}')",
            status_code=422,
            error_code="malformed_attachment",
        )
    if not body:
        raise MalformedAttachmentError(
            "Image attachment has no data", status_code=422, error_code="malformed_attachment"
        )
    return header, body


def strip_data_uri_header(payload: str) -> str:
    """Return only the base64 body of a data URI."""
    return split_data_uri(payload)[1]


def media_type_of(payload: str) -> str:
    header, _ = split_data_uri(payload)
    if not header:
        return DEFAULT_MEDIA_TYPE
    return header[len("data:"):-len(";base64")] or DEFAULT_MEDIA_TYPE


def to_data_uri(body: str, media_type: str = DEFAULT_MEDIA_TYPE) -> str:
    """Re-prefix a base64 body with a data-URI header."""
    return f"data:{media_type};base64,{body}"


def encode_image(data: bytes, media_type: str = DEFAULT_MEDIA_TYPE) -> str:
    """Encode raw image bytes the way the browser's FileReader.readAsDataURL does."""
    return to_data_uri(base64.b64encode(data).decode("ascii"), media_type)


def decode_image(payload: str) -> bytes:
    """Decode a data URI (or bare base64 string) back to bytes."""
    try:
        return base64.b64decode(strip_data_uri_header(payload), validate=True)
    except binascii.Error as e:
        raise MalformedAttachmentError(
            f"Image attachment is not valid base64: {e}",
            status_code=422,
            error_code="malformed_attachment",
        ) from e
