"""Image encoding for inline display."""

import base64


def to_data_url(image_bytes: bytes, content_type: str | None = None) -> str:
    """Convert image bytes to a base64 data URL."""
    mime_type = _resolve_mime_type(image_bytes, content_type)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _resolve_mime_type(image_bytes: bytes, content_type: str | None) -> str:
    media_type = (content_type or "").split(";", maxsplit=1)[0].strip().lower()
    if media_type.startswith("image/"):
        return media_type
    return _detect_mime_type(image_bytes)


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes.startswith((b"GIF87a", b"GIF89a")):
        return "image/gif"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
