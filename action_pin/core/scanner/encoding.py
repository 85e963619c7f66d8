"""
Encoding detection for workflow files.

Workflow files are almost always UTF-8. Files in other encodings are decoded
with the codec charset-normalizer detects, and the codec is remembered so a
rewrite can encode the file back without touching unrelated bytes.
"""

from __future__ import annotations

from charset_normalizer import from_bytes

# Size of data to use for encoding detection (8KB is usually sufficient)
DETECTION_SAMPLE_SIZE = 8192


class UndecodableError(ValueError):
    """Raised when no encoding can decode the file content."""


def detect_encoding(data: bytes) -> str:
    """
    Detect encoding of workflow file data.

    Detection priority:
    1. UTF-8 BOM (explicit marker)
    2. Strict UTF-8 decode
    3. charset-normalizer detection

    Args:
        data: Full file content

    Returns:
        Encoding name usable with ``bytes.decode``

    Raises:
        UndecodableError: If no encoding could be determined
    """
    if data.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"

    try:
        data.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        pass

    results = from_bytes(data[:DETECTION_SAMPLE_SIZE])
    best = results.best() if results else None
    if best is None:
        raise UndecodableError("Encoding unknown or unreadable")

    encoding = best.encoding.lower()
    if encoding in ("cp1252", "windows-1252", "latin-1", "iso-8859-1", "latin_1"):
        return "windows-1252"
    return encoding


def decode(data: bytes) -> tuple[str, str]:
    """
    Decode workflow bytes strictly.

    Returns:
        Tuple of (text, encoding)

    Raises:
        UndecodableError: If the detected encoding cannot decode the content
    """
    encoding = detect_encoding(data)
    try:
        return data.decode(encoding), encoding
    except (UnicodeDecodeError, LookupError) as e:
        raise UndecodableError(str(e)) from e
