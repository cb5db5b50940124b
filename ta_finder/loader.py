"""
loader.py — Raw input handling for ta-finder

Public API:
    raw  = read_source(uploaded_file)   # bytes, file-like, or path
    text = decode_text(raw)

The survey export is always UTF-8. Anything else is rejected outright rather
than decoded lossily, so a bad upload never turns into half-garbled cards.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import chardet

from ta_finder.errors import EncodingError, FileAccessError

UTF8_BOM = b"\xef\xbb\xbf"
MAX_SUSPICIOUS_CHARS = 10


# ══════════════════════════════════════════════════════════════════════════════
# SOURCE READING
# ══════════════════════════════════════════════════════════════════════════════

def read_source(source: Any) -> bytes:
    """
    Return the raw bytes behind whatever the file picker handed over.

    Accepts bytes/bytearray, anything with a ``read()`` method (Streamlit's
    UploadedFile, an open binary file), or a str/Path to a local file.

    Raises:
        FileAccessError  when no file was chosen or it cannot be read.
    """
    if source is None:
        raise FileAccessError("No file selected.")

    if isinstance(source, (bytes, bytearray)):
        return bytes(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            if not path.is_file():
                raise FileAccessError(f"File not found: {path}")
            return path.read_bytes()
        except OSError as exc:
            raise FileAccessError(f"Could not read {path}: {exc}") from exc

    if hasattr(source, "read"):
        # a closed handle raises ValueError rather than OSError
        try:
            payload = source.read()
        except (OSError, ValueError) as exc:
            raise FileAccessError(f"Could not read uploaded file: {exc}") from exc
        if not isinstance(payload, (bytes, bytearray)):
            raise FileAccessError(
                f"Uploaded file yielded {type(payload).__name__}, expected bytes"
            )
        return bytes(payload)

    raise FileAccessError(f"Unsupported file source: {type(source).__name__}")


# ══════════════════════════════════════════════════════════════════════════════
# ENCODING
# ══════════════════════════════════════════════════════════════════════════════

def detect_encoding_info(raw: bytes) -> dict:
    """
    Describe the encoding of raw bytes.

    Returns dict with: detected, confidence, is_utf8, suspicious_chars.
    ``suspicious_chars`` lists the first few lines whose bytes are not UTF-8.
    """
    result     = chardet.detect(raw)
    detected   = result.get("encoding") or "unknown"
    confidence = round(result.get("confidence") or 0.0, 2)
    is_utf8    = detected.upper().replace("-", "").replace("SIG", "") in ("UTF8", "ASCII")

    suspicious: list[str] = []
    for row_idx, line in enumerate(raw.split(b"\n"), start=1):
        try:
            line.decode("utf-8")
        except UnicodeDecodeError as e:
            bad_byte = line[e.start : e.end]
            suspicious.append(f"line {row_idx}: byte {bad_byte!r} at position {e.start}")
            if len(suspicious) >= MAX_SUSPICIOUS_CHARS:
                break

    return {
        "detected":         detected,
        "confidence":       confidence,
        "is_utf8":          is_utf8 and not suspicious,
        "suspicious_chars": suspicious,
    }


def decode_text(raw: bytes) -> str:
    """
    Decode raw bytes as UTF-8, dropping a leading byte-order mark.

    Raises:
        EncodingError  when the bytes are not valid UTF-8. The error carries
                       the chardet guess so the host can tell the user which
                       encoding the export was probably saved in.
    """
    if raw.startswith(UTF8_BOM):
        raw = raw[len(UTF8_BOM):]
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        info = detect_encoding_info(raw)
        sample = "; ".join(info["suspicious_chars"][:3])
        raise EncodingError(
            f"File is not valid UTF-8 (looks like {info['detected']}, "
            f"confidence {info['confidence']}): {sample or exc.reason}",
            encoding_info=info,
        ) from exc
