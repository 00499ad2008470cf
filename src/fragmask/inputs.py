from __future__ import annotations

from fragmask.errors import UnsupportedInputKind

_BUFFER_KINDS = (bytes, bytearray, memoryview)


def coerce_text(obj: object) -> tuple[str, bool]:
    """
    Return (text, was_bytes) for a complete in-memory buffer. Byte buffers are
    decoded as UTF-8.

    Streams, chunk iterators and anything else that is not a whole buffer are
    rejected with UnsupportedInputKind.
    """
    if isinstance(obj, str):
        return obj, False
    if isinstance(obj, _BUFFER_KINDS):
        try:
            return bytes(obj).decode("utf-8"), True
        except UnicodeDecodeError as e:
            raise UnsupportedInputKind(f"buffer is not valid UTF-8: {e}") from e
    raise UnsupportedInputKind(
        f"expected a complete text buffer (str or bytes), got {type(obj).__name__}; "
        "streams and chunked sources are not supported"
    )


def as_kind(text: str, was_bytes: bool) -> str | bytes:
    return text.encode("utf-8") if was_bytes else text
