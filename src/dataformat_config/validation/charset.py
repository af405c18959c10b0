"""
Charset resolution.

Resolves a charset name against the runtime codec registry. An unknown
name is replaced by UTF-8 so the rest of the pass can still run and
surface its own problems.
"""

import codecs
import logging
from typing import Optional

from .diagnostics import Diagnostic, ErrorCodes, make_diagnostic

logger = logging.getLogger(__name__)

DEFAULT_CODEC = "utf-8"

CHARSET_FIELD = "charset"


def resolve_charset(
    name: Optional[str],
    group: Optional[str],
) -> tuple[str, Optional[Diagnostic]]:
    """
    Resolve a charset name to its canonical codec name.

    Args:
        name: Charset name (e.g. "UTF-8", "latin-1", "cp1252")
        group: Settings group to attach a diagnostic to

    Returns:
        Tuple of (codec_name, diagnostic)
        - codec_name: Canonical codec name, "utf-8" if unresolvable
        - diagnostic: None if resolved, an unknown_charset diagnostic otherwise
    """
    if name and name.strip():
        codec = _lookup_text_codec(name.strip())
        if codec is not None:
            return (codec, None)

    logger.warning(f"Unknown charset {name!r}, falling back to {DEFAULT_CODEC}")
    return (
        DEFAULT_CODEC,
        make_diagnostic(group, CHARSET_FIELD, ErrorCodes.UNKNOWN_CHARSET, name),
    )


def _lookup_text_codec(name: str) -> Optional[str]:
    """Canonical name of a text encoding, None for unknown or bytes/str transforms."""
    try:
        info = codecs.lookup(name)
    except LookupError:
        return None
    # base64, zlib, hex, rot13 and friends are registered codecs but not charsets
    if not getattr(info, "_is_text_encoding", True):
        return None
    return info.name
