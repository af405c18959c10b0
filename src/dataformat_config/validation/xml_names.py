"""
XML name validation (XML 1.0 fifth edition, productions [4], [4a] and [5]).
"""

import re

_NAME_START_CHARS = (
    ":A-Z_a-z"
    "\u00c0-\u00d6"
    "\u00d8-\u00f6"
    "\u00f8-\u02ff"
    "\u0370-\u037d"
    "\u037f-\u1fff"
    "\u200c-\u200d"
    "\u2070-\u218f"
    "\u2c00-\u2fef"
    "\u3001-\ud7ff"
    "\uf900-\ufdcf"
    "\ufdf0-\ufffd"
    "\U00010000-\U000effff"
)
_NAME_CHARS = _NAME_START_CHARS + "\\-.0-9\u00b7\u0300-\u036f\u203f-\u2040"

_XML_NAME_RE = re.compile(f"[{_NAME_START_CHARS}][{_NAME_CHARS}]*")


def is_valid_xml_name(name: str) -> bool:
    """
    Check whether a string is a syntactically valid XML name.

    Args:
        name: Candidate element name

    Returns:
        True if the name matches the XML Name production
    """
    if not name:
        return False
    return _XML_NAME_RE.fullmatch(name) is not None
