"""
Escaping rules for JSON strings, XML text and names, and table cells.

Policies:
    JSON - quote, backslash and the usual short escapes are backslash-escaped;
           other control characters (U+0000-U+001F, U+007F) and lone
           surrogates are written as \\uXXXX.
    XML  - the five reserved characters become entities; characters that
           XML 1.0 does not allow (C0 controls other than TAB/LF/CR, lone
           surrogates, U+FFFE and U+FFFF) are stripped.
    XML names - every character outside the XML 1.0 NameChar set (including
           ":") becomes "_", and "_" is prepended when the first character
           cannot start a name.
    Table - backslash, newline, carriage return and tab are written as
           \\\\, \\n, \\r and \\t so a value always stays on one line.
"""

import logging
import math
import re

logger = logging.getLogger(__name__)

# JSON escaping lookup table
_JSON_LUT = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_JSON_RE = re.compile('["\\\\\x00-\x1f\x7f\ud800-\udfff]')

# XML entity lookup table
_XML_LUT = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}
_XML_RE = re.compile("[&<>\"']")
_XML_INVALID_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

# XML 1.0 (fifth edition) NameStartChar, without ":"
_XML_NAME_START = (
    "A-Z_a-z\xc0-\xd6\xd8-\xf6\xf8-\u02ff\u0370-\u037d\u037f-\u1fff"
    "\u200c\u200d\u2070-\u218f\u2c00-\u2fef\u3001-\ud7ff\uf900-\ufdcf"
    "\ufdf0-\ufffd\U00010000-\U000effff"
)
_XML_NAME_START_RE = re.compile(f"[{_XML_NAME_START}]")
_XML_NAME_INVALID_RE = re.compile(
    f"[^{_XML_NAME_START}\\-.0-9\xb7\u0300-\u036f\u203f\u2040]"
)

# Table cell escaping lookup table
_TABLE_LUT = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_TABLE_RE = re.compile("[\\\\\n\r\t]")


def _json_convert(match: "re.Match[str]") -> str:
    ch = match.group(0)
    return _JSON_LUT.get(ch) or f"\\u{ord(ch):04x}"


def escape_json_str(s: str) -> str:
    """
    Escape text for use inside a JSON string literal (without the quotes).

    Args:
        s: Text to escape

    Returns:
        Escaped text
    """
    return _JSON_RE.sub(_json_convert, s)


def strip_xml_invalid(s: str) -> str:
    """Remove characters that cannot appear in an XML 1.0 document."""
    cleaned = _XML_INVALID_RE.sub("", s)
    if len(cleaned) != len(s):
        logger.warning(
            f"Stripped {len(s) - len(cleaned)} character(s) not allowed in XML"
        )
    return cleaned


def escape_xml_str(s: str) -> str:
    """
    Escape text for XML element content or attribute values.

    Text without reserved or disallowed characters is returned unchanged.

    Args:
        s: Text to escape

    Returns:
        XML-safe text
    """
    return _XML_RE.sub(lambda m: _XML_LUT[m.group(0)], strip_xml_invalid(s))


def format_float(value: float) -> str:
    """
    Locale-independent decimal form of a float.

    Finite values use the shortest representation that round-trips;
    non-finite values render as ``nan``, ``inf`` or ``-inf``.
    """
    value = float(value)
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return repr(value)


def xml_name(name: str) -> str:
    """
    Turn arbitrary text into a well-formed XML element or attribute name.

    Characters that cannot appear in a name become ``_``; a name that would
    start with a digit, ``-`` or ``.`` (or is empty) gets a leading ``_``.
    ``"10.0.0.1"`` becomes ``"_10.0.0.1"`` and ``"a&b"`` becomes ``"a_b"``.
    """
    cleaned = _XML_NAME_INVALID_RE.sub("_", name)
    if not _XML_NAME_START_RE.match(cleaned):
        cleaned = "_" + cleaned
    return cleaned


def escape_table_str(s: str) -> str:
    """Escape line breaks, tabs and backslashes so a value fits on one line."""
    return _TABLE_RE.sub(lambda m: _TABLE_LUT[m.group(0)], s)
