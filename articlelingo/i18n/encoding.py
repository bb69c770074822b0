"""
UTF-8 validation and content sanitization.

Every translated field passes through ``sanitize_content`` before it is
cached or persisted. Input may arrive as ``bytes`` in an unknown (possibly
mislabelled) encoding, or as ``str`` carrying lone surrogates from a lossy
decode upstream.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Any

from articlelingo.core.errors import EncodingError

logger = logging.getLogger(__name__)


# Tried in order by detect_encoding
ENCODING_PRIORITY: list[str] = [
    "utf-8",
    "iso-8859-1",
    "iso-8859-15",
    "cp1252",
    "cp1251",       # Cyrillic
    "gb2312",       # Simplified Chinese
    "big5",         # Traditional Chinese
    "iso-8859-6",   # Arabic
]

# Single-byte ISO tables map 0x80-0x9F to C1 controls; real text never has them
_C1_GUARDED = {"iso-8859-1", "iso-8859-15", "iso-8859-6"}

UTF8_BOM = "\ufeff"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_C1_RE = re.compile(r"[\x80-\x9f]")
_HSPACE_RE = re.compile(r"[^\S\n]+")
_NEWLINES_RE = re.compile(r"\n{3,}")
_LEADING_RE = re.compile(r"^[\s\ufeff]+")
_SPECIAL_SPACES = str.maketrans({
    "\u00a0": " ",  # no-break space
    "\u202f": " ",  # narrow no-break space
    "\u2007": " ",  # figure space
})

_CHARSET_META_RE = re.compile(r"<meta[^>]+charset=[\"']?utf-8[\"']?", re.IGNORECASE)
_HEAD_RE = re.compile(r"(<head[^>]*>)", re.IGNORECASE)

# Unicode blocks
CYRILLIC_RE = re.compile(r"[\u0400-\u04ff]")
CHINESE_RE = re.compile(r"[\u4e00-\u9fff]")
ARABIC_RE = re.compile(r"[\u0600-\u06ff]")
DEVANAGARI_RE = re.compile(r"[\u0900-\u097f]")
NON_ASCII_RE = re.compile(r"[^\x00-\x7f]")


class EncodingValidator:
    """Validates, repairs and normalizes text to well-formed Unicode."""

    # =========================================================================
    # Validation
    # =========================================================================

    def validate_utf8(self, text: str | bytes) -> bool:
        """
        Strictly validate that text is well-formed UTF-8.

        Raises:
            EncodingError: If the byte sequence is not valid UTF-8, or a
                ``str`` contains lone surrogates.
        """
        try:
            if isinstance(text, bytes):
                text.decode("utf-8")
            else:
                text.encode("utf-8")
        except UnicodeError as e:
            logger.error(f"Invalid UTF-8 detected: {e}")
            raise EncodingError(
                "Invalid UTF-8 encoding detected",
                details={"position": getattr(e, "start", None), "reason": getattr(e, "reason", str(e))},
            ) from e
        return True

    def is_valid_utf8(self, text: str | bytes) -> bool:
        """Non-raising variant of validate_utf8."""
        try:
            return self.validate_utf8(text)
        except EncodingError:
            return False

    # =========================================================================
    # Repair
    # =========================================================================

    def ensure_utf8(self, text: str | bytes) -> str:
        """
        Return text as well-formed Unicode.

        Best effort: tries the prioritized encoding list, then falls back to a
        lossy ASCII transliteration. Never raises. Callers that need
        strictness call validate_utf8 afterwards.
        """
        if isinstance(text, str):
            if self.is_valid_utf8(text):
                return text
            data = self._surrogates_to_bytes(text)
        else:
            data = text

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            pass

        logger.warning("Input is not valid UTF-8, attempting conversion")

        encoding = self.detect_encoding(data)
        if encoding:
            logger.info(f"Converting from {encoding} to UTF-8")
            return data.decode(encoding)

        return self._ascii_fallback(data)

    def detect_encoding(self, data: bytes) -> str | None:
        """First encoding in the priority list that decodes data cleanly."""
        for encoding in ENCODING_PRIORITY:
            try:
                decoded = data.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                continue
            if encoding in _C1_GUARDED and _C1_RE.search(decoded):
                continue
            logger.debug(f"Detected encoding: {encoding}")
            return encoding
        return None

    def _surrogates_to_bytes(self, text: str) -> bytes:
        try:
            return text.encode("utf-8", "surrogateescape")
        except UnicodeEncodeError:
            return text.encode("utf-8", "surrogatepass")

    def _ascii_fallback(self, data: bytes) -> str:
        """Lossy last resort: Latin-1 view, decomposed, reduced to ASCII."""
        logger.warning("No encoding matched, falling back to ASCII transliteration")
        decomposed = unicodedata.normalize("NFKD", data.decode("iso-8859-1"))
        return decomposed.encode("ascii", "replace").decode("ascii")

    # =========================================================================
    # Sanitization
    # =========================================================================

    def sanitize_content(self, text: str | bytes) -> str:
        """
        Normalize text for caching and persistence. Idempotent.

        ensure_utf8 -> NFC -> strip control characters (keeps \\n \\r \\t)
        -> normalize whitespace -> strip leading BOM -> trim.
        """
        text = self.ensure_utf8(text)
        text = unicodedata.normalize("NFC", text)
        text = self.remove_control_characters(text)
        text = self.normalize_whitespace(text)
        text = self.remove_bom(text)
        # Removing characters can leave a composable pair behind
        return unicodedata.normalize("NFC", text.strip())

    def remove_control_characters(self, text: str) -> str:
        return _CONTROL_RE.sub("", text)

    def normalize_whitespace(self, text: str) -> str:
        text = text.translate(_SPECIAL_SPACES)
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        text = _HSPACE_RE.sub(" ", text)
        text = _NEWLINES_RE.sub("\n\n", text)
        return text.strip()

    def remove_bom(self, text: str) -> str:
        if text.startswith(UTF8_BOM):
            return _LEADING_RE.sub("", text)
        return text

    # =========================================================================
    # Script detection
    # =========================================================================

    def has_non_ascii(self, text: str) -> bool:
        return NON_ASCII_RE.search(text) is not None

    def has_cyrillic(self, text: str) -> bool:
        return CYRILLIC_RE.search(text) is not None

    def has_chinese(self, text: str) -> bool:
        return CHINESE_RE.search(text) is not None

    def has_arabic(self, text: str) -> bool:
        return ARABIC_RE.search(text) is not None

    def has_devanagari(self, text: str) -> bool:
        return DEVANAGARI_RE.search(text) is not None

    def detect_script(self, text: str) -> str:
        """First non-Latin script found, else 'latin'."""
        if self.has_cyrillic(text):
            return "cyrillic"
        if self.has_chinese(text):
            return "chinese"
        if self.has_arabic(text):
            return "arabic"
        if self.has_devanagari(text):
            return "devanagari"
        return "latin"

    # =========================================================================
    # HTML
    # =========================================================================

    def ensure_html_utf8_charset(self, html: str) -> str:
        """Add a UTF-8 charset declaration if the document has none."""
        if _CHARSET_META_RE.search(html):
            return html
        if _HEAD_RE.search(html):
            return _HEAD_RE.sub(r'\1\n<meta charset="UTF-8">', html, count=1)
        return '<meta charset="UTF-8">\n' + html

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def analyze_encoding(self, text: str | bytes) -> dict[str, Any]:
        """Encoding report for logs and debugging."""
        data = text if isinstance(text, bytes) else self._surrogates_to_bytes(text)
        decoded = self.ensure_utf8(text)
        return {
            "is_utf8": self.is_valid_utf8(text),
            "detected_encoding": self.detect_encoding(data),
            "has_non_ascii": self.has_non_ascii(decoded),
            "has_cyrillic": self.has_cyrillic(decoded),
            "has_chinese": self.has_chinese(decoded),
            "has_arabic": self.has_arabic(decoded),
            "has_devanagari": self.has_devanagari(decoded),
            "byte_length": len(data),
            "char_length": len(decoded),
            "has_bom": decoded.startswith(UTF8_BOM),
        }

    def script_statistics(self, text: str) -> dict[str, int]:
        """Character counts per script family."""
        stats = {
            "total_chars": len(text),
            "ascii": 0,
            "cyrillic": 0,
            "chinese": 0,
            "arabic": 0,
            "devanagari": 0,
            "other": 0,
        }
        for char in text:
            if ord(char) < 0x80:
                stats["ascii"] += 1
            elif CYRILLIC_RE.match(char):
                stats["cyrillic"] += 1
            elif CHINESE_RE.match(char):
                stats["chinese"] += 1
            elif ARABIC_RE.match(char):
                stats["arabic"] += 1
            elif DEVANAGARI_RE.match(char):
                stats["devanagari"] += 1
            else:
                stats["other"] += 1
        return stats
