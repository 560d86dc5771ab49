"""Filename helpers for uploaded files and generated fonts."""

import re
import unicodedata

# Characters that must never reach a filesystem path
_UNSAFE_CHARS = re.compile(r'[\x00-\x1f\x7f/\\:*?"<>|]')


def normalize_filename(name: str) -> str:
    """Recover the text form of an uploaded filename.

    Multipart parsers commonly hand back UTF-8 filenames decoded as latin-1
    ("å\\x9b¾æ\\xa0\\x87.svg" instead of "图标.svg"). Such names are
    re-decoded; names that are already proper text fail the round trip and
    are kept as supplied. The result is NFC-normalized.

    Args:
        name: Filename as received

    Returns:
        Canonical text filename
    """
    try:
        repaired = name.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        repaired = name
    return unicodedata.normalize("NFC", repaired)


def safe_stem(name: str, fallback: str) -> str:
    """Reduce a font name to something usable as a file stem.

    Examples:
        "demo" -> "demo"
        "../etc/passwd" -> "etcpasswd"
        "   " -> fallback

    Args:
        name: Requested font name
        fallback: Stem used when nothing usable remains

    Returns:
        File stem without path separators or control characters
    """
    cleaned = _UNSAFE_CHARS.sub("", name).strip().strip(".")
    return cleaned or fallback
