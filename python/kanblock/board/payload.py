"""External drop payloads -> item texts.

Dropped text is split into lines; each non-blank line becomes one new item.
Links that point at a note in the host's resource store are reduced to the
note's base name, and plain names are wrapped as ``[[name]]`` references.
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Iterable
from urllib.parse import parse_qs, unquote, urlsplit

from .parser import split_lines

_URL_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
_WIKILINK_RE = re.compile(r"^\[\[[^\[\]]+\]\]$")

DEFAULT_LINK_SCHEMES: tuple[str, ...] = ("obsidian",)


def payload_lines(payload: str) -> list[str]:
    """Non-blank lines of a payload, stripped, in order."""
    return [line.strip() for line in split_lines(payload) if line.strip()]


def looks_like_url(text: str) -> bool:
    return _URL_RE.match(text) is not None


def looks_like_reference(text: str) -> bool:
    return _WIKILINK_RE.match(text) is not None


def resource_name(line: str, link_schemes: Iterable[str] = DEFAULT_LINK_SCHEMES) -> str | None:
    """Base name of the resource a link points at, or None for other text.

    Recognises ``<scheme>://open?...&file=<path>`` for the configured schemes
    and ``file://`` URIs. The extension is dropped from the base name.
    """
    if not looks_like_url(line):
        return None
    parts = urlsplit(line)
    scheme = parts.scheme.lower()
    if scheme == "file":
        path = unquote(parts.path)
    elif scheme in {s.lower() for s in link_schemes}:
        query = parse_qs(parts.query)
        files = query.get("file") or query.get("path")
        if not files:
            return None
        path = files[0]
    else:
        return None
    base = posixpath.basename(path.rstrip("/"))
    stem, _ext = posixpath.splitext(base)
    return stem or base or None


def derive_item_text(line: str, link_schemes: Iterable[str] = DEFAULT_LINK_SCHEMES) -> str:
    """Display text for one dropped line."""
    text = line.strip()
    name = resource_name(text, link_schemes)
    if name is not None:
        text = name
    if looks_like_reference(text) or looks_like_url(text):
        return text
    return f"[[{text}]]"


def derive_item_texts(payload: str, link_schemes: Iterable[str] = DEFAULT_LINK_SCHEMES) -> list[str]:
    return [derive_item_text(line, link_schemes) for line in payload_lines(payload)]
