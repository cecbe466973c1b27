"""Autocomplete for tags (``#tag``) and resource references (``[[name``)."""

from __future__ import annotations

import re
from dataclasses import dataclass

_TAG_TRIGGER_RE = re.compile(r"#([^\s#\[\]]*)$")
_REF_TRIGGER_RE = re.compile(r"\[\[([^\]]*)$")


@dataclass
class Resource:
    basename: str
    path: str


class ResourceIndex:
    """Lookup contract supplied by the host."""

    def resolve_resource_refs(self, query: str) -> list[Resource]:
        raise NotImplementedError

    def list_all_tags(self) -> set[str]:
        raise NotImplementedError


class StaticResourceIndex(ResourceIndex):
    """Index over a fixed list of resources and tags."""

    def __init__(self, resources: list[Resource] | None = None, tags: set[str] | None = None) -> None:
        self.resources = list(resources) if resources else []
        self.tags = set(tags) if tags else set()

    def resolve_resource_refs(self, query: str) -> list[Resource]:
        q = query.lower()
        return [
            r for r in self.resources
            if q in r.basename.lower() or q in r.path.lower()
        ]

    def list_all_tags(self) -> set[str]:
        return set(self.tags)


def suggestions(text: str, cursor: int, index: ResourceIndex) -> list[str | Resource]:
    """Completions for the fragment ending at ``cursor``."""
    before = text[:cursor]

    tag_match = _TAG_TRIGGER_RE.search(before)
    if tag_match:
        query = tag_match.group(1).lower()
        tags = {t if t.startswith("#") else "#" + t for t in index.list_all_tags()}
        return sorted(t for t in tags if query in t.lower())

    ref_match = _REF_TRIGGER_RE.search(before)
    if ref_match:
        return list(index.resolve_resource_refs(ref_match.group(1)))

    return []


def apply_suggestion(text: str, cursor: int, value: str | Resource) -> tuple[str, int]:
    """Replace the trigger fragment before ``cursor`` with ``value``.

    Returns (new_text, new_cursor).
    """
    before, after = text[:cursor], text[cursor:]
    if isinstance(value, Resource):
        new_before = _REF_TRIGGER_RE.sub(lambda _m: f"[[{value.basename}]]", before)
    else:
        new_before = _TAG_TRIGGER_RE.sub(lambda _m: value, before)
    return new_before + after, len(new_before)
