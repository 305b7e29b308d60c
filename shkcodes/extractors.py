"""Metadata extractors for blog posts.

Each extractor reads one piece of post metadata. The leading YAML block of
a post is authoritative; the other sources are fallbacks for posts that
leave a field out.

Key classes:
- FrontmatterExtractor: Splits the YAML metadata block from the body.
- TitleExtractor: Title from frontmatter, heading, or file name.
- DateExtractor: Date from frontmatter, name prefix, or file mtime.
- DescriptionExtractor: Description from frontmatter or first paragraph.
- TagExtractor: Tags from frontmatter.
- CompositeMetadataExtractor: Runs extractors in order and merges results.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from .utils import extract_date_from_name, first_paragraph, parse_date, titleize

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\n(.*?)^---[ \t]*(?:\n|\Z)", re.DOTALL | re.MULTILINE
)


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter from content.

    Malformed YAML or a non-mapping block is treated as no frontmatter.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (frontmatter dict, remaining content).
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1)) or {}
        if not isinstance(data, dict):
            return {}, text
        return data, text[match.end() :]
    except yaml.YAMLError:
        return {}, text


def post_name(path: Path) -> str:
    """Name a post by its file, or by its folder for index files."""
    if path.stem.lower() == "index":
        return path.parent.name
    return path.stem


class FrontmatterExtractor:
    """Splits the leading YAML block (between --- markers) from the body."""

    def extract(self, content: str, path: Path, found: dict[str, Any]) -> dict[str, Any]:
        frontmatter, body = extract_frontmatter(content)
        return {"frontmatter": frontmatter, "body": body}


class TitleExtractor:
    """Extracts the post title.

    Uses the frontmatter title, then the first level-1 heading of the
    body, then the titleized post name.
    """

    def extract(self, content: str, path: Path, found: dict[str, Any]) -> dict[str, Any]:
        title = found.get("frontmatter", {}).get("title")
        if title:
            return {"title": str(title)}
        for line in found.get("body", content).splitlines():
            stripped = line.strip()
            if stripped.startswith("# "):
                return {"title": stripped[2:].strip()}
        return {"title": titleize(post_name(path))}


class DateExtractor:
    """Extracts the publication date.

    Looks at the frontmatter date, then a YYYY-MM-DD prefix on the post
    name, falling back to the file modification time.
    """

    def extract(self, content: str, path: Path, found: dict[str, Any]) -> dict[str, Any]:
        date = parse_date(found.get("frontmatter", {}).get("date"))
        if date is None:
            date = extract_date_from_name(post_name(path))
        if date is None:
            date = datetime.fromtimestamp(path.stat().st_mtime)
        return {"date": date}


class DescriptionExtractor:
    """Extracts the description from frontmatter or the first paragraph."""

    def extract(self, content: str, path: Path, found: dict[str, Any]) -> dict[str, Any]:
        description = found.get("frontmatter", {}).get("description")
        if description:
            return {"description": " ".join(str(description).split())}
        return {"description": first_paragraph(found.get("body", content))}


class TagExtractor:
    """Extracts tags from a frontmatter list or comma-separated string."""

    def extract(self, content: str, path: Path, found: dict[str, Any]) -> dict[str, Any]:
        raw = found.get("frontmatter", {}).get("tags") or []
        if isinstance(raw, str):
            raw = raw.split(",")
        elif not isinstance(raw, list):
            raw = [raw]
        tags: list[str] = []
        for tag in raw:
            text = str(tag).strip()
            if text and text not in tags:
                tags.append(text)
        return {"tags": tags}


class CompositeMetadataExtractor:
    """Combines multiple metadata extractors.

    Extractors run in order; each one sees the results gathered so far,
    and later extractors override keys set by earlier ones.
    """

    def __init__(self, extractors: list | None = None):
        if extractors is None:
            self._extractors = [
                FrontmatterExtractor(),
                TitleExtractor(),
                DateExtractor(),
                DescriptionExtractor(),
                TagExtractor(),
            ]
        else:
            self._extractors = list(extractors)

    def add_extractor(self, extractor) -> None:
        self._extractors.append(extractor)

    def extract(self, content: str, path: Path) -> dict[str, Any]:
        """Run all registered extractors and merge their results.

        Args:
            content: Raw file content.
            path: Path to the source file.

        Returns:
            Dictionary with all extracted metadata.
        """
        result: dict[str, Any] = {}
        for extractor in self._extractors:
            result.update(extractor.extract(content, path, result))
        return result


default_metadata_extractor = CompositeMetadataExtractor()
