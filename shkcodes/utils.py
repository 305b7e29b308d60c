"""Utility functions for shkcodes.

String, date and path helpers shared by the content and CLI modules.

Key functions:
    slugify: Convert a title or filename to a directory-friendly slug.
    titleize: Convert filenames to human-readable titles.
    extract_date_from_name: Extract date from filename prefix.
    parse_date: Coerce a frontmatter date value into a datetime.
    format_date: Render a date with a moment-style format string.
    first_paragraph: Extract the first prose paragraph of a document.
    build_tags_index: Build index of posts by tags.
    is_markdown: Check if a path is a Markdown/MDX file.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

CODE_FENCE_RE = re.compile(r"^```.*?^```[^\n]*$", re.DOTALL | re.MULTILINE)
DATE_TOKEN_RE = re.compile(r"\[[^\]]*\]|YYYY|YY|MMMM|MMM|MM|M|dddd|ddd|DD|D|HH|mm|ss")

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

WEEKDAY_NAMES = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]


def slugify(name: str) -> str:
    """Convert a title or filename stem to a slug, dropping a date prefix.

    Args:
        name: Title or filename stem.

    Returns:
        Lowercase slug with runs of other characters collapsed to hyphens.
    """
    cleaned = name
    if "-" in cleaned:
        parts = cleaned.split("-")
        if len(parts) >= 4 and all(p.isdigit() for p in parts[:3]):
            cleaned = "-".join(parts[3:])
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", cleaned)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "untitled"


def titleize(filename: str) -> str:
    """Convert a filename to a human-readable title.

    Removes date prefixes (YYYY-MM-DD), replaces hyphens and underscores
    with spaces, and capitalizes each word.

    Examples:
        >>> titleize("2024-01-15-hello-world.md")
        'Hello World'

        >>> titleize("dagger-basics")
        'Dagger Basics'
    """
    base = Path(filename).stem if Path(filename).suffix in (".md", ".mdx") else filename
    if "-" in base:
        parts = base.split("-")
        if len(parts) >= 4 and all(p.isdigit() for p in parts[:3]):
            base = "-".join(parts[3:])
    words = re.split(r"[\s\-_]+", base)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"


def extract_date_from_name(name: str) -> datetime | None:
    """Extract a date from a name with a YYYY-MM-DD prefix.

    Returns:
        datetime object if a valid date prefix is found, None otherwise.
    """
    parts = name.split("-")
    if len(parts) >= 3 and all(p.isdigit() for p in parts[:3]):
        try:
            return datetime(int(parts[0]), int(parts[1]), int(parts[2]))
        except ValueError:
            return None
    return None


def parse_date(value: Any) -> datetime | None:
    """Coerce a frontmatter date value into a datetime.

    PyYAML already turns unquoted ISO dates into ``date``/``datetime``
    objects; quoted strings are parsed with ``datetime.fromisoformat``.
    Timezone-aware values are converted to naive UTC so posts stay
    comparable with each other.

    Args:
        value: Raw frontmatter value.

    Returns:
        The parsed datetime, or None when the value is missing or invalid.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return None


def format_date(value: date, format_string: str) -> str:
    """Render a date using moment-style tokens.

    Supported tokens are YYYY, YY, MMMM, MMM, MM, M, dddd, ddd, DD, D, HH, mm
    and ss. Text wrapped in square brackets is copied verbatim.

    Examples:
        >>> format_date(datetime(2020, 5, 3), "DD-MM-YYYY")
        '03-05-2020'

        >>> format_date(datetime(2020, 5, 3), "MMMM D[,] YYYY")
        'May 3, 2020'
    """
    hour = getattr(value, "hour", 0)
    minute = getattr(value, "minute", 0)
    second = getattr(value, "second", 0)
    month_name = MONTH_NAMES[value.month - 1]
    weekday_name = WEEKDAY_NAMES[value.weekday()]
    replacements = {
        "YYYY": f"{value.year:04d}",
        "YY": f"{value.year % 100:02d}",
        "MMMM": month_name,
        "MMM": month_name[:3],
        "MM": f"{value.month:02d}",
        "M": str(value.month),
        "dddd": weekday_name,
        "ddd": weekday_name[:3],
        "DD": f"{value.day:02d}",
        "D": str(value.day),
        "HH": f"{hour:02d}",
        "mm": f"{minute:02d}",
        "ss": f"{second:02d}",
    }

    def repl(match: re.Match) -> str:
        token = match.group(0)
        if token.startswith("["):
            return token[1:-1]
        return replacements[token]

    return DATE_TOKEN_RE.sub(repl, format_string)


def first_paragraph(text: str, limit: int = 160) -> str:
    """Extract and clean the first prose paragraph from markdown text.

    Headings, images, code fences and MDX import/export lines are skipped.
    HTML/JSX tags are stripped, whitespace collapsed, and the result
    truncated to the specified limit.
    """
    text = CODE_FENCE_RE.sub("", text)
    paragraphs = [p.strip() for p in text.split("\n\n") if p.strip()]
    for para in paragraphs:
        if para.startswith(("#", "![", "```", "import ", "export ")):
            continue
        para = re.sub(r"<[^>]+>", "", para)
        collapsed = " ".join(para.split())
        if collapsed:
            return collapsed[:limit]
    return ""


def is_draft_path(path: Path) -> bool:
    """Check if any component of a path starts with an underscore."""
    return any(part.startswith("_") for part in path.parts)


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown or MDX file (case-insensitive)."""
    return path.suffix.lower() in (".md", ".mdx")


def build_tags_index(posts: Iterable) -> dict[str, list]:
    """Build an index mapping tags to lists of posts containing that tag.

    Args:
        posts: Iterable of objects with a 'tags' attribute.

    Returns:
        Dictionary mapping tag names to lists of posts.
    """
    tags: dict[str, list] = {}
    for post in posts:
        for tag in post.tags:
            tags.setdefault(tag, []).append(post)
    return tags
