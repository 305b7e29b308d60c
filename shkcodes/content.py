"""Content loading for shkcodes.

Posts live under content/posts, either as single files or as folders with
an index file (``content/posts/dagger-basics/index.mdx``). This module only
reads their metadata; turning markdown into pages is the site generator's
job.

Key classes:
- Post: Dataclass holding a post's metadata and raw body.
- FileContentLoader: Discovers post files in a content directory.
- ContentProcessor: Loads posts, newest first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from .extractors import CompositeMetadataExtractor, default_metadata_extractor
from .utils import is_draft_path, is_markdown

POSTS_DIR = Path("content") / "posts"


@dataclass
class Post:
    """A blog post read from a content file.

    Attributes:
        title: Title of the post.
        date: Publication date.
        description: Short description used in listings and SEO.
        tags: Tags in declaration order.
        body: Markdown body without the metadata block.
        path: Path to the source file.
        draft: Whether the post is a draft.
        frontmatter: The full metadata block as parsed.
    """

    title: str
    date: datetime
    description: str
    tags: list[str]
    body: str
    path: Path
    draft: bool = False
    frontmatter: dict[str, Any] = field(default_factory=dict)


class FileContentLoader:
    """Discovers post files below a content directory.

    Paths with a component starting with an underscore are drafts and are
    skipped unless requested.

    Attributes:
        content_dir: Directory containing the posts.
    """

    def __init__(self, content_dir: Path):
        self.content_dir = content_dir

    def iter_files(self, include_drafts: bool = False) -> list[Path]:
        """Return post files in a stable, sorted order."""
        files: list[Path] = []
        if not self.content_dir.exists():
            return files
        for path in sorted(self.content_dir.rglob("*")):
            if path.is_dir() or not is_markdown(path):
                continue
            rel = path.relative_to(self.content_dir)
            if is_draft_path(rel) and not include_drafts:
                continue
            files.append(path)
        return files


class ContentProcessor:
    """Loads posts from a content directory.

    Attributes:
        content_dir: Directory containing the posts.
    """

    def __init__(
        self,
        content_dir: Path,
        content_loader: FileContentLoader | None = None,
        metadata_extractor: CompositeMetadataExtractor | None = None,
    ):
        self.content_dir = content_dir
        self._content_loader = content_loader or FileContentLoader(content_dir)
        self._metadata_extractor = metadata_extractor or default_metadata_extractor

    def load(self, include_drafts: bool = False) -> list[Post]:
        """Load all posts, newest first.

        Args:
            include_drafts: Whether to include draft posts.

        Returns:
            List of Post objects sorted by date, descending.
        """
        posts = [
            self.build(path)
            for path in self._content_loader.iter_files(include_drafts)
        ]
        posts.sort(key=lambda post: post.date, reverse=True)
        return posts

    def build(self, path: Path) -> Post:
        """Build a Post from a single source file."""
        raw = path.read_text(encoding="utf-8")
        metadata = self._metadata_extractor.extract(raw, path)
        draft = is_draft_path(path.relative_to(self.content_dir))
        return Post(
            title=metadata["title"],
            date=metadata["date"],
            description=metadata.get("description", ""),
            tags=metadata.get("tags", []),
            body=metadata.get("body", raw),
            path=path,
            draft=draft,
            frontmatter=metadata.get("frontmatter", {}),
        )


def load_posts(project_root: Path, include_drafts: bool = False) -> list[Post]:
    """Load the posts of a project from its content/posts directory."""
    return ContentProcessor(project_root / POSTS_DIR).load(include_drafts=include_drafts)
