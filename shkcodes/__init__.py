"""shkcodes blog tooling.

This package holds the pieces of the shkcodes blog that are not owned by the
external static-site theme: the site configuration descriptor, the color
theme override merged onto the base theme, and helpers for reading the
markdown articles under content/posts.

The main entry point is the CLI module, which prints the resolved
configuration and theme, lists posts, and scaffolds new articles.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
