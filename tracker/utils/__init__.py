"""
Utilities package for the activity tracker.

- md: Frontmatter splitting
- fs: Note discovery and modification dates
- slugify: Filesystem/URL-safe ids

Import commonly-used utilities directly from this package:
    from tracker.utils import split_frontmatter, find_markdown_files, slugify
"""

from .md import split_frontmatter
from .fs import find_markdown_files, modified_date
from .slugify import slugify

__all__ = [
    "split_frontmatter",
    "find_markdown_files",
    "modified_date",
    "slugify",
]
