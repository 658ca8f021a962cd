"""
Slug and URL helpers.

Slugs are derived from where a post lives under the content root, and the
canonical URL of a post is derived from its date and slug. Everything that
needs a post's public URL goes through canonical_path().
"""

import os
import posixpath

MARKDOWN_EXTENSIONS = ('.md', '.markdown')


def file_path_slug(relative_path):
    """
    Build the slug for a content file.

    Args:
        relative_path: Path of the markdown file relative to the content root

    Returns:
        Slash-delimited slug, e.g. 'foo-bar/index.md' -> '/foo-bar/'
    """
    path = relative_path.replace(os.sep, '/')
    stem, ext = posixpath.splitext(path)
    if ext.lower() not in MARKDOWN_EXTENSIONS:
        stem = path
    if posixpath.basename(stem) == 'index':
        stem = posixpath.dirname(stem)
    stem = stem.strip('/')
    if not stem:
        return '/'
    return f'/{stem}/'


def canonical_path(post):
    """Return the dated public path of a post: /YYYY/MM/<slug>."""
    return f"/{post.date.year}/{post.date.month:02d}{post.slug}"


def absolute_url(site_url, path):
    """Join a site URL and a site-relative path."""
    return f"{site_url.rstrip('/')}{path}"


def output_file_for(route_path, output_dir):
    """Map a route such as '/2021/03/foo/' or '/2' to its index.html on disk."""
    parts = [part for part in route_path.split('/') if part]
    if any(part in ('.', '..') for part in parts):
        raise ValueError(f"Refusing to write outside output directory: {route_path}")
    return os.path.join(output_dir, *parts, 'index.html')
