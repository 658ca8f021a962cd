"""
Content loader: turns markdown files with YAML front matter into Post records.
"""

import os
import re
import logging
from datetime import datetime, date, timezone

import mistune
import yaml

from .errors import ContentLoadError, DuplicateSlugError
from .models import Post
from .paths import MARKDOWN_EXTENSIONS, file_path_slug

EXCERPT_WORDS = 30
DATE_FORMATS = ['%Y-%m-%dT%H:%M:%S%z', '%Y-%m-%dT%H:%M:%S', '%Y-%m-%d %H:%M:%S', '%Y-%m-%d %H:%M', '%Y-%m-%d', '%b %d, %Y']
FRONT_MATTER_RE = re.compile(r'\A---\s*\n(.*?)\n---\s*(?:\n|\Z)(.*)\Z', re.DOTALL)


def parse_date(value):
    """Parse a front matter date into a date, or None if it cannot be parsed."""
    if isinstance(value, datetime):
        # Aware timestamps file under their UTC month
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).date()
        return value.date()
    elif isinstance(value, date):
        return value
    elif isinstance(value, str):
        for fmt in DATE_FORMATS:
            try:
                parsed = datetime.strptime(value.strip(), fmt)
            except ValueError:
                continue
            if parsed.tzinfo is not None:
                parsed = parsed.astimezone(timezone.utc)
            return parsed.date()
    return None


def generate_excerpt(html_content):
    """Generate a plain-text excerpt from rendered HTML."""
    plain_text = re.sub(r'<[^>]+>', '', html_content)
    words = plain_text.split()
    if len(words) > EXCERPT_WORDS:
        return ' '.join(words[:EXCERPT_WORDS]) + '...'
    return ' '.join(words)


def create_markdown_parser():
    """Create a Mistune markdown parser with a custom renderer."""
    class CustomRenderer(mistune.HTMLRenderer):
        def __init__(self):
            super().__init__(escape=False)
        def block_code(self, code, info=None):
            escaped_code = mistune.escape(code)
            if info:
                lang = mistune.escape(info.split()[0])
                return f'<pre><code class="language-{lang}">{escaped_code}</code></pre>\n'
            return f'<pre><code>{escaped_code}</code></pre>\n'
    return mistune.create_markdown(
        renderer=CustomRenderer(),
        plugins=['table', 'task_lists', 'strikethrough']
    )


class ContentLoader:
    """Discover and parse the markdown posts under a content root."""

    def __init__(self, content_dir):
        self.content_dir = content_dir
        self.logger = logging.getLogger('Pagewright.content')
        self.markdown_parser = create_markdown_parser()

    def get_markdown_files(self):
        """
        Find every markdown file below the content root.

        Returns:
            Sorted list of paths relative to the content root
        """
        if not os.path.isdir(self.content_dir):
            raise ContentLoadError("Content directory does not exist", path=self.content_dir)

        markdown_files = []
        for root, dirs, files in os.walk(self.content_dir):
            # Hidden directories (.git, .obsidian, ...) never hold posts
            dirs[:] = [d for d in dirs if not d.startswith('.')]
            for file in files:
                if file.lower().endswith(MARKDOWN_EXTENSIONS) and not file.startswith('.'):
                    full_path = os.path.join(root, file)
                    markdown_files.append(os.path.relpath(full_path, self.content_dir))
        return sorted(markdown_files)

    def parse_markdown_with_metadata(self, filepath):
        """Parse a markdown file with YAML front matter."""
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                content = f.read()
        except (IOError, OSError, UnicodeDecodeError) as e:
            raise ContentLoadError(f"Failed to read markdown file: {e}", path=filepath) from e

        match = FRONT_MATTER_RE.match(content)
        if not match:
            return {}, content.strip()

        try:
            metadata = yaml.safe_load(match.group(1))
        except yaml.YAMLError as e:
            raise ContentLoadError(f"Invalid YAML front matter: {e}", path=filepath) from e
        if metadata is None:
            metadata = {}
        if not isinstance(metadata, dict):
            raise ContentLoadError("Front matter must be a mapping", path=filepath)

        return metadata, match.group(2).strip()

    def load_post(self, relative_path):
        """Build a Post from a single markdown file."""
        filepath = os.path.join(self.content_dir, relative_path)
        metadata, markdown_content = self.parse_markdown_with_metadata(filepath)
        slug = file_path_slug(relative_path)

        if 'date' not in metadata:
            raise ContentLoadError("Missing 'date' in front matter", path=filepath)
        post_date = parse_date(metadata['date'])
        if post_date is None:
            raise ContentLoadError(f"Unparseable date: {metadata['date']!r}", path=filepath)

        html_content = self.markdown_parser(markdown_content)
        title = metadata.get('title')
        title = str(title) if title else slug
        excerpt = metadata.get('excerpt') or generate_excerpt(html_content)

        return Post(
            slug=slug,
            title=title,
            date=post_date,
            excerpt=str(excerpt),
            description=str(metadata.get('description') or ''),
            content=html_content,
            source_path=relative_path,
        )

    def load(self):
        """
        Load every post under the content root.

        Returns:
            List of Post records in discovery order

        Raises:
            ContentLoadError: if any file cannot be loaded
            DuplicateSlugError: if two files resolve to the same slug
        """
        posts = []
        seen = {}
        for relative_path in self.get_markdown_files():
            post = self.load_post(relative_path)
            if post.slug in seen:
                raise DuplicateSlugError(post.slug, seen[post.slug], relative_path)
            seen[post.slug] = relative_path
            posts.append(post)
            self.logger.debug(f"Loaded post {post.slug} from {relative_path}")

        self.logger.info(f"Loaded {len(posts)} posts from {self.content_dir}")
        return posts
