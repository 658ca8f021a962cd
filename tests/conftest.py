"""Test configuration and fixtures for Pagewright tests."""

import pytest
import tempfile
import shutil
import os
import sys
from datetime import date, timedelta
from pathlib import Path
import yaml

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from pagewright_pkg.models import Post, SiteConfig


def write_post(content_dir, relative_path, front_matter, body="Some post content."):
    """Write a markdown post with YAML front matter below content_dir."""
    path = Path(content_dir) / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\n{yaml.safe_dump(front_matter, sort_keys=False)}---\n\n{body}\n", encoding='utf-8')
    return path


def make_posts(count, start=date(2021, 1, 1)):
    """Posts with strictly increasing dates, oldest first."""
    return [
        Post(slug=f'/post-{i}/', title=f'Post {i}', date=start + timedelta(days=i))
        for i in range(count)
    ]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def mock_content_dir(temp_dir):
    """Create a content directory with a handful of posts."""
    content_dir = Path(temp_dir) / 'content' / 'blog'
    content_dir.mkdir(parents=True)

    write_post(content_dir, 'foo-bar.md', {
        'title': 'Foo Bar',
        'date': date(2021, 3, 15),
        'description': 'All about foo',
    }, body="# Foo\n\nFoo and **bar**.")
    write_post(content_dir, 'hello-world/index.md', {
        'title': 'Hello World',
        'date': date(2020, 11, 2),
    }, body="Hello, world!")
    write_post(content_dir, 'notes/2019/first.md', {
        'title': 'First',
        'date': '2019-06-01',
        'excerpt': 'The very first post',
    })

    return str(content_dir)


@pytest.fixture
def mock_output_dir(temp_dir):
    return os.path.join(temp_dir, 'public')


@pytest.fixture
def log_dir(temp_dir):
    return os.path.join(temp_dir, 'logs')


@pytest.fixture
def site_config(mock_content_dir, mock_output_dir):
    return SiteConfig(
        content_dir=mock_content_dir,
        output_dir=mock_output_dir,
        posts_per_page=2,
        site_title='Test Blog',
        site_url='https://example.com',
    )
