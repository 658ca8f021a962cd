"""
RSS feed and XML sitemap generation.

Both are built from the planned posts, so every link points at a canonical path.
"""

import re
import html
from datetime import datetime, time, timezone
from email.utils import format_datetime, formatdate
from xml.sax.saxutils import escape

from .paths import absolute_url, canonical_path


def clean_description(text):
    """Strip tags and collapse whitespace so text is safe to embed in a feed."""
    text = html.unescape(str(text))
    text = re.sub(r'<.*?>', '', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def rfc822_date(day):
    return format_datetime(datetime.combine(day, time(0, 0), tzinfo=timezone.utc))


def generate_rss_feed(sorted_posts, site_url, site_title, site_description=None, limit=20):
    """
    Generate an RSS 2.0 feed for the newest posts.

    Args:
        sorted_posts: Posts ordered newest first
        site_url: Absolute site URL used to build item links
        site_title: Channel title
        site_description: Channel description, defaults to a generic line
        limit: Maximum number of items

    Returns:
        RSS document as a string
    """
    description = site_description or f"Latest posts from {site_title}"
    rss_content = f'''<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
<channel>
<title>{escape(site_title)}</title>
<link>{escape(site_url)}</link>
<description>{escape(description)}</description>
<lastBuildDate>{formatdate()}</lastBuildDate>
'''

    for post in sorted_posts[:limit]:
        link = absolute_url(site_url, canonical_path(post))
        summary = clean_description(post.description or post.excerpt or post.title)
        rss_content += f'''
<item>
<title>{escape(post.title)}</title>
<link>{escape(link)}</link>
<description>{escape(summary)}</description>
<pubDate>{rfc822_date(post.date)}</pubDate>
<guid>{escape(link)}</guid>
</item>'''

    rss_content += '''
</channel>
</rss>'''
    return rss_content


def format_xml_sitemap_entry(url, lastmod=None):
    """Format a single sitemap entry."""
    entry = f'<url>\n<loc>{escape(url)}</loc>\n'
    if lastmod is not None:
        entry += f"<lastmod>{lastmod.strftime('%Y-%m-%d')}</lastmod>\n"
    return entry + '</url>\n'


def generate_xml_sitemap(plan, site_url):
    """Generate a sitemap listing every index page and every post."""
    sitemap_content = '''<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
'''
    newest = plan.posts[0].date if plan.posts else None
    for page in plan.index_pages:
        sitemap_content += format_xml_sitemap_entry(absolute_url(site_url, page.route), newest)

    for post in plan.posts:
        sitemap_content += format_xml_sitemap_entry(absolute_url(site_url, canonical_path(post)), post.date)

    sitemap_content += '</urlset>'
    return sitemap_content
