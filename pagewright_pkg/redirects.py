"""
Redirects from legacy slug-only paths to canonical dated paths.
"""

import os

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import RedirectRule
from .paths import absolute_url, canonical_path

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')


def build_redirects(posts):
    """
    Build one permanent redirect per post, from its slug to its canonical path.

    Args:
        posts: Posts in planned order

    Returns:
        List of RedirectRule in the same order
    """
    return [RedirectRule(from_path=post.slug, to_path=canonical_path(post), permanent=True)
            for post in posts]


class RedirectPageRenderer:
    """Render static HTML stubs that send browsers on to a redirect's target."""

    def __init__(self, site_url=None, templates_dir=TEMPLATES_DIR):
        self.site_url = site_url
        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(['html']),
        )

    def target_url(self, rule):
        if self.site_url:
            return absolute_url(self.site_url, rule.to_path)
        return rule.to_path

    def render(self, rule):
        template = self.env.get_template('redirect.html')
        return template.render(target=self.target_url(rule), rule=rule)
