"""
Pagewright - plans the pages and redirects of a markdown blog.

Pagewright reads markdown posts with YAML front matter, gives each a slug
derived from its file path and a canonical dated URL, and produces the route
table (post pages with previous/next links, paginated index pages) and the
permanent redirect table a renderer and a static host need.
"""

__version__ = "1.0.0"

from .core import Pagewright
from .models import SiteConfig

__all__ = ['Pagewright', 'SiteConfig']
