"""Records passed between the stages of a build."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Post:
    """A single blog post as produced by the content loader."""
    slug: str
    title: str
    date: date
    excerpt: str = ''
    description: str = ''
    content: str = ''
    source_path: Optional[str] = None


@dataclass(frozen=True)
class PostLink:
    """The fields a page needs to link to a post.

    Pages and routes hold these copies instead of the loader's Post objects.
    """
    slug: str
    title: str
    path: str
    date: str
    excerpt: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'slug': self.slug,
            'title': self.title,
            'path': self.path,
            'date': self.date,
            'excerpt': self.excerpt,
        }


@dataclass(frozen=True)
class PostPage:
    """A post route together with its previous/next neighbours."""
    post: PostLink
    previous: Optional[PostLink] = None
    next: Optional[PostLink] = None


@dataclass(frozen=True)
class PageEntry:
    """One index page of the paginated post listing."""
    page_number: int
    num_pages: int
    posts: Tuple[PostLink, ...]
    is_first: bool
    is_last: bool
    skip: int
    limit: int

    @property
    def route(self) -> str:
        return index_page_route(self.page_number)

    @property
    def previous_route(self) -> Optional[str]:
        """Route of the page holding newer posts, None on the first page."""
        return None if self.is_first else index_page_route(self.page_number - 1)

    @property
    def next_route(self) -> Optional[str]:
        """Route of the page holding older posts, None on the last page."""
        return None if self.is_last else index_page_route(self.page_number + 1)


def index_page_route(page_number):
    return '/' if page_number == 1 else f'/{page_number}'


@dataclass(frozen=True)
class RedirectRule:
    from_path: str
    to_path: str
    permanent: bool = True

    def to_dict(self) -> Dict[str, Any]:
        # Key names follow the redirect manifest format hosts already consume.
        return {
            'fromPath': self.from_path,
            'toPath': self.to_path,
            'isPermanent': self.permanent,
        }


@dataclass(frozen=True)
class Route:
    path: str
    component: str
    context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {'path': self.path, 'component': self.component, 'context': self.context}


@dataclass
class SiteConfig:
    """Site-wide settings handed to a build at start."""
    content_dir: str = 'content/blog'
    output_dir: str = 'public'
    posts_per_page: int = 5
    site_title: Optional[str] = None
    site_description: Optional[str] = None
    site_url: Optional[str] = None
    author: Optional[str] = None
    redirect_pages: bool = True
    feed_limit: int = 20

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> 'SiteConfig':
        """
        Build a SiteConfig from a merged settings dictionary.

        Raises:
            ValueError: if a setting has the wrong type
        """
        site_url = _str_setting(settings, 'site_url')
        if site_url:
            site_url = site_url.rstrip('/')
        return cls(
            content_dir=_str_setting(settings, 'content', cls.content_dir),
            output_dir=_str_setting(settings, 'output', cls.output_dir),
            posts_per_page=_int_setting(settings, 'posts_per_page', cls.posts_per_page),
            site_title=_str_setting(settings, 'site_title'),
            site_description=_str_setting(settings, 'site_description'),
            site_url=site_url,
            author=_str_setting(settings, 'author'),
            redirect_pages=_bool_setting(settings, 'redirect_pages', cls.redirect_pages),
            feed_limit=_int_setting(settings, 'feed_limit', cls.feed_limit),
        )


def _str_setting(settings, key, default=None):
    value = settings.get(key, default)
    if value is None:
        if default is not None:
            raise ValueError(f"Setting '{key}' must not be empty")
        return None
    if not isinstance(value, str):
        raise ValueError(f"Setting '{key}' must be a string, got {value!r}")
    return value


def _int_setting(settings, key, default):
    value = settings.get(key, default)
    # bool is an int subclass; 'true' is not a page size
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Setting '{key}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Setting '{key}' must be an integer, got {value!r}") from None


def _bool_setting(settings, key, default):
    value = settings.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"Setting '{key}' must be true or false, got {value!r}")
    return value


@dataclass(frozen=True)
class BuildResult:
    """What a finished build produced."""
    routes: Tuple[Route, ...]
    redirects: Tuple[RedirectRule, ...]
    files: Tuple[str, ...]
    elapsed: float = 0.0
