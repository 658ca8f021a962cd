"""
Page planning: ordering posts, linking neighbours and paginating the index.

Everything in this module is a pure transform over in-memory posts.
"""

import math

from .models import PageEntry, PostLink, PostPage, Route
from .paths import canonical_path

DEFAULT_PAGE_SIZE = 5


def sort_posts(posts):
    """Newest first. sorted() is stable, so posts sharing a date keep their input order."""
    return sorted(posts, key=lambda p: p.date, reverse=True)


def post_link(post):
    """Copy the fields a link to `post` needs."""
    return PostLink(
        slug=post.slug,
        title=post.title,
        path=canonical_path(post),
        date=post.date.isoformat(),
        excerpt=post.excerpt or post.description,
    )


def plan_post_pages(sorted_posts):
    """
    Pair every post with its neighbours.

    `next` points at the newer post and `previous` at the older one, so a reader
    moves forward in time by following `next`.

    Args:
        sorted_posts: Posts ordered newest first

    Returns:
        List of PostPage in the same order
    """
    links = [post_link(post) for post in sorted_posts]
    last = len(links) - 1
    pages = []
    for index, link in enumerate(links):
        pages.append(PostPage(
            post=link,
            previous=links[index + 1] if index < last else None,
            next=links[index - 1] if index > 0 else None,
        ))
    return pages


def count_pages(total_posts, page_size=DEFAULT_PAGE_SIZE):
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")
    return math.ceil(total_posts / page_size)


def plan_index_pages(sorted_posts, page_size=DEFAULT_PAGE_SIZE):
    """
    Split the sorted posts into fixed-size index pages.

    Page k (1-based) holds posts (k-1)*page_size up to min(N, k*page_size)-1.
    No posts means no index pages.
    """
    num_pages = count_pages(len(sorted_posts), page_size)
    links = [post_link(post) for post in sorted_posts]
    pages = []
    for page_number in range(1, num_pages + 1):
        skip = (page_number - 1) * page_size
        pages.append(PageEntry(
            page_number=page_number,
            num_pages=num_pages,
            posts=tuple(links[skip:skip + page_size]),
            is_first=page_number == 1,
            is_last=page_number == num_pages,
            skip=skip,
            limit=page_size,
        ))
    return pages


def post_route(post_page):
    return Route(
        path=post_page.post.path,
        component='post',
        context={
            'slug': post_page.post.slug,
            'previous': post_page.previous.to_dict() if post_page.previous else None,
            'next': post_page.next.to_dict() if post_page.next else None,
        },
    )


def index_route(page):
    return Route(
        path=page.route,
        component='index',
        context={
            'posts': [link.to_dict() for link in page.posts],
            'page_number': page.page_number,
            'num_pages': page.num_pages,
            'is_first': page.is_first,
            'is_last': page.is_last,
            'previous_page': page.previous_route,
            'next_page': page.next_route,
            'skip': page.skip,
            'limit': page.limit,
        },
    )


class PagePlan:
    """The complete set of pages for one build."""

    def __init__(self, posts, page_size=DEFAULT_PAGE_SIZE):
        self.page_size = page_size
        self.posts = sort_posts(posts)
        self.post_pages = plan_post_pages(self.posts)
        self.index_pages = plan_index_pages(self.posts, page_size)

    @property
    def num_pages(self):
        return len(self.index_pages)

    def routes(self):
        """Post routes in planned order followed by index routes."""
        return ([post_route(page) for page in self.post_pages]
                + [index_route(page) for page in self.index_pages])
