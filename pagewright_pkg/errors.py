"""
Exceptions raised by the Pagewright build pipeline.

Every error here is fatal to a build: nothing is published once one is raised.
"""


class PagewrightError(Exception):
    """Base class for all Pagewright build errors."""


class ContentLoadError(PagewrightError):
    """Raised when a content file cannot be turned into a post."""

    def __init__(self, message, path=None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class DuplicateSlugError(ContentLoadError):
    """Raised when two content files resolve to the same slug."""

    def __init__(self, slug, first_path, second_path):
        self.slug = slug
        self.first_path = first_path
        super().__init__(f"slug '{slug}' already used by {first_path}", path=second_path)
