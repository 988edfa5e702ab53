"""Error taxonomy shared by the slug, pagination and content layers."""

from fastapi import status


class NewsDeskError(Exception):
    """Base error; carries the HTTP status the API layer answers with."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTitle(NewsDeskError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class SlugAllocationExhausted(NewsDeskError):
    status_code = status.HTTP_409_CONFLICT


class InvalidCursor(NewsDeskError):
    pass


class InvalidLimit(NewsDeskError):
    pass


class InvalidPage(NewsDeskError):
    pass


class InvalidFilter(NewsDeskError):
    pass


class InvalidContent(NewsDeskError):
    """A write broke a store constraint other than the slug."""


class NotFound(NewsDeskError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreUnavailable(NewsDeskError):
    """Underlying store I/O failed; the caller may retry the request."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class SlugConflict(Exception):
    """Raised by repositories when the slug unique constraint rejects a write."""

    def __init__(self, slug: str):
        super().__init__(f"Slug already taken: {slug}")
        self.slug = slug
