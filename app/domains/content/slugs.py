"""
Unique slug allocation for content collections.

The probe loop only proposes a candidate. The unique constraint on the
``slug`` column decides: when a write is rejected with :class:`SlugConflict`
the allocator continues with the next counter of the same sequence and tries
again, a bounded number of times.
"""

import secrets
from typing import Awaitable, Callable, Optional, Protocol, TypeVar

from slugify import slugify

from app.core.config import settings
from app.core.errors import InvalidTitle, SlugAllocationExhausted, SlugConflict
from app.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

FALLBACK_RANDOM = "random"
FALLBACK_NONE = "none"


class SlugStore(Protocol):
    async def slug_exists(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        ...


def normalize_title(title: str, max_length: int = 0) -> str:
    """
    Lowercase, hyphen-separated ASCII form of a title.

    Non-Latin scripts (Telugu included) are transliterated first, so they
    survive the stripping of non-word characters.

    Examples:
        >>> normalize_title("Hello, World!")
        'hello-world'
        >>> normalize_title("  Breaking --  News  ")
        'breaking-news'
    """
    return slugify(title, max_length=max_length, word_boundary=True, separator="-")


def candidate(base: str, counter: int) -> str:
    """``base`` for counter 0, ``base-N`` afterwards"""
    return base if counter == 0 else f"{base}-{counter}"


class SlugGenerator:
    """Allocates slugs unique within one collection"""

    def __init__(
        self,
        store: SlugStore,
        collection: str,
        max_length: int = settings.slug_max_length,
        max_attempts: int = settings.slug_max_attempts,
        fallback: str = settings.slug_fallback
    ):
        self.store = store
        self.collection = collection
        self.max_length = max_length
        self.max_attempts = max_attempts
        self.fallback = fallback

    def base_slug(self, title: Optional[str]) -> str:
        if not title or not title.strip():
            raise InvalidTitle("Title is required to build a slug")

        base = normalize_title(title, self.max_length)
        if base:
            return base

        if self.fallback != FALLBACK_RANDOM:
            raise InvalidTitle(f"Title has no characters usable in a slug: {title!r}")

        base = f"{self.collection}-{secrets.token_hex(4)}"
        logger.info("Slug fallback used", collection=self.collection, slug=base)
        return base

    async def allocate(self, title: str, exclude_id: Optional[int] = None) -> str:
        """First free slug for ``title`` at this moment; not reserved"""
        base = self.base_slug(title)
        counter = await self._first_free(base, 0, exclude_id)
        return candidate(base, counter)

    async def claim(
        self,
        title: str,
        persist: Callable[[str], Awaitable[T]],
        exclude_id: Optional[int] = None
    ) -> T:
        """
        Allocate a slug and persist it through ``persist``.

        ``persist`` must write the slug in a single all-or-nothing operation
        and raise :class:`SlugConflict` when the unique constraint rejects it.

        Args:
            title: Source title
            persist: Coroutine writing the record with the given slug
            exclude_id: Record being re-slugged, ignored while probing

        Returns:
            Whatever ``persist`` returned for the accepted slug

        Raises:
            InvalidTitle: Title cannot produce a slug
            SlugAllocationExhausted: Every attempt hit a conflict
        """
        base = self.base_slug(title)
        counter = await self._first_free(base, 0, exclude_id)

        for attempt in range(1, self.max_attempts + 1):
            slug = candidate(base, counter)
            try:
                result = await persist(slug)
            except SlugConflict:
                logger.warning(
                    "Slug taken by a concurrent writer",
                    collection=self.collection,
                    slug=slug,
                    attempt=attempt
                )
                counter = await self._first_free(base, counter + 1, exclude_id)
                continue

            logger.info("Slug allocated", collection=self.collection, slug=slug, attempts=attempt)
            return result

        logger.error("Slug allocation exhausted", collection=self.collection, base=base, attempts=self.max_attempts)
        raise SlugAllocationExhausted(
            f"Could not allocate a unique slug for {base!r} after {self.max_attempts} attempts"
        )

    async def _first_free(self, base: str, counter: int, exclude_id: Optional[int]) -> int:
        while await self.store.slug_exists(candidate(base, counter), exclude_id):
            counter += 1
        return counter
