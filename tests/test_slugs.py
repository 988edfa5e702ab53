"""Tests for slug normalization and allocation."""

import asyncio
import re

import pytest

from app.core.errors import InvalidTitle, SlugAllocationExhausted, SlugConflict, StoreUnavailable
from app.domains.content.slugs import SlugGenerator, candidate, normalize_title

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


class MemorySlugStore:
    """Slug -> owner id; persisting yields to the loop so writers can interleave."""

    def __init__(self, taken: dict = None):
        self.slugs = dict(taken or {})
        self.writes = 0

    async def slug_exists(self, slug: str, exclude_id: int = None) -> bool:
        owner = self.slugs.get(slug)
        return owner is not None and owner != exclude_id

    async def persist(self, slug: str) -> str:
        self.writes += 1
        await asyncio.sleep(0)
        if slug in self.slugs:
            raise SlugConflict(slug)
        self.slugs[slug] = len(self.slugs) + 1000
        return slug


class TestNormalizeTitle:
    """Test title to base slug normalization."""

    def test_basic_title(self) -> None:
        """Test words are lowercased and joined by hyphens."""
        assert normalize_title("Hello World") == "hello-world"

    def test_punctuation_and_whitespace(self) -> None:
        """Test punctuation is dropped and whitespace runs collapse."""
        assert normalize_title("  Hello,   World!! ") == "hello-world"

    def test_repeated_and_edge_hyphens(self) -> None:
        """Test repeated hyphens collapse and edge hyphens are trimmed."""
        assert normalize_title("--Breaking -- News--") == "breaking-news"

    def test_telugu_title_is_transliterated(self) -> None:
        """Test a Telugu-only title still yields a usable slug."""
        slug = normalize_title("తెలుగు వార్తలు")
        assert slug
        assert SLUG_PATTERN.match(slug)

    def test_max_length_cuts_on_word_boundary(self) -> None:
        """Test truncation keeps whole words and no trailing hyphen."""
        slug = normalize_title("word " * 40, max_length=20)
        assert 0 < len(slug) <= 20
        assert not slug.endswith("-")
        assert all(part == "word" for part in slug.split("-"))

    def test_only_punctuation(self) -> None:
        """Test a title without word characters normalizes to nothing."""
        assert normalize_title("!!! ??? ...") == ""

    def test_candidate_suffix(self) -> None:
        """Test counter zero is the bare base."""
        assert candidate("hello", 0) == "hello"
        assert candidate("hello", 3) == "hello-3"


class TestAllocate:
    """Test probing for the first free slug."""

    @pytest.mark.asyncio
    async def test_free_base(self) -> None:
        """Test the base is returned when nothing collides."""
        generator = SlugGenerator(MemorySlugStore(), "news")
        assert await generator.allocate("Hello World") == "hello-world"

    @pytest.mark.asyncio
    async def test_counter_suffixes(self) -> None:
        """Test collisions move on to -1, then -2."""
        store = MemorySlugStore({"hello-world": 1})
        generator = SlugGenerator(store, "news")
        assert await generator.allocate("Hello World") == "hello-world-1"

        store.slugs["hello-world-1"] = 2
        assert await generator.allocate("Hello World") == "hello-world-2"

    @pytest.mark.asyncio
    async def test_excluded_item_keeps_its_slug(self) -> None:
        """Test re-slugging an item ignores its own current slug."""
        generator = SlugGenerator(MemorySlugStore({"hello-world": 7}), "news")
        assert await generator.allocate("Hello World", exclude_id=7) == "hello-world"
        assert await generator.allocate("Hello World", exclude_id=8) == "hello-world-1"

    @pytest.mark.asyncio
    async def test_result_matches_slug_pattern(self) -> None:
        """Test allocated slugs are always URL-safe."""
        generator = SlugGenerator(MemorySlugStore(), "news")
        for title in ["Hello World", "Top 10: Movies (2024)!", "Ça va? Naïve café", "సినిమా"]:
            assert SLUG_PATTERN.match(await generator.allocate(title))

    @pytest.mark.asyncio
    async def test_random_fallback(self) -> None:
        """Test an unusable title falls back to collection plus random hex."""
        generator = SlugGenerator(MemorySlugStore(), "gallery", fallback="random")
        slug = await generator.allocate("!!!")
        assert re.match(r"^gallery-[0-9a-f]{8}$", slug)

    @pytest.mark.asyncio
    async def test_no_fallback_rejects(self) -> None:
        """Test an unusable title is rejected when no fallback is configured."""
        generator = SlugGenerator(MemorySlugStore(), "news", fallback="none")
        with pytest.raises(InvalidTitle):
            await generator.allocate("!!!")

    @pytest.mark.asyncio
    async def test_blank_title_rejected(self) -> None:
        """Test a blank title is rejected even with the random fallback."""
        generator = SlugGenerator(MemorySlugStore(), "news", fallback="random")
        for title in ["", "   ", None]:
            with pytest.raises(InvalidTitle):
                await generator.allocate(title)


class TestClaim:
    """Test the compensating retry loop around persistence."""

    @pytest.mark.asyncio
    async def test_conflict_moves_to_next_counter(self) -> None:
        """Test a conflict continues the sequence instead of restarting at the base."""

        class StaleStore(MemorySlugStore):
            async def slug_exists(self, slug, exclude_id=None):
                return False

        store = StaleStore({"hello-world": 1, "hello-world-1": 2})
        generator = SlugGenerator(store, "news", max_attempts=5)

        assert await generator.claim("Hello World", store.persist) == "hello-world-2"
        assert store.writes == 3

    @pytest.mark.asyncio
    async def test_exhausted_after_max_attempts(self) -> None:
        """Test persistent conflicts stop after the configured number of attempts."""
        calls = []

        async def always_conflicts(slug):
            calls.append(slug)
            raise SlugConflict(slug)

        generator = SlugGenerator(MemorySlugStore(), "news", max_attempts=3)
        with pytest.raises(SlugAllocationExhausted):
            await generator.claim("Hello World", always_conflicts)

        assert calls == ["hello-world", "hello-world-1", "hello-world-2"]

    @pytest.mark.asyncio
    async def test_store_failure_is_not_retried(self) -> None:
        """Test I/O failures propagate on the first attempt."""
        calls = []

        async def unavailable(slug):
            calls.append(slug)
            raise StoreUnavailable("down")

        generator = SlugGenerator(MemorySlugStore(), "news")
        with pytest.raises(StoreUnavailable):
            await generator.claim("Hello World", unavailable)

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_concurrent_claims_are_distinct(self) -> None:
        """Test concurrent writers with the same title end up with distinct slugs."""
        store = MemorySlugStore()
        generator = SlugGenerator(store, "news", max_attempts=10)

        slugs = await asyncio.gather(*[
            generator.claim("Hello World", store.persist) for _ in range(5)
        ])

        assert len(set(slugs)) == 5
        assert set(slugs) == {"hello-world"} | {f"hello-world-{n}" for n in range(1, 5)}
