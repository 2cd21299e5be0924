"""Property-based tests for the fallback dataset."""

import random
import re
from datetime import date

from hypothesis import given
from hypothesis import strategies as st

from cartoon_rss.extractor import UPLOADS_MARKER, is_valid_content_url
from cartoon_rss.fallback import FALLBACK_ENTRIES, generate_fallback
from cartoon_rss.inference import match_date

URL_SHAPE = re.compile(
    r"^https://www\.evertkwok\.nl/wp-content/uploads/(\d{4})/(\d{2})/[\w.-]+$"
)


class TestFallbackProperties:
    """Property-based tests for generate_fallback."""

    @given(
        st.dates(min_value=date(2005, 1, 1), max_value=date(2090, 12, 31)),
        st.integers(min_value=0, max_value=2**32 - 1),
    )
    def test_fallback_items_are_valid(self, today, seed):
        """Fallback items have well-formed upload URLs matching their dates."""
        items = generate_fallback(today=today, rng=random.Random(seed))

        assert len(items) == len(FALLBACK_ENTRIES) == 8
        for item in items:
            assert 2000 <= item.published_at.year <= today.year + 1
            assert 1 <= item.published_at.day <= 28

            match = URL_SHAPE.match(item.url)
            assert match, item.url
            assert int(match.group(1)) == item.published_at.year
            assert int(match.group(2)) == item.published_at.month
            assert UPLOADS_MARKER in item.url
            assert is_valid_content_url(item.url)
            assert item.url.endswith("/" + item.source_filename)

            # The URL reads back as the first of the publication month
            assert match_date(item.url, today) == item.published_at.replace(day=1)

    @given(
        st.dates(min_value=date(2005, 1, 1), max_value=date(2090, 12, 31)),
        st.integers(min_value=0, max_value=2**32 - 1),
    )
    def test_fallback_sorted_newest_first(self, today, seed):
        """Fallback items come back newest first."""
        items = generate_fallback(today=today, rng=random.Random(seed))

        for newer, older in zip(items, items[1:]):
            assert newer.published_at >= older.published_at

    def test_months_ago_offsets(self):
        """Each fallback entry lands the configured number of months back."""
        items = generate_fallback(today=date(2026, 10, 19), rng=random.Random(1))

        months = sorted(
            (item.published_at.year, item.published_at.month) for item in items
        )
        assert months == [
            (2022, 10),
            (2025, 7),
            (2025, 10),
            (2026, 2),
            (2026, 3),
            (2026, 5),
            (2026, 7),
            (2026, 8),
        ]

    def test_unique_urls(self):
        """Fallback URLs never collide."""
        items = generate_fallback(today=date(2026, 10, 19))

        assert len({item.url for item in items}) == len(items)
