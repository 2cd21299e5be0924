"""Property-based tests for item normalization."""

from datetime import date

from hypothesis import given
from hypothesis import strategies as st

from cartoon_rss.models import ContentItem
from cartoon_rss.normalize import deduplicate, normalize, sort_by_date

items_strategy = st.lists(
    st.tuples(
        st.sampled_from(["a.jpg", "b.jpg", "c.jpg", "d.jpg", "e.jpg"]),
        st.dates(min_value=date(2000, 1, 1), max_value=date(2027, 12, 31)),
    ),
    max_size=30,
).map(
    lambda pairs: [
        ContentItem(
            url=f"https://www.evertkwok.nl/wp-content/uploads/{name}",
            title=f"Item {index}",
            description=f"Description number {index}",
            published_at=published,
            source_filename=name,
        )
        for index, (name, published) in enumerate(pairs)
    ]
)


class TestNormalizeProperties:
    """Property-based tests for deduplication and ordering."""

    @given(items_strategy)
    def test_each_url_appears_once(self, items):
        """Normalized output never repeats a URL."""
        result = normalize(items)

        urls = [item.url for item in result]
        assert len(urls) == len(set(urls))
        assert set(urls) == {item.url for item in items}

    @given(items_strategy)
    def test_first_seen_item_is_kept(self, items):
        """The first item for a URL wins."""
        first_seen = {}
        for item in items:
            first_seen.setdefault(item.url, item)

        for item in normalize(items):
            assert item is first_seen[item.url]

    @given(items_strategy)
    def test_sorted_newest_first(self, items):
        """Normalized output is ordered newest first."""
        result = normalize(items)

        for newer, older in zip(result, result[1:]):
            assert newer.published_at >= older.published_at

    @given(items_strategy)
    def test_ties_keep_discovery_order(self, items):
        """Items with the same date keep their discovery order."""
        unique = deduplicate(items)
        result = sort_by_date(unique)

        position = {id(item): index for index, item in enumerate(unique)}
        for newer, older in zip(result, result[1:]):
            if newer.published_at == older.published_at:
                assert position[id(newer)] < position[id(older)]

    def test_empty_input(self):
        """Normalizing nothing gives nothing."""
        assert normalize([]) == []
