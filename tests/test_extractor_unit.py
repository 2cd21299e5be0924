"""Unit tests for candidate image extraction."""

from cartoon_rss.extractor import (
    CandidateExtractor,
    is_valid_content_url,
    parse_html,
)

BASE_URL = "https://www.evertkwok.nl/cartoon/"


class TestCandidateExtractorUnit:
    """Unit tests for CandidateExtractor."""

    def test_resolves_relative_sources(self):
        """Relative image sources are resolved against the page URL."""
        html = '<div><img src="/wp-content/uploads/2024/05/atoms.jpg"></div>'

        candidates = CandidateExtractor().extract(html, BASE_URL)

        assert [c.resolved_url for c in candidates] == [
            "https://www.evertkwok.nl/wp-content/uploads/2024/05/atoms.jpg"
        ]
        assert candidates[0].element.name == "img"

    def test_relative_and_absolute_forms_are_deduplicated(self):
        html = """
        <article>
          <img src="/wp-content/uploads/2024/05/atoms.jpg" alt="first">
          <figure>
            <img src="https://www.evertkwok.nl/wp-content/uploads/2024/05/atoms.jpg" alt="second">
          </figure>
          <img src="../wp-content/uploads/2024/05/atoms.jpg" alt="third">
        </article>
        """

        candidates = CandidateExtractor().extract(html, BASE_URL)

        assert len(candidates) == 1
        assert candidates[0].element["alt"] == "first"

    def test_skips_images_outside_uploads(self):
        html = """
        <article>
          <img src="/images/cartoon.jpg">
          <img>
          <img src="https://cdn.example.com/wp-content/uploads/2024/01/real.jpg">
        </article>
        """

        candidates = CandidateExtractor().extract(html, BASE_URL)

        assert [c.resolved_url for c in candidates] == [
            "https://cdn.example.com/wp-content/uploads/2024/01/real.jpg"
        ]

    def test_skips_deny_listed_images(self):
        html = """
        <div class="entry-content">
          <img src="/wp-content/uploads/2024/01/site-logo.png">
          <img src="/wp-content/uploads/2024/01/cartoon-150x150.jpg">
          <img src="/wp-content/uploads/2024/01/Header-Banner.jpg">
          <img src="/wp-content/themes/kwok/wp-content/uploads/fake.jpg">
          <img src="/wp-content/uploads/2024/01/gravity.jpg">
        </div>
        """

        candidates = CandidateExtractor().extract(html, BASE_URL)

        assert [c.resolved_url for c in candidates] == [
            "https://www.evertkwok.nl/wp-content/uploads/2024/01/gravity.jpg"
        ]

    def test_later_selectors_add_missed_images(self):
        """Each selector contributes images the earlier ones missed."""
        extractor = CandidateExtractor(
            selectors=[".gallery img", "figure img"],
        )
        html = """
        <figure><img src="/wp-content/uploads/2024/02/from-figure.jpg"></figure>
        <div class="gallery"><img src="/wp-content/uploads/2024/02/from-gallery.jpg"></div>
        """

        candidates = extractor.extract(html, BASE_URL)

        # Selector order first, then document order
        assert [c.resolved_url.rsplit("/", 1)[-1] for c in candidates] == [
            "from-gallery.jpg",
            "from-figure.jpg",
        ]

    def test_accepts_parsed_document(self):
        """An already parsed BeautifulSoup document is accepted."""
        soup = parse_html('<img src="/wp-content/uploads/2023/03/x.jpg">')

        candidates = CandidateExtractor().extract(soup, BASE_URL)

        assert len(candidates) == 1

    def test_empty_page_yields_no_candidates(self):
        """A page without images gives no candidates."""
        assert CandidateExtractor().extract("", BASE_URL) == []

    def test_is_valid_content_url(self):
        """Thumbnails and site chrome are rejected by the deny-list."""
        assert is_valid_content_url(
            "https://www.evertkwok.nl/wp-content/uploads/2024/01/gravity.jpg"
        )
        assert not is_valid_content_url("https://x/wp-content/uploads/ICON.png")
        assert not is_valid_content_url("https://x/wp-content/uploads/a-300x300.png")
        assert not is_valid_content_url("https://x/wp-content/plugins/a.png")
