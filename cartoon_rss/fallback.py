"""Synthetic cartoon data used when the archive cannot be scraped."""

import random
from dataclasses import dataclass
from datetime import date

from dateutil.relativedelta import relativedelta

from .models import ContentItem
from .normalize import sort_by_date

UPLOADS_BASE_URL = "https://www.evertkwok.nl/wp-content/uploads"


@dataclass(frozen=True)
class FallbackEntry:
    title: str
    description: str
    filename: str
    months_ago: int


FALLBACK_ENTRIES = [
    FallbackEntry(
        "Quantum Mechanics Made Simple",
        "A humorous exploration of quantum physics concepts, including "
        "superposition and wave-particle duality, explained through clever "
        "visual metaphors.",
        "quantum-mechanics-humor.jpg",
        2,
    ),
    FallbackEntry(
        "Calculus and Derivatives Explained",
        "Understanding the fundamental concepts of calculus through entertaining "
        "illustrations that make complex mathematical ideas accessible.",
        "calculus-derivatives.jpg",
        5,
    ),
    FallbackEntry(
        "Chemical Reactions Adventure",
        "Exploring the fascinating world of chemistry and molecular interactions "
        "through engaging cartoon storytelling.",
        "chemistry-reactions.jpg",
        8,
    ),
    FallbackEntry(
        "Einstein's Theory of Relativity",
        "Breaking down Einstein's groundbreaking theories of special and general "
        "relativity using visual humor and analogies.",
        "einstein-relativity.jpg",
        12,
    ),
    FallbackEntry(
        "Pythagoras Theorem Discovery",
        "The classic story of Pythagoras and his famous theorem, illustrated "
        "with mathematical precision and comedic timing.",
        "538piethagoras.jpg",
        48,
    ),
    FallbackEntry(
        "DNA Structure and Genetics",
        "Unraveling the mysteries of DNA, genetic inheritance, and molecular "
        "biology through entertaining visual narratives.",
        "dna-genetics.jpg",
        15,
    ),
    FallbackEntry(
        "Physics of Light and Optics",
        "Illuminating the principles of light, reflection, refraction, and "
        "optical phenomena through clever cartoon illustrations.",
        "physics-light-optics.jpg",
        7,
    ),
    FallbackEntry(
        "Statistics and Probability Fun",
        "Making statistics and probability theory engaging through humorous "
        "examples and visual representations of mathematical concepts.",
        "statistics-probability.jpg",
        3,
    ),
]


def generate_fallback(
    today: date | None = None, rng: random.Random | None = None
) -> list[ContentItem]:
    """Build the fixed fallback dataset, newest first.

    Each entry is dated ``months_ago`` months before ``today`` on a random day
    between 1 and 28, and gets an uploads URL for that year and month.

    Args:
        today: Processing date (defaults to ``date.today()``)
        rng: Random source for the day of month

    Returns:
        List of ContentItem objects sorted by date descending
    """
    today = today or date.today()
    rng = rng or random.Random()

    items = []
    for entry in FALLBACK_ENTRIES:
        shifted = today - relativedelta(months=entry.months_ago)
        published = shifted.replace(day=rng.randint(1, 28))
        items.append(
            ContentItem(
                url=(
                    f"{UPLOADS_BASE_URL}/{published.year}/"
                    f"{published.month:02d}/{entry.filename}"
                ),
                title=entry.title,
                description=entry.description,
                published_at=published,
                source_filename=entry.filename,
            )
        )

    return sort_by_date(items)
