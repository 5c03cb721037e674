"""Demo data for an empty BookStore database: three authors, four books, five reviews."""

import logging

from sqlalchemy import func, select

from graphql_demos.bookstore.domain_types import BookStatus
from graphql_demos.bookstore.models import Author, Book, Review
from graphql_demos.common.database import DatabaseSessionManager

logger = logging.getLogger(__name__)

AUTHORS = [
    ("author-1", "George Orwell",
     "English novelist and essayist, known for his critical commentary on political systems."),
    ("author-2", "Jane Austen",
     "English novelist known for her romance novels set among the landed gentry."),
    ("author-3", "Isaac Asimov",
     "American writer and professor of biochemistry, best known for science fiction works."),
]

BOOKS = [
    ("book-1", "1984",
     "A dystopian novel set in Airstrip One, a province of the superstate Oceania.",
     "978-0451524935", 1949, "author-1"),
    ("book-2", "Animal Farm",
     "An allegorical novella reflecting events leading up to the Russian Revolution.",
     "978-0451526342", 1945, "author-1"),
    ("book-3", "Pride and Prejudice",
     "A romantic novel that charts the emotional development of protagonist Elizabeth Bennet.",
     "978-0141439518", 1813, "author-2"),
    ("book-4", "Foundation",
     "The story of a mathematician who plans to preserve knowledge during a galactic dark age.",
     "978-0553293357", 1951, "author-3"),
]

REVIEWS = [
    ("review-1", "book-1", "A masterpiece of dystopian fiction",
     "Orwell's vision of a totalitarian future is chillingly prescient. A must-read.",
     5, "BookLover42"),
    ("review-2", "book-1", "Thought-provoking",
     "Makes you question the nature of truth and freedom in modern society.",
     4, "CriticalReader"),
    ("review-3", "book-2", "Brilliant allegory",
     "Simple on the surface but deeply meaningful. The animals bring history to life.",
     5, "HistoryBuff"),
    ("review-4", "book-3", "Timeless romance",
     "Elizabeth Bennet remains one of literature's greatest heroines.",
     5, "RomanceReader"),
    ("review-5", "book-4", "Epic sci-fi",
     "The scope of Asimov's imagination is breathtaking. Foundation laid the groundwork for modern sci-fi.",
     5, "SciFiFan"),
]


async def seed_demo_data(manager: DatabaseSessionManager) -> bool:
    """Insert the demo catalogue when the authors table is empty. Returns True if seeded."""
    async with manager.session() as db:
        existing = await db.scalar(select(func.count()).select_from(Author))
        if existing:
            return False

        db.add_all(
            Author(id=id_, name=name, biography=bio) for id_, name, bio in AUTHORS
        )
        await db.flush()
        db.add_all(
            Book(
                id=id_, title=title, description=description, isbn=isbn,
                published_year=year, status=BookStatus.PUBLISHED.value, author_id=author_id,
            )
            for id_, title, description, isbn, year, author_id in BOOKS
        )
        await db.flush()
        db.add_all(
            Review(
                id=id_, book_id=book_id, title=title, content=content,
                rating=rating, reviewer_name=reviewer,
            )
            for id_, book_id, title, content, rating, reviewer in REVIEWS
        )
        await db.commit()

    logger.info(
        f"Seeded BookStore demo data: {len(AUTHORS)} authors, "
        f"{len(BOOKS)} books, {len(REVIEWS)} reviews"
    )
    return True
