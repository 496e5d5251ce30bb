"""
Database seeding for the Library System API.

Two kinds of rows are seeded:
- The default membership plans, which the API only reads
- Optional demo data (authors, books, members) generated with Faker so a
  fresh install has something to browse

Generation is deterministic for a given seed.
"""

import logging
import random
from datetime import timedelta

from faker import Faker
from sqlalchemy import select
from sqlalchemy.orm import Session

from .schema import Author, Book, Member, MembershipType

logger = logging.getLogger(__name__)

fake = Faker()

DEFAULT_MEMBERSHIP_TYPES = [
    {"name": "Monthly", "duration_days": 30, "fees": 5.0},
    {"name": "Quarterly", "duration_days": 90, "fees": 12.0},
    {"name": "Annual", "duration_days": 365, "fees": 40.0},
]

GENRES = [
    "Fiction",
    "Mystery",
    "Science Fiction",
    "Fantasy",
    "Biography",
    "History",
    "Poetry",
    "Children",
]

LANGUAGES = ["English", "Arabic", "French", "Spanish"]


def generate_isbn13(rng: random.Random) -> str:
    """Generate a valid ISBN-13 number."""
    body = "978" + "".join(str(rng.randint(0, 9)) for _ in range(9))
    total = sum(int(digit) * (3 if i % 2 else 1) for i, digit in enumerate(body))
    check_digit = (10 - (total % 10)) % 10
    return f"{body}{check_digit}"


def seed_membership_types(session: Session) -> int:
    """
    Insert the default membership plans that are not present yet.

    Returns:
        Number of plans inserted
    """
    existing = set(session.execute(select(MembershipType.name)).scalars().all())
    missing = [plan for plan in DEFAULT_MEMBERSHIP_TYPES if plan["name"] not in existing]

    session.add_all(MembershipType(**plan) for plan in missing)
    session.flush()

    logger.info("Seeded %d membership types", len(missing))
    return len(missing)


def seed_sample_data(
    session: Session,
    authors: int = 10,
    books: int = 40,
    members: int = 20,
    seed: int = 42,
) -> dict[str, int]:
    """
    Generate demo authors, books and members.

    Membership types are seeded first when missing, since every member needs
    one.

    Returns:
        Count of generated rows per table
    """
    Faker.seed(seed)
    rng = random.Random(seed)

    seed_membership_types(session)
    plans = session.execute(select(MembershipType)).scalars().all()

    author_rows = []
    seen_names = set(
        session.execute(select(Author.first_name, Author.last_name)).tuples().all()
    )
    while len(author_rows) < authors:
        name = (fake.first_name(), fake.last_name())
        if name in seen_names:
            continue
        seen_names.add(name)
        author_rows.append(Author(first_name=name[0], last_name=name[1]))
    session.add_all(author_rows)
    session.flush()

    book_rows = [
        Book(
            title=fake.catch_phrase().title(),
            genre=rng.choice(GENRES),
            isbn=generate_isbn13(rng),
            condition=1 if rng.random() > 0.1 else 2,
            publication_date=fake.date_between(start_date="-60y", end_date="-1y"),
            availability_status=1,
            language=rng.choice(LANGUAGES),
            author_id=rng.choice(author_rows).author_id,
        )
        for _ in range(books)
    ]
    session.add_all(book_rows)

    member_rows = []
    for _ in range(members):
        plan = rng.choice(plans)
        start_date = fake.date_between(start_date="-1y", end_date="today")
        member_rows.append(
            Member(
                first_name=fake.first_name(),
                second_name=fake.first_name(),
                third_name=fake.first_name() if rng.random() > 0.5 else None,
                last_name=fake.last_name(),
                date_of_birth=fake.date_of_birth(minimum_age=12, maximum_age=80),
                address=fake.address().replace("\n", ", ")[:200],
                phone=fake.numerify("07########"),
                email=fake.email() if rng.random() > 0.2 else None,
                membership_type_id=plan.membership_type_id,
                start_date=start_date,
                expiry_date=start_date + timedelta(days=plan.duration_days),
                is_cancelled=False,
            )
        )
    session.add_all(member_rows)
    session.flush()

    counts = {"authors": len(author_rows), "books": len(book_rows), "members": len(member_rows)}
    logger.info(
        "Seeded sample data: %(authors)d authors, %(books)d books, %(members)d members", counts
    )
    return counts

