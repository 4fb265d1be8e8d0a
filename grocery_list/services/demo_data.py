"""Fixture data for the demo snapshot database."""

import logging

from grocery_list.database import open_database
from grocery_list.models import Category, Entry, EntryHistory

logger = logging.getLogger(__name__)

# (category, [(name, quantity, notes), ...]) in display order
DEMO_LIST: list[tuple[str, list[tuple[str, str, str]]]] = [
    (
        "Produce",
        [
            ("Avocados", "3", ""),
            ("Baby spinach", "1 bag", ""),
            ("Cherry tomatoes", "1 pint", ""),
            ("Lemons", "4", ""),
        ],
    ),
    (
        "Dairy",
        [
            ("Milk", "1 gallon", ""),
            ("Greek yogurt", "32oz", "plain"),
            ("Butter", "1 lb", "unsalted"),
        ],
    ),
    (
        "Meat & Seafood",
        [
            ("Chicken breast", "2 lbs", ""),
            ("Salmon fillets", "1 lb", ""),
        ],
    ),
    (
        "Bakery",
        [
            ("Sourdough bread", "1 loaf", ""),
        ],
    ),
    (
        "Pantry",
        [
            ("Olive oil", "1 bottle", ""),
            ("Pasta", "1 lb", "penne"),
        ],
    ),
]

# Names only offered as suggestions ("chick" should autocomplete more than one)
DEMO_HISTORY = ["Chickpeas", "Chicken stock", "Coffee", "Eggs", "Bananas"]


def seed_demo_snapshot(database_url: str) -> int:
    """Replace the contents of the database at ``database_url`` with the demo list.

    Returns the number of entries written.
    """
    database = open_database(database_url)
    session = database.session()

    try:
        session.query(Entry).delete()
        session.query(Category).delete()
        session.query(EntryHistory).delete()

        count = 0
        for category_position, (category_name, entries) in enumerate(DEMO_LIST):
            category = Category(name=category_name, position=category_position)
            session.add(category)
            session.flush()

            for position, (name, quantity, notes) in enumerate(entries):
                session.add(
                    Entry(
                        name=name,
                        quantity=quantity,
                        notes=notes,
                        category_id=category.id,
                        position=position,
                    )
                )
                session.add(EntryHistory(normalized_name=name.lower(), name=name))
                count += 1

        for name in DEMO_HISTORY:
            session.add(EntryHistory(normalized_name=name.lower(), name=name))

        session.commit()
        logger.info(f"Seeded demo snapshot {database_url} with {count} entries")
        return count
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        database.dispose()
