"""Sample data generator and destructive reseed for the advocate directory.

Generates a deterministic set of advocates (same seed -> same rows) so that
tests and demos see stable data.  ``reseed_database()`` deletes every row in
the three directory tables and reinserts the generated set in a single
transaction.  It is not safe to run concurrently with itself; the HTTP
route serializes callers with RESEED_LOCK.
"""

import logging
import random
import sqlite3
import threading
from dataclasses import dataclass, field

from utils.config import KnownValues
from utils.database import batch_insert, init_schema, reset_tables

logger = logging.getLogger(__name__)

RESEED_LOCK = threading.Lock()

DEFAULT_SEED = 1729

FIRST_NAMES = (
    "Alice", "Amara", "Andre", "Beatriz", "Bob", "Caleb", "Cara", "Chen",
    "Dana", "Diego", "Elena", "Emeka", "Farah", "Felix", "Grace", "Hana",
    "Hugo", "Imani", "Isaac", "Jada", "Jonah", "Kai", "Keisha", "Leo",
    "Lucia", "Malik", "Maya", "Nadia", "Noah", "Olivia", "Omar", "Priya",
    "Quinn", "Rafael", "Rosa", "Samir", "Sofia", "Theo", "Uma", "Victor",
    "Wen", "Xavier", "Yara", "Zoe",
)

LAST_NAMES = (
    "Adams", "Alvarez", "Bennett", "Brooks", "Campbell", "Chen", "Diaz",
    "Evans", "Fischer", "Garcia", "Gupta", "Hall", "Hernandez", "Ito",
    "Jackson", "Jones", "Kim", "Kowalski", "Lee", "Lopez", "Martin",
    "Mensah", "Nguyen", "Novak", "Okafor", "Owens", "Patel", "Perez",
    "Quinn", "Reyes", "Rossi", "Sato", "Smith", "Sullivan", "Thompson",
    "Tran", "Usman", "Vargas", "Walker", "Williams", "Young", "Zhang",
)

CITIES = (
    "Atlanta", "Austin", "Boston", "Chicago", "Denver", "Houston",
    "Los Angeles", "Miami", "Minneapolis", "Nashville", "New York",
    "Philadelphia", "Phoenix", "Portland", "San Diego", "San Francisco",
    "Seattle", "Washington",
)


@dataclass
class SeedAdvocate:
    first_name: str
    last_name: str
    city: str
    degree: str
    years_of_experience: int
    phone_number: str
    specialties: list[str] = field(default_factory=list)


def generate_advocates(count: int, seed: int = DEFAULT_SEED) -> list[SeedAdvocate]:
    """Generate *count* advocates with 2-5 specialties each.

    Args:
        count: Number of advocates to generate.
        seed: Random seed; identical seeds produce identical data.

    Returns:
        List of SeedAdvocate records.
    """
    rng = random.Random(seed)
    advocates = []
    for _ in range(count):
        advocates.append(SeedAdvocate(
            first_name=rng.choice(FIRST_NAMES),
            last_name=rng.choice(LAST_NAMES),
            city=rng.choice(CITIES),
            degree=rng.choice(KnownValues.DEGREES),
            years_of_experience=rng.randint(1, 30),
            phone_number=str(rng.randint(2, 9)) + "".join(
                str(rng.randint(0, 9)) for _ in range(9)
            ),
            specialties=rng.sample(KnownValues.SPECIALTIES, rng.randint(2, 5)),
        ))
    return advocates


def insert_advocates(
    conn: sqlite3.Connection,
    advocates: list[SeedAdvocate],
    specialty_names: tuple[str, ...] | list[str] = KnownValues.SPECIALTIES,
) -> dict[str, int]:
    """Insert advocates, the specialty reference set and the join rows.

    Ids are assigned in insertion order starting at 1 when the tables are
    empty.  Does not commit.

    Returns:
        Row counts keyed by ``advocates``, ``specialties`` and
        ``advocateSpecialties``.
    """
    names = list(dict.fromkeys(
        list(specialty_names) + [n for a in advocates for n in a.specialties]
    ))
    batch_insert(conn, "INSERT INTO specialties (name) VALUES (?)",
                 [(n,) for n in names])
    specialty_ids = {
        r[1]: r[0] for r in conn.execute("SELECT id, name FROM specialties")
    }

    links: list[tuple[int, int]] = []
    for adv in advocates:
        cur = conn.execute(
            "INSERT INTO advocates (first_name, last_name, city, degree, "
            "years_of_experience, phone_number) VALUES (?, ?, ?, ?, ?, ?)",
            (adv.first_name, adv.last_name, adv.city, adv.degree,
             adv.years_of_experience, adv.phone_number),
        )
        for name in dict.fromkeys(adv.specialties):
            links.append((cur.lastrowid, specialty_ids[name]))

    batch_insert(
        conn,
        "INSERT INTO advocate_specialties (advocate_id, specialty_id) VALUES (?, ?)",
        links,
    )
    return {
        "advocates": len(advocates),
        "specialties": len(names),
        "advocateSpecialties": len(links),
    }


def reseed_database(
    conn: sqlite3.Connection,
    count: int,
    seed: int = DEFAULT_SEED,
    advocates: list[SeedAdvocate] | None = None,
) -> dict[str, int]:
    """Clear all directory tables and repopulate them in one transaction.

    Args:
        conn: Read-write SQLite connection.
        count: Number of advocates to generate (ignored if *advocates* given).
        seed: Random seed for the generator.
        advocates: Explicit records to insert instead of generated ones.

    Returns:
        Row counts as returned by insert_advocates().
    """
    init_schema(conn)
    records = advocates if advocates is not None else generate_advocates(count, seed)
    try:
        reset_tables(conn)
        counts = insert_advocates(conn, records)
        conn.commit()
    except sqlite3.Error:
        conn.rollback()
        logger.exception("Reseed failed; changes rolled back")
        raise
    logger.info(
        "Reseeded directory: advocates=%d specialties=%d links=%d",
        counts["advocates"], counts["specialties"], counts["advocateSpecialties"],
    )
    return counts
