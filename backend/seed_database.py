#!/usr/bin/env python3
"""
Seed script - creates the initial friend group and a few sample dramas
"""

import sys
import os
import asyncio

# Make the backend package importable when run from anywhere
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from sqlalchemy import func

from drama_tracker.core.database import get_db, init_db
from drama_tracker.core.security import hash_password
from drama_tracker.models.person import Person
from drama_tracker.models.drama import Drama

FRIEND_NAMES = ["Lowri", "Emma", "Melissa", "Grace", "Ella", "Sofia"]

# (title, details, participant names)
SAMPLE_DRAMAS = [
    (
        "WhatsApp chat blew up",
        "Someone sent a controversial message in the group chat and things escalated quickly.",
        ["Lowri", "Emma", "Melissa"],
    ),
    (
        "Birthday party planning disaster",
        "Nobody could agree on a date or venue. Arguments ensued.",
        ["Grace", "Ella"],
    ),
    (
        "Coffee shop incident",
        "An awkward encounter at Starbucks led to a full-blown disagreement about who said what.",
        ["Emma", "Sofia"],
    ),
]

async def seed(default_password: str):
    """Create missing friends and, on an empty database, the sample dramas"""
    print("🌱 Starting seed...")
    await init_db()

    db = next(get_db())
    try:
        friends = {}
        for name in FRIEND_NAMES:
            person = db.query(Person).filter(func.lower(Person.name) == name.lower()).first()
            if not person:
                person = Person(name=name, password_hash=hash_password(default_password))
                db.add(person)
                print(f"  + {name}")
            friends[name] = person
        db.commit()
        print(f"✅ {len(friends)} friends ready")

        if db.query(Drama).count() > 0:
            print("✅ Dramas already present, skipping sample dramas")
            return

        for title, details, names in SAMPLE_DRAMAS:
            db.add(Drama(
                title=title,
                details=details,
                participants=[friends[n] for n in names],
            ))
        db.commit()
        print(f"✅ Created {len(SAMPLE_DRAMAS)} sample dramas")

    except Exception as e:
        print(f"❌ Seed failed: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    password = sys.argv[1] if len(sys.argv) > 1 else "drama"
    asyncio.run(seed(password))
    print("🎉 Seed complete!")
