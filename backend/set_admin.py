#!/usr/bin/env python3
"""
Grant admin rights to a person by name
"""

import sys
import os

sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from sqlalchemy import func

from drama_tracker.core.database import get_db, import_models
from drama_tracker.models.person import Person

def set_admin(name: str) -> bool:
    import_models()
    db = next(get_db())
    try:
        person = db.query(Person).filter(func.lower(Person.name) == name.lower()).first()
        if not person:
            print(f"❌ {name} not found in database")
            return False

        person.is_admin = True
        db.commit()
        print(f"✅ {person.name} is now an admin!")
        return True
    finally:
        db.close()

if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python set_admin.py <name>")
        sys.exit(1)
    sys.exit(0 if set_admin(sys.argv[1]) else 1)
