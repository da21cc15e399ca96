#!/usr/bin/env python3
"""
Seed the course catalog (creates missing tables first).
Run from the project root: python -m scripts.seed_courses [--reset]
or: PYTHONPATH=. python scripts/seed_courses.py [--reset]
--reset deletes all courses before inserting the defaults.
"""
import argparse
import os
import sys

# project root on PYTHONPATH
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.logging import configure_logging
from app.db.base import Base, import_models
from app.db.session import SessionLocal, engine
from app.services.courses.service import CourseService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the default course catalog")
    parser.add_argument("--reset", action="store_true", help="delete existing courses first")
    args = parser.parse_args(argv)

    configure_logging()
    import_models()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        inserted = CourseService(db).seed_default_courses(reset=args.reset)
        print(f"Inserted {inserted} courses.")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
