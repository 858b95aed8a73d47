"""Delete uploaded screenshots that no team references."""
import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlmodel import Session
from metaclub.database import engine, create_db_and_tables
from metaclub.logging_config import setup_logging
from metaclub.services.storage import UploadStore, sweep_orphan_uploads


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--dry-run", action="store_true", help="list orphans without deleting them")
    args = parser.parse_args()

    setup_logging()
    create_db_and_tables()
    with Session(engine) as db:
        orphans = sweep_orphan_uploads(db, UploadStore(), dry_run=args.dry_run)

    action = "Found" if args.dry_run else "Removed"
    print(f"{action} {len(orphans)} orphaned upload(s)")


if __name__ == "__main__":
    main()
