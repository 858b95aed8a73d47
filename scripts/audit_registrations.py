"""Data integrity audit: compare what was written with what the admin view shows."""
import sys
from datetime import datetime
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlmodel import Session
from metaclub.database import engine, create_db_and_tables
from metaclub.services.audit import audit_registrations


def main() -> int:
    create_db_and_tables()
    with Session(engine) as db:
        report = audit_registrations(db)

    print("Starting Data Integrity Audit...")
    print(f"Timestamp: {datetime.utcnow().isoformat()}")

    print("\n--- Database Status ---")
    print(f"Total Teams: {report.total_teams}")
    print(f"Total Participants: {report.total_participants}")

    print("\n--- Admin View Status ---")
    print(f"Records Displayed: {report.admin_view_rows}")

    print("\n--- Integrity Analysis ---")
    if report.counts_match:
        print("[PASS] Data Completeness (Counts Match)")
    else:
        print("[FAIL] COUNT MISMATCH")
        print(f"DB Participants ({report.total_participants}) != Admin View ({report.admin_view_rows}).")

    checks = [
        ("Orphaned participants", report.orphaned_participants),
        ("Participants without ticket id", report.missing_ticket_ids),
        ("Participants without registration number", report.missing_registration_numbers),
        ("Teams whose total differs from participant amounts", report.amount_mismatches),
    ]
    for label, ids in checks:
        if ids:
            print(f"[FAIL] {label}: {ids}")
        else:
            print(f"[PASS] {label}: none")

    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
