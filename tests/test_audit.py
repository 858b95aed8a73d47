from metaclub.models import Participant
from metaclub.services.audit import audit_registrations
from tests.factories import make_member

TEAM_UPDATE = {"name": "Edited", "type": "Duo", "total_amount": 999, "transaction_id": "UPI-1"}


def test_clean_database_passes(register, session):
    register("Duo")
    register("Solo", [make_member("Carol", role="Both")])

    report = audit_registrations(session)

    assert report.total_teams == 2
    assert report.total_participants == 3
    assert report.admin_view_rows == 3
    assert report.ok


def test_admin_total_override_is_flagged(admin_client, register, session):
    data = register("Duo")
    admin_client.put(f"/api/admin/teams/{data['teamId']}", json=TEAM_UPDATE)

    report = audit_registrations(session)

    assert report.amount_mismatches == [data["teamId"]]
    assert not report.ok


def test_orphans_and_missing_fields_are_flagged(session):
    orphan = Participant(team_id=404, name="Ghost", email="ghost@example.com", role="Developer")
    session.add(orphan)
    session.commit()

    report = audit_registrations(session)

    assert report.total_participants == 1
    assert report.admin_view_rows == 0
    assert not report.counts_match
    assert report.orphaned_participants == [orphan.id]
    assert report.missing_ticket_ids == [orphan.id]
    assert report.missing_registration_numbers == [orphan.id]
