import asyncio

from metaclub.services import notifier as notifier_module
from metaclub.services.notifier import TicketNotifier
from tests.factories import RecordingNotifier, make_member


def test_registration_email_content():
    notifier = RecordingNotifier()

    sent = asyncio.run(notifier.send_registration_email(
        "alice@example.com", "Null <Pointers>", ["Alice", "Bob"], "1"
    ))

    assert sent is True
    email = notifier.sent[0]
    assert email["subject"] == "Registration Confirmed - Metaverse Club"
    assert "Null &lt;Pointers&gt;" in email["html"]
    assert "Alice, Bob" in email["html"]
    assert "Event ID:</strong> 1" in email["html"]


def test_unconfigured_notifier_skips():
    notifier = TicketNotifier(smtp_user=None, smtp_password=None, from_email=None)

    assert notifier.is_configured is False
    assert asyncio.run(notifier.send_email("a@example.com", "s", "<p>x</p>")) is False


def test_smtp_send(monkeypatch):
    calls = []

    async def fake_send(message, **kwargs):
        calls.append((message, kwargs))

    monkeypatch.setattr(notifier_module.aiosmtplib, "send", fake_send)
    notifier = TicketNotifier(smtp_user="club@example.com", smtp_password="pw", from_email="club@example.com")

    assert asyncio.run(notifier.send_email("a@example.com", "Hi", "<p>x</p>")) is True
    message, kwargs = calls[0]
    assert message["To"] == "a@example.com"
    assert message["Subject"] == "Hi"
    assert kwargs["username"] == "club@example.com"
    assert kwargs["start_tls"] is True


def test_smtp_error_is_swallowed(monkeypatch):
    async def failing_send(message, **kwargs):
        raise OSError("connection refused")

    monkeypatch.setattr(notifier_module.aiosmtplib, "send", failing_send)
    notifier = TicketNotifier(smtp_user="club@example.com", smtp_password="pw", from_email="club@example.com")

    assert asyncio.run(notifier.send_email("a@example.com", "Hi", "<p>x</p>")) is False


def test_notify_team_skips_members_without_email_and_survives_failures():
    members = [make_member("Alice"), make_member("Bob", email="")]

    ok = RecordingNotifier()
    assert asyncio.run(ok.notify_team("Team", members, "1")) == 1
    assert [m["to"] for m in ok.sent] == ["alice@example.com"]

    broken = RecordingNotifier(fail=True)
    assert asyncio.run(broken.notify_team("Team", members, "1")) == 0
