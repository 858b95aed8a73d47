import json

from metaclub.services.notifier import TicketNotifier


class RecordingNotifier(TicketNotifier):
    """Notifier that keeps emails in memory instead of talking to SMTP."""

    def __init__(self, fail: bool = False):
        super().__init__(smtp_user="club@example.com", smtp_password="secret", from_email="club@example.com")
        self.fail = fail
        self.sent = []

    async def send_email(self, to_email, subject, html_content):
        if self.fail:
            raise ConnectionError("SMTP server unreachable")
        self.sent.append({"to": to_email, "subject": subject, "html": html_content})
        return True


def make_member(name="Alice", role="Developer", **overrides):
    member = {
        "name": name,
        "email": f"{name.lower().replace(' ', '.')}@example.com",
        "phone": "9876543210",
        "role": role,
        "registration_number": f"REG-{name.upper().replace(' ', '')}",
    }
    member.update(overrides)
    return member


def registration_form(team_type="Duo", members=None, **overrides):
    if members is None:
        members = [make_member("Alice"), make_member("Bob")]
    form = {
        "teamName": "Null Pointers",
        "type": team_type,
        "members": json.dumps(members),
        "eventId": "1",
        "transactionId": "UPI-TXN-0001",
    }
    form.update(overrides)
    return form


def screenshot_file(name="proof.png"):
    return {"screenshot": (name, b"fake image bytes", "image/png")}


