"""
Confirmation emails for registered teams.

Delivery is best-effort: every failure is logged and swallowed so that a
mail provider outage never affects a registration that has already been
committed. Nothing is retried.
"""
import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Dict, List, Optional

import aiosmtplib
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .. import config

logger = logging.getLogger(__name__)


class TicketNotifier:
    """Async SMTP sender for registration emails."""

    def __init__(
        self,
        smtp_host: str = config.SMTP_HOST,
        smtp_port: int = config.SMTP_PORT,
        smtp_user: Optional[str] = config.SMTP_USER,
        smtp_password: Optional[str] = config.SMTP_PASSWORD,
        from_email: Optional[str] = config.EMAIL_FROM,
        from_name: str = config.EMAIL_FROM_NAME,
        templates_dir=config.TEMPLATES_DIR
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.from_email = from_email
        self.from_name = from_name
        self.templates = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html"])
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_user and self.smtp_password and self.from_email)

    def render(self, template_name: str, **context) -> str:
        template = self.templates.get_template(template_name)
        return template.render(from_name=self.from_name, **context)

    async def send_email(self, to_email: str, subject: str, html_content: str) -> bool:
        """Send one HTML email. Returns True on success, False otherwise."""
        if not self.is_configured:
            logger.warning("Email service not configured, skipping email to %s", to_email)
            return False

        message = MIMEMultipart("alternative")
        message["From"] = f"{self.from_name} <{self.from_email}>"
        message["To"] = to_email
        message["Subject"] = subject
        message.attach(MIMEText(html_content, "html"))

        try:
            await aiosmtplib.send(
                message,
                hostname=self.smtp_host,
                port=self.smtp_port,
                username=self.smtp_user,
                password=self.smtp_password,
                start_tls=True
            )
        except Exception as e:
            logger.error("Error sending email to %s: %s", to_email, e)
            return False

        logger.info("Email sent to %s", to_email)
        return True

    async def send_registration_email(
        self,
        to_email: str,
        team_name: str,
        member_names: List[str],
        event_id: str
    ) -> bool:
        html = self.render(
            "registration_email.html",
            team_name=team_name,
            member_names=member_names,
            event_id=event_id
        )
        return await self.send_email(to_email, "Registration Confirmed - Metaverse Club", html)

    async def notify_team(self, team_name: str, members: List[Dict], event_id: str) -> int:
        """Email every member that has an address. Returns the number sent."""
        member_names = [m["name"] for m in members]
        sent = 0
        for member in members:
            if not member.get("email"):
                continue
            try:
                if await self.send_registration_email(member["email"], team_name, member_names, event_id):
                    sent += 1
            except Exception:
                logger.exception("Notification for %s failed", member["email"])
        return sent
