"""Outbound mail for account verification."""
from __future__ import annotations

import html
import logging
import smtplib
import ssl
from email.message import EmailMessage

from blog_stage.core.settings import Settings, settings

logger = logging.getLogger(__name__)


class Mailer:
    """SMTP transport; logs messages instead of sending when disabled."""

    def __init__(self, config: Settings = settings) -> None:
        self.config = config

    @property
    def enabled(self) -> bool:
        return self.config.email_enabled

    def send(self, to_addr: str, subject: str, body_text: str, body_html: str | None = None) -> None:
        if not self.enabled:
            logger.info("Mail disabled; would send %r to %s:\n%s", subject, to_addr, body_text)
            return

        msg = EmailMessage()
        msg["From"] = f"{self.config.email_from_name} <{self.config.email_from_addr}>"
        msg["To"] = to_addr
        msg["Subject"] = subject
        msg.set_content(body_text)
        if body_html:
            msg.add_alternative(body_html, subtype="html")

        with smtplib.SMTP(self.config.email_smtp_host, self.config.email_smtp_port, timeout=10) as smtp:
            if self.config.email_smtp_starttls:
                smtp.starttls(context=ssl.create_default_context())
            if self.config.email_smtp_username:
                smtp.login(self.config.email_smtp_username, self.config.email_smtp_password or "")
            smtp.send_message(msg)
        logger.info("Sent %r to %s", subject, to_addr)

    def send_verification_email(self, to_addr: str, name: str, verification_url: str) -> None:
        """Send the link a new account uses to confirm its e-mail address."""
        body_text = (
            f"Hi {name},\n\n"
            "Thanks for signing up! Please confirm that this is your email address "
            "by opening the link below:\n\n"
            f"{verification_url}\n\n"
            "This verification link will expire soon for security reasons. "
            "If you did not create an account, you can safely ignore this email.\n\n"
            f"Regards,\n{self.config.email_from_name} Team\n"
        )
        body_html = (
            f"<p>Hi {html.escape(name)},</p>"
            "<p>Thanks for signing up! Please confirm that this is your email address.</p>"
            f'<p><a href="{html.escape(verification_url)}">Verify Email</a></p>'
            "<p>If you did not create an account, you can safely ignore this email.</p>"
        )
        self.send(to_addr, "Verify your email", body_text, body_html)


mailer = Mailer()


def get_mailer() -> Mailer:
    """Return the process-wide mailer."""
    return mailer
