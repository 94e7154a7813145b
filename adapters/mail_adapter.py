from typing import Iterable, Optional, Tuple
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.mime.application import MIMEApplication
from email.utils import formataddr
import logging
import smtplib

from app.config import settings
from app.exceptions import ConfigurationError

logger = logging.getLogger("lodging.mail")

# (filename, content, mime type)
Attachment = Tuple[str, bytes, str]


def build_message(
    sender: str,
    recipient: str,
    subject: str,
    html_body: str,
    attachments: Iterable[Attachment] = (),
    display_name: Optional[str] = None,
) -> MIMEMultipart:
    """Assemble an HTML message with its attachments"""
    msg = MIMEMultipart()
    msg["Subject"] = subject
    msg["From"] = formataddr((display_name or settings.email_smtp_account_displayname, sender))
    msg["To"] = recipient
    msg.attach(MIMEText(html_body, "html", "utf-8"))

    for filename, content, mime_type in attachments:
        maintype, _, subtype = (mime_type or "application/octet-stream").partition("/")
        if isinstance(content, str):
            content = content.encode("utf-8")
        part = MIMEApplication(content or b"", _subtype=subtype or "octet-stream")
        if maintype != "application":
            part.replace_header("Content-Type", f"{maintype}/{subtype}")
        part.add_header("Content-Disposition", "attachment", filename=filename)
        msg.attach(part)
    return msg


def send(msg: MIMEMultipart):
    """Send a message through the configured SMTP server"""
    if not settings.email_smtp_host:
        raise ConfigurationError("missing SMTP configuration", code="missing_smtp_host")

    try:
        with smtplib.SMTP(settings.email_smtp_host, settings.email_smtp_port) as server:
            if settings.email_smtp_use_tls:
                server.starttls()
            if settings.email_smtp_account_username:
                server.login(
                    settings.email_smtp_account_username,
                    settings.email_smtp_account_password or "",
                )
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error("Unable to send message to %s: %s", msg["To"], e)
        raise ConfigurationError(f"Unable to send message: {e}", code="smtp_error")

    logger.info("Message '%s' sent to %s", msg["Subject"], msg["To"])
