"""Recent-pages email digest and the SMTP notification sender"""

import logging
import re
import smtplib
from datetime import datetime, timedelta
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import Callable, Sequence

from pydantic import BaseModel, ConfigDict

from mdsite.config import Sender, Settings, SiteConfig
from mdsite.core.models import TIMESTAMP_FORMAT, Corpus, Document
from mdsite.core.templating import TemplateLoader
from mdsite.errors import DeliveryError, InvalidEncoding, NotFound


logger = logging.getLogger(__name__)

# "Jane Doe <jane@example.com>"
FULL_ADDRESS_RE = re.compile(r"(.+?)\s*<(.+)>")


class Recipient(BaseModel):
    model_config = ConfigDict(frozen=True)

    name:  str
    email: str

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>" if self.name else self.email


def parse_recipient(field: str) -> Recipient:
    field = field.strip()
    if m := FULL_ADDRESS_RE.fullmatch(field):
        return Recipient(name=m.group(1), email=m.group(2).strip())
    return Recipient(name="", email=field)


def read_recipients(path: str | Path) -> list[Recipient]:
    """Recipients from a comma-separated file; the address is the second field.

    Lines starting with '#' or without an '@' are skipped.
    """
    path = Path(path)
    if not path.exists():
        raise NotFound(f"File '{path}' not found")
    logger.info("Read addresses from '%s'", path)

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidEncoding(f"File '{path}' is not valid UTF-8: {e}") from e

    recipients: list[Recipient] = []
    for n, line in enumerate(text.splitlines(), 1):
        if line.startswith("#") or "@" not in line:
            continue
        parts = line.split(",")
        if len(parts) < 2:
            logger.warning("Line %d of '%s' has no address field, skipping", n, path)
            continue
        recipient = parse_recipient(parts[1])
        logger.debug("Recipient %s", recipient)
        recipients.append(recipient)
    return recipients


def build_message(sender: Sender, to: Recipient, subject: str, html: str) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = f"{sender.name} <{sender.email}>"
    msg["To"] = str(to)
    msg.attach(MIMEText(html, "html", "utf-8"))
    return msg


SmtpFactory = Callable[[str, int], smtplib.SMTP]


def send_email(
    settings: Settings,
    sender: Sender,
    to: Recipient,
    subject: str,
    html: str,
    smtp_factory: SmtpFactory | None = None,
    ) -> None:
    """Deliver one HTML email. Any SMTP or socket failure becomes a DeliveryError."""
    message = build_message(sender, to, subject, html)
    try:
        server = (smtp_factory or smtplib.SMTP)(settings.smtp_host, settings.smtp_port)
        try:
            if settings.smtp_tls:
                server.starttls()
            if settings.smtp_user and settings.smtp_password:
                server.login(settings.smtp_user, settings.smtp_password)
            server.sendmail(sender.email, [to.email], message.as_string())
        finally:
            server.quit()
    except (smtplib.SMTPException, OSError) as e:
        raise DeliveryError(f"Could not send to {to}: {e}") from e


def send_digest(
    settings: Settings,
    sender: Sender,
    recipients: Sequence[Recipient],
    subject: str,
    html: str,
    smtp_factory: SmtpFactory | None = None,
    ) -> tuple[int, int]:
    """Send one email per recipient, sequentially. Returns (sent, failed).

    A failed delivery is logged and the loop moves on to the next recipient.
    """
    sent = failed = 0
    for ix, to in enumerate(recipients, 1):
        logger.info("Sending %d/%d %s", ix, len(recipients), to)
        try:
            send_email(settings, sender, to, subject, html, smtp_factory)
            sent += 1
        except DeliveryError as e:
            logger.error("%s", e)
            failed += 1
    return sent, failed


def recent_documents(corpus: Corpus, days: int, now: datetime | None = None) -> list[Document]:
    """Documents stamped within the last `days` days, excluding the root and the archive."""
    cutoff = ((now or datetime.now()) - timedelta(days=days)).strftime(TIMESTAMP_FORMAT)
    return [
        d for d in corpus.documents
        if not d.is_root and not d.is_archive and d.timestamp > cutoff
    ]


def render_digest(
    corpus: Corpus,
    config: SiteConfig,
    days: int,
    loader: TemplateLoader | None = None,
    now: datetime | None = None,
    ) -> str:
    pages = recent_documents(corpus, days, now)
    logger.info("Digest of %d page(s) from the last %d day(s)", len(pages), days)
    return (loader or TemplateLoader()).render_template(
        "email.html",
        title=f"{config.site_name or 'Recent pages'}: last {days} day(s)",
        pages=pages,
        config=config,
        url=config.url.rstrip("/"),
    )
