"""
End-of-run e-mail digest over SMTP (STARTTLS + login).
"""

import asyncio
import html
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Sequence, Tuple

from jobdaemon.config.settings import settings
from jobdaemon.core.models import JobListing
from jobdaemon.core.results import DispatchResult
from jobdaemon.notify.base import SummarySender

logger = logging.getLogger(__name__)

CARD_TEMPLATE = """
    <div style="margin-bottom: 20px; padding: 15px; border: 1px solid #ddd; border-radius: 8px;">
      <h3 style="margin: 0 0 10px 0; color: #333;">{title}</h3>
      <p style="margin: 5px 0;"><strong>Company:</strong> {company}</p>
      <p style="margin: 5px 0;"><strong>Location:</strong> {location}</p>
      <p style="margin: 5px 0;"><strong>Work Model:</strong> {work_model}</p>
      <p style="margin: 5px 0;"><strong>Salary:</strong> {salary}</p>
      <p style="margin: 10px 0 0 0;"><a href="{link}" style="background-color: #007bff; color: white; padding: 8px 12px; text-decoration: none; border-radius: 4px; display: inline-block;">View Job</a></p>
    </div>
"""


def build_summary(listings: Sequence[JobListing]) -> Tuple[str, str, str]:
    """Returns ``(subject, text_body, html_body)``."""
    subject = f"New Internships Found ({len(listings)})"

    text_lines = ["Here are the new jobs found in the latest scrape:", ""]
    for listing in listings:
        text_lines.append(f"- {listing.title} @ {listing.company} ({listing.location})")
        text_lines.append(f"  {listing.link}")

    cards = "".join(
        CARD_TEMPLATE.format(
            title=html.escape(listing.title),
            company=html.escape(listing.company),
            location=html.escape(listing.location),
            work_model=html.escape(listing.work_model),
            salary=html.escape(listing.salary),
            link=html.escape(listing.link, quote=True),
        )
        for listing in listings
    )
    html_body = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <h2 style="color: #2c3e50; border-bottom: 2px solid #eee; padding-bottom: 10px;">New Job Postings</h2>
      <p>Here are the new jobs found in the latest scrape:</p>
      {cards}
      <p style="color: #777; font-size: 12px; margin-top: 20px; border-top: 1px solid #eee; padding-top: 10px;">
        Sent by JobDaemon
      </p>
    </div>
    """
    return subject, "\n".join(text_lines), html_body


class EmailSummarySender(SummarySender):
    def __init__(
        self,
        user: Optional[str] = None,
        password: Optional[str] = None,
        recipient: Optional[str] = None,
        host: str = settings.SMTP_HOST,
        port: int = settings.SMTP_PORT,
    ):
        self.user = user if user is not None else settings.EMAIL_USER
        self.password = password if password is not None else settings.EMAIL_PASS
        self.recipient = recipient or settings.EMAIL_RECIPIENT or self.user
        self.host = host
        self.port = port

    def _send(self, message: MIMEMultipart) -> None:
        context = ssl.create_default_context()
        with smtplib.SMTP(self.host, self.port, timeout=30) as server:
            server.ehlo()
            server.starttls(context=context)
            server.ehlo()
            server.login(self.user, self.password)
            server.sendmail(self.user, [self.recipient], message.as_string())

    async def send_summary(self, listings: Sequence[JobListing]) -> DispatchResult:
        if not listings:
            return DispatchResult.success()
        if not self.user or not self.password:
            logger.warning("EMAIL_USER or EMAIL_PASS not set. Skipping email summary.")
            return DispatchResult.failure("email not configured")

        subject, text_body, html_body = build_summary(listings)
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = f"JobDaemon <{self.user}>"
        message["To"] = self.recipient
        message.attach(MIMEText(text_body, "plain", "utf-8"))
        message.attach(MIMEText(html_body, "html", "utf-8"))

        try:
            await asyncio.to_thread(self._send, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Error sending email summary: {e}")
            return DispatchResult.failure(str(e))

        logger.info(f"Email summary sent to {self.recipient} with {len(listings)} jobs.")
        return DispatchResult.success()
