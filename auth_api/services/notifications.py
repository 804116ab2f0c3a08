import asyncio
import logging
from pathlib import Path
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional

import aiosmtplib
from jinja2 import Environment, FileSystemLoader, select_autoescape

from auth_api.core.config import Settings, settings

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

# Global Jinja2 Environment for caching and security
_jinja_env = None

def get_jinja_env():
    global _jinja_env
    if _jinja_env is None:
        _jinja_env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(['html', 'xml'])
        )
    return _jinja_env


class EmailSender:
    """
    Notification sink: accepts (recipient, subject, body) and attempts SMTP delivery.

    When SMTP is not configured the message is logged and dropped, so local
    development works without a mail server. Delivery errors are raised to
    the caller, who decides whether they matter.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def configured(self) -> bool:
        return bool(self.settings.SMTP_SERVER and self.settings.SMTP_USERNAME)

    def build_message(self, to_email: str, subject: str, text: Optional[str] = None, html: Optional[str] = None) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((self.settings.APP_NAME, self.settings.SENDER_EMAIL))
        message["To"] = to_email
        message["Subject"] = subject
        if html:
            message.set_content(text or "Please enable HTML to view this email.")
            message.add_alternative(html, subtype='html')
        else:
            message.set_content(text or "")
        return message

    async def send(self, to_email: str, subject: str, text: Optional[str] = None, html: Optional[str] = None):
        if not self.configured:
            logger.warning(f"SMTP not configured. Skipping email '{subject}' to {to_email}.")
            return

        message = self.build_message(to_email, subject, text=text, html=html)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.settings.SMTP_SERVER,
                port=self.settings.SMTP_PORT,
                username=self.settings.SMTP_USERNAME,
                password=self.settings.SMTP_PASSWORD,
                use_tls=self.settings.SMTP_USE_TLS,
                start_tls=self.settings.SMTP_USE_STARTTLS,
                timeout=self.settings.SMTP_TIMEOUT
            )
            logger.info(f"SUCCESS: Email '{subject}' sent to {to_email}")
        except asyncio.TimeoutError:
            logger.error(f"TIMEOUT: Failed to send email to {to_email} within {self.settings.SMTP_TIMEOUT}s")
            raise
        except Exception as e:
            logger.error(f"SMTP ERROR: Failed to send email to {to_email}: {e}")
            raise

    async def send_template(self, to_email: str, subject: str, template_name: str, context: dict):
        template = get_jinja_env().get_template(f"email/{template_name}.html")
        html_content = template.render(**context)
        await self.send(to_email, subject, html=html_content)


def get_email_sender() -> EmailSender:
    return EmailSender(settings)
