import logging
from dataclasses import dataclass
from pathlib import Path

import httpx
from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.core.config import settings
from app.models import Idea, IdeaIteration, MagnetRequest
from app.validators import business_domain

logger = logging.getLogger(__name__)

templates = Environment(
    loader=FileSystemLoader(Path(__file__).parent / "email_templates"),
    autoescape=select_autoescape(["html"]),
)


@dataclass
class EmailData:
    subject: str
    html_content: str
    text_content: str


def build_idea_url(
    magnet_request: MagnetRequest, idea: Idea, iteration: IdeaIteration | None = None
) -> str:
    url = (
        f"{settings.FRONTEND_HOST.rstrip('/')}/results/{magnet_request.public_id}"
        f"/ideas/{idea.result_idea_id}"
    )
    if iteration is not None:
        url = f"{url}/v/{iteration.version}"
    return url


def generate_help_request_email(
    *, magnet_request: MagnetRequest, idea: Idea, iteration: IdeaIteration | None = None
) -> EmailData:
    idea_name = iteration.name if iteration is not None else idea.name
    context = {
        "idea_name": idea_name,
        "domain_name": business_domain(magnet_request.business_url, default=settings.PROJECT_NAME),
        "idea_url": build_idea_url(magnet_request, idea, iteration),
        "project_name": settings.PROJECT_NAME,
    }
    return EmailData(
        subject=f"We got your request, let's explore your {idea_name} lead magnet!",
        html_content=templates.get_template("help_request.html").render(**context),
        text_content=templates.get_template("help_request.txt").render(**context),
    )


class HelpRequestMailer:
    """Sends transactional email through the Resend HTTP API."""

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        timeout: float | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.RESEND_API_KEY
        self.api_url = api_url or settings.RESEND_API_URL
        self.timeout = timeout or settings.EMAIL_TIMEOUT_SECONDS

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def send_email(self, *, email_to: str, email: EmailData) -> bool:
        """Returns False when sending is disabled. Raises httpx errors on failure."""
        if not self.enabled:
            logger.warning("RESEND_API_KEY not configured, skipping email to %s", email_to)
            return False

        payload = {
            "from": settings.EMAILS_FROM,
            "to": [email_to],
            "subject": email.subject,
            "html": email.html_content,
            "text": email.text_content,
        }
        if settings.EMAILS_CC:
            payload["cc"] = settings.EMAILS_CC
        if settings.EMAILS_BCC:
            payload["bcc"] = settings.EMAILS_BCC

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                self.api_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json=payload,
            )
            response.raise_for_status()
        logger.info("Email sent: %r -> %s", email.subject, email_to)
        return True
