"""Transactional email delivery through the SendGrid v3 HTTP API."""

import logging

import httpx

from bard.api.config import AppConfig, Config
from bard.api.slate import (
    document_to_html,
    escape_html,
    get_visible_content,
    serialize_text,
)
from bard.api.store.models.article import Article

logger = logging.getLogger(__name__)


def build_email_payload(
    to: list[str],
    subject: str,
    html: str,
    template_id: str | None = None,
    asm_group_id: int | None = None,
    from_name: str | None = None,
    from_email: str | None = None,
    config: AppConfig = Config,
) -> dict:
    """Build the body of a ``/v3/mail/send`` request.

    Args:
        to: Recipient addresses. Each recipient gets its own personalization so
            addresses are not disclosed to each other.
        subject: Email subject.
        html: Rendered HTML body.
        template_id: Optional dynamic template to render the body into.
        asm_group_id: Unsubscribe group. Defaults to the configured group.
        from_name: Sender display name. Defaults to the configured name.
        from_email: Sender address. Defaults to the configured address.
        config: Configuration providing the defaults.

    Returns:
        The JSON-serializable request body.
    """
    return {
        "personalizations": [{"to": [{"email": address}]} for address in to],
        "from": {
            "name": from_name or config.email.from_name,
            "email": from_email or config.email.from_email,
        },
        "content": [{"type": "text/html", "value": html}],
        "subject": subject,
        "template_id": template_id or "",
        "asm": {"group_id": asm_group_id or config.email.unsubscribe_group_id},
    }


class EmailSender:
    """Sends transactional emails. Delivery failures are logged, not raised."""

    def __init__(
        self,
        config: AppConfig = Config,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    async def send(
        self,
        to: list[str],
        subject: str,
        html: str,
        template_id: str | None = None,
        asm_group_id: int | None = None,
    ) -> bool:
        """Send an email.

        Returns:
            True if the provider accepted the email.
        """
        if not to:
            logger.warning(f"Not sending '{subject}', no recipients")
            return False

        payload = build_email_payload(
            to,
            subject,
            html,
            template_id=template_id,
            asm_group_id=asm_group_id,
            config=self._config,
        )

        async with httpx.AsyncClient(
            base_url=self._config.email.base_url,
            headers={"Authorization": f"Bearer {self._config.email.api_key}"},
            timeout=self._config.email.timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post("/v3/mail/send", json=payload)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error(
                    f"Failed to send an email to {to} using {template_id}: "
                    f"{e.response.status_code} {e.response.text}"
                )
                return False
            except httpx.HTTPError as e:
                logger.error(f"Failed to send an email to {to} using {template_id}: {e}")
                return False

        logger.info(f"Sent '{subject}' to {len(to)} recipient(s)")
        return True


def render_article_email(article: Article, blocked: bool = False) -> str:
    """Render an article to the HTML body of an email.

    Gated articles are cut down to their preview when ``blocked`` is set.
    """
    document = get_visible_content(article.content, blocked)
    body = document_to_html(document)
    return f"<h1>{escape_html(article.title)}</h1>{body}"


def render_article_preview(article: Article, max_length: int = 140) -> str:
    """Plain-text preview of an article, suitable for an email preheader."""
    text = serialize_text(get_visible_content(article.content, True)).strip()
    if len(text) <= max_length:
        return text
    return text[: max_length - 1].rstrip() + "…"


async def send_article_email(
    sender: EmailSender,
    article: Article,
    recipients: list[str],
    blocked: bool = False,
    template_id: str | None = None,
) -> bool:
    """Email an article to a list of recipients."""
    html = render_article_email(article, blocked=blocked)
    return await sender.send(
        recipients, article.title or "New article", html, template_id=template_id
    )
