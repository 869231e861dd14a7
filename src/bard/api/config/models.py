import os
from pathlib import Path

from pydantic import BaseModel, Field

from bard.api.utils import get_default_data_dir


class StorageConfig(BaseModel):
    data_dir: Path = Field(default_factory=get_default_data_dir)


class ContentConfig(BaseModel):
    """Options for rich-text content handling.

    Attributes:
        normalize_on_save: Collapse runs of blank paragraphs before storing
            article content and comment messages.
    """

    normalize_on_save: bool = True


class EmailConfig(BaseModel):
    """Configuration for the transactional email provider.

    Attributes:
        api_key: SendGrid API key. Defaults to the SENDGRID_API_KEY environment variable.
        base_url: Base URL of the SendGrid v3 API
        from_name: Display name of the sender
        from_email: Sender address
        unsubscribe_group_id: Unsubscribe group attached to every email
        timeout: HTTP timeout in seconds
    """

    api_key: str = Field(
        default_factory=lambda: os.environ.get("SENDGRID_API_KEY", "")
    )
    base_url: str = "https://api.sendgrid.com"
    from_name: str = "Bard"
    from_email: str = "noreply@getbard.com"
    unsubscribe_group_id: int = 16922
    timeout: int = 30


class AppConfig(BaseModel):
    environment: str = "production"
    storage: StorageConfig = Field(default_factory=StorageConfig)
    content: ContentConfig = Field(default_factory=ContentConfig)
    email: EmailConfig = Field(default_factory=EmailConfig)
