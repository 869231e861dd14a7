import json
import os
import tempfile
from pathlib import Path

# bard.api.config reads its file at import time, so a developer's own
# bard.yaml or ~/.config/bard/config.yaml must be shadowed first.
_defaults_path = Path(tempfile.mkdtemp()) / "bard-defaults.yaml"
_defaults_path.write_text("{}")
os.environ["BARD_API_CONFIG_PATH"] = str(_defaults_path)

import pytest  # noqa: E402
import yaml  # noqa: E402


@pytest.fixture
def temp_db_path():
    """Create a temporary database path for testing.

    Note: Tests that need a database should use BardAPI or Store with create=True.
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir) / "test.lancedb"


@pytest.fixture
def temp_yaml_config(tmp_path, monkeypatch):
    """Create a temporary YAML config file for testing.

    This fixture creates a config file in a temp directory and sets
    the environment variable so the config loader will find it.
    """
    config_file = tmp_path / "test-config.yaml"
    config_data = {
        "environment": "development",
        "storage": {"data_dir": str(tmp_path)},
        "content": {"normalize_on_save": False},
        "email": {"from_name": "Test", "unsubscribe_group_id": 1},
    }

    with open(config_file, "w") as f:
        yaml.dump(config_data, f)

    monkeypatch.setenv("BARD_API_CONFIG_PATH", str(config_file))

    yield config_file


def paragraph(text: str) -> dict:
    return {"type": "paragraph", "children": [{"text": text}]}


@pytest.fixture
def article_content() -> list[dict]:
    """An article body with a run of blank paragraphs in the middle."""
    return [
        paragraph("Writing for a living"),
        paragraph(""),
        paragraph(" "),
        paragraph(""),
        {
            "type": "quote",
            "children": [{"text": "Write every day.", "italic": True}],
        },
        paragraph("Subscribe for more"),
    ]


@pytest.fixture
def article_content_json(article_content) -> str:
    return json.dumps(article_content)
