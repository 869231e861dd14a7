import sys
from datetime import datetime
from pathlib import Path


def get_default_data_dir() -> Path:
    """Get the user data directory for the current system platform.

    Linux: ~/.local/share/bard
    macOS: ~/Library/Application Support/bard
    Windows: C:/Users/<USER>/AppData/Roaming/bard

    Returns:
        User Data Path.
    """
    home = Path.home()

    system_paths = {
        "win32": home / "AppData/Roaming/bard",
        "linux": home / ".local/share/bard",
        "darwin": home / "Library/Application Support/bard",
    }

    data_path = system_paths[sys.platform]
    return data_path


def now_iso() -> str:
    """Current local time as stored in record timestamps."""
    return datetime.now().isoformat()


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a stored ISO timestamp, treating empty values as missing."""
    if not value:
        return None
    return datetime.fromisoformat(value)
