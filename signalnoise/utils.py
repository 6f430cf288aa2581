import sys
import os
import re
from datetime import date

_ISO_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def get_base_path() -> str:
    """
    Return the application's base path.

    Returns:
        str: the executable's directory when frozen, the project root when
        running from a source checkout, otherwise a per-user directory
    """
    if getattr(sys, 'frozen', False):
        return os.path.dirname(sys.executable)
    # signalnoise/utils.py -> project root is two levels up
    checkout_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if os.path.exists(os.path.join(checkout_root, "pyproject.toml")):
        return checkout_root
    return get_user_base_path()


def get_user_base_path() -> str:
    """Per-user location for installed copies ($XDG_DATA_HOME or ~/.local/share)."""
    xdg_data_home = os.environ.get("XDG_DATA_HOME") or os.path.join(os.path.expanduser("~"), ".local", "share")
    return os.path.join(xdg_data_home, "signalnoise")


def today_iso() -> str:
    """Local wall-clock date as YYYY-MM-DD."""
    return date.today().isoformat()


def is_iso_date(value: str) -> bool:
    """True only for calendar dates written as YYYY-MM-DD."""
    if not isinstance(value, str) or not _ISO_DAY_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True
