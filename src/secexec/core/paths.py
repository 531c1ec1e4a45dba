"""Path constants for secexec."""

import os
from pathlib import Path

SECEXEC_HOME = Path(os.environ.get("SECEXEC_HOME", Path.home() / ".secexec")).expanduser()
USER_CONFIG_FILE = SECEXEC_HOME / "config.toml"


def init_dirs() -> None:
    """Create the secexec home directory."""
    SECEXEC_HOME.mkdir(mode=0o700, parents=True, exist_ok=True)
