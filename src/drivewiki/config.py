"""Configuration constants for drivewiki."""

import os
from pathlib import Path

# OAuth access token location. First file found is used.
API_TOKEN_FILES: list[Path] = [
    Path("~/.config/drivewiki-token.txt").expanduser(),
    Path("~/.config/secret/drivewiki-token.txt").expanduser(),
    Path(f"/run/user/{os.getuid()}/drivewiki-token"),
]

# Cache prefix, used only when --cache is passed.
API_CACHE_PREFIX: str = "/tmp/drivewiki-cache/cache-"

DRIVE_API_URL: str = "https://www.googleapis.com/drive/v3"

# Fields requested for every file resource.
FILE_FIELDS: str = "id, name, mimeType, parents, description, shortcutDetails"

# Max files per files.list page.
PAGE_SIZE: int = 200

# Environment variable naming the wiki root folder.
ROOT_ID_ENV: str = "DRIVEWIKI_ROOT_ID"


def resolve_root_id(explicit: str | None = None) -> str:
    """Return the root folder id, from the argument or the environment."""
    if explicit:
        return explicit
    root_id = os.environ.get(ROOT_ID_ENV, "").strip()
    if not root_id:
        msg = f"No root folder given and {ROOT_ID_ENV} is not set"
        raise RuntimeError(msg)
    return root_id
