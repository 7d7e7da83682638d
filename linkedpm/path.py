# linkedpm/path.py
"""
LinkedPM: Path Parser

Human addressing syntax for documents in a registry:

    zone/key[@revision]

zone and key are 1-32 chars of [a-z0-9-]; revision is 1-32 chars of
[a-z0-9-._] and defaults to "latest".

Usage:
    parse_path("coolzone/mykey@v1")     # Path("coolzone", "mykey", "v1")
    parse_path("coolzone/mykey")        # Path("coolzone", "mykey", "latest")
    parse_path("Bad Zone/key")          # None

    # Raising variant, splats straight into operations
    await create_revision(*resolve_path("coolzone/mykey@v1"), cid, signer=s)
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from .config import DEFAULT_REVISION
from .errors import PathError


PATH_PATTERN = re.compile(
    r"^(?P<zone>[a-z0-9-]{1,32})"
    r"/(?P<key>[a-z0-9-]{1,32})"
    r"(?:@(?P<revision>[a-z0-9\-._]{1,32}))?$"
)


class Path(NamedTuple):
    """Parsed (zone, key, revision) triple."""
    zone: str
    key: str
    revision: str = DEFAULT_REVISION

    def __str__(self) -> str:
        return f"{self.zone}/{self.key}@{self.revision}"


def parse_path(path: str) -> Optional[Path]:
    """Parse a path, returning None when it is malformed."""
    if not isinstance(path, str):
        return None
    m = PATH_PATTERN.fullmatch(path)
    if m is None:
        return None
    return Path(m.group("zone"), m.group("key"), m.group("revision") or DEFAULT_REVISION)


def resolve_path(path: str) -> Path:
    """Parse a path, raising PathError when it is malformed."""
    parsed = parse_path(path)
    if parsed is None:
        raise PathError(path)
    return parsed
