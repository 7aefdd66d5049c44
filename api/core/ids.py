"""
Identifier parsing.

Accepted forms (case-insensitive):
- 32 hex digits:            9f1c2d3e4b5a69788796a5b4c3d2e1f0
- hyphenated 8-4-4-4-12:    9f1c2d3e-4b5a-6978-8796-a5b4c3d2e1f0

`uuid.UUID()` alone is too lenient (it drops braces, a `urn:uuid:` prefix and
hyphens anywhere), so the shape is checked first.
"""

from __future__ import annotations

import re
from uuid import UUID

from .errors import InvalidIdentifier

_HEX = "[0-9a-fA-F]"
_UUID_RE = re.compile(
    rf"{_HEX}{{32}}|{_HEX}{{8}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{12}}"
)


def parse_uuid(raw: str) -> UUID:
    if not isinstance(raw, str) or _UUID_RE.fullmatch(raw) is None:
        raise InvalidIdentifier(str(raw), detail="not a canonical UUID")
    return UUID(raw)


def render_uuid(value: UUID) -> str:
    return str(value)
