"""Name casing helpers."""

from __future__ import annotations

import re

# Boundary between a lowercase letter or digit and an uppercase letter
_LOWER_UPPER = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
# Boundary inside an acronym run: "HTTPServer" -> "HTTP|Server"
_ACRONYM = re.compile(r"(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS = re.compile(r"[\s\-]+")


def snake_case(name: str) -> str:
    """Convert a camelCase or PascalCase name to snake_case.

    ``userName`` -> ``user_name``, ``ProductDocument`` -> ``product_document``,
    ``HTTPServer`` -> ``http_server``. Names already in snake_case are
    returned unchanged.
    """
    name = _SEPARATORS.sub("_", name.strip())
    name = _ACRONYM.sub("_", name)
    name = _LOWER_UPPER.sub("_", name)
    return re.sub(r"_+", "_", name).lower()
