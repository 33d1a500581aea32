"""Placeholder substitution for notification templates."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


def render_template(template: str, data: Mapping[str, Any] | None) -> str:
    """Replace each ``{{name}}`` in ``template`` with ``data[name]``.

    Placeholders whose name is missing from ``data`` are kept verbatim so a
    partially rendered message still shows what was expected.
    """

    if not template:
        return template
    values = data or {}

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values:
            return match.group(0)
        return str(values[name])

    return PLACEHOLDER_PATTERN.sub(_substitute, template)


def extract_placeholders(template: str | None) -> list[str]:
    """Return placeholder names in order of first appearance."""

    names: list[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(template or ""):
        name = match.group(1)
        if name not in names:
            names.append(name)
    return names


__all__ = ["PLACEHOLDER_PATTERN", "render_template", "extract_placeholders"]
