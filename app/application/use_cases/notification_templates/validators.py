"""Validation helpers for notification template use cases."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from app.domain.entities import NOTIFICATION_CHANNELS, NOTIFICATION_TYPES
from app.domain.exceptions import TemplateVariableError, ValidationError

from .rendering import extract_placeholders

logger = logging.getLogger(__name__)


@dataclass
class TemplateVariableValidation:
    """Placeholders found in a template compared with its declarations."""

    placeholders: list[str] = field(default_factory=list)
    unused_variables: list[str] = field(default_factory=list)


def validate_template_variables(
    content: str | Iterable[str | None], declared_variables: Sequence[str] | None
) -> TemplateVariableValidation:
    """Ensure every placeholder in ``content`` is declared.

    ``content`` may be a single string or several template fragments (title,
    content and subject). Declared variables that no fragment references are
    logged and reported back, they never fail validation.
    """

    fragments = [content] if isinstance(content, str) else list(content)
    placeholders: list[str] = []
    for fragment in fragments:
        for name in extract_placeholders(fragment):
            if name not in placeholders:
                placeholders.append(name)

    declared = [name for name in (declared_variables or []) if name]
    missing = [name for name in placeholders if name not in declared]
    if missing:
        raise TemplateVariableError(missing)

    unused = [name for name in declared if name not in placeholders]
    if unused:
        logger.warning(
            "Template declares variables that are never used: %s", ", ".join(unused)
        )
    return TemplateVariableValidation(placeholders=placeholders, unused_variables=unused)


def ensure_template_name(name: str | None) -> str:
    normalized = (name or "").strip()
    if not normalized:
        raise ValidationError("Template name is required")
    return normalized


def ensure_template_text(value: str | None, field_name: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"Template {field_name} is required")
    return value


def ensure_known_type_and_channel(type: str, channel: str) -> None:
    if type not in NOTIFICATION_TYPES:
        raise ValidationError(f"Unknown notification type '{type}'")
    if channel not in NOTIFICATION_CHANNELS:
        raise ValidationError(f"Unknown notification channel '{channel}'")


__all__ = [
    "TemplateVariableValidation",
    "validate_template_variables",
    "ensure_template_name",
    "ensure_template_text",
    "ensure_known_type_and_channel",
]
