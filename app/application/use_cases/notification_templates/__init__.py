"""Use cases for managing notification templates."""

from .create_notification_template import create_notification_template
from .delete_notification_template import delete_notification_template
from .get_default_notification_template import get_default_notification_template
from .get_notification_template import get_notification_template
from .list_notification_templates import list_notification_templates
from .rendering import extract_placeholders, render_template
from .update_notification_template import update_notification_template
from .update_notification_template_status import (
    activate_notification_template,
    deactivate_notification_template,
)
from .validators import TemplateVariableValidation, validate_template_variables

__all__ = [
    "activate_notification_template",
    "create_notification_template",
    "deactivate_notification_template",
    "delete_notification_template",
    "extract_placeholders",
    "get_default_notification_template",
    "get_notification_template",
    "list_notification_templates",
    "render_template",
    "TemplateVariableValidation",
    "update_notification_template",
    "validate_template_variables",
]
