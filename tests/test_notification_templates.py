"""Tests for template rendering and template administration."""

import logging

import pytest

from app.application.use_cases.notification_templates import (
    activate_notification_template,
    create_notification_template,
    deactivate_notification_template,
    delete_notification_template,
    extract_placeholders,
    get_default_notification_template,
    get_notification_template,
    list_notification_templates,
    render_template,
    update_notification_template,
    validate_template_variables,
)
from app.domain.entities import CHANNEL_EMAIL, CHANNEL_IN_APP, NOTIFICATION_TYPE_CYCLE_CREATED
from app.domain.exceptions import NotFoundError, TemplateVariableError, ValidationError


def _create(session, **overrides):
    fields = {
        "organization_id": "org-1",
        "name": "Cycle created",
        "type": NOTIFICATION_TYPE_CYCLE_CREATED,
        "channel": CHANNEL_IN_APP,
        "title": "Cycle {{name}}",
        "content": "{{name}} starts {{start}}",
        "variables": ["name", "start"],
        "created_by": "admin-1",
    }
    fields.update(overrides)
    return create_notification_template(session, **fields)


def test_render_template_substitutes_values():
    rendered = render_template("Hi {{name}}, you have {{count}} tasks", {"name": "Ana", "count": 3})

    assert rendered == "Hi Ana, you have 3 tasks"


def test_render_template_keeps_unknown_placeholders():
    assert render_template("Hi {{name}} from {{team}}", {"name": "Ana"}) == "Hi Ana from {{team}}"


def test_render_template_replaces_every_occurrence():
    assert render_template("{{x}}-{{x}}", {"x": "a"}) == "a-a"


def test_extract_placeholders_is_ordered_and_unique():
    assert extract_placeholders("{{b}} {{a}} {{b}} {{ not_a_placeholder }}") == ["b", "a"]


def test_validate_template_variables_rejects_undeclared_placeholder():
    with pytest.raises(TemplateVariableError) as excinfo:
        validate_template_variables("Hello {{name}} in {{cycle}}", ["name"])

    assert excinfo.value.missing == ["cycle"]
    assert excinfo.value.code == "TEMPLATE_VARIABLE_MISMATCH"


def test_validate_template_variables_warns_about_unused_declarations(caplog):
    caplog.set_level(logging.WARNING)

    result = validate_template_variables(("Hello {{name}}", None), ["name", "extra"])

    assert result.placeholders == ["name"]
    assert result.unused_variables == ["extra"]
    assert "extra" in caplog.text


def test_create_template_persists_declared_variables(session):
    template = _create(session, variables=["name", "start", "name"])

    assert template.id
    assert template.variables == ["name", "start"]
    assert get_notification_template(session, template.id).title == "Cycle {{name}}"


def test_create_template_rejects_mismatched_variables(session):
    with pytest.raises(TemplateVariableError):
        _create(session, variables=["name"])

    assert list_notification_templates(session, "org-1") == []


def test_create_template_rejects_unknown_channel(session):
    with pytest.raises(ValidationError):
        _create(session, channel="fax")


def test_new_default_template_demotes_previous_default(session):
    first = _create(session, name="First", is_default=True)
    second = _create(session, name="Second", is_default=True)

    default = get_default_notification_template(
        session, "org-1", NOTIFICATION_TYPE_CYCLE_CREATED, CHANNEL_IN_APP
    )

    assert default.id == second.id
    assert get_notification_template(session, first.id).is_default is False


def test_default_template_must_be_active(session):
    template = _create(session, is_default=True)
    deactivate_notification_template(session, template.id)

    assert (
        get_default_notification_template(
            session, "org-1", NOTIFICATION_TYPE_CYCLE_CREATED, CHANNEL_IN_APP
        )
        is None
    )

    activate_notification_template(session, template.id)
    assert (
        get_default_notification_template(
            session, "org-1", NOTIFICATION_TYPE_CYCLE_CREATED, CHANNEL_IN_APP
        ).id
        == template.id
    )


def test_templates_are_scoped_to_their_organization(session):
    template = _create(session)

    with pytest.raises(NotFoundError):
        get_notification_template(session, template.id, organization_id="org-2")
    assert list_notification_templates(session, "org-2") == []


def test_list_templates_filters_by_channel(session):
    _create(session, name="In app")
    email_template = _create(session, name="Email", channel=CHANNEL_EMAIL)

    templates = list_notification_templates(session, "org-1", channel=CHANNEL_EMAIL)

    assert [template.id for template in templates] == [email_template.id]


def test_update_template_revalidates_content(session):
    template = _create(session)

    with pytest.raises(TemplateVariableError):
        update_notification_template(
            session,
            template_id=template.id,
            updated_by="admin-1",
            content="{{name}} ends {{end}}",
        )

    updated = update_notification_template(
        session,
        template_id=template.id,
        updated_by="admin-1",
        content="{{name}} ends {{end}}",
        variables=["name", "end"],
    )

    assert updated.content == "{{name}} ends {{end}}"
    assert updated.variables == ["name", "end"]
    assert updated.updated_by == "admin-1"
    assert updated.title == "Cycle {{name}}"


def test_update_template_to_default_demotes_others(session):
    first = _create(session, name="First", is_default=True)
    second = _create(session, name="Second")

    update_notification_template(
        session, template_id=second.id, updated_by="admin-1", is_default=True
    )

    assert get_notification_template(session, first.id).is_default is False
    assert get_notification_template(session, second.id).is_default is True


def test_default_template_cannot_be_deleted(session):
    template = _create(session, is_default=True)

    with pytest.raises(ValidationError):
        delete_notification_template(session, template.id)

    assert get_notification_template(session, template.id).id == template.id


def test_delete_template(session):
    template = _create(session)

    delete_notification_template(session, template.id)

    with pytest.raises(NotFoundError):
        get_notification_template(session, template.id)
