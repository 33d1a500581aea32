"""Routes for administering notification templates."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases.notification_templates import (
    activate_notification_template as activate_template_uc,
    create_notification_template as create_template_uc,
    deactivate_notification_template as deactivate_template_uc,
    delete_notification_template as delete_template_uc,
    get_default_notification_template as get_default_template_uc,
    get_notification_template as get_template_uc,
    list_notification_templates as list_templates_uc,
    update_notification_template as update_template_uc,
)
from app.domain.entities import NotificationTemplate
from app.domain.exceptions import NotFoundError, NotificationError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import Actor, get_current_actor, require_admin
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    NotificationTemplateCreate,
    NotificationTemplateRead,
    NotificationTemplateUpdate,
)

router = APIRouter(prefix="/notifications/templates", tags=["notification templates"])


def _template_to_read_model(template: NotificationTemplate) -> NotificationTemplateRead:
    return NotificationTemplateRead.model_validate(template)


@router.post("/", response_model=NotificationTemplateRead, status_code=status.HTTP_201_CREATED)
def create_template(
    payload: NotificationTemplateCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
) -> NotificationTemplateRead:
    try:
        template = create_template_uc(
            db,
            organization_id=actor.organization_id,
            created_by=actor.user_id,
            **payload.model_dump(),
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return _template_to_read_model(template)


@router.get("/", response_model=list[NotificationTemplateRead])
def list_templates(
    type: str | None = None,
    channel: str | None = None,
    active_only: bool = False,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> list[NotificationTemplateRead]:
    templates = list_templates_uc(
        db, actor.organization_id, type=type, channel=channel, active_only=active_only
    )
    return [_template_to_read_model(template) for template in templates]


@router.get("/default", response_model=NotificationTemplateRead)
def read_default_template(
    type: str,
    channel: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> NotificationTemplateRead:
    """Return the active default template of a type and channel."""

    template = get_default_template_uc(db, actor.organization_id, type, channel)
    if template is None:
        raise to_http_exception(NotFoundError("No default template configured"))
    return _template_to_read_model(template)


@router.get("/{template_id}", response_model=NotificationTemplateRead)
def read_template(
    template_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> NotificationTemplateRead:
    try:
        template = get_template_uc(db, template_id, organization_id=actor.organization_id)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return _template_to_read_model(template)


@router.put("/{template_id}", response_model=NotificationTemplateRead)
def update_template(
    template_id: str,
    payload: NotificationTemplateUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
) -> NotificationTemplateRead:
    try:
        template = update_template_uc(
            db,
            template_id=template_id,
            organization_id=actor.organization_id,
            updated_by=actor.user_id,
            **payload.model_dump(exclude_unset=True),
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return _template_to_read_model(template)


@router.post("/{template_id}/activate", response_model=NotificationTemplateRead)
def activate_template(
    template_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
) -> NotificationTemplateRead:
    try:
        template = activate_template_uc(db, template_id, organization_id=actor.organization_id)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return _template_to_read_model(template)


@router.post("/{template_id}/deactivate", response_model=NotificationTemplateRead)
def deactivate_template(
    template_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
) -> NotificationTemplateRead:
    try:
        template = deactivate_template_uc(
            db, template_id, organization_id=actor.organization_id
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return _template_to_read_model(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(
    template_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
) -> Response:
    try:
        delete_template_uc(db, template_id, organization_id=actor.organization_id)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
