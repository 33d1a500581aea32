"""Persistence layer for notification templates."""

from collections.abc import Sequence

from sqlalchemy import true
from sqlalchemy.orm import Session

from app.domain.entities import NotificationTemplate
from app.infrastructure.models import NotificationTemplateModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class NotificationTemplateRepository:
    """Provide CRUD operations for notification templates."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_by_organization(
        self,
        organization_id: str,
        *,
        type: str | None = None,
        channel: str | None = None,
        active_only: bool = False,
    ) -> Sequence[NotificationTemplate]:
        query = self.session.query(NotificationTemplateModel).filter(
            NotificationTemplateModel.organization_id == organization_id
        )
        if type is not None:
            query = query.filter(NotificationTemplateModel.type == type)
        if channel is not None:
            query = query.filter(NotificationTemplateModel.channel == channel)
        if active_only:
            query = query.filter(NotificationTemplateModel.is_active == true())
        query = query.order_by(
            NotificationTemplateModel.created_at.desc(), NotificationTemplateModel.id.desc()
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, template_id: str) -> NotificationTemplate | None:
        model = self.session.get(NotificationTemplateModel, template_id)
        return self._to_entity(model) if model else None

    def get_default(
        self, organization_id: str, type: str, channel: str
    ) -> NotificationTemplate | None:
        model = (
            self.session.query(NotificationTemplateModel)
            .filter(NotificationTemplateModel.organization_id == organization_id)
            .filter(NotificationTemplateModel.type == type)
            .filter(NotificationTemplateModel.channel == channel)
            .filter(NotificationTemplateModel.is_default == true())
            .filter(NotificationTemplateModel.is_active == true())
            .order_by(NotificationTemplateModel.created_at.desc())
            .first()
        )
        return self._to_entity(model) if model else None

    def clear_default(
        self, organization_id: str, type: str, channel: str, *, exclude_id: str | None = None
    ) -> None:
        query = (
            self.session.query(NotificationTemplateModel)
            .filter(NotificationTemplateModel.organization_id == organization_id)
            .filter(NotificationTemplateModel.type == type)
            .filter(NotificationTemplateModel.channel == channel)
            .filter(NotificationTemplateModel.is_default == true())
        )
        if exclude_id is not None:
            query = query.filter(NotificationTemplateModel.id != exclude_id)
        query.update(
            {NotificationTemplateModel.is_default: False}, synchronize_session=False
        )

    def create(self, template: NotificationTemplate) -> NotificationTemplate:
        model = NotificationTemplateModel()
        self._apply_entity_to_model(model, template)
        model.created_at = ensure_app_naive_datetime(
            template.created_at or now_in_app_timezone()
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, template: NotificationTemplate) -> NotificationTemplate:
        model = self.session.get(NotificationTemplateModel, template.id)
        if not model:
            msg = f"Template with id {template.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, template)
        model.updated_at = ensure_app_naive_datetime(
            template.updated_at or now_in_app_timezone()
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def set_active(self, template_id: str, is_active: bool) -> NotificationTemplate | None:
        model = self.session.get(NotificationTemplateModel, template_id)
        if model is None:
            return None
        model.is_active = is_active
        model.updated_at = ensure_app_naive_datetime(now_in_app_timezone())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, template_id: str) -> bool:
        model = self.session.get(NotificationTemplateModel, template_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationTemplateModel, template: NotificationTemplate
    ) -> None:
        model.name = template.name
        model.description = template.description
        model.organization_id = template.organization_id
        model.type = template.type
        model.channel = template.channel
        model.subject = template.subject
        model.title = template.title
        model.content = template.content
        model.variables = list(template.variables or [])
        model.is_active = template.is_active
        model.is_default = template.is_default
        model.created_by = template.created_by
        model.updated_by = template.updated_by

    @staticmethod
    def _to_entity(model: NotificationTemplateModel) -> NotificationTemplate:
        return NotificationTemplate(
            id=model.id,
            name=model.name,
            description=model.description,
            organization_id=model.organization_id,
            type=model.type,
            channel=model.channel,
            subject=model.subject,
            title=model.title,
            content=model.content,
            variables=list(model.variables or []),
            is_active=bool(model.is_active),
            is_default=bool(model.is_default),
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_by=model.updated_by,
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationTemplateRepository"]
