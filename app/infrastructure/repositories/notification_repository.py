"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from app.domain.entities import (
    STATUS_DELIVERED,
    STATUS_FAILED,
    STATUS_SCHEDULED,
    STATUS_SENT,
    Notification,
    NotificationFilters,
    NotificationStats,
)
from app.infrastructure.models import NotificationModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
    start_of_app_day,
)

# Delivered notifications were sent first.
_SENT_STATUSES = (STATUS_SENT, STATUS_DELIVERED)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects.

    Mutating methods commit by default. Use cases that need several writes in
    one transaction pass ``commit=False`` and commit the session themselves.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: str) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def create(self, notification: Notification, *, commit: bool = True) -> Notification:
        model = NotificationModel()
        if notification.id is not None:
            model.id = notification.id
        self._apply_entity_to_model(model, notification)
        model.created_at = ensure_app_naive_datetime(
            notification.created_at or now_in_app_timezone()
        )
        model.updated_at = model.created_at
        self.session.add(model)
        self._flush_or_commit(model, commit)
        return self._to_entity(model)

    def update(self, notification: Notification, *, commit: bool = True) -> Notification:
        if notification.id is None:
            raise ValueError("Notification id is required for updates")
        model = self._require_model(notification.id)
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self._flush_or_commit(model, commit)
        return self._to_entity(model)

    def update_status(
        self,
        notification_id: str,
        status: str,
        *,
        sent_at: datetime | None = None,
        updated_at: datetime | None = None,
        commit: bool = True,
    ) -> Notification:
        model = self._require_model(notification_id)
        model.status = status
        if sent_at is not None:
            model.sent_at = ensure_app_naive_datetime(sent_at)
        model.updated_at = ensure_app_naive_datetime(updated_at or now_in_app_timezone())
        self.session.add(model)
        self._flush_or_commit(model, commit)
        return self._to_entity(model)

    def mark_as_read(
        self, notification_id: str, *, read_at: datetime, commit: bool = True
    ) -> Notification:
        model = self._require_model(notification_id)
        model.read_at = ensure_app_naive_datetime(read_at)
        self.session.add(model)
        self._flush_or_commit(model, commit)
        return self._to_entity(model)

    def mark_all_as_read(self, user_id: str, *, read_at: datetime) -> int:
        count = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.read_at.is_(None))
            .filter(NotificationModel.sent_at.is_not(None))
            .update(
                {NotificationModel.read_at: ensure_app_naive_datetime(read_at)},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return int(count or 0)

    def delete(self, notification_id: str) -> bool:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def list_with_filters(
        self,
        organization_id: str,
        filters: NotificationFilters,
        *,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Notification], int]:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.organization_id == organization_id
        )
        query = self._apply_filters(query, filters)
        total = query.count()
        models = (
            query.order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    def list_for_user(
        self, user_id: str, *, unread_only: bool = False, limit: int | None = 50
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if unread_only:
            query = query.filter(NotificationModel.read_at.is_(None)).filter(
                NotificationModel.sent_at.is_not(None)
            )
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: str, *, organization_id: str | None = None) -> int:
        query = (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.read_at.is_(None))
            .filter(NotificationModel.sent_at.is_not(None))
        )
        if organization_id is not None:
            query = query.filter(NotificationModel.organization_id == organization_id)
        return int(query.scalar() or 0)

    def list_scheduled_before(
        self, when: datetime, *, limit: int | None = None
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.status == STATUS_SCHEDULED)
            .filter(NotificationModel.scheduled_for <= ensure_app_naive_datetime(when))
            .order_by(NotificationModel.scheduled_for.asc(), NotificationModel.id.asc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def get_stats(
        self,
        *,
        organization_id: str | None = None,
        user_id: str | None = None,
        now: datetime | None = None,
    ) -> NotificationStats:
        base = self.session.query(NotificationModel)
        if organization_id is not None:
            base = base.filter(NotificationModel.organization_id == organization_id)
        if user_id is not None:
            base = base.filter(NotificationModel.user_id == user_id)

        day_start = ensure_app_naive_datetime(start_of_app_day(now))

        total = base.count()
        unread = (
            base.filter(NotificationModel.read_at.is_(None))
            .filter(NotificationModel.sent_at.is_not(None))
            .count()
        )
        sent_today = (
            base.filter(NotificationModel.status.in_(_SENT_STATUSES))
            .filter(NotificationModel.sent_at >= day_start)
            .count()
        )
        failed_today = (
            base.filter(NotificationModel.status == STATUS_FAILED)
            .filter(NotificationModel.updated_at >= day_start)
            .count()
        )
        by_type = {
            type_: count
            for type_, count in base.with_entities(
                NotificationModel.type, func.count(NotificationModel.id)
            )
            .group_by(NotificationModel.type)
            .all()
        }
        by_channel = {
            channel: count
            for channel, count in base.with_entities(
                NotificationModel.channel, func.count(NotificationModel.id)
            )
            .group_by(NotificationModel.channel)
            .all()
        }
        return NotificationStats(
            total_notifications=total,
            unread_count=unread,
            sent_today=sent_today,
            failed_today=failed_today,
            by_type=by_type,
            by_channel=by_channel,
        )

    def _require_model(self, notification_id: str) -> NotificationModel:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            msg = f"Notification with id {notification_id} not found"
            raise ValueError(msg)
        return model

    def _flush_or_commit(self, model: NotificationModel, commit: bool) -> None:
        if commit:
            self.session.commit()
            self.session.refresh(model)
        else:
            self.session.flush()

    @staticmethod
    def _apply_filters(query: Query, filters: NotificationFilters) -> Query:
        if filters.user_id is not None:
            query = query.filter(NotificationModel.user_id == filters.user_id)
        if filters.type is not None:
            query = query.filter(NotificationModel.type == filters.type)
        if filters.channel is not None:
            query = query.filter(NotificationModel.channel == filters.channel)
        if filters.status is not None:
            query = query.filter(NotificationModel.status == filters.status)
        if filters.priority is not None:
            query = query.filter(NotificationModel.priority == filters.priority)
        if filters.date_from is not None:
            query = query.filter(
                NotificationModel.created_at >= ensure_app_naive_datetime(filters.date_from)
            )
        if filters.date_to is not None:
            query = query.filter(
                NotificationModel.created_at <= ensure_app_naive_datetime(filters.date_to)
            )
        if filters.unread_only:
            query = query.filter(NotificationModel.read_at.is_(None)).filter(
                NotificationModel.sent_at.is_not(None)
            )
        return query

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.user_id = notification.user_id
        model.organization_id = notification.organization_id
        model.type = notification.type
        model.channel = notification.channel
        model.title = notification.title
        model.content = notification.content
        model.subject = notification.subject
        model.data = dict(notification.data or {})
        model.status = notification.status
        model.priority = notification.priority
        model.scheduled_for = ensure_app_naive_datetime(notification.scheduled_for)
        model.sent_at = ensure_app_naive_datetime(notification.sent_at)
        model.read_at = ensure_app_naive_datetime(notification.read_at)
        model.template_id = notification.template_id
        model.related_entity_type = notification.related_entity_type
        model.related_entity_id = notification.related_entity_id

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            organization_id=model.organization_id,
            type=model.type,
            channel=model.channel,
            title=model.title,
            content=model.content,
            subject=model.subject,
            data=dict(model.data or {}),
            status=model.status,
            priority=model.priority,
            scheduled_for=ensure_app_timezone(model.scheduled_for),
            sent_at=ensure_app_timezone(model.sent_at),
            read_at=ensure_app_timezone(model.read_at),
            template_id=model.template_id,
            related_entity_type=model.related_entity_type,
            related_entity_id=model.related_entity_id,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationRepository"]
