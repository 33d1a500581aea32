"""Persistence layer for notification preferences."""

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.domain.entities import NotificationPreference, QuietHours
from app.infrastructure.models import NotificationPreferenceModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class NotificationPreferenceRepository:
    """Provide CRUD operations for ``(user, type, channel)`` preferences."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(self, user_id: str) -> Sequence[NotificationPreference]:
        models = (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.user_id == user_id)
            .order_by(
                NotificationPreferenceModel.channel.asc(),
                NotificationPreferenceModel.type.asc(),
            )
            .all()
        )
        return [self._to_entity(model) for model in models]

    def get(self, preference_id: str) -> NotificationPreference | None:
        model = self.session.get(NotificationPreferenceModel, preference_id)
        return self._to_entity(model) if model else None

    def get_by_key(
        self, user_id: str, type: str, channel: str
    ) -> NotificationPreference | None:
        model = self._get_model_by_key(user_id, type, channel)
        return self._to_entity(model) if model else None

    def create_many(
        self, preferences: Iterable[NotificationPreference]
    ) -> list[NotificationPreference]:
        """Insert ``preferences`` in a single transaction.

        ``IntegrityError`` propagates untouched so callers can detect that a
        concurrent request already seeded the same rows.
        """

        models: list[NotificationPreferenceModel] = []
        for preference in preferences:
            model = NotificationPreferenceModel()
            self._apply_entity_to_model(model, preference)
            model.created_at = ensure_app_naive_datetime(
                preference.created_at or now_in_app_timezone()
            )
            model.updated_at = model.created_at
            self.session.add(model)
            models.append(model)
        self.session.commit()
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def upsert(self, preference: NotificationPreference) -> NotificationPreference:
        """Create or overwrite the preference matching its natural key."""

        model = self._get_model_by_key(
            preference.user_id, preference.type, preference.channel
        )
        if model is None:
            model = NotificationPreferenceModel()
            model.created_at = ensure_app_naive_datetime(now_in_app_timezone())
        self._apply_entity_to_model(model, preference)
        model.updated_at = ensure_app_naive_datetime(now_in_app_timezone())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, preference_id: str) -> bool:
        model = self.session.get(NotificationPreferenceModel, preference_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def _get_model_by_key(
        self, user_id: str, type: str, channel: str
    ) -> NotificationPreferenceModel | None:
        return (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.user_id == user_id)
            .filter(NotificationPreferenceModel.type == type)
            .filter(NotificationPreferenceModel.channel == channel)
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationPreferenceModel, preference: NotificationPreference
    ) -> None:
        model.user_id = preference.user_id
        model.organization_id = preference.organization_id
        model.type = preference.type
        model.channel = preference.channel
        model.enabled = preference.enabled
        model.frequency = preference.frequency
        model.quiet_hours = (
            preference.quiet_hours.to_dict() if preference.quiet_hours else None
        )

    @staticmethod
    def _to_entity(model: NotificationPreferenceModel) -> NotificationPreference:
        return NotificationPreference(
            id=model.id,
            user_id=model.user_id,
            organization_id=model.organization_id,
            type=model.type,
            channel=model.channel,
            enabled=bool(model.enabled),
            frequency=model.frequency,
            quiet_hours=QuietHours.from_dict(model.quiet_hours),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationPreferenceRepository"]
