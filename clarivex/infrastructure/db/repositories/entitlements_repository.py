from __future__ import annotations

from datetime import datetime

from sqlalchemy.exc import IntegrityError

from clarivex.application.ports.entitlements_port import EntitlementsPort
from clarivex.domain.entities.entitlement import Entitlement
from clarivex.infrastructure.db.mappers.entitlements_mapper import map_model_to_entitlement
from clarivex.infrastructure.db.models.entitlements import (
    EntitlementModel,
    ProcessedWebhookEventModel,
)


class SqlEntitlementsRepository(EntitlementsPort):
    def __init__(self, session_factory):
        self._session_factory = session_factory

    def get_entitlement(self, *, external_id: str) -> Entitlement | None:
        with self._session_factory() as session:
            model = session.get(EntitlementModel, external_id)
            if model is None:
                return None
            return map_model_to_entitlement(model)

    def grant_premium(self, *, external_id: str, now: datetime) -> Entitlement:
        try:
            return self._upsert_premium(external_id=external_id, now=now)
        except IntegrityError:
            # Lost an insert race against a concurrent delivery; the row exists now.
            return self._upsert_premium(external_id=external_id, now=now)

    def claim_webhook_event(self, *, event_id: str, event_type: str, now: datetime) -> bool:
        try:
            with self._session_factory.begin() as session:
                session.add(
                    ProcessedWebhookEventModel(
                        event_id=event_id,
                        event_type=event_type,
                        processed_at=now,
                    )
                )
        except IntegrityError:
            return not self._is_notified(event_id=event_id)
        return True

    def mark_webhook_event_notified(self, *, event_id: str, now: datetime) -> None:
        with self._session_factory.begin() as session:
            model = session.get(ProcessedWebhookEventModel, event_id)
            if model is not None and model.notified_at is None:
                model.notified_at = now

    def _is_notified(self, *, event_id: str) -> bool:
        with self._session_factory() as session:
            model = session.get(ProcessedWebhookEventModel, event_id)
            return model is not None and model.notified_at is not None

    def _upsert_premium(self, *, external_id: str, now: datetime) -> Entitlement:
        with self._session_factory.begin() as session:
            model = session.get(EntitlementModel, external_id)
            if model is None:
                model = EntitlementModel(
                    external_id=external_id,
                    is_premium=True,
                    granted_at=now,
                    updated_at=now,
                )
                session.add(model)
            elif not model.is_premium or model.granted_at is None:
                model.is_premium = True
                model.granted_at = model.granted_at or now
                model.updated_at = now
            session.flush()
            return map_model_to_entitlement(model)
