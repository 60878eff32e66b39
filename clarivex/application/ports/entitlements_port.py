from __future__ import annotations

from datetime import datetime
from typing import Protocol

from clarivex.domain.entities.entitlement import Entitlement


class EntitlementsPort(Protocol):
    def get_entitlement(self, *, external_id: str) -> Entitlement | None:
        ...

    def grant_premium(self, *, external_id: str, now: datetime) -> Entitlement:
        ...

    def claim_webhook_event(self, *, event_id: str, event_type: str, now: datetime) -> bool:
        ...

    def mark_webhook_event_notified(self, *, event_id: str, now: datetime) -> None:
        ...
