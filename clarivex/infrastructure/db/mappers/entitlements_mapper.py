from __future__ import annotations

from clarivex.domain.entities.entitlement import Entitlement
from clarivex.infrastructure.db.models.entitlements import EntitlementModel


def map_model_to_entitlement(model: EntitlementModel) -> Entitlement:
    return Entitlement(
        external_id=str(model.external_id),
        is_premium=bool(model.is_premium),
        granted_at=model.granted_at,
    )
