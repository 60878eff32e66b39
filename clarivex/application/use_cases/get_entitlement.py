from __future__ import annotations

import asyncio

from clarivex.application.dto.me import EntitlementOutput
from clarivex.application.ports.entitlements_port import EntitlementsPort
from clarivex.domain.entities.identity import Identity


class GetEntitlementUseCase:
    def __init__(self, *, entitlements_port: EntitlementsPort):
        self._entitlements_port = entitlements_port

    async def execute(self, *, identity: Identity) -> EntitlementOutput:
        entitlement = await asyncio.to_thread(
            self._entitlements_port.get_entitlement,
            external_id=identity.external_id,
        )
        if entitlement is None:
            return EntitlementOutput(id=identity.external_id, premium=False, granted_at=None)
        return EntitlementOutput(
            id=identity.external_id,
            premium=entitlement.is_premium,
            granted_at=entitlement.granted_at,
        )
