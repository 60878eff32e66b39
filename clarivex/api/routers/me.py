from __future__ import annotations

from fastapi import APIRouter, Depends

from clarivex.api.deps import get_current_session, get_get_entitlement_use_case, get_get_me_use_case
from clarivex.api.schemas.me import EntitlementResponse, MeResponse
from clarivex.application.use_cases.get_entitlement import GetEntitlementUseCase
from clarivex.application.use_cases.get_me import GetMeUseCase
from clarivex.domain.entities.identity import UserSession


router = APIRouter()


@router.get("/api/me", response_model=MeResponse)
def get_me(
    session: UserSession = Depends(get_current_session),
    use_case: GetMeUseCase = Depends(get_get_me_use_case),
):
    output = use_case.execute(identity=session.identity)
    return MeResponse(
        id=output.id,
        username=output.username,
        discriminator=output.discriminator,
        avatar=output.avatar,
    )


@router.get("/api/entitlement", response_model=EntitlementResponse)
async def get_entitlement(
    session: UserSession = Depends(get_current_session),
    use_case: GetEntitlementUseCase = Depends(get_get_entitlement_use_case),
):
    output = await use_case.execute(identity=session.identity)
    return EntitlementResponse(
        id=output.id,
        premium=output.premium,
        granted_at=output.granted_at,
    )
