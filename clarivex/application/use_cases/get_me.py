from __future__ import annotations

from clarivex.application.dto.me import MeOutput
from clarivex.domain.entities.identity import Identity


class GetMeUseCase:
    def execute(self, *, identity: Identity) -> MeOutput:
        return MeOutput(
            id=identity.external_id,
            username=identity.username,
            discriminator=identity.discriminator,
            avatar=identity.avatar,
        )
