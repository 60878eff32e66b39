from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Entitlement:
    external_id: str
    is_premium: bool
    granted_at: datetime | None
