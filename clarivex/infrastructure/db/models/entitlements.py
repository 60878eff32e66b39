from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from clarivex.infrastructure.db.engine import Base


class EntitlementModel(Base):
    __tablename__ = "entitlements"

    external_id: Mapped[str] = mapped_column(Text, primary_key=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    granted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class ProcessedWebhookEventModel(Base):
    __tablename__ = "processed_webhook_events"

    event_id: Mapped[str] = mapped_column(Text, primary_key=True)
    event_type: Mapped[str] = mapped_column(Text, nullable=False)
    processed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    notified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
