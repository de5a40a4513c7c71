"""Pydantic serializers for payout timestamps."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import field_serializer


class PayoutTimestampsMixin:
    """Emit payout timestamps as ISO-8601 strings, keeping absent ones as None.

    ``check_fields=False`` lets models that only declare some of these
    fields share the mixin.
    """

    @field_serializer(
        "created_at",
        "updated_at",
        "paid_at",
        "period_from",
        "period_to",
        check_fields=False,
    )
    def serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value is not None else None
