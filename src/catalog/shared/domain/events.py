"""Domain events primitives shared by the catalog modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Base domain event (immutable).

    Subclasses declare their payload as keyword-only fields so the
    defaulted metadata below never clashes with required payload fields.
    """

    event_id: UUID = field(default_factory=uuid4, kw_only=True)
    occurred_on: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), kw_only=True
    )
    event_name: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "event_name", self.__class__.__name__)
