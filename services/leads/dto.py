from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from database.models import Lead


@dataclass
class LeadDTO:
    id: str
    name: str
    contact_info: str = ""
    estimated_amount: Decimal = Decimal("0")
    notes: str = ""
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, lead: Lead) -> "LeadDTO":
        return cls(
            id=lead.id,
            name=lead.name,
            contact_info=lead.contact_info or "",
            estimated_amount=Decimal(lead.estimated_amount or 0),
            notes=lead.notes or "",
            created_at=lead.created_at,
        )


@dataclass(frozen=True)
class LeadFields:
    """Редактируемые поля лида; обновление передаёт их все."""

    name: str = ""
    contact_info: str = ""
    estimated_amount: Decimal = Decimal("0")
    notes: str = ""

    @classmethod
    def from_lead(cls, lead: LeadDTO) -> "LeadFields":
        return cls(
            name=lead.name,
            contact_info=lead.contact_info,
            estimated_amount=lead.estimated_amount,
            notes=lead.notes,
        )

    def to_payload(self) -> dict:
        return {
            "name": self.name,
            "contact_info": self.contact_info,
            "estimated_amount": self.estimated_amount,
            "notes": self.notes,
        }
