"""Сервисный модуль для управления лидами."""

import logging
from decimal import Decimal, InvalidOperation

from peewee import ModelSelect

from database.models import Lead
from services.validators import normalize_number
from .dto import LeadDTO, LeadFields

logger = logging.getLogger(__name__)


class LeadNotFoundError(LookupError):
    """Лид с запрошенным идентификатором не найден."""


def get_all_leads() -> ModelSelect:
    return Lead.select().order_by(Lead.created_at.desc(), Lead.name.asc())


def get_leads_dto() -> list[LeadDTO]:
    return [LeadDTO.from_model(lead) for lead in get_all_leads()]


def parse_amount(value) -> Decimal:
    """Сумма лида из ``Decimal``, числа или выражения вроде ``10*500``."""
    if isinstance(value, Decimal):
        amount = value
    else:
        text = normalize_number(value)
        if not text:
            return Decimal("0")
        try:
            amount = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"Некорректная сумма: {value!r}") from None
    if amount < 0:
        raise ValueError("Сумма не может быть отрицательной")
    return amount


def _clean(fields: LeadFields) -> dict:
    data = fields.to_payload()
    data["name"] = (data["name"] or "").strip()
    if not data["name"]:
        raise ValueError("Поле 'name' обязательно")
    data["contact_info"] = (data["contact_info"] or "").strip()
    data["notes"] = data["notes"] or ""
    data["estimated_amount"] = parse_amount(data["estimated_amount"])
    return data


def create_lead(fields: LeadFields) -> LeadDTO:
    lead = Lead.create(**_clean(fields))
    logger.info("✅ Создан лид id=%s: %s", lead.id, lead.name)
    return LeadDTO.from_model(lead)


def update_lead(lead_id: str, fields: LeadFields) -> LeadDTO:
    lead = Lead.get_or_none(Lead.id == lead_id)
    if lead is None:
        raise LeadNotFoundError(f"Лид id={lead_id} не найден")
    for key, value in _clean(fields).items():
        setattr(lead, key, value)
    lead.save()
    logger.info("✏️ Обновлён лид id=%s", lead.id)
    return LeadDTO.from_model(lead)


def delete_lead(lead_id: str) -> None:
    deleted = Lead.delete().where(Lead.id == lead_id).execute()
    if not deleted:
        raise LeadNotFoundError(f"Лид id={lead_id} не найден")
    logger.info("🗑 Удалён лид id=%s", lead_id)
