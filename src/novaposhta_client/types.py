"""Typed records decoded from the ``data`` list of carrier responses.

Each raw operation fixes exactly one of these types. All fields are optional
because the carrier does not guarantee its schema: missing keys decode to
``None`` and unknown keys are ignored.

The carrier renders numbers inconsistently (``150``, ``"150"``, ``"150.00"``
and ``""`` all occur). Money and weight fields decode to ``Decimal`` with
blank strings mapped to ``None``; identifier-like values such as warehouse
numbers, coordinates and phones decode to ``str`` even when sent as numbers.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_pascal

from novaposhta_client.envelope import NovaResponse


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _to_text(value: Any) -> Any:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    return value


Amount = Annotated[Decimal | None, BeforeValidator(_blank_to_none)]
Text = Annotated[str | None, BeforeValidator(_to_text)]


class Record(BaseModel):
    """Base for carrier records: PascalCase keys, tolerant of extras."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="ignore",
    )


class City(Record):
    ref: Text = None
    description: Text = None
    description_ru: Text = None
    area: Text = None
    settlement_type_description: Text = None
    city_id: Text = Field(default=None, alias="CityID")


class Warehouse(Record):
    ref: Text = None
    description: Text = None
    short_address: Text = None
    number: Text = None
    city_ref: Text = None
    city_description: Text = None
    phone: Text = None
    longitude: Text = None
    latitude: Text = None
    place_max_weight_allowed: Amount = None
    total_max_weight_allowed: Amount = None
    type_of_warehouse: Text = None
    deny_to_select: Text = None


class ContactPerson(Record):
    ref: Text = None
    description: Text = None
    first_name: Text = None
    middle_name: Text = None
    last_name: Text = None
    phones: Text = None
    email: Text = None


class Counterparty(Record):
    ref: Text = None
    description: Text = None
    first_name: Text = None
    middle_name: Text = None
    last_name: Text = None
    counterparty_type: Text = None
    ownership_form_description: Text = None
    edrpou: Text = Field(default=None, alias="EDRPOU")
    contact_person: NovaResponse[ContactPerson] | None = None


class CreatedDocument(Record):
    ref: Text = None
    int_doc_number: Text = None
    cost_on_site: Amount = None
    estimated_delivery_date: Text = None
    type_document: Text = None


class DeletedDocument(Record):
    ref: Text = None


class DocumentListItem(Record):
    ref: Text = None
    int_doc_number: Text = None
    state_name: Text = None
    cost: Amount = None
    cost_on_site: Amount = None
    estimated_delivery_date: Text = None
    city_sender_description: Text = None
    city_recipient_description: Text = None
    recipient_contact_phone: Text = None
    create_time: Text = None


class DocumentPrice(Record):
    cost: Amount = None
    cost_redelivery: Amount = None
    assessed_cost: Amount = None


class DeliveryDateValue(BaseModel):
    """Nested date object; the carrier uses lower-case keys here."""

    date: str | None = None
    timezone: str | None = None


class DeliveryDate(Record):
    delivery_date: DeliveryDateValue | None = None


class TrackingStatus(Record):
    number: Text = None
    status: Text = None
    status_code: Text = None
    ref_ew: Text = Field(default=None, alias="RefEW")
    date_created: Text = None
    scheduled_delivery_date: Text = None
    recipient_date_time: Text = None
    recipient_address: Text = None
    recipient_full_name: Text = None
    phone_recipient: Text = None
    city_sender: Text = None
    city_recipient: Text = None
    warehouse_recipient: Text = None
    warehouse_recipient_number: Text = None
    document_cost: Amount = None
    document_weight: Amount = None
    amount_to_pay: Amount = None
    amount_paid: Amount = None
    redelivery_sum: Amount = None
    cargo_type: Text = None
    cargo_description_string: Text = None
    service_type: Text = None
    payer_type: Text = None
    payment_method: Text = None
    undelivery_reasons: Text = None


class ScanSheet(Record):
    ref: Text = None
    number: Text = None
    date: Text = None
    date_time: Text = None
    printed: Text = None
    description: Text = None
    errors: list[Any] = Field(default_factory=list)
    warnings: list[Any] = Field(default_factory=list)
    success: list[Any] = Field(default_factory=list)


class ScanSheetDeletion(Record):
    ref: Text = None
    number: Text = None
    error: Text = None


class ReferenceItem(Record):
    """Entry of a ``Common`` reference book (payer types, cargo types...)."""

    ref: Text = None
    description: Text = None
