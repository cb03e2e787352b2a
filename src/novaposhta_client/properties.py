"""Outbound ``methodProperties`` models, one per operation group.

Each call builds a fresh model, and ``None`` fields are omitted when the
envelope is encoded, so fields from one method never leak into another.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel, to_pascal

from novaposhta_client.models import (
    BackwardCargoType,
    CargoType,
    CounterpartyProperty,
    OptionsSeat,
    PayerType,
    PaymentMethod,
    ServiceType,
)


class Properties(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        frozen=True,
    )


class CityQuery(Properties):
    find_by_string: str | None = None
    page: int | None = None
    limit: int | None = None


class WarehouseQuery(Properties):
    city_ref: str | None = None
    city_name: str | None = None
    find_by_string: str | None = None
    page: int | None = None
    limit: int | None = None


class CounterpartyQuery(Properties):
    counterparty_property: CounterpartyProperty
    find_by_string: str | None = None
    page: int | None = None


class CounterpartyCreate(Properties):
    first_name: str
    last_name: str
    phone: str
    counterparty_property: CounterpartyProperty
    counterparty_type: str = "PrivatePerson"
    middle_name: str | None = None
    email: str | None = None


class RefQuery(Properties):
    ref: str
    page: int | None = None


class ContactPersonCreate(Properties):
    counterparty_ref: str
    first_name: str
    last_name: str
    phone: str
    middle_name: str = ""


class SeatProperties(BaseModel):
    """Per-seat dimensions; the carrier expects camelCase keys here."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    volumetric_volume: str
    volumetric_width: str
    volumetric_length: str
    volumetric_height: str
    weight: str

    @classmethod
    def from_seat(cls, seat: OptionsSeat) -> SeatProperties:
        return cls(
            volumetric_volume=str(seat.volume),
            volumetric_width=str(seat.width),
            volumetric_length=str(seat.length),
            volumetric_height=str(seat.height),
            weight=str(seat.weight),
        )


class BackwardDeliveryData(Properties):
    payer_type: PayerType = PayerType.RECIPIENT
    cargo_type: BackwardCargoType = BackwardCargoType.MONEY
    redelivery_string: str

    @classmethod
    def money(cls, amount: int) -> BackwardDeliveryData:
        """Cash-on-delivery collected from the recipient."""
        return cls(redelivery_string=str(amount))


class RedeliveryCalculate(Properties):
    cargo_type: BackwardCargoType = BackwardCargoType.MONEY
    amount: str

    @classmethod
    def money(cls, amount: int) -> RedeliveryCalculate:
        return cls(amount=str(amount))


@dataclass(frozen=True)
class WarehouseTarget:
    """Deliver to a branch identified by its city-scoped number."""

    number: str


@dataclass(frozen=True)
class PochtomatTarget:
    """Deliver to a parcel locker, already resolved to its reference id."""

    ref: str


@dataclass(frozen=True)
class StreetTarget:
    name: str
    house: str
    flat: str = ""


RecipientTarget = WarehouseTarget | PochtomatTarget | StreetTarget


class DocumentSave(Properties):
    new_address: str = "1"
    payer_type: PayerType
    payment_method: PaymentMethod
    cargo_type: CargoType
    weight: str
    service_type: ServiceType
    seats_amount: str
    description: str
    cost: str
    city_sender: str
    sender: str
    sender_address: str
    contact_sender: str
    senders_phone: str
    recipient_city_name: str
    recipient_area: str = ""
    recipient_area_regions: str = ""
    recipient_address_name: str = ""
    recipient_address: str | None = None
    recipient_house: str = ""
    recipient_flat: str = ""
    recipient_name: str
    recipient_type: str = "PrivatePerson"
    recipients_phone: str
    date_time: str
    options_seat: list[SeatProperties] | None = None
    backward_delivery_data: list[BackwardDeliveryData] | None = None


def recipient_target_fields(target: RecipientTarget) -> dict[str, str]:
    """Address properties populated for the given recipient target kind."""
    if isinstance(target, WarehouseTarget):
        return {"recipient_address_name": target.number}
    if isinstance(target, PochtomatTarget):
        return {"recipient_address": target.ref}
    if isinstance(target, StreetTarget):
        return {
            "recipient_address_name": target.name,
            "recipient_house": target.house,
            "recipient_flat": target.flat,
        }
    raise TypeError(f"Unsupported recipient target: {target!r}")


class DocumentRefs(Properties):
    document_refs: list[str]


class DocumentListQuery(Properties):
    date_time_from: str | None = None
    date_time_to: str | None = None
    get_full_list: str = "1"
    page: int | None = None


class DocumentPriceQuery(Properties):
    city_sender: str
    city_recipient: str
    weight: str
    service_type: ServiceType
    cost: str
    cargo_type: CargoType
    seats_amount: str
    date_time: str | None = None
    redelivery_calculate: RedeliveryCalculate | None = None


class DeliveryDateQuery(Properties):
    date_time: str
    service_type: ServiceType
    city_sender: str
    city_recipient: str


class TrackingItem(Properties):
    document_number: str
    phone: str = ""


class TrackingQuery(Properties):
    documents: list[TrackingItem]


class ScanSheetInsert(Properties):
    document_refs: list[str]
    ref: str | None = None
    date: str | None = None


class ScanSheetRefs(Properties):
    scan_sheet_refs: list[str]


class ScanSheetRemove(Properties):
    document_refs: list[str]
    ref: str | None = None


def decimal_text(value: Decimal | float | int) -> str:
    """Render a number the way the carrier expects it in string properties."""
    return format(Decimal(str(value)).normalize(), "f")
