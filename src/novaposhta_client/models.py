"""Value objects for shipment input and the computations derived from them."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import StrEnum

from novaposhta_client.exceptions import ResolutionError

_REF_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


class ServiceType(StrEnum):
    WAREHOUSE_WAREHOUSE = "WarehouseWarehouse"
    WAREHOUSE_DOORS = "WarehouseDoors"
    DOORS_WAREHOUSE = "DoorsWarehouse"
    DOORS_DOORS = "DoorsDoors"


class PayerType(StrEnum):
    SENDER = "Sender"
    RECIPIENT = "Recipient"
    THIRD_PERSON = "ThirdPerson"


class PaymentMethod(StrEnum):
    CASH = "Cash"
    NON_CASH = "NonCash"


class CargoType(StrEnum):
    PARCEL = "Parcel"
    CARGO = "Cargo"
    DOCUMENTS = "Documents"
    TIRES_WHEELS = "TiresWheels"
    PALLET = "Pallet"


class CounterpartyProperty(StrEnum):
    SENDER = "Sender"
    RECIPIENT = "Recipient"


class BackwardCargoType(StrEnum):
    MONEY = "Money"


class AddressKind(StrEnum):
    WAREHOUSE = "warehouse"
    POCHTOMAT = "pochtomat"
    STREET = "street"


def is_ref(value: str) -> bool:
    """Return True when ``value`` looks like a carrier reference id."""
    return bool(_REF_RE.match(value.strip()))


def format_date(value: date) -> str:
    """Render a date as ``day.month.year`` without zero padding."""
    return f"{value.day}.{value.month}.{value.year}"


@dataclass(frozen=True)
class OptionsSeat:
    """Dimensions of a single seat; centimetres, cubic metres and kilograms."""

    volume: Decimal
    width: int
    length: int
    height: int
    weight: Decimal

    @classmethod
    def half_kilogram(cls) -> OptionsSeat:
        return cls(
            volume=Decimal("0.5"),
            width=20,
            length=20,
            height=5,
            weight=Decimal("0.5"),
        )


@dataclass(frozen=True)
class Cargo:
    cost: int
    options_seat: OptionsSeat
    payment_on_delivery: bool = False
    description: str = ""

    @property
    def weight(self) -> Decimal:
        return self.options_seat.weight


@dataclass(frozen=True)
class CargoSummary:
    """One shipment line aggregated from several cargos."""

    seats: int
    weight: Decimal
    cost: int
    cash_on_delivery: int
    description: str


def aggregate_cargos(cargos: Iterable[Cargo]) -> CargoSummary:
    """Collapse cargos into one shipment line.

    The description of the last cargo wins; earlier descriptions are dropped.
    """
    seats = 0
    weight = Decimal("0")
    cost = 0
    cash_on_delivery = 0
    description = ""
    for cargo in cargos:
        seats += 1
        weight += Decimal(str(cargo.weight))
        cost += cargo.cost
        description = cargo.description
        if cargo.payment_on_delivery:
            cash_on_delivery += cargo.cost
    if seats == 0:
        raise ResolutionError("A shipment needs at least one cargo")
    return CargoSummary(
        seats=seats,
        weight=weight,
        cost=cost,
        cash_on_delivery=cash_on_delivery,
        description=description,
    )


@dataclass(frozen=True)
class Address:
    """Recipient delivery target; exactly one kind must be populated."""

    warehouse_number: str | None = None
    pochtomat_number: str | None = None
    street_name: str | None = None
    house: str | None = None
    flat: str | None = None

    @classmethod
    def warehouse(cls, number: int | str) -> Address:
        return cls(warehouse_number=str(number))

    @classmethod
    def pochtomat(cls, number: int | str) -> Address:
        return cls(pochtomat_number=str(number))

    @classmethod
    def street(cls, name: str, house: str, flat: str = "") -> Address:
        return cls(street_name=name, house=house, flat=flat)

    @property
    def kind(self) -> AddressKind:
        """Return the single populated target kind.

        Raises:
            ResolutionError: no kind or more than one kind is populated.
        """
        kinds = []
        if self.warehouse_number:
            kinds.append(AddressKind.WAREHOUSE)
        if self.pochtomat_number:
            kinds.append(AddressKind.POCHTOMAT)
        if self.street_name:
            kinds.append(AddressKind.STREET)
        if len(kinds) != 1:
            raise ResolutionError(
                "Recipient address must specify exactly one target "
                "(warehouse, pochtomat or street)"
            )
        return kinds[0]

    @property
    def service_type(self) -> ServiceType:
        if self.kind is AddressKind.STREET:
            return ServiceType.WAREHOUSE_DOORS
        return ServiceType.WAREHOUSE_WAREHOUSE


@dataclass(frozen=True)
class Recipient:
    city_name: str
    full_name: str
    phone: str
    address: Address
    is_payer: bool = False


@dataclass(frozen=True)
class Sender:
    city_name: str
    warehouse_number: str
    phone: str


@dataclass(frozen=True)
class TrackedDocument:
    """Tracking query item; the phone unlocks recipient details."""

    number: str
    phone: str | None = None
