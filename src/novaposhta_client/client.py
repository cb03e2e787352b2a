"""High-level workflows composed from raw operations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, TypeVar

from novaposhta_client.config import NovaPoshtaConfig
from novaposhta_client.exceptions import (
    CityNotFoundError,
    EmptyResult,
    ResolutionError,
    WarehouseNotFoundError,
)
from novaposhta_client.models import (
    AddressKind,
    Cargo,
    CargoType,
    CounterpartyProperty,
    PayerType,
    PaymentMethod,
    Recipient,
    Sender,
    ServiceType,
    TrackedDocument,
    aggregate_cargos,
)
from novaposhta_client.properties import (
    BackwardDeliveryData,
    PochtomatTarget,
    RecipientTarget,
    RedeliveryCalculate,
    StreetTarget,
    WarehouseTarget,
)
from novaposhta_client.protocols import Transport
from novaposhta_client.raw import NovaPoshtaRaw
from novaposhta_client.types import (
    City,
    ContactPerson,
    Counterparty,
    DeletedDocument,
    DeliveryDate,
    DocumentPrice,
    TrackingStatus,
    Warehouse,
)

logger = logging.getLogger(__name__)

PRICE_ESTIMATE_LEAD = timedelta(weeks=1)

RecordT = TypeVar("RecordT")


def _require_ref(record: RecordT, what: str) -> RecordT:
    if not getattr(record, "ref", None):
        raise ResolutionError(f"Carrier returned {what} without a Ref")
    return record


async def _run_together(*lookups: Awaitable[Any]) -> list[Any]:
    """Await lookups concurrently; the first failure cancels the rest."""
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(lookup) for lookup in lookups]
    except ExceptionGroup as failures:
        raise failures.exceptions[0] from None
    return [task.result() for task in tasks]


@dataclass(frozen=True)
class ShipmentReceipt:
    """Result of a created shipment."""

    tracking_number: str
    ref: str
    cost: Decimal | None
    estimated_delivery_date: str | None


@dataclass(frozen=True)
class SenderIdentity:
    counterparty: Counterparty
    contact: ContactPerson


class NovaPoshta:
    """Shipment workflows that resolve human-level input into carrier refs."""

    def __init__(
        self,
        config: NovaPoshtaConfig | str,
        *,
        transport: Transport | None = None,
        raw: NovaPoshtaRaw | None = None,
    ) -> None:
        if isinstance(config, str):
            config = NovaPoshtaConfig(api_key=config)
        self.raw = raw or NovaPoshtaRaw(config, transport=transport)
        self.config = config

    async def aclose(self) -> None:
        await self.raw.aclose()

    async def __aenter__(self) -> NovaPoshta:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # -- lookups ---------------------------------------------------------

    async def resolve_city(self, name: str) -> City:
        response = await self.raw.get_cities(name)
        try:
            city = response.first_or_error()
        except EmptyResult as exc:
            raise CityNotFoundError(name) from exc
        return _require_ref(city, f"city {name!r}")

    async def resolve_sender_identity(self) -> SenderIdentity:
        """Default sender counterparty and its first contact person."""
        counterparties = await self.raw.search_counterparty(
            counterparty_type=CounterpartyProperty.SENDER
        )
        counterparty = _require_ref(
            counterparties.first_or_error(), "the sender counterparty"
        )
        contacts = await self.raw.get_counterparty_contact_persons(
            counterparty.ref
        )
        contact = _require_ref(
            contacts.first_or_error(), "the sender contact person"
        )
        return SenderIdentity(counterparty=counterparty, contact=contact)

    async def resolve_warehouse(
        self, city: str, number: str, *, city_label: str | None = None
    ) -> Warehouse:
        """Find the warehouse with ``number`` among the city's warehouses.

        ``city`` is a reference id or a name; ``city_label`` is used in the
        error message when ``city`` is a reference id.
        """
        response = await self.raw.get_warehouses(city)
        wanted = str(number).strip()
        for warehouse in response.data:
            if (warehouse.number or "").strip() == wanted:
                return _require_ref(
                    warehouse, f"warehouse {wanted} in {city_label or city}"
                )
        raise WarehouseNotFoundError(wanted, city_label or city)

    # -- shipments -------------------------------------------------------

    async def create_shipment(
        self,
        sender: Sender,
        recipient: Recipient,
        cargos: Sequence[Cargo],
        send_date: date | None = None,
    ) -> ShipmentReceipt:
        """Resolve all references and create one shipment.

        Raises:
            ResolutionError: invalid input or a failed lookup.
            CarrierRejection: the carrier refused one of the calls.
            TransportError: the carrier could not be reached or parsed.
        """
        # Local validation happens before any request is made.
        kind = recipient.address.kind
        summary = aggregate_cargos(cargos)

        city, identity = await _run_together(
            self.resolve_city(sender.city_name),
            self.resolve_sender_identity(),
        )

        lookups = [
            self.resolve_warehouse(
                city.ref,
                sender.warehouse_number,
                city_label=city.description or sender.city_name,
            )
        ]
        if kind is AddressKind.POCHTOMAT:
            lookups.append(
                self.resolve_warehouse(
                    recipient.city_name,
                    recipient.address.pochtomat_number or "",
                )
            )
        warehouses = await _run_together(*lookups)
        sender_warehouse = warehouses[0]

        target: RecipientTarget
        if kind is AddressKind.WAREHOUSE:
            target = WarehouseTarget(recipient.address.warehouse_number or "")
        elif kind is AddressKind.POCHTOMAT:
            target = PochtomatTarget(warehouses[1].ref)
        else:
            target = StreetTarget(
                name=recipient.address.street_name or "",
                house=recipient.address.house or "",
                flat=recipient.address.flat or "",
            )

        backward_delivery = (
            BackwardDeliveryData.money(summary.cash_on_delivery)
            if summary.cash_on_delivery > 0
            else None
        )

        response = await self.raw.create_shipment(
            payer_type=(
                PayerType.RECIPIENT if recipient.is_payer else PayerType.SENDER
            ),
            payment_method=PaymentMethod.CASH,
            cargo_type=CargoType.PARCEL,
            weight=summary.weight,
            service_type=recipient.address.service_type,
            seats=summary.seats,
            description=summary.description,
            cost=summary.cost,
            sender_city=city.ref,
            sender_counterparty=identity.counterparty.ref,
            sender_warehouse=sender_warehouse.ref,
            sender_contact=identity.contact.ref,
            sender_phone=sender.phone,
            recipient_city_name=recipient.city_name,
            recipient_target=target,
            recipient_full_name=recipient.full_name,
            recipient_phone=recipient.phone,
            date_time=send_date or date.today(),
            backward_delivery=backward_delivery,
        )
        document = response.first_or_error()
        return ShipmentReceipt(
            tracking_number=document.int_doc_number or "",
            ref=document.ref or "",
            cost=document.cost_on_site,
            estimated_delivery_date=document.estimated_delivery_date,
        )

    async def delete_shipments(
        self, document_refs: Iterable[str]
    ) -> list[DeletedDocument]:
        response = await self.raw.delete_shipment(document_refs)
        return response.data

    async def shipment_statuses(
        self, documents: Iterable[TrackedDocument]
    ) -> list[TrackingStatus]:
        response = await self.raw.track_shipments(documents)
        return response.data

    def label_url(self, shipments: ShipmentReceipt | Iterable[str]) -> str:
        refs = (
            [shipments.ref]
            if isinstance(shipments, ShipmentReceipt)
            else list(shipments)
        )
        return self.raw.print_shipment_labels(refs)

    # -- estimates -------------------------------------------------------

    async def estimate_shipment_price(
        self,
        sender_city_ref: str,
        recipient_city_ref: str,
        service_type: ServiceType,
        cargos: Sequence[Cargo],
        send_date: date | None = None,
    ) -> DocumentPrice:
        summary = aggregate_cargos(cargos)
        redelivery = (
            RedeliveryCalculate.money(summary.cash_on_delivery)
            if summary.cash_on_delivery > 0
            else None
        )
        response = await self.raw.get_document_price(
            sender_city_ref,
            recipient_city_ref,
            summary.weight,
            service_type,
            summary.cost,
            CargoType.PARCEL,
            summary.seats,
            date_time=send_date or date.today() + PRICE_ESTIMATE_LEAD,
            redelivery_calculate=redelivery,
        )
        return response.first_or_error()

    async def estimate_delivery_date(
        self,
        sender_city_ref: str,
        recipient_city_ref: str,
        service_type: ServiceType,
        send_date: date | None = None,
    ) -> DeliveryDate:
        response = await self.raw.get_document_delivery_date(
            send_date or date.today(),
            service_type,
            sender_city_ref,
            recipient_city_ref,
        )
        return response.first_or_error()
