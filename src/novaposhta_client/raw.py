"""One coroutine per remote carrier method.

Operations package their parameters into a per-method properties model,
send one envelope and return the typed response. They do not chain calls;
see ``novaposhta_client.client`` for workflows built on top of them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal
from typing import TypeVar

from pydantic import BaseModel

from novaposhta_client.config import NovaPoshtaConfig
from novaposhta_client.envelope import (
    NovaResponse,
    decode,
    encode,
    encode_print_request,
)
from novaposhta_client.models import (
    CargoType,
    CounterpartyProperty,
    OptionsSeat,
    PayerType,
    PaymentMethod,
    ServiceType,
    TrackedDocument,
    format_date,
    is_ref,
)
from novaposhta_client.properties import (
    BackwardDeliveryData,
    CityQuery,
    ContactPersonCreate,
    CounterpartyCreate,
    CounterpartyQuery,
    DeliveryDateQuery,
    DocumentListQuery,
    DocumentPriceQuery,
    DocumentRefs,
    DocumentSave,
    RecipientTarget,
    RedeliveryCalculate,
    RefQuery,
    ScanSheetInsert,
    ScanSheetRefs,
    ScanSheetRemove,
    SeatProperties,
    TrackingItem,
    TrackingQuery,
    WarehouseQuery,
    decimal_text,
    recipient_target_fields,
)
from novaposhta_client.protocols import Transport
from novaposhta_client.transport import HttpxTransport
from novaposhta_client.types import (
    City,
    ContactPerson,
    Counterparty,
    CreatedDocument,
    DeletedDocument,
    DeliveryDate,
    DocumentListItem,
    DocumentPrice,
    ReferenceItem,
    ScanSheet,
    ScanSheetDeletion,
    TrackingStatus,
    Warehouse,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


def _date_text(value: date | str) -> str:
    return value if isinstance(value, str) else format_date(value)


class NovaPoshtaRaw:
    """Thin typed wrapper over the carrier's JSON API."""

    def __init__(
        self,
        config: NovaPoshtaConfig | str,
        *,
        transport: Transport | None = None,
    ) -> None:
        if isinstance(config, str):
            config = NovaPoshtaConfig(api_key=config)
        self.config = config
        self._owns_transport = transport is None
        self.transport: Transport = transport or HttpxTransport(
            config.endpoint, timeout=config.timeout
        )

    async def aclose(self) -> None:
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> NovaPoshtaRaw:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def call(
        self,
        model: str,
        method: str,
        properties: BaseModel | None,
        record_type: type[R],
    ) -> NovaResponse[R]:
        """Send one envelope and decode ``data`` as ``record_type``."""
        request = encode(method, model, properties, self.config.api_key)
        logger.debug(
            "Calling %s/%s with %s",
            model,
            method,
            sorted(request.method_properties),
        )
        payload = await self.transport.post_json(request.to_payload())
        return decode(payload, record_type, method=f"{model}/{method}")

    # -- addresses -------------------------------------------------------

    async def get_cities(
        self,
        query: str | None = None,
        *,
        page: int | None = None,
        limit: int | None = None,
    ) -> NovaResponse[City]:
        """Search cities by free text; without a query returns the default page."""
        properties = CityQuery(find_by_string=query, page=page, limit=limit)
        return await self.call("AddressGeneral", "getCities", properties, City)

    async def get_warehouses(
        self,
        city: str | None = None,
        warehouse_query: str | None = None,
        *,
        page: int | None = None,
        limit: int | None = None,
    ) -> NovaResponse[Warehouse]:
        """List warehouses, optionally scoped to a city.

        ``city`` may be a reference id (sent as ``CityRef``) or a plain name
        (sent as ``CityName``).
        """
        city_ref = city_name = None
        if city:
            if is_ref(city):
                city_ref = city.strip()
            else:
                city_name = city
        properties = WarehouseQuery(
            city_ref=city_ref,
            city_name=city_name,
            find_by_string=warehouse_query,
            page=page,
            limit=limit,
        )
        return await self.call(
            "AddressGeneral", "getWarehouses", properties, Warehouse
        )

    # -- counterparties --------------------------------------------------

    async def search_counterparty(
        self,
        query: str | None = None,
        *,
        counterparty_type: CounterpartyProperty,
    ) -> NovaResponse[Counterparty]:
        properties = CounterpartyQuery(
            counterparty_property=counterparty_type, find_by_string=query
        )
        return await self.call(
            "Counterparty", "getCounterparties", properties, Counterparty
        )

    async def create_counterparty(
        self,
        first_name: str,
        last_name: str,
        phone: str,
        counterparty_type: CounterpartyProperty,
        *,
        email: str | None = None,
        middle_name: str | None = None,
    ) -> NovaResponse[Counterparty]:
        """Register a private person; the response embeds its contact person."""
        properties = CounterpartyCreate(
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            counterparty_property=counterparty_type,
            email=email,
            middle_name=middle_name,
        )
        return await self.call("Counterparty", "save", properties, Counterparty)

    async def get_counterparty_contact_persons(
        self, counterparty_ref: str, *, page: int | None = None
    ) -> NovaResponse[ContactPerson]:
        properties = RefQuery(ref=counterparty_ref, page=page)
        return await self.call(
            "Counterparty",
            "getCounterpartyContactPersons",
            properties,
            ContactPerson,
        )

    async def create_contact_person(
        self,
        counterparty_ref: str,
        first_name: str,
        last_name: str,
        phone: str,
        *,
        middle_name: str | None = None,
    ) -> NovaResponse[ContactPerson]:
        properties = ContactPersonCreate(
            counterparty_ref=counterparty_ref,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            middle_name=middle_name or "",
        )
        return await self.call(
            "ContactPerson", "save", properties, ContactPerson
        )

    # -- internet documents ----------------------------------------------

    async def create_shipment(
        self,
        *,
        payer_type: PayerType,
        payment_method: PaymentMethod,
        cargo_type: CargoType,
        weight: Decimal | float,
        service_type: ServiceType,
        seats: int,
        description: str,
        cost: int,
        sender_city: str,
        sender_counterparty: str,
        sender_warehouse: str,
        sender_contact: str,
        sender_phone: str,
        recipient_city_name: str,
        recipient_target: RecipientTarget,
        recipient_full_name: str,
        recipient_phone: str,
        date_time: date | str,
        backward_delivery: BackwardDeliveryData | None = None,
        options_seat: Sequence[OptionsSeat] | None = None,
    ) -> NovaResponse[CreatedDocument]:
        """Create an internet document (TTN).

        Exactly one recipient target is sent; the address properties of the
        other kinds stay empty.
        """
        properties = DocumentSave(
            payer_type=payer_type,
            payment_method=payment_method,
            cargo_type=cargo_type,
            weight=decimal_text(weight),
            service_type=service_type,
            seats_amount=str(seats),
            description=description,
            cost=str(cost),
            city_sender=sender_city,
            sender=sender_counterparty,
            sender_address=sender_warehouse,
            contact_sender=sender_contact,
            senders_phone=sender_phone,
            recipient_city_name=recipient_city_name,
            recipient_name=recipient_full_name,
            recipients_phone=recipient_phone,
            date_time=_date_text(date_time),
            options_seat=(
                [SeatProperties.from_seat(seat) for seat in options_seat]
                if options_seat
                else None
            ),
            backward_delivery_data=(
                [backward_delivery] if backward_delivery else None
            ),
            **recipient_target_fields(recipient_target),
        )
        response = await self.call(
            "InternetDocument", "save", properties, CreatedDocument
        )
        for document in response.data:
            logger.info(
                "Created shipment %s (%s)", document.int_doc_number, document.ref
            )
        return response

    async def delete_shipment(
        self, document_refs: Iterable[str]
    ) -> NovaResponse[DeletedDocument]:
        refs = list(document_refs)
        response = await self.call(
            "InternetDocument",
            "delete",
            DocumentRefs(document_refs=refs),
            DeletedDocument,
        )
        logger.info("Deleted shipments %s", refs)
        return response

    async def list_shipments(
        self,
        date_from: date | str | None = None,
        date_to: date | str | None = None,
        *,
        page: int | None = None,
    ) -> NovaResponse[DocumentListItem]:
        properties = DocumentListQuery(
            date_time_from=_date_text(date_from) if date_from else None,
            date_time_to=_date_text(date_to) if date_to else None,
            page=page,
        )
        return await self.call(
            "InternetDocument", "getDocumentList", properties, DocumentListItem
        )

    async def get_document_price(
        self,
        sender_city_ref: str,
        recipient_city_ref: str,
        weight: Decimal | float,
        service_type: ServiceType,
        cost: int,
        cargo_type: CargoType,
        seats: int,
        *,
        date_time: date | str | None = None,
        redelivery_calculate: RedeliveryCalculate | None = None,
    ) -> NovaResponse[DocumentPrice]:
        properties = DocumentPriceQuery(
            city_sender=sender_city_ref,
            city_recipient=recipient_city_ref,
            weight=decimal_text(weight),
            service_type=service_type,
            cost=str(cost),
            cargo_type=cargo_type,
            seats_amount=str(seats),
            date_time=_date_text(date_time) if date_time else None,
            redelivery_calculate=redelivery_calculate,
        )
        return await self.call(
            "InternetDocument", "getDocumentPrice", properties, DocumentPrice
        )

    async def get_document_delivery_date(
        self,
        send_date: date | str,
        service_type: ServiceType,
        sender_city_ref: str,
        recipient_city_ref: str,
    ) -> NovaResponse[DeliveryDate]:
        properties = DeliveryDateQuery(
            date_time=_date_text(send_date),
            service_type=service_type,
            city_sender=sender_city_ref,
            city_recipient=recipient_city_ref,
        )
        return await self.call(
            "InternetDocument",
            "getDocumentDeliveryDate",
            properties,
            DeliveryDate,
        )

    # -- tracking --------------------------------------------------------

    async def track_shipments(
        self, documents: Iterable[TrackedDocument]
    ) -> NovaResponse[TrackingStatus]:
        properties = TrackingQuery(
            documents=[
                TrackingItem(document_number=doc.number, phone=doc.phone or "")
                for doc in documents
            ]
        )
        return await self.call(
            "TrackingDocument", "getStatusDocuments", properties, TrackingStatus
        )

    # -- scan sheets -----------------------------------------------------

    async def scan_sheet_insert(
        self,
        document_refs: Iterable[str],
        existing_sheet_ref: str | None = None,
    ) -> NovaResponse[ScanSheet]:
        """Add documents to a new scan sheet, or to ``existing_sheet_ref``."""
        properties = ScanSheetInsert(
            document_refs=list(document_refs), ref=existing_sheet_ref
        )
        return await self.call(
            "ScanSheet", "insertDocuments", properties, ScanSheet
        )

    async def scan_sheet_delete(
        self, refs: Iterable[str]
    ) -> NovaResponse[ScanSheetDeletion]:
        properties = ScanSheetRefs(scan_sheet_refs=list(refs))
        return await self.call(
            "ScanSheet", "deleteScanSheet", properties, ScanSheetDeletion
        )

    async def scan_sheet_remove_documents(
        self,
        document_refs: Iterable[str],
        sheet_ref: str | None = None,
    ) -> NovaResponse[ScanSheetDeletion]:
        properties = ScanSheetRemove(
            document_refs=list(document_refs), ref=sheet_ref
        )
        return await self.call(
            "ScanSheet", "removeDocuments", properties, ScanSheetDeletion
        )

    async def scan_sheet_list(self) -> NovaResponse[ScanSheet]:
        return await self.call("ScanSheet", "getScanSheetList", None, ScanSheet)

    # -- reference books -------------------------------------------------

    async def get_types_of_payers(self) -> NovaResponse[ReferenceItem]:
        return await self.call("Common", "getTypesOfPayers", None, ReferenceItem)

    async def get_types_of_payers_for_redelivery(
        self,
    ) -> NovaResponse[ReferenceItem]:
        return await self.call(
            "Common", "getTypesOfPayersForRedelivery", None, ReferenceItem
        )

    async def get_cargo_types(self) -> NovaResponse[ReferenceItem]:
        return await self.call("Common", "getCargoTypes", None, ReferenceItem)

    async def get_service_types(self) -> NovaResponse[ReferenceItem]:
        return await self.call("Common", "getServiceTypes", None, ReferenceItem)

    # -- printing --------------------------------------------------------

    def print_shipment_labels(
        self, ttns: Iterable[str], *, file_type: str = "pdf"
    ) -> str:
        """Build the label print URL; no request is made."""
        orders = ",".join(ttns)
        return (
            f"{self.config.print_url.rstrip('/')}/orders/printDocument/"
            f"orders[]/{orders}/type/{file_type}/apiKey/{self.config.api_key}"
        )

    async def print_scan_sheet(
        self,
        ref: str,
        *,
        file_type: str = "pdf",
        orientation: str = "portrait",
    ) -> bytes:
        """Download a printable scan sheet through ``printFull``."""
        request = encode_print_request(
            [ref],
            self.config.api_key,
            file_type=file_type,
            orientation=orientation,
        )
        logger.debug("Printing scan sheet %s", ref)
        return await self.transport.post_bytes(request.to_payload())
