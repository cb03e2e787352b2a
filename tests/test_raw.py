"""Raw operation tests: one envelope per call, typed results."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from conftest import API_KEY, KHARKIV_REF, KYIV_REF, FakeTransport, fail, ok
from novaposhta_client.config import NovaPoshtaConfig
from novaposhta_client.exceptions import CarrierRejection
from novaposhta_client.models import (
    CargoType,
    CounterpartyProperty,
    OptionsSeat,
    PayerType,
    PaymentMethod,
    ServiceType,
    TrackedDocument,
)
from novaposhta_client.properties import (
    BackwardDeliveryData,
    PochtomatTarget,
    RedeliveryCalculate,
    StreetTarget,
    WarehouseTarget,
)
from novaposhta_client.raw import NovaPoshtaRaw
from novaposhta_client.types import City, Warehouse


def _shipment_kwargs(**overrides) -> dict:
    kwargs = dict(
        payer_type=PayerType.SENDER,
        payment_method=PaymentMethod.CASH,
        cargo_type=CargoType.PARCEL,
        weight=Decimal("0.5"),
        service_type=ServiceType.WAREHOUSE_WAREHOUSE,
        seats=1,
        description="Книга",
        cost=150,
        sender_city=KHARKIV_REF,
        sender_counterparty="sender-ref",
        sender_warehouse="warehouse-ref",
        sender_contact="contact-ref",
        sender_phone="380990000000",
        recipient_city_name="Київ",
        recipient_target=WarehouseTarget("5"),
        recipient_full_name="Іван Петренко",
        recipient_phone="380991111111",
        date_time=date(2024, 3, 5),
    )
    kwargs.update(overrides)
    return kwargs


class TestAddresses:
    async def test_get_cities(self, raw, transport) -> None:
        transport.responses[("AddressGeneral", "getCities")] = ok(
            {"Ref": KHARKIV_REF, "Description": "Харків"}
        )

        response = await raw.get_cities("Харків")

        assert response.data == [City(ref=KHARKIV_REF, description="Харків")]
        call = transport.calls[0]
        assert call["apiKey"] == API_KEY
        assert call["methodProperties"] == {"FindByString": "Харків"}

    async def test_get_cities_without_query(self, raw, transport) -> None:
        transport.responses[("AddressGeneral", "getCities")] = ok()

        await raw.get_cities()

        assert transport.properties("AddressGeneral", "getCities") == {}

    async def test_get_warehouses_by_ref(self, raw, transport) -> None:
        transport.responses[("AddressGeneral", "getWarehouses")] = ok()

        await raw.get_warehouses(KHARKIV_REF)

        properties = transport.properties("AddressGeneral", "getWarehouses")
        assert properties == {"CityRef": KHARKIV_REF}

    async def test_get_warehouses_by_name(self, raw, transport) -> None:
        transport.responses[("AddressGeneral", "getWarehouses")] = ok()

        await raw.get_warehouses("Харків", "Сумська")

        properties = transport.properties("AddressGeneral", "getWarehouses")
        assert properties == {"CityName": "Харків", "FindByString": "Сумська"}

    async def test_get_warehouses_decodes(self, raw, transport) -> None:
        transport.responses[("AddressGeneral", "getWarehouses")] = ok(
            {"Ref": "w-14", "Number": "14", "CityRef": KHARKIV_REF}
        )

        response = await raw.get_warehouses(KHARKIV_REF)

        assert isinstance(response.data[0], Warehouse)
        assert response.data[0].number == "14"


class TestCounterparties:
    async def test_search_counterparty(self, raw, transport) -> None:
        transport.responses[("Counterparty", "getCounterparties")] = ok(
            {"Ref": "cp-1", "Description": "ФОП Шевченко"}
        )

        response = await raw.search_counterparty(
            counterparty_type=CounterpartyProperty.SENDER
        )

        assert response.first_or_error().ref == "cp-1"
        assert transport.properties("Counterparty", "getCounterparties") == {
            "CounterpartyProperty": "Sender"
        }

    async def test_create_counterparty(self, raw, transport) -> None:
        transport.responses[("Counterparty", "save")] = ok(
            {
                "Ref": "cp-new",
                "ContactPerson": {
                    "success": True,
                    "data": [{"Ref": "contact-new"}],
                    "errors": [],
                },
            }
        )

        response = await raw.create_counterparty(
            "Фелікс",
            "Яковлєв",
            "0997979789",
            CounterpartyProperty.RECIPIENT,
        )

        properties = transport.properties("Counterparty", "save")
        assert properties == {
            "FirstName": "Фелікс",
            "LastName": "Яковлєв",
            "Phone": "0997979789",
            "CounterpartyProperty": "Recipient",
            "CounterpartyType": "PrivatePerson",
        }
        created = response.first_or_error()
        assert created.contact_person.first_or_error().ref == "contact-new"

    async def test_contact_persons(self, raw, transport) -> None:
        transport.responses[
            ("Counterparty", "getCounterpartyContactPersons")
        ] = ok({"Ref": "contact-1", "Phones": "380990000000"})

        response = await raw.get_counterparty_contact_persons("cp-1")

        assert response.data[0].phones == "380990000000"
        assert transport.properties(
            "Counterparty", "getCounterpartyContactPersons"
        ) == {"Ref": "cp-1"}

    async def test_create_contact_person(self, raw, transport) -> None:
        transport.responses[("ContactPerson", "save")] = ok({"Ref": "c-2"})

        await raw.create_contact_person("cp-1", "Олена", "Коваль", "380")

        assert transport.properties("ContactPerson", "save") == {
            "CounterpartyRef": "cp-1",
            "FirstName": "Олена",
            "LastName": "Коваль",
            "Phone": "380",
            "MiddleName": "",
        }


class TestInternetDocuments:
    async def test_create_shipment_warehouse_target(
        self, raw, transport
    ) -> None:
        transport.responses[("InternetDocument", "save")] = ok(
            {
                "Ref": "doc-ref",
                "IntDocNumber": "20450000000001",
                "CostOnSite": 60,
                "EstimatedDeliveryDate": "07.03.2024",
            }
        )

        response = await raw.create_shipment(**_shipment_kwargs())

        document = response.first_or_error()
        assert document.int_doc_number == "20450000000001"
        assert document.cost_on_site == Decimal("60")
        properties = transport.properties("InternetDocument", "save")
        assert properties["NewAddress"] == "1"
        assert properties["PayerType"] == "Sender"
        assert properties["PaymentMethod"] == "Cash"
        assert properties["CargoType"] == "Parcel"
        assert properties["Weight"] == "0.5"
        assert properties["SeatsAmount"] == "1"
        assert properties["Cost"] == "150"
        assert properties["CitySender"] == KHARKIV_REF
        assert properties["Sender"] == "sender-ref"
        assert properties["SenderAddress"] == "warehouse-ref"
        assert properties["ContactSender"] == "contact-ref"
        assert properties["RecipientCityName"] == "Київ"
        assert properties["RecipientAddressName"] == "5"
        assert properties["RecipientHouse"] == ""
        assert properties["RecipientFlat"] == ""
        assert properties["RecipientType"] == "PrivatePerson"
        assert properties["DateTime"] == "5.3.2024"
        assert "RecipientAddress" not in properties
        assert "BackwardDeliveryData" not in properties
        assert "OptionsSeat" not in properties

    async def test_create_shipment_street_target(self, raw, transport) -> None:
        transport.responses[("InternetDocument", "save")] = ok({"Ref": "d"})

        await raw.create_shipment(
            **_shipment_kwargs(
                service_type=ServiceType.WAREHOUSE_DOORS,
                recipient_target=StreetTarget("Сумська", "10", "3"),
            )
        )

        properties = transport.properties("InternetDocument", "save")
        assert properties["ServiceType"] == "WarehouseDoors"
        assert properties["RecipientAddressName"] == "Сумська"
        assert properties["RecipientHouse"] == "10"
        assert properties["RecipientFlat"] == "3"

    async def test_create_shipment_pochtomat_target(
        self, raw, transport
    ) -> None:
        transport.responses[("InternetDocument", "save")] = ok({"Ref": "d"})

        await raw.create_shipment(
            **_shipment_kwargs(recipient_target=PochtomatTarget("locker-ref"))
        )

        properties = transport.properties("InternetDocument", "save")
        assert properties["RecipientAddress"] == "locker-ref"
        assert properties["RecipientAddressName"] == ""

    async def test_create_shipment_with_extras(self, raw, transport) -> None:
        transport.responses[("InternetDocument", "save")] = ok({"Ref": "d"})

        await raw.create_shipment(
            **_shipment_kwargs(
                backward_delivery=BackwardDeliveryData.money(150),
                options_seat=[OptionsSeat.half_kilogram()],
                date_time="6.3.2024",
            )
        )

        properties = transport.properties("InternetDocument", "save")
        assert properties["BackwardDeliveryData"] == [
            {
                "PayerType": "Recipient",
                "CargoType": "Money",
                "RedeliveryString": "150",
            }
        ]
        assert properties["OptionsSeat"][0]["volumetricWidth"] == "20"
        assert properties["DateTime"] == "6.3.2024"

    async def test_create_shipment_rejected(self, raw, transport) -> None:
        transport.responses[("InternetDocument", "save")] = fail(
            "RecipientName is invalid"
        )

        with pytest.raises(CarrierRejection) as info:
            await raw.create_shipment(**_shipment_kwargs())

        assert info.value.errors == ["RecipientName is invalid"]
        assert info.value.method == "InternetDocument/save"

    async def test_delete_shipment(self, raw, transport) -> None:
        transport.responses[("InternetDocument", "delete")] = ok(
            {"Ref": "doc-1"}
        )

        response = await raw.delete_shipment(["doc-1"])

        assert response.data[0].ref == "doc-1"
        assert transport.properties("InternetDocument", "delete") == {
            "DocumentRefs": ["doc-1"]
        }

    async def test_list_shipments(self, raw, transport) -> None:
        transport.responses[("InternetDocument", "getDocumentList")] = ok(
            {"Ref": "doc-1", "IntDocNumber": "204", "Cost": "60"}
        )

        response = await raw.list_shipments(
            date(2024, 3, 1), date(2024, 3, 5)
        )

        assert response.data[0].cost == Decimal("60")
        assert transport.properties(
            "InternetDocument", "getDocumentList"
        ) == {
            "DateTimeFrom": "1.3.2024",
            "DateTimeTo": "5.3.2024",
            "GetFullList": "1",
        }

    async def test_get_document_price(self, raw, transport) -> None:
        transport.responses[("InternetDocument", "getDocumentPrice")] = ok(
            {"Cost": 70, "CostRedelivery": 20, "AssessedCost": 250}
        )

        response = await raw.get_document_price(
            KHARKIV_REF,
            KYIV_REF,
            Decimal("0.5"),
            ServiceType.WAREHOUSE_WAREHOUSE,
            250,
            CargoType.PARCEL,
            1,
            redelivery_calculate=RedeliveryCalculate.money(250),
        )

        price = response.first_or_error()
        assert price.cost + price.cost_redelivery == Decimal("90")
        assert transport.properties(
            "InternetDocument", "getDocumentPrice"
        ) == {
            "CitySender": KHARKIV_REF,
            "CityRecipient": KYIV_REF,
            "Weight": "0.5",
            "ServiceType": "WarehouseWarehouse",
            "Cost": "250",
            "CargoType": "Parcel",
            "SeatsAmount": "1",
            "RedeliveryCalculate": {"CargoType": "Money", "Amount": "250"},
        }

    async def test_get_document_delivery_date(self, raw, transport) -> None:
        transport.responses[
            ("InternetDocument", "getDocumentDeliveryDate")
        ] = ok({"DeliveryDate": {"date": "2024-03-07 00:00:00"}})

        response = await raw.get_document_delivery_date(
            date(2024, 3, 5),
            ServiceType.WAREHOUSE_WAREHOUSE,
            KHARKIV_REF,
            KYIV_REF,
        )

        assert response.data[0].delivery_date.date == "2024-03-07 00:00:00"
        assert transport.properties(
            "InternetDocument", "getDocumentDeliveryDate"
        ) == {
            "DateTime": "5.3.2024",
            "ServiceType": "WarehouseWarehouse",
            "CitySender": KHARKIV_REF,
            "CityRecipient": KYIV_REF,
        }


async def test_track_shipments(raw, transport) -> None:
    transport.responses[("TrackingDocument", "getStatusDocuments")] = ok(
        {"Number": "204", "Status": "Прибув у відділення", "StatusCode": "7"}
    )

    response = await raw.track_shipments(
        [TrackedDocument("204", "380991111111"), TrackedDocument("205")]
    )

    assert response.data[0].status_code == "7"
    assert transport.properties(
        "TrackingDocument", "getStatusDocuments"
    ) == {
        "Documents": [
            {"DocumentNumber": "204", "Phone": "380991111111"},
            {"DocumentNumber": "205", "Phone": ""},
        ]
    }


class TestScanSheets:
    async def test_insert_new_sheet(self, raw, transport) -> None:
        transport.responses[("ScanSheet", "insertDocuments")] = ok(
            {"Ref": "sheet-1", "Number": "105-1", "Date": "05.03.2024"}
        )

        response = await raw.scan_sheet_insert(["doc-1", "doc-2"])

        assert response.data[0].number == "105-1"
        assert transport.properties("ScanSheet", "insertDocuments") == {
            "DocumentRefs": ["doc-1", "doc-2"]
        }

    async def test_insert_into_existing_sheet(self, raw, transport) -> None:
        transport.responses[("ScanSheet", "insertDocuments")] = ok()

        await raw.scan_sheet_insert(["doc-3"], "sheet-1")

        assert transport.properties("ScanSheet", "insertDocuments") == {
            "DocumentRefs": ["doc-3"],
            "Ref": "sheet-1",
        }

    async def test_delete(self, raw, transport) -> None:
        transport.responses[("ScanSheet", "deleteScanSheet")] = ok(
            {"Ref": "sheet-1", "Number": "105-1"}
        )

        await raw.scan_sheet_delete(["sheet-1"])

        assert transport.properties("ScanSheet", "deleteScanSheet") == {
            "ScanSheetRefs": ["sheet-1"]
        }

    async def test_remove_documents(self, raw, transport) -> None:
        transport.responses[("ScanSheet", "removeDocuments")] = ok()

        await raw.scan_sheet_remove_documents(["doc-1"])

        assert transport.properties("ScanSheet", "removeDocuments") == {
            "DocumentRefs": ["doc-1"]
        }

    async def test_list(self, raw, transport) -> None:
        transport.responses[("ScanSheet", "getScanSheetList")] = ok(
            {"Ref": "sheet-1", "Number": "105-1", "Printed": "0"}
        )

        response = await raw.scan_sheet_list()

        assert response.data[0].printed == "0"
        assert transport.properties("ScanSheet", "getScanSheetList") == {}

    async def test_print_scan_sheet_uses_print_full(
        self, raw, transport
    ) -> None:
        content = await raw.print_scan_sheet("sheet-1")

        assert content == transport.binary
        call = transport.calls[0]
        assert call["calledMethod"] == "printFull"
        assert call["methodProperties"] == {
            "printForm": "ScanSheet",
            "ScanSheetRefs": ["sheet-1"],
            "Type": "pdf",
            "PrintOrientation": "portrait",
        }


@pytest.mark.parametrize(
    ("operation", "method"),
    [
        ("get_types_of_payers", "getTypesOfPayers"),
        ("get_types_of_payers_for_redelivery", "getTypesOfPayersForRedelivery"),
        ("get_cargo_types", "getCargoTypes"),
        ("get_service_types", "getServiceTypes"),
    ],
)
async def test_reference_books(raw, transport, operation, method) -> None:
    transport.responses[("Common", method)] = ok(
        {"Ref": "Parcel", "Description": "Посилка"}
    )

    response = await getattr(raw, operation)()

    assert response.data[0].description == "Посилка"


def test_print_shipment_labels_builds_url(raw, transport) -> None:
    url = raw.print_shipment_labels(["20450000000001", "20450000000002"])

    assert url == (
        "https://my.novaposhta.ua/orders/printDocument/orders[]/"
        "20450000000001,20450000000002/type/pdf/apiKey/" + API_KEY
    )
    assert transport.calls == []


async def test_owned_transport_closed_on_exit() -> None:
    raw = NovaPoshtaRaw(NovaPoshtaConfig(api_key="k"))
    async with raw:
        pass
    assert raw.transport._client.is_closed


async def test_injected_transport_left_open() -> None:
    transport = FakeTransport()
    async with NovaPoshtaRaw(NovaPoshtaConfig(api_key="k"), transport=transport):
        pass
    assert transport.closed is False


async def test_api_key_string_is_wrapped_in_config() -> None:
    transport = FakeTransport(
        {("AddressGeneral", "getCities"): ok({"Ref": KHARKIV_REF})}
    )
    raw = NovaPoshtaRaw("bare-key", transport=transport)

    await raw.get_cities("Kharkiv")

    assert isinstance(raw.config, NovaPoshtaConfig)
    assert raw.config.api_key == "bare-key"
    assert transport.calls[0]["apiKey"] == "bare-key"
