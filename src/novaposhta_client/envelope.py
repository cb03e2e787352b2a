"""Request/response envelope codec.

Every carrier call is a POST of ``{calledMethod, modelName, methodProperties,
apiKey}`` answered with ``{success, data[], errors[], warnings[]}``. The
payload shape inside ``data`` differs per method, so decoding is parameterized
by the record type the calling operation expects.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from novaposhta_client.exceptions import (
    CarrierRejection,
    DecodeError,
    EmptyResult,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WireRequest(BaseModel):
    """Outbound envelope for the generic JSON-RPC path."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    called_method: str = Field(alias="calledMethod")
    model_name: str = Field(alias="modelName")
    method_properties: dict[str, Any] = Field(
        default_factory=dict, alias="methodProperties"
    )
    api_key: str = Field(alias="apiKey", repr=False)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class PrintRequest(BaseModel):
    """Outbound envelope for ``printFull``, which answers with a binary document."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    called_method: str = Field(default="printFull", alias="calledMethod")
    model_name: str = Field(default="ScanSheet", alias="modelName")
    print_form: str = Field(default="ScanSheet", alias="printForm")
    scan_sheet_refs: list[str] = Field(alias="ScanSheetRefs")
    file_type: str = Field(default="pdf", alias="Type")
    orientation: str = Field(default="portrait", alias="PrintOrientation")
    api_key: str = Field(alias="apiKey", repr=False)

    def to_payload(self) -> dict[str, Any]:
        return {
            "calledMethod": self.called_method,
            "modelName": self.model_name,
            "methodProperties": {
                "printForm": self.print_form,
                "ScanSheetRefs": list(self.scan_sheet_refs),
                "Type": self.file_type,
                "PrintOrientation": self.orientation,
            },
            "apiKey": self.api_key,
        }


class RawEnvelope(BaseModel):
    """Generic inbound envelope before the typed decode of ``data``."""

    success: bool
    data: list[Any] = Field(default_factory=list)
    errors: list[Any] = Field(default_factory=list)
    warnings: list[Any] = Field(default_factory=list)


class NovaResponse(BaseModel, Generic[T]):
    """Inbound envelope with ``data`` decoded into records of type ``T``."""

    success: bool
    data: list[T] = Field(default_factory=list)
    errors: list[Any] = Field(default_factory=list)
    warnings: list[Any] = Field(default_factory=list)

    def first_or_error(self) -> T:
        """Return the first record or raise why there is none."""
        if not self.success:
            raise CarrierRejection(self.errors, self.warnings)
        if not self.data:
            raise EmptyResult(self.errors, self.warnings)
        return self.data[0]


def _dump_properties(properties: BaseModel | Mapping[str, Any] | None) -> dict:
    if properties is None:
        return {}
    if isinstance(properties, BaseModel):
        return properties.model_dump(
            by_alias=True, exclude_none=True, mode="json"
        )
    return {key: value for key, value in properties.items() if value is not None}


def encode(
    method: str,
    model: str,
    properties: BaseModel | Mapping[str, Any] | None,
    api_key: str,
) -> WireRequest:
    """Assemble an outbound envelope. Property completeness is not checked."""
    return WireRequest(
        called_method=method,
        model_name=model,
        method_properties=_dump_properties(properties),
        api_key=api_key,
    )


def encode_print_request(
    scan_sheet_refs: Sequence[str],
    api_key: str,
    *,
    file_type: str = "pdf",
    orientation: str = "portrait",
) -> PrintRequest:
    return PrintRequest(
        scan_sheet_refs=list(scan_sheet_refs),
        file_type=file_type,
        orientation=orientation,
        api_key=api_key,
    )


def decode(
    payload: Any,
    record_type: type[T],
    *,
    method: str | None = None,
) -> NovaResponse[T]:
    """Decode a raw JSON envelope into ``NovaResponse[record_type]``.

    Raises:
        DecodeError: the envelope or any ``data`` element has the wrong shape.
        CarrierRejection: the carrier answered with ``success=false``.
    """
    try:
        envelope = RawEnvelope.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(f"{method or 'response'}: malformed envelope") from exc

    if not envelope.success:
        logger.warning("%s rejected by carrier: %s", method, envelope.errors)
        raise CarrierRejection(
            envelope.errors, envelope.warnings, method=method
        )

    if envelope.warnings:
        logger.warning("%s returned warnings: %s", method, envelope.warnings)

    try:
        response = NovaResponse[record_type].model_validate(
            envelope.model_dump()
        )
    except ValidationError as exc:
        raise DecodeError(
            f"{method or 'response'}: cannot decode data as "
            f"{getattr(record_type, '__name__', record_type)}"
        ) from exc

    logger.debug("%s decoded %d record(s)", method, len(response.data))
    return response
