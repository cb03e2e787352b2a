"""Exceptions raised by the carrier client."""

from __future__ import annotations

from typing import Any


class NovaPoshtaError(Exception):
    """Base class for every error raised by this library."""


class TransportError(NovaPoshtaError):
    """The carrier could not be reached or its response could not be read."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(TransportError):
    """The response did not match the expected envelope or record shape."""


class CarrierRejection(NovaPoshtaError):
    """The carrier answered with ``success=false``."""

    def __init__(
        self,
        errors: list[Any],
        warnings: list[Any] | None = None,
        *,
        method: str | None = None,
    ) -> None:
        self.errors = list(errors)
        self.warnings = list(warnings or [])
        self.method = method
        prefix = f"{method}: " if method else ""
        super().__init__(f"{prefix}carrier rejected the request: {self.errors}")


class EmptyResult(NovaPoshtaError):
    """The carrier answered with ``success=true`` but returned no data."""

    def __init__(
        self,
        errors: list[Any] | None = None,
        warnings: list[Any] | None = None,
    ) -> None:
        self.errors = list(errors or [])
        self.warnings = list(warnings or [])
        super().__init__(f"No data returned: {self.errors}")


class ResolutionError(NovaPoshtaError):
    """A named lookup failed or the shipment input is incomplete."""


class CityNotFoundError(ResolutionError):
    def __init__(self, city: str) -> None:
        self.city = city
        super().__init__(f"City {city!r} not found")


class WarehouseNotFoundError(ResolutionError):
    def __init__(self, number: str, city: str) -> None:
        self.number = number
        self.city = city
        super().__init__(f"Warehouse {number} not found in {city}")
