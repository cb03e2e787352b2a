"""Nova Poshta API client public API."""

from typing import TYPE_CHECKING

__version__ = "0.1.0"

__all__ = [
    "Address",
    "Cargo",
    "CarrierRejection",
    "EmptyResult",
    "NovaPoshta",
    "NovaPoshtaConfig",
    "NovaPoshtaError",
    "NovaPoshtaRaw",
    "OptionsSeat",
    "Recipient",
    "ResolutionError",
    "Sender",
    "TransportError",
    "__version__",
]

if TYPE_CHECKING:
    from novaposhta_client.client import NovaPoshta
    from novaposhta_client.config import NovaPoshtaConfig
    from novaposhta_client.exceptions import (
        CarrierRejection,
        EmptyResult,
        NovaPoshtaError,
        ResolutionError,
        TransportError,
    )
    from novaposhta_client.models import (
        Address,
        Cargo,
        OptionsSeat,
        Recipient,
        Sender,
    )
    from novaposhta_client.raw import NovaPoshtaRaw


def __getattr__(name: str):
    # Lazy imports keep httpx and pydantic off the import path until needed.
    if name == "NovaPoshta":
        from novaposhta_client.client import NovaPoshta

        return NovaPoshta
    if name == "NovaPoshtaRaw":
        from novaposhta_client.raw import NovaPoshtaRaw

        return NovaPoshtaRaw
    if name == "NovaPoshtaConfig":
        from novaposhta_client.config import NovaPoshtaConfig

        return NovaPoshtaConfig
    if name in (
        "CarrierRejection",
        "EmptyResult",
        "NovaPoshtaError",
        "ResolutionError",
        "TransportError",
    ):
        from novaposhta_client import exceptions

        return getattr(exceptions, name)
    if name in ("Address", "Cargo", "OptionsSeat", "Recipient", "Sender"):
        from novaposhta_client import models

        return getattr(models, name)
    raise AttributeError(
        f"module 'novaposhta_client' has no attribute {name!r}"
    )
