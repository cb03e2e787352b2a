"""Create a shipment, print its label URL and track it.

Reads ``NOVAPOSHTA_API_KEY`` from the environment.
"""

from __future__ import annotations

import asyncio
import logging

from novaposhta_client import (
    Address,
    Cargo,
    NovaPoshta,
    NovaPoshtaConfig,
    OptionsSeat,
    Recipient,
    Sender,
)
from novaposhta_client.models import TrackedDocument

logger = logging.getLogger("create_shipment")


async def main() -> None:
    async with NovaPoshta(NovaPoshtaConfig()) as np:
        receipt = await np.create_shipment(
            Sender(
                city_name="Харків",
                warehouse_number="14",
                phone="380990000000",
            ),
            Recipient(
                city_name="Київ",
                full_name="Іван Петренко",
                phone="380991111111",
                address=Address.warehouse(5),
            ),
            [
                Cargo(
                    cost=150,
                    options_seat=OptionsSeat.half_kilogram(),
                    payment_on_delivery=True,
                    description="Книга",
                )
            ],
        )
        logger.info(
            "Created %s, delivery cost %s, expected %s",
            receipt.tracking_number,
            receipt.cost,
            receipt.estimated_delivery_date,
        )
        logger.info("Label: %s", np.label_url(receipt))

        statuses = await np.shipment_statuses(
            [TrackedDocument(receipt.tracking_number)]
        )
        for status in statuses:
            logger.info("%s: %s", status.number, status.status)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
