"""SQLAlchemy warehouse directory."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from novaposhta_client.contrib.sqlalchemy.models import WarehouseModel
from novaposhta_client.raw import NovaPoshtaRaw
from novaposhta_client.types import Warehouse

logger = logging.getLogger(__name__)


class SQLAlchemyWarehouseRepository:
    """Warehouse lookups backed by SQLAlchemy async sessions."""

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        self.session_factory = session_factory

    async def save_many(self, warehouses: Iterable[Warehouse]) -> int:
        """Insert or update warehouses keyed by their reference id."""
        saved = 0
        async with self.session_factory() as session:
            for warehouse in warehouses:
                if not warehouse.ref:
                    continue
                await session.merge(
                    WarehouseModel(
                        ref=warehouse.ref,
                        number=warehouse.number or "",
                        city_ref=warehouse.city_ref or "",
                        city_name=warehouse.city_description or "",
                        short_address=warehouse.short_address or "",
                    )
                )
                saved += 1
            await session.commit()
        return saved

    async def get_ref(self, city_name: str, number: str) -> str | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(WarehouseModel.ref).where(
                    WarehouseModel.city_name == city_name,
                    WarehouseModel.number == str(number),
                )
            )
            return result.scalars().first()

    async def list_by_city(self, city_name: str) -> list[WarehouseModel]:
        """List stored warehouses of a city ordered by number."""
        async with self.session_factory() as session:
            stmt = select(WarehouseModel).where(
                WarehouseModel.city_name == city_name
            )
            result = await session.execute(stmt)
            return sorted(
                result.scalars().all(),
                key=lambda w: (len(w.number), w.number),
            )

    async def sync(self, raw: NovaPoshtaRaw, city: str | None = None) -> int:
        """Fetch warehouses from the carrier and store them."""
        response = await raw.get_warehouses(city)
        saved = await self.save_many(response.data)
        logger.info("Stored %d warehouses for %s", saved, city or "all cities")
        return saved
