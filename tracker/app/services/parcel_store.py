"""
Parcel store service.

Sole gateway between in-memory parcels and rows of the parcel table.
Each operation issues one statement on the session handed in by the
caller and commits its own mutations.
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.app.core.exceptions import (
    InvalidStatusTransitionError,
    ParcelNotFoundError,
    ParcelStateError,
    StorageError,
)
from tracker.app.models.parcel import Parcel
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import ParcelAddressUpdate, ParcelCreate, ParcelResponse

logger = logging.getLogger("tracker")


class ParcelStore:
    """
    Data-access object for parcels.

    The store does not open or close the session; connection lifecycle
    belongs to the caller. It keeps no state besides the session, so one
    store per session is enough.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _storage(self, operation: str):
        try:
            yield
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise StorageError(operation, exc) from exc

    async def _current_status(self, number: int) -> Optional[ParcelStatus]:
        async with self._storage("status lookup"):
            result = await self.db.execute(
                select(Parcel.status).where(Parcel.number == number)
            )
            return result.scalar_one_or_none()

    async def add(self, parcel: ParcelCreate) -> int:
        """
        Insert a new parcel and return its assigned number.

        Args:
            parcel: Parcel without a number

        Returns:
            Newly assigned parcel number

        Raises:
            StorageError: If the insert fails
        """
        row = Parcel(
            client=parcel.client,
            status=parcel.status,
            address=parcel.address,
            created_at=parcel.created_at,
        )

        async with self._storage("add"):
            self.db.add(row)
            await self.db.flush()  # Assigns the primary key
            number = row.number
            await self.db.commit()

        logger.info("Parcel added", extra={"number": number, "client": parcel.client})
        return number

    async def get(self, number: int) -> ParcelResponse:
        """
        Fetch a single parcel by number.

        Raises:
            ParcelNotFoundError: If no parcel has this number
            StorageError: If the query fails
        """
        async with self._storage("get"):
            result = await self.db.execute(
                select(Parcel)
                .where(Parcel.number == number)
                .execution_options(populate_existing=True)
            )
            row = result.scalar_one_or_none()

        if row is None:
            raise ParcelNotFoundError(number)

        logger.debug("Parcel fetched", extra={"number": number})
        return ParcelResponse.model_validate(row)

    async def get_by_client(self, client: int) -> List[ParcelResponse]:
        """
        Fetch every parcel registered by a client, ordered by number.

        An unknown client yields an empty list.
        """
        async with self._storage("get_by_client"):
            result = await self.db.execute(
                select(Parcel)
                .where(Parcel.client == client)
                .order_by(Parcel.number)
                .execution_options(populate_existing=True)
            )
            rows = result.scalars().all()

        logger.debug("Parcels fetched by client", extra={"client": client, "count": len(rows)})
        return [ParcelResponse.model_validate(row) for row in rows]

    async def set_address(self, number: int, address: str) -> None:
        """
        Change the delivery address of a parcel.

        Only registered parcels may change address. The status check and
        the write happen in the same UPDATE statement.

        Raises:
            ValidationError: If the new address is empty
            ParcelNotFoundError: If no parcel has this number
            ParcelStateError: If the parcel is no longer registered
            StorageError: If the update fails
        """
        address = ParcelAddressUpdate(address=address).address

        async with self._storage("set_address"):
            result = await self.db.execute(
                update(Parcel)
                .where(Parcel.number == number, Parcel.status == ParcelStatus.REGISTERED)
                .values(address=address)
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()

        if result.rowcount == 0:
            current = await self._current_status(number)
            if current is None:
                raise ParcelNotFoundError(number)
            raise ParcelStateError(number, current, "change address of")

        logger.info("Parcel address updated", extra={"number": number})

    async def set_status(self, number: int, status: ParcelStatus) -> None:
        """
        Move a parcel to the next workflow status.

        Only the single forward edge from the current status is accepted:
        registered -> sent -> delivered.

        Raises:
            ParcelNotFoundError: If no parcel has this number
            InvalidStatusTransitionError: If the edge is not allowed or the
                status is unknown
            StorageError: If the update fails
        """
        try:
            target = ParcelStatus(status)
        except ValueError as exc:
            current = await self._current_status(number)
            if current is None:
                raise ParcelNotFoundError(number) from exc
            raise InvalidStatusTransitionError(number, current, status) from exc
        source = target.previous_status

        rowcount = 0
        if source is not None:
            async with self._storage("set_status"):
                result = await self.db.execute(
                    update(Parcel)
                    .where(Parcel.number == number, Parcel.status == source)
                    .values(status=target)
                    .execution_options(synchronize_session=False)
                )
                await self.db.commit()
            rowcount = result.rowcount

        if rowcount == 0:
            current = await self._current_status(number)
            if current is None:
                raise ParcelNotFoundError(number)
            raise InvalidStatusTransitionError(number, current, target)

        logger.info("Parcel status updated", extra={"number": number, "status": target.value})

    async def delete(self, number: int) -> None:
        """
        Remove a parcel.

        Raises:
            ParcelNotFoundError: If no parcel has this number
            StorageError: If the delete fails
        """
        async with self._storage("delete"):
            result = await self.db.execute(
                delete(Parcel)
                .where(Parcel.number == number)
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()

        if result.rowcount == 0:
            raise ParcelNotFoundError(number)

        logger.info("Parcel deleted", extra={"number": number})
