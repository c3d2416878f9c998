"""
SQLAlchemy adapters for the ledger and user ports.

Every storage failure is re-raised as :class:`StoreError` so the raw driver
message never reaches the HTTP boundary.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from tradelog.core.errors import DuplicateUserError, StoreError, UserNotFoundError
from tradelog.db import Database
from tradelog.domain import NewTrade, Role, Trade, TradeSide, UserAccount
from tradelog.models import Trade as TradeRow
from tradelog.models import User as UserRow
from tradelog.ports import LedgerStore, UserStore

logger = logging.getLogger(__name__)


class SqlLedgerStore(LedgerStore):
    """Ledger backed by the ``trades`` table. Soft-deleted rows are invisible."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def append(self, trade: NewTrade) -> Trade:
        row = TradeRow(
            user_id=trade.user_id,
            symbol=trade.symbol,
            type=trade.side.value,
            price=trade.price,
            quantity=trade.quantity,
            notes=trade.notes,
            executed_at=trade.executed_at,
        )
        try:
            async with self._database.session() as session:
                async with session.begin():
                    session.add(row)
                    await session.flush()
                    await session.refresh(row)
        except SQLAlchemyError as exc:
            logger.error("Failed to append trade for user %s: %s", trade.user_id, type(exc).__name__)
            raise StoreError("failed to append trade") from exc
        return _to_trade(row)

    async def list_for_user(self, user_id: int) -> list[Trade]:
        stmt = (
            select(TradeRow)
            .where(TradeRow.user_id == user_id, TradeRow.deleted_at.is_(None))
            .order_by(TradeRow.executed_at, TradeRow.id)
        )
        return await self._fetch(stmt, f"list trades for user {user_id}")

    async def list_all(self) -> list[Trade]:
        stmt = select(TradeRow).where(TradeRow.deleted_at.is_(None)).order_by(TradeRow.executed_at, TradeRow.id)
        return await self._fetch(stmt, "list all trades")

    async def _fetch(self, stmt, description: str) -> list[Trade]:
        try:
            async with self._database.session() as session:
                result = await session.execute(stmt)
                rows = result.scalars().all()
        except SQLAlchemyError as exc:
            logger.error("Failed to %s: %s", description, type(exc).__name__)
            raise StoreError(f"failed to {description}") from exc
        return [_to_trade(row) for row in rows]


class SqlUserStore(UserStore):
    def __init__(self, database: Database) -> None:
        self._database = database

    async def create(self, email: str, password_hash: str, role: Role = Role.USER) -> UserAccount:
        row = UserRow(email=email, password_hash=password_hash, role=Role(role).value)
        try:
            async with self._database.session() as session:
                async with session.begin():
                    session.add(row)
                    await session.flush()
                    await session.refresh(row)
        except IntegrityError as exc:
            raise DuplicateUserError(email) from exc
        except SQLAlchemyError as exc:
            logger.error("Failed to create user: %s", type(exc).__name__)
            raise StoreError("failed to create user") from exc
        return _to_account(row)

    async def get_by_email(self, email: str) -> Optional[UserAccount]:
        return await self._fetch_one(select(UserRow).where(UserRow.email == email))

    async def get_by_id(self, user_id: int) -> Optional[UserAccount]:
        return await self._fetch_one(select(UserRow).where(UserRow.id == user_id))

    async def set_role(self, user_id: int, role: Role) -> UserAccount:
        try:
            async with self._database.session() as session:
                async with session.begin():
                    row = await session.get(UserRow, user_id)
                    if row is None:
                        raise UserNotFoundError(user_id)
                    row.role = Role(role).value
                    await session.flush()
                    await session.refresh(row)
        except SQLAlchemyError as exc:
            logger.error("Failed to update role for user %s: %s", user_id, type(exc).__name__)
            raise StoreError("failed to update user") from exc
        return _to_account(row)

    async def _fetch_one(self, stmt) -> Optional[UserAccount]:
        try:
            async with self._database.session() as session:
                result = await session.execute(stmt)
                row = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.error("Failed to load user: %s", type(exc).__name__)
            raise StoreError("failed to load user") from exc
        return _to_account(row) if row is not None else None


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops the offset on DateTime(timezone=True) columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_trade(row: TradeRow) -> Trade:
    return Trade(
        id=row.id,
        user_id=row.user_id,
        symbol=row.symbol,
        side=TradeSide(row.type),
        price=row.price,
        quantity=row.quantity,
        executed_at=_as_utc(row.executed_at),
        notes=row.notes,
        created_at=_as_utc(row.created_at),
    )


def _to_account(row: UserRow) -> UserAccount:
    return UserAccount(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        role=Role(row.role),
        created_at=_as_utc(row.created_at),
    )


__all__ = ["SqlLedgerStore", "SqlUserStore"]
