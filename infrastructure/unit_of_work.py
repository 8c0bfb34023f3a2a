"""SQLAlchemy Unit of Work 实现"""
from __future__ import annotations

import asyncio
from typing import Optional, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from domain.common.unit_of_work import AbstractUnitOfWork
from infrastructure.database import AsyncSessionLocal, unit_of_work_lock
from infrastructure.repositories.person_repository import SQLAlchemyPersonRepository


class SQLAlchemyUnitOfWork(AbstractUnitOfWork):
    """基于SQLAlchemy的Unit of Work

    进入时显式开启事务（只读模式同样开启，退出时回滚），退出时无论成功与否都关闭会话。
    共享单连接的引擎（内存 SQLite）上，从进入到退出持有连接池的事务锁。
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession] = AsyncSessionLocal,
        session: Optional[AsyncSession] = None,
        *,
        readonly: bool = False,
    ) -> None:
        super().__init__(readonly=readonly)
        self._session_factory = session_factory
        self._external_session = session
        self.session: Optional[AsyncSession] = session
        self._lock: Optional[asyncio.Lock] = None

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        if self.session is None:
            self.session = self._session_factory()
        if self.session.bind is not None:
            self._lock = unit_of_work_lock(self.session.bind)
        if self._lock is not None:
            await self._lock.acquire()
        try:
            self.person_repository = SQLAlchemyPersonRepository(self.session)
            if not self.session.in_transaction():
                await self.session.begin()
        except BaseException:
            await self._release()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            await super().__aexit__(exc_type, exc, tb)
        finally:
            self.person_repository = None  # type: ignore[assignment]
            await self._release()

    async def _release(self) -> None:
        try:
            if self._external_session is None and self.session is not None:
                await self.session.close()
                self.session = None
        finally:
            if self._lock is not None:
                self._lock.release()
                self._lock = None

    async def commit(self) -> None:
        if self._readonly:
            # 只读情况下不提交
            self._committed = True
            return
        if self.session and self.session.in_transaction():
            await self.session.commit()
        self._committed = True

    async def rollback(self) -> None:
        if self.session and self.session.in_transaction():
            await self.session.rollback()
        self._committed = False
