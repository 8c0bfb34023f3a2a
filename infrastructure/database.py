"""
数据库配置和连接管理
"""
import asyncio
from contextlib import nullcontext
from typing import Optional, Sequence

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool

from core.config import settings
from core.logging_config import get_logger
from infrastructure.models import PersonModel, metadata


logger = get_logger(__name__)

# 启动时写入的固定数据；重复的 Alice 用于演示 FindByName 多结果
SEED_NAMES: Sequence[str] = ("Alice", "Bob", "Charlie", "Alice")


def _build_async_url(database_url: str) -> str:
    """确保数据库URL使用异步驱动"""
    url = make_url(database_url)
    drivername = url.drivername

    if "+" in drivername:
        return database_url

    driver_map = {
        "postgresql": "postgresql+asyncpg",
        "postgres": "postgresql+asyncpg",
        "sqlite": "sqlite+aiosqlite",
    }

    if drivername not in driver_map:
        raise ValueError(f"不支持的数据库驱动: {drivername}. 请使用 async 驱动或更新 DATABASE__URL")

    return url.set(drivername=driver_map[drivername]).render_as_string(hide_password=False)


class SharedConnectionPool(StaticPool):
    """所有会话共用一个连接的 StaticPool，附带一把事务锁。

    单连接上只能有一个事务，Unit of Work 持有 ``unit_of_work_lock`` 直到提交或回滚，
    并发请求因此按顺序执行，不会互相提交/回滚对方的写入。
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.unit_of_work_lock = asyncio.Lock()


def unit_of_work_lock(bind: AsyncEngine) -> Optional[asyncio.Lock]:
    """共享连接引擎返回事务锁；普通连接池由数据库自身隔离事务，返回 None"""
    return getattr(bind.sync_engine.pool, "unit_of_work_lock", None)


def _is_sqlite_memory(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def build_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """创建异步引擎

    内存 SQLite 每个连接都是独立的库，这里让所有会话共享同一连接（SharedConnectionPool），
    事务由连接池上的锁串行化。
    """
    async_url = _build_async_url(database_url)
    if _is_sqlite_memory(async_url):
        return create_async_engine(
            async_url,
            echo=echo,
            poolclass=SharedConnectionPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(async_url, echo=echo)


engine = build_engine(settings.database.url, echo=settings.database.echo)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
)


async def bootstrap_database(bind: AsyncEngine = engine, *, seed: bool = True) -> int:
    """重建 schema 并写入种子数据，返回写入的行数。

    drop-and-recreate 语义：每次进程启动都会清空之前的状态，序列从 1 重新开始。
    整个过程在同一事务中完成。
    """
    async with unit_of_work_lock(bind) or nullcontext(), bind.begin() as conn:
        await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)
        seeded = 0
        if seed:
            # 逐行插入，保证 id 按种子顺序分配
            for name in SEED_NAMES:
                await conn.execute(insert(PersonModel).values(name=name))
                seeded += 1

    logger.info("database_bootstrapped", url=bind.url.render_as_string(hide_password=True), seeded=seeded)
    return seeded
