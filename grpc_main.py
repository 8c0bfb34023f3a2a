import asyncio

from core.config import settings
from core.logging_config import configure_logging, get_logger
from infrastructure.database import bootstrap_database, engine
from grpc_app.server import create_server


# 在入口处显式配置日志，避免模块导入时的副作用
configure_logging()
logger = get_logger(__name__)


async def main() -> None:
    if not settings.grpc.enabled:
        logger.warning("grpc_disabled", message="gRPC disabled by config (GRPC__ENABLED=false)")
        return

    # 每次启动都重建 schema 并写入种子数据
    await bootstrap_database(engine, seed=settings.database.seed_on_startup)

    server, port = await create_server()
    address = f"{settings.grpc.host}:{port}"
    logger.info("grpc_starting", address=address, tls=settings.grpc.tls.enabled)
    await server.start()
    logger.info("grpc_started", address=address)
    try:
        await server.wait_for_termination()
    except asyncio.CancelledError:
        logger.info("grpc_stopping")
        await server.stop(grace=None)
    finally:
        await engine.dispose()
        logger.info("grpc_stopped")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
