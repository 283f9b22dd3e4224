import asyncio
import logging
import signal
from typing import Optional

from gym_registration.api.server import create_server
from gym_registration.core.config import Settings, settings as default_settings
from gym_registration.core.context import AppContext
from gym_registration.core.database import init_database
from gym_registration.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def serve(settings: Optional[Settings] = None) -> None:
    """Запуск gRPC-сервера; блокирует до SIGINT/SIGTERM."""
    settings = settings or default_settings
    ctx = AppContext.from_settings(settings)
    await init_database(ctx.engine, reset=settings.RESET_DATABASE)

    server = create_server(ctx)
    listen_addr = f"{settings.GRPC_HOST}:{settings.GRPC_PORT}"
    server.add_insecure_port(listen_addr)
    await server.start()
    logger.info(f"gRPC сервер запущен на {listen_addr}")

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(
                sig, lambda: asyncio.ensure_future(server.stop(settings.GRPC_SHUTDOWN_GRACE))
            )
        except NotImplementedError:
            # Windows: остаётся KeyboardInterrupt
            pass

    try:
        await server.wait_for_termination()
    finally:
        logger.info("Останавливаем gRPC сервер...")
        await server.stop(settings.GRPC_SHUTDOWN_GRACE)
        await ctx.dispose()
        logger.info("Сервер остановлен")


def run(settings: Optional[Settings] = None) -> None:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)
    asyncio.run(serve(settings))


if __name__ == "__main__":
    run()
