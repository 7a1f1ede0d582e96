import asyncio
import logging

from app.config import get_settings
from app.db.engine import create_tables, drop_tables, with_async_engine

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


async def main():
    async with with_async_engine(get_settings()) as engine:
        await drop_tables(engine)
        await create_tables(engine)
    logger.info("DB schema created.")

if __name__ == "__main__":
    asyncio.run(main())
