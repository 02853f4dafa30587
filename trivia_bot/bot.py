"""Main entry point for the trivia bot."""
import asyncio
import logging
import sys
from pathlib import Path

from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import BotCommand

from trivia_bot.config import get_settings
from trivia_bot.core.database import init_database
from trivia_bot.handlers import start, quiz, results
from trivia_bot.services.session_registry import SessionRegistry

logger = logging.getLogger(__name__)


def setup_logging(level: str, log_file: str):
    """Log to stdout and to the log file."""
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file, encoding="utf-8"),
        ]
    )


async def main():
    """Main function to start the bot."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    logger.info("Starting trivia bot (week %d)...", settings.QUIZ_PERIOD)

    db = await init_database(settings.DATABASE_PATH)
    registry = SessionRegistry(db, settings)

    bot = Bot(token=settings.BOT_TOKEN)
    dp = Dispatcher(storage=MemoryStorage(), registry=registry)

    dp.include_router(start.router)
    dp.include_router(quiz.router)
    dp.include_router(results.router)

    await bot.set_my_commands([
        BotCommand(command="start", description="Empezar el trivial"),
    ])

    try:
        logger.info("Starting bot polling...")
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    except Exception as e:
        logger.error(f"Error during polling: {e}")
        raise
    finally:
        await bot.session.close()
        await db.close()
        logger.info("Bot stopped")


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")


if __name__ == "__main__":
    run()
