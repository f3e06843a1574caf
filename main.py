import asyncio
import logging
import sys

from jobdaemon.adapters.registry import build_adapters
from jobdaemon.browser.manager import BrowserManager
from jobdaemon.config.settings import settings
from jobdaemon.core.aggregator import Aggregator
from jobdaemon.core.orchestrator import Orchestrator
from jobdaemon.core.scheduler import setup_scheduler, shutdown_scheduler
from jobdaemon.notify.discord import DiscordNotifier
from jobdaemon.notify.mailer import EmailSummarySender
from jobdaemon.server import create_app, create_server
from jobdaemon.store.seen_store import SeenStore

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger("jobdaemon")


async def main():
    """
    Main entry point: scheduler plus health-check listener, until interrupted.
    """
    logger.info("JobDaemon started.")

    store = SeenStore(settings.DB_PATH)
    orchestrator = Orchestrator(
        aggregator=Aggregator(build_adapters(settings.ENABLED_SOURCES)),
        store=store,
        notifier=DiscordNotifier(),
        summary=EmailSummarySender(),
    )

    scheduler = setup_scheduler(orchestrator)
    server = create_server(create_app(orchestrator, store), settings.PORT)
    logger.info(f"Server listening on port {settings.PORT}")

    try:
        await server.serve()
    finally:
        shutdown_scheduler(scheduler)
        await BrowserManager.close()
        store.close()
        logger.info("JobDaemon stopped.")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
