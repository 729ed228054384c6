import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from livecrawl.api.routers import create_crawlers_router, create_systems_router
from livecrawl.services.crawl_controller import CrawlController

logger = logging.getLogger(__name__)


def create_app(controller: CrawlController, container_env: Optional[dict] = None, poll_interval: float = 0.5) -> FastAPI:
    """Return the FastAPI application exposing crawl control and the live result feed."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        logger.info("Shutting down, stopping active crawl")
        controller.shutdown()

    app = FastAPI(title="LiveCrawl", lifespan=lifespan)
    app.include_router(create_crawlers_router(controller, poll_interval=poll_interval))
    app.include_router(create_systems_router(controller, container_env or {}))
    return app
