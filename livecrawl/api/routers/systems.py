from fastapi import APIRouter

from livecrawl.services.crawl_controller import CrawlController


def create_systems_router(controller: CrawlController, container_env: dict):
    """Operational endpoints: liveness plus the effective configuration."""
    router = APIRouter(prefix="/systems", tags=["System"])

    @router.get("/health")
    def health():
        return {"status": "ok", "crawler": controller.state.value}

    @router.get("/config")
    def get_config():
        return {
            "environment": {
                key: str(value) if value is not None else None
                for key, value in container_env.items()
            },
            "engine": {
                "rate_limit_interval": controller.rate_limiter.interval_seconds,
                "frontier_capacity": controller.frontier_capacity,
                "default_workers": controller.default_workers,
                "max_workers": controller.max_workers,
                "stop_timeout": controller.stop_timeout,
            },
        }

    return router
