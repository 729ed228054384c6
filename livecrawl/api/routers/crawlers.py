import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.responses import HTMLResponse

from livecrawl.api.frontend import INDEX_HTML
from livecrawl.exceptions import InvalidCrawlRequest
from livecrawl.services.crawl_controller import CrawlController

logger = logging.getLogger(__name__)


class StartRequest(BaseModel):
    url: Optional[str] = None
    workers: Optional[int] = None


async def _parse_start_request(request: Request) -> StartRequest:
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid request body")
    try:
        return StartRequest.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "body" for err in e.errors())
        raise HTTPException(status_code=400, detail=f"Invalid request body: {fields}")


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    # Clients never send anything meaningful; reading only detects the close.
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        return


def create_crawlers_router(controller: CrawlController, poll_interval: float = 0.5):
    router = APIRouter(tags=["Crawler"])

    @router.get("/", response_class=HTMLResponse)
    def index():
        return HTMLResponse(INDEX_HTML)

    @router.post("/start", status_code=202)
    async def start(request: Request):
        req = await _parse_start_request(request)
        try:
            run = await run_in_threadpool(controller.start_crawl, req.url, req.workers)
        except InvalidCrawlRequest as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"status": "started", "run_id": run.run_id, "workers": run.worker_count}

    @router.post("/stop")
    def stop():
        stopped = controller.stop_crawl()
        return {"status": "stopped" if stopped else "idle"}

    @router.get("/status")
    def status():
        return controller.status()

    @router.websocket("/ws")
    async def results_stream(websocket: WebSocket):
        await websocket.accept()
        subscription = controller.subscribe_results()
        listener = asyncio.ensure_future(_wait_for_disconnect(websocket))
        try:
            while not listener.done():
                message = await run_in_threadpool(subscription.get, poll_interval)
                if message is None:
                    continue
                await websocket.send_text(message)
        except WebSocketDisconnect:
            pass
        except Exception as e:
            logger.warning("WebSocket write error: %s", e)
        finally:
            listener.cancel()
            subscription.close()

    return router
