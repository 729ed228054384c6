import json
import time

import pytest
from fastapi.testclient import TestClient

from livecrawl.api.server import create_app
from livecrawl.domain.crawl_result import CrawlResult, FetchStatus
from livecrawl.services.crawl_controller import CrawlController, CrawlState
from livecrawl.services.link_parser import LinkParser
from livecrawl.services.rate_limiter import RateLimiter
from livecrawl.services.result_broadcaster import ResultBroadcaster
from livecrawl.services.url_resolver import UrlResolver


class StaticSite:
    def __init__(self):
        self.calls = []

    def fetch(self, url):
        self.calls.append(url)
        return "<p>no links</p>"


class AllowAll:
    def can_fetch(self, url):
        return True


@pytest.fixture
def controller():
    return CrawlController(
        fetcher=StaticSite(),
        link_parser=LinkParser(),
        robots_policy=AllowAll(),
        url_resolver=UrlResolver(),
        rate_limiter=RateLimiter(0),
        broadcaster=ResultBroadcaster(),
        default_workers=2,
    )


@pytest.fixture
def client(controller):
    app = create_app(controller, container_env={"USER_AGENT": "TestBot/1.0", "LIVECRAWL_PORT": 8080}, poll_interval=0.05)
    with TestClient(app) as c:
        yield c


def _wait_idle(controller, timeout=5.0):
    deadline = time.monotonic() + timeout
    while controller.state != CrawlState.IDLE and time.monotonic() < deadline:
        time.sleep(0.01)


def test_index_serves_operator_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "/ws" in resp.text


def test_start_returns_run_and_default_workers(client, controller):
    resp = client.post("/start", json={"url": "https://example.com", "workers": "0"})
    assert resp.status_code == 202
    body = resp.json()
    assert body["status"] == "started"
    assert body["workers"] == 2
    assert body["run_id"] == controller.current_run.run_id


def test_start_accepts_numeric_string_workers(client):
    resp = client.post("/start", json={"url": "https://example.com", "workers": "5"})
    assert resp.status_code == 202
    assert resp.json()["workers"] == 5


def test_start_rejects_non_http_url(client, controller):
    resp = client.post("/start", json={"url": "ftp://example.com"})
    assert resp.status_code == 400
    assert "Invalid URL" in resp.json()["detail"]
    assert controller.current_run is None


def test_start_requires_url(client, controller):
    resp = client.post("/start", json={"workers": "3"})
    assert resp.status_code == 400
    assert "URL is required" in resp.json()["detail"]
    assert controller.current_run is None


def test_start_rejects_non_numeric_workers(client, controller):
    resp = client.post("/start", json={"url": "https://example.com", "workers": "abc"})
    assert resp.status_code == 400
    assert "workers" in resp.json()["detail"]
    assert controller.current_run is None


@pytest.mark.parametrize("body", ["not json", "", "[1, 2]"])
def test_start_rejects_undecodable_body(client, controller, body):
    resp = client.post("/start", content=body, headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert controller.current_run is None


def test_stop_when_idle(client):
    resp = client.post("/stop")
    assert resp.status_code == 200
    assert resp.json() == {"status": "idle"}


def test_status_after_crawl(client, controller):
    client.post("/start", json={"url": "https://example.com", "workers": 1})
    _wait_idle(controller)

    resp = client.get("/status")
    assert resp.status_code == 200
    body = resp.json()
    assert body["state"] == "idle"
    assert body["seed_url"] == "https://example.com"
    assert body["results"] == 1


def test_websocket_replays_current_log(client, controller):
    controller.broadcaster.reset("r1")
    for i in range(2):
        controller.broadcaster.record(
            CrawlResult(url=f"https://example.com/{i}", worker_id=i, status=FetchStatus.SUCCESS, run_id="r1")
        )

    with client.websocket_connect("/ws") as ws:
        first = json.loads(ws.receive_text())
        second = json.loads(ws.receive_text())

    assert [first["url"], second["url"]] == ["https://example.com/0", "https://example.com/1"]
    assert first["worker_id"] == 0
    assert second["status"] == "Success"


def test_websocket_streams_live_results(client, controller):
    with client.websocket_connect("/ws") as ws:
        client.post("/start", json={"url": "https://example.com", "workers": 1})
        message = json.loads(ws.receive_text())

    assert message["url"] == "https://example.com"
    assert message["run_id"] == controller.current_run.run_id


def test_systems_config_exposes_environment_and_engine_settings(client):
    resp = client.get("/systems/config")
    assert resp.status_code == 200
    body = resp.json()
    assert body["environment"] == {"USER_AGENT": "TestBot/1.0", "LIVECRAWL_PORT": "8080"}
    assert body["engine"]["default_workers"] == 2
    assert body["engine"]["max_workers"] == 100
    assert body["engine"]["rate_limit_interval"] == 0
    assert body["engine"]["frontier_capacity"] == 100


def test_systems_health_reports_crawler_state(client, controller):
    assert client.get("/systems/health").json() == {"status": "ok", "crawler": "idle"}


def test_websocket_disconnect_unsubscribes(client, controller):
    with client.websocket_connect("/ws"):
        deadline = time.monotonic() + 2.0
        while controller.broadcaster.subscriber_count == 0 and time.monotonic() < deadline:
            time.sleep(0.01)
        assert controller.broadcaster.subscriber_count == 1

    deadline = time.monotonic() + 2.0
    while controller.broadcaster.subscriber_count and time.monotonic() < deadline:
        time.sleep(0.01)
    assert controller.broadcaster.subscriber_count == 0
