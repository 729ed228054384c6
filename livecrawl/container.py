"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from livecrawl import config as env
from livecrawl.services.crawl_controller import CrawlController
from livecrawl.services.fetcher import HttpServiceFetcher
from livecrawl.services.http_service import HttpService
from livecrawl.services.link_parser import LinkParser
from livecrawl.services.rate_limiter import RateLimiter
from livecrawl.services.result_broadcaster import ResultBroadcaster
from livecrawl.services.robots_cache import RobotsCache
from livecrawl.services.robots_service import RobotsService
from livecrawl.services.url_resolver import UrlResolver


# Environment variables used by the container (read via `livecrawl.config` helpers).
#
# USER_AGENT (str, default: "LiveCrawl/0.1")
#   User-Agent header for page fetches and robots.txt fetching.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Per-read timeout for outbound HTTP requests.
#
# LIVECRAWL_STOP_TIMEOUT (float seconds, default: 30)
#   How long a stop or restart waits for busy workers before abandoning them.
#
# LIVECRAWL_RATE_LIMIT_INTERVAL (float seconds, default: 0.5)
#   Minimum spacing between fetches across all workers combined.
#
# LIVECRAWL_FRONTIER_CAPACITY (int, default: 100)
#   Primary frontier buffer size; further URLs spill into an overflow queue.
#
# LIVECRAWL_DEFAULT_WORKERS (int, default: 10)
#   Worker count used when a start request omits it or sends a non-positive value.
#
# LIVECRAWL_MAX_WORKERS (int, default: 100)
#   Upper bound on workers per run; larger requests are clamped.
#
# LIVECRAWL_ROBOTS_ENABLED (bool, default: true)
#   Consult robots.txt before each fetch.
#
# LIVECRAWL_ROBOTS_CACHE_MAX_SIZE (int, default: 2048)
#   Max number of hosts kept in the in-memory robots.txt cache (LRU eviction).
#
# LIVECRAWL_ROBOTS_CACHE_TTL_SECONDS (int seconds, default: 3600)
#   TTL for robots.txt cache entries.
#
# LIVECRAWL_HOST / LIVECRAWL_PORT (default: "0.0.0.0" / 8080)
#   Bind address of the control server.
#
# LOG_LEVEL (str, default: "INFO")
ENV = {
    "USER_AGENT": env.get_str_env("USER_AGENT", "LiveCrawl/0.1"),
    "HTTP_TIMEOUT": env.get_int_env("HTTP_TIMEOUT", 10),
    "LIVECRAWL_RATE_LIMIT_INTERVAL": env.get_float_env("LIVECRAWL_RATE_LIMIT_INTERVAL", 0.5),
    "LIVECRAWL_FRONTIER_CAPACITY": env.get_int_env("LIVECRAWL_FRONTIER_CAPACITY", 100),
    "LIVECRAWL_DEFAULT_WORKERS": env.get_int_env("LIVECRAWL_DEFAULT_WORKERS", 10),
    "LIVECRAWL_MAX_WORKERS": env.get_int_env("LIVECRAWL_MAX_WORKERS", 100),
    "LIVECRAWL_STOP_TIMEOUT": env.get_float_env("LIVECRAWL_STOP_TIMEOUT", 30.0),
    "LIVECRAWL_ROBOTS_ENABLED": env.get_bool_env("LIVECRAWL_ROBOTS_ENABLED", True),
    "LIVECRAWL_ROBOTS_CACHE_MAX_SIZE": env.get_int_env("LIVECRAWL_ROBOTS_CACHE_MAX_SIZE", 2048),
    "LIVECRAWL_ROBOTS_CACHE_TTL_SECONDS": env.get_int_env("LIVECRAWL_ROBOTS_CACHE_TTL_SECONDS", 3600),
    "LIVECRAWL_HOST": env.get_str_env("LIVECRAWL_HOST", "0.0.0.0"),
    "LIVECRAWL_PORT": env.get_int_env("LIVECRAWL_PORT", 8080),
    "LOG_LEVEL": env.get_str_env("LOG_LEVEL", "INFO").strip().upper(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for the LiveCrawl application."""

    config = providers.Configuration(default=ENV)

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int),
    )

    page_fetcher = providers.Singleton(
        HttpServiceFetcher,
        http_service=http_service,
    )

    robots_cache = providers.Singleton(
        RobotsCache,
        max_size=config.LIVECRAWL_ROBOTS_CACHE_MAX_SIZE.as_(int),
        ttl_seconds=config.LIVECRAWL_ROBOTS_CACHE_TTL_SECONDS.as_(int),
    )

    robots_service = providers.Singleton(
        RobotsService,
        http_service=http_service,
        user_agent=config.USER_AGENT.as_(str),
        enabled=config.LIVECRAWL_ROBOTS_ENABLED.as_(bool),
        cache=robots_cache,
    )

    link_parser = providers.Singleton(LinkParser)

    url_resolver = providers.Singleton(UrlResolver)

    rate_limiter = providers.Singleton(
        RateLimiter,
        interval_seconds=config.LIVECRAWL_RATE_LIMIT_INTERVAL.as_(float),
    )

    result_broadcaster = providers.Singleton(ResultBroadcaster)

    crawl_controller = providers.Singleton(
        CrawlController,
        fetcher=page_fetcher,
        link_parser=link_parser,
        robots_policy=robots_service,
        url_resolver=url_resolver,
        rate_limiter=rate_limiter,
        broadcaster=result_broadcaster,
        frontier_capacity=config.LIVECRAWL_FRONTIER_CAPACITY.as_(int),
        default_workers=config.LIVECRAWL_DEFAULT_WORKERS.as_(int),
        max_workers=config.LIVECRAWL_MAX_WORKERS.as_(int),
        stop_timeout=config.LIVECRAWL_STOP_TIMEOUT.as_(float),
    )
