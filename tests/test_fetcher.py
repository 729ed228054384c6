from unittest.mock import Mock

import pytest

from livecrawl.domain.http_response import HttpResponse
from livecrawl.exceptions import HttpFetchError, HttpStatusError
from livecrawl.services.fetcher import HttpServiceFetcher


def test_returns_body_on_success():
    http_service = Mock(fetch=Mock(return_value=HttpResponse(200, "<html></html>")))
    assert HttpServiceFetcher(http_service).fetch("http://example.com") == "<html></html>"


def test_error_status_raises_status_error():
    http_service = Mock(fetch=Mock(return_value=HttpResponse(503, "busy")))
    with pytest.raises(HttpStatusError) as exc:
        HttpServiceFetcher(http_service).fetch("http://example.com")
    assert exc.value.status_code == 503
    assert "503" in str(exc.value)
    assert isinstance(exc.value, HttpFetchError)


def test_transport_errors_propagate():
    err = HttpFetchError("http://example.com", ConnectionError("refused"))
    http_service = Mock(fetch=Mock(side_effect=err))
    with pytest.raises(HttpFetchError):
        HttpServiceFetcher(http_service).fetch("http://example.com")


def test_non_html_body_is_not_returned_for_expansion():
    pdf = HttpResponse(200, "%PDF-1.7 <a href='/x'>", "application/pdf")
    http_service = Mock(fetch=Mock(return_value=pdf))
    assert HttpServiceFetcher(http_service).fetch("http://example.com/doc.pdf") == ""


def test_html_with_charset_is_returned():
    page = HttpResponse(200, "<a href='/x'>x</a>", "text/html; charset=utf-8")
    http_service = Mock(fetch=Mock(return_value=page))
    assert HttpServiceFetcher(http_service).fetch("http://example.com") == "<a href='/x'>x</a>"
