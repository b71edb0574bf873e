"""Tests for the application exception hierarchy."""

from __future__ import annotations

import pytest

from catalog_service.core.exceptions import (
    AppException,
    BadRequestException,
    InvalidArgumentException,
    NotFoundException,
    ServiceUnavailableException,
    StoreTimeoutException,
    UnsupportedMediaTypeException,
)


@pytest.mark.parametrize(
    ("exc", "status_code", "type_", "title"),
    [
        (NotFoundException("gone"), 404, "not-found", "Not Found"),
        (BadRequestException("bad"), 400, "bad-request", "Bad Request"),
        (InvalidArgumentException("Invalid category: X"), 400, "invalid-argument", "Bad Request"),
        (UnsupportedMediaTypeException("xml"), 415, "unsupported-media-type", "Unsupported Media Type"),
        (ServiceUnavailableException("down"), 503, "service-unavailable", "Service Unavailable"),
    ],
)
def test_status_and_problem_type(exc: AppException, status_code: int, type_: str, title: str):
    assert exc.status_code == status_code
    assert exc.type == type_
    assert exc.title == title


def test_invalid_argument_is_a_bad_request():
    assert isinstance(InvalidArgumentException("x"), BadRequestException)


def test_store_timeout_is_service_unavailable():
    exc = StoreTimeoutException(operation="products.save", timeout=2.5)

    assert isinstance(exc, ServiceUnavailableException)
    assert exc.status_code == 503
    assert exc.type == "store-timeout"
    assert exc.extra == {"operation": "products.save", "timeout": 2.5}
    assert "products.save" in exc.detail


def test_default_title_for_unknown_status():
    assert AppException(status_code=418, detail="teapot").title == "Error"
