import re

import pytest

from backend.app.middleware.request_id import resolve_request_id


def test_client_request_id_is_echoed(test_app_client):
    client, _ = test_app_client

    resp = client.get("/health", headers={"X-Request-ID": "trace-42.a_b"})

    assert resp.headers["x-request-id"] == "trace-42.a_b"


@pytest.mark.parametrize("sent", ["has spaces", "x" * 65, "<script>", ""])
def test_unacceptable_request_id_is_replaced(test_app_client, sent):
    client, _ = test_app_client

    resp = client.get("/health", headers={"X-Request-ID": sent})

    returned = resp.headers["x-request-id"]
    assert returned != sent
    assert re.fullmatch(r"[0-9a-f]{32}", returned)


def test_missing_request_id_gets_a_fresh_one():
    first = resolve_request_id(None)
    second = resolve_request_id(None)

    assert first != second
    assert len(first) == 32
