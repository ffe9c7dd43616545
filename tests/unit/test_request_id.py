"""Request id sanitizing."""

from taskdesk.middleware.request_id import REQUEST_ID_MAX_LENGTH, resolve_request_id


def test_safe_request_id_is_kept() -> None:
    assert resolve_request_id("  req-123_abc ") == "req-123_abc"


def test_unsafe_or_missing_request_id_replaced() -> None:
    for raw in (None, "", "bad id\nINJECT", "x" * (REQUEST_ID_MAX_LENGTH + 1)):
        rid = resolve_request_id(raw)
        assert rid != raw
        assert len(rid) == 32
