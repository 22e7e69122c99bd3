from typing import Mapping

DISALLOWED_HEADERS = frozenset({
    "accept",
    "content-length",
    "content-type",
})
"""
Headers the transport sets itself. Overriding them would break the
JSON-RPC exchange, so user supplied values are rejected.
"""


def normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Lower-case header names; HTTP header names are case-insensitive."""
    return {name.lower(): value for name, value in (headers or {}).items()}


def assert_is_allowed_http_request_headers(headers: Mapping[str, str] | None) -> None:
    bad = sorted(name for name in normalize_headers(headers) if name in DISALLOWED_HEADERS)
    if bad:
        raise ValueError(
            f"HTTP header(s) forbidden: {', '.join(bad)}. "
            "These are set by the transport and cannot be overridden."
        )
