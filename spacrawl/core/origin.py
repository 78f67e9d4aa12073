"""Origin helpers for same-origin route filtering.

Two admission policies are supported:

- prefix (default): a target is same-origin when its absolute URL starts with
  the origin string. This admits e.g. ``https://app.example.com.evil.io``
  for ``https://app.example.com`` and ``http://localhost:30001`` for
  ``http://localhost:3000``.
- strict: compare the (scheme, host, port) tuples of both URLs.
"""

from __future__ import annotations

from urllib.parse import urlparse

DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443}


def _origin_tuple(url: str) -> tuple[str, str, int | None]:
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    host = (parsed.hostname or "").lower()
    try:
        port = parsed.port
    except ValueError:
        port = None
    if port is None:
        port = DEFAULT_PORTS.get(scheme)
    return scheme, host, port


def origin_of(url: str) -> str:
    """Return the serialized origin of a URL.

    Mirrors the browser's ``URL.origin``: lower-cased scheme and host, and the
    port only when it differs from the scheme default.

    Args:
        url: Absolute URL.

    Returns:
        Origin string such as ``https://app.example.com`` or
        ``http://localhost:5173``.

    Example:
        >>> origin_of("https://App.Example.com:443/dashboard?tab=1")
        'https://app.example.com'
    """
    scheme, host, port = _origin_tuple(url)
    if ":" in host:
        host = f"[{host}]"
    if port is None or port == DEFAULT_PORTS.get(scheme):
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def is_same_origin(target: str, origin: str, strict: bool = False) -> bool:
    """Decide whether an absolute target URL belongs to an origin.

    Args:
        target: Absolute URL resolved by the browser.
        origin: Origin string as returned by :func:`origin_of`.
        strict: Compare parsed (scheme, host, port) tuples instead of a
            textual prefix.

    Returns:
        True if the target is admitted.
    """
    if not strict:
        return target.startswith(origin)
    return _origin_tuple(target) == _origin_tuple(origin)
