"""Cookie store for the controller session.

The controller's session cookie (``TPOMADA_SESSIONID``) is re-issued on
responses; the store keeps the latest value per cookie name and renders
them back as a single ``Cookie`` header.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator, Mapping


def parse_set_cookie(header: str) -> tuple[str, str] | None:
    """Extract ``(name, value)`` from a single ``Set-Cookie`` header value.

    Attributes after the first ``;`` (Path, HttpOnly, ...) are ignored.

    Returns:
        The cookie pair, or None if the header has no ``name=value`` part.
    """
    pair = header.split(";", 1)[0].strip()
    if "=" not in pair:
        return None
    name, value = pair.split("=", 1)
    name = name.strip()
    if not name:
        return None
    return name, value.strip()


class CookieStore(Mapping[str, str]):
    """Mapping of cookie name to latest value with a last-write-wins merge.

    Merges are applied under a lock so responses handled on different
    threads never interleave their updates.

    Example:
        ```python
        store = CookieStore({"A": "1"})
        store.merge(["A=2; Path=/"])
        store.header()  # "A=2"
        ```
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._cookies: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def __getitem__(self, name: str) -> str:
        return self._cookies[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._cookies)

    def __len__(self) -> int:
        return len(self._cookies)

    def __repr__(self) -> str:
        return f"CookieStore({sorted(self._cookies)})"

    def merge(self, set_cookie_headers: Iterable[str]) -> None:
        """Merge raw ``Set-Cookie`` header values into the store.

        A cookie name seen again replaces its previous value. Later headers
        in the same batch win over earlier ones.
        """
        pairs = [p for p in map(parse_set_cookie, set_cookie_headers) if p]
        if not pairs:
            return
        with self._lock:
            for name, value in pairs:
                # Re-insert so header() order follows the latest write
                self._cookies.pop(name, None)
                self._cookies[name] = value

    def set(self, name: str, value: str) -> None:
        with self._lock:
            self._cookies.pop(name, None)
            self._cookies[name] = value

    def clear(self) -> None:
        with self._lock:
            self._cookies.clear()

    def header(self) -> str:
        """Render the store as a ``Cookie`` header value (``a=1; b=2``)."""
        with self._lock:
            return "; ".join(f"{k}={v}" for k, v in self._cookies.items())
