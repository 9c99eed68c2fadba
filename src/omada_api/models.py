"""Envelope helpers and records returned by the connect handshake.

Domain objects (networks, ACLs, SSIDs, devices, ...) are not modelled:
they travel as plain dicts, exactly as the controller returns them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .exceptions import OmadaAPIError, SessionExpiredError

# Envelope error codes observed on OC220 / software controller 5.x-6.x
SUCCESS = 0
INVALID_CREDENTIALS = -30109
SESSION_EXPIRED_CODES: tuple[int, ...] = (-1200,)

# Page size used by every list helper
DEFAULT_PAGE_SIZE = 100


@dataclass
class ControllerInfo:
    """Result of the unauthenticated ``/api/info`` discovery call."""

    controller_id: str
    controller_version: str | None = None
    api_version: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_result(cls, result: dict[str, Any]) -> ControllerInfo:
        return cls(
            controller_id=result["omadacId"],
            controller_version=result.get("controllerVer"),
            api_version=result.get("apiVer"),
            raw=result,
        )


@dataclass
class Site:
    """A logical management scope under the controller."""

    id: str
    name: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_entry(cls, entry: dict[str, Any]) -> Site:
        return cls(id=entry["id"], name=entry.get("name"), raw=entry)


def error_code(envelope: Any) -> int | None:
    """Return the envelope's ``errorCode``, or None for non-envelopes."""
    if isinstance(envelope, dict):
        code = envelope.get("errorCode")
        if isinstance(code, int):
            return code
    return None


def is_success(envelope: Any) -> bool:
    return error_code(envelope) == SUCCESS


def is_session_expired(
    envelope: Any,
    expired_codes: tuple[int, ...] = SESSION_EXPIRED_CODES,
) -> bool:
    """Check whether an envelope signals an expired session.

    A raw-text response (the login page served in place of JSON) is also
    treated as expired, since the controller answers that way when a
    credential carrier is missing or stale.
    """
    if isinstance(envelope, str):
        return True
    return error_code(envelope) in expired_codes


def result_data(envelope: Any) -> Any:
    """Unwrap the ``result`` of an envelope.

    Paged results (``{"data": [...], "totalRows": ...}``) yield the list;
    single-object results yield the object. Anything else yields None.
    """
    if not isinstance(envelope, dict):
        return None
    result = envelope.get("result")
    if isinstance(result, dict) and isinstance(result.get("data"), list):
        return result["data"]
    return result


def raise_for_envelope(
    envelope: Any,
    expired_codes: tuple[int, ...] = SESSION_EXPIRED_CODES,
) -> Any:
    """Raise if the envelope is not a success, otherwise return it.

    This is an opt-in helper for callers; ``OmadaSession.call()`` never
    interprets the envelope itself.

    Raises:
        SessionExpiredError: If the envelope signals session expiry.
        OmadaAPIError: For any other non-success envelope.
    """
    if is_session_expired(envelope, expired_codes):
        raise SessionExpiredError(
            "Controller session expired; reconnect and retry",
            error_code=error_code(envelope),
            envelope=envelope,
        )
    if not is_success(envelope):
        msg = envelope.get("msg") if isinstance(envelope, dict) else None
        raise OmadaAPIError(
            f"API error {error_code(envelope)}: {msg or 'unknown error'}",
            error_code=error_code(envelope),
            envelope=envelope,
        )
    return envelope
