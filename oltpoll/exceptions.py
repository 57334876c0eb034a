"""
oltpoll - Exceptions.

Error taxonomy for OLT polling:

- TransportError: session/socket failure or retries exhausted
- ProtocolError: device returned an error for one specific OID
- DecodeError: unexpected payload or index shape
- UnsupportedVendorError: no OID table registered for a vendor tag
- ConfigError: invalid poller configuration file
"""

from typing import Optional


class OltPollError(Exception):
    """Base class for all oltpoll errors."""


class TransportError(OltPollError):
    """SNMP session could not be established or the request timed out."""

    def __init__(self, message: str, host: Optional[str] = None, oid: Optional[str] = None):
        super().__init__(message)
        self.host = host
        self.oid = oid


class ProtocolError(OltPollError):
    """Per-address error reported by the agent (noSuchObject and friends)."""

    def __init__(self, oid: str, reason: str):
        super().__init__(f"{oid}: {reason}")
        self.oid = oid
        self.reason = reason


class DecodeError(OltPollError):
    """Payload or index could not be interpreted."""


class IndexDecodeError(DecodeError, ValueError):
    """OID suffix is empty or not numeric."""


class UnsupportedVendorError(OltPollError, ValueError):
    """No OID table is registered for the requested vendor."""


class ConfigError(OltPollError):
    """Poller configuration file is missing or invalid."""
