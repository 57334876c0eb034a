"""
oltpoll - SNMP Transport.

Async get/walk over pysnmp, the only place this package touches the wire.

Features:
- Async/await with pysnmp.hlapi.v3arch.asyncio
- GETBULK walks for v2c, GETNEXT walks for v1
- Prefix-based table boundary detection
- One SnmpEngine + UDP target per call, released on every exit path
- Per-OID agent errors dropped from the result, not raised

Usage:
    from oltpoll.snmp.transport import SnmpTransport
    from oltpoll.models import DeviceEndpoint

    transport = SnmpTransport(DeviceEndpoint("10.0.0.2", community="public"))

    # Walk a table
    rows = await transport.walk("1.3.6.1.4.1.2011.6.128.1.1.2.43.1.3")

    # Get scalars
    values = await transport.get(["1.3.6.1.2.1.1.1.0", "1.3.6.1.2.1.1.5.0"])
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, AsyncIterator, Dict, List, Protocol, Sequence, Tuple

from pysnmp.hlapi.v3arch.asyncio import (
    bulk_cmd, get_cmd, next_cmd,
    SnmpEngine, CommunityData,
    UdpTransportTarget, ContextData,
    ObjectType, ObjectIdentity,
)
from pysnmp.proto.rfc1905 import EndOfMibView, NoSuchInstance, NoSuchObject

from ..exceptions import ProtocolError, TransportError
from ..models import DeviceEndpoint, SnmpVersion
from .parsers import DecodedValue, decode_value


log = logging.getLogger("oltpoll.snmp")

VarBinds = Dict[str, DecodedValue]

# v1 error-status 2: requested OID does not exist (or walked past the end)
ERROR_STATUS_NO_SUCH_NAME = 2

_MISSING_TYPES = (NoSuchObject, NoSuchInstance, EndOfMibView)


class Transport(Protocol):
    """Minimal contract the collectors need from a transport."""

    async def get(self, addresses: Sequence[str]) -> VarBinds:
        ...

    async def walk(self, base: str) -> VarBinds:
        ...


def build_credentials(endpoint: DeviceEndpoint) -> CommunityData:
    """Build pysnmp community credentials for v1/v2c."""
    mp_model = 1 if endpoint.version == SnmpVersion.V2C else 0
    return CommunityData(endpoint.community, mpModel=mp_model)


def _in_subtree(oid: str, base: str) -> bool:
    return oid.startswith(base + '.')


@dataclass
class _Session:
    engine: SnmpEngine
    auth: CommunityData
    target: UdpTransportTarget


class SnmpTransport:
    """
    Async SNMP client bound to one endpoint.

    Holds configuration only. Every get()/walk() call builds its own
    engine and UDP target and closes them before returning, so one
    instance can be shared by concurrent sub-walks.

    Attributes:
        endpoint: Host, community, version, timeout and retries
        bulk_size: Max-repetitions for GETBULK
        max_rows: Safety limit for rows returned by one walk
    """

    def __init__(
        self,
        endpoint: DeviceEndpoint,
        bulk_size: int = 25,
        max_rows: int = 10000,
    ):
        self.endpoint = endpoint
        self.bulk_size = bulk_size
        self.max_rows = max_rows

    def __repr__(self) -> str:
        return f"SnmpTransport({self.endpoint!r})"

    @property
    def _deadline(self) -> float:
        # pysnmp enforces timeout/retries itself; this is a backstop
        return self.endpoint.timeout * (self.endpoint.retries + 1) + 2

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[_Session]:
        """Open an engine and UDP target, always closing the dispatcher."""
        engine = SnmpEngine()
        try:
            try:
                target = await UdpTransportTarget.create(
                    (self.endpoint.host, self.endpoint.port),
                    timeout=self.endpoint.timeout,
                    retries=self.endpoint.retries,
                )
            except Exception as e:
                raise TransportError(
                    f"Cannot open SNMP session to {self.endpoint.host}: {e}",
                    host=self.endpoint.host,
                ) from e
            yield _Session(engine, build_credentials(self.endpoint), target)
        finally:
            engine.close_dispatcher()

    # -------------------------------------------------------------------------
    # GET
    # -------------------------------------------------------------------------

    async def get(self, addresses: Sequence[str]) -> VarBinds:
        """
        Fetch exact-match values.

        OIDs the agent reports as missing are logged and left out of
        the result. Raises TransportError if the device cannot be reached.
        """
        pending: List[str] = [a.lstrip('.') for a in addresses]
        results: VarBinds = {}
        if not pending:
            return results

        start = datetime.now()
        async with self._session() as session:
            while pending:
                error_indication, error_status, error_index, var_binds = await self._request(
                    get_cmd(
                        session.engine,
                        session.auth,
                        session.target,
                        ContextData(),
                        *[ObjectType(ObjectIdentity(oid)) for oid in pending],
                        lookupMib=False,
                    ),
                    pending[0],
                )

                if error_indication:
                    raise TransportError(
                        f"GET {self.endpoint.host}: {error_indication}",
                        host=self.endpoint.host,
                    )

                if error_status:
                    # v1 fails the whole PDU; drop the offending OID and retry the rest
                    bad = int(error_index) - 1 if error_index else -1
                    if not 0 <= bad < len(pending):
                        raise TransportError(
                            f"GET {self.endpoint.host}: {error_status.prettyPrint()}",
                            host=self.endpoint.host,
                        )
                    self._protocol_error(ProtocolError(pending[bad], error_status.prettyPrint()))
                    pending = pending[:bad] + pending[bad + 1:]
                    continue

                for var_bind in var_binds:
                    oid_str, value = str(var_bind[0]), var_bind[1]
                    if isinstance(value, _MISSING_TYPES):
                        self._protocol_error(ProtocolError(oid_str, value.__class__.__name__))
                        continue
                    results[oid_str] = decode_value(value)
                break

        duration = (datetime.now() - start).total_seconds()
        log.debug(f"GET {self.endpoint.host}: {len(results)}/{len(addresses)} values in {duration:.2f}s")
        return results

    # -------------------------------------------------------------------------
    # WALK
    # -------------------------------------------------------------------------

    async def walk(self, base: str) -> VarBinds:
        """
        Return every OID/value pair inside the subtree rooted at `base`.

        Walks until the agent leaves the subtree, stops advancing,
        or max_rows is reached. Raises TransportError on timeout.
        """
        base = base.strip('.')
        results: VarBinds = {}
        last_oid = base
        start = datetime.now()

        async with self._session() as session:
            while len(results) < self.max_rows:
                var_binds = await self._walk_step(session, last_oid, base)
                if not var_binds:
                    break

                done = False
                for var_bind in var_binds:
                    oid_str, value = str(var_bind[0]), var_bind[1]
                    if isinstance(value, EndOfMibView) or not _in_subtree(oid_str, base):
                        done = True
                        break
                    if oid_str in results or oid_str == last_oid:
                        # Agent is not advancing
                        done = True
                        break
                    last_oid = oid_str
                    if isinstance(value, (NoSuchObject, NoSuchInstance)):
                        continue
                    results[oid_str] = decode_value(value)

                if done:
                    break
            else:
                log.warning(f"WALK {self.endpoint.host} {base}: stopped at max_rows={self.max_rows}")

        duration = (datetime.now() - start).total_seconds()
        log.debug(f"WALK {self.endpoint.host} {base}: {len(results)} entries in {duration:.2f}s")
        return results

    async def _walk_step(self, session: _Session, oid: str, base: str) -> List[Tuple[Any, Any]]:
        """One GETBULK (v2c) or GETNEXT (v1) exchange."""
        if self.endpoint.version == SnmpVersion.V2C:
            request = bulk_cmd(
                session.engine,
                session.auth,
                session.target,
                ContextData(),
                0,                # non-repeaters
                self.bulk_size,   # max-repetitions
                ObjectType(ObjectIdentity(oid)),
                lookupMib=False,
            )
        else:
            request = next_cmd(
                session.engine,
                session.auth,
                session.target,
                ContextData(),
                ObjectType(ObjectIdentity(oid)),
                lookupMib=False,
            )

        error_indication, error_status, error_index, var_binds = await self._request(request, base)

        if error_indication:
            raise TransportError(
                f"WALK {self.endpoint.host} {base}: {error_indication}",
                host=self.endpoint.host,
                oid=base,
            )

        if error_status:
            if int(error_status) == ERROR_STATUS_NO_SUCH_NAME:
                # v1 end-of-MIB
                return []
            raise TransportError(
                f"WALK {self.endpoint.host} {base}: {error_status.prettyPrint()}",
                host=self.endpoint.host,
                oid=base,
            )

        return list(var_binds)

    async def _request(self, coro, oid: str):
        """Await one pysnmp command, mapping timeouts and surprises to TransportError."""
        try:
            return await asyncio.wait_for(coro, timeout=self._deadline)
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"{self.endpoint.host} {oid}: timeout after {self._deadline:.0f}s",
                host=self.endpoint.host,
                oid=oid,
            ) from e
        except TransportError:
            raise
        except Exception as e:
            raise TransportError(
                f"{self.endpoint.host} {oid}: {type(e).__name__}: {e}",
                host=self.endpoint.host,
                oid=oid,
            ) from e

    def _protocol_error(self, error: ProtocolError) -> None:
        log.warning(f"GET {self.endpoint.host} {error}")
