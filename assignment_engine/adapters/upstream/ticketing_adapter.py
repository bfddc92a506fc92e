"""HTTP ticketing adapter — implements TicketingPort over a Freshservice-style REST API.

Every call goes through ResilientSyncClient so 429s are retried and quota
headers are tracked. Transport and non-429 HTTP errors surface as
UpstreamUnavailableError, as does a 200 whose body is not the expected
JSON object; an exhausted retry budget surfaces unchanged as
UpstreamRateLimitedError.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from assignment_engine.adapters.upstream.resilient_client import ResilientSyncClient
from assignment_engine.application.ports.ticketing_port import TicketingPort
from assignment_engine.domain.entities.agent import Agent, Leave
from assignment_engine.domain.entities.ticket import Ticket
from assignment_engine.domain.exceptions import UpstreamUnavailableError
from assignment_engine.domain.value_objects.enums import (
    LeaveStatus,
    LeaveType,
    SupportLevel,
    SupportMode,
)
from assignment_engine.domain.value_objects.location import Location

logger = logging.getLogger(__name__)

PAGE_SIZE = 100
OPEN_STATUSES = {2, 3}  # open, pending
URGENT = 4


class HttpTicketingAdapter(TicketingPort):
    """Agents and tickets from the upstream ticketing system."""

    def __init__(self, client: httpx.AsyncClient, resilient: ResilientSyncClient):
        self._client = client
        self._resilient = resilient

    async def fetch_agents(self) -> list[Agent]:
        payloads = await self._paginate("/agents", "agents")
        agents: list[Agent] = []
        for payload in payloads:
            if not payload.get("active", True):
                continue
            try:
                agents.append(agent_from_payload(payload))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed agent payload (id=%s)", payload.get("id"))
        logger.info("Fetched %d active agents (%d total)", len(agents), len(payloads))
        return agents

    async def fetch_open_tickets(self) -> list[tuple[Ticket, str | None]]:
        payloads = await self._paginate("/tickets", "tickets")
        result: list[tuple[Ticket, str | None]] = []
        for payload in payloads:
            if payload.get("status") not in OPEN_STATUSES:
                continue
            try:
                ticket = ticket_from_payload(payload)
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed ticket payload (id=%s)", payload.get("id"))
                continue
            responder = payload.get("responder_id")
            result.append((ticket, str(responder) if responder is not None else None))
        logger.info("Fetched %d open tickets (%d total)", len(result), len(payloads))
        return result

    async def fetch_ticket(self, ticket_id: str) -> Ticket | None:
        try:
            response = await self._send("GET", f"/tickets/{ticket_id}", context=f"ticket {ticket_id}")
        except UpstreamUnavailableError as e:
            cause = e.__cause__
            if isinstance(cause, httpx.HTTPStatusError) and cause.response.status_code == 404:
                return None
            raise
        payload = _body(response, "ticket", f"GET /tickets/{ticket_id}")
        try:
            return ticket_from_payload(payload)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise UpstreamUnavailableError(f"GET /tickets/{ticket_id} returned a malformed ticket: {e}") from e

    async def assign_ticket(self, ticket_id: str, agent_id: str) -> None:
        responder: int | str = int(agent_id) if agent_id.isdigit() else agent_id
        await self._send(
            "PUT",
            f"/tickets/{ticket_id}",
            context=f"assign ticket {ticket_id}",
            json={"ticket": {"responder_id": responder}},
        )
        logger.info("Assigned ticket %s to agent %s upstream", ticket_id, agent_id)

    async def _paginate(self, path: str, key: str) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        page = 1
        while True:
            response = await self._send(
                "GET", path, context=f"{key} page {page}",
                params={"page": page, "per_page": PAGE_SIZE},
            )
            batch = _body(response, key, f"GET {path} page {page}", default=[])
            if not isinstance(batch, list) or not all(isinstance(item, dict) for item in batch):
                raise UpstreamUnavailableError(f"GET {path} page {page} returned a malformed '{key}' list")
            items.extend(batch)
            if len(batch) < PAGE_SIZE:
                return items
            page += 1

    async def _send(self, method: str, path: str, context: str, **kwargs: Any) -> httpx.Response:
        async def operation() -> httpx.Response:
            return await self._client.request(method, path, **kwargs)

        try:
            return await self._resilient.execute_with_retry(operation, context)
        except httpx.HTTPError as e:
            logger.error("Upstream %s %s failed: %s", method, path, e)
            raise UpstreamUnavailableError(f"{method} {path} failed: {e}") from e


def _body(response: httpx.Response, key: str, context: str, default: Any = None) -> Any:
    """The value under key in a JSON object body; anything else is an upstream failure."""
    try:
        body = response.json()
    except ValueError as e:
        raise UpstreamUnavailableError(f"{context} returned a non-JSON body: {e}") from e
    if not isinstance(body, dict):
        raise UpstreamUnavailableError(f"{context} returned {type(body).__name__}, expected an object")
    if default is None and key not in body:
        raise UpstreamUnavailableError(f"{context} response has no '{key}'")
    return body.get(key, default)


# ─── Payload mapping ────────────────────────────────────────────────


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _location_from_payload(data: dict[str, Any] | None, fallback_tz: str | None = None) -> Location | None:
    if not data or not data.get("name"):
        return None
    modes = frozenset(SupportMode(m.lower()) for m in data.get("support_types", ["remote"]))
    return Location(
        name=data["name"],
        timezone=data.get("timezone") or fallback_tz or "UTC",
        city=data.get("city"),
        support_modes=modes,
    )


def _leave_from_payload(data: dict[str, Any] | None) -> Leave | None:
    if not data or not data.get("type"):
        return None
    return Leave(
        leave_type=LeaveType(data["type"]),
        status=LeaveStatus(data.get("status", LeaveStatus.ACTIVE.value)),
        start=_parse_datetime(data.get("start")),
        end=_parse_datetime(data.get("end")),
    )


def agent_from_payload(payload: dict[str, Any]) -> Agent:
    """Map an upstream agent record; routing attributes live in ``custom_fields``."""
    custom = payload.get("custom_fields") or {}
    name = f"{payload.get('first_name', '')} {payload.get('last_name', '')}".strip()
    return Agent(
        id=str(payload["id"]),
        name=name or payload.get("email") or str(payload["id"]),
        level=SupportLevel(custom.get("level", SupportLevel.L1.value)),
        email=payload.get("email"),
        is_available=bool(custom.get("is_available", True)),
        leave=_leave_from_payload(custom.get("leave")),
        skills=frozenset(s.strip().lower() for s in custom.get("skills", []) if s.strip()),
        location=_location_from_payload(custom.get("location"), payload.get("time_zone")),
        is_remote=bool(custom.get("is_remote", False)),
        vip_capable=bool(custom.get("vip_capable", False)),
        vip_specialist=bool(custom.get("vip_specialist", False)),
    )


def ticket_from_payload(payload: dict[str, Any]) -> Ticket:
    custom = payload.get("custom_fields") or {}
    mode = custom.get("support_mode")
    is_vip = (
        bool(custom.get("vip", False))
        or payload.get("priority") == URGENT
        or payload.get("urgency") == URGENT
    )
    return Ticket(
        id=str(payload["id"]),
        subject=payload.get("subject", ""),
        required_skills=frozenset(
            s.strip().lower() for s in custom.get("required_skills", []) if s.strip()
        ),
        required_level=SupportLevel(custom.get("required_level", SupportLevel.L1.value)),
        is_vip=is_vip,
        support_mode=SupportMode(mode.lower()) if mode else None,
        location=_location_from_payload(custom.get("location")),
        created_at=_parse_datetime(payload.get("created_at")),
    )
