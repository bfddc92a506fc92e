"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest

from assignment_engine.domain.entities.agent import Agent, OpenTicket
from assignment_engine.domain.entities.ticket import Ticket
from assignment_engine.domain.value_objects.enums import SupportLevel, SupportMode
from assignment_engine.domain.value_objects.location import Location


@pytest.fixture
def now():
    # A Wednesday
    return datetime(2025, 3, 12, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def vancouver():
    return Location(
        name="Vancouver",
        timezone="America/Vancouver",
        city="Vancouver",
        support_modes=frozenset({SupportMode.ONSITE, SupportMode.REMOTE}),
    )


@pytest.fixture
def seattle():
    return Location(
        name="Seattle",
        timezone="America/Vancouver",
        city="Seattle",
        support_modes=frozenset({SupportMode.REMOTE}),
    )


@pytest.fixture
def toronto():
    return Location(
        name="Toronto",
        timezone="America/Toronto",
        city="Toronto",
        support_modes=frozenset({SupportMode.ONSITE, SupportMode.REMOTE}),
    )


@pytest.fixture
def make_agent():
    """Build an Agent; ``ages`` become open tickets with those ages in days."""

    def _make(agent_id="a1", level=SupportLevel.L1, skills=(), ages=(), **kwargs):
        return Agent(
            id=agent_id,
            name=kwargs.pop("name", f"Agent {agent_id}"),
            level=level,
            skills=frozenset(skills),
            open_tickets=tuple(
                OpenTicket(ticket_id=f"{agent_id}-t{i}", age_days=age) for i, age in enumerate(ages)
            ),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_ticket():
    def _make(ticket_id="t1", skills=(), level=SupportLevel.L1, **kwargs):
        return Ticket(
            id=ticket_id,
            subject=kwargs.pop("subject", f"Ticket {ticket_id}"),
            required_skills=frozenset(skills),
            required_level=level,
            **kwargs,
        )

    return _make
