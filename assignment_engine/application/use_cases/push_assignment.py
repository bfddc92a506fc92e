"""PushAssignmentUseCase — write a decided assignment back to the ticketing system."""

from __future__ import annotations

import logging

from assignment_engine.application.ports.ticketing_port import TicketingPort
from assignment_engine.domain.entities.decision import Decision
from assignment_engine.domain.exceptions import UpstreamRateLimitedError, UpstreamUnavailableError
from assignment_engine.domain.value_objects.enums import DecisionType

logger = logging.getLogger(__name__)

PUSHABLE = {DecisionType.AUTO_ASSIGNED, DecisionType.MANUAL_OVERRIDE}


class PushAssignmentUseCase:
    """Suggestions and terminal decisions stay local; only firm assignments go upstream."""

    def __init__(self, ticketing: TicketingPort, enabled: bool = True):
        self._ticketing = ticketing
        self._enabled = enabled

    async def execute(self, decision: Decision) -> bool:
        if not self._enabled or decision.decision_type not in PUSHABLE or not decision.chosen_agent_id:
            return False

        try:
            await self._ticketing.assign_ticket(decision.ticket_id, decision.chosen_agent_id)
        except (UpstreamRateLimitedError, UpstreamUnavailableError) as e:
            logger.warning(
                "Could not push assignment of ticket %s to %s: %s",
                decision.ticket_id, decision.chosen_agent_id, e,
            )
            return False
        return True
