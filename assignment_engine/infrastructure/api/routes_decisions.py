"""Decision endpoints — decide, override, history."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from assignment_engine.application.ports.decision_sink import DecisionSink
from assignment_engine.application.use_cases.decide_assignment import (
    DecideAssignmentUseCase,
    OverrideAssignmentUseCase,
)
from assignment_engine.application.use_cases.push_assignment import PushAssignmentUseCase
from assignment_engine.domain.exceptions import (
    AgentNotFoundError,
    DecisionNotFoundError,
    TicketNotFoundError,
    UpstreamRateLimitedError,
    UpstreamUnavailableError,
)
from assignment_engine.infrastructure.api.dependencies import (
    get_decide_uc,
    get_decision_sink,
    get_override_uc,
    get_push_uc,
)
from assignment_engine.infrastructure.api.schemas import OverrideRequest, TicketPayload

router = APIRouter(prefix="/decisions", tags=["decisions"])


@router.post("")
async def decide_ticket(
    body: TicketPayload,
    use_case: DecideAssignmentUseCase = Depends(get_decide_uc),
):
    """Decide for a ticket supplied in the request body (not pushed upstream)."""
    decision = await use_case.execute(body.to_domain())
    return decision.to_dict()


@router.post("/{ticket_id}")
async def decide_synced_ticket(
    ticket_id: str,
    use_case: DecideAssignmentUseCase = Depends(get_decide_uc),
    push: PushAssignmentUseCase = Depends(get_push_uc),
):
    """Decide for a ticket from the synced snapshot, falling back to upstream."""
    try:
        decision = await use_case.execute_by_id(ticket_id)
    except TicketNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (UpstreamRateLimitedError, UpstreamUnavailableError) as e:
        raise HTTPException(status_code=503, detail=str(e))

    pushed = await push.execute(decision)
    return {**decision.to_dict(), "pushed": pushed}


@router.post("/{ticket_id}/override")
async def override_decision(
    ticket_id: str,
    body: OverrideRequest,
    use_case: OverrideAssignmentUseCase = Depends(get_override_uc),
    push: PushAssignmentUseCase = Depends(get_push_uc),
):
    try:
        decision = await use_case.execute(ticket_id, body.agent_id, body.reason, body.operator)
    except (DecisionNotFoundError, AgentNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    pushed = await push.execute(decision)
    return {**decision.to_dict(), "pushed": pushed}


@router.get("/{ticket_id}")
async def decision_history(ticket_id: str, sink: DecisionSink = Depends(get_decision_sink)):
    """Latest decision plus the full history, newest first."""
    history = await sink.history(ticket_id)
    if not history:
        raise HTTPException(status_code=404, detail=f"No decision recorded for ticket {ticket_id}")

    return {
        "ticket_id": ticket_id,
        "latest": history[0].to_dict(),
        "history": [d.to_dict() for d in history],
    }
