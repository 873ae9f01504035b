"""Client IP endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from ..models.schemas import IpReport
from ..utils.client_ip import client_ip_from_request, request_candidates, resolve_client_ip
from ..utils.ip_tools import normalize_ip

router = APIRouter(tags=["ip"])


async def client_ip(request: Request) -> PlainTextResponse:
    return PlainTextResponse(client_ip_from_request(request))


# a plain route with no method list answers every HTTP method
router.add_route("/", client_ip, include_in_schema=False)


@router.get("/json", response_model=IpReport)
async def client_ip_report(request: Request) -> IpReport:
    candidates = request_candidates(request)
    return IpReport(
        ip=resolve_client_ip(candidates.forwarded_for, candidates.real_ip, candidates.peer_addr),
        remote_addr=normalize_ip(candidates.peer_addr),
        x_forwarded_for=normalize_ip(candidates.forwarded_for),
        x_real_ip=normalize_ip(candidates.real_ip),
    )
