"""Client IP resolution from forwarding headers and the transport peer."""
from __future__ import annotations

from dataclasses import dataclass

from starlette.requests import Request

from .ip_tools import normalize_ip

FORWARDED_FOR_HEADER = "X-Forwarded-For"
REAL_IP_HEADER = "X-Real-Ip"


@dataclass(frozen=True)
class RequestCandidates:
    forwarded_for: str
    real_ip: str
    peer_addr: str


def resolve_client_ip(forwarded_for: str, real_ip: str, peer_addr: str) -> str:
    """Pick the first usable client address.

    Header values are returned exactly as received; normalizing them is only
    used as a gate. For the forwarding chain only the leading hop is checked.
    The peer address is returned normalized, or ``""`` when it holds no IP.
    """
    if forwarded_for and normalize_ip(forwarded_for.split(",", 1)[0].strip()):
        return forwarded_for
    if real_ip and normalize_ip(real_ip):
        return real_ip
    return normalize_ip(peer_addr)


def format_peer_address(host: str, port: int) -> str:
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def request_candidates(request: Request) -> RequestCandidates:
    peer_addr = ""
    if request.client and request.client.host:
        peer_addr = format_peer_address(request.client.host, request.client.port)
    return RequestCandidates(
        forwarded_for=request.headers.get(FORWARDED_FOR_HEADER, ""),
        real_ip=request.headers.get(REAL_IP_HEADER, ""),
        peer_addr=peer_addr,
    )


def client_ip_from_request(request: Request) -> str:
    candidates = request_candidates(request)
    return resolve_client_ip(candidates.forwarded_for, candidates.real_ip, candidates.peer_addr)
