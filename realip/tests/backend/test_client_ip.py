from starlette.requests import Request

from backend.utils.client_ip import (
    client_ip_from_request,
    format_peer_address,
    request_candidates,
    resolve_client_ip,
)

PEER = '10.10.10.10:10000'
PEER_IP = '10.10.10.10'
FORWARDED_FOR = '100.100.100.100'
REAL_IP = '200.200.200.200'


def _request(headers: dict[str, str] | None = None, client: tuple[str, int] | None = ('10.10.10.10', 10000)) -> Request:
    scope = {
        'type': 'http',
        'method': 'GET',
        'path': '/',
        'headers': [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        'client': client,
    }
    return Request(scope)


def test_peer_address_without_headers():
    assert resolve_client_ip('', '', PEER) == PEER_IP


def test_real_ip_beats_peer():
    assert resolve_client_ip('', REAL_IP, PEER) == REAL_IP


def test_forwarded_for_beats_real_ip():
    assert resolve_client_ip(FORWARDED_FOR, REAL_IP, PEER) == FORWARDED_FOR


def test_invalid_real_ip_is_skipped():
    assert resolve_client_ip('', 'wrong_x_real_ip', PEER) == PEER_IP


def test_invalid_forwarded_for_falls_through_to_real_ip():
    assert resolve_client_ip('wrong_x_forwarded_for', REAL_IP, PEER) == REAL_IP


def test_all_invalid_falls_back_to_peer():
    assert resolve_client_ip('wrong_x_forwarded_for', 'wrong_x_real_ip', PEER) == PEER_IP


def test_malformed_peer_without_headers_is_empty():
    assert resolve_client_ip('', '', 'not_an_address') == ''
    assert resolve_client_ip('', '', '') == ''


def test_header_values_are_returned_verbatim():
    assert resolve_client_ip('', '200.200.200.200:8080', PEER) == '200.200.200.200:8080'
    assert resolve_client_ip('2001:0db8::0001', '', PEER) == '2001:0db8::0001'


def test_forwarded_chain_is_gated_on_leading_hop():
    chain = '100.100.100.100, 10.0.0.1, 10.0.0.2'
    assert resolve_client_ip(chain, REAL_IP, PEER) == chain
    assert resolve_client_ip('unknown, 10.0.0.1', REAL_IP, PEER) == REAL_IP


def test_format_peer_address():
    assert format_peer_address('10.10.10.10', 10000) == PEER
    assert format_peer_address('::1', 8080) == '[::1]:8080'


def test_request_candidates_reads_headers_case_insensitively():
    request = _request({'x-forwarded-for': FORWARDED_FOR, 'X-REAL-IP': REAL_IP})
    candidates = request_candidates(request)
    assert candidates.forwarded_for == FORWARDED_FOR
    assert candidates.real_ip == REAL_IP
    assert candidates.peer_addr == PEER


def test_request_candidates_without_client():
    candidates = request_candidates(_request(client=None))
    assert candidates.forwarded_for == ''
    assert candidates.real_ip == ''
    assert candidates.peer_addr == ''
    assert client_ip_from_request(_request(client=None)) == ''


def test_client_ip_from_request_ipv6_peer():
    assert client_ip_from_request(_request(client=('2001:db8::1', 443))) == '2001:db8::1'
