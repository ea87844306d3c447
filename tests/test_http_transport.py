import httpx
import pytest

from wemo_agent.core.exceptions import TransportError
from wemo_agent.infrastructure.http.http_transport import HttpTransport


def test_send_passes_method_headers_and_body(transport_factory):
    transport, handler = transport_factory(lambda request: httpx.Response(200, content=b"<ok/>"))

    status, content = transport.send(
        "POST",
        "http://10.0.0.2:49153/upnp/control/basicevent1",
        {"SOAPACTION": '"urn:Belkin:service:basicevent:1#GetBinaryState"'},
        "<body/>",
    )

    assert status == 200
    assert content == b"<ok/>"
    request = handler.requests[0]
    assert request.method == "POST"
    assert request.headers["soapaction"] == '"urn:Belkin:service:basicevent:1#GetBinaryState"'
    assert request.content == b"<body/>"


def test_error_status_is_returned(transport_factory):
    transport, _ = transport_factory(lambda request: httpx.Response(503, content=b"busy"))
    assert transport.send("GET", "http://10.0.0.2:49153/setup.xml") == (503, b"busy")


def test_get(transport_factory):
    transport, handler = transport_factory(lambda request: httpx.Response(200, content=b"x"))
    assert transport.get("http://10.0.0.2:49153/setup.xml") == (200, b"x")
    assert handler.requests[0].method == "GET"


@pytest.mark.parametrize(
    "exc_type",
    [httpx.ConnectError, httpx.ReadTimeout, httpx.RemoteProtocolError],
)
def test_request_errors_become_transport_error(transport_factory, exc_type):
    def responder(request):
        raise exc_type("boom", request=request)

    transport, _ = transport_factory(responder)

    with pytest.raises(TransportError) as info:
        transport.send("GET", "http://10.0.0.2:49153/setup.xml")
    assert isinstance(info.value.__cause__, exc_type)


def test_client_created_lazily_with_timeout():
    transport = HttpTransport(timeout=3.5)
    client = transport._get_client()
    try:
        assert client.timeout.connect == 3.5
        assert transport._get_client() is client
    finally:
        transport.close()
    assert transport._client is None


def test_no_default_deadline():
    transport = HttpTransport()
    try:
        assert transport._get_client().timeout.read is None
    finally:
        transport.close()


def test_invalid_url_becomes_transport_error(transport_factory):
    transport, handler = transport_factory(lambda request: httpx.Response(200))

    with pytest.raises(TransportError) as info:
        transport.get("http://[fe80::1/setup.xml")

    assert isinstance(info.value.__cause__, httpx.InvalidURL)
    assert handler.requests == []


def test_error_status_is_logged(transport_factory, caplog):
    transport, _ = transport_factory(lambda request: httpx.Response(503))

    transport.get("http://10.0.0.2:49153/setup.xml")

    assert "GET http://10.0.0.2:49153/setup.xml answered 503" in caplog.text
