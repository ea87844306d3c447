from typing import Callable, List, Optional, Tuple

import httpx

from wemo_agent.domain.discovery.models import DiscoveredDevice
from wemo_agent.infrastructure.http.http_transport import HttpTransport

INSIGHT_PAYLOAD = "1|1609459200|120|3600|50400|1209600|5|7000|250000|7500000.0"

SOAP_RESPONSE = (
    '<?xml version="1.0"?>'
    '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/" '
    's:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">'
    "<s:Body>{body}</s:Body></s:Envelope>"
)


def binary_state_response(value: str) -> bytes:
    body = (
        '<u:GetBinaryStateResponse xmlns:u="urn:Belkin:service:basicevent:1">'
        f"<BinaryState>{value}</BinaryState>"
        "</u:GetBinaryStateResponse>"
    )
    return SOAP_RESPONSE.format(body=body).encode("utf-8")


def insight_response(params: str) -> bytes:
    body = (
        '<u:GetInsightParamsResponse xmlns:u="urn:Belkin:service:insight:1">'
        f"<InsightParams>{params}</InsightParams>"
        "</u:GetInsightParamsResponse>"
    )
    return SOAP_RESPONSE.format(body=body).encode("utf-8")


def setup_xml(name: str, udn: str = "uuid:Insight-1_0-221517K0101769") -> bytes:
    return (
        '<?xml version="1.0"?>'
        '<root xmlns="urn:Belkin:device-1-0">'
        "<specVersion><major>1</major><minor>0</minor></specVersion>"
        "<device>"
        "<deviceType>urn:Belkin:device:insight:1</deviceType>"
        f"<friendlyName>{name}</friendlyName>"
        "<manufacturer>Belkin International Inc.</manufacturer>"
        f"<UDN>{udn}</UDN>"
        "</device>"
        "</root>"
    ).encode("utf-8")


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays a script"""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


class FakeFinder:
    def __init__(self, devices: Optional[List[DiscoveredDevice]] = None, error: Optional[Exception] = None):
        self.devices = devices or []
        self.error = error
        self.searched: List[str] = []

    def discover_devices(self, service_type: str) -> List[DiscoveredDevice]:
        self.searched.append(service_type)
        if self.error:
            raise self.error
        return list(self.devices)


def make_transport(responder) -> Tuple[HttpTransport, RecordingHandler]:
    handler = RecordingHandler(responder)
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpTransport(client=client), handler
