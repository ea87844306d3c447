"""SOAP request builders and response decoders for the Belkin UPnP dialect.

All markup knowledge lives here so the switch handle never touches XML.

Request envelopes are plain string templates: the devices are picky about
byte layout, so the exact text below is what gets sent. Responses are parsed
with ``xml.etree.ElementTree`` and looked up by local element name, ignoring
namespaces.

Reads of live switch state (binary state, insight) are permissive: a garbled
answer decodes to the default value plus a warning instead of raising.
The setup description is strict because discovery cannot build a switch
without it.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Union
from xml.etree import ElementTree

from wemo_agent.core.exceptions import MalformedResponseError
from wemo_agent.domain.device.enums import BELKIN_SERVICE_URN, BelkinService, BinaryState, SoapAction
from wemo_agent.domain.discovery.models import SetupDescription
from wemo_agent.domain.telemetry.insight import DecodeResult, TelemetrySnapshot
from wemo_agent.domain.telemetry.insight_parser import parse_insight_params

SOAP_ENVELOPE = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/" '
    's:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">'
    "<s:Body>{body}</s:Body></s:Envelope>"
)
ACTION_ELEMENT = '<u:{action} xmlns:u="{urn}">{params}</u:{action}>'
CONTROL_URL = "http://{host}/upnp/control/{service}1"
CONTENT_TYPE = 'text/xml; charset="utf-8"'


@dataclass(frozen=True)
class SoapRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""


def _service_name(service: Union[str, BelkinService]) -> str:
    return service.value if isinstance(service, BelkinService) else str(service)


def _action_name(action: Union[str, SoapAction]) -> str:
    return action.value if isinstance(action, SoapAction) else str(action)


def build_action_request(
    host: str,
    service_name: Union[str, BelkinService],
    action: Union[str, SoapAction],
    params: str = "",
) -> SoapRequest:
    service = _service_name(service_name)
    action = _action_name(action)
    if not host or not service or not action:
        raise ValueError("host, service_name and action must not be empty")

    urn = BELKIN_SERVICE_URN.format(service=service)
    body = SOAP_ENVELOPE.format(
        body=ACTION_ELEMENT.format(action=action, urn=urn, params=params)
    )

    return SoapRequest(
        method="POST",
        url=CONTROL_URL.format(host=host, service=service),
        headers={
            "SOAPACTION": f'"{urn}#{action}"',
            "Content-type": CONTENT_TYPE,
        },
        body=body,
    )


def build_set_binary_state_request(host: str, on: bool) -> SoapRequest:
    state = BinaryState.ON if on else BinaryState.OFF
    return build_action_request(
        host,
        BelkinService.BASIC_EVENT,
        SoapAction.SET_BINARY_STATE,
        params=f"<BinaryState>{state.value}</BinaryState>",
    )


def build_get_binary_state_request(host: str) -> SoapRequest:
    return build_action_request(host, BelkinService.BASIC_EVENT, SoapAction.GET_BINARY_STATE)


def build_get_insight_params_request(host: str) -> SoapRequest:
    return build_action_request(host, BelkinService.INSIGHT, SoapAction.GET_INSIGHT_PARAMS)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _parse_document(body: bytes, root_name: str) -> ElementTree.Element:
    try:
        root = ElementTree.fromstring(body)
    except ElementTree.ParseError as exc:
        raise MalformedResponseError(f"invalid XML: {exc}") from exc

    if _local_name(root.tag) != root_name:
        raise MalformedResponseError(
            f"expected <{root_name}> root element, got <{_local_name(root.tag)}>"
        )
    return root


def _find_text(root: ElementTree.Element, path: Iterable[str]) -> Optional[str]:
    node = root
    for name in path:
        node = next((child for child in node if _local_name(child.tag) == name), None)
        if node is None:
            return None
    return node.text or ""


def decode_binary_state_response(body: bytes) -> DecodeResult[int]:
    try:
        root = _parse_document(body, "Envelope")
    except MalformedResponseError as exc:
        return DecodeResult[int](value=0, warning=f"GetBinaryState: {exc}")

    text = _find_text(root, ("Body", "GetBinaryStateResponse", "BinaryState"))
    if text is None:
        return DecodeResult[int](value=0, warning="GetBinaryState: BinaryState element missing")

    text = text.strip()
    if not text:
        return DecodeResult[int](value=0)
    try:
        return DecodeResult[int](value=int(text))
    except ValueError:
        return DecodeResult[int](value=0, warning=f"GetBinaryState: non-integer BinaryState {text!r}")


def decode_insight_params_response(body: bytes) -> DecodeResult[str]:
    try:
        root = _parse_document(body, "Envelope")
    except MalformedResponseError as exc:
        return DecodeResult[str](value="", warning=f"GetInsightParams: {exc}")

    text = _find_text(root, ("Body", "GetInsightParamsResponse", "InsightParams"))
    if text is None:
        return DecodeResult[str](value="", warning="GetInsightParams: InsightParams element missing")
    return DecodeResult[str](value=text)


def decode_insight_telemetry(body: bytes) -> DecodeResult[TelemetrySnapshot]:
    raw = decode_insight_params_response(body)
    return DecodeResult[TelemetrySnapshot](
        value=parse_insight_params(raw.value),
        warning=raw.warning,
    )


def decode_setup_description(body: bytes) -> SetupDescription:
    root = _parse_document(body, "root")
    friendly_name = _find_text(root, ("device", "friendlyName")) or ""
    udn = (_find_text(root, ("device", "UDN")) or "").strip()
    return SetupDescription(friendly_name=friendly_name, udn=udn or None)
