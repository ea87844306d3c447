# wemo_agent/application/wemo_switch.py
import logging
import time
from typing import Optional

from wemo_agent.domain.device.device_model import SwitchState
from wemo_agent.domain.telemetry.insight import DecodeResult, TelemetrySnapshot
from wemo_agent.infrastructure.http.http_transport import HttpTransport, http_transport
from wemo_agent.infrastructure.soap.envelope_codec import (
    SoapRequest,
    build_get_binary_state_request,
    build_get_insight_params_request,
    build_set_binary_state_request,
    decode_binary_state_response,
    decode_insight_telemetry,
)

logger = logging.getLogger(__name__)


class WemoSwitch:
    """Handle for one Wemo switch reachable at ``host``.

    Every public call performs at most one blocking request and no retries.
    Instances keep mutable cached state and are not safe to share between
    threads without external locking.
    """

    def __init__(
        self,
        host: str,
        name: str,
        device_id: Optional[str] = None,
        transport: Optional[HttpTransport] = None,
    ):
        if not host:
            raise ValueError("host must not be empty")
        self._host = host
        self._name = name
        self._device_id = device_id or host
        self._transport = transport or http_transport

        self._is_on = False
        self._insight = TelemetrySnapshot()
        self._last_updated = 0
        self._last_warning: Optional[str] = None

    def __repr__(self) -> str:
        return f"WemoSwitch(host={self._host!r}, name={self._name!r}, device_id={self._device_id!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def device_id(self) -> str:
        return self._device_id

    @property
    def host(self) -> str:
        return self._host

    @property
    def last_updated(self) -> int:
        return self._last_updated

    @property
    def is_on(self) -> bool:
        return self._is_on

    @property
    def insight(self) -> TelemetrySnapshot:
        return self._insight

    @property
    def current_w(self) -> float:
        return self._insight.current_w

    @property
    def last_warning(self) -> Optional[str]:
        return self._last_warning

    def _send(self, request: SoapRequest) -> bytes:
        _, content = self._transport.send(
            request.method, request.url, request.headers, request.body
        )
        return content

    def _record_warning(self, warning: Optional[str]) -> None:
        self._last_warning = warning
        if warning:
            logger.warning(f"WemoSwitch {self._name} ({self._host}): {warning}")

    def _set_binary_state(self, on: bool) -> None:
        self._send(build_set_binary_state_request(self._host, on))
        self._is_on = on
        logger.info(f"WemoSwitch {self._name} ({self._host}) turned {'ON' if on else 'OFF'}")

    def turn_on(self) -> None:
        self._set_binary_state(True)

    def turn_off(self) -> None:
        self._set_binary_state(False)

    def query_binary_state(self) -> int:
        """Read the live state code without touching the cached flag."""
        content = self._send(build_get_binary_state_request(self._host))
        result = decode_binary_state_response(content)
        self._record_warning(result.warning)
        return result.value

    def refresh_telemetry(self) -> DecodeResult[TelemetrySnapshot]:
        content = self._send(build_get_insight_params_request(self._host))
        result = decode_insight_telemetry(content)

        self._insight = result.value
        self._is_on = result.value.state
        self._last_updated = int(time.time())
        self._record_warning(result.warning)

        logger.debug(
            f"WemoSwitch {self._name}: insight state={result.value.state} "
            f"current_w={result.value.current_w}"
        )
        return result

    def to_switch_state(self) -> SwitchState:
        return SwitchState(
            id=self._device_id,
            name=self._name,
            state=self._is_on,
            last_change=int(time.time()),
            current_w=self.current_w,
        )
