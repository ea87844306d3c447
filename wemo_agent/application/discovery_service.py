import logging
from typing import List, Optional, Protocol

from wemo_agent.application.wemo_switch import WemoSwitch
from wemo_agent.core.exceptions import WemoError
from wemo_agent.domain.device.enums import BelkinService
from wemo_agent.domain.discovery.models import DiscoveredDevice, DiscoveryResult
from wemo_agent.infrastructure.http.http_transport import HttpTransport, http_transport
from wemo_agent.infrastructure.soap.envelope_codec import decode_setup_description
from wemo_agent.infrastructure.upnp.ssdp_client import ssdp_client

logger = logging.getLogger(__name__)


class DeviceFinder(Protocol):
    def discover_devices(self, service_type: str) -> List[DiscoveredDevice]:
        ...


class DiscoveryService:

    def __init__(
        self,
        finder: Optional[DeviceFinder] = None,
        transport: Optional[HttpTransport] = None,
        service_type: str = BelkinService.BASIC_EVENT.urn,
    ):
        self._finder = finder or ssdp_client
        self._transport = transport or http_transport
        self.service_type = service_type

    def _describe(self, device: DiscoveredDevice) -> WemoSwitch:
        _, content = self._transport.get(device.url_base)
        setup = decode_setup_description(content)
        return WemoSwitch(
            host=device.host,
            name=setup.friendly_name,
            device_id=setup.udn,
            transport=self._transport,
        )

    def discover(self) -> DiscoveryResult:
        try:
            found = self._finder.discover_devices(self.service_type)
        except WemoError as exc:
            logger.error(f"Discovery search failed: {exc}")
            return DiscoveryResult(devices=[], error=exc)

        if not found:
            logger.info("Discovery finished: no devices answered")
            return DiscoveryResult()

        switches: List[WemoSwitch] = []
        for device in found:
            try:
                switch = self._describe(device)
            except WemoError as exc:
                logger.error(
                    f"Discovery aborted at {device.url_base} after "
                    f"{len(switches)} of {len(found)} devices: {exc}"
                )
                return DiscoveryResult(devices=switches, error=exc)

            switches.append(switch)
            logger.info(f"Discovered {switch.name!r} at {switch.host}")

        logger.info(f"Discovery finished: {len(switches)} device(s)")
        return DiscoveryResult(devices=switches)


discovery_service = DiscoveryService()


def discover() -> DiscoveryResult:
    return discovery_service.discover()
