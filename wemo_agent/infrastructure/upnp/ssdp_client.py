"""
SSDP search for UPnP root devices on the local network
"""

import logging
import socket
import time
from typing import Dict, List, Optional

from wemo_agent.core.config import settings
from wemo_agent.core.exceptions import TransportError
from wemo_agent.domain.discovery.models import DiscoveredDevice

logger = logging.getLogger(__name__)

SSDP_ADDR = ("239.255.255.250", 1900)


def build_msearch(service_type: str, mx: int) -> bytes:
    return (
        "M-SEARCH * HTTP/1.1\r\n"
        f"HOST: {SSDP_ADDR[0]}:{SSDP_ADDR[1]}\r\n"
        'MAN: "ssdp:discover"\r\n'
        f"MX: {mx}\r\n"
        f"ST: {service_type}\r\n"
        "\r\n"
    ).encode("utf-8")


def parse_search_response(data: bytes) -> Optional[Dict[str, str]]:
    """Parse an HTTP-over-UDP search response into upper-cased headers"""
    text = data.decode("utf-8", errors="replace")
    lines = text.split("\r\n") if "\r\n" in text else text.split("\n")
    if not lines or not lines[0].upper().startswith("HTTP/"):
        return None

    headers: Dict[str, str] = {}
    for line in lines[1:]:
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        headers[key.strip().upper()] = value.strip()
    return headers


class SsdpClient:
    """Sends one M-SEARCH and collects unique LOCATION answers"""

    def __init__(self, timeout: float = 2.0, mx: int = 2):
        self.timeout = timeout
        self.mx = mx

    def _open_socket(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, 2)
        sock.bind(("", 0))
        return sock

    def discover_devices(self, service_type: str) -> List[DiscoveredDevice]:
        devices: List[DiscoveredDevice] = []
        seen: set[str] = set()

        try:
            sock = self._open_socket()
        except OSError as exc:
            raise TransportError(f"cannot open SSDP socket: {exc}") from exc

        try:
            logger.info(f"Sending SSDP M-SEARCH for {service_type}")
            sock.sendto(build_msearch(service_type, self.mx), SSDP_ADDR)

            deadline = time.monotonic() + self.timeout
            while True:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                sock.settimeout(remaining)
                try:
                    data, addr = sock.recvfrom(65507)
                except socket.timeout:
                    break

                headers = parse_search_response(data)
                if not headers:
                    logger.debug(f"Ignoring non-SSDP datagram from {addr[0]}")
                    continue

                st = headers.get("ST")
                if st and st != service_type:
                    continue

                location = headers.get("LOCATION")
                if not location or location in seen:
                    continue

                seen.add(location)
                devices.append(DiscoveredDevice(url_base=location))
                logger.debug(f"SSDP answer from {addr[0]}: {location}")
        except OSError as exc:
            raise TransportError(f"SSDP search failed: {exc}") from exc
        finally:
            sock.close()

        return devices


ssdp_client = SsdpClient(timeout=settings.DISCOVERY_TIMEOUT, mx=settings.SSDP_MX)
