"""
Discovery data structures and models
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional
from urllib.parse import urlsplit

from wemo_agent.core.exceptions import WemoError

if TYPE_CHECKING:
    from wemo_agent.application.wemo_switch import WemoSwitch


@dataclass(frozen=True)
class DiscoveredDevice:
    """A root device reported by SSDP, identified by its setup document URL"""
    url_base: str

    @property
    def host(self) -> str:
        return urlsplit(self.url_base).netloc


@dataclass(frozen=True)
class SetupDescription:
    """Fields read from a device's setup.xml"""
    friendly_name: str
    udn: Optional[str] = None


@dataclass
class DiscoveryResult:
    """Switches built by a discovery run.

    When ``error`` is set the run stopped early and ``devices`` holds only the
    switches described before the failure.
    """
    devices: List["WemoSwitch"] = field(default_factory=list)
    error: Optional[WemoError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
