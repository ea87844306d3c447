class WemoError(Exception):
    """Base class for every error raised by wemo_agent."""


class TransportError(WemoError):
    """The device could not be reached or the exchange failed mid-flight."""


class MalformedResponseError(WemoError):
    """A device document could not be parsed."""
