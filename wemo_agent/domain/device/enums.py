from enum import Enum

BELKIN_SERVICE_URN = "urn:Belkin:service:{service}:1"


class BelkinService(str, Enum):
    BASIC_EVENT = "basicevent"
    INSIGHT = "insight"

    @property
    def urn(self) -> str:
        return BELKIN_SERVICE_URN.format(service=self.value)


class SoapAction(str, Enum):
    GET_BINARY_STATE = "GetBinaryState"
    SET_BINARY_STATE = "SetBinaryState"
    GET_INSIGHT_PARAMS = "GetInsightParams"


class BinaryState(int, Enum):
    OFF = 0
    ON = 1
