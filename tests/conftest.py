from typing import List

import pytest

from wemo_agent.infrastructure.http.http_transport import HttpTransport

from fakes import make_transport


@pytest.fixture
def transport_factory():
    created: List[HttpTransport] = []

    def factory(responder):
        transport, handler = make_transport(responder)
        created.append(transport)
        return transport, handler

    yield factory

    for transport in created:
        transport.close()
