import pytest

import fakes
import yate


@pytest.fixture
def clock():
    return fakes.Clock()


@pytest.fixture
def pipe(clock):
    """ A piped connection over a fake transport; nothing is connected yet.
    """

    transport = fakes.Transport(piped=True)
    connection = yate.Connection(transport=transport, clock=clock)

    yield connection

    connection.shutdown()


@pytest.fixture
def client(clock):
    """ A socket client connection over a fake transport, with a short
        reconnect timeout; nothing is connected yet.
    """

    transport = fakes.Transport(piped=False)
    connection = yate.Connection(transport=transport, clock=clock, port=5039, reconnect_timeout=100)

    yield connection

    connection.shutdown()

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
