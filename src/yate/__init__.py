""" Python client for the Yate external module protocol. An application
    either runs as a script launched by the engine, talking over standard
    input and output, or connects to the engine's extmodule listener over a
    socket; either way it dispatches messages, handles and watches the
    engine's messages, and manages its local parameters.
"""

# Utility components.

from . import errors
from . import timer

# Submodules used by multiple other components.

from . import protocol
from . import config
from . import parameters
from . import transport
from . import logs

# Primary public-facing interfaces.

from . import connection
connect = connection.connect

from .connection import Connection
from .protocol.message import Message

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
