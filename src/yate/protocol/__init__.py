from . import fields
from . import escape
from . import decoration
from . import message
from . import wire

from .message import Message, decode


"""
Yate External Module Protocol Layer
===================================

This package defines the line-oriented text protocol spoken between the
telephony engine and an external module. It knows how to turn a Message
into a line and back, and nothing else: it MUST NOT depend on the
transport (socket or pipe) or on the connection state machine.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

Connection (yate.connection)
    Life cycle, correlation, subscriptions, queueing

    │
    ▼
Message Model (message.py)
    One protocol exchange in either direction
    - decode(line) -> Message
    - Message.encode() -> line

    │
    ▼
Control Lines (wire.py)
    install, uninstall, watch, unwatch, setlocal, output

    │
    ▼
Decoration (decoration.py)
    Flat dotted keys <-> nested dictionaries, booleans, binary

    │
    ▼
Field Escaping (escape.py)
    Per-field escaping of control characters, ':' and '%'

    │
    ▼
Vocabulary (fields.py)
    Verb tags, message kinds, connection states

---------------------------------------------------------------------

Wire Format
-----------

One message per line, fields separated by colons, the first field is the
verb tag. Application to engine:

    %%>message:<id>:<time>:<name>:<retval>[:<key>=<value>...]
    %%<message:<id>:<processed>:[<name>]:<retval>[:<key>=<value>...]
    %%>install:[<priority>]:<name>[:<filter-name>:<filter-value>]
    %%>uninstall:<name>
    %%>watch:<name>
    %%>unwatch:<name>
    %%>setlocal:<name>:<value>
    %%>output:arbitrary unescaped string

Engine to application:

    %%>message:<id>:<time>:<name>:<retval>[:<key>=<value>...]
    %%<message:<id>:<processed>:[<name>]:<retval>[:<key>=<value>...]
    %%<install:<priority>:<name>:<success>
    %%<uninstall:<priority>:<name>:<success>
    %%<watch:<name>:<success>
    %%<unwatch:<name>:<success>
    %%<setlocal:<name>:<value>:<success>

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
