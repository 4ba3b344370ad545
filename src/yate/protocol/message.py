""" A class representation of a Yate external module message, covering both
    directions: messages dispatched by this application, answers and
    notifications from the engine, and incoming messages that this
    application has subscribed to and must acknowledge.
"""

import threading
import time

from .. import errors
from . import decoration
from . import fields
from .escape import bool2str, escape, str2bool, unescape


class Message:
    """ The :class:`Message` is a thin encapsulation of a single protocol
        exchange. The fields largely follow their order on the wire: the
        *id* correlating a dispatch with its answer, the *origin* time in
        UNIX epoch seconds, the message *name*, the free-form *retval*, and
        the *params* dictionary of key/value pairs. The *kind* tracks where
        the message is in its life cycle; an outbound message starts as
        'outgoing' and becomes 'enqueued' once written to the engine, an
        incoming message becomes 'acknowledged' once answered.

        Control replies from the engine (install, watch, setlocal
        confirmations) reuse the same class, filling in *success*,
        *priority* and *value* as appropriate.

        :ivar processed: Whether a handler claims to have finalized the message.
        :ivar params: The parameters, flat or nested depending on decoration.
    """

    def __init__(self, name=None, params=None, kind=fields.OUTGOING, id=None, origin=None):

        if origin is None:
            origin = '%d' % (time.time())

        # Outbound messages need an identification number that is unique for
        # the lifetime of the connection, so that the answer can be tied
        # back to the original dispatch.

        if id is None and kind == fields.OUTGOING:
            id = _id_next(origin)

        if params is None:
            params = dict()

        self.id = id
        self.kind = kind
        self.name = name
        self.origin = origin
        self.retval = ''
        self.processed = False
        self.params = params

        self.success = None
        self.priority = None
        self.value = None


    def __repr__(self):
        return '<Message %s %s id=%s>' % (self.kind, repr(self.name), repr(self.id))


    def encode(self, decorate=True):
        """ Return the wire representation of this message. An outgoing
            message is rendered as a dispatch; an incoming message is
            rendered as the acknowledgment the engine is waiting for.
            The *params* are not modified.
        """

        if self.kind == fields.OUTGOING:
            # %%>message:<id>:<time>:<name>:<retvalue>[:<key>=<value>...]
            line = ':'.join((fields.DISPATCH, escape(self.id), escape(self.origin), escape(self.name), escape(self.retval)))
            return line + self._stringify(False, decorate)

        if self.kind == fields.INCOMING:
            # %%<message:<id>:<processed>:[<name>]:<retvalue>[:<key>=<value>...]
            line = ':'.join((fields.ACKNOWLEDGE, escape(self.id), bool2str(self.processed), '', escape(self.retval)))
            return line + self._stringify(True, decorate)

        raise ValueError('cannot encode a message of kind ' + repr(self.kind))


    def _stringify(self, include_empty, decorate):
        """ Render the parameters as the trailing key=value fields. Empty
            values are omitted, unless *include_empty* is set, in which case
            they are sent as a bare key; that is how an acknowledgment asks
            the engine to clear a parameter.
        """

        params = self.params

        if decorate:
            params = decoration.encode(params)

        result = list()

        for key, value in params.items():
            value = escape(value)
            key = escape(key, '=')

            if value:
                result.append(':' + key + '=' + value)
            elif include_empty:
                result.append(':' + key)

        return ''.join(result)


# end of class Message


# Parameter keys naming anything defined on the class are discarded upon
# decoding; they are structural, not application data.

reserved = frozenset(dir(Message))


def decode(line, decorate=True):
    """ Parse a single *line* received from the engine and return the
        corresponding :class:`Message`. Raises :class:`errors.ProtocolError`
        if the line is not understood.
    """

    parts = line.split(':')
    tag = parts[0]

    # Pad the field list so that a truncated line still has something
    # present for every positional field.

    parts.extend([''] * (5 - len(parts)))

    try:
        message = _decode(tag, parts, line)
    except ValueError as error:
        raise errors.ProtocolError(str(error), line) from error

    if message.kind in fields.PARAMETRIC:
        params = dict()

        for item in parts[5:]:
            key, separator, value = item.partition('=')
            if separator == '' or key == '':
                continue

            key = unescape(key)
            if key in reserved:
                continue

            try:
                params[key] = unescape(value)
            except ValueError as error:
                raise errors.ProtocolError(str(error), line) from error

        if decorate:
            params = decoration.decode(params)

        message.params = params

    return message


def _decode(tag, parts, line):

    if tag == fields.INCOMING_TAG:
        # %%>message:<id>:<time>:<name>:<retvalue>[:<key>=<value>...]
        message = Message(unescape(parts[3]), kind=fields.INCOMING, id=unescape(parts[1]), origin=unescape(parts[2]))
        message.retval = unescape(parts[4])

    elif tag == fields.ANSWER_TAG:
        # %%<message:<id>:<processed>:[<name>]:<retvalue>[:<key>=<value>...]
        id = unescape(parts[1])

        if id:
            kind = fields.ANSWER
        else:
            kind = fields.NOTIFICATION

        message = Message(unescape(parts[3]), kind=kind, id=id, origin='')
        message.processed = str2bool(parts[2])
        message.retval = unescape(parts[4])

    elif tag == fields.INSTALL_TAG:
        # %%<install:<priority>:<name>:<success>
        message = Message(unescape(parts[2]), kind=fields.INSTALLED, origin='')
        message.priority = parts[1]
        message.success = str2bool(parts[3])

    elif tag == fields.UNINSTALL_TAG:
        # %%<uninstall:<priority>:<name>:<success>
        message = Message(unescape(parts[2]), kind=fields.UNINSTALLED, origin='')
        message.priority = parts[1]
        message.success = str2bool(parts[3])

    elif tag == fields.WATCH_TAG:
        # %%<watch:<name>:<success>
        message = Message(unescape(parts[1]), kind=fields.WATCHED, origin='')
        message.success = str2bool(parts[2])

    elif tag == fields.UNWATCH_TAG:
        # %%<unwatch:<name>:<success>
        message = Message(unescape(parts[1]), kind=fields.UNWATCHED, origin='')
        message.success = str2bool(parts[2])

    elif tag == fields.SETLOCAL_TAG:
        # %%<setlocal:<name>:<value>:<success>
        message = Message(unescape(parts[1]), kind=fields.LOCAL, origin='')
        message.value = unescape(parts[2])
        message.success = str2bool(parts[3])

    elif tag == fields.PARSE_ERROR_TAG:
        raise errors.ProtocolError('engine could not parse: ' + line, line)

    else:
        raise errors.ProtocolError('unknown command from engine: [' + line + ']', line)

    return message



_id_lock = threading.Lock()
_id_last = 0


def _id_next(origin):
    """ Return a new identification number for an outbound message: the
        origin time in seconds, followed by nine digits of a high resolution
        counter. The counter portion is forced to increase on every call so
        that rapid successive messages never collide.
    """

    global _id_last

    _id_lock.acquire()

    ticks = time.perf_counter_ns() % 1000000000
    if ticks <= _id_last:
        ticks = _id_last + 1

    _id_last = ticks
    _id_lock.release()

    return '%s%09d' % (origin, ticks)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
