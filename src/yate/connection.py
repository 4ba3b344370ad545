""" The :class:`Connection` is the protocol engine: it owns the link to the
    telephony engine, reconnects it when it drops, correlates dispatched
    messages with their answers, and routes incoming messages to the
    handlers and watchers the application registered.

    Everything the connection does happens on a single dispatcher loop,
    :func:`Connection.run`. The loop polls the transport's descriptor and
    an internal signalling socket, and fires any timers that are due; the
    public methods may be called from any thread, and are serialized with
    the loop by a re-entrant lock. Callbacks are always invoked with that
    lock held, so no two callbacks ever run at the same time, and a callback
    is free to call back into the connection.
"""

import collections
import itertools
import logging
import re
import sys
import threading

import zmq

from . import config
from . import errors
from . import parameters
from . import timer
from . import transport as transports
from .protocol import fields
from .protocol import wire
from .protocol.message import Message, decode
from .transport import TransportClosed, TransportError, TransportTimeout

_LOGGER = logging.getLogger(__name__)

zmq_context = zmq.Context()
_signal_ticker = itertools.count()

EVENTS = frozenset(('connect', 'connecting', 'disconnect', 'error', 'warning', 'raw'))

_priority = re.compile(r'[0-9]{0,5}')


class Subscription:
    """ One installed message handler. At most one exists per message name.
    """

    def __init__(self, name, priority, filter_key, filter_value, handler):

        self.name = name
        self.priority = priority
        self.filter_key = filter_key
        self.filter_value = filter_value
        self.handler = handler


    def install(self):
        return wire.install(self.priority, self.name, self.filter_key, self.filter_value)


# end of class Subscription



class Pending:
    """ A dispatched message waiting for its answer. The *callback* fires at
        most once: either the answer arrives, or the *timer* expires first.
    """

    def __init__(self, callback, timer):

        self.callback = callback
        self.timer = timer


# end of class Pending



class Connection:
    """ A single link to the engine. The keyword *options* select the
        transport: a *port* and optional *host*, or a UNIX socket *path*,
        make this a socket client that reconnects on its own; with neither,
        the connection runs over standard input and output, which is how the
        engine talks to an external module it launched itself. The remaining
        options are *reconnect*, *reconnect_timeout* (milliseconds),
        *decorate*, and *parameters*, a dictionary of local parameters to
        apply on every connect.

        Nothing happens until :func:`connect` is called, and nothing moves on
        the wire unless :func:`run` is running, either directly or via
        :func:`start`.

        :ivar state: One of 'disconnected', 'connecting', 'connected', or
            'reconnecting'.
        :ivar parameters: Local parameters re-applied on every connect.
        :ivar queue: Dispatched messages waiting for a connection.
        :ivar argument: In piped mode, the argument the engine passed to
            this script, if any.
    """

    dispatch_timeout = 10           # seconds
    activation_delay = 0.2          # seconds
    retry_delay = 100               # milliseconds

    def __init__(self, on_connect=None, transport=None, clock=None, **options):

        options = config.validate(options)

        self.host = options[config.CONF_HOST]
        self.port = options[config.CONF_PORT]
        self.path = options[config.CONF_PATH]
        self.reconnect = options[config.CONF_RECONNECT]
        self.reconnect_timeout = options[config.CONF_RECONNECT_TIMEOUT]
        self.decorate = options[config.CONF_DECORATE]
        self.parameters = options[config.CONF_PARAMETERS]

        if not self.parameters.get('trackparam'):
            self.parameters['trackparam'] = config.DEFAULT_TRACKPARAM

        if transport is None:
            transport = transports.create(self.host, self.port, self.path)

        self.transport = transport
        self.piped = transport.piped

        # An external module launched by the engine should be restarted
        # if it exits.

        if self.piped:
            self.parameters['restart'] = True

        self.argument = None
        self.state = fields.DISCONNECTED
        self.lock = threading.RLock()
        self.timers = timer.Timers(clock)

        self.queue = collections.deque()
        self.pending = dict()
        self.setlocals = dict()
        self.subscriptions = dict()
        self.watchers = dict()
        self.listeners = dict()

        self.closed = False
        self._running = False
        self._thread = None
        self._connect_timer = None
        self._watchdog = None
        self._signal_tx = None
        self._reinstating = False

        if on_connect is not None:
            self.register('connect', on_connect)


    def __repr__(self):
        return '<Connection %s %s>' % (repr(self.transport), self.state)


    @property
    def connected(self):
        return self.state == fields.CONNECTED


    # Event registration.

    def register(self, event, callback):
        """ Register a *callback* for one of the connection events:
            'connect', 'connecting', 'disconnect', 'error', 'warning', or
            'raw'. Error and warning callbacks receive the exception; raw
            callbacks receive every line sent ('> ') or received ('< ').
        """

        if event not in EVENTS:
            raise ValueError('unknown event: ' + repr(event))

        if callable(callback):
            pass
        else:
            raise TypeError('the registered callback must be callable')

        with self.lock:
            self.listeners.setdefault(event, list()).append(callback)


    def unregister(self, event, callback=None):
        """ Remove a *callback* registered for *event*, or every callback for
            that event if *callback* is not specified.
        """

        with self.lock:
            if callback is None:
                self.listeners.pop(event, None)
                return

            try:
                self.listeners[event].remove(callback)
            except (KeyError, ValueError):
                pass


    def _emit(self, event, *args):

        if event == 'raw':
            _LOGGER.debug('%s', args[0])

        listeners = self.listeners.get(event)

        if not listeners:
            if event == 'error':
                _LOGGER.error('%s', args[0])
            return

        for listener in list(listeners):
            self._invoke(listener, *args)


    def _invoke(self, callback, *args):
        """ Call an application-supplied callback. A failing callback must
            not take the dispatcher loop down with it.
        """

        try:
            callback(*args)
        except Exception:
            _LOGGER.exception('callback %s failed', repr(callback))


    # Connection life cycle.

    def connect(self, delay=0):
        """ Activate the connection. For a socket connection the attempt is
            made after *delay* milliseconds; for a piped connection the
            descriptors are put to use after a short fixed delay. Calling
            :func:`connect` on a connection that is already connected, or
            already waiting to reconnect, does nothing.
        """

        with self.lock:
            if self.state == fields.CONNECTED:
                return

            if self.piped:
                if self._connect_timer is not None and self._connect_timer.active:
                    return

                if len(sys.argv) > 1:
                    self.argument = sys.argv[1]

                self._connect_timer = self.timers.schedule(self.activation_delay, self._start)

            else:
                if self.state == fields.RECONNECTING:
                    return

                self.state = fields.RECONNECTING

                if self._connect_timer is not None:
                    self._connect_timer.cancel()

                # A watchdog left over from an attempt still in progress
                # must not cut the next attempt short.
                self._cancel_watchdog()

                delay = int(delay or 0) / 1000.0
                self._connect_timer = self.timers.schedule(delay, self._connect)

            self._wake()


    def _connect(self):
        """ Begin a socket connection attempt, guarded by a watchdog timer in
            case the engine never answers.
        """

        if self.state == fields.CONNECTED or self.state == fields.CONNECTING:
            return

        self._cancel_watchdog()
        self._connect_timer = None
        self.state = fields.CONNECTING
        self._emit('connecting')

        if self.state != fields.CONNECTING:
            # A listener changed its mind.
            return

        try:
            self.transport.open()
        except (TransportError, OSError) as error:
            self._on_error(error)
            return

        timeout = self.reconnect_timeout / 1000.0
        self._watchdog = self.timers.schedule(timeout, self._watchdog_expired)


    def _watchdog_expired(self):

        self._watchdog = None

        if self.state != fields.CONNECTING:
            return

        _LOGGER.info('no connection to %s after %d ms', repr(self.transport), self.reconnect_timeout)
        self._close_transport()
        self.state = fields.DISCONNECTED

        if self.reconnect:
            self.connect(self.retry_delay)
        else:
            error = TransportTimeout('no connection to %s after %d ms' % (repr(self.transport), self.reconnect_timeout))
            self._emit('error', error)


    def _start(self):
        """ Piped mode has nothing to connect; the descriptors are already
            there to be used.
        """

        self._connect_timer = None

        if self.state == fields.CONNECTED:
            return

        try:
            self.transport.open()
        except (TransportError, OSError) as error:
            self._on_error(error)
            return

        self._on_connected()


    def _cancel_watchdog(self):

        if self._watchdog is not None:
            self._watchdog.cancel()
            self._watchdog = None


    def _on_connected(self):
        """ The transport is up. Reinstate everything the engine needs to
            know about this application, in a fixed order: local parameters,
            then subscriptions, then watchers, and finally any messages
            dispatched while the connection was down.
        """

        if self.state == fields.CONNECTED:
            return

        self._cancel_watchdog()
        self.state = fields.CONNECTED
        _LOGGER.info('connected to the engine via %s', repr(self.transport))

        # Anything dispatched while reinstating, say from a listener, goes
        # to the back of the queue rather than ahead of it.

        self._reinstating = True

        try:
            self._reinstate()
        finally:
            self._reinstating = False

        if self.state == fields.CONNECTED:
            self._emit('connect')


    def _reinstate(self):

        for name, value in list(self.parameters.items()):
            self._send(wire.setlocal(name, value))

        for subscription in list(self.subscriptions.values()):
            self._send(subscription.install())

        for name in list(self.watchers):
            self._send(wire.watch(name))

        # A failed write drops the connection, and puts the message that
        # failed back at the head of the queue.

        while self.queue and self.state == fields.CONNECTED:
            message = self.queue.popleft()
            self._dispatch(message)


    def _on_end(self):
        """ The engine closed the connection.
        """

        self._cancel_watchdog()
        self._close_transport()
        self.state = fields.DISCONNECTED

        if self.piped:
            # The engine is gone, there is nobody left to talk to.
            _LOGGER.info('end of input from the engine')
            self._running = False
            return

        _LOGGER.info('disconnected from %s', repr(self.transport))
        self._emit('disconnect')

        if self.reconnect and self.state == fields.DISCONNECTED:
            self.connect(self.reconnect_timeout)


    def _on_error(self, error):
        """ The transport failed, either while connecting or afterwards.
        """

        self._cancel_watchdog()
        self._close_transport()
        self.state = fields.DISCONNECTED

        if self.reconnect and self.piped == False:
            _LOGGER.info('%s; retrying in %d ms', error, self.reconnect_timeout)
            self.connect(self.reconnect_timeout)
        else:
            self._emit('error', error)


    def _close_transport(self):

        self.transport.close()
        self._wake()


    def shutdown(self):
        """ Close the connection for good: no reconnection, no further
            events, and the dispatcher loop exits. This is the hook for the
            host process to call from its own signal handling.
        """

        with self.lock:
            self.closed = True
            self.reconnect = False
            self.listeners.clear()
            self.timers.clear()
            self._connect_timer = None
            self._watchdog = None
            self.transport.close()
            self.state = fields.DISCONNECTED
            self._running = False
            self._wake()


    # Outbound traffic.

    def _send(self, line):
        """ Write a single *line* to the engine. Returns True if the line
            was written; a failed write is handled as a transport error.
        """

        if self.state != fields.CONNECTED or self.transport.is_open == False:
            _LOGGER.debug('not connected, dropped: %s', line)
            return False

        try:
            self.transport.write(line)
        except (TransportError, OSError) as error:
            self._on_error(error)
            return False

        self._emit('raw', '> ' + line)
        return True


    def _dispatch(self, message):

        if message.kind != fields.OUTGOING:
            return True

        if self._send(message.encode(self.decorate)):
            message.kind = fields.ENQUEUED
            return True

        self.queue.appendleft(message)
        return False


    def _acknowledge(self, message):

        if message.kind != fields.INCOMING:
            return

        if self._send(message.encode(self.decorate)):
            message.kind = fields.ACKNOWLEDGED


    def dispatch(self, name, params=None, callback=None):
        """ Send a message named *name*, with the dictionary *params*, to the
            engine for processing. If the connection is down the message is
            queued, and sent in order as soon as the connection is up.

            If a *callback* is provided it is invoked exactly once, as
            callback(error, retval, params): error is None if the message
            was processed, :class:`errors.NotProcessed` if nobody handled
            it, or :class:`errors.DispatchTimeout` if no answer arrived in
            time. Returns the :class:`Message` instance.
        """

        _check_name(name)

        if params is not None and not isinstance(params, dict):
            raise TypeError('message parameters must be a dictionary')

        if callback is not None and not callable(callback):
            raise TypeError('the callback must be callable')

        message = Message(name, params)

        with self.lock:
            if callback is not None:
                expiry = self.timers.schedule(self.dispatch_timeout, self._dispatch_expired, message.id)
                self.pending[message.id] = Pending(callback, expiry)

            if self.state == fields.CONNECTED and self._reinstating == False:
                self._dispatch(message)
            else:
                self.queue.append(message)

            self._wake()

        return message


    def _dispatch_expired(self, id):

        try:
            pending = self.pending.pop(id)
        except KeyError:
            return

        error = errors.DispatchTimeout('no answer for message %s after %s seconds' % (id, self.dispatch_timeout))
        self._invoke(pending.callback, error, None, None)


    def setlocal(self, name, value, callback=None):
        """ Set the local parameter *name* to *value*; an empty *value*
            queries the current value instead. The parameter is re-applied
            on every reconnect. The optional *callback* is invoked as
            callback(error, value) when the engine confirms.

            Only one request per name is tracked: a second request for the
            same name, before the first is confirmed, replaces the first
            request's callback.
        """

        value = parameters.validate(name, value)

        if callback is not None and not callable(callback):
            raise TypeError('the callback must be callable')

        with self.lock:
            # A query must not clobber a value that was set earlier.

            if not parameters.is_query(value) or name not in self.parameters:
                self.parameters[name] = value

            if callback is None:
                self.setlocals.pop(name, None)
            else:
                if name in self.setlocals:
                    _LOGGER.debug('pending setlocal request for %s replaced', name)
                self.setlocals[name] = callback

            if self.state == fields.CONNECTED:
                self._send(wire.setlocal(name, value))


    def getlocal(self, name, callback=None):
        """ Query the local parameter *name*; see :func:`setlocal`.
        """

        self.setlocal(name, '', callback)


    def getconfig(self, section, key, callback=None):
        """ Query the engine's configuration value *key* from *section*.
        """

        self.getlocal('config.%s.%s' % (section, key), callback)


    def subscribe(self, name, priority=None, filter_key=None, filter_value=None, handler=None):
        """ Install a *handler* for messages named *name*. The handler is
            invoked as handler(params, retval) for every such message and
            may modify the params in place. Its return value becomes the
            message's return value, and the message is reported as
            processed; a handler may instead return a dictionary with
            'retval' and/or 'processed' keys to control both explicitly.

            The *priority* is an unsigned integer of up to five digits, lower
            values being called earlier by the engine. If *filter_key* and
            *filter_value* are both set the engine only delivers messages
            whose parameter matches. For convenience the handler may be
            given in the place of the priority or the filter key.
        """

        _check_name(name)

        if callable(priority):
            handler = priority
            priority = None
            filter_key = None
            filter_value = None
        elif callable(filter_key):
            handler = filter_key
            filter_key = None
            filter_value = None

        if callable(handler):
            pass
        else:
            raise TypeError('the handler must be callable')

        if priority is None:
            priority = ''

        priority = str(priority)

        if _priority.fullmatch(priority) is None:
            raise ValueError('priority %s is invalid' % (repr(priority)))

        with self.lock:
            if name in self.subscriptions:
                raise ValueError("subscription to '%s' already exists, unsubscribe first" % (name))

            subscription = Subscription(name, priority, filter_key, filter_value, handler)
            self.subscriptions[name] = subscription

            if self.state == fields.CONNECTED:
                self._send(subscription.install())


    def unsubscribe(self, name):

        with self.lock:
            self.subscriptions.pop(name, None)

            if self.state == fields.CONNECTED:
                self._send(wire.uninstall(name))


    def watch(self, name, listener):
        """ Watch messages named *name*: after the engine has finished
            processing such a message, *listener* is invoked as
            listener(params, retval). Watching never affects processing.
            The first watch enables the 'selfwatch' local parameter, so that
            messages dispatched by this application are seen too.
        """

        _check_name(name)

        if callable(listener):
            pass
        else:
            raise TypeError('the listener must be callable')

        with self.lock:
            if name in self.watchers:
                raise ValueError("watcher to '%s' already exists, unwatch first" % (name))

            if not self.parameters.get('selfwatch'):
                self.parameters['selfwatch'] = True
                if self.state == fields.CONNECTED:
                    self._send(wire.setlocal('selfwatch', True))

            self.watchers[name] = listener

            if self.state == fields.CONNECTED:
                self._send(wire.watch(name))


    def unwatch(self, name):

        with self.lock:
            self.watchers.pop(name, None)

            if self.state == fields.CONNECTED:
                self._send(wire.unwatch(name))


    def command(self, line, callback=None):
        """ Run an engine console command, the same as typing *line* at the
            engine's command prompt. The *callback* is invoked as
            callback(error, text) with the command's output.
        """

        wrapper = None

        if callback is not None:
            def wrapper(error, retval, params):
                callback(error, retval)

        return self.dispatch('engine.command', {'line': line}, wrapper)


    def status(self, module=None, callback=None):
        """ Request the engine's status report, for every module or just
            the named *module*. The *callback* is invoked as
            callback(error, text) with the report.
        """

        params = dict()
        if module:
            params['module'] = module

        wrapper = None

        if callback is not None:
            def wrapper(error, retval, params):
                callback(error, retval)

        return self.dispatch('engine.status', params, wrapper)


    def output(self, text):
        """ Write *text* to the engine's log, one log line per line of text.
            Nothing is written while disconnected.
        """

        with self.lock:
            for line in wire.output(text):
                self._send(line)

    log = output


    # Inbound traffic.

    def receive(self, line):
        """ Process a single *line* received from the engine.
        """

        with self.lock:
            self._emit('raw', '< ' + line)

            try:
                message = decode(line, self.decorate)
            except errors.ProtocolError as error:
                self._emit('error', error)
                return

            kind = message.kind

            if kind == fields.LOCAL:
                self._on_setlocal(message)
            elif kind == fields.NOTIFICATION:
                self._on_notification(message)
            elif kind == fields.ANSWER:
                self._on_answer(message)
            elif kind == fields.INSTALLED:
                self._on_install(message)
            elif kind == fields.WATCHED:
                self._on_watch(message)
            elif kind == fields.INCOMING:
                self._on_incoming(message)
            else:
                _LOGGER.debug('%s %s: success=%s', kind, message.name, message.success)


    def _on_setlocal(self, message):

        try:
            callback = self.setlocals.pop(message.name)
        except KeyError:
            return

        if message.success:
            self._invoke(callback, None, message.value)
        else:
            error = errors.LocalError('engine refused local parameter %s' % (message.name))
            self._invoke(callback, error, message.value)


    def _on_notification(self, message):

        listener = self.watchers.get(message.name)

        if listener is not None:
            self._invoke(listener, message.params, message.retval)


    def _on_answer(self, message):

        try:
            pending = self.pending.pop(message.id)
        except KeyError:
            # Fire-and-forget, or the answer arrived after the timeout.
            _LOGGER.debug('answer %s is not pending', message.id)
            return

        pending.timer.cancel()
        retval = message.retval.strip()

        if message.processed:
            self._invoke(pending.callback, None, retval, message.params)
        else:
            error = errors.NotProcessed('message %s was not processed' % (message.name), retval, message.params)
            self._invoke(pending.callback, error, retval, message.params)


    def _on_install(self, message):

        if message.name not in self.subscriptions:
            return

        if message.success:
            _LOGGER.debug('handler for %s installed, priority %s', message.name, message.priority)
            return

        del self.subscriptions[message.name]

        warning = errors.InstallRejected('engine refused handler for %s, priority %s' % (message.name, message.priority))
        _LOGGER.warning('%s', warning)
        self._emit('warning', warning)


    def _on_watch(self, message):

        if message.name not in self.watchers:
            return

        if message.success:
            return

        del self.watchers[message.name]

        warning = errors.WatchRejected('engine refused watcher for %s' % (message.name))
        _LOGGER.warning('%s', warning)
        self._emit('warning', warning)


    def _on_incoming(self, message):
        """ Run the subscribed handler for an incoming message, and always
            acknowledge it; the engine holds the message until we do.
        """

        try:
            subscription = self.subscriptions[message.name]
        except KeyError:
            # Most likely a message that was already on its way when the
            # subscription was removed. Let the engine carry on without us.
            _LOGGER.debug('no handler for %s, declined', message.name)
            message.processed = False
            self._acknowledge(message)
            return

        try:
            result = subscription.handler(message.params, message.retval)
        except Exception as exception:
            _LOGGER.exception('handler for %s failed', message.name)
            warning = errors.HandlerError('handler for %s raised %s' % (message.name, repr(exception)), message.name, exception)
            self._emit('warning', warning)
            message.processed = False
        else:
            processed = True
            retval = result

            if isinstance(result, dict):
                retval = result.get('retval')
                processed = bool(result.get('processed', True))

            message.processed = processed

            if retval is not None and retval != '':
                message.retval = retval

        self._acknowledge(message)


    # The dispatcher loop.

    def _poll_target(self):
        """ Return the (descriptor, flags) tuple the loop should be polling
            on behalf of the transport, or None.
        """

        transport = self.transport

        if transport.is_open == False:
            return None

        if transport.connecting:
            return (transport.fileno(), zmq.POLLOUT)

        return (transport.fileno(), zmq.POLLIN)


    def _transport_ready(self, flags):
        """ The transport's descriptor is ready: either a connection attempt
            completed, or there is something to read.
        """

        with self.lock:
            transport = self.transport

            if transport.is_open == False:
                return

            if transport.connecting:
                try:
                    transport.finish_connect()
                except (TransportError, OSError) as error:
                    self._on_error(error)
                else:
                    self._on_connected()
                return

            try:
                lines = transport.read()
            except TransportClosed:
                self._on_end()
                return
            except (TransportError, OSError) as error:
                self._on_error(error)
                return

            for line in lines:
                if transport.is_open == False:
                    break
                self.receive(line)


    def _wake(self):
        """ Interrupt the dispatcher loop's poll, so that it picks up any
            change to the timers or the transport. Always called with the
            lock held.
        """

        signal = self._signal_tx

        if signal is None:
            return

        try:
            signal.send(b'', flags=zmq.NOBLOCK)
        except zmq.Again:
            # The loop has plenty of wake-up calls queued already.
            pass


    def run(self):
        """ Run the dispatcher loop until :func:`shutdown` is called, or,
            for a piped connection, until the engine closes our input.
        """

        internal = 'inproc://yate.Connection:signal:%d' % (next(_signal_ticker))

        with self.lock:
            if self._running:
                raise RuntimeError('the dispatcher loop is already running')

            if self.closed:
                return

            signal_rx = zmq_context.socket(zmq.PAIR)
            signal_rx.setsockopt(zmq.LINGER, 0)
            signal_rx.bind(internal)

            signal_tx = zmq_context.socket(zmq.PAIR)
            signal_tx.setsockopt(zmq.LINGER, 0)
            signal_tx.connect(internal)

            self._signal_tx = signal_tx
            self._running = True

        poller = zmq.Poller()
        poller.register(signal_rx, zmq.POLLIN)
        registered = None

        try:
            while True:
                with self.lock:
                    if self._running == False:
                        break

                    target = self._poll_target()
                    timeout = self.timers.timeout()

                if target != registered:
                    if registered is not None:
                        poller.unregister(registered[0])
                    if target is not None:
                        poller.register(target[0], target[1])
                    registered = target

                try:
                    ready = poller.poll(timeout)
                except zmq.ZMQError as error:
                    # Most likely the transport was closed out from under
                    # the poller; the next pass will sort it out.
                    _LOGGER.debug('poll failed: %s', error)
                    if registered is not None:
                        poller.unregister(registered[0])
                        registered = None
                    continue

                for active, flags in ready:
                    if active == signal_rx:
                        _drain(signal_rx)
                    elif registered is not None and active == registered[0]:
                        self._transport_ready(flags)

                with self.lock:
                    self.timers.expire()

        finally:
            with self.lock:
                self._running = False
                self._signal_tx = None

            signal_tx.close()
            signal_rx.close()


    def start(self):
        """ Run the dispatcher loop in a background thread. Returns the
            thread.
        """

        thread = threading.Thread(target=self.run)
        thread.daemon = True
        self._thread = thread
        thread.start()
        return thread


    def join(self, timeout=None):
        """ Wait for a dispatcher loop started with :func:`start` to exit.
        """

        thread = self._thread
        if thread is not None:
            thread.join(timeout)


# end of class Connection



def _check_name(name):

    if isinstance(name, str) and name != '':
        pass
    else:
        raise ValueError('message name required')



def _drain(socket):
    """ Clear every pending wake-up signal.
    """

    while True:
        try:
            socket.recv(flags=zmq.NOBLOCK)
        except zmq.Again:
            break



def connect(on_connect=None, **options):
    """ Create a :class:`Connection` with the given *options*, activate it,
        and run its dispatcher loop in a background thread. The optional
        *on_connect* callback is invoked every time the connection is
        (re)established.
    """

    connection = Connection(on_connect, **options)
    connection.connect()
    connection.start()
    return connection


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
