""" Logging setup for applications built on this package.

A script launched by the engine owns neither a terminal nor its standard
output: stdout carries the protocol itself, and anything else written there
corrupts it. Such a script should route its log through the engine instead,
which is what :class:`OutputHandler` does. Standalone socket clients log to
standard error like any other program.

Levels used by this package:

- DEBUG: raw protocol traffic, confirmations, late answers
- INFO: connects, disconnects, reconnection attempts
- WARNING: refused subscriptions and watchers, failed handlers
- ERROR: protocol and transport errors nobody is listening for
"""

import logging

FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
DATE_FORMAT = '%H:%M:%S'

# Records from this package's own loggers are never forwarded to the
# engine: writing one would log the write, and so on forever.

_internal = 'yate'


class OutputHandler(logging.Handler):
    """ Forward each formatted record to the engine's log via
        :func:`Connection.output`. Records are dropped while the connection
        is down.
    """

    def __init__(self, connection, level=logging.NOTSET):
        logging.Handler.__init__(self, level)
        self.connection = connection


    def emit(self, record):

        name = record.name
        if name == _internal or name.startswith(_internal + '.'):
            return

        try:
            self.connection.output(self.format(record))
        except Exception:
            self.handleError(record)


# end of class OutputHandler



def configure(connection=None, level=logging.INFO):
    """ Configure the root logger. If a piped *connection* is provided every
        record goes to the engine's log; otherwise records go to standard
        error. This package's own loggers always go to standard error,
        which the engine also captures for scripts it launched.

        Call this once, early, at application startup.
    """

    if isinstance(level, str):
        level = getattr(logging, level.upper())

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(FORMAT, datefmt=DATE_FORMAT))
    handlers = [console]

    if connection is not None and connection.piped:
        engine = OutputHandler(connection)
        engine.setFormatter(logging.Formatter('%(name)s: %(message)s'))
        handlers = [engine]

        # Keep the package's own records, but on stderr.
        internal = logging.getLogger(_internal)
        internal.handlers = [console]
        internal.propagate = False

    logging.basicConfig(level=level, handlers=handlers, force=True)
    return handlers


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
