"""Exceptions raised or delivered by the yate package.

Validation problems are raised synchronously to the caller. Everything else
(decode failures, remote outcomes, handler failures) is handed to a callback
or emitted as an event, and never terminates the connection.
"""


class YateError(Exception):
    """Base class for all yate errors."""


class ConfigurationError(YateError, ValueError):
    """A connection option is unknown or has the wrong type."""


class ParameterError(YateError, ValueError):
    """A local parameter is unknown, read-only, or has the wrong type."""


class ProtocolError(YateError):
    """An inbound line could not be decoded."""

    def __init__(self, text, line=None):
        YateError.__init__(self, text)
        self.line = line


class DispatchTimeout(YateError):
    """No answer arrived for a dispatched message in time."""


class NotProcessed(YateError):
    """The engine answered a dispatched message, but nobody processed it."""

    def __init__(self, text, retval=None, params=None):
        YateError.__init__(self, text)
        self.retval = retval
        self.params = params


class LocalError(YateError):
    """The engine refused to set or report a local parameter."""


class InstallRejected(YateError):
    """The engine refused a subscription."""


class WatchRejected(YateError):
    """The engine refused a watch request."""


class HandlerError(YateError):
    """A subscription handler raised while processing an incoming message."""

    def __init__(self, text, name=None, exception=None):
        YateError.__init__(self, text)
        self.name = name
        self.exception = exception
