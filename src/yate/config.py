""" Connection options. A connection is either a socket client, when a
    *port* or *path* is given, or a piped external module talking over
    standard input and output when neither is.
"""

import voluptuous as vol

from . import errors
from . import parameters


CONF_HOST = 'host'
CONF_PORT = 'port'
CONF_PATH = 'path'
CONF_RECONNECT = 'reconnect'
CONF_RECONNECT_TIMEOUT = 'reconnect_timeout'
CONF_DECORATE = 'decorate'
CONF_PARAMETERS = 'parameters'

DEFAULT_HOST = '127.0.0.1'
DEFAULT_RECONNECT_TIMEOUT = 500         # milliseconds
DEFAULT_TRACKPARAM = 'python'


def _parameters(value):
    try:
        return parameters.validate_all(value)
    except errors.ParameterError as error:
        raise vol.Invalid(str(error))


OPTIONS = vol.Schema(
    {
        vol.Optional(CONF_HOST, default=DEFAULT_HOST): str,
        vol.Optional(CONF_PORT, default=None): vol.Any(
            None, vol.All(vol.Coerce(int), vol.Range(min=1, max=65535))
        ),
        vol.Optional(CONF_PATH, default=None): vol.Any(None, str),
        vol.Optional(CONF_RECONNECT, default=True): bool,
        vol.Optional(CONF_RECONNECT_TIMEOUT, default=DEFAULT_RECONNECT_TIMEOUT): vol.All(
            vol.Coerce(int), vol.Range(min=0)
        ),
        vol.Optional(CONF_DECORATE, default=True): bool,
        vol.Optional(CONF_PARAMETERS, default=dict): vol.All(dict, _parameters),
    }
)


def validate(options):
    """ Apply defaults to the *options* dictionary and check every value.
        Raises :class:`errors.ConfigurationError` on any problem.
    """

    try:
        return OPTIONS(dict(options))
    except vol.Invalid as error:
        raise errors.ConfigurationError(str(error)) from error


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
