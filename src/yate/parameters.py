""" The local parameters an external module may set or query on its side of
    the engine connection. Each known parameter has a fixed value type; the
    empty string is accepted for every name and means 'report the current
    value'. The engine's own read-only parameters (engine.*) and any
    configuration value (config.*) may only be queried.
"""

import re

import voluptuous as vol

from . import errors


ENGINE = frozenset((
    'version',
    'release',
    'nodename',
    'runid',
    'configname',
    'sharedpath',
    'configpath',
    'cfgsuffix',
    'modulepath',
    'modsuffix',
    'logfile',
    'clientmode',
    'supervised',
    'maxworkers',
))


def _number(value):
    """ Accept integers and floats, but not booleans masquerading as
        integers.
    """

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise vol.Invalid('expected a number')
    return value


query = vol.Any('', None, msg='only queries (empty values) are permitted')
string = vol.Any(str)
boolean = vol.Any('', bool, msg='expected a boolean')
number = vol.Any('', _number, msg='expected a number')

PARAMETERS = {
    'id': string,
    'disconnected': boolean,
    'trackparam': string,
    'reason': string,
    'timeout': number,
    'timebomb': boolean,
    'bufsize': number,
    'setdata': boolean,
    'reenter': boolean,
    'selfwatch': boolean,
    'restart': boolean,
}

_config = re.compile(r'config\..+')


def schema(name):
    """ Return the voluptuous schema for the value of the local parameter
        *name*, or None if there is no such parameter.
    """

    try:
        return vol.Schema(PARAMETERS[name])
    except KeyError:
        pass

    if name.startswith('engine.') and name[7:] in ENGINE:
        return vol.Schema(query)

    if _config.fullmatch(name):
        return vol.Schema(query)

    return None



def validate(name, value):
    """ Check a single local parameter, returning the value if it is
        acceptable. Raises :class:`errors.ParameterError` otherwise.
    """

    if not isinstance(name, str) or name == '':
        raise errors.ParameterError('parameter name required')

    validator = schema(name)

    if validator is None:
        raise errors.ParameterError('local parameter %s: unknown parameter' % (repr(name)))

    try:
        return validator(value)
    except vol.Invalid as error:
        raise errors.ParameterError('local parameter %s: %s' % (repr(name), error.msg)) from error



def validate_all(parameters):
    """ Check every entry in the *parameters* dictionary, returning a new
        dictionary with the validated values.
    """

    validated = dict()

    for name, value in parameters.items():
        validated[name] = validate(name, value)

    return validated


def is_query(value):
    return value is None or value == ''


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
