""" Field escaping for the line-oriented external module protocol. Every
    field after the verb tag is escaped individually; the colon is the field
    separator, and newlines terminate a message, so neither may appear
    verbatim inside a field.
"""

from . import fields


def render(value):
    """ Return the protocol's string rendering of a Python value: None is
        the empty string, booleans are 'true' or 'false', binary values are
        lowercase hex byte pairs joined by single spaces.
    """

    if value is None:
        return ''

    if value is True:
        return fields.TRUE

    if value is False:
        return fields.FALSE

    if isinstance(value, (bytes, bytearray)):
        return hexlify(value)

    return str(value)



def hexlify(value):
    return ' '.join('%02x' % (byte) for byte in value)



def escape(value, extra=None):
    """ Escape the *value* for inclusion in a single protocol field. Control
        characters, the colon, and the optional *extra* character are
        replaced with a percent sign followed by the character shifted up
        by 64; a literal percent sign is doubled.
    """

    value = render(value)
    escaped = list()

    for character in value:
        code = ord(character)

        if code < 32 or character == ':' or character == extra:
            escaped.append('%')
            escaped.append(chr(code + 64))
        elif character == '%':
            escaped.append('%%')
        else:
            escaped.append(character)

    return ''.join(escaped)



def unescape(value):
    """ Reverse :func:`escape`. A trailing percent sign with nothing after it
        is kept as-is; any other malformed escape raises ValueError.
    """

    if '%' not in value:
        return value

    unescaped = list()
    index = 0
    length = len(value)

    while index < length:
        character = value[index]
        index += 1

        if character != '%':
            unescaped.append(character)
            continue

        if index == length:
            unescaped.append(character)
            break

        character = value[index]
        index += 1

        if character == '%':
            unescaped.append(character)
            continue

        code = ord(character)
        if code < 64 or code >= 128:
            raise ValueError('invalid escape sequence: %' + character)

        unescaped.append(chr(code - 64))

    return ''.join(unescaped)


def str2bool(value):
    return value == fields.TRUE


def bool2str(value):
    if value:
        return fields.TRUE
    else:
        return fields.FALSE


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
