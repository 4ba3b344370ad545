""" Translation between the flat parameter mapping carried on the wire and
    the nested dictionaries applications would rather work with. A flat key
    like 'caller.gt.nature' becomes caller -> gt -> nature; when a node has
    both a value of its own and children, the node's own value is kept in
    its 'value' field.

    The two directions are not inverses for arbitrary input. Decoding is
    heuristic: 'true' and 'false' become booleans, and anything that looks
    like space-separated hex byte pairs becomes bytes, even when the sender
    meant a plain string.
"""

import re

from . import escape

sentinel = 'value'

_hex_pairs = re.compile(r'[0-9a-fA-F]{2}( [0-9a-fA-F]{2})*')


def encode(params, root=None):
    """ Flatten the nested dictionary *params* into a single-level dictionary
        of dotted keys mapped to strings.
    """

    flat = dict()

    if root:
        prefix = root + '.'
    else:
        prefix = ''

    for key, value in params.items():
        key = str(key)

        if isinstance(value, dict):
            nested = encode(value, key)
            for subkey, subvalue in nested.items():
                flat[prefix + subkey] = subvalue
            continue

        value = escape.render(value)

        if root is not None and (key == sentinel or key == root):
            flat[root] = value
        else:
            flat[prefix + key] = value

    return flat



def coerce(value):
    """ Convert a single flat string value to its structured form.
    """

    if value == 'true':
        return True

    if value == 'false':
        return False

    if len(value) > 4 and _hex_pairs.fullmatch(value):
        return bytes.fromhex(value)

    return value



def decode(params):
    """ Expand the flat dictionary *params* into nested dictionaries, keyed
        on each dot-separated segment of the original keys.
    """

    nested = dict()

    for key, value in params.items():
        value = coerce(value)

        if key.startswith('.'):
            nested[key] = value
            continue

        segments = key.split('.')
        node = nested

        for segment in segments[:-1]:
            try:
                child = node[segment]
            except KeyError:
                child = dict()
                node[segment] = child
            else:
                if not isinstance(child, dict):
                    child = {sentinel: child}
                    node[segment] = child

            node = child

        last = segments[-1]
        existing = node.get(last)

        if isinstance(existing, dict):
            existing[sentinel] = value
        else:
            node[last] = value

    return nested


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
