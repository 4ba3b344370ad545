import yate

decoration = yate.protocol.decoration


def test_nested():

    nested = {'A': {'gt': {'nature': 'international', 'value': '2002'}}}
    flat = {'A.gt.nature': 'international', 'A.gt': '2002'}

    assert decoration.encode(nested) == flat
    assert decoration.decode(flat) == nested

    # Key order on the wire must not matter.
    reversed_flat = {'A.gt': '2002', 'A.gt.nature': 'international'}
    assert decoration.decode(reversed_flat) == nested


def test_top_level_value():
    """ The sentinel only means something below the top level.
    """

    assert decoration.encode({'value': 'x'}) == {'value': 'x'}
    assert decoration.decode({'value': 'x'}) == {'value': 'x'}


def test_booleans():

    assert decoration.encode({'a': True, 'b': False}) == {'a': 'true', 'b': 'false'}
    assert decoration.decode({'a': 'true', 'b': 'false', 'c': 'True'}) == {'a': True, 'b': False, 'c': 'True'}


def test_binary():

    for value in (b'\x00\x01\x02', b'\xde\xad\xbe\xef', bytes(range(32))):
        flat = decoration.encode({'data': value})
        assert flat['data'] == ' '.join('%02x' % (byte) for byte in value)
        assert decoration.decode(flat) == {'data': value}


def test_hex_heuristic():

    # Too short to be considered binary.
    assert decoration.decode({'a': 'ab'}) == {'a': 'ab'}
    assert decoration.decode({'a': 'abcd'}) == {'a': 'abcd'}

    # Hex-looking strings become binary even if the sender meant text.
    assert decoration.decode({'a': 'de ad'}) == {'a': b'\xde\xad'}
    assert decoration.decode({'a': 'DE AD'}) == {'a': b'\xde\xad'}

    # Not byte pairs separated by single spaces.
    assert decoration.decode({'a': 'de  ad'}) == {'a': 'de  ad'}
    assert decoration.decode({'a': 'dea dbe'}) == {'a': 'dea dbe'}
    assert decoration.decode({'a': 'zz yy'}) == {'a': 'zz yy'}

    # Only the whole value counts; a trailing newline keeps it text.
    assert decoration.decode({'a': 'de ad\n'}) == {'a': 'de ad\n'}
    assert decoration.decode({'a': 'de ad '}) == {'a': 'de ad '}


def test_leading_dot():

    assert decoration.decode({'.hidden': 'x', 'a.b': 'y'}) == {'.hidden': 'x', 'a': {'b': 'y'}}


def test_scalars():

    flat = decoration.encode({'n': 5, 'none': None, 'deep': {'er': {'est': 1.5}}})
    assert flat == {'n': '5', 'none': '', 'deep.er.est': '1.5'}

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
