import pytest
import yate

escape = yate.protocol.escape


def test_escape():

    assert escape.escape('plain text') == 'plain text'
    assert escape.escape('a:b') == 'a%zb'
    assert escape.escape('line\nbreak') == 'line%Jbreak'
    assert escape.escape('100%') == '100%%'
    assert escape.escape('\x00') == '%@'
    assert escape.escape('') == ''


def test_escape_extra():
    """ Parameter keys additionally escape the equals sign, values do not.
    """

    assert escape.escape('a=b') == 'a=b'
    assert escape.escape('a=b', '=') == 'a%}b'


def test_render():

    assert escape.escape(None) == ''
    assert escape.escape(True) == 'true'
    assert escape.escape(False) == 'false'
    assert escape.escape(42) == '42'
    assert escape.escape(b'\x01\xab\xff') == '01 ab ff'


def test_unescape():

    for original in ('plain', 'a:b', 'tab\there', '%', '%%:%', 'x=y\r\n', ''):
        assert escape.unescape(escape.escape(original)) == original

    assert escape.unescape('%J') == '\n'
    assert escape.unescape('%%') == '%'


def test_unescape_edges():

    # A lone trailing percent sign is kept.
    assert escape.unescape('50%') == '50%'

    with pytest.raises(ValueError):
        escape.unescape('%!')

    with pytest.raises(ValueError):
        escape.unescape('%é')


def test_booleans():

    assert escape.str2bool('true') == True
    assert escape.str2bool('false') == False
    assert escape.str2bool('') == False
    assert escape.str2bool('TRUE') == False
    assert escape.bool2str(1) == 'true'
    assert escape.bool2str(None) == 'false'

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
