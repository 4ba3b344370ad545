import pytest
import yate

validate = yate.parameters.validate


def test_known():

    assert validate('timeout', 10000) == 10000
    assert validate('bufsize', 8.5) == 8.5
    assert validate('selfwatch', True) == True
    assert validate('trackparam', 'python') == 'python'
    assert validate('id', 'my.module') == 'my.module'


def test_queries():
    """ Every name may be queried with an empty value.
    """

    for name in ('timeout', 'selfwatch', 'trackparam', 'engine.version', 'config.general.modload', 'config.general'):
        assert validate(name, '') == ''

    assert validate('engine.nodename', None) is None


def test_types():

    with pytest.raises(yate.errors.ParameterError):
        validate('timeout', True)

    with pytest.raises(yate.errors.ParameterError):
        validate('timeout', '100')

    with pytest.raises(yate.errors.ParameterError):
        validate('selfwatch', 'yes')

    with pytest.raises(yate.errors.ParameterError):
        validate('selfwatch', 1)

    with pytest.raises(yate.errors.ParameterError):
        validate('reason', 5)


def test_read_only():

    with pytest.raises(yate.errors.ParameterError):
        validate('engine.version', '6.4.0')

    with pytest.raises(yate.errors.ParameterError):
        validate('config.general.modload', 'false')


def test_unknown():

    with pytest.raises(yate.errors.ParameterError) as raised:
        validate('bogus', 1)
    assert 'unknown parameter' in str(raised.value)

    with pytest.raises(yate.errors.ParameterError) as raised:
        validate('engine.bogus', '')
    assert 'unknown parameter' in str(raised.value)

    with pytest.raises(yate.errors.ParameterError):
        validate('config.', '')

    with pytest.raises(yate.errors.ParameterError):
        validate('configuration.general.modload', '')

    with pytest.raises(yate.errors.ParameterError):
        validate('', '')

    # Parameter errors are also value errors.
    with pytest.raises(ValueError):
        validate('bogus', 1)


def test_validate_all():

    parameters = {'timeout': 100, 'selfwatch': False}
    assert yate.parameters.validate_all(parameters) == parameters

    with pytest.raises(yate.errors.ParameterError):
        yate.parameters.validate_all({'timeout': 100, 'bogus': 1})

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
