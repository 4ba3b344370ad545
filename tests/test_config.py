import pytest
import yate

validate = yate.config.validate


def test_defaults():

    options = validate(dict())

    assert options['host'] == '127.0.0.1'
    assert options['port'] is None
    assert options['path'] is None
    assert options['reconnect'] == True
    assert options['reconnect_timeout'] == 500
    assert options['decorate'] == True
    assert options['parameters'] == dict()


def test_values():

    options = validate({'host': 'engine.example.com', 'port': '5039', 'reconnect': False,
                        'parameters': {'timeout': 1000}})

    assert options['host'] == 'engine.example.com'
    assert options['port'] == 5039
    assert options['reconnect'] == False
    assert options['parameters'] == {'timeout': 1000}


def test_invalid():

    for options in ({'port': 0}, {'port': 70000}, {'port': 'http'},
                    {'reconnect': 'yes'}, {'reconnect_timeout': -1},
                    {'decorate': 1}, {'bogus': True},
                    {'parameters': {'bogus': 1}}, {'parameters': {'timeout': 'soon'}},
                    {'parameters': 'timeout=5'}):

        with pytest.raises(yate.errors.ConfigurationError):
            validate(options)


def test_connection_options():

    with pytest.raises(yate.errors.ConfigurationError):
        yate.Connection(port=5039, reconnectTimeout=100)

    connection = yate.Connection(port=5039, parameters={'timeout': 100})

    assert connection.piped == False
    assert isinstance(connection.transport, yate.transport.SocketTransport)
    assert connection.parameters == {'timeout': 100, 'trackparam': 'python'}

    connection = yate.Connection(path='/tmp/yate.sock')
    assert isinstance(connection.transport, yate.transport.SocketTransport)

    connection = yate.Connection(parameters={'trackparam': 'mine'})

    assert connection.piped == True
    assert isinstance(connection.transport, yate.transport.PipeTransport)
    assert connection.parameters == {'trackparam': 'mine', 'restart': True}

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
