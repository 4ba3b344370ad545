import os
import select
import socket
import threading

import pytest
import yate

LineBuffer = yate.transport.stream.LineBuffer


def test_line_buffer():

    buffer = LineBuffer()

    assert buffer.feed(b'%%<message:') == list()
    assert buffer.pending == b'%%<message:'

    assert buffer.feed(b'id:true::hi\r\n%%<watch:x:true\npartial') == ['%%<message:id:true::hi', '%%<watch:x:true']
    assert buffer.pending == b'partial'

    buffer.clear()
    assert buffer.feed(b'\n') == ['']


def test_line_buffer_encoding():
    """ A multi-byte character split across reads survives; invalid bytes
        do not raise.
    """

    buffer = LineBuffer()
    encoded = 'café\n'.encode('utf-8')

    assert buffer.feed(encoded[:4]) == list()
    assert buffer.feed(encoded[4:]) == ['café']

    assert buffer.feed(b'\xff\xfe\n') == ['��']


def test_frame():

    assert yate.transport.stream.frame('%%>output:hi') == b'%%>output:hi\n'


def test_create():

    assert isinstance(yate.transport.create(port=5039), yate.transport.SocketTransport)
    assert isinstance(yate.transport.create(path='/tmp/yate.sock'), yate.transport.SocketTransport)

    with pytest.raises(ValueError):
        yate.transport.SocketTransport()


def test_pipe():

    module_rx, engine_tx = os.pipe()
    engine_rx, module_tx = os.pipe()

    input = os.fdopen(module_rx, 'rb', buffering=0)
    output = os.fdopen(module_tx, 'wb')
    transport = yate.transport.PipeTransport(input, output)

    assert transport.piped == True
    assert transport.is_open == False
    transport.open()
    assert transport.is_open == True
    assert transport.connecting == False
    assert transport.fileno() == module_rx

    transport.write('%%>output:hello')
    assert os.read(engine_rx, 100) == b'%%>output:hello\n'

    os.write(engine_tx, b'one\ntwo')
    assert transport.read() == ['one']

    os.write(engine_tx, b'\n')
    assert transport.read() == ['two']

    os.close(engine_tx)
    with pytest.raises(yate.transport.TransportClosed):
        transport.read()

    transport.close()
    assert transport.is_open == False

    input.close()
    output.close()
    os.close(engine_rx)


def test_socket_refused():

    # Find a port nobody is listening on.
    listener = socket.socket()
    listener.bind(('127.0.0.1', 0))
    port = listener.getsockname()[1]
    listener.close()

    transport = yate.transport.SocketTransport('127.0.0.1', port)

    try:
        transport.open()
    except yate.transport.TransportConnectionError:
        return

    select.select([], [transport.fileno()], [], 5)

    with pytest.raises(yate.transport.TransportConnectionError):
        transport.finish_connect()

    assert transport.is_open == False


def engine(server, received, answer=b'pong'):
    """ A minimal engine: acknowledge every dispatched message, until the
        client goes away.
    """

    connection, address = server.accept()
    buffer = LineBuffer()

    with connection:
        while True:
            data = connection.recv(4096)
            if data == b'':
                break

            for line in buffer.feed(data):
                received.append(line)

                if line.startswith('%%>message:'):
                    id = line.split(':')[1]
                    connection.sendall(b'%%<message:' + id.encode() + b':true::' + answer + b'\n')


def test_loopback():
    """ The whole stack, against a real socket.
    """

    server = socket.socket()
    server.bind(('127.0.0.1', 0))
    server.listen(1)
    port = server.getsockname()[1]

    received = list()
    thread = threading.Thread(target=engine, args=(server, received))
    thread.daemon = True
    thread.start()

    connected = threading.Event()
    answered = threading.Event()
    results = list()

    def callback(error, retval, params):
        results.append((error, retval, params))
        answered.set()

    connection = yate.connect(connected.set, port=port, reconnect=False)

    try:
        assert connected.wait(5)
        connection.dispatch('test.ping', {'a': 1}, callback)
        assert answered.wait(5)
    finally:
        connection.shutdown()
        connection.join(5)

    assert results == [(None, 'pong', dict())]
    assert connection._thread.is_alive() == False

    thread.join(5)
    server.close()

    assert received[0] == '%%>setlocal:trackparam:python'
    assert received[1].endswith(':test.ping::a=1')


def test_pipe_loop():
    """ A piped connection runs until the engine closes its input.
    """

    module_rx, engine_tx = os.pipe()
    engine_rx, module_tx = os.pipe()

    input = os.fdopen(module_rx, 'rb', buffering=0)
    output = os.fdopen(module_tx, 'wb')
    transport = yate.transport.PipeTransport(input, output)

    connection = yate.Connection(transport=transport)
    handled = threading.Event()

    def handler(params, retval):
        handled.set()
        return 'done'

    connection.subscribe('test.message', 50, handler)
    connection.connect()
    thread = connection.start()

    os.write(engine_tx, b'%%>message:m1:100:test.message::a=1\n')
    assert handled.wait(5)

    os.close(engine_tx)
    thread.join(5)
    assert thread.is_alive() == False

    input.close()
    output.close()

    with os.fdopen(engine_rx, 'rb') as pipe:
        written = pipe.read().decode().split('\n')

    assert '%%>install:50:test.message' in written
    assert '%%<message:m1:true::done:a=1' in written

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
