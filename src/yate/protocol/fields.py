"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Verb tags, engine to application.

INCOMING_TAG = '%%>message'
ANSWER_TAG = '%%<message'
INSTALL_TAG = '%%<install'
UNINSTALL_TAG = '%%<uninstall'
WATCH_TAG = '%%<watch'
UNWATCH_TAG = '%%<unwatch'
SETLOCAL_TAG = '%%<setlocal'
PARSE_ERROR_TAG = 'Error in'

# Verb tags, application to engine.

DISPATCH = '%%>message'
ACKNOWLEDGE = '%%<message'
INSTALL = '%%>install'
UNINSTALL = '%%>uninstall'
WATCH = '%%>watch'
UNWATCH = '%%>unwatch'
SETLOCAL = '%%>setlocal'
OUTPUT = '%%>output'

# Message kinds.

OUTGOING = 'outgoing'
ENQUEUED = 'enqueued'
INCOMING = 'incoming'
ANSWER = 'answer'
NOTIFICATION = 'notification'
INSTALLED = 'install'
UNINSTALLED = 'uninstall'
WATCHED = 'watch'
UNWATCHED = 'unwatch'
LOCAL = 'setlocal'
ACKNOWLEDGED = 'acknowledged'

# Only these kinds carry trailing key=value parameters.

PARAMETRIC = frozenset((INCOMING, ANSWER, NOTIFICATION))

# Connection states.

DISCONNECTED = 'disconnected'
CONNECTING = 'connecting'
CONNECTED = 'connected'
RECONNECTING = 'reconnecting'

TRUE = 'true'
FALSE = 'false'
