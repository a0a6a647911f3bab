"""might: a small result type for fallible and asynchronous operations.

A Might is either Ok(value) or Err(error). MightAsync is a pending
computation of a Might that can be awaited or chained right away.
mightify and mightify_async lift ordinary raising functions into both.

Flat imports (preferred):
    from might import Might, Ok, Err, ok, err, MightAsync
    from might import mightify, mightify_async

Submodule imports (for organization):
    from might.result import Ok, Err, Might
    from might.async_ import MightAsync
    from might.decorators import mightify, mightify_async
"""

# Config
from might._config import MightConfig, get_config, init

# Logging
from might._logging import (
    MightEvent,
    add_event_listener,
    clear_event_listeners,
    configure_logging,
    get_logger,
)

# Async
from might.async_ import MightAsync

# Adapters
from might.decorators import mightify, mightify_async

# Errors
from might.errors import NotAMight, NotAMightError

# Types
from might.result import (
    ABSENT,
    Absent,
    Err,
    Might,
    Ok,
    err,
    is_might,
    ok,
)

__all__ = [
    'ABSENT',
    'Absent',
    'Err',
    'Might',
    'MightAsync',
    'MightConfig',
    'MightEvent',
    'NotAMight',
    'NotAMightError',
    'Ok',
    'add_event_listener',
    'clear_event_listeners',
    'configure_logging',
    'err',
    'get_config',
    'get_logger',
    'init',
    'is_might',
    'mightify',
    'mightify_async',
    'ok',
]
