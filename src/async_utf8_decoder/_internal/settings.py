from collections.abc import Callable
from os import environ
from typing import TypeVar

T = TypeVar("T")


def make_setting(
    name: str,
    default: T,
    from_string: Callable[[str], T] = lambda x: x,
) -> Callable[[], T]:
    """Create a setting read from the environment each time it is called."""
    return lambda: from_string(environ[name]) if environ.get(name) else default


ASYNC_UTF8_DECODER_CAPACITY = make_setting(
    "ASYNC_UTF8_DECODER_CAPACITY",
    8 * 1024,
    from_string=int,
)
"""Buffer capacity used when a decoder is created without an explicit one."""
