"""Run work with a session flag temporarily forced to a value.

The restore step lives in a ``finally`` block, so the previous value comes
back whether the work returns, raises, or is cancelled. Scopes on the same
flag nest last-in-first-out: each one restores the value that was current
when it was entered.

Example
-------
.. code-block:: python

   store = CredentialStore()
   with flag_scope(store, SessionFlag.VALIDATE_ONLY, True):
       headers = await builder.populate({})
   assert store.validate_only is False
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

from .credentials import CredentialStore, SessionFlag

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@contextmanager
def temporary_value(
    getter: Callable[[], T], setter: Callable[[T], None], value: T
) -> Iterator[T]:
    """Hold a field at ``value`` for the duration of the block.

    :param getter: Reads the current field value
    :param setter: Writes the field value
    :param value: Temporary value for the block
    :return: Context manager yielding the saved previous value
    """
    previous = getter()
    setter(value)
    try:
        yield previous
    finally:
        setter(previous)


@contextmanager
def flag_scope(
    store: CredentialStore, flag: SessionFlag, value: bool = True
) -> Iterator[bool]:
    """Hold a credential store flag at ``value`` for the duration of the block.

    Usable around synchronous code and around ``await`` expressions alike.

    :param store: Credential store owning the flag
    :type store: CredentialStore
    :param flag: Flag to override
    :type flag: SessionFlag
    :param value: Temporary flag value
    :type value: bool
    :return: Context manager yielding the saved previous value
    """
    flag = SessionFlag(flag)
    logger.debug("Entering %s scope with value %s", flag.value, value)
    with temporary_value(
        lambda: store.get_flag(flag),
        lambda v: store.set_flag(flag, v),
        value,
    ) as previous:
        yield previous
    logger.debug("Restored %s to %s", flag.value, previous)


def run_with_flag(
    store: CredentialStore,
    flag: SessionFlag,
    value: bool,
    operation: Callable[..., R],
    *args: Any,
    **kwargs: Any,
) -> R:
    """Call ``operation`` synchronously with ``flag`` forced to ``value``.

    :param store: Credential store owning the flag
    :type store: CredentialStore
    :param flag: Flag to override
    :type flag: SessionFlag
    :param value: Temporary flag value
    :type value: bool
    :param operation: Callable to run inside the scope
    :return: Whatever ``operation`` returns
    :raises Exception: Whatever ``operation`` raises, after the flag is restored
    """
    with flag_scope(store, flag, value):
        return operation(*args, **kwargs)
