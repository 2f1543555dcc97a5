# encoding: utf-8
#
# Copyright (C) 2009 Alec Thomas <alec@swapoff.org>
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.
#
# Author: Alec Thomas <alec@swapoff.org>

"""Signal/event handling.

A Signal is an object for relaying events to a set of receivers. Sham uses
them to tell interested modules that the global configuration has changed.
"""


__all__ = ['Signal']


class Signal(object):
    """A Signal tracks a set of receivers and delivers messages to them.

    Create a new Signal:

    >>> on_change = Signal()

    Register a receiver by decorating a function with the :class:`Signal`:

    >>> @on_change.connect
    ... def reload_logging(key):
    ...   return 'logging saw %s' % key

    Any number of receivers can be bound to a :class:`Signal`:

    >>> @on_change.connect
    ... def reload_defaults(key):
    ...   return 'defaults saw %s' % key

    Call the signal to deliver an event. The return values for all receivers
    are collected and returned in a list:

    >>> on_change('log.level')
    ['logging saw log.level', 'defaults saw log.level']

    Receivers can be disconnected again:

    >>> on_change.disconnect(reload_defaults)
    >>> on_change('reset.recursive')
    ['logging saw reset.recursive']
    """

    def __init__(self):
        self._callbacks = []

    def connect(self, callback):
        self._callbacks.append(callback)
        return callback

    def __call__(self, *args, **kwargs):
        return [callback(*args, **kwargs) for callback in self._callbacks]

    def disconnect(self, callback):
        self._callbacks.remove(callback)

    def __iter__(self):
        return iter(self._callbacks)


if __name__ == '__main__':
    import doctest
    doctest.testmod()
