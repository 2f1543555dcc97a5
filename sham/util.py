# encoding: utf-8
#
# Copyright (C) 2008-2009 Alec Thomas <alec@swapoff.org
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.
#
# Author: Alec Thomas <alec@swapoff.org>

"""Utility functions."""


__all__ = ['to_boolean', 'is_dunder', 'format_call']


def to_boolean(value):
    """Convert a "human" readable value to a bool.

    :param value: String to convert.
    :return: True or False.
    """
    if isinstance(value, str):
        value = value.strip().lower()
    return value in ('yes', 'true', 'on', 'aye', '1', 1, True)


def is_dunder(name):
    """Is name a "__special__" Python name?

    >>> is_dunder('__call__')
    True
    >>> is_dunder('_private')
    False
    >>> is_dunder('__')
    False
    """
    return len(name) > 4 and name.startswith('__') and name.endswith('__')


def format_call(name, args, kwargs):
    """Format a call as it would appear in source.

    >>> format_call('call', (1, 'two'), {'three': 3})
    "call(1, 'two', three=3)"
    >>> format_call('mock.read', (), {})
    'mock.read()'
    """
    parts = [repr(arg) for arg in args]
    parts.extend('%s=%r' % item for item in kwargs.items())
    return '%s(%s)' % (name, ', '.join(parts))


if __name__ == '__main__':
    import doctest
    doctest.testmod()
