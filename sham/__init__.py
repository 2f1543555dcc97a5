# encoding: utf-8
#
# Copyright (C) 2008-2009 Alec Thomas <alec@swapoff.org
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.
#
# Author: Alec Thomas <alec@swapoff.org>

"""sham /ʃæm/ noun, adjective, verb, shammed, sham⋅ming. –noun 1. something
that is not what it purports to be; a spurious imitation. –adjective 2.
pretended; counterfeit.

Sham - A minimalist mock object library.
"""

__author__ = 'Alec Thomas <alec@swapoff.org>'

__all__ = [
    'Error', 'Mock', 'CallRecord', 'call', 'ANY', 'reset', 'UnknownAttribute',
    'SideEffectExhausted', 'InvalidSideEffect', 'AssertionMismatch',
    'NotCallable', 'SignatureMismatch', 'InvalidCopy',
    ]

# Try and determine the version of sham from the installed distribution.
try:
    from importlib.metadata import version, PackageNotFoundError
    try:
        __version__ = version('sham')
    except PackageNotFoundError:
        __version__ = None # unknown
except ImportError:
    __version__ = None # unknown


class Error(Exception):
    """Base Sham exception."""


from sham.mock import (
    Mock, CallRecord, call, ANY, reset, UnknownAttribute, SideEffectExhausted,
    InvalidSideEffect, AssertionMismatch, NotCallable, SignatureMismatch,
    InvalidCopy,
    )
