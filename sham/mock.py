# encoding: utf-8
#
# Copyright (C) 2009 Alec Thomas <alec@swapoff.org>
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.
#
# Author: Alec Thomas <alec@swapoff.org>

"""An intuitive mock object that records calls for later assertions.

Pass a Mock to the code under test in place of a real collaborator:

>>> db = Mock(name='db')
>>> cursor = db.connect('localhost').cursor()

Attributes are created on first access and cached, so the same path always
yields the same mock. Calling a mock returns its return_value, which is itself
a mock until configured otherwise:

>>> db.connect
<Mock name='db.connect'>
>>> cursor
<Mock name='db.connect().cursor()'>
>>> cursor is db.connect.return_value.cursor.return_value
True

Every call is recorded:

>>> db.connect.calls
[call('localhost')]
>>> db.connect.assert_called_with('localhost')

Assertions fail with a description of what went wrong. Note that
assert_called_with() only checks the most recent call:

>>> db.connect('example.com')
<Mock name='db.connect()'>
>>> db.connect.assert_called_with('localhost')
Traceback (most recent call last):
...
sham.mock.AssertionMismatch: db.connect was last called with different arguments
Expected: call('localhost')
Actual: call('example.com')

Use has_call_matching() to search the whole history:

>>> db.connect.has_call_matching('localhost')
True

Return values and side effects are configured with attributes:

>>> cursor.fetchone.return_value = ('alec', 33)
>>> cursor.fetchone()
('alec', 33)
>>> cursor.execute.side_effect = [1, 0]
>>> cursor.execute('DELETE FROM users')
1
>>> cursor.execute('DELETE FROM users')
0
>>> cursor.execute('DELETE FROM users')
Traceback (most recent call last):
...
sham.mock.SideEffectExhausted: db.connect().cursor().execute exhausted its side effects on call 3

Exceptions are raised, and the failed call is still recorded:

>>> db.close.side_effect = IOError('disk on fire')
>>> db.close()
Traceback (most recent call last):
...
OSError: disk on fire
>>> db.close.call_count
1

A mock constrained by a spec only exposes the attributes of the reference
object, checks calls against their signatures and passes isinstance() checks:

>>> class Pants(object):
...   def put_on(self, legs):
...     pass
>>> pants = Mock(spec=Pants, name='pants')
>>> isinstance(pants, Pants)
True
>>> pants.take_off()
Traceback (most recent call last):
...
sham.mock.UnknownAttribute: pants has no attribute 'take_off' in its spec
>>> pants.put_on(1, 2)
Traceback (most recent call last):
...
sham.mock.SignatureMismatch: pants.put_on(1, 2) does not match its spec: too many positional arguments

Mocks are not thread safe and are not meant to be. A mock belongs to a single
test; a mock shared between tests accumulates calls and configuration from all
of them, so reset it during teardown.
"""

import copy
import inspect
import itertools
from types import MappingProxyType

from sham import Error
from sham.config import settings
from sham.logging import log
from sham.spec import Shape
from sham.util import format_call, is_dunder


__all__ = [
    'Error', 'UnknownAttribute', 'SideEffectExhausted', 'InvalidSideEffect',
    'AssertionMismatch', 'NotCallable', 'SignatureMismatch', 'InvalidCopy',
    'DEFAULT', 'ANY', 'CallRecord', 'call', 'Mock', 'reset', 'children_of',
    'shape_of',
    ]


class Error(Error):
    """Base mock exception."""


class UnknownAttribute(Error, AttributeError):
    """An attribute outside of a mock's spec was read."""

    def __str__(self):
        return '%s has no attribute %r in its spec' % self.args[:2]


class SideEffectExhausted(Error):
    """A mock was called more times than its side effect had values."""

    def __str__(self):
        return '%s exhausted its side effects on call %d' % self.args[:2]


class InvalidSideEffect(Error, TypeError):
    """A side effect could not be used, or was not a genuine exception."""


class AssertionMismatch(Error, AssertionError):
    """An assertion about the calls made to a mock failed."""

    def __init__(self, message, expected=None, actual=None):
        super(AssertionMismatch, self).__init__(message)
        self.expected = expected
        self.actual = actual

    def __str__(self):
        lines = [self.args[0]]
        if self.expected is not None:
            lines.append('Expected: %r' % (self.expected,))
        if self.actual is not None:
            lines.append('Actual: %r' % (self.actual,))
        return '\n'.join(lines)


class NotCallable(Error, TypeError):
    """A mock marked as non-callable was called."""

    def __str__(self):
        return '%s is not callable' % self.args[0]


class SignatureMismatch(Error, TypeError):
    """A call did not match the signature of the mock's spec."""

    def __str__(self):
        return '%s does not match its spec: %s' % self.args[:2]


class InvalidCopy(Error, TypeError):
    """A mock could not be copied."""


class _Sentinel(object):
    """A unique, named marker that survives copying."""

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return self.name

    def __reduce__(self):
        return self.name


DEFAULT = _Sentinel('DEFAULT')


class _Any(_Sentinel):
    def __eq__(self, other):
        return True

    def __ne__(self, other):
        return False

    __hash__ = _Sentinel.__hash__


#: Compares equal to everything. Use it for arguments a test does not care
#: about, eg. ``m.assert_called_with('key', ANY)``.
ANY = _Any('ANY')


# Logical clock shared by all mocks, so calls to different mocks are ordered.
_sequence = itertools.count(1)


class CallRecord(object):
    """An immutable record of a single call.

    >>> record = CallRecord((1, 2), {'three': 3}, sequence=7)
    >>> record
    call(1, 2, three=3)
    >>> record == call(1, 2, three=3)
    True
    >>> record == call(1, ANY, three=ANY)
    True
    >>> record.sequence
    7
    """

    __slots__ = ['args', 'kwargs', 'sequence']

    def __init__(self, args=(), kwargs=None, sequence=None):
        object.__setattr__(self, 'args', tuple(args))
        object.__setattr__(self, 'kwargs', MappingProxyType(dict(kwargs or {})))
        object.__setattr__(self, 'sequence', sequence)

    def __setattr__(self, name, value):
        raise AttributeError('CallRecord is immutable')

    def __delattr__(self, name):
        raise AttributeError('CallRecord is immutable')

    def __eq__(self, other):
        if not isinstance(other, CallRecord):
            return NotImplemented
        return (self.args == other.args
                and dict(self.kwargs) == dict(other.kwargs))

    def __ne__(self, other):
        equal = self.__eq__(other)
        if equal is NotImplemented:
            return equal
        return not equal

    __hash__ = None

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __repr__(self):
        return format_call('call', self.args, self.kwargs)


def call(*args, **kwargs):
    """Build a CallRecord to compare recorded calls against."""
    return CallRecord(args, kwargs)


def _is_error(value):
    return (isinstance(value, BaseException)
            or (inspect.isclass(value) and issubclass(value, BaseException)))


def _effect_kind(value):
    """Classify a side effect as "raise", "call" or "yield"."""
    if value is None:
        return None
    if _is_error(value):
        return 'raise'
    if callable(value):
        return 'call'
    try:
        iter(value)
    except TypeError:
        raise InvalidSideEffect(
            'side effect must be an exception, a callable or an iterable, '
            'not %r' % (value,))
    return 'yield'


_error_classes = {}


def _error_class(cls, spec):
    """A subclass of both cls and the exception class spec.

    Mocks of exceptions must be genuine exceptions, or Python will refuse to
    raise them.
    """
    key = (cls, spec)
    try:
        return _error_classes[key]
    except KeyError:
        error_cls = type(spec.__name__ + cls.__name__, (cls, spec),
                         {'_mock_base_class': cls})
        _error_classes[key] = error_cls
        return error_cls


class Mock(object):
    """A stand-in object that records calls and returns configured results.

    :param spec: Reference object. If given, only its attributes may be read
                 from the mock, calls are checked against its signatures and
                 the mock reports the reference's class as its own.
    :param side_effect: Exception to raise, iterable of values to return in
                        turn, or callable to delegate to, when called.
    :param return_value: Value to return when called. Defaults to a child
                         mock.
    :param name: Dotted name of the mock, used in reprs and messages.
    :param callable: False to reject calls. Defaults to whether the spec is
                     callable, or True without one.
    :param kwargs: Attributes to configure. Dotted names configure children,
                   eg. ``Mock(**{'read.return_value': 'data'})``.
    """

    def __new__(cls, spec=None, *args, **kwargs):
        if (inspect.isclass(spec) and issubclass(spec, BaseException)
                and not issubclass(cls, BaseException)):
            cls = _error_class(cls, spec)
        return super(Mock, cls).__new__(cls)

    def __init__(self, spec=None, side_effect=None, return_value=DEFAULT,
                 name=None, callable=None, **kwargs):
        self._mock_name = name or 'mock'
        self._mock_children = {}
        self._mock_deleted = set()
        self._mock_calls = []
        self._mock_return_value = return_value
        self._mock_spec = spec
        self._mock_shape = None
        self._mock_signature = None
        if spec is not None:
            shape = Shape.from_object(spec)
            self._mock_shape = shape
            self._mock_signature = shape.signature
            if callable is None:
                callable = shape.callable
            for attribute in shape.attributes.values():
                self._mock_children[attribute.name] = self._mock_new_child(
                    '%s.%s' % (self._mock_name, attribute.name),
                    attribute.callable, attribute.signature)
        if callable is None:
            callable = True
        self._mock_callable = callable
        self.side_effect = side_effect
        self._mock_configure(kwargs)

    # Configuration
    def _get_return_value(self):
        value = self._mock_return_value
        if value is DEFAULT:
            value = self._mock_new_child(self._mock_name + '()')
            self._mock_return_value = value
        return value

    def _set_return_value(self, value):
        self._mock_return_value = value

    return_value = property(_get_return_value, _set_return_value)

    def _get_side_effect(self):
        return self._mock_side_effect

    def _set_side_effect(self, value):
        kind = _effect_kind(value)
        self._mock_side_effect = value
        self._mock_effect_kind = kind
        if kind == 'yield':
            self._mock_effects = iter(value)
        else:
            self._mock_effects = None

    side_effect = property(_get_side_effect, _set_side_effect)

    def raises(self, error):
        """Raise error whenever this mock is called.

        :param error: An exception instance or class. Mocks are only
                      accepted if they were created with an exception class
                      as their spec.
        :raises InvalidSideEffect: If error is not a genuine exception.
        """
        if not _is_error(error):
            raise InvalidSideEffect(
                '%r is not an exception and cannot be raised' % (error,))
        self.side_effect = error

    def reset_mock(self, recursive=None):
        """Forget calls, return value and side effect.

        Children and the spec are kept.

        :param recursive: Also reset every child, transitively. Defaults to
                          the "reset.recursive" option.
        """
        if recursive is None:
            recursive = settings.recursive_reset
        log.debug('resetting %s%s', self._mock_name,
                  ' and its children' if recursive else '')
        self._mock_calls = []
        self._mock_return_value = DEFAULT
        self.side_effect = None
        if recursive:
            for child in self._mock_children.values():
                child.reset_mock(recursive=True)

    # Call history
    @property
    def calls(self):
        """Recorded calls, oldest first."""
        return list(self._mock_calls)

    @property
    def call_count(self):
        return len(self._mock_calls)

    @property
    def called(self):
        return bool(self._mock_calls)

    @property
    def called_once(self):
        return len(self._mock_calls) == 1

    @property
    def last_call(self):
        """The most recent CallRecord, or None."""
        if self._mock_calls:
            return self._mock_calls[-1]
        return None

    def was_called_with(self, *args, **kwargs):
        """Was the most recent call made with these arguments?"""
        last = self.last_call
        return last is not None and last == call(*args, **kwargs)

    def has_call_matching(self, *args, **kwargs):
        """Was any call made with these arguments?"""
        expected = call(*args, **kwargs)
        return any(record == expected for record in self._mock_calls)

    # Assertions
    def assert_called(self):
        if not self._mock_calls:
            raise AssertionMismatch('%s was never called' % self._mock_name)

    def assert_called_once(self):
        self.assert_call_count(1)

    def assert_not_called(self):
        if self._mock_calls:
            raise AssertionMismatch(
                '%s was called %d times' % (self._mock_name,
                                            len(self._mock_calls)),
                actual=self.calls)

    def assert_call_count(self, count):
        if len(self._mock_calls) != count:
            raise AssertionMismatch(
                '%s was called %d times, not %d'
                % (self._mock_name, len(self._mock_calls), count),
                expected=count, actual=len(self._mock_calls))

    def assert_called_with(self, *args, **kwargs):
        """Assert that the most recent call was made with these arguments."""
        expected = call(*args, **kwargs)
        actual = self.last_call
        if actual is None:
            raise AssertionMismatch('%s was never called' % self._mock_name,
                                    expected=expected)
        if actual != expected:
            raise AssertionMismatch(
                '%s was last called with different arguments'
                % self._mock_name, expected=expected, actual=actual)

    def assert_has_call_matching(self, *args, **kwargs):
        """Assert that any call was made with these arguments."""
        expected = call(*args, **kwargs)
        if not any(record == expected for record in self._mock_calls):
            raise AssertionMismatch(
                '%s has no matching call' % self._mock_name,
                expected=expected, actual=self.calls)

    # Internal methods
    def _mock_new_child(self, name, callable=True, signature=None):
        cls = getattr(type(self), '_mock_base_class', type(self))
        child = cls(name=name, callable=callable)
        child._mock_signature = signature
        return child

    def _mock_configure(self, attributes):
        # Shallow paths first, so "a" is set before "a.b".
        for path in sorted(attributes, key=lambda path: path.count('.')):
            target = self
            names = path.split('.')
            for name in names[:-1]:
                target = getattr(target, name)
            setattr(target, names[-1], attributes[path])

    def _mock_resolve(self, args, kwargs):
        kind = self._mock_effect_kind
        if kind == 'raise':
            raise self._mock_side_effect
        if kind == 'yield':
            try:
                return next(self._mock_effects)
            except StopIteration:
                raise SideEffectExhausted(self._mock_name,
                                          len(self._mock_calls))
        if kind == 'call':
            return self._mock_side_effect(*args, **kwargs)
        return self.return_value

    def _get_class(self):
        shape = self.__dict__.get('_mock_shape')
        if shape is None:
            return type(self)
        return shape.spec_class

    __class__ = property(_get_class)

    # Python protocol
    def __call__(self, *args, **kwargs):
        record = CallRecord(args, kwargs, next(_sequence))
        self._mock_calls.append(record)
        log.debug('%s called: %r', self._mock_name, record)
        if not self._mock_callable:
            raise NotCallable(self._mock_name)
        signature = self._mock_signature
        if signature is not None and settings.check_signatures:
            try:
                signature.bind(*args, **kwargs)
            except TypeError as e:
                raise SignatureMismatch(
                    format_call(self._mock_name, args, kwargs), str(e))
        return self._mock_resolve(args, kwargs)

    def __getattr__(self, name):
        if name.startswith('_mock_') or is_dunder(name):
            raise AttributeError(name)
        children = self._mock_children
        if name in children:
            return children[name]
        if name in self._mock_deleted:
            raise AttributeError('%s.%s was deleted' % (self._mock_name, name))
        if self._mock_shape is not None:
            raise UnknownAttribute(self._mock_name, name)
        if name.startswith(('assert', 'assret')):
            raise AttributeError('%s has no assertion %r'
                                 % (self._mock_name, name))
        child = self._mock_new_child('%s.%s' % (self._mock_name, name))
        children[name] = child
        log.debug('created %s', child._mock_name)
        return child

    def __setattr__(self, name, value):
        if not (name.startswith('_mock_') or is_dunder(name)
                or hasattr(type(self), name)):
            self._mock_children.pop(name, None)
            self._mock_deleted.discard(name)
        object.__setattr__(self, name, value)

    def __delattr__(self, name):
        if (name.startswith('_mock_') or is_dunder(name)
                or hasattr(type(self), name)):
            object.__delattr__(self, name)
            return
        if name in self._mock_deleted:
            raise AttributeError(name)
        if name in self.__dict__:
            object.__delattr__(self, name)
        self._mock_children.pop(name, None)
        self._mock_deleted.add(name)

    def __dir__(self):
        names = set(dir(type(self)))
        names.update(name for name in self.__dict__
                     if not name.startswith('_mock_'))
        names.update(self._mock_children)
        names.difference_update(self._mock_deleted)
        return sorted(names)

    def __copy__(self):
        if self._mock_shape is not None:
            raise InvalidCopy('cannot shallow copy %s, which has a spec; '
                              'use copy.deepcopy() to rebuild it from the spec'
                              % self._mock_name)
        duplicate = type(self).__new__(type(self))
        duplicate.__dict__.update(self.__dict__)
        duplicate._mock_children = dict(self._mock_children)
        duplicate._mock_deleted = set(self._mock_deleted)
        duplicate._mock_calls = list(self._mock_calls)
        return duplicate

    def __deepcopy__(self, memo):
        if self._mock_shape is not None:
            log.warning('rebuilding %s from its spec; its calls and the '
                        'configuration of its children are not copied',
                        self._mock_name)
            duplicate = type(self)(spec=self._mock_spec, name=self._mock_name,
                                   callable=self._mock_callable)
            memo[id(self)] = duplicate
            return duplicate
        duplicate = type(self).__new__(type(self))
        memo[id(self)] = duplicate
        effects = self._mock_effects
        if effects is not None:
            # Iterators such as generators can not be copied; split them so
            # each mock draws the remaining values on its own.
            self._mock_effects, effects = itertools.tee(effects)
        shared = ['_mock_signature', '_mock_spec']
        if effects is not None:
            shared.append('_mock_side_effect')
        for key, value in self.__dict__.items():
            if key == '_mock_effects':
                value = effects
            elif key not in shared:
                value = copy.deepcopy(value, memo)
            object.__setattr__(duplicate, key, value)
        return duplicate

    def __repr__(self):
        cls = getattr(type(self), '_mock_base_class', type(self))
        shape = self._mock_shape
        if shape is None:
            return '<%s name=%r>' % (cls.__name__, self._mock_name)
        return '<%s name=%r spec=%r>' % (cls.__name__, self._mock_name,
                                         shape.spec_class.__name__)


def reset(mock, recursive=None):
    """Reset a mock, see :meth:`Mock.reset_mock`."""
    mock.reset_mock(recursive=recursive)


def children_of(mock):
    """Return a dict of the cached child mocks of mock, by attribute name."""
    return dict(mock._mock_children)


def shape_of(mock):
    """Return the :class:`sham.spec.Shape` of a mock, or None."""
    return mock._mock_shape


if __name__ == '__main__':
    import doctest
    doctest.testmod()
