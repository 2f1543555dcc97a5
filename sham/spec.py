# encoding: utf-8
#
# Copyright (C) 2009 Alec Thomas <alec@swapoff.org>
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.
#
# Author: Alec Thomas <alec@swapoff.org>

"""Snapshots of the attribute "shape" of a reference object.

A :class:`Shape` records the public, one-level attributes of an object at the
time it was taken, along with whether each is callable and, where Python can
tell, its call signature:

>>> class Pants(object):
...   colour = 'blue'
...   def put_on(self, legs, quickly=False):
...     pass
>>> shape = Shape.from_object(Pants)
>>> sorted(shape)
['colour', 'put_on']
>>> shape['put_on'].callable
True
>>> str(shape['put_on'].signature)
'(legs, quickly=False)'
>>> shape['colour'].callable, shape['colour'].type
(False, <class 'str'>)

The shape of a class also describes calling the class itself:

>>> str(shape.signature)
'()'
>>> shape.spec_class is Pants
True

Dunder names are never part of a shape; Python resolves those on the type.
"""

import inspect

from sham.util import is_dunder


__all__ = ['Attribute', 'Shape']


_MISSING = object()


class Attribute(object):
    """A single attribute of a :class:`Shape`."""

    __slots__ = ['name', 'type', 'callable', 'signature']

    def __init__(self, name, type=None, callable=True, signature=None):
        self.name = name
        self.type = type
        self.callable = callable
        self.signature = signature

    def __repr__(self):
        return 'Attribute(%r, callable=%r)' % (self.name, self.callable)


def signature_of(obj):
    """Return the inspect.Signature of obj, or None if it has none."""
    try:
        return inspect.signature(obj)
    except (TypeError, ValueError):
        return None


def _drop_self(signature):
    params = list(signature.parameters.values())
    if params and params[0].kind in (inspect.Parameter.POSITIONAL_ONLY,
                                     inspect.Parameter.POSITIONAL_OR_KEYWORD):
        return signature.replace(parameters=params[1:])
    return signature


class Shape(object):
    """The attribute names, kinds and signatures of a reference object."""

    def __init__(self, spec_class=None, callable=True, signature=None,
                 attributes=None):
        self.spec_class = spec_class
        self.callable = callable
        self.signature = signature
        self.attributes = dict(attributes or {})

    @classmethod
    def from_object(cls, reference):
        """Take a snapshot of reference.

        :param reference: Any object; classes, instances, modules and
                          functions all work.
        """
        is_class = inspect.isclass(reference)
        attributes = {}
        for name in dir(reference):
            if is_dunder(name):
                continue
            try:
                value = getattr(reference, name)
            except Exception:
                # Descriptors may raise when accessed on the class.
                attributes[name] = Attribute(name, callable=False)
                continue
            signature = None
            if callable(value):
                signature = signature_of(value)
                static = inspect.getattr_static(reference, name, _MISSING)
                if (signature is not None and is_class
                        and inspect.isfunction(static)):
                    signature = _drop_self(signature)
            attributes[name] = Attribute(name, type(value), callable(value),
                                         signature)
        if is_class:
            spec_class = reference
        else:
            spec_class = type(reference)
        return cls(spec_class, callable(reference), signature_of(reference),
                   attributes)

    def is_error(self):
        """Does this shape describe an exception class?"""
        return (inspect.isclass(self.spec_class)
                and issubclass(self.spec_class, BaseException))

    def get(self, name, default=None):
        return self.attributes.get(name, default)

    def __getitem__(self, name):
        return self.attributes[name]

    def __contains__(self, name):
        return name in self.attributes

    def __iter__(self):
        return iter(self.attributes)

    def __len__(self):
        return len(self.attributes)

    def __repr__(self):
        return '<Shape %s: %s>' % (self.spec_class.__name__,
                                   ', '.join(sorted(self.attributes)))


if __name__ == '__main__':
    import doctest
    doctest.testmod()
