# encoding: utf-8
#
# Copyright (C) 2009 Alec Thomas <alec@swapoff.org>
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.
#
# Author: Alec Thomas <alec@swapoff.org>

"""Configuration for mock behaviour.

Configuration is a flat set of "key = value" lines. Blank lines and anything
following a # are ignored:

>>> config = Configuration()
>>> config.parse('''
... # Reset children along with their parent.
... reset.recursive = yes
... ''')
>>> config['reset.recursive']
'yes'

Typed access goes through :class:`Option` descriptors, which fall back to
their registered default for keys the configuration does not contain:

>>> settings = Settings(config)
>>> settings.recursive_reset
True
>>> settings.check_signatures
True

Unless given a configuration of their own, :class:`Settings` read the global
configuration. It is loaded from the file named by the SHAM_CONFIG environment
variable and can be replaced with :func:`set_global_config`, which notifies
receivers of :data:`on_config_change`.
"""

import os

from sham import Error
from sham.signal import Signal
from sham.util import to_boolean


__all__ = [
    'Error', 'InvalidLine', 'Configuration', 'Option', 'BoolOption',
    'Settings', 'settings', 'on_config_change', 'set_global_config',
    'get_global_config', 'load_config',
    ]


class Error(Error):
    """Base configuration exception."""


class InvalidLine(Error):
    """A configuration line was not of the form "key = value"."""

    def __str__(self):
        return '%s:%d: expected "key = value", got %r' % self.args


on_config_change = Signal()

_config = None


def set_global_config(config):
    """Set default global config and notify :data:`on_config_change`."""
    global _config
    _config = config
    on_config_change(config)


def get_global_config():
    return _config


def load_config(filename):
    """Load a configuration file and make it the global configuration."""
    config = Configuration(filename)
    set_global_config(config)
    return config


class Configuration(dict):
    """Abstraction layer for a basic key/value configuration file format."""

    def __init__(self, filename=None):
        super(Configuration, self).__init__()
        self.filename = filename
        if filename and os.path.exists(filename):
            self.load(filename)

    def load(self, filename):
        with open(filename) as fd:
            self.parse(fd.read(), filename)

    def parse(self, text, filename='<string>'):
        for lineno, line in enumerate(text.splitlines(), 1):
            line = line.split('#', 1)[0].strip()
            if not line:
                continue
            if '=' not in line:
                raise InvalidLine(filename, lineno, line)
            key, value = line.split('=', 1)
            self[key.strip()] = value.strip()

    # Public API
    def get(self, name, default=None):
        if name in self:
            value = super(Configuration, self).get(name, default)
        else:
            option = Option.registry.get(name)
            if option is not None:
                value = option.default
                if value is None:
                    value = default
            else:
                value = default
        return value

    def set(self, name, value):
        """Set a configuration option.

        Receivers of :data:`on_config_change` are notified if this is the
        global configuration.
        """
        self[name] = value
        if self is _config:
            on_config_change(self)


class Option(object):
    """"A convenience property for accessing configuration entries."""

    registry = {}

    def __init__(self, name, default=None, help=''):
        """Create a new Option.

        Args:
            name: Name of the option.
            default: Default value.
            help: Documentation string.
        """
        self.name = name
        if default is not None:
            self.default = self.cast(default)
        else:
            self.default = default
        self.__doc__ = help
        self.registry[name] = self

    def __get__(self, instance, owner):
        if instance is None:
            return self
        config = getattr(instance, '_config', _config)
        if config is not None:
            return self.accessor(config, self.name, self.default)
        else:
            return self.default

    def __set__(self, instance, value):
        config = getattr(instance, '_config', _config)
        if config is None:
            raise Error('no configuration to set %s in' % self.name)
        config.set(self.name, str(value))

    def accessor(self, config, name, default):
        return self.cast(config.get(name, default))

    def cast(self, value):
        return str(value)


class BoolOption(Option):
    def cast(self, value):
        return to_boolean(value)


class Settings(object):
    """Options governing mock behaviour."""

    log_level = Option(
        'log.level', 'warning',
        help='log level: debug, info, warning, error or critical')
    recursive_reset = BoolOption(
        'reset.recursive', False,
        help='reset children by default when a mock is reset')
    check_signatures = BoolOption(
        'mock.check_signatures', True,
        help='check calls against the signature of a mock\'s spec')

    def __init__(self, config=None):
        if config is not None:
            self._config = config


settings = Settings()

_config = Configuration(os.environ.get('SHAM_CONFIG'))


if __name__ == '__main__':
    import doctest
    doctest.testmod()
