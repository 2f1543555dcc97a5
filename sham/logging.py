# encoding: utf-8
#
# Copyright (C) 2009 Alec Thomas <alec@swapoff.org>
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.
#
# Author: Alec Thomas <alec@swapoff.org>

import logging

from sham.config import Settings, on_config_change, get_global_config
from sham.signal import Signal


__all__ = ['log', 'console', 'on_log_level_change', 'to_log_level']


on_log_level_change = Signal()


def to_log_level(value):
    """Convert a level name such as "debug" to a logging level."""
    level = getattr(logging, str(value).strip().upper(), logging.WARN)
    if not isinstance(level, int):
        level = logging.WARN
    return level


@on_log_level_change.connect
def _set_logger_level(level):
    """Set the log level of the default logger."""
    log.setLevel(level)


@on_config_change.connect
def _apply_config_log_level(config):
    """Update any loggers from the "log.level" option."""
    on_log_level_change(to_log_level(Settings(config).log_level))


formatter = logging.Formatter(
    '%(asctime)s %(name)-12s %(levelname)-8s %(message)s',
    '%Y-%m-%d %H:%M:%S',
    )
console = logging.StreamHandler()
console.setLevel(logging.DEBUG)
console.setFormatter(formatter)

log = logging.getLogger('sham')
log.setLevel(logging.WARN)
log.addHandler(console)

_apply_config_log_level(get_global_config())
