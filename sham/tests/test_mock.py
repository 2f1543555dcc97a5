# encoding: utf-8
#
# Copyright (C) 2009 Alec Thomas <alec@swapoff.org>
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.
#
# Author: Alec Thomas <alec@swapoff.org>

import copy

import pytest

from sham import mock as sham_mock
from sham.config import Configuration, set_global_config, settings
from sham.mock import (
    Mock, ANY, call, reset, children_of, UnknownAttribute,
    SideEffectExhausted, InvalidSideEffect, AssertionMismatch, NotCallable,
    )


def setup_function():
    set_global_config(Configuration())


def test_attribute_is_created_and_cached():
    m = Mock()
    assert m.a.b.c is m.a.b.c
    assert isinstance(m.a, Mock)
    assert set(children_of(m)) == set(['a'])


def test_child_names_are_dotted_paths():
    m = Mock(name='jira')
    assert repr(m.issues.search) == "<Mock name='jira.issues.search'>"
    assert repr(m.issues.search()) == "<Mock name='jira.issues.search()'>"


def test_default_name():
    assert repr(Mock().pants) == "<Mock name='mock.pants'>"


def test_set_attribute_is_returned_verbatim():
    m = Mock()
    child = m.pants
    m.pants = 'trousers'
    assert m.pants == 'trousers'
    assert 'pants' not in children_of(m)
    assert child is not m.pants


def test_set_attribute_survives_reset():
    m = Mock()
    m.colour = 'blue'
    m.reset_mock(recursive=True)
    assert m.colour == 'blue'


def test_deleted_attribute_raises():
    m = Mock()
    m.pants
    del m.pants
    with pytest.raises(AttributeError):
        m.pants
    assert not hasattr(m, 'pants')
    m.pants = 1
    assert m.pants == 1


def test_dunder_and_internal_names_are_not_created():
    m = Mock()
    assert not hasattr(m, '__iter__')
    assert not hasattr(m, '_mock_anything')
    with pytest.raises(TypeError):
        iter(m)


def test_misspelt_assertion_raises():
    m = Mock()
    with pytest.raises(AttributeError):
        m.assert_called_once_with_args(1)
    with pytest.raises(AttributeError):
        m.assret_called()


def test_dir_lists_children():
    m = Mock()
    m.pants
    m.socks = 2
    names = dir(m)
    assert 'pants' in names
    assert 'socks' in names
    assert 'assert_called_with' in names
    assert '_mock_children' not in names


def test_configure_with_dotted_keywords():
    m = Mock(**{'read.return_value': 'data', 'close.side_effect': IOError,
                'mode': 'r'})
    assert m.read() == 'data'
    assert m.mode == 'r'
    with pytest.raises(IOError):
        m.close()


def test_default_return_value_is_stable():
    m = Mock()
    assert m() is m()
    assert m() is m.return_value


def test_return_value_is_returned_until_reconfigured():
    m = Mock()
    m.return_value = 42
    assert [m() for _ in range(5)] == [42] * 5
    m.return_value = 'other'
    assert m() == 'other'


def test_return_value_in_constructor():
    m = Mock(return_value=None)
    assert m() is None


def test_calls_are_recorded_in_order():
    m = Mock()
    m(1)
    m(2, key='value')
    assert m.calls == [call(1), call(2, key='value')]
    assert m.calls[0].sequence < m.calls[1].sequence
    assert m.last_call.args == (2,)
    assert dict(m.last_call.kwargs) == {'key': 'value'}


def test_sequence_is_shared_between_mocks():
    a, b = Mock(), Mock()
    a()
    b()
    a()
    assert a.calls[0].sequence < b.calls[0].sequence < a.calls[1].sequence


def test_calls_property_is_a_copy():
    m = Mock()
    m()
    m.calls.append(call(99))
    assert m.call_count == 1


def test_call_record_is_immutable():
    record = call(1)
    with pytest.raises(AttributeError):
        record.args = (2,)


def test_sequence_side_effect():
    m = Mock(name='counter')
    m.side_effect = [1, 2, 3]
    assert [m(), m(), m()] == [1, 2, 3]
    with pytest.raises(SideEffectExhausted) as excinfo:
        m()
    assert str(excinfo.value) == \
        'counter exhausted its side effects on call 4'
    assert m.call_count == 4


def test_generator_side_effect():
    m = Mock(side_effect=(i * 2 for i in range(2)))
    assert m() == 0
    assert m() == 2
    with pytest.raises(SideEffectExhausted):
        m()


def test_error_side_effect_records_call():
    error = ValueError('boom')
    m = Mock(side_effect=error)
    with pytest.raises(ValueError) as excinfo:
        m(1)
    assert excinfo.value is error
    assert m.call_count == 1
    assert m.was_called_with(1)


def test_error_class_side_effect():
    m = Mock(side_effect=KeyError)
    with pytest.raises(KeyError):
        m()


def test_error_side_effect_wins_over_return_value():
    m = Mock(return_value=3, side_effect=RuntimeError)
    with pytest.raises(RuntimeError):
        m()


def test_callable_side_effect():
    m = Mock(side_effect=lambda a, b=1: a + b)
    assert m(1) == 2
    assert m(1, b=5) == 6
    assert m.calls == [call(1), call(1, b=5)]


def test_mock_side_effect_is_delegated_to():
    m = Mock()
    delegate = Mock(return_value='delegated')
    m.side_effect = delegate
    assert m('x') == 'delegated'
    delegate.assert_called_with('x')


def test_clearing_side_effect_restores_return_value():
    m = Mock(return_value=1, side_effect=[5])
    assert m() == 5
    m.side_effect = None
    assert m() == 1


def test_invalid_side_effect():
    m = Mock()
    with pytest.raises(InvalidSideEffect):
        m.side_effect = 42
    with pytest.raises(TypeError):
        m.side_effect = object()
    assert m.side_effect is None


def test_raising_a_mock_is_invalid():
    m = Mock()
    with pytest.raises(InvalidSideEffect) as excinfo:
        m.raises(m.exceptions.Timeout)
    assert 'cannot be raised' in str(excinfo.value)
    assert isinstance(excinfo.value, TypeError)


def test_raises():
    m = Mock()
    m.raises(ValueError('bad'))
    with pytest.raises(ValueError):
        m()


def test_not_callable():
    m = Mock(name='data', callable=False)
    with pytest.raises(NotCallable) as excinfo:
        m()
    assert str(excinfo.value) == 'data is not callable'
    assert isinstance(excinfo.value, TypeError)
    assert m.call_count == 1
    assert m.last_call == call()


def test_called_queries():
    m = Mock()
    assert not m.called
    assert not m.called_once
    assert m.call_count == 0
    assert m.last_call is None
    m()
    assert m.called
    assert m.called_once
    m()
    assert not m.called_once
    assert m.call_count == 2


def test_called_with_checks_only_last_call():
    f = Mock()
    f(1)
    f(2)
    f.assert_called_with(2)
    assert f.was_called_with(2)
    assert not f.was_called_with(1)
    with pytest.raises(AssertionMismatch):
        f.assert_called_with(1)
    assert f.has_call_matching(1)
    f.assert_has_call_matching(1)


def test_called_with_keyword_arguments():
    f = Mock()
    f(1, key='value')
    f.assert_called_with(1, key='value')
    assert not f.was_called_with(1)
    assert not f.was_called_with(1, key='other')


def test_any_matches_everything():
    f = Mock()
    f('key', {'large': 'value'}, timeout=3)
    f.assert_called_with('key', ANY, timeout=ANY)
    assert f.has_call_matching(ANY, ANY, timeout=3)
    assert not f.was_called_with(ANY)


def test_assertion_mismatch_describes_calls():
    f = Mock(name='f')
    f(2)
    with pytest.raises(AssertionMismatch) as excinfo:
        f.assert_called_with(1)
    error = excinfo.value
    assert isinstance(error, AssertionError)
    assert error.expected == call(1)
    assert error.actual == call(2)
    assert str(error) == ('f was last called with different arguments\n'
                          'Expected: call(1)\n'
                          'Actual: call(2)')


def test_assert_called_with_when_never_called():
    f = Mock(name='f')
    with pytest.raises(AssertionMismatch) as excinfo:
        f.assert_called_with()
    assert str(excinfo.value) == 'f was never called\nExpected: call()'
    assert not f.was_called_with()


def test_assert_has_call_matching_failure():
    f = Mock(name='f')
    f(1)
    with pytest.raises(AssertionMismatch) as excinfo:
        f.assert_has_call_matching(2)
    assert excinfo.value.actual == [call(1)]


def test_count_assertions():
    f = Mock(name='f')
    f.assert_not_called()
    with pytest.raises(AssertionMismatch):
        f.assert_called()
    with pytest.raises(AssertionMismatch):
        f.assert_called_once()
    f()
    f.assert_called()
    f.assert_called_once()
    f.assert_call_count(1)
    f()
    with pytest.raises(AssertionMismatch) as excinfo:
        f.assert_called_once()
    assert str(excinfo.value).startswith('f was called 2 times, not 1')
    with pytest.raises(AssertionMismatch):
        f.assert_not_called()


def test_reset_clears_calls_and_configuration():
    m = Mock(return_value=1, side_effect=[1, 2])
    old_return = Mock()
    m.return_value = old_return
    m()
    m.reset_mock()
    assert m.call_count == 0
    assert m.side_effect is None
    assert m.return_value is not old_return
    assert isinstance(m.return_value, Mock)


def test_reset_is_not_recursive_by_default():
    m = Mock()
    m.child(1)
    m.child.side_effect = ValueError
    reset(m)
    assert m.child.call_count == 1
    assert m.child.side_effect is ValueError


def test_recursive_reset():
    m = Mock()
    m.a.b.side_effect = ValueError
    with pytest.raises(ValueError):
        m.a.b()
    m.a(1)
    child = m.a.b
    reset(m, recursive=True)
    assert m.a.b is child
    assert m.a.call_count == 0
    assert m.a.b.call_count == 0
    assert m.a.b.side_effect is None
    assert m.a.b() is m.a.b.return_value


def test_recursive_reset_from_configuration():
    settings.recursive_reset = True
    m = Mock()
    m.child()
    m.reset_mock()
    assert m.child.call_count == 0


def test_reset_keeps_children():
    m = Mock()
    child = m.child
    m.reset_mock(recursive=True)
    assert m.child is child


def test_shallow_copy_shares_children_and_configuration():
    m = Mock()
    m.child.return_value = 3
    m.side_effect = [1, 2]
    m()
    duplicate = copy.copy(m)
    assert duplicate is not m
    assert duplicate.child is m.child
    assert duplicate.call_count == 1
    # The sequence side effect is shared as well.
    assert duplicate() == 2
    with pytest.raises(SideEffectExhausted):
        m()
    assert m.call_count == 2
    assert duplicate.call_count == 2


def test_shallow_copy_keeps_call_lists_separate():
    m = Mock()
    duplicate = copy.copy(m)
    duplicate()
    assert m.call_count == 0


def test_deep_copy_is_independent():
    m = Mock(name='m')
    m.child.return_value = [1]
    m.side_effect = [1, 2]
    m()
    duplicate = copy.deepcopy(m)
    assert duplicate.child is not m.child
    assert duplicate.child() == [1]
    assert duplicate.child() is not m.child()
    assert duplicate.call_count == 1
    assert duplicate() == 2
    assert m() == 2
    assert repr(duplicate) == "<Mock name='m'>"


def test_deep_copy_splits_generator_side_effect():
    m = Mock(name='m', side_effect=(i * 10 for i in range(3)))
    assert m() == 0
    duplicate = copy.deepcopy(m)
    assert duplicate() == 10
    assert duplicate() == 20
    assert m() == 10
    assert m() == 20
    with pytest.raises(SideEffectExhausted):
        duplicate()
    assert duplicate.call_count == 4
    assert m.call_count == 3


def test_deep_copy_keeps_sentinels():
    m = Mock()
    duplicate = copy.deepcopy(m)
    assert duplicate() is duplicate.return_value
    assert isinstance(duplicate(), Mock)


def test_mock_subclass_children_share_class():
    class Stand(Mock):
        pass

    m = Stand()
    assert type(m.child) is Stand
    assert type(m()) is Stand


def test_module_all_is_importable():
    for name in sham_mock.__all__:
        assert hasattr(sham_mock, name)
