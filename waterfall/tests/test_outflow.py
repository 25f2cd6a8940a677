"""
Unit tests for the Outflow result store.
"""

import pytest

from waterfall import MISSING, Outflow


def test_get_missing_key_does_not_raise():
    outflow = Outflow()
    assert outflow.get('missing') is None
    assert outflow.get('missing', 'default') == 'default'
    assert outflow.get('missing', MISSING) is MISSING


def test_missing_tells_absent_from_stored_none():
    outflow = Outflow({'user': None})
    assert outflow.get('user', MISSING) is None
    assert outflow.get('other', MISSING) is MISSING
    assert not MISSING
    assert repr(MISSING) == "MISSING"


def test_set_overwrites_in_place_and_keeps_order():
    outflow = Outflow()
    outflow.set('a', 1).set('b', 2).set('a', 3)

    assert outflow.get('a') == 3
    assert list(outflow.keys()) == ['a', 'b']
    assert list(outflow) == ['a', 'b']
    assert len(outflow) == 2


def test_has_remove_clear():
    outflow = Outflow({'key': 'value'})
    assert outflow.has('key')
    assert 'key' in outflow

    outflow.remove('key').remove('never-there')
    assert not outflow.has('key')

    outflow.set('x', 1).clear()
    assert len(outflow) == 0


def test_item_access_follows_mapping_contract():
    outflow = Outflow()
    outflow['user'] = 42
    assert outflow['user'] == 42
    with pytest.raises(KeyError):
        outflow['nope']


def test_attribute_reads_are_speculative():
    outflow = Outflow({'user': 42})
    assert outflow.user == 42
    assert outflow.nobody is None

    outflow.role = 'admin'
    assert outflow.get('role') == 'admin'


def test_seed_data_is_copied():
    seed = {'a': 1}
    outflow = Outflow(seed)
    outflow.set('b', 2)
    assert seed == {'a': 1}


def test_to_dict_returns_a_copy():
    outflow = Outflow({'a': 1})
    data = outflow.to_dict()
    data['a'] = 99
    assert outflow.get('a') == 1


def test_snapshot_is_read_only_and_detached():
    outflow = Outflow({'a': 1})
    snapshot = outflow.snapshot()

    with pytest.raises(TypeError):
        snapshot['a'] = 2

    outflow.set('b', 2)
    assert 'b' not in snapshot
    assert snapshot['a'] == 1


def test_equality_with_mappings():
    outflow = Outflow({'user': 42})
    assert outflow == {'user': 42}
    assert outflow == Outflow({'user': 42})
    assert outflow != {'user': 43}
    assert outflow.update({'role': 'admin'}) == {'user': 42, 'role': 'admin'}
