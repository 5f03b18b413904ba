# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for key parsing, the dot-path navigator and flattening."""

import pytest

from genro_filestore import InvalidKeyError
from genro_filestore.store import MISSING, flatten, iter_flat, parse_key, read_path, write_path


class TestParseKey:
    """Tests for parse_key."""

    def test_single_segment(self):
        """Test a key without dots is a one-segment path."""
        assert parse_key('name') == ['name']

    def test_dotted_key(self):
        """Test dotted keys split on every dot."""
        assert parse_key('a.b.c') == ['a', 'b', 'c']

    def test_numeric_segment_kept_as_string(self):
        """Test numeric-looking segments stay strings."""
        assert parse_key('inv.0') == ['inv', '0']

    def test_empty_segments_kept(self):
        """Test consecutive dots produce empty segments verbatim."""
        assert parse_key('a..b') == ['a', '', 'b']

    def test_empty_key_raises(self):
        """Test empty key raises InvalidKeyError."""
        with pytest.raises(InvalidKeyError, match="No key provided"):
            parse_key('')

    @pytest.mark.parametrize('key', [None, 42, ['a'], b'a'])
    def test_non_string_key_raises(self, key):
        """Test non-string keys raise InvalidKeyError."""
        with pytest.raises(InvalidKeyError, match="must be a string"):
            parse_key(key)

    def test_operation_in_message(self):
        """Test the calling operation is reported in the error."""
        with pytest.raises(InvalidKeyError) as excinfo:
            parse_key('', 'push')
        assert excinfo.value.operation == 'push'
        assert str(excinfo.value).startswith('FileStore.push()')


class TestReadPath:
    """Tests for read_path."""

    def test_read_top_level(self):
        """Test reading a top-level key."""
        assert read_path({'a': 1}, ['a']) == 1

    def test_read_nested(self):
        """Test reading through nested mappings."""
        doc = {'a': {'b': {'c': 'deep'}}}
        assert read_path(doc, ['a', 'b', 'c']) == 'deep'
        assert read_path(doc, ['a', 'b']) == {'c': 'deep'}

    def test_read_missing(self):
        """Test absent keys return MISSING."""
        assert read_path({}, ['a']) is MISSING

    def test_read_partial_path_does_not_raise(self):
        """Test missing intermediate segments return MISSING."""
        assert read_path({'a': {}}, ['a', 'b', 'c']) is MISSING

    def test_read_through_scalar_is_missing(self):
        """Test descending into a scalar returns MISSING."""
        assert read_path({'a': 5}, ['a', 'b']) is MISSING
        assert read_path({'a': 'text'}, ['a', 'b']) is MISSING

    def test_read_none_is_not_missing(self):
        """Test a stored null is a value, not MISSING."""
        assert read_path({'a': None}, ['a']) is None

    def test_read_list_index(self):
        """Test decimal segments index into lists on reads."""
        doc = {'quux': {'qux': [1, 2, 3]}}
        assert read_path(doc, ['quux', 'qux', '0']) == 1
        assert read_path(doc, ['quux', 'qux', '2']) == 3

    def test_read_list_index_out_of_range(self):
        """Test invalid list indexes return MISSING."""
        doc = {'qux': [1, 2, 3]}
        assert read_path(doc, ['qux', '3']) is MISSING
        assert read_path(doc, ['qux', '-1']) is MISSING
        assert read_path(doc, ['qux', 'first']) is MISSING

    def test_read_without_list_indexing(self):
        """Test index_lists=False only traverses mappings."""
        doc = {'qux': [[1]]}
        assert read_path(doc, ['qux', '0'], index_lists=False) is MISSING

    def test_missing_is_falsy(self):
        """Test MISSING is falsy and has a readable repr."""
        assert not MISSING
        assert repr(MISSING) == 'MISSING'


class TestWritePath:
    """Tests for write_path."""

    def test_write_top_level(self):
        """Test assigning a top-level key."""
        assert write_path({}, ['a'], 1) == {'a': 1}

    def test_write_creates_intermediate_mappings(self):
        """Test intermediate mappings are created."""
        assert write_path({}, ['a', 'b', 'c'], 1) == {'a': {'b': {'c': 1}}}

    def test_write_returns_same_doc(self):
        """Test the document is mutated in place."""
        doc = {}
        assert write_path(doc, ['a'], 1) is doc

    def test_write_overwrites_any_value(self):
        """Test the terminal key is overwritten unconditionally."""
        doc = {'a': {'b': [1, 2]}}
        write_path(doc, ['a'], 'flat')
        assert doc == {'a': 'flat'}

    def test_write_replaces_scalar_intermediate(self):
        """Test a scalar on the path is replaced by a mapping."""
        doc = {'a': 5}
        write_path(doc, ['a', 'b'], 1)
        assert doc == {'a': {'b': 1}}

    @pytest.mark.parametrize('falsy', [0, False, '', None, []])
    def test_write_replaces_falsy_intermediate(self, falsy):
        """Test falsy values on the path are replaced by a mapping."""
        doc = {'a': falsy}
        write_path(doc, ['a', 'b'], 1)
        assert doc == {'a': {'b': 1}}

    def test_write_numeric_segment_is_mapping_key(self):
        """Test numeric segments never index lists on writes."""
        doc = {'inv': ['Sword']}
        write_path(doc, ['inv', '0'], 'Pick')
        assert doc == {'inv': {'0': 'Pick'}}

    def test_write_keeps_siblings(self):
        """Test writing a nested key keeps existing siblings."""
        doc = {'a': {'x': 1}}
        write_path(doc, ['a', 'y'], 2)
        assert doc == {'a': {'x': 1, 'y': 2}}

    def test_delete_key(self):
        """Test MISSING removes the terminal key."""
        doc = {'a': {'b': 1, 'c': 2}}
        write_path(doc, ['a', 'b'], MISSING)
        assert doc == {'a': {'c': 2}}

    def test_delete_is_default(self):
        """Test omitting value deletes."""
        doc = {'a': 1}
        write_path(doc, ['a'])
        assert doc == {}

    def test_delete_absent_key_is_noop(self):
        """Test deleting an absent key leaves the document as is."""
        doc = {'a': 1}
        write_path(doc, ['b'], MISSING)
        write_path(doc, ['x', 'y', 'z'], MISSING)
        assert doc == {'a': 1}

    def test_delete_through_scalar_is_noop(self):
        """Test deleting below a scalar does not replace the scalar."""
        doc = {'a': 5}
        write_path(doc, ['a', 'b'], MISSING)
        assert doc == {'a': 5}


class TestFlatten:
    """Tests for iter_flat and flatten."""

    def test_flatten_flat_doc(self):
        """Test a flat document is unchanged."""
        assert flatten({'a': 1, 'b': 'x'}) == {'a': 1, 'b': 'x'}

    def test_flatten_nested(self):
        """Test nested mappings become dot paths."""
        doc = {'player': {'name': 'Will', 'stats': {'level': 15}}}
        assert flatten(doc) == {'player.name': 'Will', 'player.stats.level': 15}

    def test_lists_are_leaves(self):
        """Test lists are emitted whole, not per element."""
        doc = {'qux': [1, 2, 3], 'quux': {'qux': [{'a': 1}]}}
        assert flatten(doc) == {'qux': [1, 2, 3], 'quux.qux': [{'a': 1}]}

    def test_scalars_and_null_are_leaves(self):
        """Test falsy scalars and null are kept."""
        doc = {'bar': 0, 'baz': False, 'e': '', 'n': None}
        assert flatten(doc) == doc

    def test_empty_mapping_yields_nothing(self):
        """Test empty nested mappings produce no entry."""
        assert flatten({'an': {'example': {}}, 'a': 1}) == {'a': 1}

    def test_iter_flat_order(self):
        """Test leaves are yielded in insertion order."""
        doc = {'b': {'y': 1, 'x': 2}, 'a': 3}
        assert list(iter_flat(doc)) == [('b.y', 1), ('b.x', 2), ('a', 3)]

    def test_iter_flat_prefix(self):
        """Test an explicit prefix is prepended."""
        assert list(iter_flat({'a': 1}, 'root')) == [('root.a', 1)]
