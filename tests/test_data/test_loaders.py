"""Tests for galaxy dump loading."""

import gzip

import pytest

from ringscan.data.compressed_reader import CompressedFileReader
from ringscan.data.loaders import (
    IngestError, detect_layout, iter_raw_systems, iter_systems, load_systems,
)


class TestLayouts:
    """Test each supported on-disk layout."""

    @pytest.mark.parametrize('layout,name,compress', [
        ('array', 'galaxy.json', False),
        ('array', 'galaxy.json.gz', True),
        ('jsonl', 'galaxy.jsonl', False),
        ('jsonl', 'galaxy.jsonl.gz', True),
    ])
    def test_reads_all_systems_in_order(self, scenario_systems, write_dump, layout, name, compress):
        path = write_dump(scenario_systems, name=name, layout=layout, compress=compress)

        assert detect_layout(path) == layout
        names = [system.name for system in iter_systems(path)]
        assert names == ['Alpha', 'Beta', 'Gamma', 'Delta', 'Epsilon']

    def test_gzip_detected_without_suffix(self, scenario_systems, write_dump):
        path = write_dump(scenario_systems, name='galaxy.dump', compress=True)

        with CompressedFileReader(path) as reader:
            assert reader.is_compressed
        assert len(load_systems(path)) == 5

    def test_numbers_are_not_decimals(self, write_dump):
        path = write_dump([{'name': 'A', 'coords': {'x': 1.5, 'y': -2.25, 'z': 3}}])
        raw = next(iter_raw_systems(path))
        assert type(raw['coords']['x']) is float
        assert load_systems(path)[0].coords == (1.5, -2.25, 3.0)

    def test_blank_lines_in_jsonl_are_ignored(self, tmp_path):
        path = tmp_path / 'galaxy.jsonl'
        path.write_text('{"name": "A"}\n\n   \n{"name": "B"}\n', encoding='utf-8')
        assert [s.name for s in iter_systems(path)] == ['A', 'B']

    def test_missing_fields_become_none(self, write_dump):
        system = load_systems(write_dump([{'name': 'Bare'}]))[0]
        assert system.coords is None
        assert system.population is None
        assert system.bodies is None
        assert system.body_count is None


class TestFailures:
    """Test fail-fast behaviour on bad input."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(IngestError):
            list(iter_systems(tmp_path / 'nope.json'))

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.json'
        path.write_text('  \n', encoding='utf-8')
        with pytest.raises(IngestError, match='empty'):
            list(iter_systems(path))

    def test_top_level_scalar(self, tmp_path):
        path = tmp_path / 'scalar.json'
        path.write_text('42', encoding='utf-8')
        with pytest.raises(IngestError):
            list(iter_systems(path))

    def test_truncated_array(self, tmp_path):
        path = tmp_path / 'truncated.json'
        path.write_text('[{"name": "A"}, {"name": "B"', encoding='utf-8')
        with pytest.raises(IngestError):
            list(iter_systems(path))

    def test_bad_jsonl_line_reports_line_number(self, tmp_path):
        path = tmp_path / 'bad.jsonl'
        path.write_text('{"name": "A"}\n{"name": \n', encoding='utf-8')
        with pytest.raises(IngestError, match='line 2'):
            list(iter_systems(path))

    def test_non_object_element(self, tmp_path):
        path = tmp_path / 'mixed.json'
        path.write_text('[{"name": "A"}, 7]', encoding='utf-8')
        with pytest.raises(IngestError, match='not an object'):
            list(iter_systems(path))

    def test_wrongly_typed_fields_do_not_abort(self, write_dump):
        path = write_dump([
            {'name': 'A', 'bodies': 'lots'},
            {'name': 'B', 'population': 9, 'coords': {'x': 'n/a', 'y': 0, 'z': 0},
             'bodies': [{'name': 'B 1', 'rings': 'A'}]},
        ])
        systems = list(iter_systems(path))
        assert [s.name for s in systems] == ['A', 'B']
        assert systems[0].bodies is None
        assert systems[1].bodies[0].rings == 'A'

    def test_corrupt_gzip(self, tmp_path):
        path = tmp_path / 'galaxy.json.gz'
        data = gzip.compress(b'[{"name": "A"}, {"name": "B"}]')
        path.write_bytes(data[:len(data) // 2])
        with pytest.raises(IngestError):
            list(iter_systems(path))
