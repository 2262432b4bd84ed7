"""Tests for the DuckDB result store."""

import json

import duckdb
import pytest

from ringscan.core.matching import match_system
from ringscan.data.records import StarSystem
from ringscan.database.schema import MatchedSystem, systems_table_ddl
from ringscan.database.store import ResultStore, StoreError, open_store, records_frame


@pytest.fixture
def records(system_factory, body_factory):
    """Three matched systems, nearest first."""
    specs = [
        ('Near', (1.0, 0.0, 0.0), 3),
        ('Middle', (3.0, 4.0, 0.0), None),
        ('Far', (0.0, 0.0, -20.0), 40),
    ]
    result = []
    for name, coords, body_count in specs:
        data = system_factory(name, coords=coords, bodies=[
            body_factory(f'{name} 1', rings=None),
            body_factory(f'{name} 2'),
        ])
        if body_count is None:
            del data['bodyCount']
        else:
            data['bodyCount'] = body_count
        result.append(match_system(StarSystem.from_dict(data)))
    return result


class TestSchema:
    """Test schema helpers."""

    def test_ddl_lists_all_columns(self):
        ddl = systems_table_ddl()
        for column in ['system_name', 'distance_from_origin', 'body_count',
                       'matched_body_name', 'matched_body', 'system_data']:
            assert column in ddl

    def test_to_row_serializes_nested_records(self, records):
        row = records[0].to_row()
        assert json.loads(row['matched_body'])['name'] == 'Near 2'
        assert [b['name'] for b in json.loads(row['system_data'])] == ['Near 1', 'Near 2']

    def test_records_frame_keeps_null_body_count(self, records):
        frame = records_frame(records)
        assert frame['body_count'].isna().tolist() == [False, True, False]
        assert frame['_ordinal'].tolist() == [0, 1, 2]


class TestResultStore:
    """Test writing and reopening stores."""

    def test_write_and_reopen(self, records, tmp_path):
        db_path = ResultStore(tmp_path / 'out.duckdb').write(records, {'config': 'test'})

        con = open_store(db_path)
        try:
            rows = con.execute(
                "SELECT system_name, x, y, z, body_count, distance_from_origin, matched_body_name "
                "FROM systems ORDER BY rowid"
            ).fetchall()
            matched_body, system_data = con.execute(
                "SELECT matched_body, system_data FROM systems WHERE system_name = 'Middle'"
            ).fetchone()
            metadata = con.execute("SELECT key, value FROM run_metadata").fetchall()
        finally:
            con.close()

        assert rows == [
            ('Near', 1.0, 0.0, 0.0, 3, 1.0, 'Near 2'),
            ('Middle', 3.0, 4.0, 0.0, None, 5.0, 'Middle 2'),
            ('Far', 0.0, 0.0, -20.0, 40, 20.0, 'Far 2'),
        ]
        assert json.loads(matched_body) == records[1].matched_body
        assert json.loads(system_data) == records[1].system_data
        assert metadata == [('config', 'test')]

    def test_indexes_created(self, records, tmp_path):
        db_path = ResultStore(tmp_path / 'out.duckdb').write(records)

        con = open_store(db_path)
        try:
            indexes = {
                row[0] for row in con.execute(
                    "SELECT index_name FROM duckdb_indexes() WHERE table_name = 'systems'"
                ).fetchall()
            }
        finally:
            con.close()

        assert indexes == {'idx_distance', 'idx_body_count', 'idx_system_name'}

    def test_empty_store_is_queryable(self, tmp_path):
        db_path = ResultStore(tmp_path / 'out.duckdb').write([])

        con = open_store(db_path)
        try:
            assert con.execute("SELECT COUNT(*) FROM systems").fetchone() == (0,)
        finally:
            con.close()

    def test_replaces_previous_store(self, records, tmp_path):
        db_path = tmp_path / 'out.duckdb'
        ResultStore(db_path).write(records)
        ResultStore(db_path).write(records[:1])

        con = open_store(db_path)
        try:
            assert con.execute("SELECT COUNT(*) FROM systems").fetchone() == (1,)
        finally:
            con.close()
        assert not (tmp_path / 'out.duckdb.tmp').exists()

    def test_failed_write_keeps_previous_store(self, records, tmp_path, monkeypatch):
        db_path = tmp_path / 'out.duckdb'
        ResultStore(db_path).write(records)

        def fail(con):
            raise duckdb.Error("index creation failed")

        monkeypatch.setattr(ResultStore, '_create_indexes', staticmethod(fail))

        with pytest.raises(StoreError, match='index creation failed'):
            ResultStore(db_path).write(records[:1])

        assert not (tmp_path / 'out.duckdb.tmp').exists()
        con = open_store(db_path)
        try:
            assert con.execute("SELECT COUNT(*) FROM systems").fetchone() == (3,)
        finally:
            con.close()

    def test_failed_first_write_leaves_nothing(self, records, tmp_path, monkeypatch):
        def fail(con):
            raise duckdb.Error("disk full")

        monkeypatch.setattr(ResultStore, '_create_indexes', staticmethod(fail))
        db_path = tmp_path / 'out.duckdb'

        with pytest.raises(StoreError):
            ResultStore(db_path).write(records)

        assert list(tmp_path.iterdir()) == []

    def test_creates_parent_directories(self, records, tmp_path):
        db_path = tmp_path / 'nested' / 'dir' / 'out.duckdb'
        assert ResultStore(db_path).write(records).exists()

    def test_open_missing_store(self, tmp_path):
        with pytest.raises(StoreError, match='not found'):
            open_store(tmp_path / 'missing.duckdb')


class TestMatchedSystem:
    """Test the output record type."""

    def test_is_immutable(self, records):
        with pytest.raises(Exception):
            records[0].system_name = 'Other'

    def test_to_dict_round_trip(self, records):
        assert MatchedSystem(**records[0].to_dict()) == records[0]
