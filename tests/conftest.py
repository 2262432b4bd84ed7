"""Pytest configuration and shared fixtures."""

import gzip
import json

import pytest


def make_body(name, rings=("A",), landable=True, atmosphere="Thin Ammonia", **extra):
    """Body dict shaped like the galaxy dump."""
    body = {
        'name': name,
        'type': 'Planet',
        'subType': 'Rocky body',
        'isLandable': landable,
        'atmosphereType': atmosphere,
    }
    if rings is not None:
        body['rings'] = [{'name': f"{name} {ring} Ring", 'type': 'Rocky'} for ring in rings]
    body.update(extra)
    return body


def make_system(name, coords=(0.0, 0.0, 0.0), population=0, bodies=(), **extra):
    """System dict shaped like the galaxy dump."""
    system = {
        'name': name,
        'population': population,
    }
    if coords is not None:
        system['coords'] = {'x': coords[0], 'y': coords[1], 'z': coords[2]}
    if bodies is not None:
        system['bodies'] = list(bodies)
        system['bodyCount'] = len(system['bodies'])
    system.update(extra)
    return system


@pytest.fixture
def body_factory():
    return make_body


@pytest.fixture
def system_factory():
    return make_system


@pytest.fixture
def scenario_systems():
    """Five systems of which only the first qualifies."""
    return [
        make_system('Alpha', coords=(0.0, 0.0, 0.0), bodies=[
            {'name': 'Alpha 1', 'rings': ['A'], 'isLandable': True, 'atmosphereType': 'thin'},
        ]),
        make_system('Beta', coords=(10.0, 0.0, 0.0), population=5, bodies=[
            make_body('Beta 1'),
        ]),
        make_system('Gamma', coords=None, bodies=[
            make_body('Gamma 1'),
        ]),
        make_system('Delta', coords=(3.0, 4.0, 0.0), bodies=[
            make_body('Delta 1', landable=False),
        ]),
        make_system('Epsilon', coords=(1.0, 1.0, 1.0), bodies=[]),
    ]


@pytest.fixture
def write_dump(tmp_path):
    """Write systems to a dump file and return its path.

    ``layout`` is 'array' or 'jsonl'; ``compress`` gzips the output.
    """
    def _write(systems, name='galaxy.json', layout='array', compress=False):
        if layout == 'array':
            text = '[\n' + ',\n'.join(json.dumps(s) for s in systems) + '\n]\n'
        else:
            text = ''.join(json.dumps(s) + '\n' for s in systems)

        path = tmp_path / name
        if compress:
            with gzip.open(path, 'wt', encoding='utf-8') as f:
                f.write(text)
        else:
            path.write_text(text, encoding='utf-8')
        return path

    return _write
