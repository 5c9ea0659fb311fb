import math

import pytest

from core.transforms import rotation_y, translation
from universe.scene_graph import ROOT, TransformArena


@pytest.fixture
def chain():
    arena = TransformArena()
    a = arena.add("a", translation(1.0, 0.0, 0.0))
    b = arena.add("b", rotation_y(math.pi / 2), parent=a)
    c = arena.add("c", translation(5.0, 0.0, 0.0), parent=b)
    return arena, a, b, c


def test_world_composes_parent_chain(chain):
    arena, a, b, c = chain
    assert arena.world_position(c) == pytest.approx([1.0, 0.0, -5.0], abs=1e-12)


def test_set_local_invalidates_descendants(chain):
    arena, a, b, c = chain
    arena.world(c)
    arena.set_local(a, translation(0.0, 2.0, 0.0))
    assert arena.world_position(c) == pytest.approx([0.0, 2.0, -5.0], abs=1e-12)


def test_cached_world_is_reused(chain):
    arena, a, b, c = chain
    assert arena.world(c) is arena.world(c)


def test_sibling_untouched_by_invalidation():
    arena = TransformArena()
    left = arena.add("left", translation(1.0, 0.0, 0.0))
    right = arena.add("right", translation(-1.0, 0.0, 0.0))
    cached = arena.world(right)
    arena.set_local(left, translation(3.0, 0.0, 0.0))
    assert arena.world(right) is cached
    assert arena.world_position(left) == pytest.approx([3.0, 0.0, 0.0])


def test_structure_queries(chain):
    arena, a, b, c = chain
    assert len(arena) == 3
    assert arena.handle("b") == b
    assert arena.name(c) == "c"
    assert arena.parent(a) == ROOT
    assert arena.children(a) == [b]


def test_duplicate_name_rejected(chain):
    arena = chain[0]
    with pytest.raises(ValueError):
        arena.add("a")


def test_missing_parent_rejected():
    arena = TransformArena()
    with pytest.raises(IndexError):
        arena.add("orphan", parent=4)
