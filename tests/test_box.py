from collections import Counter

import numpy as np
import pytest

from volumenavigator.model.box import Box, build_edges


def test_build_edges_gives_twelve_distinct_edges():
    box = Box(100.0, 60.0, 30.0)
    edges = build_edges(box)
    assert len(edges) == 12
    assert len(set(edges)) == 12


def test_edges_are_axis_aligned_and_scaled_by_box_size():
    box = Box(100.0, 60.0, 30.0)
    for edge in build_edges(box):
        direction = np.asarray(edge.direction)
        assert np.count_nonzero(direction) == 1
        axis = int(np.flatnonzero(direction)[0])
        assert direction[axis] == box.size[axis]


def test_every_corner_touches_three_edges():
    box = Box(10.0, 20.0, 30.0)
    counter = Counter()
    for edge in build_edges(box):
        counter[tuple(edge.point_at(0.0))] += 1
        counter[tuple(edge.point_at(1.0))] += 1
    assert len(counter) == 8
    assert set(counter.values()) == {3}


def test_from_options_reads_widget_keys():
    box = Box.from_options({
        "xSize": 10, "ySize": 20, "zSize": 30, "xOrigin": 1, "yOrigin": 2, "zOrigin": 3
    })
    assert box.bounds() == (1.0, 11.0, 2.0, 22.0, 3.0, 33.0)
    np.testing.assert_allclose(box.center, [6.0, 12.0, 18.0])


def test_from_options_missing_key():
    with pytest.raises(ValueError):
        Box.from_options({"xSize": 10, "ySize": 20})


@pytest.mark.parametrize("size", [0.0, -5.0, float("nan"), float("inf")])
def test_invalid_size_rejected(size):
    with pytest.raises(ValueError):
        Box(size, 10.0, 10.0)


def test_diagonal_and_contains():
    box = Box(3.0, 4.0, 12.0)
    assert box.diagonal == pytest.approx(13.0)
    assert box.contains(np.array([3.0, 0.0, 12.0]))
    assert not box.contains(np.array([3.0001, 0.0, 0.0]))
    assert box.contains(np.array([3.0001, 0.0, 0.0]), tolerance=1e-3)


def test_snap_to_faces():
    box = Box(100.0, 100.0, 100.0)
    snapped = box.snap_to_faces(np.array([99.99999999999997, 1e-14, -1e-13]), 1e-10)
    assert snapped.tolist() == [100.0, 0.0, 0.0]
    assert box.snap_to_faces(np.array([50.0, 100.0 + 1e-11, 0.5]), 1e-10).tolist() == [50.0, 100.0, 0.5]


def test_invalid_box_is_logged(caplog):
    with caplog.at_level("ERROR", logger="volumenavigator"):
        with pytest.raises(ValueError):
            Box.from_options({"xSize": -1, "ySize": 20, "zSize": 30})
    assert "x_size" in caplog.text
