import numpy as np
import pytest

from volumenavigator.model.box import Box, build_edges
from volumenavigator.model.intersection import (
    IntersectionPolygon, compute_polygon, edge_intersections
)
from volumenavigator.model.plane import PlaneModel

CUBE = Box(100.0, 100.0, 100.0)
CUBE_EDGES = build_edges(CUBE)


def polygon_for(normal, point, box=CUBE):
    plane = PlaneModel(normal, point)
    return plane, compute_polygon(plane, build_edges(box), box)


def assert_convex_and_oriented(polygon: IntersectionPolygon, normal):
    v = polygon.vertices
    turns = [
        np.dot(np.cross(v[(i + 1) % len(v)] - v[i], v[(i + 2) % len(v)] - v[(i + 1) % len(v)]), normal)
        for i in range(len(v))
    ]
    assert all(t > 0 for t in turns) or all(t < 0 for t in turns)


def test_horizontal_plane_through_center_gives_square():
    _, polygon = polygon_for((0.0, 0.0, 1.0), (50.0, 50.0, 50.0))
    assert len(polygon) == 4
    assert np.all(polygon.vertices[:, 2] == 50.0)
    expected = {(0.0, 0.0, 50.0), (100.0, 0.0, 50.0), (100.0, 100.0, 50.0), (0.0, 100.0, 50.0)}
    assert {tuple(p) for p in polygon.to_list()} == expected
    assert_convex_and_oriented(polygon, (0.0, 0.0, 1.0))


def test_diagonal_plane_through_center_gives_hexagon():
    plane, polygon = polygon_for((1.0, 1.0, 1.0), (50.0, 50.0, 50.0))
    assert len(polygon) == 6
    np.testing.assert_allclose(polygon.vertices.sum(axis=1), 150.0, atol=1e-9)
    assert_convex_and_oriented(polygon, plane.normal())


def test_plane_outside_box_gives_empty_polygon():
    _, polygon = polygon_for((0.0, 0.0, 1.0), (50.0, 50.0, 150.0))
    assert polygon.is_empty
    assert polygon.centroid is None
    assert polygon.triangles().shape == (0, 3, 3)
    assert polygon.to_list() == []


@pytest.mark.parametrize("normal,point", [
    ((0.2, 0.7, -0.4), (30.0, 60.0, 45.0)),
    ((1.0, 0.0, 0.3), (20.0, 50.0, 50.0)),
    ((0.0, -1.0, 2.0), (10.0, 90.0, 20.0)),
])
def test_vertices_on_plane_and_on_box_faces(normal, point):
    plane, polygon = polygon_for(normal, point)
    assert 3 <= len(polygon) <= 6
    for vertex in polygon.vertices:
        assert abs(plane.signed_distance(vertex)) < 1e-6
        on_face = np.isclose(vertex, 0.0) | np.isclose(vertex, CUBE.size)
        assert on_face.any()
    assert_convex_and_oriented(polygon, plane.normal())


def test_polygon_is_recomputed_identically():
    plane = PlaneModel((0.2, 0.7, -0.4), (30.0, 60.0, 45.0))
    first = compute_polygon(plane, CUBE_EDGES, CUBE)
    second = compute_polygon(plane, CUBE_EDGES, CUBE)
    np.testing.assert_array_equal(first.vertices, second.vertices)


def test_plane_on_a_face_gives_the_face():
    _, polygon = polygon_for((0.0, 0.0, 1.0), (10.0, 10.0, 0.0))
    assert len(polygon) == 4
    assert np.all(polygon.vertices[:, 2] == 0.0)


def test_corner_hits_are_merged():
    # passes through corners (100,0,0), (0,100,0) and (0,0,100)
    _, polygon = polygon_for((1.0, 1.0, 1.0), (100.0, 0.0, 0.0))
    assert len(polygon) == 3


def test_parallel_edges_are_skipped():
    plane = PlaneModel((0.0, 0.0, 1.0), (50.0, 50.0, 50.0))
    assert len(edge_intersections(plane, CUBE_EDGES)) == 4


def test_non_cubic_box():
    box = Box(200.0, 100.0, 50.0)
    plane, polygon = polygon_for((1.0, 0.0, 0.0), (150.0, 0.0, 0.0), box=box)
    assert len(polygon) == 4
    np.testing.assert_allclose(polygon.vertices[:, 0], 150.0)
    assert polygon.vertices[:, 1].max() == 100.0
    assert polygon.vertices[:, 2].max() == 50.0


def test_fan_triangulation_from_centroid():
    _, polygon = polygon_for((1.0, 1.0, 1.0), (50.0, 50.0, 50.0))
    triangles = polygon.triangles()
    assert triangles.shape == (6, 3, 3)
    np.testing.assert_allclose(triangles[:, 0], np.broadcast_to(polygon.centroid, (6, 3)))
    # closing triangle goes from the last vertex back to the first
    np.testing.assert_array_equal(triangles[-1, 1], polygon.vertices[-1])
    np.testing.assert_array_equal(triangles[-1, 2], polygon.vertices[0])
    np.testing.assert_allclose(polygon.centroid, [50.0, 50.0, 50.0], atol=1e-9)


def test_plane_coordinates_use_plane_basis():
    plane, polygon = polygon_for((0.0, 0.0, 1.0), (50.0, 50.0, 50.0))
    uv = polygon.plane_coordinates(plane)
    assert uv.shape == (4, 2)
    np.testing.assert_allclose(np.linalg.norm(uv, axis=1), np.sqrt(2.0) * 50.0)


def unit_normals(seed, count, positive=False):
    rng = np.random.default_rng(seed)
    normals = rng.normal(size=(count, 3))
    if positive:
        normals = np.abs(normals) + 1e-3
    return normals


def test_plane_touching_only_a_corner_gives_empty_polygon():
    # all-positive normals through the far corner leave the whole cube on one side
    for normal in unit_normals(7, 300, positive=True):
        _, polygon = polygon_for(normal, (100.0, 100.0, 100.0))
        assert polygon.is_empty, polygon.to_list()


def test_plane_touching_only_an_edge_gives_empty_polygon():
    _, polygon = polygon_for((1.0, 1.0, 0.0), (100.0, 100.0, 0.0))
    assert polygon.is_empty


@pytest.mark.parametrize("anchor", [(100.0, 100.0, 0.0), (0.0, 100.0, 100.0), (100.0, 0.0, 50.0)])
def test_planes_through_box_boundary_have_distinct_vertices(anchor):
    for normal in unit_normals(11, 300):
        plane, polygon = polygon_for(normal, anchor)
        if polygon.is_empty:
            continue
        assert 3 <= len(polygon) <= 6
        v = polygon.vertices
        distances = np.linalg.norm(v[:, None, :] - v[None, :, :], axis=-1)
        np.fill_diagonal(distances, np.inf)
        assert distances.min() > 1e-6, polygon.to_list()
        for vertex in v:
            assert abs(plane.signed_distance(vertex)) < 1e-6
        assert_convex_and_oriented(polygon, plane.normal())


def test_corner_vertex_is_snapped_exactly():
    _, polygon = polygon_for((1.0, 2.0, 3.0), (100.0, 100.0, 0.0))
    assert (100.0, 100.0, 0.0) in {tuple(p) for p in polygon.to_list()}
