import pytest

from defillet.point3d import Point3D
from defillet.segmenter import segment

VERTICES = [
    Point3D(0, 0, 0),
    Point3D(1, 0, 0),
    Point3D(1, 1, 0),
    Point3D(0, 1, 0),
    Point3D(2, 0, 0),
]
FACES = [(0, 1, 2), (0, 2, 3), (1, 4, 2)]
LABELS = [1, 0, 1]


def test_segment_maps_back_to_original():
    part = segment(VERTICES, FACES, LABELS, 1)
    assert part.original_face_index == [0, 2]
    assert part.original_vertex_index == [0, 1, 2, 4]
    for k, v in enumerate(part.vertices):
        assert v == VERTICES[part.original_vertex_index[k]]
    for face, original in zip(part.faces, part.original_face_index):
        assert tuple(part.original_vertex_index[v] for v in face) == FACES[original]


def test_segment_other_label():
    part = segment(VERTICES, FACES, LABELS, 0)
    assert part.original_face_index == [1]
    assert part.vertices == [VERTICES[0], VERTICES[2], VERTICES[3]]
    assert part.faces == [(0, 1, 2)]


def test_missing_label_gives_empty_mesh():
    part = segment(VERTICES, FACES, LABELS, 7)
    assert part.vertices == []
    assert part.faces == []
    assert part.original_vertex_index == []


def test_label_count_must_match_faces():
    with pytest.raises(ValueError):
        segment(VERTICES, FACES, [1, 0], 1)


def test_segments_partition_the_faces():
    parts = [segment(VERTICES, FACES, LABELS, lab) for lab in set(LABELS)]
    all_faces = sorted(f for p in parts for f in p.original_face_index)
    assert all_faces == list(range(len(FACES)))