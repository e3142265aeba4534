"""Extraction of the part of a mesh whose faces carry a given label."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Hashable, Sequence, TypeVar

V = TypeVar("V")


@dataclass
class SegmentedMesh(Generic[V]):
    """A triangle mesh cut out of a larger one, with indices back into it."""

    vertices: list[V] = field(default_factory=list)
    faces: list[tuple[int, int, int]] = field(default_factory=list)
    original_vertex_index: list[int] = field(default_factory=list)
    original_face_index: list[int] = field(default_factory=list)


def segment(
    vertices: Sequence[V],
    faces: Sequence[Sequence[int]],
    labels: Sequence[Hashable],
    label: Hashable,
) -> SegmentedMesh[V]:
    """Build a mesh of the faces whose label equals ``label``.

    Vertices and faces keep the order of their original indices; each new face
    is the triangle of the first three vertices of the original face.
    """
    if len(labels) != len(faces):
        raise ValueError("there must be one label per face")

    face_ids = [f for f, face_label in enumerate(labels) if face_label == label]
    for f in face_ids:
        if len(faces[f]) < 3:
            raise ValueError(f"face {f} has fewer than three vertices")
    point_ids = sorted({v for f in face_ids for v in faces[f]})
    new_index = {old: new for new, old in enumerate(point_ids)}

    return SegmentedMesh(
        vertices=[vertices[v] for v in point_ids],
        faces=[tuple(new_index[v] for v in faces[f][:3]) for f in face_ids],
        original_vertex_index=point_ids,
        original_face_index=face_ids,
    )