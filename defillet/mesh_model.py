"""Triangle mesh loading, normal estimation and writing in OBJ, OFF and M formats."""

from __future__ import annotations

import sys
from itertools import pairwise
from typing import Iterable, Iterator, Sequence, TextIO

from .point3d import Point3D, vector_cross

_FLT_EPSILON = 1.1920928955078125e-07

Face = tuple[int, int, int]


class MeshFormatError(ValueError):
    """Raised when a mesh file cannot be interpreted."""


def _fmt(value: float) -> str:
    return format(value, "g")


def _fan(polygon: Sequence[int], offset: int) -> list[Face]:
    if len(polygon) < 3:
        return []
    first = polygon[0] - offset
    return [(first, a - offset, b - offset) for a, b in pairwise(polygon[1:])]


def _leading_ints(words: Iterable[str], obj_style: bool = False) -> list[int]:
    values = []
    for word in words:
        if obj_style:
            word = word.split("/", 1)[0]
        try:
            values.append(int(word))
        except ValueError:
            break
    return values


def _parse_point(words: Sequence[str], filename: str) -> Point3D:
    if len(words) < 3:
        raise MeshFormatError(f"{filename}: vertex needs three coordinates")
    try:
        return Point3D(float(words[0]), float(words[1]), float(words[2]))
    except ValueError as exc:
        raise MeshFormatError(f"{filename}: bad vertex coordinates") from exc


def _group_name(filename: str) -> str:
    start = filename.rfind("\\") + 1
    dot = filename.rfind(".")
    return filename[start:dot] if dot != -1 else filename[start:]


class BaseModel:
    """A triangle mesh read from a file, with per-vertex normals and a scale."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        self.verts: list[Point3D] = []
        self.faces: list[Face] = []
        self.normals: list[Point3D] = []
        self.useless_faces: set[int] = set()
        self.scale = 0.0

    def load(self) -> None:
        """Read the model's file and compute its normals and scale."""
        self.read(self.filename)
        self.compute_scale_and_normals()

    def read(self, filename: str) -> None:
        """Read a mesh, choosing the parser by the file extension."""
        dot = filename.rfind(".")
        if dot == -1:
            raise MeshFormatError("File name doesn't contain a dot!")
        readers = {"obj": self.read_obj, "off": self.read_off, "m": self.read_m}
        reader = readers.get(filename[dot + 1:])
        if reader is None:
            raise MeshFormatError("This format can't be handled!")
        reader(filename)

    def read_obj(self, filename: str) -> None:
        """Append the vertices and fan-triangulated faces of an OBJ file."""
        with open(filename, encoding="utf-8") as stream:
            for line in stream:
                words = line.split()
                if not words:
                    continue
                if words[0] == "v":
                    self.verts.append(_parse_point(words[1:4], filename))
                elif words[0] == "f":
                    self.faces.extend(_fan(_leading_ints(words[1:], obj_style=True), 1))

    def read_off(self, filename: str) -> None:
        """Append the vertices and fan-triangulated faces of an OFF file."""
        with open(filename, encoding="utf-8") as stream:
            stream.readline()
            fields: Iterator[str] = iter(stream.read().split())
        try:
            vert_num = int(next(fields))
            next(fields)
            next(fields)
            for _ in range(vert_num):
                coords = [next(fields) for _ in range(3)]
                self.verts.append(_parse_point(coords, filename))
            for field in fields:
                degree = int(field)
                first = int(next(fields))
                second = int(next(fields))
                for _ in range(degree - 2):
                    third = int(next(fields))
                    self.faces.append((first, second, third))
                    second = third
        except StopIteration as exc:
            raise MeshFormatError(f"{filename}: unexpected end of file") from exc
        except ValueError as exc:
            raise MeshFormatError(f"{filename}: malformed OFF data") from exc

    def read_m(self, filename: str) -> None:
        """Append the vertices and fan-triangulated faces of an M file."""
        with open(filename, encoding="utf-8") as stream:
            for line in stream:
                if line.startswith("#"):
                    continue
                words = line.split()
                if not words:
                    continue
                if words[0] == "Vertex":
                    self.verts.append(_parse_point(words[2:5], filename))
                elif words[0] == "Face":
                    self.faces.extend(_fan(_leading_ints(words[2:]), 1))

    def compute_scale_and_normals(self) -> None:
        """Estimate unit vertex normals and half the largest bounding-box extent."""
        if not self.verts:
            return
        normals = [Point3D() for _ in self.verts]
        for face in self.faces:
            a, b, c = (self.verts[i] for i in face)
            normal = vector_cross(a, b, c)
            area = normal.length()
            if area == 0:
                continue
            unit = normal / area
            for index in face:
                normals[index] = normals[index] + unit
        self.normals = [
            n.normalized() if abs(n.x) + abs(n.y) + abs(n.z) >= _FLT_EPSILON else n
            for n in normals
        ]
        extents = [
            max(getattr(p, axis) for p in self.verts) - min(getattr(p, axis) for p in self.verts)
            for axis in "xyz"
        ]
        self.scale = max(extents) / 2

    def _active_faces(self) -> Iterator[Face]:
        for index, face in enumerate(self.faces):
            if index not in self.useless_faces:
                yield face

    def _write_textured(self, out: TextIO, header: str, coords: Iterable[str]) -> None:
        out.write(f"g {_group_name(out.name)}\n")
        if header:
            out.write(f"{header}\n")
        for p in self.verts:
            out.write(f"v {_fmt(p.x)} {_fmt(p.y)} {_fmt(p.z)}\n")
        for coord in coords:
            out.write(f"vt {coord}\n")
        for a, b, c in self._active_faces():
            out.write(f"f {a + 1}/{a + 1} {b + 1}/{b + 1} {c + 1}/{c + 1}\n")

    def save_m(self, filename: str) -> None:
        """Write the mesh in M format, leaving out useless faces."""
        with open(filename, "w", encoding="utf-8") as out:
            for number, p in enumerate(self.verts, start=1):
                out.write(f"Vertex {number} {_fmt(p.x)} {_fmt(p.y)} {_fmt(p.z)}\n")
            for number, (a, b, c) in enumerate(self._active_faces(), start=1):
                out.write(f"Face {number} {a + 1} {b + 1} {c + 1}\n")

    def save_off(self, filename: str) -> None:
        """Write the mesh in OFF format, leaving out useless faces."""
        with open(filename, "w", encoding="utf-8") as out:
            out.write("OFF\n")
            out.write(f"{len(self.verts)} {len(self.faces)} 0\n")
            for p in self.verts:
                out.write(f"{_fmt(p.x)} {_fmt(p.y)} {_fmt(p.z)}\n")
            for a, b, c in self._active_faces():
                out.write(f"3 {a} {b} {c}\n")

    def save_obj(self, filename: str) -> None:
        """Write the mesh in OBJ format, leaving out useless faces."""
        with open(filename, "w", encoding="utf-8") as out:
            out.write(f"g {_group_name(filename)}\n")
            for p in self.verts:
                out.write(f"v {_fmt(p.x)} {_fmt(p.y)} {_fmt(p.z)}\n")
            for a, b, c in self._active_faces():
                out.write(f"f {a + 1} {b + 1} {c + 1}\n")

    def save_scalar_field_obj(
        self,
        values: Sequence[float],
        filename: str,
        comments: str | None = None,
        max_value: float | None = None,
    ) -> None:
        """Write the mesh as OBJ with one texture coordinate per scalar value.

        With ``max_value`` the values are divided by it; ``comments`` replaces
        the default header line.
        """
        values = list(values)
        if max_value is not None:
            values = [v / max_value for v in values]
        if comments is not None:
            header = comments
        elif max_value is not None:
            header = f"# maxValue = {_fmt(max(values))}"
        else:
            header = f"# maxDis: {_fmt(max(values))}"
        with open(filename, "w", encoding="utf-8") as out:
            self._write_textured(out, header, (f"{_fmt(v)} 0" for v in values))

    def save_parametrization_obj(self, uvs: Sequence[tuple[float, float]], filename: str) -> None:
        """Write the mesh as OBJ with the given (u, v) texture coordinates."""
        with open(filename, "w", encoding="utf-8") as out:
            self._write_textured(out, "", (f"{_fmt(u)} {_fmt(v)}" for u, v in uvs))

    def print_info(self, out: TextIO | None = None) -> None:
        """Print a short summary of the model."""
        out = sys.stdout if out is None else out
        out.write("Model info is as follows.\n")
        out.write(f"Name: {self.short_name()}\n")
        out.write(f"VertNum = {len(self.verts)}\n")
        out.write(f"FaceNum = {len(self.faces)}\n")
        out.write(f"Scale = {_fmt(self.scale)}\n")

    def vertex_id(self, point: Point3D) -> int:
        """Index of the vertex nearest to ``point``."""
        if not self.verts:
            raise ValueError("the model has no vertices")
        return min(range(len(self.verts)), key=lambda i: (self.verts[i] - point).length())

    def short_name(self) -> str:
        """File name after the last backslash."""
        return self.filename[self.filename.rfind("\\") + 1:]

    def short_name_without_extension(self) -> str:
        """File name after the last backslash, without its extension."""
        return _group_name(self.filename)


def read_scalar_field(filename: str) -> list[float]:
    """Read the first coordinate of every ``vt`` line of an OBJ file."""
    field = []
    with open(filename, encoding="utf-8") as stream:
        for line in stream:
            words = line.split()
            if len(words) >= 2 and words[0] == "vt":
                field.append(float(words[1]))
    return field


def read_comments(filename: str) -> str:
    """Collect every line starting with ``#``, each ending in a newline."""
    with open(filename, encoding="utf-8") as stream:
        return "".join(line.rstrip("\r\n") + "\n" for line in stream if line.startswith("#"))