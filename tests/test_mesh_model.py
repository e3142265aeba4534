import io

import pytest

from defillet.mesh_model import BaseModel, MeshFormatError, read_comments, read_scalar_field
from defillet.point3d import Point3D

TETRA_OBJ = """# tetrahedron
v 0 0 0
v 1 0 0
v 0 1 0
v 0 0 1
f 1 3 2
f 1 2 4
f 1 4 3
f 2 3 4
"""


@pytest.fixture
def tetra(tmp_path):
    path = tmp_path / "tetra.obj"
    path.write_text(TETRA_OBJ)
    model = BaseModel(str(path))
    model.load()
    return model


def test_load_obj_counts_and_indices(tetra):
    assert len(tetra.verts) == 4
    assert tetra.faces[0] == (0, 2, 1)
    assert tetra.verts[3] == Point3D(0, 0, 1)


def test_normals_are_unit(tetra):
    assert all(n.length() == pytest.approx(1.0) for n in tetra.normals)


def test_scale_is_half_the_largest_extent(tetra):
    assert tetra.scale == pytest.approx(0.5)


def test_polygon_fan_and_slash_tokens(tmp_path):
    path = tmp_path / "quad.obj"
    path.write_text("v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\nf 1/1/1 2/2/2 3/3/3 4/4/4\n")
    model = BaseModel(str(path))
    model.load()
    assert model.faces == [(0, 1, 2), (0, 2, 3)]


@pytest.mark.parametrize("ext", ["obj", "off", "m"])
def test_save_and_reload_round_trip(tetra, tmp_path, ext):
    out = tmp_path / f"copy.{ext}"
    getattr(tetra, f"save_{ext}")(str(out))
    copy = BaseModel(str(out))
    copy.load()
    assert copy.verts == tetra.verts
    assert copy.faces == tetra.faces


def test_useless_faces_are_not_saved(tetra, tmp_path):
    tetra.useless_faces.add(0)
    out = tmp_path / "trim.m"
    tetra.save_m(str(out))
    copy = BaseModel(str(out))
    copy.load()
    assert copy.faces == tetra.faces[1:]


def test_unknown_extension_raises(tmp_path):
    with pytest.raises(MeshFormatError):
        BaseModel(str(tmp_path / "mesh.stl")).load()


def test_missing_dot_raises():
    with pytest.raises(MeshFormatError):
        BaseModel("meshfile").load()


def test_truncated_off_raises(tmp_path):
    path = tmp_path / "bad.off"
    path.write_text("OFF\n3 1 0\n0 0 0\n1 0 0\n")
    with pytest.raises(MeshFormatError):
        BaseModel(str(path)).load()


def test_vertex_id_finds_nearest(tetra):
    for index, vert in enumerate(tetra.verts):
        assert tetra.vertex_id(vert) == index
    assert tetra.vertex_id(Point3D(0.9, 0.05, 0.0)) == 1


def test_vertex_id_on_empty_model_raises():
    with pytest.raises(ValueError):
        BaseModel("empty.obj").vertex_id(Point3D())


def test_scalar_field_round_trip(tetra, tmp_path):
    values = [0.0, 0.5, 1.25, 2.0]
    out = tmp_path / "field.obj"
    tetra.save_scalar_field_obj(values, str(out))
    assert read_scalar_field(str(out)) == values
    assert read_comments(str(out)) == "# maxDis: 2\n"


def test_scalar_field_scaled_by_max_value(tetra, tmp_path):
    values = [0.0, 0.5, 1.0, 2.0]
    out = tmp_path / "scaled.obj"
    tetra.save_scalar_field_obj(values, str(out), max_value=2.0)
    assert read_scalar_field(str(out)) == [v / 2.0 for v in values]


def test_scalar_field_with_comments(tetra, tmp_path):
    out = tmp_path / "commented.obj"
    tetra.save_scalar_field_obj([1.0, 2.0, 3.0, 4.0], str(out), comments="# note")
    assert read_comments(str(out)) == "# note\n"


def test_parametrization_round_trip(tetra, tmp_path):
    uvs = [(0.0, 0.5), (1.0, 0.25), (0.5, 0.5), (0.75, 1.0)]
    out = tmp_path / "uv.obj"
    tetra.save_parametrization_obj(uvs, str(out))
    assert read_scalar_field(str(out)) == [u for u, _ in uvs]
    reloaded = BaseModel(str(out))
    reloaded.load()
    assert reloaded.faces == tetra.faces


def test_short_names():
    model = BaseModel("C:\\models\\bunny.obj")
    assert model.short_name() == "bunny.obj"
    assert model.short_name_without_extension() == "bunny"


def test_print_info(tetra):
    buffer = io.StringIO()
    tetra.print_info(buffer)
    lines = buffer.getvalue().splitlines()
    assert lines[0] == "Model info is as follows."
    assert "VertNum = 4" in lines
    assert "FaceNum = 4" in lines