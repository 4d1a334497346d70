from types import SimpleNamespace

import pytest

from conftest import SAMPLE_MSH
from mesh.core import GmshGenerator, mesh_geo
from mesh.tools.utils import resolve_executable


@pytest.fixture
def geo_file(tmp_path):
    path = tmp_path / "domain.geo"
    path.write_text("Point(0) = {0, 0, 0, 1};\n", encoding="utf-8")
    return path


def fake_gmsh(calls, content=SAMPLE_MSH, returncode=0):
    def run(cmd, **kwargs):
        calls.append(cmd)
        if returncode == 0 and content is not None:
            out = cmd[cmd.index("-o") + 1]
            with open(out, "w", encoding="utf-8") as fh:
                fh.write(content)
        return SimpleNamespace(returncode=returncode, stdout="out", stderr="boom")
    return run


def test_command_line(geo_file, tmp_path):
    cmd = GmshGenerator().build_command(
        str(geo_file), str(tmp_path / "m.msh"),
        {"dim": 2, "algo": 6, "gmsh_bin": "/opt/gmsh",
         "extra_cli": {"Mesh.CharacteristicLengthFactor": 0.5, "General.Terminal": "1"}},
    )
    assert cmd[:7] == ["/opt/gmsh", "-2", str(geo_file), "-o", str(tmp_path / "m.msh"), "-format", "msh2"]
    assert ["-setnumber", "Mesh.Algorithm", "6"] == cmd[7:10]
    assert "-setstring" in cmd
    assert cmd[-4:] == ["-save", "-nopopup", "-v", "2"]


def test_gmsh_bin_from_environment(geo_file, monkeypatch):
    monkeypatch.setenv("GMSH_BIN", "/env/gmsh")
    cmd = GmshGenerator().build_command(str(geo_file), "m.msh", {})
    assert cmd[0] == "/env/gmsh"


def test_mesh_geo_runs_gmsh(geo_file, tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr("mesh.core.generators.gmsh_generator.subprocess.run", fake_gmsh(calls))
    out = tmp_path / "sub" / "domain.msh"

    result = mesh_geo(geo_path=str(geo_file), msh_path=str(out), algo=5, gmsh_bin="gmsh")

    assert result == str(out)
    assert out.read_text(encoding="utf-8") == SAMPLE_MSH
    assert len(calls) == 1
    assert "Mesh.Algorithm" in calls[0]


def test_only_msh2_is_supported(geo_file, tmp_path):
    with pytest.raises(ValueError):
        mesh_geo(geo_path=str(geo_file), msh_path=str(tmp_path / "m.msh"),
                 msh_format="msh4", gmsh_bin="gmsh")


def test_missing_geo_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        mesh_geo(geo_path=str(tmp_path / "none.geo"), msh_path=str(tmp_path / "m.msh"), gmsh_bin="gmsh")


def test_gmsh_failure_carries_output(geo_file, tmp_path, monkeypatch):
    monkeypatch.setattr("mesh.core.generators.gmsh_generator.subprocess.run",
                        fake_gmsh([], returncode=1))
    with pytest.raises(RuntimeError, match="boom"):
        mesh_geo(geo_path=str(geo_file), msh_path=str(tmp_path / "m.msh"), gmsh_bin="gmsh")


@pytest.mark.parametrize("content", [None, "$MeshFormat\n"])
def test_missing_or_tiny_output(geo_file, tmp_path, monkeypatch, content):
    monkeypatch.setattr("mesh.core.generators.gmsh_generator.subprocess.run",
                        fake_gmsh([], content=content))
    with pytest.raises(RuntimeError):
        mesh_geo(geo_path=str(geo_file), msh_path=str(tmp_path / "m.msh"), gmsh_bin="gmsh")


def test_executable_resolution_order(monkeypatch):
    monkeypatch.setenv("GMSH_BIN", '"/env/gmsh"')
    assert resolve_executable("gmsh", "/opt/gmsh") == "/opt/gmsh"
    assert resolve_executable("gmsh") == "/env/gmsh"

    monkeypatch.delenv("GMSH_BIN")
    monkeypatch.setattr("mesh.tools.utils.shutil.which", lambda name: None)
    with pytest.raises(RuntimeError, match="GMSH_BIN"):
        resolve_executable("gmsh")
