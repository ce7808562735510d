"""Tests for ocat which."""


def test_which_plain(invoke, write_file):
    path = write_file("notes.txt", b"")
    res = invoke(["which", path])
    assert res.exit_code == 0
    assert res.output == f"{path}\t-\n"


def test_which_probed(invoke, tmp_path, write_file):
    probed = write_file("dump.Z.bz2", b"")
    res = invoke(["which", str(tmp_path / "dump.Z")])
    assert res.exit_code == 0
    assert res.output == f"{probed}\t.bz2\n"


def test_which_missing(invoke, tmp_path):
    res = invoke(["which", str(tmp_path / "nothing")])
    assert res.exit_code == 1
    assert "Error: No such file" in res.output


def test_invalid_environment_setting(invoke, monkeypatch, write_file):
    path = write_file("notes.txt", b"")
    monkeypatch.setenv("OPEN_COMPRESSED_MAX_FDS", "abc")
    res = invoke(["which", path])
    assert res.exit_code == 1
    assert "Error:" in res.output
    assert "max_descriptors" in res.output
