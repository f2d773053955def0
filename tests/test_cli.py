"""
CLI Tests - gfakit stats / check / convert.
"""

from pathlib import Path

from gfakit.cli import main
from gfakit.reader import GFA2Parser

DATA = Path(__file__).parent / "data"


class TestStats:

    def test_gfa1(self, capsys):
        assert main(["stats", str(DATA / "lil.gfa")]) == 0
        out = capsys.readouterr().out
        assert "GFA" in out
        assert "segments" in out
        assert "total" in out

    def test_gfa2_dense_no_tags(self, capsys):
        code = main(["stats", "--gfa2", "--dense-ids", "--no-tags", str(DATA / "sample.gfa2")])
        assert code == 0
        assert "groups_o" in capsys.readouterr().out

    def test_missing_file(self, tmp_path):
        assert main(["stats", str(tmp_path / "nope.gfa")]) == 1


class TestCheck:

    def test_valid(self, capsys):
        assert main(["check", str(DATA / "lil.gfa")]) == 0
        assert "PASSED" in capsys.readouterr().out

    def test_invalid(self, tmp_path, capsys):
        path = tmp_path / "bad.gfa"
        path.write_bytes(b"S\t1\tACGT\nL\t1\t?\t1\t+\t*\n")
        assert main(["check", str(path)]) == 1
        assert "FAILED" in capsys.readouterr().out

    def test_tolerance_flag_does_not_relax_check(self, tmp_path):
        path = tmp_path / "blank.gfa"
        path.write_bytes(b"S\t1\tACGT\n\n")
        assert main(["check", "--tolerance", "ignore", str(path)]) == 1

    def test_stats_honours_tolerance(self, tmp_path):
        path = tmp_path / "bad.gfa"
        path.write_bytes(b"S\t1\tACGT\nL\t1\t?\t1\t+\t*\n")
        assert main(["stats", str(path)]) == 1
        assert main(["stats", "--tolerance", "ignore", str(path)]) == 0


class TestConvert:

    def test_convert(self, tmp_path, capsys):
        dst = tmp_path / "out.gfa2"
        assert main(["convert", str(DATA / "lil.gfa"), str(dst)]) == 0
        assert "Wrote" in capsys.readouterr().out
        assert GFA2Parser().parse_file(dst).counts()["edges"] == 4

    def test_convert_rejects_gfa2_input(self, tmp_path):
        dst = tmp_path / "out.gfa2"
        assert main(["convert", "--gfa2", str(DATA / "sample.gfa2"), str(dst)]) == 1
        assert not dst.exists()
