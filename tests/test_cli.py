"""
Tests for the command-line interface.
"""

import json

import pytest

from lightpath.cli import EXAMPLE_CITY, main


@pytest.fixture
def city_file(tmp_path):
    f = tmp_path / "city.txt"
    f.write_text(EXAMPLE_CITY)
    return f


class TestCli:
    """Tests for lightpath.cli.main."""

    def test_example(self, capsys):
        assert main(["--example"]) == 0
        assert capsys.readouterr().out == EXAMPLE_CITY

    def test_route_by_name(self, city_file, capsys):
        assert main(["--city", str(city_file), "--source", "A", "--target", "C"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["distance"] == 20
        assert out["path"] == [0, 1, 2]

    def test_route_by_id_with_start_time(self, city_file, capsys):
        argv = ["--city", str(city_file), "--source", "0", "--target", "1", "--start-time", "5"]
        assert main(argv) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["distance"] == 15
        assert out["start_time"] == 5

    def test_numeric_names_resolve_before_ids(self, tmp_path, capsys):
        f = tmp_path / "numbered.txt"
        f.write_text("2\n1 0 1 0\n0 0 1 0\n1\n0 1 4\n")
        assert main(["--city", str(f), "--source", "1", "--target", "0"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["source"] == 0
        assert out["path"] == [0, 1]
        assert out["distance"] == 4

    def test_summary_and_listing(self, city_file, capsys):
        argv = ["--city", str(city_file), "--source", "A", "--target", "C", "--summary", "--show"]
        assert main(argv) == 0
        out = capsys.readouterr().out
        assert "0 (A) -> [1,10]" in out
        assert "Shortest Time from A to C = 20 units" in out
        assert "A -> B -> C" in out

    def test_exports(self, city_file, tmp_path, capsys):
        dot = tmp_path / "city.dot"
        html = tmp_path / "map.html"
        route = tmp_path / "route.json"
        metrics = tmp_path / "metrics.json"
        saved = tmp_path / "saved.json"
        argv = [
            "--city", str(city_file),
            "--source", "A",
            "--target", "C",
            "--export-dot", str(dot),
            "--export-html", str(html),
            "--export-json", str(route),
            "--metrics-out", str(metrics),
            "--save", str(saved),
        ]
        assert main(argv) == 0
        assert "color=\"red\"" in dot.read_text()
        assert "var sp = [0, 1, 2];" in html.read_text()
        assert json.loads(route.read_text())["path"] == ["A", "B", "C"]
        assert json.loads(metrics.read_text())["state"] == "found"
        assert len(json.loads(saved.read_text())["junctions"]) == 3

    def test_no_path(self, tmp_path, capsys):
        f = tmp_path / "split.txt"
        f.write_text("2\nA 1 1 1\nB 1 1 1\n0\n")
        assert main(["--city", str(f), "--source", "0", "--target", "1", "--summary"]) == 0
        captured = capsys.readouterr().out
        assert "No path found from A to B" in captured
        assert json.loads(captured.splitlines()[-1])["path"] is None

    def test_random_with_plot(self, tmp_path, capsys):
        png = tmp_path / "route.png"
        argv = ["--random", "--n", "9", "--seed", "2", "--source", "0", "--target", "8", "--plot", str(png)]
        assert main(argv) == 0
        assert png.exists()

    def test_invalid_index(self, city_file, capsys):
        assert main(["--city", str(city_file), "--source", "0", "--target", "9"]) == 64
        assert "error:" in capsys.readouterr().err

    def test_unknown_name(self, city_file, capsys):
        assert main(["--city", str(city_file), "--source", "A", "--target", "Nowhere"]) == 64

    def test_source_without_target(self, city_file, capsys):
        assert main(["--city", str(city_file), "--source", "A"]) == 64

    def test_missing_file(self, tmp_path, capsys):
        assert main(["--city", str(tmp_path / "nope.txt")]) == 64

    def test_log_json(self, city_file, capsys):
        assert main(["--city", str(city_file), "--source", "A", "--target", "C", "--log-json"]) == 0
        events = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert events[-1]["event"] == "solve"
