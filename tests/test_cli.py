"""Tests for CLI module."""

import json
import logging

import pytest

from trek.cli import main, parse_arguments, load_track, print_help
from trek.exceptions import InvalidPathError
from trek.logger import logger


def _json_output(capsys):
    """Parse the JSON document printed by main."""
    return json.loads(capsys.readouterr().out)


@pytest.fixture
def track_file(tmp_path, canonical_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps([list(p) for p in canonical_path]))
    return path


class TestPrintHelp:
    """Tests for print_help function."""

    def test_print_help_output(self, capsys):
        """Test that help text is printed."""
        print_help()
        captured = capsys.readouterr()

        assert "Trek Constellations" in captured.out
        assert "USAGE:" in captured.out
        assert "COMMANDS:" in captured.out
        assert "OPTIONS:" in captured.out
        assert "EXAMPLES:" in captured.out
        assert "--tolerance" in captured.out
        assert "--debug" in captured.out


class TestMainCLI:
    """Tests for main CLI function."""

    def test_no_arguments_shows_help(self, capsys):
        """Test that running with no arguments shows help and exits with 1."""
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1
        assert "Trek Constellations" in capsys.readouterr().out

    @pytest.mark.parametrize("flag", ["-h", "--help"])
    def test_help_flags(self, capsys, flag):
        """Test help flags exit successfully."""
        with pytest.raises(SystemExit) as exc_info:
            main([flag])
        assert exc_info.value.code == 0
        assert "USAGE:" in capsys.readouterr().out

    def test_unknown_command(self):
        """Test unknown commands exit with 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(["explode"])
        assert exc_info.value.code == 1

    def test_debug_flag_enables_debug_mode(self, track_file):
        """Test that --debug switches the package logger to DEBUG."""
        main(["encode", str(track_file), "--debug"])
        assert logger.level == logging.DEBUG

    def test_missing_file_exits(self, tmp_path):
        """Test unreadable files are reported and exit with 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(["encode", str(tmp_path / "missing.json")])
        assert exc_info.value.code == 1


class TestParseArguments:
    """Tests for parse_arguments function."""

    def test_positionals_and_options(self):
        """Test values are converted by option type."""
        positionals, options = parse_arguments(
            ["run.json", "--tolerance", "0.5", "--svg", "--seed", "3"]
        )
        assert positionals == ["run.json"]
        assert options == {"--tolerance": 0.5, "--svg": True, "--seed": 3}

    def test_missing_value(self, capsys):
        """Test a value option at the end of argv exits."""
        with pytest.raises(SystemExit) as exc_info:
            parse_arguments(["--width"])
        assert exc_info.value.code == 1
        assert "--width requires a value" in capsys.readouterr().out

    def test_invalid_value(self, capsys):
        """Test values that fail conversion exit."""
        with pytest.raises(SystemExit):
            parse_arguments(["--seed", "abc"])
        assert "invalid value for --seed" in capsys.readouterr().out

    def test_unknown_option(self):
        """Test unknown options exit."""
        with pytest.raises(SystemExit) as exc_info:
            parse_arguments(["--frobnicate"])
        assert exc_info.value.code == 1


class TestLoadTrack:
    """Tests for load_track function."""

    def test_list_of_pairs(self, track_file, canonical_path):
        """Test a bare list of pairs."""
        assert load_track(str(track_file)) == canonical_path

    def test_object_with_coordinates(self, tmp_path):
        """Test an object carrying a coordinates list."""
        path = tmp_path / "run.json"
        path.write_text(json.dumps({"name": "x", "coordinates": [[1, 2], [3, 4]]}))
        assert load_track(str(path)) == [(1.0, 2.0), (3.0, 4.0)]

    def test_object_without_coordinates(self, tmp_path):
        """Test objects must carry coordinates."""
        path = tmp_path / "run.json"
        path.write_text(json.dumps({"name": "x"}))
        with pytest.raises(InvalidPathError):
            load_track(str(path))

    def test_invalid_json(self, tmp_path):
        """Test malformed JSON is reported as an invalid path."""
        path = tmp_path / "run.json"
        path.write_text("[[1, 2],")
        with pytest.raises(InvalidPathError):
            load_track(str(path))

    def test_invalid_point(self, tmp_path):
        """Test malformed points are rejected."""
        path = tmp_path / "run.json"
        path.write_text(json.dumps([[1, 2], [3]]))
        with pytest.raises(InvalidPathError):
            load_track(str(path))


class TestCommands:
    """Tests for the individual commands run through main."""

    def test_encode(self, track_file, canonical_polyline, capsys):
        """Test encode prints the polyline string."""
        main(["encode", str(track_file)])
        assert _json_output(capsys) == canonical_polyline

    def test_decode(self, canonical_polyline, canonical_path, capsys):
        """Test decode prints the points."""
        main(["decode", canonical_polyline])
        assert _json_output(capsys) == [list(p) for p in canonical_path]

    def test_decode_invalid(self):
        """Test malformed polylines exit with 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(["decode", "_p~iF~ps|U_ulLnnqC_mqNvxq"])
        assert exc_info.value.code == 1

    def test_decode_requires_argument(self):
        """Test decode needs exactly one polyline."""
        with pytest.raises(SystemExit) as exc_info:
            main(["decode"])
        assert exc_info.value.code == 1

    def test_simplify_default_keeps_points(self, track_file, canonical_path, capsys):
        """Test simplify without tolerance keeps non-collinear points."""
        main(["simplify", str(track_file)])
        assert _json_output(capsys) == [list(p) for p in canonical_path]

    def test_simplify_with_tolerance(self, track_file, capsys):
        """Test a large tolerance keeps only the endpoints."""
        main(["simplify", str(track_file), "--tolerance", "10"])
        assert _json_output(capsys) == [[38.5, -120.2], [43.252, -126.453]]

    def test_project(self, track_file, capsys):
        """Test project reports canvas points within the canvas."""
        main(["project", str(track_file), "--width", "100", "--height", "50"])
        result = _json_output(capsys)
        assert result["width"] == 100
        assert result["height"] == 50
        assert result["original_points"] == 3
        assert result["simplified_points"] == len(result["points"])
        assert "svg_points" not in result
        for x, y in result["points"]:
            assert 0 <= x <= 100
            assert 0 <= y <= 50

    def test_project_rejects_bad_options(self, track_file):
        """Test invalid canvas options exit with 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(["project", str(track_file), "--width", "0", "--tolerance", "-1"])
        assert exc_info.value.code == 1

    def test_project_svg(self, track_file, capsys):
        """Test --svg adds the points attribute and star indices."""
        main(["project", str(track_file), "--svg"])
        result = _json_output(capsys)
        assert len(result["svg_points"].split(" ")) == result["simplified_points"]
        assert result["stars"] == list(range(0, result["simplified_points"], 2))

    def test_share_and_inspect(self, track_file, tmp_path, canonical_polyline, capsys):
        """Test a shared payload can be inspected again."""
        main(["share", str(track_file), "--name", "Morning", "--distance", "5.5"])
        payload = _json_output(capsys)
        assert payload == {
            "coordinates": canonical_polyline,
            "distance": 5.5,
            "name": "Morning",
        }

        payload_file = tmp_path / "payload.json"
        payload_file.write_text(json.dumps(payload))
        main(["inspect", str(payload_file)])
        run = _json_output(capsys)
        assert run["name"] == "Morning"
        assert run["distance"] == 5.5
        assert len(run["coordinates"]) == 3

    def test_share_requires_name_and_distance(self, track_file):
        """Test share without --name exits with 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(["share", str(track_file), "--distance", "3"])
        assert exc_info.value.code == 1

    def test_galaxy_is_reproducible(self, capsys, monkeypatch):
        """Test the same seed yields the same layout."""
        for name in (
            "GALAXY_WIDTH",
            "GALAXY_HEIGHT",
            "GALAXY_PADDING",
            "ITEM_WIDTH",
            "ITEM_HEIGHT",
            "SEED",
        ):
            monkeypatch.delenv(f"TREK_{name}", raising=False)

        main(["galaxy", "4", "--seed", "9"])
        first = _json_output(capsys)
        main(["galaxy", "4", "--seed", "9"])
        second = _json_output(capsys)

        assert first == second
        assert len(first) == 4
        assert set(first[0]) >= {"x", "y", "rotation", "scale", "width", "height"}

    def test_galaxy_invalid_count(self):
        """Test non-integer counts exit with 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(["galaxy", "many"])
        assert exc_info.value.code == 1

    def test_galaxy_bad_environment(self, monkeypatch):
        """Test invalid environment settings exit with 1."""
        monkeypatch.setenv("TREK_GALAXY_WIDTH", "10")
        with pytest.raises(SystemExit) as exc_info:
            main(["galaxy", "2"])
        assert exc_info.value.code == 1
