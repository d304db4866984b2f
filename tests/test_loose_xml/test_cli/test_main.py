"""Tests for the CLI main module."""

import json
from pathlib import Path

import pytest

from loose_xml import __version__
from loose_xml.cli.main import (
    FileChecker,
    create_argument_parser,
    find_xml_files,
    format_results,
    load_config,
    main,
)
from loose_xml.shared import LooseXMLConfig, MapStrategy

GOOD = '<Entity name="player">\n    <Item name="sword"/>\n</Entity>\n'
BAD = "<Entity>\n    <Item>\n</Entity>\n"


@pytest.fixture
def good_file(tmp_path: Path) -> Path:
    path = tmp_path / "good.xml"
    path.write_text(GOOD, encoding="utf-8")
    return path


@pytest.fixture
def bad_file(tmp_path: Path) -> Path:
    path = tmp_path / "bad.xml"
    path.write_text(BAD, encoding="utf-8")
    return path


class TestLoadConfig:
    """Test configuration loading."""

    def test_default_when_no_path(self):
        assert load_config(None) == LooseXMLConfig.default()

    def test_load_from_file(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"parser": {"map_strategy": "hashed"}}), encoding="utf-8")

        config = load_config(path)

        assert config.parser.map_strategy is MapStrategy.HASHED


class TestFindXmlFiles:
    """Test expanding path arguments."""

    def test_file_is_returned_as_is(self, good_file: Path):
        assert list(find_xml_files(good_file)) == [good_file]

    def test_directory_filters_by_suffix(self, tmp_path: Path, good_file: Path):
        (tmp_path / "notes.txt").write_text("x", encoding="utf-8")

        assert list(find_xml_files(tmp_path)) == [good_file]

    def test_recursive(self, tmp_path: Path, good_file: Path):
        nested = tmp_path / "sub" / "deep.XML"
        nested.parent.mkdir()
        nested.write_text(GOOD, encoding="utf-8")

        assert list(find_xml_files(tmp_path)) == [good_file]
        assert set(find_xml_files(tmp_path, recursive=True)) == {good_file, nested}


class TestFileChecker:
    """Test checking individual files."""

    def test_clean_file(self, good_file: Path):
        result = FileChecker(LooseXMLConfig()).check_file(good_file)

        assert result["success"] is True
        assert result["root"] == "Entity"
        assert result["element_count"] == 2
        assert result["diagnostics"] == []

    def test_broken_file_lenient(self, bad_file: Path):
        result = FileChecker(LooseXMLConfig()).check_file(bad_file)

        assert result["success"] is False
        assert result["root"] == "Entity"
        diagnostic = result["diagnostics"][0]
        assert diagnostic["severity"] == "ERROR"
        assert diagnostic["details"]["kind"] == "MismatchedClosingTag"
        assert diagnostic["position"]["line"] == 3

    def test_broken_file_strict(self, bad_file: Path):
        result = FileChecker(LooseXMLConfig(), strict=True).check_file(bad_file)

        assert result["root"] is None
        assert len(result["diagnostics"]) == 1
        assert result["diagnostics"][0]["severity"] == "CRITICAL"

    def test_unreadable_file(self, tmp_path: Path):
        result = FileChecker(LooseXMLConfig()).check_file(tmp_path / "missing.xml")

        assert result["success"] is False
        assert "error" in result


class TestFormatResults:
    """Test check result rendering."""

    def test_no_results(self):
        assert format_results([], "text") == "No files to check."

    def test_json(self):
        results = [{"file": "a.xml", "success": True}]

        assert json.loads(format_results(results, "json")) == results

    def test_text_limits_diagnostics(self):
        diagnostics = [
            {"message": f"error {i}", "position": {"line": i, "column": 1}}
            for i in range(1, 8)
        ]
        results = [{"file": "a.xml", "success": False, "diagnostics": diagnostics}]

        output = format_results(results, "text")

        assert "Checked 1 files, 0 without errors" in output
        assert "FAIL a.xml" in output
        assert "1:1 error 1" in output
        assert "error 6" not in output
        assert "... and 2 more errors" in output


class TestArgumentParser:
    """Test command line argument parsing."""

    def test_check_arguments(self):
        args = create_argument_parser().parse_args(
            ["check", "a.xml", "b", "--recursive", "--strict", "--format", "json"]
        )

        assert args.command == "check"
        assert args.paths == [Path("a.xml"), Path("b")]
        assert args.recursive is True
        assert args.strict is True
        assert args.format == "json"

    def test_format_arguments(self):
        args = create_argument_parser().parse_args(
            ["format", "a.xml", "--indent", "2", "--no-self-close"]
        )

        assert args.indent == 2
        assert args.no_self_close is True
        assert args.output is None

    def test_version(self, capsys: pytest.CaptureFixture):
        with pytest.raises(SystemExit) as exc_info:
            create_argument_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestMain:
    """Test the main entry point end to end."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture):
        assert main([]) == 1
        assert "usage: loose-xml" in capsys.readouterr().out

    def test_check_clean(self, good_file: Path, capsys: pytest.CaptureFixture):
        assert main(["check", str(good_file)]) == 0

        output = capsys.readouterr().out
        assert "Checked 1 files, 1 without errors" in output
        assert f"ok   {good_file}" in output

    def test_check_broken(self, bad_file: Path, capsys: pytest.CaptureFixture):
        assert main(["check", str(bad_file)]) == 1

        assert "Closing element is in wrong order" in capsys.readouterr().out

    def test_check_json(self, tmp_path: Path, good_file: Path, bad_file: Path,
                        capsys: pytest.CaptureFixture):
        assert main(["check", str(tmp_path), "--format", "json"]) == 1

        results = json.loads(capsys.readouterr().out)
        assert {Path(result["file"]).name: result["success"] for result in results} == {
            "bad.xml": False,
            "good.xml": True,
        }

    def test_check_empty_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture):
        assert main(["check", str(tmp_path)]) == 1
        assert "No files to check." in capsys.readouterr().out

    def test_format_to_stdout(self, tmp_path: Path, capsys: pytest.CaptureFixture):
        path = tmp_path / "messy.xml"
        path.write_text('<A   k="v"><!-- c --><B/>  </A>', encoding="utf-8")

        assert main(["format", str(path)]) == 0

        assert capsys.readouterr().out == '<A k="v">\n    <B/>\n</A>\n'

    def test_format_options(self, tmp_path: Path, capsys: pytest.CaptureFixture):
        path = tmp_path / "a.xml"
        path.write_text("<A><B/></A>", encoding="utf-8")

        assert main([
            "format", str(path), "--indent", "1", "--line-separator", "\\r\\n",
            "--no-self-close",
        ]) == 0

        assert capsys.readouterr().out == "<A>\r\n <B></B>\r\n</A>\r\n"

    def test_format_to_file(self, tmp_path: Path, good_file: Path):
        output = tmp_path / "out.xml"

        assert main(["format", str(good_file), "-o", str(output)]) == 0

        assert output.read_text(encoding="utf-8") == GOOD

    def test_format_reports_errors(self, bad_file: Path, capsys: pytest.CaptureFixture):
        assert main(["format", str(bad_file)]) == 1

        captured = capsys.readouterr()
        assert "Closing element is in wrong order" in captured.err
        assert captured.out.startswith("<Entity>")

    def test_format_invalid_option(self, good_file: Path, capsys: pytest.CaptureFixture):
        assert main(["format", str(good_file), "--indent", "-1"]) == 2

        assert "indent must be >= 0" in capsys.readouterr().err

    def test_tokens(self, tmp_path: Path, capsys: pytest.CaptureFixture):
        path = tmp_path / "a.xml"
        path.write_text("<A/>", encoding="utf-8")

        assert main(["tokens", str(path)]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "1:2\tOPEN\t'<'",
            "1:3\tSTRING\t'A'",
            "1:4\tSLASH\t'/'",
            "1:5\tCLOSE\t'>'",
        ]

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture):
        assert main(["tokens", str(tmp_path / "missing.xml")]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_config_file(self, tmp_path: Path, good_file: Path,
                                 capsys: pytest.CaptureFixture):
        config = tmp_path / "config.json"
        config.write_text('{"format": {"indent": -3}}', encoding="utf-8")

        assert main(["--config", str(config), "check", str(good_file)]) == 2
        assert "Error loading configuration" in capsys.readouterr().err

    def test_config_file_applies(self, tmp_path: Path, capsys: pytest.CaptureFixture):
        config = tmp_path / "config.json"
        config.write_text(json.dumps(LooseXMLConfig.compact().to_dict()), encoding="utf-8")
        path = tmp_path / "a.xml"
        path.write_text("<A>\n  <B/>\n</A>", encoding="utf-8")

        assert main(["-c", str(config), "format", str(path)]) == 0

        assert capsys.readouterr().out == "<A><B/></A>"
