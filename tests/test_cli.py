"""Tests for the dollarsmith command line interface."""

import json
from pathlib import Path

import pytest

from dollarsmith.cli import main


@pytest.fixture
def note(tmp_path: Path) -> Path:
    path = tmp_path / "note.md"
    path.write_text("Energy \\(E\\) and `\\(code\\)`\n", encoding="utf-8")
    return path


class TestDefaultMode:
    def test_prints_converted_text(self, note: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(note)]) == 0
        captured = capsys.readouterr()
        assert captured.out == "Energy $E$ and `\\(code\\)`\n"
        assert "1 found, 1 converted, 0 skipped" in captured.err

    def test_unchanged_file_still_printed(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "plain.md"
        path.write_text("Nothing here\n", encoding="utf-8")
        assert main([str(path)]) == 0
        assert capsys.readouterr().out == "Nothing here\n"

    def test_does_not_touch_file(self, note: Path) -> None:
        before = note.read_text(encoding="utf-8")
        main([str(note)])
        assert note.read_text(encoding="utf-8") == before


class TestWrite:
    def test_rewrites_in_place(self, note: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--write", str(note)]) == 0
        assert note.read_text(encoding="utf-8") == "Energy $E$ and `\\(code\\)`\n"
        assert capsys.readouterr().out == ""

    def test_strict_reports_issues(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.md"
        source = "Bad \\({math\\)\n"
        path.write_text(source, encoding="utf-8")
        assert main(["--write", "--strict", str(path)]) == 0
        assert path.read_text(encoding="utf-8") == source
        err = capsys.readouterr().err
        assert "1 found, 0 converted, 1 skipped" in err
        assert "unbalanced-braces: Unbalanced braces {} at content offset 0" in err


class TestCheck:
    def test_exit_one_when_changes_pending(self, note: Path) -> None:
        before = note.read_text(encoding="utf-8")
        assert main(["--check", str(note)]) == 1
        assert note.read_text(encoding="utf-8") == before

    def test_exit_zero_when_clean(self, tmp_path: Path) -> None:
        path = tmp_path / "clean.md"
        path.write_text("Already $x$\n", encoding="utf-8")
        assert main(["--check", str(path)]) == 0

    def test_write_and_check_are_exclusive(self, note: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--write", "--check", str(note)])
        assert exc.value.code == 2


class TestJson:
    def test_json_output(self, note: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--json", str(note)]) == 0
        line = capsys.readouterr().out.strip()
        payload = json.loads(line)
        assert payload["path"] == str(note)
        assert payload["result"]["_type"] == "NormalizationResult"
        assert payload["result"]["stats"]["converted"] == 1
        assert payload["result"]["edits"][0]["insert"] == "$E$"

    def test_json_alone_leaves_file(self, note: Path) -> None:
        before = note.read_text(encoding="utf-8")
        assert main(["--json", str(note)]) == 0
        assert note.read_text(encoding="utf-8") == before

    def test_json_with_write_rewrites_file(
        self, note: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["--json", "--write", str(note)]) == 0
        assert note.read_text(encoding="utf-8") == "Energy $E$ and `\\(code\\)`\n"
        payload = json.loads(capsys.readouterr().out.strip())
        assert payload["result"]["stats"]["converted"] == 1

    def test_json_with_check_keeps_exit_code(
        self, note: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        before = note.read_text(encoding="utf-8")
        assert main(["--json", "--check", str(note)]) == 1
        assert note.read_text(encoding="utf-8") == before
        assert json.loads(capsys.readouterr().out.strip())["path"] == str(note)


class TestSpans:
    def test_external_spans(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        doc = tmp_path / "doc.md"
        doc.write_text("\\(a\\) \\(b\\)", encoding="utf-8")
        spans = tmp_path / "spans.json"
        spans.write_text('[{"kind": "inline-code", "start": 0, "end": 5}]', encoding="utf-8")
        assert main(["--spans", str(spans), str(doc)]) == 0
        assert capsys.readouterr().out == "\\(a\\) $b$"

    def test_spans_need_single_path(self, tmp_path: Path, note: Path) -> None:
        spans = tmp_path / "spans.json"
        spans.write_text("[]", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main(["--spans", str(spans), str(note), str(note)])
        assert exc.value.code == 2

    def test_bad_spans_file(
        self, tmp_path: Path, note: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        spans = tmp_path / "spans.json"
        spans.write_text('[{"kind": "table", "start": 0, "end": 1}]', encoding="utf-8")
        assert main(["--spans", str(spans), str(note)]) == 2
        assert "dollarsmith: error:" in capsys.readouterr().err

    def test_span_past_end_protects_rest(
        self, tmp_path: Path, note: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        spans = tmp_path / "spans.json"
        spans.write_text('[{"kind": "image", "start": 0, "end": 500}]', encoding="utf-8")
        code = main(["--spans", str(spans), str(note)])
        assert code == 0
        assert capsys.readouterr().out == note.read_text(encoding="utf-8")


class TestErrors:
    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(tmp_path / "missing.md")]) == 2
        assert "dollarsmith: error:" in capsys.readouterr().err

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert "dollarsmith" in capsys.readouterr().out
