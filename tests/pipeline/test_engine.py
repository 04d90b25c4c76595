# topmark:header:start
#
#   project      : EmbedFmt
#   file         : test_engine.py
#   file_relpath : tests/pipeline/test_engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""End-to-end tests for the document engine."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

import pytest

from embedfmt.core.exit_codes import ExitCode
from embedfmt.formatters.base import CallableFormatter
from embedfmt.pipeline.engine import format_files, process_text, select_pipeline
from embedfmt.pipeline.pipelines import Pipeline
from embedfmt.pipeline.status import DocumentState, FailureKind, FileOutcome
from tests.conftest import mark_integration, mark_pipeline, parametrize
from tests.helpers import failing_on, make_config, run, tidy_formatter

if TYPE_CHECKING:
    from pathlib import Path

    from embedfmt.pipeline.model import Document

MESSY = "<div>\n  <script>\nlet x=1;\n  </script>\n</div>\n"
TIDY = "<div>\n  <script>\n    let x = 1;\n  </script>\n</div>\n"


def _write(path: Path, text: str) -> Path:
    path.write_bytes(text.encode("utf-8"))
    return path


@mark_pipeline
@parametrize(
    "name, expected",
    [
        ("index.html", Pipeline.EMBEDDED),
        ("INDEX.HTM", Pipeline.EMBEDDED),
        ("app.js", Pipeline.WHOLE_FILE),
        ("lib.mjs", Pipeline.WHOLE_FILE),
    ],
)
def test_select_pipeline(tmp_path: Path, name: str, expected: Pipeline) -> None:
    assert select_pipeline(tmp_path / name) is expected


@mark_integration
def test_markup_file_is_reformatted_in_place(tmp_path: Path) -> None:
    page = _write(tmp_path / "page.html", MESSY)

    outcomes, err = format_files([page], config=make_config(), formatter=tidy_formatter())

    (outcome,) = outcomes
    assert err is None
    assert outcome.outcome == FileOutcome.REFORMATTED
    assert outcome.state == DocumentState.DONE
    assert outcome.block_count == 1
    assert page.read_text(encoding="utf-8") == TIDY


@mark_integration
def test_formatted_file_is_unchanged(tmp_path: Path) -> None:
    page = _write(tmp_path / "page.html", TIDY)
    before = page.stat().st_mtime_ns

    outcomes, err = format_files([page], config=make_config(), formatter=tidy_formatter())

    assert err is None
    assert outcomes[0].outcome == FileOutcome.UNCHANGED
    assert any(d.message == "already formatted" for d in outcomes[0].diagnostics)
    assert page.stat().st_mtime_ns == before


@mark_integration
def test_one_failing_block_leaves_the_file_untouched(tmp_path: Path) -> None:
    text = "<script>\nok=1;\n</script>\n<script>\nBAD=2;\n</script>\n"
    page = _write(tmp_path / "page.html", text)

    outcomes, err = format_files([page], config=make_config(), formatter=failing_on("BAD"))

    (outcome,) = outcomes
    assert outcome.outcome == FileOutcome.FAILED
    assert outcome.failure == FailureKind.FORMATTER
    assert outcome.updated_text is None
    assert err == ExitCode.FORMATTER_ERROR
    assert page.read_text(encoding="utf-8") == text


@mark_integration
def test_documents_of_a_batch_fail_independently(tmp_path: Path) -> None:
    bad = _write(tmp_path / "a.html", "<script>BAD()</script>")
    good = _write(tmp_path / "b.html", MESSY)

    outcomes, err = format_files([bad, good], config=make_config(), formatter=failing_on("BAD"))

    assert [o.outcome for o in outcomes] == [FileOutcome.FAILED, FileOutcome.REFORMATTED]
    assert [o.path for o in outcomes] == [bad, good]
    assert err == ExitCode.FORMATTER_ERROR
    assert good.read_text(encoding="utf-8") == TIDY


@mark_integration
def test_unexpected_exception_fails_only_its_document(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    from embedfmt.pipeline.reassembler import reassemble
    from embedfmt.pipeline.steps import reassemble as reassemble_step

    def _explode_on_marker(document: Document) -> str:
        if "BOOM" in document.text:
            raise KeyError("BOOM")
        return reassemble(document)

    monkeypatch.setattr(reassemble_step, "reassemble", _explode_on_marker)
    boom = _write(tmp_path / "a.html", "<script>\nBOOM=1;\n</script>\n")
    good = _write(tmp_path / "b.html", MESSY)

    outcomes, err = format_files([boom, good], config=make_config(), formatter=tidy_formatter())

    assert [o.outcome for o in outcomes] == [FileOutcome.FAILED, FileOutcome.REFORMATTED]
    assert outcomes[0].failure == FailureKind.INTERNAL
    assert isinstance(outcomes[0].error, KeyError)
    assert err == ExitCode.PIPELINE_ERROR
    assert boom.read_text(encoding="utf-8") == "<script>\nBOOM=1;\n</script>\n"
    assert good.read_text(encoding="utf-8") == TIDY


@mark_integration
def test_file_io_runs_in_worker_threads(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    from embedfmt.pipeline.steps import reader, writer

    threads: list[int] = []
    read_document_text = reader.read_document_text
    filesystem_write = writer.FileSystemSink.write

    def _recording_read(path: Path) -> str:
        threads.append(threading.get_ident())
        return read_document_text(path)

    def _recording_write(self: writer.FileSystemSink, *, ctx: Any) -> writer.WriteResult:
        threads.append(threading.get_ident())
        return filesystem_write(self, ctx=ctx)

    monkeypatch.setattr(reader, "read_document_text", _recording_read)
    monkeypatch.setattr(writer.FileSystemSink, "write", _recording_write)
    page = _write(tmp_path / "page.html", MESSY)

    outcomes, err = format_files([page], config=make_config(), formatter=tidy_formatter())

    assert err is None
    assert outcomes[0].outcome == FileOutcome.REFORMATTED
    assert len(threads) == 2
    assert threading.get_ident() not in threads
    assert page.read_text(encoding="utf-8") == TIDY


@mark_integration
def test_deeply_nested_markup_is_processed(tmp_path: Path) -> None:
    deep = _write(tmp_path / "deep.html", "<div>" * 3000 + "<script>y=2;</script>")
    good = _write(tmp_path / "good.html", MESSY)

    outcomes, err = format_files([good, deep], config=make_config(), formatter=tidy_formatter())

    assert err is None
    assert [o.outcome for o in outcomes] == [FileOutcome.REFORMATTED, FileOutcome.REFORMATTED]
    assert deep.read_text(encoding="utf-8").startswith("<div>" * 3000 + "<script>\n")
    assert "y = 2;" in deep.read_text(encoding="utf-8")


@mark_integration
def test_unterminated_script_is_a_parse_failure(tmp_path: Path) -> None:
    page = _write(tmp_path / "page.html", "<p>ok</p>\n<script>\nfoo(\n")

    outcomes, err = format_files([page], config=make_config(), formatter=tidy_formatter())

    assert outcomes[0].failure == FailureKind.PARSE
    assert err == ExitCode.DATA_ERROR


@mark_integration
def test_untokenizable_formatter_output_is_a_tokenize_failure(tmp_path: Path) -> None:
    page = _write(tmp_path / "page.html", "<script>x</script>")
    broken = CallableFormatter(lambda text, language: "const s = `open", name="broken")

    outcomes, err = format_files([page], config=make_config(), formatter=broken)

    assert outcomes[0].failure == FailureKind.TOKENIZE
    assert err == ExitCode.DATA_ERROR
    assert page.read_text(encoding="utf-8") == "<script>x</script>"


@mark_integration
def test_missing_file_is_reported(tmp_path: Path) -> None:
    outcomes, err = format_files(
        [tmp_path / "nope.html"], config=make_config(), formatter=tidy_formatter()
    )

    assert outcomes[0].failure == FailureKind.IO
    assert outcomes[0].exit_code == ExitCode.FILE_NOT_FOUND
    assert err == ExitCode.FILE_NOT_FOUND


@mark_integration
def test_check_mode_reports_without_writing(tmp_path: Path) -> None:
    page = _write(tmp_path / "page.html", MESSY)

    outcomes, err = format_files(
        [page], config=make_config(apply_changes=False), formatter=tidy_formatter(), check=True
    )

    assert outcomes[0].outcome == FileOutcome.WOULD_REFORMAT
    assert outcomes[0].updated_text == TIDY
    assert err == ExitCode.WOULD_CHANGE
    assert page.read_text(encoding="utf-8") == MESSY
    assert "+    let x = 1;" in outcomes[0].diff()


@mark_integration
def test_standalone_script_is_formatted_whole(tmp_path: Path) -> None:
    script = _write(tmp_path / "app.js", "let a=1;\nlet b=2;\n")

    outcomes, err = format_files([script], config=make_config(), formatter=tidy_formatter())

    assert err is None
    assert outcomes[0].outcome == FileOutcome.REFORMATTED
    assert script.read_text(encoding="utf-8") == "let a = 1;\nlet b = 2;"


@mark_integration
def test_crlf_newlines_are_preserved(tmp_path: Path) -> None:
    page = _write(tmp_path / "page.html", MESSY.replace("\n", "\r\n"))

    format_files([page], config=make_config(), formatter=tidy_formatter())

    assert page.read_bytes() == TIDY.replace("\n", "\r\n").encode("utf-8")


@mark_pipeline
def test_in_memory_text_is_never_written() -> None:
    outcome = run(process_text(MESSY, config=make_config(), formatter=tidy_formatter()))

    assert outcome.path is None
    assert outcome.outcome == FileOutcome.WOULD_REFORMAT
    assert outcome.updated_text == TIDY
