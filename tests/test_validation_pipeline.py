from __future__ import annotations

from pathlib import Path

import pytest

from conftest import TEI, TEI_DOCUMENT, svrl_report
from core.params import SchemaConfig
from managers.file_manager import FileManager
from validators import tool_runner
from validators.location_resolver import DocumentCache, load_positioned_document
from validators.validation_pipeline import ValidationPipeline, validate_schematron

BODY = f"/{TEI}TEI[1]/{TEI}text[1]/{TEI}body[1]"


def assertion_xml(text, role="", location=BODY):
    role_attr = f' role="{role}"' if role else ""
    return f"""
  <svrl:fired-rule context="tei:body"{role_attr}/>
  <svrl:failed-assert test="false()" location="{location}">
    <svrl:text>{text}</svrl:text>
  </svrl:failed-assert>"""


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "tei").mkdir()
    files = []
    for name in ["a.xml", "b.xml"]:
        path = tmp_path / "tei" / name
        path.write_text(TEI_DOCUMENT, encoding="utf-8")
        files.append(str(path))
    return tmp_path, files


@pytest.fixture
def fake_tools(monkeypatch, tmp_path):
    """Replace jing and SchXslt with canned output."""
    calls = {"jing": [], "schxslt": []}
    outputs = {"jing": "", "svrl": {}}

    def run_jing(rng_file, files, command="jing"):
        calls["jing"].append((rng_file, list(files)))
        return outputs["jing"]

    def run_schxslt(input_file, schema, jar="schxslt-cli.jar", java="java", report_dir=None):
        calls["schxslt"].append(input_file)
        report = tmp_path / f"{Path(input_file).stem}.svrl.xml"
        report.write_text(svrl_report(input_file, outputs["svrl"].get(input_file, "")), encoding="utf-8")
        return str(report)

    monkeypatch.setattr(tool_runner, "run_jing", run_jing)
    monkeypatch.setattr(tool_runner, "run_schxslt", run_schxslt)
    return calls, outputs


def dracor(tmp_path):
    return SchemaConfig("DraCor Schema 1.0.0", tmp_path / "dracor.rng", tmp_path / "dracor.sch")


def test_relaxng_only_schema_skips_schematron(workspace, fake_tools) -> None:
    tmp_path, files = workspace
    calls, outputs = fake_tools
    outputs["jing"] = f"{files[0]}:5:5: error: element \"body\" incomplete\n"
    pipeline = ValidationPipeline(SchemaConfig("TEI-All", tmp_path / "tei.rng"), file_manager=FileManager({}))

    result = pipeline.validate_files(files)

    assert calls["jing"] == [(str(tmp_path / "tei.rng"), files)]
    assert calls["schxslt"] == []
    assert [(i.file, i.line, i.column) for i in result.issues] == [("tei/a.xml", 5, 5)]
    assert result.has_errors()
    assert not result.is_valid()
    assert result.is_valid(warn_only=True)


def test_issues_ordered_jing_then_schematron_per_file(workspace, fake_tools) -> None:
    tmp_path, files = workspace
    calls, outputs = fake_tools
    outputs["jing"] = (
        f"{files[1]}:2:1: warning: rng b\n"
        "status line\n"
        f"{files[0]}:3:3: error: rng a\n"
    )
    outputs["svrl"] = {
        files[0]: assertion_xml("sch a1") + assertion_xml("info", role="information"),
        files[1]: assertion_xml("sch b", role="warning") + assertion_xml(
            "lost", location=f"/{TEI}TEI[1]/{TEI}front[1]"
        ),
    }
    pipeline = ValidationPipeline(dracor(tmp_path), file_manager=FileManager({}))

    result = pipeline.validate_files(files)

    assert calls["schxslt"] == files
    assert [i.message for i in result.issues] == ["rng b", "rng a", "sch a1", "sch b", "lost"]
    assert [(i.file, i.line, i.column) for i in result.issues[2:]] == [
        ("tei/a.xml", 5, 5),
        ("tei/b.xml", 5, 5),
        ("tei/b.xml", 0, 0),
    ]
    stats = result.statistics
    assert (stats.total_files, stats.files_with_issues, stats.total_issues) == (2, 2, 5)
    assert (stats.unique_issues, stats.num_errors, stats.num_warnings) == (5, 3, 2)


def test_documents_parsed_once_per_run(workspace, fake_tools) -> None:
    tmp_path, files = workspace
    _, outputs = fake_tools
    outputs["svrl"] = {f: assertion_xml("x") + assertion_xml("y") for f in files}
    loaded = []

    def counting_loader(path):
        loaded.append(path)
        return load_positioned_document(path)

    pipeline = ValidationPipeline(dracor(tmp_path), cache=DocumentCache(counting_loader))
    result = pipeline.validate_files(files)

    assert len(result.issues) == 4
    assert loaded == files


def test_malformed_document_fails_only_that_file(workspace, fake_tools, capsys) -> None:
    tmp_path, files = workspace
    _, outputs = fake_tools
    Path(files[0]).write_text("<TEI><text></TEI>", encoding="utf-8")
    outputs["svrl"] = {f: assertion_xml(f"issue in {Path(f).name}") for f in files}
    pipeline = ValidationPipeline(dracor(tmp_path), file_manager=FileManager({}))

    result = pipeline.validate_files(files)

    assert list(result.failures) == [files[0]]
    assert [i.message for i in result.issues] == ["issue in b.xml"]
    assert result.has_errors()
    assert "ERROR" in capsys.readouterr().err


def test_unparsable_report_yields_no_issues(workspace, fake_tools, monkeypatch) -> None:
    tmp_path, files = workspace

    def broken_report(input_file, schema, jar="schxslt-cli.jar", java="java", report_dir=None):
        return str(tmp_path / "does-not-exist.xml")

    monkeypatch.setattr(tool_runner, "run_schxslt", broken_report)
    pipeline = ValidationPipeline(dracor(tmp_path))

    result = pipeline.validate_files(files)

    assert result.issues == []
    assert result.failures == {}
    assert result.is_valid()


def test_no_files(fake_tools, tmp_path) -> None:
    calls, _ = fake_tools
    pipeline = ValidationPipeline(dracor(tmp_path))

    result = pipeline.validate_files([])

    assert calls["jing"] == []
    assert result.statistics.total_files == 0


def test_missing_tool_aborts_run(workspace, monkeypatch) -> None:
    tmp_path, files = workspace

    def missing(*args, **kwargs):
        raise tool_runner.ToolNotFoundError("jing not found")

    monkeypatch.setattr(tool_runner, "run_jing", missing)
    pipeline = ValidationPipeline(dracor(tmp_path))

    with pytest.raises(tool_runner.ValidationRunError):
        pipeline.validate_files(files)


def test_latin1_document_does_not_stop_later_files(workspace, fake_tools) -> None:
    tmp_path, files = workspace
    _, outputs = fake_tools
    Path(files[0]).write_bytes(
        TEI_DOCUMENT.replace('encoding="UTF-8"', 'encoding="ISO-8859-1"')
        .replace("Hello", "caf\xe9")
        .encode("latin-1")
    )
    outputs["svrl"] = {f: assertion_xml(f"issue in {Path(f).name}") for f in files}
    pipeline = ValidationPipeline(dracor(tmp_path), file_manager=FileManager({}))

    result = pipeline.validate_files(files)

    assert result.failures == {}
    assert [(i.message, i.line, i.column) for i in result.issues] == [
        ("issue in a.xml", 5, 5),
        ("issue in b.xml", 5, 5),
    ]


def test_unreadable_document_fails_only_that_file(workspace, fake_tools) -> None:
    tmp_path, files = workspace
    _, outputs = fake_tools
    outputs["svrl"] = {f: assertion_xml(f"issue in {Path(f).name}") for f in files}

    def loader(path):
        if path == files[0]:
            raise ValueError("cannot decode document")
        return load_positioned_document(path)

    pipeline = ValidationPipeline(dracor(tmp_path), cache=DocumentCache(loader))

    result = pipeline.validate_files(files)

    assert list(result.failures) == [files[0]]
    assert "cannot decode document" in result.failures[files[0]]
    assert [i.message for i in result.issues] == ["issue in b.xml"]


def test_report_directory_is_removed(workspace, monkeypatch) -> None:
    tmp_path, files = workspace
    report_dirs = []

    def run_schxslt(input_file, schema, jar="schxslt-cli.jar", java="java", report_dir=None):
        report_dirs.append(report_dir)
        report = Path(report_dir) / "svrl.xml"
        report.write_text(svrl_report(input_file, assertion_xml("x")), encoding="utf-8")
        return str(report)

    monkeypatch.setattr(tool_runner, "run_schxslt", run_schxslt)

    assertions = validate_schematron(files[0], "rules.sch")

    assert [a.text for a in assertions] == ["x"]
    assert not Path(report_dirs[0]).exists()
