"""Unit tests for LaTeX compilation with a stubbed compiler process."""

import subprocess
from pathlib import Path

import pytest

from vitae.contexts.rendering import compiler
from vitae.contexts.rendering.compiler import _parse_latex_log, compile_latex

FAKE_PDF = b"%PDF-1.4\n% stub\n"


class FakeLatex:
    """Stands in for subprocess.run, writing the files a compiler would."""

    def __init__(self, returncode=0, write_pdf=True, log="This is pdfTeX\n"):
        self.returncode = returncode
        self.write_pdf = write_pdf
        self.log = log
        self.calls = []

    def __call__(self, cmd, cwd, **kwargs):
        self.calls.append((cmd, Path(cwd)))
        job = Path(cmd[-1]).stem
        (Path(cwd) / f"{job}.log").write_text(self.log, encoding="latin-1")
        if self.write_pdf:
            (Path(cwd) / f"{job}.pdf").write_bytes(FAKE_PDF)
        return subprocess.CompletedProcess(cmd, self.returncode, stdout="ok", stderr="")


@pytest.mark.unit
def test_compile_success_returns_pdf_bytes(monkeypatch):
    fake = FakeLatex()
    monkeypatch.setattr(compiler.subprocess, "run", fake)

    result = compile_latex("\\documentclass{article}", num_passes=2, compiler="pdflatex")

    assert result.success
    assert result.pdf_bytes == FAKE_PDF
    assert len(fake.calls) == 2
    assert fake.calls[0][0][0] == "pdflatex"
    assert fake.calls[0][0][-1] == "cv.tex"


@pytest.mark.unit
def test_temporary_directory_removed_on_success_and_failure(monkeypatch):
    for fake in (FakeLatex(), FakeLatex(returncode=1, write_pdf=False, log="! Emergency stop.\n")):
        monkeypatch.setattr(compiler.subprocess, "run", fake)
        compile_latex("x", num_passes=1)
        assert not fake.calls[0][1].exists()


@pytest.mark.unit
def test_compile_failure_reports_log_errors(monkeypatch):
    log = "./cv.tex:5: Undefined control sequence.\n! Undefined control sequence.\nLaTeX Warning: Reference undefined.\n"
    fake = FakeLatex(returncode=1, write_pdf=False, log=log)
    monkeypatch.setattr(compiler.subprocess, "run", fake)

    result = compile_latex("x", num_passes=2)

    assert not result.success
    assert result.pdf_bytes is None
    assert result.errors == ["Undefined control sequence."]
    assert result.warnings == ["Reference undefined."]
    assert len(fake.calls) == 1


@pytest.mark.unit
def test_missing_pdf_is_failure(monkeypatch):
    monkeypatch.setattr(compiler.subprocess, "run", FakeLatex(write_pdf=False))

    result = compile_latex("x", num_passes=1)

    assert not result.success
    assert result.errors == ["PDF file was not generated"]


@pytest.mark.unit
def test_missing_compiler_binary():
    result = compile_latex("x", num_passes=1, compiler="definitely-not-a-latex-binary")

    assert not result.success
    assert result.errors == ["LaTeX compiler not found: definitely-not-a-latex-binary"]


@pytest.mark.unit
def test_timeout_is_reported(monkeypatch):
    def hang(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(compiler.subprocess, "run", hang)

    result = compile_latex("x", num_passes=1, timeout=3)

    assert not result.success
    assert result.errors == ["LaTeX compilation timed out after 3s"]


@pytest.mark.unit
def test_keep_artifacts_copies_sources(monkeypatch, tmp_path):
    monkeypatch.setattr(compiler.subprocess, "run", FakeLatex())

    compile_latex("\\documentclass{article}", num_passes=1, keep_artifacts_dir=tmp_path / "kept")

    kept = {p.name for p in (tmp_path / "kept").iterdir()}
    assert {"cv.tex", "cv.log", "cv.pdf"} <= kept


@pytest.mark.unit
def test_parse_latex_log_warnings():
    errors, warnings = _parse_latex_log("Overfull \\hbox (3.2pt too wide) in paragraph\n")
    assert errors == []
    assert warnings == ["3.2pt too wide"]
