"""
LaTeX Compilation Module

Compiles LaTeX source to PDF bytes with the configured compiler. Every run
happens in a fresh temporary directory which is removed afterwards, whatever
the outcome.
"""

import os
import re
import shutil
import subprocess
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from vitae.contexts.rendering.logger import (
    _log_debug,
    log_compilation_result,
    log_compilation_start,
)
from vitae.utils.pdf_processing import page_count

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")
LATEX_TIMEOUT_S = int(os.getenv("LATEX_TIMEOUT_S", "120"))
KEEP_LATEX_ARTIFACTS = os.getenv("KEEP_LATEX_ARTIFACTS", "false").lower() == "true"


@dataclass
class CompilationResult:
    """
    Result of LaTeX compilation.

    Attributes:
        success: Whether compilation succeeded
        pdf_bytes: Content of the generated PDF (None if failed)
        stdout: Standard output from the compiler
        stderr: Standard error from the compiler
        errors: List of parsed LaTeX errors
        warnings: List of parsed LaTeX warnings
        page_count: Number of pages in generated PDF (None if not available)
    """

    success: bool
    pdf_bytes: Optional[bytes] = field(default=None, repr=False)
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    page_count: Optional[int] = None


def _parse_latex_log(log_content: str) -> tuple[List[str], List[str]]:
    """
    Parse LaTeX log file for errors and warnings.

    Args:
        log_content: Content of the .log file

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []

    # LaTeX error pattern: "! Error message"
    error_pattern = re.compile(r"^! (.+)$", re.MULTILINE)
    for match in error_pattern.finditer(log_content):
        errors.append(match.group(1).strip())

    # -file-line-error style: "./cv.tex:12: Undefined control sequence."
    file_line_pattern = re.compile(r"^\S+\.tex:\d+: (.+)$", re.MULTILINE)
    for match in file_line_pattern.finditer(log_content):
        message = match.group(1).strip()
        if message not in errors:
            errors.append(message)

    warning_patterns = [
        r"LaTeX Warning: (.+)",
        r"Package \w+ Warning: (.+)",
        r"Overfull \\hbox \((.+)\)",
        r"Underfull \\hbox \((.+)\)",
    ]

    for pattern in warning_patterns:
        compiled = re.compile(pattern, re.MULTILINE)
        for match in compiled.finditer(log_content):
            warnings.append(match.group(1).strip())

    return errors, warnings


def compile_latex(
    tex_source: str,
    job_name: str = "cv",
    num_passes: int = 2,
    compiler: Optional[str] = None,
    keep_artifacts_dir: Optional[Path] = None,
    timeout: Optional[int] = None,
) -> CompilationResult:
    """
    Compile LaTeX source to PDF.

    Args:
        tex_source: Complete LaTeX document
        job_name: Base name for the .tex/.log/.pdf files
        num_passes: Number of compiler passes (default: 2 for cross-references)
        compiler: Compiler executable (default: LATEX_COMPILER env)
        keep_artifacts_dir: Copy the .tex, .log and other artifacts here before
            the temporary directory is removed (for debugging)
        timeout: Seconds allowed per pass (default: LATEX_TIMEOUT_S env)

    Returns:
        CompilationResult with success status, PDF bytes and diagnostics.
        Missing compiler and timeouts are reported as failed results.
    """
    compiler = compiler or LATEX_COMPILER
    timeout = timeout or LATEX_TIMEOUT_S

    all_stdout = []
    all_stderr = []
    errors: List[str] = []
    warnings: List[str] = []
    pdf_bytes = None
    success = True
    start_time = time.time()

    with tempfile.TemporaryDirectory(prefix="vitae_latex_") as tmp:
        compile_dir = Path(tmp)
        tex_file = compile_dir / f"{job_name}.tex"
        tex_file.write_text(tex_source, encoding="utf-8")
        log_compilation_start(job_name, num_passes, compile_dir)

        # First pass lays out, second resolves references and page totals
        for _ in range(num_passes):
            cmd = [
                compiler,
                "-interaction=nonstopmode",
                "-halt-on-error",
                "-file-line-error",
                tex_file.name,
            ]

            try:
                result = subprocess.run(
                    cmd,
                    cwd=compile_dir,
                    capture_output=True,
                    text=True,
                    encoding="utf-8",
                    errors="replace",  # Replace invalid UTF-8 bytes instead of crashing
                    timeout=timeout,
                )
            except FileNotFoundError:
                success = False
                errors.append(f"LaTeX compiler not found: {compiler}")
                break
            except subprocess.TimeoutExpired:
                success = False
                errors.append(f"LaTeX compilation timed out after {timeout}s")
                break

            all_stdout.append(result.stdout)
            all_stderr.append(result.stderr)

            if result.returncode != 0:
                success = False
                break

        log_file = compile_dir / f"{job_name}.log"
        if log_file.exists():
            # Compiler logs are latin-1 (font metadata contains non-UTF-8 bytes)
            log_errors, warnings = _parse_latex_log(log_file.read_text(encoding="latin-1"))
            errors.extend(e for e in log_errors if e not in errors)

        pdf_path = compile_dir / f"{job_name}.pdf"
        if success and pdf_path.exists():
            pdf_bytes = pdf_path.read_bytes()
        else:
            success = False
            if not errors:
                errors.append("PDF file was not generated")

        if keep_artifacts_dir is not None:
            keep_artifacts_dir.mkdir(parents=True, exist_ok=True)
            shutil.copytree(compile_dir, keep_artifacts_dir, dirs_exist_ok=True)
            _log_debug(f"Kept LaTeX artifacts in {keep_artifacts_dir}")

    compilation = CompilationResult(
        success=success,
        pdf_bytes=pdf_bytes,
        stdout="\n".join(all_stdout),
        stderr="\n".join(all_stderr),
        errors=errors,
        warnings=warnings,
        page_count=page_count(pdf_bytes) if pdf_bytes else None,
    )
    log_compilation_result(job_name, compilation, time.time() - start_time)
    return compilation
