"""Run engine scripts in a separate Python interpreter."""

from __future__ import annotations

import asyncio
import importlib.util
import logging
import os
import subprocess
import sys
import tempfile
from collections.abc import Sequence
from pathlib import Path

from docbench.errors import BackendUnavailable, ConversionFailed

logger = logging.getLogger(__name__)

# Engine scripts exit with this status when their engine cannot be imported.
ENGINE_MISSING_EXIT_CODE = 3
STDERR_TAIL_CHARS = 2000


def is_current_interpreter(python_executable: Path) -> bool:
    """Return whether ``python_executable`` is the running interpreter."""
    try:
        return python_executable.resolve() == Path(sys.executable).resolve()
    except OSError:
        return False


def module_available(module: str, python_executable: Path) -> bool:
    """Check whether ``module`` can be imported by ``python_executable``.

    Never raises: any failure while checking counts as unavailable.
    """
    try:
        if is_current_interpreter(python_executable):
            return importlib.util.find_spec(module) is not None
        completed = subprocess.run(
            [str(python_executable), "-c", f"import {module}"],
            capture_output=True,
            timeout=60,
            check=False,
        )
        return completed.returncode == 0
    except Exception:
        return False


def _write_script(source: str, prefix: str) -> Path:
    handle, name = tempfile.mkstemp(prefix=prefix, suffix=".py")
    with os.fdopen(handle, "w", encoding="utf-8") as script:
        script.write(source)
    return Path(name)


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink()
    except OSError:
        pass


def _tail(stderr: bytes) -> str:
    text = stderr.decode("utf-8", errors="replace").strip()
    return text[-STDERR_TAIL_CHARS:]


async def run_python_script(
    source: str,
    args: Sequence[str],
    *,
    python_executable: Path,
    timeout_seconds: float,
    engine: str,
) -> str:
    """Execute ``source`` as a temporary script and return its stdout.

    The script file exists only for the duration of the call and is removed
    on success and on failure alike.

    Parameters
    ----------
    source : str
        Python source of the engine script.
    args : Sequence[str]
        Command-line arguments passed to the script.
    python_executable : Path
        Interpreter used to run the script.
    timeout_seconds : float
        Wall-clock limit for the subprocess.
    engine : str
        Engine name used in messages and the temp file prefix.

    Returns
    -------
    str
        Decoded standard output of the script.

    Raises
    ------
    BackendUnavailable
        If the interpreter is missing or the script reports a missing engine.
    ConversionFailed
        If the script exits with an error or exceeds the timeout.
    """
    script_path = _write_script(source, prefix=f"docbench_{engine}_")
    env = {**os.environ, "PYTHONIOENCODING": "utf-8"}
    try:
        try:
            process = await asyncio.create_subprocess_exec(
                str(python_executable),
                str(script_path),
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
            )
        except OSError as exc:
            raise BackendUnavailable(
                f"Cannot start Python interpreter '{python_executable}': {exc}"
            ) from exc

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=timeout_seconds
            )
        except TimeoutError as exc:
            process.kill()
            await process.wait()
            raise ConversionFailed(
                f"{engine} did not finish within {timeout_seconds:g} seconds."
            ) from exc
    finally:
        _remove_quietly(script_path)

    if stderr:
        logger.debug("%s stderr: %s", engine, _tail(stderr))
    if process.returncode == ENGINE_MISSING_EXIT_CODE:
        raise BackendUnavailable(
            f"{engine} is not installed for {python_executable}. "
            f"{_tail(stderr)}".strip()
        )
    if process.returncode != 0:
        raise ConversionFailed(
            f"{engine} exited with status {process.returncode}: {_tail(stderr)}"
        )
    return stdout.decode("utf-8", errors="replace")
