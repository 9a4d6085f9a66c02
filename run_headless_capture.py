"""Run the application initialisation in headless mode and capture output.

This script launches a child Python process to run the actual import and
initialisation. Running as a subprocess ensures OS-level stdout/stderr (for
example messages emitted by Qt's C++ layer) are captured instead of leaking
to the console where Python-level redirection doesn't catch them.

Usage:
  python run_headless_capture.py

The child's combined stdout+stderr is echoed once it finishes; the exit code
of the child is propagated.
"""
from __future__ import annotations

import os
import sys
import traceback

# Force Qt to use offscreen platform to avoid GUI requirement for the child
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure repo root is on sys.path for child runs
ROOT = os.path.dirname(os.path.abspath(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


def _run_child_mode() -> int:
    """Run the initialisation in-process (child mode)."""
    # Monkeypatch QApplication.exec_ to avoid blocking the event loop
    try:
        from PyQt5 import QtWidgets

        def _fake_exec(self, *args, **kwargs):
            return 0

        QtWidgets.QApplication.exec_ = _fake_exec  # type: ignore[attr-defined]
    except ImportError:
        # starfield.main reports the missing bindings itself
        pass

    try:
        import starfield.main as m

        print("Imported starfield.main OK")
        try:
            rc = m.main(["--debug", "--seed", "7", "--backend", "raster"])
            print("m.main() returned", rc)
            return int(rc) if isinstance(rc, int) else 0
        except SystemExit as se:
            print("m.main() raised SystemExit:", se)
            try:
                code = int(se.code)  # type: ignore[arg-type]
            except (TypeError, ValueError):
                code = 1
            return code
        except Exception:
            traceback.print_exc()
            return 2
    except Exception:
        traceback.print_exc()
        return 3


def _run_parent_mode() -> int:
    """Launch a child Python process and report its combined output."""
    import subprocess

    env = dict(os.environ)
    env["RUN_AS_CHILD"] = "1"
    env.setdefault("QT_QPA_PLATFORM", "offscreen")

    proc = subprocess.run([sys.executable, __file__], env=env, capture_output=True, text=True)
    combined = proc.stdout + ("\n" + proc.stderr if proc.stderr else "")
    print(combined)
    if proc.returncode != 0:
        print("Child process failed with exit code", proc.returncode, file=sys.stderr)
    else:
        print("Run completed without exception")
    return proc.returncode


if __name__ == "__main__":
    if os.environ.get("RUN_AS_CHILD") == "1":
        sys.exit(_run_child_mode())
    else:
        sys.exit(_run_parent_mode())
