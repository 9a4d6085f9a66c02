# -*- coding: utf-8 -*-
import argparse
import io
import os
import sys
from pathlib import Path
from typing import List, NoReturn, Optional


def _handle_qt_import_error(exc: ImportError) -> NoReturn:
    """Exit with a helpful message when the Qt bindings cannot be imported."""

    details = str(exc)
    message_lines = [
        "Impossible de lancer Starfield : l'import de PyQt5 a échoué.",
        "Vérifiez que PyQt5 est installé et que les bibliothèques OpenGL requises sont disponibles.",
    ]
    if "libGL.so.1" in details:
        message_lines.append(
            "Indice : la bibliothèque système libGL.so.1 est manquante. Installez les paquets Mesa/OpenGL appropriés."
        )
    message_lines.append(f"Erreur d'origine : {details}")
    raise SystemExit("\n".join(message_lines)) from exc


try:
    from PyQt5 import QtCore, QtWidgets, QtGui
    from PyQt5.QtCore import Qt
    from PyQt5.QtGui import QSurfaceFormat
except ImportError as exc:  # pragma: no cover - dépendances environnementales
    _handle_qt_import_error(exc)

# --- autorise l'exécution directe ---
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from starfield.control.control_window import ControlWindow
from starfield.view import CANVAS_OBJECT_NAME, attach_starfield

DEBUG_MARKER = "[Starfield][DEBUG]"


class _DebugSilencer(io.TextIOBase):
    """Line filter dropping engine diagnostics from a text stream.

    Text is held back until a newline completes the line, so a diagnostic
    printed in several chunks is still recognised.
    """

    def __init__(self, stream, marker: str) -> None:
        super().__init__()
        self._stream = stream
        self._marker = marker
        self._partial = ""

    def write(self, text: str) -> int:  # type: ignore[override]
        lines = (self._partial + text).splitlines(keepends=True)
        self._partial = lines.pop() if lines and not lines[-1].endswith("\n") else ""
        for line in lines:
            self._forward(line)
        return len(text)

    def flush(self) -> None:  # type: ignore[override]
        tail, self._partial = self._partial, ""
        if tail:
            self._forward(tail)
        self._stream.flush()

    def _forward(self, line: str) -> None:
        if self._marker not in line:
            self._stream.write(line)

    def fileno(self) -> int:  # type: ignore[override]
        return self._stream.fileno()

    def isatty(self) -> bool:  # type: ignore[override]
        return self._stream.isatty()

    def __getattr__(self, name):
        return getattr(self._stream, name)


def _install_debug_silencer(marker: str = DEBUG_MARKER) -> None:
    if marker and not isinstance(sys.stdout, _DebugSilencer):
        sys.stdout = _DebugSilencer(sys.stdout, marker)
    if marker and not isinstance(sys.stderr, _DebugSilencer):
        sys.stderr = _DebugSilencer(sys.stderr, marker)


def _debug_requested(flag: bool) -> bool:
    if flag:
        return True
    return os.environ.get("STARFIELD_DEBUG", "").strip().lower() in {"1", "true", "yes"}


class ViewWindow(QtWidgets.QMainWindow):
    """Frameless window whose central widget is the starfield canvas."""

    def __init__(self, screen: QtGui.QScreen, *, seed: Optional[int] = None, backend: Optional[str] = None):
        super().__init__(None)
        self.setWindowFlags(Qt.FramelessWindowHint | Qt.Window)
        self._target_screen = screen
        self._transparent: Optional[bool] = None

        canvas = QtWidgets.QWidget()
        canvas.setObjectName(CANVAS_OBJECT_NAME)
        canvas.setAttribute(Qt.WA_NoSystemBackground, True)
        canvas.setAutoFillBackground(False)
        self.setCentralWidget(canvas)
        self.view = attach_starfield(self, CANVAS_OBJECT_NAME, force_backend=backend, seed=seed)

        self._apply_screen_geometry(screen)
        QtWidgets.QShortcut(Qt.Key_Escape, self, activated=self.close)

    def _apply_screen_geometry(self, screen: QtGui.QScreen):
        if window_handle := self.windowHandle():
            window_handle.setScreen(screen)
        geometry = screen.geometry()
        width = int(geometry.width() * 0.8)
        height = int(geometry.height() * 0.8)
        left = geometry.left() + (geometry.width() - width) // 2
        top = geometry.top() + (geometry.height() - height) // 2
        self.setGeometry(left, top, width, height)

    def set_transparent(self, enabled: bool):
        enabled = bool(enabled)
        if self._transparent == enabled:
            return
        self._transparent = enabled
        bg_style = "background: transparent;" if enabled else ""
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setAttribute(Qt.WA_NoSystemBackground, enabled)
        self.setAttribute(Qt.WA_TranslucentBackground, enabled)
        self.setStyleSheet(bg_style)
        central = self.centralWidget()
        if central is not None:
            central.setAutoFillBackground(not enabled)
            central.setAttribute(Qt.WA_TranslucentBackground, enabled)
        if self.view is not None:
            self.view.set_transparent(enabled)
        self.update()


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Animated starfield backdrop.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the particle generator.")
    parser.add_argument(
        "--fps",
        type=float,
        default=None,
        help="Target frame rate (default: 60, i.e. a 16 ms frame interval).",
    )
    parser.add_argument(
        "--backend",
        choices=("opengl", "raster"),
        default=None,
        help="Force a rendering backend (default: OpenGL when available).",
    )
    parser.add_argument("--opaque", action="store_true", help="Paint a black background instead of a transparent one.")
    parser.add_argument("--controls", action="store_true", help="Open the control window next to the view.")
    parser.add_argument("--debug", action="store_true", help="Print engine diagnostics.")
    return parser.parse_args(argv)


def build_params(args: argparse.Namespace) -> dict:
    system: dict = {"transparent": not args.opaque}
    if args.fps:
        system["frameIntervalMs"] = max(1, int(round(1000.0 / max(args.fps, 1e-3))))
    return {"system": system}


def main(argv: Optional[List[str]] = None, headless: bool = False) -> int:
    """Start the application and return the exit code.

    With ``headless`` the arguments are parsed and validated but no Qt
    object is created.
    """

    args = parse_args(sys.argv[1:] if argv is None else argv)
    if not _debug_requested(args.debug):
        _install_debug_silencer()
    if headless:
        return 0

    fmt = QSurfaceFormat()
    fmt.setAlphaBufferSize(8)
    QSurfaceFormat.setDefaultFormat(fmt)
    QtWidgets.QApplication.setAttribute(QtCore.Qt.AA_EnableHighDpiScaling, True)
    QtWidgets.QApplication.setAttribute(QtCore.Qt.AA_UseHighDpiPixmaps, True)
    app = QtWidgets.QApplication(sys.argv[:1])
    screen = QtGui.QGuiApplication.primaryScreen()

    view_win = ViewWindow(screen, seed=args.seed, backend=args.backend)
    params = build_params(args)
    if view_win.view is not None:
        view_win.view.set_params(params)
    view_win.set_transparent(params["system"]["transparent"])
    view_win.show()

    if args.controls:
        control_win = ControlWindow(screen, view_win)
        control_win.sync_from(params)
        control_win.show()
        view_win._control_window = control_win  # keep a reference alive

    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
