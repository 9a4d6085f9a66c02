"""Qt widgets hosting the starfield.

The simulation lives in :class:`~starfield.scheduler.FrameScheduler`; this
module only wires it to Qt:

* a ``QTimer`` drives one frame per refresh and never stops, even while the
  window is hidden (the scheduler then just absorbs the elapsed time);
* resize, screen and visibility changes are forwarded to the scheduler;
* mouse and touch positions feed the pointer tracker;
* each frame is painted into a ``QImage`` backing store at device-pixel
  resolution and blitted on ``paintEvent``.

:func:`StarfieldViewWidget` picks an OpenGL or raster backend, and
:func:`attach_starfield` installs the view inside a placeholder widget found
by object name.
"""

from __future__ import annotations

import os
import sys
from typing import Callable, Mapping, Optional

from PyQt5 import QtCore, QtGui, QtWidgets

from ..control.config import DEFAULTS
from ..scheduler import FrameScheduler, StarfieldContext
from ..renderer import paint_frame

__all__ = ["CANVAS_OBJECT_NAME", "StarfieldViewWidget", "attach_starfield"]

CANVAS_OBJECT_NAME = DEFAULTS["system"]["canvasName"]
MAX_FRAME_INTERVAL_MS = 1000


# ---------------------------------------------------------------------------
# OpenGL helpers


def _create_opengl_functions():
    """Return ``(functions, error)`` for the current GL context."""

    factory = getattr(QtGui, "QOpenGLFunctions", None)
    if factory is None:
        return None, AttributeError("PyQt5.QtGui has no attribute 'QOpenGLFunctions'")
    try:
        functions = factory()
    except Exception as exc:  # pragma: no cover - depends on bindings
        return None, exc
    try:
        functions.initializeOpenGLFunctions()
    except Exception as exc:  # pragma: no cover - depends on runtime GL state
        return None, exc
    return functions, None


class _ViewWidgetBase:
    """Common behaviour shared by both the OpenGL and raster backends."""

    def _init_view_widget(
        self,
        scheduler: Optional[FrameScheduler] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.setAttribute(QtCore.Qt.WA_NoSystemBackground, True)
        self.setAttribute(QtCore.Qt.WA_TranslucentBackground, True)
        self.setAttribute(QtCore.Qt.WA_OpaquePaintEvent, False)
        self.setAttribute(QtCore.Qt.WA_AcceptTouchEvents, True)
        self.setAutoFillBackground(False)
        self.setMouseTracking(True)
        self._gl: Optional[object] = None
        self._elapsed = QtCore.QElapsedTimer()
        self._elapsed.start()
        self.engine = scheduler or FrameScheduler(StarfieldContext.seeded(seed), clock=self._clock_ms)
        self._backing: Optional[QtGui.QImage] = None
        self._transparent = bool(self.engine.setting("system", "transparent"))
        self._watched_window: Optional[QtGui.QWindow] = None
        self._timer = QtCore.QTimer(self)
        self._timer.setTimerType(QtCore.Qt.PreciseTimer)
        self._frame_interval_ms = 16
        self._timer.timeout.connect(self.advance_frame)
        self._timer.start(self._frame_interval_ms)
        self._sync_surface()

    def _clock_ms(self) -> float:
        return float(self._elapsed.nsecsElapsed()) / 1e6

    def _apply_frame_interval(self, interval_ms: float) -> None:
        """Update the refresh interval used by the frame timer (never stops it)."""

        interval_ms = int(min(max(interval_ms, 1), MAX_FRAME_INTERVAL_MS))
        if interval_ms == self._frame_interval_ms and self._timer.isActive():
            return
        self._frame_interval_ms = interval_ms
        if self._timer.isActive():
            self._timer.setInterval(interval_ms)
        else:
            self._timer.start(interval_ms)

    @property
    def frame_interval_ms(self) -> int:
        return self._frame_interval_ms

    # ------------------------------------------------------------------ surface
    def _sync_surface(self) -> None:
        ratio = self.devicePixelRatioF() if hasattr(self, "devicePixelRatioF") else 1.0
        self.engine.resize(self.width(), self.height(), ratio)
        self._backing = self.engine.surface.allocate_backing(self._backing)

    def _watch_window(self) -> None:
        handle = self.window().windowHandle() if self.window() is not None else None
        if handle is None or handle is self._watched_window:
            return
        self._watched_window = handle
        handle.visibilityChanged.connect(self._on_window_visibility)
        handle.screenChanged.connect(lambda _screen: self._sync_surface())

    def _on_window_visibility(self, visibility: QtGui.QWindow.Visibility) -> None:
        hidden = visibility in (QtGui.QWindow.Hidden, QtGui.QWindow.Minimized)
        self.engine.set_visible(not hidden and self.isVisible())

    # ------------------------------------------------------------------ API
    def set_params(self, payload: Mapping[str, object]) -> None:
        self.engine.set_params(payload)
        transparent = bool(self.engine.setting("system", "transparent"))
        self._apply_frame_interval(self.engine.setting("system", "frameIntervalMs"))
        if transparent != self._transparent:
            self.set_transparent(transparent)

    def set_transparent(self, enabled: bool) -> None:  # pragma: no cover - simple setter
        self._transparent = bool(enabled)
        self.setAttribute(QtCore.Qt.WA_NoSystemBackground, enabled)
        self.setAttribute(QtCore.Qt.WA_TranslucentBackground, enabled)
        self.setAutoFillBackground(not enabled)
        self._apply_clear_color()
        self.update()

    def set_visible(self, visible: bool) -> None:
        """External visibility signal (e.g. the host page becoming hidden)."""

        self.engine.set_visible(visible)

    def advance_frame(self) -> None:
        items = self.engine.tick()
        if items is None or self._backing is None:
            return
        painter = QtGui.QPainter(self._backing)
        try:
            paint_frame(
                painter,
                self.engine.surface,
                items,
                transparent=self._transparent,
                trail_alpha=self.engine.setting("appearance", "trailAlpha"),
            )
        finally:
            painter.end()
        self.update()

    def backing_image(self) -> Optional[QtGui.QImage]:
        return self._backing

    # ------------------------------------------------------------------ OpenGL hooks
    def _apply_clear_color(self) -> None:
        if self._gl is None:
            return
        alpha = 0.0 if self._transparent else 1.0
        self._gl.glClearColor(0.0, 0.0, 0.0, alpha)

    # ------------------------------------------------------------------ rendering
    def _blit(self, painter: QtGui.QPainter) -> None:
        painter.setCompositionMode(QtGui.QPainter.CompositionMode_Source)
        painter.fillRect(self.rect(), QtCore.Qt.transparent if self._transparent else QtGui.QColor("black"))
        painter.setCompositionMode(QtGui.QPainter.CompositionMode_SourceOver)
        if self._backing is None or self._backing.isNull():
            return
        painter.setRenderHint(QtGui.QPainter.SmoothPixmapTransform, True)
        painter.drawImage(self.engine.surface.rect(), self._backing)

    # ------------------------------------------------------------------ events
    def _handle_view_event(self, event: QtCore.QEvent) -> bool:
        if getattr(self, "engine", None) is None:
            return False
        kind = event.type()
        if kind in (QtCore.QEvent.TouchBegin, QtCore.QEvent.TouchUpdate):
            points = event.touchPoints()
            if points:
                pos = points[0].pos()
                self.engine.pointer.move(pos.x(), pos.y())
            event.accept()
            return True
        if kind in (QtCore.QEvent.TouchEnd, QtCore.QEvent.TouchCancel):
            self.engine.pointer.leave()
            event.accept()
            return True
        if kind == QtCore.QEvent.MouseMove:
            pos = event.localPos()
            self.engine.pointer.move(pos.x(), pos.y())
        elif kind == QtCore.QEvent.Leave:
            self.engine.pointer.leave()
        elif kind == QtCore.QEvent.Show:
            self._watch_window()
            self.engine.set_visible(True)
        elif kind == QtCore.QEvent.Hide:
            self.engine.set_visible(False)
        elif kind == QtCore.QEvent.Resize:
            self._sync_surface()
        return False


class _OpenGLViewWidget(QtWidgets.QOpenGLWidget, _ViewWidgetBase):
    """OpenGL-backed renderer when the system can create a GL context."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None, **kwargs) -> None:
        QtWidgets.QOpenGLWidget.__init__(self, parent)
        self._init_view_widget(**kwargs)

    def initializeGL(self) -> None:  # pragma: no cover - requires GUI context
        self._gl, error = _create_opengl_functions()
        if error is not None:  # pragma: no cover - depends on bindings/runtime
            print(
                f"[Starfield][WARN] OpenGL initialisation failed: {error}. Falling back to raster clear handling.",
                file=sys.stderr,
            )
        self._apply_clear_color()

    def resizeGL(self, width: int, height: int) -> None:  # pragma: no cover - requires GUI context
        del width, height

    def paintGL(self) -> None:  # pragma: no cover - requires GUI context
        if self._gl is not None:
            try:
                # GL_COLOR_BUFFER_BIT
                self._gl.glClear(0x00004000)
            except Exception:
                pass
        painter = QtGui.QPainter(self)
        try:
            self._blit(painter)
        finally:
            painter.end()

    def event(self, event: QtCore.QEvent) -> bool:  # type: ignore[override]
        if self._handle_view_event(event):
            return True
        return super().event(event)


class _RasterViewWidget(QtWidgets.QWidget, _ViewWidgetBase):
    """Fallback renderer using the traditional raster ``QWidget`` backend."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None, **kwargs) -> None:
        QtWidgets.QWidget.__init__(self, parent)
        self._init_view_widget(**kwargs)

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # type: ignore[override]
        del event
        painter = QtGui.QPainter(self)
        try:
            self._blit(painter)
        finally:
            painter.end()

    def event(self, event: QtCore.QEvent) -> bool:  # type: ignore[override]
        if self._handle_view_event(event):
            return True
        return super().event(event)


def _should_use_opengl(force_backend: Optional[str]) -> bool:
    if force_backend == "raster":
        return False
    if force_backend == "opengl":
        return True

    env_backend = os.environ.get("STARFIELD_FORCE_BACKEND", "").strip().lower()
    if env_backend == "raster":
        return False
    if env_backend == "opengl":
        return True

    if os.environ.get("STARFIELD_FORCE_RASTER", "").strip().lower() in {"1", "true", "yes"}:
        return False
    if os.environ.get("STARFIELD_FORCE_OPENGL", "").strip().lower() in {"1", "true", "yes"}:
        return True
    return hasattr(QtWidgets, "QOpenGLWidget")


def StarfieldViewWidget(
    parent: Optional[QtWidgets.QWidget] = None,
    *,
    force_backend: Optional[str] = None,
    scheduler: Optional[FrameScheduler] = None,
    seed: Optional[int] = None,
) -> QtWidgets.QWidget:
    """Factory returning the best available starfield widget.

    Parameters
    ----------
    parent:
        Parent widget used by Qt for ownership.
    force_backend:
        ``"opengl"`` forces the OpenGL widget while ``"raster"`` selects the
        pure QWidget implementation.
    scheduler:
        Pre-built scheduler (tests inject one with a fake clock).
    seed:
        Seed for the particle generator when no scheduler is given.
    """

    kwargs = dict(scheduler=scheduler, seed=seed)
    if _should_use_opengl(force_backend):
        try:
            widget = _OpenGLViewWidget(parent, **kwargs)
            setattr(widget, "backend_name", "opengl")
            setattr(widget, "uses_opengl", True)
            return widget
        except Exception as exc:
            print(
                f"[Starfield][WARN] Unable to initialise OpenGL backend ({exc!r}). Using raster widget instead.",
                file=sys.stderr,
            )
    widget = _RasterViewWidget(parent, **kwargs)
    setattr(widget, "backend_name", "raster")
    setattr(widget, "uses_opengl", False)
    return widget


def attach_starfield(
    root: QtWidgets.QWidget,
    object_name: str = CANVAS_OBJECT_NAME,
    factory: Callable[..., QtWidgets.QWidget] = StarfieldViewWidget,
    **kwargs,
) -> Optional[QtWidgets.QWidget]:
    """Install a starfield view inside the placeholder named ``object_name``.

    Returns ``None`` and leaves ``root`` untouched when no such placeholder
    exists.
    """

    host = root if root.objectName() == object_name else root.findChild(QtWidgets.QWidget, object_name)
    if host is None:
        print(f"[Starfield][DEBUG] no '{object_name}' surface, starfield disabled", flush=True)
        return None
    layout = host.layout()
    if layout is None:
        layout = QtWidgets.QVBoxLayout(host)
        layout.setContentsMargins(0, 0, 0, 0)
    view = factory(host, **kwargs)
    layout.addWidget(view)
    return view
