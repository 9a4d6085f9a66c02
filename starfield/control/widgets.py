from PyQt5 import QtWidgets, QtCore

_ROUND_BUTTON_QSS = (
    "QToolButton{{border:1px solid {edge};border-radius:{r}px;padding:0;"
    "background:#10141f;color:{fg};font-weight:bold;}}"
    "QToolButton:hover{{background:#1b2233;}}"
)


def _round_button(text: str, size: int, fg: str, edge: str) -> QtWidgets.QToolButton:
    b = QtWidgets.QToolButton()
    b.setText(text)
    b.setCursor(QtCore.Qt.PointingHandCursor)
    b.setFixedSize(size, size)
    b.setStyleSheet(_ROUND_BUTTON_QSS.format(edge=edge, r=size // 2, fg=fg))
    return b

def mk_info(text: str) -> QtWidgets.QToolButton:
    b = _round_button("?", 20, "#eaf2ff", "#2575fc")
    b.setToolTip(text); b.setToolTipDuration(0)
    return b

def mk_reset(cb) -> QtWidgets.QToolButton:
    b = _round_button("↺", 22, "#e3b341", "#8a6d2a")
    b.setToolTip("Valeur par défaut")
    b.clicked.connect(lambda _checked=False: cb())
    return b

def row(form: QtWidgets.QFormLayout, label: str, widget: QtWidgets.QWidget, tip: str, reset_cb=None):
    h = QtWidgets.QHBoxLayout(); h.setContentsMargins(0,0,0,0); h.setSpacing(6)
    h.addWidget(widget, 1)
    if reset_cb: h.addWidget(mk_reset(reset_cb), 0)
    h.addWidget(mk_info(tip), 0)
    w = QtWidgets.QWidget(); w.setLayout(h)
    lbl = QtWidgets.QLabel(label)
    lbl.setObjectName("FormLabel")
    form.addRow(lbl, w)
    w._form_label = lbl  # type: ignore[attr-defined]
    widget.setProperty("starfield_form_label", label)
    return w

def double_spin(minimum: float, maximum: float, step: float, value: float, decimals: int = 2) -> QtWidgets.QDoubleSpinBox:
    s = QtWidgets.QDoubleSpinBox(); s.setDecimals(decimals); s.setRange(minimum, maximum)
    s.setSingleStep(step); s.setValue(value)
    return s

def int_spin(minimum: int, maximum: int, value: int) -> QtWidgets.QSpinBox:
    s = QtWidgets.QSpinBox(); s.setRange(minimum, maximum); s.setValue(value)
    return s
