# -*- coding: utf-8 -*-
"""
Password Generator (PyQt5)

Key features
- Length field validated against [4, 20] with an inline error message.
- One checkbox per character class (lowercase, uppercase, digits, symbols).
- Generate / Copy / Reset actions, plus a live strength preview.
- Window geometry persisted via QSettings. Generated passwords are never stored.

All decisions live in FormSession (password_form) and the core (password_core);
this module only renders state and forwards user input.
"""

from __future__ import annotations

import logging
import sys
from typing import Dict, Optional

from PyQt5 import QtCore, QtGui, QtWidgets

from password_core import CHARACTER_CLASSES, GenerationError, GenerationErrorKind, ValidationError
from password_form import FormSession

# -------------------------
# Application Constants
# -------------------------

APP_ORG = "PasswordTools"
APP_NAME = "PasswordGenerator"
APP_TITLE = "Password Generator"

STATUS_TIMEOUT_MS = 5000

# Entropy (bits) that fills the strength bar.
STRENGTH_BAR_MAX_BITS = 130

logger = logging.getLogger(__name__)


class MainWindow(QtWidgets.QMainWindow):
    """
    Single-screen password form.

    - Policy panel (length + character classes)
    - Output panel (password, actions, strength preview)
    """

    def __init__(
        self,
        session: Optional[FormSession] = None,
        settings: Optional[QtCore.QSettings] = None,
    ) -> None:
        super().__init__()

        self.session = session if session is not None else FormSession()
        self.settings = settings if settings is not None else QtCore.QSettings(APP_ORG, APP_NAME)

        self.setWindowTitle(APP_TITLE)
        self.setMinimumSize(640, 360)

        self._apply_global_styles()
        self._build_ui()
        self._load_settings()
        self.refresh()

    # ---------- UI CONSTRUCTION ----------

    def _build_ui(self) -> None:
        central = QtWidgets.QWidget(self)
        self.setCentralWidget(central)

        layout = QtWidgets.QHBoxLayout(central)
        self._build_menu_bar()

        layout.addWidget(self._build_policy_panel(), stretch=2)
        layout.addWidget(self._build_output_panel(), stretch=3)

        self.status_bar = self.statusBar()
        self.status_bar.showMessage("Ready.")

    def _build_policy_panel(self) -> QtWidgets.QGroupBox:
        group = QtWidgets.QGroupBox("Password Policy")
        layout = QtWidgets.QVBoxLayout(group)

        length_label = QtWidgets.QLabel("Password Length")
        self.length_edit = QtWidgets.QLineEdit()
        self.length_edit.setPlaceholderText("Ex. 8")
        self.length_edit.setInputMethodHints(QtCore.Qt.ImhDigitsOnly)

        self.length_error_label = QtWidgets.QLabel("")
        self.length_error_label.setObjectName("errorText")
        self.length_error_label.setVisible(False)

        layout.addWidget(length_label)
        layout.addWidget(self.length_edit)
        layout.addWidget(self.length_error_label)

        self.class_checkboxes: Dict[str, QtWidgets.QCheckBox] = {}
        for cc in CHARACTER_CLASSES:
            cb = QtWidgets.QCheckBox(cc.label)
            cb.toggled.connect(lambda checked, name=cc.name: self.on_class_toggled(name, checked))
            self.class_checkboxes[cc.name] = cb
            layout.addWidget(cb)

        self.strength_label = QtWidgets.QLabel("")
        self.strength_label.setWordWrap(True)
        layout.addWidget(self.strength_label)

        layout.addStretch(1)

        self.length_edit.textChanged.connect(self.on_length_changed)
        self.length_edit.returnPressed.connect(self.on_generate_clicked)

        return group

    def _build_output_panel(self) -> QtWidgets.QGroupBox:
        group = QtWidgets.QGroupBox("Result")
        layout = QtWidgets.QVBoxLayout(group)

        mono_font = QtGui.QFont("Consolas")
        mono_font.setStyleHint(QtGui.QFont.TypeWriter)

        self.password_edit = QtWidgets.QLineEdit()
        self.password_edit.setReadOnly(True)
        self.password_edit.setFont(mono_font)
        self.password_edit.setPlaceholderText("Click “Generate” to create a password.")
        layout.addWidget(self.password_edit)

        btn_row = QtWidgets.QHBoxLayout()
        self.generate_btn = QtWidgets.QPushButton("Generate")
        self.copy_btn = QtWidgets.QPushButton("Copy")
        self.reset_btn = QtWidgets.QPushButton("Reset")
        self.reset_btn.setObjectName("resetButton")
        btn_row.addWidget(self.generate_btn)
        btn_row.addWidget(self.copy_btn)
        btn_row.addWidget(self.reset_btn)
        layout.addLayout(btn_row)

        self.strength_bar = QtWidgets.QProgressBar()
        self.strength_bar.setRange(0, STRENGTH_BAR_MAX_BITS)
        self.strength_bar.setFormat("Strength")
        self.strength_bar.setTextVisible(True)
        layout.addWidget(self.strength_bar)

        layout.addStretch(1)

        self.generate_btn.clicked.connect(self.on_generate_clicked)
        self.copy_btn.clicked.connect(self.on_copy_clicked)
        self.reset_btn.clicked.connect(self.on_reset_clicked)

        return group

    def _build_menu_bar(self) -> None:
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")
        exit_action = QtWidgets.QAction("E&xit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        help_menu = menubar.addMenu("&Help")
        about_action = QtWidgets.QAction("&About", self)
        about_action.triggered.connect(self.show_about_dialog)
        help_menu.addAction(about_action)

    # ---------- STYLES ----------

    def _apply_global_styles(self) -> None:
        self.setStyleSheet(
            """
            QMainWindow { background-color: #f5f6fa; }

            QGroupBox {
                font-weight: 600;
                border: 1px solid #d2dae2;
                border-radius: 8px;
                margin-top: 10px;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                left: 8px;
                padding: 0 4px;
                color: #3c40c6;
            }

            QLabel#errorText { color: #ff0d10; }

            QLineEdit {
                border-radius: 4px;
                padding: 4px;
                border: 1px solid #16213e;
            }

            QPushButton {
                background-color: #5da3fa;
                color: #ffffff;
                border-radius: 6px;
                padding: 6px 12px;
            }
            QPushButton:disabled { background-color: #a4b0be; }
            QPushButton#resetButton { background-color: #8395a7; }

            QProgressBar {
                border: 1px solid #d2dae2;
                border-radius: 4px;
                text-align: center;
            }
            """
        )

    # ---------- SETTINGS ----------

    def _load_settings(self) -> None:
        geometry = self.settings.value("geometry", b"")
        if geometry:
            self.restoreGeometry(geometry)

    def _save_settings(self) -> None:
        self.settings.setValue("geometry", self.saveGeometry())

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        self._save_settings()
        super().closeEvent(event)

    # ---------- RENDERING ----------

    def refresh(self) -> None:
        """Re-render every widget from the session state."""
        session = self.session

        if self.length_edit.text() != session.raw_length:
            self.length_edit.blockSignals(True)
            self.length_edit.setText(session.raw_length)
            self.length_edit.blockSignals(False)

        show_error = session.touched and session.error is not None
        self.length_error_label.setText(session.error or "")
        self.length_error_label.setVisible(show_error)

        for name, cb in self.class_checkboxes.items():
            cb.blockSignals(True)
            cb.setChecked(session.is_enabled(name))
            cb.blockSignals(False)

        self.password_edit.setText(session.password)
        # An untouched form stays submittable so the first click reports a missing length.
        self.generate_btn.setEnabled(not session.touched or session.can_submit)
        self.copy_btn.setEnabled(session.has_password)

        estimate = session.strength()
        if estimate is None:
            self.strength_label.setText("Enter a valid length to preview strength.")
            self.strength_bar.setValue(0)
        elif estimate.alphabet_size == 0:
            self.strength_label.setText("No characters selected.")
            self.strength_bar.setValue(0)
        else:
            self.strength_label.setText(
                f"Alphabet size: {estimate.alphabet_size} | "
                f"Estimated entropy: {estimate.entropy_bits:.2f} bits ({estimate.label})"
            )
            self.strength_bar.setValue(int(min(estimate.entropy_bits, float(STRENGTH_BAR_MAX_BITS))))

    # ---------- ACTIONS ----------

    def on_length_changed(self, text: str) -> None:
        self.session.set_raw_length(text)
        self.refresh()

    def on_class_toggled(self, name: str, checked: bool) -> None:
        self.session.set_class(name, checked)
        self.refresh()

    def on_generate_clicked(self) -> None:
        result = self.session.submit()
        self.refresh()

        if isinstance(result, ValidationError):
            self.status_bar.showMessage(result.message, STATUS_TIMEOUT_MS)
            return

        if isinstance(result, GenerationError):
            logger.debug("Generation failed: %s", result.kind.value)
            if result.kind is GenerationErrorKind.EMPTY_ALPHABET:
                QtWidgets.QMessageBox.warning(self, "No characters selected", result.message)
            else:
                QtWidgets.QMessageBox.critical(self, "Generation error", result.message)
            return

        self.status_bar.showMessage("Password generated.", STATUS_TIMEOUT_MS)

    def on_copy_clicked(self) -> None:
        pwd = self.session.password
        if not pwd:
            self.status_bar.showMessage("No password to copy.", STATUS_TIMEOUT_MS)
            return

        QtWidgets.QApplication.clipboard().setText(pwd)
        self.status_bar.showMessage("Password copied to clipboard.", STATUS_TIMEOUT_MS)

    def on_reset_clicked(self) -> None:
        self.session.reset()
        self.refresh()
        self.status_bar.showMessage("Form reset.", STATUS_TIMEOUT_MS)

    def show_about_dialog(self) -> None:
        QtWidgets.QMessageBox.information(
            self,
            f"About {APP_TITLE}",
            (
                f"{APP_TITLE}\n\n"
                f"Pick a length between {self.session.min_length} and {self.session.max_length} "
                "and at least one character class,\n"
                "then press Generate. Nothing you generate is saved."
            ),
        )


# =========================
#          ENTRY
# =========================

def main() -> None:
    # High-DPI friendliness (must be set before app creation)
    try:
        QtWidgets.QApplication.setAttribute(QtCore.Qt.AA_EnableHighDpiScaling, True)
        QtWidgets.QApplication.setAttribute(QtCore.Qt.AA_UseHighDpiPixmaps, True)
    except Exception:
        pass

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    app = QtWidgets.QApplication(sys.argv)
    app.setOrganizationName(APP_ORG)
    app.setApplicationName(APP_NAME)

    window = MainWindow()
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
