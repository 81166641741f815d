import sys
from pathlib import Path
from typing import Callable, Dict, Optional

from PyQt5 import QtWidgets

from .cipher import RotationCipher, rot13
from .config import ToolConfig, load_config
from .cracker import crack
from .history import log_event

OPERATIONS = ["encrypt", "decrypt", "rot13", "crack"]


def apply_operation(op: str, text: str, shift: int, wrap: bool = False) -> str:
    """Run one window operation; raises ValueError/InvalidShift on bad input."""
    if op == "rot13":
        return rot13(text)
    if op == "crack":
        return "\n".join(
            f"shift {r.shift:2d} (score {r.score:.2f}): {r.plaintext}" for r in crack(text, top=5)
        )
    cipher = RotationCipher.normalized(shift) if wrap else RotationCipher(shift)
    mapping: Dict[str, Callable[[str], str]] = {
        "encrypt": cipher.encrypt,
        "decrypt": cipher.decrypt,
    }
    if op not in mapping:
        raise ValueError(f"Unsupported operation: {op}")
    return mapping[op](text)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, config: Optional[ToolConfig] = None) -> None:
        super().__init__()
        self.setWindowTitle("Caesar Tools")
        self.resize(720, 480)
        self.config = config or load_config()
        self.setCentralWidget(self._build_main_widget())

    def _build_main_widget(self) -> QtWidgets.QWidget:
        widget = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(widget)

        self.input_edit = QtWidgets.QTextEdit()
        self.input_edit.setPlaceholderText("Plaintext or ciphertext")
        self.output_edit = QtWidgets.QTextEdit()
        self.output_edit.setReadOnly(True)

        self.op_combo = QtWidgets.QComboBox()
        self.op_combo.addItems(OPERATIONS)

        self.shift_spin = QtWidgets.QSpinBox()
        self.wrap_check = QtWidgets.QCheckBox("Wrap shift mod 26")
        self.wrap_check.setChecked(self.config.wrap)
        self.wrap_check.toggled.connect(self._update_shift_range)
        self._update_shift_range(self.config.wrap)
        self.shift_spin.setValue(self.config.shift)

        run_btn = QtWidgets.QPushButton("Run")
        run_btn.clicked.connect(self._run_op)
        load_btn = QtWidgets.QPushButton("Open file")
        load_btn.clicked.connect(self._load_file_into_input)
        save_btn = QtWidgets.QPushButton("Save output")
        save_btn.clicked.connect(self._save_output)

        op_layout = QtWidgets.QHBoxLayout()
        op_layout.addWidget(QtWidgets.QLabel("Operation:"))
        op_layout.addWidget(self.op_combo, 1)
        op_layout.addWidget(QtWidgets.QLabel("Shift:"))
        op_layout.addWidget(self.shift_spin)
        op_layout.addWidget(self.wrap_check)
        op_layout.addWidget(run_btn)
        op_layout.addWidget(load_btn)
        op_layout.addWidget(save_btn)

        layout.addLayout(op_layout)
        layout.addWidget(QtWidgets.QLabel("Input"))
        layout.addWidget(self.input_edit, 1)
        layout.addWidget(QtWidgets.QLabel("Output"))
        layout.addWidget(self.output_edit, 1)
        return widget

    def _update_shift_range(self, wrap: bool) -> None:
        if wrap:
            self.shift_spin.setRange(-255, 255)
        else:
            self.shift_spin.setRange(0, 25)

    def _run_op(self) -> None:
        op = self.op_combo.currentText()
        text = self.input_edit.toPlainText()
        try:
            output = apply_operation(op, text, self.shift_spin.value(), self.wrap_check.isChecked())
        except ValueError as exc:
            QtWidgets.QMessageBox.warning(self, "Input error", str(exc))
            return
        self.output_edit.setPlainText(output)
        if self.config.history:
            log_event(
                action=op,
                payload={"shift": self.shift_spin.value(), "input_size": len(text.encode("utf-8")), "source": "gui"},
                path=Path(self.config.history_path),
            )

    def _load_file_into_input(self) -> None:
        path, _ = QtWidgets.QFileDialog.getOpenFileName(self, "Open file")
        if not path:
            return
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            QtWidgets.QMessageBox.warning(self, "Read error", str(exc))
            return
        self.input_edit.setPlainText(data.decode("utf-8", errors="replace"))

    def _save_output(self) -> None:
        path, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Save output")
        if not path:
            return
        try:
            Path(path).write_text(self.output_edit.toPlainText(), encoding="utf-8")
        except OSError as exc:
            QtWidgets.QMessageBox.warning(self, "Write error", str(exc))


def run_gui() -> None:
    app = QtWidgets.QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    run_gui()
