# UI.py
"""PySide6 user interface for the Precision Calculator.

Structure
---------
- Calculator UI: main window with the two-line display, button grid and
  animated background
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons
- Translate button clicks and key presses into state machine commands
- Keep exactly one CalculatorState and redraw from it after every command
- Ripple feedback on buttons, press-and-hold repeat for digits and delete
- Clipboard integration (Ctrl+C / Ctrl+V, Shift + click on the display)

The window never computes anything itself: every input goes through
StateMachine.transition() and every number on screen goes through
MathEngine.format_operand() (via Display.render()).
"""

import logging
import sys

from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt, QPointF, QTimer, QVariantAnimation, Signal
import pyperclip

from . import error as E  # Imports error.py as a module
from . import config_manager as config_manager
from . import Display
from . import KeyBindings
from . import MathEngine
from .Background import AnimatedBackground
from .StateMachine import AddDigit, ChooseOperation, Clear, DeleteDigit, Evaluate, empty_state, transition

logger = logging.getLogger(__name__)

RIPPLE_DURATION = 500  # ms

# Qt keys that have no printable text, by the key name KeyBindings expects
NAMED_KEYS = {
    int(Qt.Key.Key_Return): "Enter",
    int(Qt.Key.Key_Enter): "Enter",
    int(Qt.Key.Key_Backspace): "Backspace",
    int(Qt.Key.Key_Escape): "Escape",
}

DARK_STYLE = """
    QWidget#card {background-color: rgba(18, 18, 30, 215); border-radius: 18px;}
    QLabel {color: white;}
    QLabel#previous {color: rgba(255, 255, 255, 150);}
    QLabel#title, QLabel#hint {color: rgba(150, 180, 255, 170);}
    QPushButton {background-color: rgba(255, 255, 255, 18); color: white; border: none; font-weight: bold;}
    QPushButton:hover {background-color: rgba(255, 255, 255, 35);}
    QPushButton#action {color: #8ab4ff;}
    QPushButton#operation {color: #c58cff;}
    QPushButton#equals {background-color: #3b5bff;}
"""

LIGHT_STYLE = """
    QWidget#card {background-color: rgba(245, 245, 250, 230); border-radius: 18px;}
    QLabel {color: #111111;}
    QLabel#previous {color: #666666;}
    QLabel#title, QLabel#hint {color: #445577;}
    QPushButton {background-color: #ffffff; color: #111111; border: 1px solid #dddddd;}
    QPushButton#action {color: #0050d0;}
    QPushButton#operation {color: #7a2fd0;}
    QPushButton#equals {background-color: #007bff; color: white;}
"""


def qt_key_name(event):
    """Key name for KeyBindings.command_for_key(): "Enter", "Escape", or the typed text."""
    name = NAMED_KEYS.get(int(event.key()))
    if name:
        return name
    return event.text()


def ripple_geometry(x, y, width, height):
    """Return (size, left, top) of a ripple circle centred on the click point."""
    size = max(width, height)
    return size, x - size / 2, y - size / 2


class RippleButton(QtWidgets.QPushButton):
    """QPushButton that draws an expanding circle from where it was pressed."""

    ripple_enabled = True

    def __init__(self, text, parent=None):
        super().__init__(text, parent)
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.ripple_center = QPointF()
        self.ripple_progress = 0.0

        self.animation = QVariantAnimation(self)
        self.animation.setStartValue(0.0)
        self.animation.setEndValue(1.0)
        self.animation.setDuration(RIPPLE_DURATION)
        self.animation.valueChanged.connect(self.handle_ripple_tick)
        self.animation.finished.connect(self.handle_ripple_finished)

    def mousePressEvent(self, event):
        if self.ripple_enabled:
            self.ripple_center = event.position()
            self.animation.stop()
            self.animation.start()
        super().mousePressEvent(event)

    def handle_ripple_tick(self, value):
        self.ripple_progress = value
        self.update()

    def handle_ripple_finished(self):
        self.ripple_progress = 0.0
        self.update()

    def paintEvent(self, event):
        super().paintEvent(event)
        if not self.ripple_progress:
            return

        size, left, top = ripple_geometry(self.ripple_center.x(), self.ripple_center.y(),
                                          self.width(), self.height())
        # Grow from nothing to double size while fading out
        scale = self.ripple_progress * 2
        radius = size / 2 * scale
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QtGui.QColor(255, 255, 255, int(64 * (1.0 - self.ripple_progress))))
        painter.drawEllipse(QPointF(left + size / 2, top + size / 2), radius, radius)
        painter.end()


def shift_held(modifiers):
    """True if Shift is among the keyboard modifiers of an input event."""
    return bool(modifiers & Qt.KeyboardModifier.ShiftModifier)


class ClickableLabel(QtWidgets.QLabel):
    clicked = Signal(bool)  # True when Shift was held during the click

    def mousePressEvent(self, event):
        self.clicked.emit(shift_held(event.modifiers()))
        super().mousePressEvent(event)


class SettingsDialog(QtWidgets.QDialog):
    """

    Settings window. Every setting is either a checkbox (True / False) or an
    input field (whole number). Values are validated by config_manager when
    OK is pressed; invalid input shows an error box and keeps the dialog open.

    """

    settings_saved = Signal()  # Signal to tell the main window to update

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}  # key -> QCheckBox / QLineEdit

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(320, 240)
        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            # --- 3a. Checkbox Builder (for Boolean settings) ---
            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            # --- 3b. Input Field Builder (for Integer settings) ---
            else:
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                low, high = config_manager.INT_RANGES.get(key_value, ("", ""))
                label = QtWidgets.QLabel(f"{description} ({low}-{high}):")
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))  # Show current value as placeholder
                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok | QtWidgets.QDialogButtonBox.StandardButton.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def collect_settings(self):
        new_settings = dict(self.setting_value_list)
        for key_value, widget in self.widgets.items():
            if isinstance(widget, QtWidgets.QCheckBox):
                new_settings[key_value] = widget.isChecked()
                continue

            text = widget.text().strip()
            if text == "":
                continue  # Left blank: keep the old value
            try:
                new_settings[key_value] = int(text)
            except ValueError:
                raise E.ConfigurationError(
                    E.message_for("5002") + key_value, code="5002", detail=text)
        return new_settings

    def save_settings(self):
        try:
            saved = config_manager.save_setting(self.collect_settings())
        except E.ConfigurationError as e:
            logger.warning("Rejected settings: %s", e)
            QtWidgets.QMessageBox.critical(
                self, "Invalid Input:", f"{e}\n\nValue: {e.detail}\n\nPlease correct your input.")
            return  # Stop saving!

        self.setting_value_list = saved
        self.settings_saved.emit()
        self.accept()

    def update_darkmode(self):
        if self.setting_value_list["darkmode"]:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):
    # --- Class-level attributes for button hold logic ---
    initial_delay = 500
    repeat_interval = 100

    # (text, row, column, column span, command)
    BUTTONS = [
        ("AC", 0, 0, 2, Clear()), ("⌫", 0, 2, 1, DeleteDigit()),
        (MathEngine.DIVIDE, 0, 3, 1, ChooseOperation(MathEngine.DIVIDE)),
        ("7", 1, 0, 1, AddDigit("7")), ("8", 1, 1, 1, AddDigit("8")), ("9", 1, 2, 1, AddDigit("9")),
        (MathEngine.MULTIPLY, 1, 3, 1, ChooseOperation(MathEngine.MULTIPLY)),
        ("4", 2, 0, 1, AddDigit("4")), ("5", 2, 1, 1, AddDigit("5")), ("6", 2, 2, 1, AddDigit("6")),
        (MathEngine.SUBTRACT, 2, 3, 1, ChooseOperation(MathEngine.SUBTRACT)),
        ("1", 3, 0, 1, AddDigit("1")), ("2", 3, 1, 1, AddDigit("2")), ("3", 3, 2, 1, AddDigit("3")),
        (MathEngine.ADD, 3, 3, 1, ChooseOperation(MathEngine.ADD)),
        (".", 4, 0, 1, AddDigit(".")), ("0", 4, 1, 1, AddDigit("0")), ("=", 4, 2, 2, Evaluate()),
    ]

    # Buttons that support "press and hold"
    HOLD_BUTTONS = ["0", "1", "2", "3", "4", "5", "6", "7", "8", "9", "⌫"]

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. State ---
        self.state = empty_state()
        self.was_held = False
        self.held_command = None
        self.hold_timer = QTimer(self)
        self.hold_timer.timeout.connect(self.handle_hold_tick)

        # --- 3. Window Setup ---
        self.setWindowTitle("Calculator")
        self.resize(420, 640)
        self.setMinimumSize(340, 540)

        self.background = AnimatedBackground(self, fps=self.setting_value_list["background_fps"])
        self.background.lower()

        outer_layout = QtWidgets.QVBoxLayout(self)
        outer_layout.setContentsMargins(30, 20, 30, 20)

        title = QtWidgets.QLabel("PRECISION CALCULATOR")
        title.setObjectName("title")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        outer_layout.addWidget(title)

        card = QtWidgets.QWidget()
        card.setObjectName("card")
        card.setAttribute(Qt.WidgetAttribute.WA_StyledBackground)
        outer_layout.addWidget(card, 1)
        card_layout = QtWidgets.QVBoxLayout(card)

        # --- 4. Display Setup ---
        self.previous_display = QtWidgets.QLabel("")
        self.previous_display.setObjectName("previous")
        self.previous_display.setAlignment(Qt.AlignmentFlag.AlignRight)
        font = self.previous_display.font()
        font.setPointSize(16)
        self.previous_display.setFont(font)
        card_layout.addWidget(self.previous_display)

        self.display = ClickableLabel("0")
        self.display.setObjectName("current")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        self.display.clicked.connect(self.handle_display_clicked)
        card_layout.addWidget(self.display)

        # --- 5. Button Grid Setup ---
        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )
        button_container = QtWidgets.QWidget()
        card_layout.addWidget(button_container, 1)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(6)
        for i in range(5):
            button_grid.setRowStretch(i, 1)
        for j in range(4):
            button_grid.setColumnStretch(j, 1)

        self.button_objects = {}
        for text, row, col, span, command in self.BUTTONS:
            button = RippleButton(text)
            button.setSizePolicy(expanding_policy)
            button.setObjectName(self.button_role(command))

            if text in self.HOLD_BUTTONS:
                button.pressed.connect(lambda cmd=command: self.handle_button_pressed_hold(cmd))
                button.released.connect(self.handle_button_released_hold)
                button.clicked.connect(lambda checked=False, cmd=command: self.handle_button_clicked_hold(cmd))
            else:
                button.clicked.connect(lambda checked=False, cmd=command: self.dispatch(cmd))

            button_grid.addWidget(button, row, col, 1, span)
            self.button_objects[text] = button

        # --- 6. Footer ---
        footer = QtWidgets.QHBoxLayout()
        hint = QtWidgets.QLabel("Keyboard supported · Esc to clear")
        hint.setObjectName("hint")
        settings_button = QtWidgets.QPushButton("⚙")
        settings_button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        settings_button.clicked.connect(self.open_settings)
        footer.addWidget(hint, 1)
        footer.addWidget(settings_button)
        outer_layout.addLayout(footer)

        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.apply_settings()
        self.refresh_display()

    @staticmethod
    def button_role(command):
        if isinstance(command, AddDigit):
            return "digit"
        if isinstance(command, ChooseOperation):
            return "operation"
        if isinstance(command, Evaluate):
            return "equals"
        return "action"

    # --- Core Dispatch ---
    def dispatch(self, command):
        new_state = transition(self.state, command)
        logger.debug("%s: %s -> %s", command, self.state, new_state)
        self.state = new_state
        self.refresh_display()

    def refresh_display(self):
        text = Display.render(self.state)
        self.previous_display.setText(text.previous)
        self.display.setText(text.current)
        font = self.display.font()
        font.setPointSize(text.font_size)
        self.display.setFont(font)

    # --- Button Hold Logic ---
    def handle_button_pressed_hold(self, command):
        self.was_held = False  # Reset flag on new press
        self.held_command = command
        self.hold_timer.setInterval(self.initial_delay)
        self.hold_timer.start()

    def handle_button_released_hold(self):
        self.hold_timer.stop()
        self.held_command = None

    def handle_button_clicked_hold(self, command):
        # A click right after a hold must not fire a second time
        if not self.was_held:
            self.dispatch(command)

    def handle_hold_tick(self):
        self.was_held = True
        if self.hold_timer.interval() == self.initial_delay:
            self.hold_timer.setInterval(self.repeat_interval)
        if self.held_command is not None:
            self.dispatch(self.held_command)

    # --- Window/Key Event Handlers ---
    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.background.setGeometry(self.rect())

    def keyPressEvent(self, event):
        if event.matches(QtGui.QKeySequence.StandardKey.Copy):
            self.copy_result()
            return
        if event.matches(QtGui.QKeySequence.StandardKey.Paste):
            self.paste_input()
            return

        command = KeyBindings.command_for_key(qt_key_name(event))
        if command is None:
            super().keyPressEvent(event)
            return
        self.dispatch(command)

    # --- Clipboard ---
    def handle_display_clicked(self, with_shift):
        if self.setting_value_list["shift_to_copy"] and with_shift:
            self.copy_result()

    def copy_result(self):
        value = Display.clipboard_value(self.state)
        try:
            pyperclip.copy(value)
        except pyperclip.PyperclipException as e:
            self.show_error(E.UIError(E.message_for("4000"), code="4000", detail=str(e)))
            return
        logger.info("Copied %s to clipboard", value)

    def paste_input(self):
        try:
            clipboard_text = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            self.show_error(E.UIError(E.message_for("4000"), code="4000", detail=str(e)))
            return

        commands = KeyBindings.commands_for_paste(clipboard_text)
        if not commands:
            logger.info(E.message_for("4001"))
            return
        for command in commands:
            self.state = transition(self.state, command)
        self.refresh_display()

    # --- Settings / Theme ---
    def apply_settings(self):
        RippleButton.ripple_enabled = self.setting_value_list["ripple_effect"]

        self.background.set_fps(self.setting_value_list["background_fps"])
        if self.setting_value_list["animated_background"]:
            self.background.start()
        else:
            self.background.stop()

        self.update_darkmode()

    def update_darkmode(self):
        if self.setting_value_list["darkmode"]:
            self.setStyleSheet(DARK_STYLE)
        else:
            self.setStyleSheet(LIGHT_STYLE)

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # "exec" makes the dialog modal (blocks main window)

        # Reload settings after dialog closes
        self.setting_value_list = config_manager.load_setting_value("all")
        self.apply_settings()

    def get_message_box_stylesheet(self):
        if self.setting_value_list["darkmode"]:
            return """
                QMessageBox {
                    background-color: #121212;
                    color: white;
                }
                QLabel {
                    color: white;
                }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
            """
        return ""

    def show_error(self, error_obj):
        logger.error("%s (%s)", error_obj, error_obj.detail)
        error_box = QtWidgets.QMessageBox(self)
        error_box.setIcon(QtWidgets.QMessageBox.Icon.Critical)
        error_box.setWindowTitle(E.category_for(error_obj.code))
        error_box.setText(f"Error {error_obj.code}: {error_obj.message}")
        if error_obj.detail:
            error_box.setInformativeText(f"Details: {error_obj.detail}")
        error_box.setStandardButtons(QtWidgets.QMessageBox.StandardButton.Ok)
        error_box.setStyleSheet(self.get_message_box_stylesheet())
        error_box.exec()


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
