# Background.py
"""Animated backdrop drawn behind the calculator.

A dark base, a slowly scrolling grid, four glowing orbs drifting on
sin/cos paths and a vignette. Purely decorative: it never talks to the
state machine.
"""

import logging
import math
import time

from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt, QPointF, QTimer

logger = logging.getLogger(__name__)

BASE_COLOR = (8, 8, 15)
GRID_COLOR = (51, 128, 255)
ORB_BLUE = (26, 102, 255)
ORB_VIOLET = (153, 26, 230)

ORB_COUNT = 4
GRID_CELLS = 6          # grid cells across the window height
GRID_SPEED = 0.15       # cells per second


def orb_center(index, t, width, height):
    """Pixel position of orb `index` at time t (seconds), origin top-left."""
    x = 0.5 + 0.45 * math.sin(t * 0.3 + index * 1.7)
    y = 0.5 + 0.35 * math.cos(t * 0.25 + index * 2.3)
    return x * width, (1.0 - y) * height


def orb_mix(index, t):
    """Blend factor between blue (0.0) and violet (1.0) for an orb."""
    return math.sin(index * 1.3 + t * 0.5) * 0.5 + 0.5


def mix_color(a, b, amount):
    return tuple(round(ca + (cb - ca) * amount) for ca, cb in zip(a, b))


def grid_offset(t, spacing):
    """Vertical scroll of the grid in pixels, always within [0, spacing)."""
    return (t * GRID_SPEED * spacing) % spacing


class AnimatedBackground(QtWidgets.QWidget):

    def __init__(self, parent=None, fps=30):
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.start_time = time.monotonic()

        self.timer = QTimer(self)
        self.timer.timeout.connect(self.update)
        self.set_fps(fps)

    def set_fps(self, fps):
        self.timer.setInterval(max(1, int(1000 / max(fps, 1))))
        logger.debug("Background redraw interval %d ms", self.timer.interval())

    def start(self):
        self.timer.start()

    def stop(self):
        self.timer.stop()
        self.update()

    def elapsed(self):
        if not self.timer.isActive():
            return 0.0
        return time.monotonic() - self.start_time

    def paintEvent(self, event):
        t = self.elapsed()
        width, height = self.width(), self.height()

        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QtGui.QColor(*BASE_COLOR))

        # --- Grid ---
        spacing = max(height / GRID_CELLS, 1.0)
        grid_pen = QtGui.QPen(QtGui.QColor(*GRID_COLOR, 18))
        grid_pen.setWidthF(1.0)
        painter.setPen(grid_pen)
        x = 0.0
        while x <= width:
            painter.drawLine(QPointF(x, 0), QPointF(x, height))
            x += spacing
        y = grid_offset(t, spacing)
        while y <= height:
            painter.drawLine(QPointF(0, y), QPointF(width, y))
            y += spacing

        # --- Orbs ---
        painter.setPen(Qt.PenStyle.NoPen)
        radius = min(width, height) * 0.45
        for index in range(ORB_COUNT):
            cx, cy = orb_center(index, t, width, height)
            color = mix_color(ORB_BLUE, ORB_VIOLET, orb_mix(index, t))
            gradient = QtGui.QRadialGradient(QPointF(cx, cy), radius)
            gradient.setColorAt(0.0, QtGui.QColor(*color, 110))
            gradient.setColorAt(0.25, QtGui.QColor(*color, 30))
            gradient.setColorAt(1.0, QtGui.QColor(*color, 0))
            painter.setBrush(QtGui.QBrush(gradient))
            painter.drawEllipse(QPointF(cx, cy), radius, radius)

        # --- Vignette ---
        vignette = QtGui.QRadialGradient(QPointF(width / 2, height / 2), max(width, height) * 0.75)
        vignette.setColorAt(0.0, QtGui.QColor(0, 0, 0, 0))
        vignette.setColorAt(1.0, QtGui.QColor(0, 0, 0, 170))
        painter.setBrush(QtGui.QBrush(vignette))
        painter.drawRect(self.rect())
        painter.end()
