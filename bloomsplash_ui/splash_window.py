from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QCloseEvent, QGuiApplication, QPixmap
from PySide6.QtWidgets import QLabel


class SplashImageError(RuntimeError):
    pass


def default_splash_path() -> Path:
    return Path(__file__).resolve().parent / "resources" / "splash.svg"


def load_splash_pixmap(path: Path) -> QPixmap:
    pixmap = QPixmap(str(path))
    if pixmap.isNull():
        raise SplashImageError(f"cannot load splash image {path}")
    return pixmap


class SplashWindow(QLabel):
    """Undecorated, fixed-size image window.

    The splash-screen window type keeps it out of the taskbar and the Alt+Tab
    switcher on the X11 window managers Bloom users run.
    """

    close_requested = Signal()

    def __init__(self, pixmap: QPixmap, *, width: int, height: int) -> None:
        super().__init__()
        self.setWindowFlags(
            Qt.WindowType.SplashScreen
            | Qt.WindowType.FramelessWindowHint
            | Qt.WindowType.WindowStaysOnTopHint
        )
        self.setWindowTitle("Bloom")
        self.setFixedSize(width, height)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)

        if pixmap.width() != width or pixmap.height() != height:
            pixmap = pixmap.scaled(
                width,
                height,
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
        self.setPixmap(pixmap)

    def center_on_screen(self) -> None:
        screen = self.screen() or QGuiApplication.primaryScreen()
        if screen is None:
            return
        area = screen.availableGeometry()
        self.move(
            area.x() + (area.width() - self.width()) // 2,
            area.y() + (area.height() - self.height()) // 2,
        )

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        self.close_requested.emit()
        super().closeEvent(event)
