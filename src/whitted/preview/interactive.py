"""Live render window using Taichi GGUI.

The engine shades rows top to bottom. ``InteractivePreview`` keeps a
Taichi display field of the window's size and pushes the partially rendered
image into it every few rows, so the picture fills in while it renders. A
small control panel shows progress and can write the current image to PNG.

Taichi must be initialized (``ti.init``) before a preview is created; the
window itself only opens on first use, so the display field works headless.

Example:
    >>> import taichi as ti
    >>> from src.whitted.core.engine import Engine
    >>> from src.whitted.preview.interactive import InteractivePreview
    >>> from src.whitted.scene.presets import create_demo_world
    >>>
    >>> ti.init(arch=ti.cpu)
    >>> engine = Engine(create_demo_world(width=320, height=240))
    >>> InteractivePreview(320, 240).run_progressive(engine)
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

from src.whitted.core.color import BLACK
from src.whitted.core.image import Image
from src.whitted.preview.display import image_to_display_array

if TYPE_CHECKING:
    import numpy.typing as npt

    from src.whitted.core.engine import Engine

logger = logging.getLogger(__name__)

DEFAULT_ROWS_PER_FRAME = 8
DEFAULT_TITLE = "Whitted Ray Tracer - Preview"

# Panel placement, as fractions of the window
PANEL_RECT = (0.02, 0.02, 0.28, 0.12)


class InteractivePreview:
    """A GGUI window showing a (possibly partial) render.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        display_image: ``(width, height)`` vec3 field presented on the canvas,
            indexed with y = 0 at the bottom.
    """

    def __init__(self, width: int, height: int, *, title: str = DEFAULT_TITLE) -> None:
        self.width = width
        self.height = height
        self._title = title

        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(width, height)
        )

        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None
        self._is_initialized = False

        self._image: Image | None = None
        self._rows_done = 0

    # =========================================================================
    # Window
    # =========================================================================

    def _open(self) -> ti.ui.Window:
        if not self._is_initialized:
            logger.debug("Opening %dx%d preview window", self.width, self.height)
            self._window = ti.ui.Window(self._title, res=(self.width, self.height), vsync=True)
            self._canvas = self._window.get_canvas()
            self._is_initialized = True
        return self._window

    @property
    def window(self) -> ti.ui.Window:
        return self._open()

    @property
    def canvas(self) -> ti.ui.Canvas:
        self._open()
        return self._canvas

    @property
    def image(self) -> Image | None:
        """The image last shown in the window, if any."""
        return self._image

    def is_running(self) -> bool:
        return self.window.running

    def close(self) -> None:
        if self._window is not None:
            self._window.running = False

    # =========================================================================
    # Display Buffer
    # =========================================================================

    def update_image(self, image: npt.NDArray[np.float32]) -> None:
        """Copy a top-row-first ``(height, width, 3)`` array into the field.

        Raises:
            ValueError: If the array does not have the window's shape.
        """
        expected = (self.height, self.width, 3)
        if image.shape != expected:
            raise ValueError(f"Array shape {image.shape} doesn't match expected {expected}")

        # GGUI puts y = 0 at the bottom, image rows start at the top
        columns = image[::-1].transpose(1, 0, 2)
        self.display_image.from_numpy(np.ascontiguousarray(columns, dtype=np.float32))

    def show_image(self, image: Image) -> None:
        """Display a rendered image and remember it for export.

        Raises:
            ValueError: If the image size differs from the window size.
        """
        self.update_image(image_to_display_array(image))
        self._image = image

    # =========================================================================
    # Event Loop
    # =========================================================================

    def show_frame(self) -> None:
        window = self.window
        with window.GUI.sub_window("Render", *PANEL_RECT) as gui:
            gui.text(f"Rows: {self._rows_done}/{self.height}")
            if gui.button("Export PNG"):
                self.export_png()
        self.canvas.set_image(self.display_image)
        window.show()

    def run(self) -> None:
        """Present the current image until the window is closed."""
        while self.is_running():
            self.show_frame()

    def run_progressive(
        self, engine: Engine, *, rows_per_frame: int = DEFAULT_ROWS_PER_FRAME
    ) -> Image:
        """Render with ``engine`` and refresh the window as rows arrive.

        Unrendered rows stay black. Closing the window stops the render;
        otherwise the finished image stays on screen until the window is
        closed.

        Args:
            engine: Engine whose camera resolution equals the window size.
            rows_per_frame: Rows rendered between refreshes.

        Returns:
            The image, complete or as far as it got.

        Raises:
            ValueError: If the camera resolution differs from the window size.
        """
        size = engine.world.camera.get_pixel_size()
        if size != (self.width, self.height):
            raise ValueError(
                f"Camera resolution {size[0]}x{size[1]} doesn't match "
                f"window size {self.width}x{self.height}"
            )

        image = Image(self.width, self.height, BLACK)
        self._rows_done = 0
        for y, row in engine.render_rows():
            image.set_row(y, row)
            self._rows_done = y + 1
            if self._rows_done % rows_per_frame and self._rows_done < self.height:
                continue
            if not self.is_running():
                logger.info("Render stopped at row %d of %d", self._rows_done, self.height)
                self._image = image
                return image
            self.show_image(image)
            self.show_frame()

        self.run()
        return image

    # =========================================================================
    # Export
    # =========================================================================

    def export_png(self, filename: str | None = None) -> str | None:
        """Write the image last shown to a PNG file.

        Args:
            filename: Output path, ``render_<timestamp>.png`` by default.

        Returns:
            The path written, or None when nothing has been shown yet.
        """
        from src.whitted.preview.export import save_png

        if self._image is None:
            logger.warning("Nothing rendered yet, skipping export")
            return None

        path = filename or datetime.now().strftime("render_%Y%m%d_%H%M%S.png")
        save_png(self._image, path)
        return path

    @staticmethod
    def is_display_available() -> bool:
        """Whether a GUI window can be opened on this machine."""
        if sys.platform == "win32":
            return True
        has_x11 = bool(os.environ.get("DISPLAY"))
        if sys.platform == "darwin":
            # Only an SSH session without X forwarding lacks a display
            return has_x11 or "SSH_CONNECTION" not in os.environ
        return has_x11 or bool(os.environ.get("WAYLAND_DISPLAY"))
