"""A small raster drawing surface shown in a window.

Coordinates run left to right and top to bottom.  Colours are 24-bit RGB
integers: 0x000000 is black, 0xFFFFFF is white, 0xFF0000 is red.  All drawing
operations clip to the image, so drawing outside it is harmless.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Protocol

from PIL import Image, ImageDraw, ImageFont

NO_COLOR = 0x1000000
"""Marker for "no colour", used to request no outline."""

WHITE = 0xFFFFFF
BLACK = 0x000000


class DrawingError(RuntimeError):
    """Raised when the drawing surface is used in the wrong state."""


class Display(Protocol):
    def show(self, image: Image.Image) -> None: ...

    def wait_closed(self) -> None: ...


def rgb(color: int) -> tuple[int, int, int]:
    """Split a 24-bit colour code into its red, green and blue components."""
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def _half(value: int) -> int:
    # Integer division truncating toward zero.
    return int(value / 2)


class TkDisplay:
    """A window that shows an image, built on tkinter."""

    def __init__(self, title: str) -> None:
        import tkinter

        self._root = tkinter.Tk()
        self._root.title(title)
        self._root.geometry("+0+0")
        self._label = tkinter.Label(self._root, borderwidth=0)
        self._label.pack()
        self._photo = None
        self._closed = False
        self._root.protocol("WM_DELETE_WINDOW", self._on_close)

    def _on_close(self) -> None:
        self._closed = True
        self._root.destroy()

    def show(self, image: Image.Image) -> None:
        """Replace the window's content with the image."""
        if self._closed:
            return
        from PIL import ImageTk

        self._photo = ImageTk.PhotoImage(image)
        self._label.configure(image=self._photo)
        self._root.update()

    def wait_closed(self) -> None:
        """Block until the user closes the window."""
        if not self._closed:
            self._root.mainloop()
        self._closed = True


class Drawing:
    """An image with drawing primitives, optionally mirrored to a display."""

    def __init__(self, display_factory: Callable[[str], Display] = TkDisplay) -> None:
        self._display_factory = display_factory
        self._image: Image.Image | None = None
        self._draw: ImageDraw.ImageDraw | None = None
        self._display: Display | None = None
        self._flushing = False

    # -- lifecycle ---------------------------------------------------------

    def begin(
        self,
        width: int,
        height: int,
        title: str,
        color: int = WHITE,
        flush: bool = True,
    ) -> None:
        """Open a window of the given size, title and background colour.

        With ``flush`` set, every drawing operation is shown at once;
        otherwise only on :meth:`flush` or :meth:`end`.
        """
        if self._image is not None:
            raise DrawingError("begin() is called twice in sequence")
        if width < 0 or height < 0:
            raise ValueError("width and height must be non-negative")
        self._image = Image.new("RGB", (width, height), rgb(color))
        self._draw = ImageDraw.Draw(self._image)
        self._display = self._display_factory(title)
        self._flushing = flush

    def end(self) -> None:
        """Show the final image and wait until the window is closed."""
        image, _ = self._require("end")
        assert self._display is not None
        self._display.show(image)
        self._display.wait_closed()
        self._reset()

    def _reset(self) -> None:
        self._image = None
        self._draw = None
        self._display = None
        self._flushing = False

    def __enter__(self) -> Drawing:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._image is None:
            return
        if exc_type is None:
            self.end()
        else:
            self._reset()

    # -- helpers -----------------------------------------------------------

    def _require(self, call: str) -> tuple[Image.Image, ImageDraw.ImageDraw]:
        if self._image is None or self._draw is None:
            raise DrawingError(
                f"{call}() is called without previous call of begin()"
            )
        return self._image, self._draw

    def _auto_flush(self) -> None:
        if self._flushing and self._display is not None and self._image is not None:
            self._display.show(self._image)

    # -- queries -----------------------------------------------------------

    def flush(self) -> None:
        """Show any pending drawing output."""
        image, _ = self._require("flush")
        assert self._display is not None
        self._display.show(image)

    def width(self) -> int:
        """Width of the current image."""
        return self._require("width")[0].width

    def height(self) -> int:
        """Height of the current image."""
        return self._require("height")[0].height

    def pixel(self, x: int, y: int) -> int:
        """Colour code of the pixel at x,y."""
        image, _ = self._require("pixel")
        if not (0 <= x < image.width and 0 <= y < image.height):
            raise IndexError(f"pixel ({x}, {y}) lies outside the image")
        r, g, b = image.getpixel((x, y))
        return (r << 16) | (g << 8) | b

    # -- primitives --------------------------------------------------------

    def draw_point(self, x: int, y: int, color: int = BLACK) -> None:
        """Draw a point at x,y."""
        _, draw = self._require("draw_point")
        draw.point((x, y), fill=rgb(color))
        self._auto_flush()

    def draw_line(
        self, x0: int, y0: int, x1: int, y1: int, color: int = BLACK
    ) -> None:
        """Draw a line from x0,y0 to x1,y1."""
        _, draw = self._require("draw_line")
        draw.line([(x0, y0), (x1, y1)], fill=rgb(color))
        self._auto_flush()

    def _outline(self, draw: ImageDraw.ImageDraw, points: list, color: int) -> None:
        fill = rgb(color)
        for start, stop in zip(points, points[1:] + points[:1]):
            draw.line([start, stop], fill=fill)

    def draw_rectangle(
        self, x: int, y: int, w: int, h: int, color: int = BLACK
    ) -> None:
        """Draw an outlined rectangle with upper left corner x,y and size w*h."""
        _, draw = self._require("draw_rectangle")
        corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
        self._outline(draw, corners, color)
        self._auto_flush()

    def fill_rectangle(
        self,
        x: int,
        y: int,
        w: int,
        h: int,
        fcolor: int = BLACK,
        ocolor: int = NO_COLOR,
    ) -> None:
        """Draw a filled rectangle, outlined unless ``ocolor`` is NO_COLOR."""
        _, draw = self._require("fill_rectangle")
        x0, x1 = sorted((x, x + w))
        y0, y1 = sorted((y, y + h))
        draw.rectangle([x0, y0, x1, y1], fill=rgb(fcolor))
        if ocolor != NO_COLOR:
            self.draw_rectangle(x, y, w, h, ocolor)
        self._auto_flush()

    @staticmethod
    def _ellipse_box(x: int, y: int, w: int, h: int) -> list[int]:
        rx, ry = _half(w), _half(h)
        cx, cy = x + rx, y + ry
        rx, ry = abs(rx), abs(ry)
        return [cx - rx, cy - ry, cx + rx, cy + ry]

    def draw_ellipse(
        self, x: int, y: int, w: int, h: int, color: int = BLACK
    ) -> None:
        """Draw an outlined ellipse inside the rectangle x,y,w*h."""
        _, draw = self._require("draw_ellipse")
        draw.ellipse(self._ellipse_box(x, y, w, h), outline=rgb(color))
        self._auto_flush()

    def fill_ellipse(
        self,
        x: int,
        y: int,
        w: int,
        h: int,
        fcolor: int = BLACK,
        ocolor: int = NO_COLOR,
    ) -> None:
        """Draw a filled ellipse, outlined unless ``ocolor`` is NO_COLOR."""
        _, draw = self._require("fill_ellipse")
        draw.ellipse(self._ellipse_box(x, y, w, h), fill=rgb(fcolor))
        if ocolor != NO_COLOR:
            self.draw_ellipse(x, y, w, h, ocolor)
        self._auto_flush()

    def draw_polygon(
        self, points: Iterable[tuple[int, int]], color: int = BLACK
    ) -> None:
        """Draw a closed polygon outline through the points."""
        _, draw = self._require("draw_polygon")
        vertices = [tuple(p) for p in points]
        if vertices:
            self._outline(draw, vertices, color)
        self._auto_flush()

    def fill_polygon(
        self,
        points: Iterable[tuple[int, int]],
        fcolor: int = BLACK,
        ocolor: int = NO_COLOR,
    ) -> None:
        """Draw a filled polygon, outlined unless ``ocolor`` is NO_COLOR."""
        _, draw = self._require("fill_polygon")
        vertices = [tuple(p) for p in points]
        if len(vertices) >= 3:
            draw.polygon(vertices, fill=rgb(fcolor))
        elif vertices:
            self._outline(draw, vertices, fcolor)
        if ocolor != NO_COLOR:
            self.draw_polygon(vertices, ocolor)
        self._auto_flush()

    def draw_text(
        self, x: int, y: int, text: str, size: int = 14, color: int = BLACK
    ) -> None:
        """Draw text whose upper left corner is at x,y."""
        _, draw = self._require("draw_text")
        try:
            font = ImageFont.load_default(size=size)
        except TypeError:
            font = ImageFont.load_default()
        draw.text((x, y), text, fill=rgb(color), font=font)
        self._auto_flush()