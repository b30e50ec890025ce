import pytest

from atomsim.drawing import NO_COLOR, Drawing, DrawingError, rgb


class FakeDisplay:
    def __init__(self, title):
        self.title = title
        self.shows = 0
        self.waited = False

    def show(self, image):
        self.shows += 1

    def wait_closed(self):
        self.waited = True


@pytest.fixture
def displays():
    return []


@pytest.fixture
def drawing(displays):
    def factory(title):
        display = FakeDisplay(title)
        displays.append(display)
        return display

    return Drawing(factory)


def begun(drawing, width=100, height=80, color=0xFFFFFF, flush=False):
    drawing.begin(width, height, "Test", color, flush)
    return drawing


def test_rgb_splits_components():
    assert rgb(0xFFFFFF) == (255, 255, 255)
    assert rgb(0x000000) == (0, 0, 0)
    assert rgb(0x0000FF) == (0, 0, 255)


def test_rgb_ignores_bits_above_24():
    assert rgb(NO_COLOR) == (0, 0, 0)


def test_begin_twice_raises(drawing):
    begun(drawing)
    with pytest.raises(DrawingError):
        drawing.begin(10, 10, "Again")


@pytest.mark.parametrize(
    "name, args",
    [
        ("width", ()),
        ("height", ()),
        ("flush", ()),
        ("end", ()),
        ("draw_point", (1, 1)),
        ("draw_line", (0, 0, 5, 5)),
        ("fill_ellipse", (0, 0, 5, 5)),
        ("draw_text", (0, 0, "x")),
    ],
)
def test_calls_before_begin_raise(drawing, name, args):
    method = getattr(drawing, name)
    with pytest.raises(DrawingError) as info:
        method(*args)
    assert "without previous call" in str(info.value)


def test_dimensions_and_background(drawing):
    begun(drawing, 100, 80, color=0x123456)
    assert drawing.width() == 100
    assert drawing.height() == 80
    assert drawing.pixel(0, 0) == 0x123456
    assert drawing.pixel(99, 79) == 0x123456


def test_title_passed_to_display(drawing, displays):
    drawing.begin(10, 10, "Atoms")
    assert displays[0].title == "Atoms"
    assert (drawing.width(), drawing.height()) == (10, 10)
    assert drawing.pixel(5, 5) == 0xFFFFFF


def test_pixel_outside_raises(drawing):
    begun(drawing, 10, 10)
    with pytest.raises(IndexError):
        drawing.pixel(10, 0)


def test_draw_point(drawing):
    begun(drawing)
    drawing.draw_point(5, 6, 0xFF0000)
    assert drawing.pixel(5, 6) == 0xFF0000
    assert drawing.pixel(6, 6) == 0xFFFFFF


def test_flushing_shows_every_operation(drawing, displays):
    begun(drawing, flush=True)
    drawing.draw_point(1, 1)
    drawing.draw_line(0, 0, 3, 3)
    assert displays[0].shows == 2
    assert drawing.pixel(1, 1) == 0x000000
    assert drawing.pixel(3, 3) == 0x000000


def test_without_flushing_only_explicit_flush_shows(drawing, displays):
    begun(drawing, flush=False)
    drawing.draw_point(1, 1)
    assert displays[0].shows == 0
    assert drawing.pixel(1, 1) == 0x000000
    drawing.flush()
    assert displays[0].shows == 1
    assert drawing.pixel(1, 1) == 0x000000


def test_end_shows_waits_and_resets(drawing, displays):
    begun(drawing)
    drawing.end()
    assert displays[0].shows == 1
    assert displays[0].waited
    with pytest.raises(DrawingError):
        drawing.width()


def test_begin_after_end(drawing):
    begun(drawing)
    drawing.end()
    drawing.begin(30, 20, "Second")
    assert (drawing.width(), drawing.height()) == (30, 20)


def test_draw_line_horizontal(drawing):
    begun(drawing)
    drawing.draw_line(10, 20, 30, 20, 0x00FF00)
    assert all(drawing.pixel(x, 20) == 0x00FF00 for x in range(10, 31))
    assert drawing.pixel(10, 21) == 0xFFFFFF


def test_draw_rectangle_outline_only(drawing):
    begun(drawing)
    drawing.draw_rectangle(10, 10, 20, 20, 0x0000FF)
    for corner in [(10, 10), (30, 10), (30, 30), (10, 30)]:
        assert drawing.pixel(*corner) == 0x0000FF
    assert drawing.pixel(20, 20) == 0xFFFFFF


def test_fill_rectangle_without_outline(drawing):
    begun(drawing)
    drawing.fill_rectangle(10, 10, 20, 20, 0xFF0000)
    assert drawing.pixel(20, 20) == 0xFF0000
    assert drawing.pixel(10, 10) == 0xFF0000
    assert drawing.pixel(31, 31) == 0xFFFFFF


def test_fill_rectangle_with_outline(drawing):
    begun(drawing)
    drawing.fill_rectangle(10, 10, 20, 20, 0xFF0000, 0x0000FF)
    assert drawing.pixel(20, 20) == 0xFF0000
    assert drawing.pixel(10, 10) == 0x0000FF


def test_fill_rectangle_negative_size(drawing):
    begun(drawing)
    drawing.fill_rectangle(30, 30, -20, -20, 0xFF0000)
    assert drawing.pixel(20, 20) == 0xFF0000


def test_drawing_outside_is_clipped(drawing):
    begun(drawing, 50, 50)
    drawing.fill_rectangle(100, 100, 20, 20, 0xFF0000)
    drawing.draw_point(-5, -5, 0xFF0000)
    assert drawing.pixel(49, 49) == 0xFFFFFF
    assert drawing.pixel(0, 0) == 0xFFFFFF


def test_fill_ellipse(drawing):
    begun(drawing)
    drawing.fill_ellipse(10, 10, 40, 40, 0x00FF00)
    assert drawing.pixel(30, 30) == 0x00FF00
    assert drawing.pixel(11, 11) == 0xFFFFFF


def test_draw_ellipse_leaves_centre(drawing):
    begun(drawing)
    drawing.draw_ellipse(10, 10, 40, 40, 0x00FF00)
    assert drawing.pixel(30, 30) == 0xFFFFFF
    row = [drawing.pixel(x, 30) for x in range(31, 60)]
    assert 0x00FF00 in row


def test_fill_ellipse_with_outline(drawing):
    begun(drawing)
    drawing.fill_ellipse(10, 10, 40, 40, 0x00FF00, 0xFF0000)
    assert drawing.pixel(30, 30) == 0x00FF00
    row = [drawing.pixel(x, 30) for x in range(31, 60)]
    assert 0xFF0000 in row


def test_draw_polygon_single_point(drawing):
    begun(drawing)
    drawing.draw_polygon([(7, 8)], 0xFF0000)
    assert drawing.pixel(7, 8) == 0xFF0000


def test_draw_polygon_closes_shape(drawing):
    begun(drawing)
    drawing.draw_polygon([(10, 10), (40, 10), (40, 40)], 0xFF0000)
    assert drawing.pixel(25, 10) == 0xFF0000
    assert drawing.pixel(25, 25) == 0xFF0000
    assert drawing.pixel(35, 15) == 0xFFFFFF


def test_fill_polygon(drawing):
    begun(drawing)
    drawing.fill_polygon([(10, 10), (50, 10), (10, 50)], 0x0000FF)
    assert drawing.pixel(15, 15) == 0x0000FF
    assert drawing.pixel(45, 45) == 0xFFFFFF


def test_empty_polygon_draws_nothing(drawing):
    begun(drawing, 20, 20)
    drawing.fill_polygon([], 0xFF0000, 0x00FF00)
    assert all(
        drawing.pixel(x, y) == 0xFFFFFF for x in range(20) for y in range(20)
    )


def test_draw_text_marks_pixels(drawing):
    begun(drawing, 200, 60)
    drawing.draw_text(5, 5, "Atoms", 20, 0x000000)
    marked = [
        (x, y)
        for x in range(200)
        for y in range(60)
        if drawing.pixel(x, y) != 0xFFFFFF
    ]
    assert len(marked) > 0
    assert all(x >= 5 and y >= 5 for x, y in marked)


def test_context_manager_ends(drawing, displays):
    with drawing as d:
        d.begin(10, 10, "Ctx")
    assert displays[0].waited
    with pytest.raises(DrawingError):
        drawing.width()


def test_context_manager_on_error_resets_without_wait(drawing, displays):
    with pytest.raises(KeyError):
        with drawing as d:
            d.begin(10, 10, "Ctx")
            raise KeyError("boom")
    assert not displays[0].waited
    with pytest.raises(DrawingError):
        drawing.height()


def test_negative_size_rejected(drawing):
    with pytest.raises(ValueError):
        drawing.begin(-1, 10, "Bad")