"""
Tests for strip geometry in photostrip.layout.

Covers:
- The strip height formula across photo counts and aspect ratios
- Per-photo placement and the footer region
- Error handling for empty input and invalid ratios
"""

from collections.abc import Callable

import pytest

import photostrip.layout as ps_layout
from photostrip.config import LayoutConfig
from photostrip.errors import EmptyInputError
from photostrip.image_io import LoadedImage

PHOTO_WIDTH = 400
PADDING = 24
FOOTER = 140


class TestComputeLayout:
    @pytest.mark.parametrize("count", [1, 2, 3, 4, 7])
    @pytest.mark.parametrize("ratio", [0.75, 1.0, 1.5, 1.337])
    def test_strip_height_formula(self, count: int, ratio: float) -> None:
        """Height is padding*(N+1) + N*photo_height + footer, exactly."""
        geo = ps_layout.compute_layout(ratio, count)
        expected = (
            PADDING * (count + 1) + count * (PHOTO_WIDTH * ratio) + FOOTER
        )
        assert geo.strip_height == expected
        assert geo.strip_width == PHOTO_WIDTH + 2 * PADDING
        assert geo.photo_height == PHOTO_WIDTH * ratio

    def test_photo_positions_single_column(self) -> None:
        """Photos stack at padding + i*(h + padding), all at x = padding."""
        geo = ps_layout.compute_layout(1.5, 4)
        assert geo.photo_ys == (24.0, 648.0, 1272.0, 1896.0)
        assert geo.photo_x == PADDING
        assert geo.footer_top == 24 * 5 + 4 * 600

    def test_canvas_size_truncates_fractional_pixels(self) -> None:
        """Fractional strip sizes are truncated like an HTML canvas."""
        geo = ps_layout.compute_layout(0.3333, 3)
        width, height = geo.canvas_size
        assert width == 448  # noqa: PLR2004
        assert height == int(geo.strip_height)

    def test_photo_boxes_do_not_overlap(self) -> None:
        """Later photos never draw over earlier ones."""
        geo = ps_layout.compute_layout(1.337, 5, LayoutConfig(padding=0))
        boxes = geo.photo_boxes()
        for earlier, later in zip(boxes, boxes[1:], strict=False):
            assert not earlier.overlaps(later)
            assert later.y0 >= earlier.y1
        assert boxes[-1].y1 <= geo.footer_top + 1

    def test_photo_width_independent_of_count(self) -> None:
        """Adding photos only grows the strip vertically."""
        widths = {ps_layout.compute_layout(1.0, n).photo_width
                  for n in range(1, 6)}
        assert widths == {float(PHOTO_WIDTH)}

    def test_custom_config(self) -> None:
        """Spacing constants come from the layout config."""
        cfg = LayoutConfig(photo_width=200, padding=10, footer_height=50)
        geo = ps_layout.compute_layout(2.0, 2, cfg)
        assert geo.canvas_size == (220, 10 * 3 + 2 * 400 + 50)

    def test_zero_count_raises_empty_input(self) -> None:
        """N = 0 has no defined aspect ratio and must not lay out."""
        with pytest.raises(EmptyInputError):
            ps_layout.compute_layout(1.5, 0)

    @pytest.mark.parametrize("ratio", [0.0, -1.0, float("nan"),
                                       float("inf")])
    def test_invalid_ratio_raises(self, ratio: float) -> None:
        """Aspect ratios must be positive and finite."""
        with pytest.raises(ValueError, match="aspect ratio"):
            ps_layout.compute_layout(ratio, 2)

    def test_negative_count_raises(self) -> None:
        """Negative counts are rejected."""
        with pytest.raises(ValueError, match="photo count"):
            ps_layout.compute_layout(1.0, -2)


class TestLayoutForImages:
    def test_uses_first_image_ratio(
        self,
        make_loaded_images: Callable[..., list[LoadedImage]],
    ) -> None:
        """Mismatched later photos inherit the first photo's ratio."""
        portrait = make_loaded_images(1, size=(100, 150))
        landscape = make_loaded_images(2, size=(160, 90))
        geo = ps_layout.layout_for_images([*portrait, *landscape])
        assert geo.count == 3  # noqa: PLR2004
        assert geo.aspect_ratio == pytest.approx(1.5)

    def test_empty_sequence_raises(self) -> None:
        """No images means no layout."""
        with pytest.raises(EmptyInputError):
            ps_layout.layout_for_images([])


@pytest.mark.parametrize(
    ("count", "label"),
    [(2, "Duo"), (3, "Trio"), (4, "Classic"), (6, "6 Photos")],
)
def test_layout_label(count: int, label: str) -> None:
    """Picker presets have names; other counts fall back to a count."""
    assert ps_layout.layout_label(count) == label


def test_default_count_is_classic() -> None:
    """Without an explicit count the four-photo preset is used."""
    geo = ps_layout.compute_layout(1.5)
    assert geo.count == 4  # noqa: PLR2004
    assert ps_layout.layout_label(geo.count) == "Classic"


def test_extremely_wide_photo_keeps_drawable_box() -> None:
    """A 1000x1 photo still gets a box at least one pixel tall."""
    geo = ps_layout.compute_layout(1 / 1000, 2)
    boxes = geo.photo_boxes()
    assert [box.h for box in boxes] == [1, 1]
    assert all(box.w == PHOTO_WIDTH for box in boxes)
    assert boxes[0].y0 == PADDING
    assert not boxes[0].overlaps(boxes[1])
