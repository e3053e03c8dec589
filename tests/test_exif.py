"""Tests for EXIF description rendering."""

from flickr_wxr.core.exif import render_exif


def test_render_exif_bullets_in_insertion_order():
    """Each entry becomes a bullet line under the header, order preserved."""
    exif = {"Model": "Canon EOS 600D", "Make": "Canon", "Exposure": "1/250"}

    text = render_exif(exif)

    assert text.splitlines() == [
        "flickr_exif_data:",
        "• Model: Canon EOS 600D",
        "• Make: Canon",
        "• Exposure: 1/250",
    ]


def test_render_exif_keeps_keys_and_values_verbatim():
    """No filtering or renaming of fields."""
    text = render_exif({"X-Resolution": "72 dpi", "": "blank key"})
    assert "• X-Resolution: 72 dpi" in text
    assert "• : blank key" in text


def test_render_exif_empty_or_missing():
    """Empty and missing mappings render to nothing."""
    assert render_exif({}) == ""
    assert render_exif(None) == ""
