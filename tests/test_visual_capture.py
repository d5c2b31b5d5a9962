"""Tests for visual-capture rendering and printing."""

import asyncio

import pytest
from PIL import Image

from gst_invoice.rendering.base import RenderOptions
from gst_invoice.rendering.printing import print_invoice
from gst_invoice.rendering.programmatic import ProgrammaticRenderer
from gst_invoice.rendering.surfaces import DocumentSurface, ImageSurface
from gst_invoice.rendering.visual_capture import VisualCaptureRenderer, flatten
from gst_invoice.utils.exceptions import CaptureError, SurfaceUnavailableError

ROOM = ("Deluxe Room", "996311", 2, 5000, 12)


def render(renderer, record, **options):
    return asyncio.run(renderer.render(record, RenderOptions(download=False, **options)))


class TestVisualCaptureRenderer:

    def test_a4_shaped_image_is_one_page(self, make_session):
        session = make_session(items=[ROOM])
        surface = ImageSurface(Image.new("RGB", (210, 297), "white"))
        document = render(VisualCaptureRenderer(surface, scale=1), session.record)
        assert document.page_count == 1
        assert document.data.startswith(b"%PDF")

    def test_tall_image_spans_pages(self, make_session, pdf_text):
        session = make_session(items=[ROOM])
        # 210 x 630 mm once scaled to the page width: 297 + 297 + 36
        surface = ImageSurface(Image.new("RGB", (100, 300), "white"))
        document = render(VisualCaptureRenderer(surface, scale=1), session.record)
        assert document.page_count == 3
        assert len(pdf_text(document.data)) == 3

    def test_missing_surface(self, make_session):
        session = make_session(items=[ROOM])
        with pytest.raises(SurfaceUnavailableError):
            render(VisualCaptureRenderer(None), session.record)

    def test_missing_image_file(self, make_session, tmp_path):
        session = make_session(items=[ROOM])
        surface = ImageSurface(tmp_path / "nowhere.png")
        with pytest.raises(SurfaceUnavailableError):
            render(VisualCaptureRenderer(surface), session.record)

    def test_broken_image_file(self, make_session, tmp_path):
        session = make_session(items=[ROOM])
        broken = tmp_path / "broken.png"
        broken.write_bytes(b"not an image")
        with pytest.raises(CaptureError):
            render(VisualCaptureRenderer(ImageSurface(broken)), session.record)

    def test_capture_of_programmatic_document(self, make_session):
        session = make_session(items=[ROOM])
        data, _ = ProgrammaticRenderer(session.company).draw(session.record)
        surface = DocumentSurface(data, dpi=144)
        document = render(VisualCaptureRenderer(surface, scale=1), session.record)
        assert document.page_count == 1

    def test_document_surface_rejects_empty_bytes(self):
        with pytest.raises(SurfaceUnavailableError):
            DocumentSurface(b"")

    def test_flatten_transparent_image(self):
        image = Image.new("RGBA", (4, 4), (0, 0, 0, 0))
        flat = flatten(image, "#ffffff")
        assert flat.mode == "RGB"
        assert flat.getpixel((0, 0)) == (255, 255, 255)

    def test_capture_scale(self):
        surface = ImageSurface(Image.new("RGB", (10, 20), "white"))
        image = asyncio.run(surface.capture(scale=2))
        assert image.size == (20, 40)


class TestPrint:

    def test_print_opens_flagged_copy(self, make_session, tmp_path):
        session = make_session(items=[ROOM])
        surface = ImageSurface(Image.new("RGB", (210, 297), "white"))
        opened = []

        document = asyncio.run(
            print_invoice(session.record, surface, opener=opened.append, temp_dir=str(tmp_path))
        )

        assert document.path == tmp_path / "Invoice-VMP-19102026-0001.pdf"
        assert document.path.exists()
        assert b"/Print" in document.data
        assert opened == [document.path.resolve().as_uri()]

    def test_print_without_surface(self, make_session, tmp_path):
        session = make_session(items=[ROOM])
        with pytest.raises(SurfaceUnavailableError):
            asyncio.run(print_invoice(session.record, None, opener=lambda uri: None, temp_dir=str(tmp_path)))
