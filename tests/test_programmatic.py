"""Tests for the programmatic PDF renderer."""

import asyncio
from decimal import Decimal

from gst_invoice.rendering.base import RenderOptions
from gst_invoice.rendering.canvas import InvoiceCanvas, PageCursor, column_positions
from gst_invoice.rendering.programmatic import NO_ITEMS_TEXT, ProgrammaticRenderer, format_rate

ROOM = ("Deluxe Room", "996311", 2, 5000, 12)


class TestProgrammaticRenderer:

    def test_returns_pdf_bytes(self, make_session):
        session = make_session(items=[ROOM])
        document = ProgrammaticRenderer(session.company).build(
            session.record, RenderOptions(download=False)
        )
        assert document.data.startswith(b"%PDF")
        assert document.page_count == 1
        assert document.filename == "Invoice-VMP-19102026-0001.pdf"
        assert document.path is None

    def test_same_record_same_bytes(self, make_session):
        session = make_session(items=[ROOM], amount_received=1000)
        renderer = ProgrammaticRenderer(session.company)
        first, _ = renderer.draw(session.record)
        second, _ = renderer.draw(session.record)
        assert first == second

    def test_same_state_content(self, make_session, pdf_text):
        session = make_session(items=[ROOM])
        data, _ = ProgrammaticRenderer(session.company).draw(session.record)
        text = pdf_text(data)[0]

        assert "Tax Invoice" in text
        assert "Invoice No.: VMP-19102026-0001" in text
        assert "Date: 19/10/2026" in text
        assert "Deluxe Room" in text
        assert "11200.00" in text
        assert "SGST" in text and "CGST" in text
        assert "IGST" not in text
        assert "Eleven Thousand Two Hundred Rupees Only" in text

    def test_cross_state_shows_igst_only(self, make_session, pdf_text):
        session = make_session(state="Maharashtra", items=[("Suite", "996311", 1, 1000, 18)])
        data, _ = ProgrammaticRenderer(session.company).draw(session.record)
        text = pdf_text(data)[0]

        assert "IGST" in text
        assert "180.00" in text
        assert "SGST" not in text
        assert "27-Maharashtra" in text

    def test_empty_items_placeholder(self, make_session, pdf_text):
        session = make_session()
        data, pages = ProgrammaticRenderer(session.company).draw(session.record)
        assert pages == 1
        assert NO_ITEMS_TEXT in pdf_text(data)[0]
        assert "Zero" in pdf_text(data)[0]

    def test_long_item_list_overflows_with_restated_header(self, make_session, pdf_text):
        items = [(f"Room night {n}", "996311", 1, 1000, 12) for n in range(60)]
        session = make_session(items=items)
        data, pages = ProgrammaticRenderer(session.company).draw(session.record)

        texts = pdf_text(data)
        assert pages > 1
        assert len(texts) == pages
        assert "Item name" in texts[1]
        assert "Room night 59" in "".join(texts)
        assert "Company seal and Sign" in texts[-1]

    def test_company_name_in_header(self, make_session, pdf_text):
        session = make_session(items=[ROOM])
        data, _ = ProgrammaticRenderer(session.company).draw(session.record)
        text = pdf_text(data)[0]
        assert "VMP Villa Home Stay" in text
        assert "GSTIN: 09CAFPB2385C1Z1" in text

    def test_terms_are_printed(self, make_session, pdf_text):
        session = make_session(items=[ROOM])
        session.set_terms("Check-out by 11 AM")
        data, _ = ProgrammaticRenderer(session.company).draw(session.record)
        assert "Check-out by 11 AM" in pdf_text(data)[0]

    def test_long_terms_continue_on_new_pages(self, make_session, pdf_text):
        session = make_session(items=[ROOM])
        session.set_terms("\n".join(
            f"Clause {n}: guests are responsible for the room and its contents" for n in range(120)
        ))
        data, pages = ProgrammaticRenderer(session.company).draw(session.record)

        texts = pdf_text(data)
        text = "".join(texts)
        assert pages > 1
        for n in range(120):
            assert f"Clause {n}:" in text
        assert "Company seal and Sign" in texts[-1]

    def test_download_writes_file(self, make_session, tmp_path):
        session = make_session(items=[ROOM])
        document = asyncio.run(
            ProgrammaticRenderer(session.company).render(
                session.record, RenderOptions(output_dir=str(tmp_path))
            )
        )
        assert document.path == tmp_path / "Invoice-VMP-19102026-0001.pdf"
        assert document.path.read_bytes() == document.data

    def test_auto_print_flag(self, make_session):
        session = make_session(items=[ROOM])
        renderer = ProgrammaticRenderer(session.company)
        plain, _ = renderer.draw(session.record)
        flagged, _ = renderer.draw(session.record, auto_print=True)
        assert b"/Print" not in plain
        assert b"/OpenAction" in flagged and b"/Print" in flagged


class TestLayoutHelpers:

    def test_format_rate(self):
        assert format_rate(Decimal("12")) == "12%"
        assert format_rate(Decimal("12.00")) == "12%"
        assert format_rate(Decimal("2.5")) == "2.5%"

    def test_column_positions(self):
        assert column_positions(12, [10, 50, 25]) == [12, 22, 72]

    def test_page_cursor_starts_new_page(self):
        canvas = InvoiceCanvas()
        restated = []
        cursor = PageCursor(canvas, top=15, bottom=100, on_new_page=lambda: restated.append(True))

        cursor.move_to(95)
        assert cursor.ensure(10) is True
        assert cursor.y == 15
        assert canvas.page_count == 2
        assert restated == [True]

    def test_page_cursor_keeps_page_when_block_fits(self):
        canvas = InvoiceCanvas()
        cursor = PageCursor(canvas, top=15, bottom=100)
        cursor.move_to(50)
        assert cursor.ensure(10) is False
        assert canvas.page_count == 1

    def test_oversized_block_at_top_does_not_loop(self):
        canvas = InvoiceCanvas()
        cursor = PageCursor(canvas, top=15, bottom=100)
        assert cursor.ensure(500) is False
        assert canvas.page_count == 1
