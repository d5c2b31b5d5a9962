"""Tests for the HTTP blob store against a local aiohttp server."""

import asyncio

import pytest
from aiohttp import test_utils, web

from gst_invoice.storage.blob_store import HttpBlobStore
from gst_invoice.storage.service import InvoiceStorage
from gst_invoice.utils.exceptions import ListError, UploadError

TOKEN = "rw-token"


def blob(pathname, uploaded_at):
    url = f"https://store.example/{pathname}"
    return {
        "url": url,
        "downloadUrl": f"{url}?download=1",
        "pathname": pathname,
        "size": 1024,
        "uploadedAt": uploaded_at,
    }


def blob_api(requests):
    """Vercel-Blob-style API that records every request it receives."""

    def authorized(request):
        return request.headers.get("authorization") == f"Bearer {TOKEN}"

    async def put_blob(request):
        name = request.match_info["name"]
        requests.append({
            "method": "PUT",
            "name": name,
            "headers": request.headers.copy(),
            "body": await request.read(),
        })
        if not authorized(request):
            return web.json_response({"error": {"message": "Invalid token"}}, status=403)
        if name == "Invoice-Denied.pdf":
            return web.json_response({"error": {"message": "Access denied"}}, status=403)
        if name == "Invoice-Html.pdf":
            return web.Response(text="<html>oops</html>", content_type="text/html")
        if name == "Invoice-Gateway.pdf":
            return web.Response(text="<html>Bad gateway</html>", status=502, content_type="text/html")

        reply = blob(name, "")
        del reply["size"], reply["uploadedAt"]
        return web.json_response(reply)

    async def list_blobs(request):
        requests.append({"method": "GET", "query": dict(request.query)})
        if not authorized(request):
            return web.json_response({"error": {"message": "Invalid token"}}, status=403)
        if request.query.get("cursor") == "page-2":
            return web.json_response({
                "blobs": [blob("Invoice-B.pdf", "2026-10-19T10:00:00.000Z")],
                "hasMore": False,
            })
        return web.json_response({
            "blobs": [
                blob("Invoice-A.pdf", "2026-10-19T09:00:00.000Z"),
                blob("notes.txt", "2026-10-19T11:00:00.000Z"),
            ],
            "hasMore": True,
            "cursor": "page-2",
        })

    app = web.Application()
    app.router.add_put("/{name}", put_blob)
    app.router.add_get("/", list_blobs)
    return app


def run_against(app, scenario, token=TOKEN):
    """Serve ``app`` locally and run ``scenario(store)`` against it."""

    async def main():
        async with test_utils.TestServer(app) as server:
            store = HttpBlobStore(str(server.make_url("/")), token=token)
            return await scenario(store)

    return asyncio.run(main())


@pytest.fixture
def requests():
    return []


@pytest.fixture
def api(requests):
    return blob_api(requests)


class TestHttpPut:

    def test_put_sends_headers_and_reads_reply(self, api, requests):
        info = run_against(api, lambda store: store.put("Invoice-A.pdf", b"%PDF-1.4", "application/pdf"))

        assert info.pathname == "Invoice-A.pdf"
        assert info.url == "https://store.example/Invoice-A.pdf"
        assert info.download_url.endswith("?download=1")
        assert info.size == len(b"%PDF-1.4")

        sent = requests[0]
        assert sent["body"] == b"%PDF-1.4"
        assert sent["headers"]["x-api-version"] == "7"
        assert sent["headers"]["x-content-type"] == "application/pdf"
        assert sent["headers"]["x-add-random-suffix"] == "0"
        assert sent["headers"]["x-vercel-blob-access"] == "public"

    def test_rejected_put_keeps_server_message(self, api):
        with pytest.raises(UploadError) as excinfo:
            run_against(api, lambda store: store.put("Invoice-Denied.pdf", b"%PDF", "application/pdf"))
        assert excinfo.value.details["reason"] == "Access denied"

    def test_wrong_token(self, api):
        with pytest.raises(UploadError) as excinfo:
            run_against(
                api,
                lambda store: store.put("Invoice-A.pdf", b"%PDF", "application/pdf"),
                token="stale",
            )
        assert excinfo.value.details["reason"] == "Invalid token"

    def test_non_json_reply(self, api):
        with pytest.raises(UploadError) as excinfo:
            run_against(api, lambda store: store.put("Invoice-Html.pdf", b"%PDF", "application/pdf"))
        assert excinfo.value.details["reason"] == "Storage returned an unreadable response"

    def test_non_json_error_reports_status(self, api):
        with pytest.raises(UploadError) as excinfo:
            run_against(api, lambda store: store.put("Invoice-Gateway.pdf", b"%PDF", "application/pdf"))
        assert excinfo.value.details["reason"] == "HTTP 502"

    def test_unreachable_server(self):
        store = HttpBlobStore("http://127.0.0.1:1", token=TOKEN)
        with pytest.raises(UploadError):
            asyncio.run(store.put("Invoice-A.pdf", b"%PDF", "application/pdf"))


class TestHttpList:

    def test_listing_follows_cursor(self, api, requests):
        blobs = run_against(api, lambda store: store.list())

        assert [b.pathname for b in blobs] == ["Invoice-A.pdf", "notes.txt", "Invoice-B.pdf"]
        assert requests[0]["query"] == {"limit": "1000"}
        assert requests[1]["query"] == {"limit": "1000", "cursor": "page-2"}

    def test_list_rejected(self, api):
        with pytest.raises(ListError) as excinfo:
            run_against(api, lambda store: store.list(), token="stale")
        assert excinfo.value.details["reason"] == "Invalid token"

    def test_more_pages_without_cursor(self):
        async def endless(request):
            return web.json_response({"blobs": [], "hasMore": True})

        app = web.Application()
        app.router.add_get("/", endless)
        with pytest.raises(ListError) as excinfo:
            run_against(app, lambda store: store.list())
        assert "no cursor" in excinfo.value.details["reason"]


class TestStorageOverHttp:

    def test_rejected_upload_is_structured(self, api):
        result = run_against(api, lambda store: InvoiceStorage(store).upload(b"%PDF", "Invoice-Denied.pdf"))
        assert not result.success
        assert result.error == "Access denied"

    def test_upload(self, api):
        result = run_against(api, lambda store: InvoiceStorage(store).upload(b"%PDF", "Invoice-A.pdf"))
        assert result.success
        assert result.url == "https://store.example/Invoice-A.pdf"
        assert result.size == 4

    def test_list_invoices_newest_first(self, api):
        result = run_against(api, lambda store: InvoiceStorage(store).list_invoices())
        assert result.success
        assert [b.pathname for b in result.invoices] == ["Invoice-B.pdf", "Invoice-A.pdf"]
