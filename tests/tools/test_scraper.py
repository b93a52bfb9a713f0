"""Tests for the scraper client."""

import httpx
import pytest

from careermatch.tools import ScraperClient, ScraperError, sanitize_job

SCRAPER_URL = "https://scraper.example.workers.dev/"
JOB_URL = "https://jobs.example.com/postings/42"


def make_client(handler) -> ScraperClient:
    return ScraperClient(SCRAPER_URL, timeout=5.0, transport=httpx.MockTransport(handler))


class TestSanitizeJob:
    def test_keeps_valid_fields(self):
        job = sanitize_job({
            "title": "Backend Engineer",
            "company": "Acme",
            "location": "Wellington",
            "job_type": "full-time",
            "salary_min": 90000,
            "salary_max": 120000,
            "salary_currency": "AUD",
        })
        assert job["title"] == "Backend Engineer"
        assert job["job_type"] == "full-time"
        assert job["salary_min"] == 90000
        assert job["salary_currency"] == "AUD"

    def test_drops_invalid_values(self):
        job = sanitize_job({
            "title": None,
            "job_type": "freelance",
            "salary_min": -5,
            "salary_max": "100k",
            "salary_currency": "JPY",
            "location": "",
        })
        assert job["title"] == ""
        assert job["company"] == ""
        assert job["job_type"] is None
        assert job["salary_min"] is None
        assert job["salary_max"] is None
        assert job["salary_currency"] == "NZD"
        assert job["location"] is None

    def test_boolean_salary_rejected(self):
        assert sanitize_job({"salary_min": True})["salary_min"] is None


class TestScraperClient:
    @pytest.mark.asyncio
    async def test_parse_job(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"title": "Data Analyst", "company": "Kiwi Co"})

        job = await make_client(handler).parse_job(JOB_URL)

        assert job["title"] == "Data Analyst"
        assert job["company"] == "Kiwi Co"
        assert job["salary_currency"] == "NZD"
        assert seen[0].method == "GET"
        assert seen[0].url.params["url"] == JOB_URL

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        client = make_client(lambda request: httpx.Response(502, text="bad gateway"))
        with pytest.raises(ScraperError, match="502"):
            await client.parse_job(JOB_URL)

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        client = make_client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(ScraperError, match="invalid JSON"):
            await client.parse_job(JOB_URL)

    @pytest.mark.asyncio
    async def test_non_object_json(self):
        client = make_client(lambda request: httpx.Response(200, json=["a", "b"]))
        with pytest.raises(ScraperError, match="non-object"):
            await client.parse_job(JOB_URL)

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ScraperError, match="timed out after 5.0s"):
            await make_client(handler).parse_job(JOB_URL)

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ScraperError, match="request failed"):
            await make_client(handler).parse_job(JOB_URL)
