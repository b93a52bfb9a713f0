"""Client for the external job-scraper service."""

from __future__ import annotations

from typing import Any

import httpx

VALID_JOB_TYPES = {"full-time", "part-time", "contract", "internship", "casual"}
VALID_CURRENCIES = {"NZD", "AUD", "USD", "CNY", "EUR", "GBP"}
DEFAULT_CURRENCY = "NZD"


class ScraperError(Exception):
    """The scraper service could not produce a job record."""


def sanitize_job(data: dict[str, Any]) -> dict[str, Any]:
    """Normalize a raw job record from the scraper service."""

    def positive(value: Any) -> float | None:
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            return value
        return None

    job_type = data.get("job_type")
    currency = data.get("salary_currency")
    return {
        "title": str(data.get("title") or ""),
        "company": str(data.get("company") or ""),
        "location": data.get("location") or None,
        "job_type": job_type if job_type in VALID_JOB_TYPES else None,
        "salary_min": positive(data.get("salary_min")),
        "salary_max": positive(data.get("salary_max")),
        "salary_currency": currency if currency in VALID_CURRENCIES else DEFAULT_CURRENCY,
        "description": data.get("description") or None,
        "requirements": data.get("requirements") or None,
        "benefits": data.get("benefits") or None,
        "posted_date": data.get("posted_date") or None,
        "deadline": data.get("deadline") or None,
    }


class ScraperClient:
    """Fetches parsed job records from the scraper service.

    The service is called as `GET <scraper_url>?url=<job url>` and answers
    with a JSON job record.
    """

    def __init__(
        self,
        scraper_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.scraper_url = scraper_url
        self._timeout = timeout
        self._transport = transport

    async def parse_job(self, url: str) -> dict[str, Any]:
        """Return a sanitized job record for the posting at `url`."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(self.scraper_url, params={"url": url})
        except httpx.TimeoutException:
            raise ScraperError(f"Scraper timed out after {self._timeout}s") from None
        except httpx.RequestError as e:
            raise ScraperError(f"Scraper request failed: {e}") from e

        if not response.is_success:
            raise ScraperError(f"Scraper returned {response.status_code}: {response.text[:200]}")

        try:
            data = response.json()
        except ValueError:
            raise ScraperError("Scraper returned invalid JSON") from None
        if not isinstance(data, dict):
            raise ScraperError("Scraper returned a non-object response")

        return sanitize_job(data)
