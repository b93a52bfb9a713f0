"""Job tools: scrape, batch import and save."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from ..jobs import JobStore
from .base import Tool, ToolContext

logger = logging.getLogger(__name__)


class JobParser(Protocol):
    """Turns a job posting URL into a job record."""

    async def parse_job(self, url: str) -> dict[str, Any]:
        ...


class ScrapeJobTool(Tool):
    """Scrape and parse a single job posting."""

    def __init__(self, parser: JobParser) -> None:
        self.parser = parser

    @property
    def name(self) -> str:
        return "scrape_job"

    @property
    def description(self) -> str:
        return (
            "Scrape and parse job details from a given URL. "
            "Use this when the user provides a link to a job posting."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": "The URL of the job posting to scrape",
                },
            },
            "required": ["url"],
        }

    async def execute(self, args: dict[str, Any], context: ToolContext) -> Any:
        job = await self.parser.parse_job(args["url"])
        return {"success": True, "data": {**job, "source_url": args["url"]}}


class BatchImportJobsTool(Tool):
    """Scrape and save several job postings in one call."""

    def __init__(self, parser: JobParser, store: JobStore) -> None:
        self.parser = parser
        self.store = store

    @property
    def name(self) -> str:
        return "batch_import_jobs"

    @property
    def description(self) -> str:
        return (
            "Import multiple jobs from a list of URLs. Use this when the user "
            "provides one or more job links to save or analyze."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "urls": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "List of job URLs to import",
                },
            },
            "required": ["urls"],
        }

    async def execute(self, args: dict[str, Any], context: ToolContext) -> Any:
        results: list[dict[str, Any]] = []

        for url in args["urls"]:
            if context.cancelled:
                results.append({"url": url, "success": False, "error": "Cancelled"})
                continue
            try:
                job = await self.parser.parse_job(url)
                if not job.get("title") or not job.get("company"):
                    results.append({
                        "url": url,
                        "success": False,
                        "error": "Could not extract title or company",
                    })
                    continue
                saved = self.store.save(context.user_id, {**job, "source_url": url})
            except Exception as e:
                logger.warning("Error importing %s: %s", url, e)
                results.append({"url": url, "success": False, "error": str(e)})
                continue

            results.append({
                "url": url,
                "success": True,
                "title": saved["title"],
                "company": saved["company"],
                "jobId": saved["id"],
            })

        success_count = sum(1 for r in results if r["success"])
        fail_count = len(results) - success_count
        return {
            "summary": f"Imported {success_count} jobs, failed {fail_count}.",
            "results": results,
        }


class SaveJobTool(Tool):
    """Persist a job posting for the user."""

    def __init__(self, store: JobStore) -> None:
        self.store = store

    @property
    def name(self) -> str:
        return "save_job"

    @property
    def description(self) -> str:
        return (
            "Save a job posting to the database. Use this when the user explicitly "
            'confirms they want to save a job, or asks to "save this".'
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "title": {"type": "string", "description": "Job title"},
                "company": {"type": "string", "description": "Company name"},
                "location": {"type": "string", "description": "Job location"},
                "description": {"type": "string", "description": "Full job description"},
                "salary_min": {"type": "number", "description": "Minimum salary"},
                "salary_max": {"type": "number", "description": "Maximum salary"},
                "source_url": {"type": "string", "description": "URL of the job posting"},
                "job_type": {
                    "type": "string",
                    "description": "Type of job (full-time, contract, etc.)",
                },
            },
            "required": ["title", "company"],
        }

    async def execute(self, args: dict[str, Any], context: ToolContext) -> Any:
        saved = self.store.save(context.user_id, args)
        return {"success": True, "jobId": saved["id"], "message": "Job saved successfully"}
