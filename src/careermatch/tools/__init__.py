"""Tool contract, registry and job-search tool implementations."""

from .base import AgentContext, Tool, ToolContext, ToolResult
from .jobs import BatchImportJobsTool, JobParser, SaveJobTool, ScrapeJobTool
from .registry import ToolRegistry
from .resume import AnalyzeResumeTool, LLMResumeParser, ResumeParser
from .scraper import ScraperClient, ScraperError, sanitize_job

__all__ = [
    "AgentContext",
    "AnalyzeResumeTool",
    "BatchImportJobsTool",
    "JobParser",
    "LLMResumeParser",
    "ResumeParser",
    "SaveJobTool",
    "ScrapeJobTool",
    "ScraperClient",
    "ScraperError",
    "Tool",
    "ToolContext",
    "ToolRegistry",
    "ToolResult",
    "sanitize_job",
]
