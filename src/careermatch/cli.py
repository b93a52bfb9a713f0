"""Interactive command-line interface for CareerMatch."""

from __future__ import annotations

import uuid

from groq import AsyncGroq
from openai import AsyncOpenAI

from .agent import AgentConfig, AgentLoop, ChatResult, ReflectionWriter, StopReason
from .config import Settings
from .conversation_logger import get_conversation_logger
from .errors import ProviderError
from .jobs import JobStore
from .memory import FactExtractor, MemoryStore, RememberFactTool
from .providers import GroqChatProvider, OpenAIEmbeddingProvider
from .tools import (
    AgentContext,
    AnalyzeResumeTool,
    BatchImportJobsTool,
    LLMResumeParser,
    SaveJobTool,
    ScrapeJobTool,
    ScraperClient,
    Tool,
    ToolRegistry,
)

BANNER = """
╔══════════════════════════════════════════╗
║          CareerMatch AI v0.1.0           ║
║        Your job-search assistant         ║
╚══════════════════════════════════════════╝

Commands:
  /exit, /quit  - Exit the CLI
  /reset        - Start a new session
  /facts        - Show what I know about you
  /help         - Show this help

Type your message and press Enter.
"""

REQUEST_FAILED = "Request failed. Please try again."


class CLI:
    """Interactive command-line interface for the agent."""

    def __init__(self, settings: Settings | None = None, user_id: str = "local-user") -> None:
        self.settings = settings or Settings.from_env()
        self.user_id = user_id

        provider = GroqChatProvider(
            AsyncGroq(api_key=self.settings.groq_api_key),
            model=self.settings.model,
        )
        embedder = OpenAIEmbeddingProvider(
            AsyncOpenAI(
                api_key=self.settings.openai_api_key,
                base_url=self.settings.openai_base_url,
            ),
            model=self.settings.embedding_model,
            dimensions=self.settings.embedding_dimensions,
        )

        self.memory_store = MemoryStore(self.settings.db_path, embedder)
        self.memory_store.init_db()
        self.job_store = JobStore(self.settings.db_path)
        self.job_store.init_db()

        self.registry = ToolRegistry(self._build_tools(provider))
        self.reflection = ReflectionWriter(
            self.memory_store,
            extractor=FactExtractor(provider),
            workers=self.settings.reflection_workers,
            max_queue_size=self.settings.reflection_queue_size,
        )
        self.agent = AgentLoop(
            self.registry,
            provider,
            self.memory_store,
            config=AgentConfig.from_settings(self.settings),
            reflection=self.reflection,
            conversation_logger=get_conversation_logger(self.settings.log_dir),
        )
        self.session_id = self._new_session_id()

    def _build_tools(self, provider: GroqChatProvider) -> list[Tool]:
        tools: list[Tool] = [
            SaveJobTool(self.job_store),
            AnalyzeResumeTool(LLMResumeParser(provider)),
            RememberFactTool(self.memory_store),
        ]
        # Scraping tools need the external scraper service
        if self.settings.scraper_url:
            scraper = ScraperClient(self.settings.scraper_url)
            tools.append(ScrapeJobTool(scraper))
            tools.append(BatchImportJobsTool(scraper, self.job_store))
        return tools

    def _new_session_id(self) -> str:
        """Generate a new session ID."""
        return f"cli-{uuid.uuid4().hex[:8]}"

    def _reset(self) -> None:
        """Start a new session."""
        self.session_id = self._new_session_id()
        print(f"\n✓ Session reset. New session: {self.session_id}")

    def _format_response(self, result: ChatResult) -> str:
        """Format the agent's response for display."""
        response = result.response
        output = ["\n" + "─" * 40, response.content]

        if response.actions:
            output.append("")
            output.extend(f"  [{a.label}] → {a.target}" for a in response.actions)
        if response.suggestions:
            output.append("")
            output.extend(f"  • {s}" for s in response.suggestions)

        output.append("─" * 40)

        if result.stop_reason != StopReason.COMPLETE:
            output.append(f"⚠ Stopped: {result.stop_reason.value} (turns: {result.turns})")

        return "\n".join(output)

    def _format_facts(self) -> str:
        facts = self.memory_store.get_facts(self.user_id)
        if not facts:
            return "No facts stored yet."
        return "\n".join(
            f"- [{f.category.value}] {f.content} ({f.confidence:.0%})" for f in facts
        )

    async def _process_message(self, message: str) -> None:
        """Process a user message through the agent."""
        self.reflection.start()
        try:
            result = await self.agent.chat(
                self.user_id,
                message,
                AgentContext(session_id=self.session_id),
            )
        except ProviderError:
            print(f"\n❌ {REQUEST_FAILED}")
            return

        print(self._format_response(result))

    async def _handle_command(self, command: str) -> bool:
        """Handle a special command. Returns True if should continue, False to exit."""
        cmd = command.lower().strip()

        if cmd in ("/exit", "/quit", "exit", "quit"):
            print("\n👋 Goodbye!")
            return False

        if cmd == "/reset":
            self._reset()
            return True

        if cmd == "/facts":
            print(self._format_facts())
            return True

        if cmd == "/help":
            print(BANNER)
            return True

        return True

    async def close(self) -> None:
        """Flush background reflection and close the stores."""
        await self.reflection.close()
        self.memory_store.close()
        self.job_store.close()

    async def run(self) -> None:
        """Run the interactive CLI."""
        print(BANNER)
        print(f"Session: {self.session_id}\n")

        try:
            while True:
                try:
                    user_input = input("you> ").strip()

                    if not user_input:
                        continue

                    if user_input.startswith("/") or user_input.lower() in ("exit", "quit"):
                        if not await self._handle_command(user_input):
                            break
                        continue

                    await self._process_message(user_input)

                except (KeyboardInterrupt, EOFError):
                    print("\n👋 Goodbye!")
                    break
        finally:
            await self.close()


async def run_cli() -> None:
    """Run the CLI with configuration from the environment."""
    settings = Settings.from_env()

    missing = [
        name
        for name, value in (
            ("GROQ_API_KEY", settings.groq_api_key),
            ("OPENAI_API_KEY", settings.openai_api_key),
        )
        if not value
    ]
    if missing:
        print(f"❌ Error: {', '.join(missing)} not set")
        print("Please set it in your .env file or environment")
        return

    cli = CLI(settings)
    await cli.run()
