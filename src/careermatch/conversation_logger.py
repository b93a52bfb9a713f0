"""Per-session conversation logs.

Every agent run appends JSON lines to `<log_dir>/<date>_<session>.jsonl`:
the user message, each model request and response, each tool call and
result, the final content and the stop reason. Fields whose value is
None are left out of the line.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

MAX_LOGGED_OUTPUT = 2000


class ConversationLogger:
    """Appends agent events to one JSONL file per session and day."""

    def __init__(self, log_dir: Path | str | None = None) -> None:
        """Create the logger, making `log_dir` (default ./logs) if needed."""
        self.log_dir = Path(log_dir) if log_dir is not None else Path.cwd() / "logs"
        self.log_dir.mkdir(parents=True, exist_ok=True)

    def log_file(self, session_id: str) -> Path:
        """Path of today's log for a session."""
        return self.log_dir / f"{datetime.now():%Y-%m-%d}_{session_id}.jsonl"

    def _write(self, session_id: str, event: str, **fields: Any) -> None:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "session_id": session_id,
            "event": event,
        }
        entry.update((key, value) for key, value in fields.items() if value is not None)

        with open(self.log_file(session_id), "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False, default=str) + "\n")

    def log_user_message(self, session_id: str, user_id: str, content: str) -> None:
        self._write(session_id, "user_message", user_id=user_id, content=content)

    def log_assistant_message(self, session_id: str, content: str) -> None:
        self._write(session_id, "assistant_message", content=content)

    def log_llm_request(
        self, session_id: str, model: str, messages_count: int, tools_count: int
    ) -> None:
        self._write(
            session_id,
            "llm_request",
            model=model,
            messages_count=messages_count,
            tools_count=tools_count,
        )

    def log_llm_response(
        self,
        session_id: str,
        has_content: bool,
        tool_calls_count: int,
        finish_reason: str | None = None,
    ) -> None:
        self._write(
            session_id,
            "llm_response",
            has_content=has_content,
            tool_calls_count=tool_calls_count,
            finish_reason=finish_reason,
        )

    def log_tool_call(
        self, session_id: str, tool_name: str, tool_args: dict[str, Any], tool_call_id: str
    ) -> None:
        self._write(
            session_id,
            "tool_call",
            tool_name=tool_name,
            tool_args=tool_args,
            tool_call_id=tool_call_id,
        )

    def log_tool_result(
        self,
        session_id: str,
        tool_name: str,
        success: bool,
        output: str,
        tool_call_id: str,
        error: str | None = None,
        duration_ms: float | None = None,
    ) -> None:
        """Log a tool result. Output is cut to MAX_LOGGED_OUTPUT characters."""
        self._write(
            session_id,
            "tool_result",
            tool_name=tool_name,
            tool_call_id=tool_call_id,
            success=success,
            output=(output or "")[:MAX_LOGGED_OUTPUT],
            error=error,
            duration_ms=duration_ms,
        )

    def log_error(self, session_id: str, error: str, context: str | None = None) -> None:
        self._write(session_id, "error", error=error, context=context)

    def log_agent_stop(
        self, session_id: str, stop_reason: str, turns: int, tool_calls_total: int
    ) -> None:
        self._write(
            session_id,
            "agent_stop",
            stop_reason=stop_reason,
            turns=turns,
            tool_calls_total=tool_calls_total,
        )


_default_logger: ConversationLogger | None = None


def get_conversation_logger(log_dir: Path | str | None = None) -> ConversationLogger:
    """Process-wide logger, created on first use."""
    global _default_logger
    if _default_logger is None:
        _default_logger = ConversationLogger(log_dir)
    return _default_logger


def reset_conversation_logger() -> None:
    """Forget the process-wide logger so the next call builds a new one."""
    global _default_logger
    _default_logger = None
