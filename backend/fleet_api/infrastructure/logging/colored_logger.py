"""Colored lifecycle logger — ANSI-colored console logging for entity mutations.

Provides a LifecycleLogger with color-coded output per lifecycle stage,
making it easy to follow a create/update/delete through validation,
persistence, counter maintenance and carrier cascades in the terminal.

Color scheme:
    🟡 Yellow  — Validation
    🟢 Green   — Persistence
    🔵 Cyan    — Counter adjustment
    🟣 Magenta — Carrier assignment
    🔷 Blue    — Cascade on boat deletion
    🔴 Red     — Errors
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


# ── Lifecycle Stage Definitions ──────────────────────────────────────

class LifecycleStage:
    """Predefined lifecycle stages with colors and icons."""

    VALIDATE = ("VALIDATE", _Colors.YELLOW, "🔎")
    PERSIST = ("PERSIST", _Colors.GREEN, "💾")
    COUNTER = ("COUNTER", _Colors.CYAN, "🔢")
    RELATION = ("RELATION", _Colors.MAGENTA, "⚓")
    CASCADE = ("CASCADE", _Colors.BLUE, "🔗")


# ── LifecycleLogger ──────────────────────────────────────────────────

class LifecycleLogger:
    """Color-coded logger for entity lifecycle steps.

    Usage:
        log = LifecycleLogger("EntityLifecycle")
        with log.timed_step(LifecycleStage.PERSIST, "Saving Boat"):
            key = await store.put(...)
        log.detail("Counter adjusted", kind="Boat", delta=1)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        self._logger.debug(formatted + self._details(kwargs))

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        self._logger.info(formatted + self._details(kwargs))

    def step_rejected(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log an expected rejection (bad input, conflict) — not an error."""
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.YELLOW}✗ {message}{_Colors.RESET}"
        )
        self._logger.info(formatted + self._details(kwargs))

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        label, _, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        self._logger.debug(formatted + self._details(kwargs))

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time.

        A failure leaves a one-line trace and is re-raised unchanged; the
        component that detected it reports the details.
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            label, _, icon = stage
            self._logger.warning(
                f"{_Colors.RED}{icon} [{label}] {message} — aborted after {elapsed:.3f}s "
                f"({type(e).__name__}){_Colors.RESET}"
            )
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed:.3f}s", **kwargs)

    @staticmethod
    def _details(kwargs: dict[str, Any]) -> str:
        if not kwargs:
            return ""
        details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
        return f" {_Colors.GRAY}({details}){_Colors.RESET}"
