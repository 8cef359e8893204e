"""Stdout display adapter.

Implements DisplayPort by printing a pass/fail summary of a run to a
terminal stream with human-readable formatting.
"""

import asyncio
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from caseflow.core.models import TestCase
from caseflow.core.ports import DisplayPort

logger = logging.getLogger(__name__)


class StdoutDisplayAdapter(DisplayPort):
    """Prints run summaries to stdout (or any text stream)."""

    def __init__(self, verbose: bool = False, width: int = 80, stream: TextIO | None = None):
        """Initialize stdout display adapter.

        Args:
            verbose: If True, list passed cases as well as failed ones.
            width: Width of the separator lines.
            stream: Stream to write to. Resolved to ``sys.stdout`` at
                display time when omitted, so redirection is honoured.
        """
        self.verbose = verbose
        self.width = width
        self.stream = stream

    async def display(self, cases: Sequence[TestCase], title: str) -> bool:
        """Print a summary of the given cases."""
        successes = sum(1 for case in cases if case.passed)
        all_passed = successes == len(cases)

        lines = [self._format_header(title, successes, len(cases), all_passed)]
        for case in cases:
            if self.verbose or not case.passed:
                lines.append(self._format_case(case))
        lines.append(self._format_footer())

        stream = self.stream or sys.stdout
        await asyncio.to_thread(print, "\n".join(lines), file=stream)
        logger.debug(f"Displayed {len(cases)} case(s) for {title}")
        return all_passed

    def _format_header(self, title: str, successes: int, total: int, all_passed: bool) -> str:
        """Format the summary header."""
        lines = [
            "=" * self.width,
            f"{title}: {successes} of {total} test cases passed",
            f"Status: {'SUCCEEDED' if all_passed else 'FAILED'}",
            "-" * self.width,
        ]
        return "\n".join(lines)

    @staticmethod
    def _format_case(case: TestCase) -> str:
        """Format a single case line."""
        case_id = case.id or ""
        if case.passed:
            return f"  [PASS] ({case_id}): Success"
        if not case.completed:
            return f"  [SKIP] ({case_id}): not run"
        return f"  [FAIL] ({case_id}): {case.error_message}"

    def _format_footer(self) -> str:
        """Format the summary footer."""
        return "=" * self.width
