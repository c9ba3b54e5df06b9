"""Unit tests for transcript helpers used by the analysis page."""

import pytest_check as check

from inquiry_analyst.models.schemas import TranscriptTurn
from inquiry_analyst.ui.api_client import procedure_turns


def turn(role: str, status: str = "complete") -> TranscriptTurn:
    return TranscriptTurn(role=role, text="", html="", plain_text="", status=status)


class TestProcedureTurns:
    """Tests for picking the user turns that hold procedure text."""

    def test_first_user_turn(self) -> None:
        turns = [turn("user"), turn("model"), turn("user"), turn("model")]

        check.equal(procedure_turns(turns), {0})

    def test_retry_after_failed_start(self) -> None:
        """A procedure resent after a failed request is folded too."""
        turns = [
            turn("user"),
            turn("model", status="error"),
            turn("user"),
            turn("model"),
            turn("user"),
        ]

        check.equal(procedure_turns(turns), {0, 2})

    def test_interrupted_answer_ends_the_procedure_turns(self) -> None:
        turns = [turn("user"), turn("model", status="interrupted"), turn("user")]

        check.equal(procedure_turns(turns), {0})

    def test_empty_transcript(self) -> None:
        check.equal(procedure_turns([]), set())
