"""Prompt composition for analysis and follow-up requests."""

from inquiry_analyst.prompts.composer import (
    DEFAULT_ATTACHMENT_INSTRUCTION,
    compose_follow_up,
    compose_initial,
    describe_user_turn,
    load_template,
)
from inquiry_analyst.prompts.templates import ANALYSIS_TEMPLATE, SUBJECT_PLACEHOLDER

__all__ = [
    "ANALYSIS_TEMPLATE",
    "DEFAULT_ATTACHMENT_INSTRUCTION",
    "SUBJECT_PLACEHOLDER",
    "compose_follow_up",
    "compose_initial",
    "describe_user_turn",
    "load_template",
]
