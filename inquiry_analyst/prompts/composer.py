"""Composition of the outgoing message strings sent to the model."""

import logging
from pathlib import Path

from inquiry_analyst.errors import InvalidMessageError
from inquiry_analyst.parsing.pdf_extractor import ExtractedText
from inquiry_analyst.prompts.templates import ANALYSIS_TEMPLATE, SUBJECT_PLACEHOLDER

logger = logging.getLogger(__name__)

DEFAULT_ATTACHMENT_INSTRUCTION = "Analise o documento anexo."
ATTACHMENT_BRIDGE = (
    "Com base no anexo e no histórico anterior, responda à seguinte solicitação:"
)


def _check_template(template: str) -> None:
    occurrences = template.count(SUBJECT_PLACEHOLDER)
    if occurrences != 1:
        raise ValueError(
            f"Template must contain exactly one {SUBJECT_PLACEHOLDER} placeholder, "
            f"found {occurrences}"
        )


def load_template(path: str | Path) -> str:
    """Load an analysis template from a text file.

    Args:
        path: File containing the template.

    Returns:
        The template text.

    Raises:
        ValueError: If the template does not have exactly one insertion point.
    """
    template = Path(path).read_text(encoding="utf-8")
    _check_template(template)
    logger.info(f"Loaded analysis template from {path}")
    return template


def compose_initial(subject_text: str, template: str = ANALYSIS_TEMPLATE) -> str:
    """Build the initial analysis request.

    The subject text is placed at the template's insertion point without
    any change to its content.

    Args:
        subject_text: Procedure text pasted or extracted by the user.
        template: Instruction template with a single insertion point.

    Returns:
        The full outgoing message.

    Raises:
        InvalidMessageError: If the subject text is empty.
    """
    if not subject_text or not subject_text.strip():
        raise InvalidMessageError(
            "Carregue um PDF ou insira o texto do inquérito para análise."
        )
    _check_template(template)
    before, after = template.split(SUBJECT_PLACEHOLDER)
    return before + subject_text + after


def compose_follow_up(
    instruction: str | None,
    attachment: ExtractedText | None = None,
) -> str:
    """Build a follow-up message, optionally inlining an attachment.

    Args:
        instruction: Free-text request typed by the user. May be empty when
            an attachment is present.
        attachment: Extracted text of a document attached to this message.

    Returns:
        The outgoing message.

    Raises:
        InvalidMessageError: If there is neither an instruction nor an attachment.
    """
    instruction = (instruction or "").strip()

    if attachment is None:
        if not instruction:
            raise InvalidMessageError(
                "Insira uma mensagem ou anexe um arquivo para continuar."
            )
        return instruction

    return (
        f'Considere o seguinte anexo "{attachment.filename}":\n\n'
        f"```\n{attachment.text}\n```\n\n"
        f"{ATTACHMENT_BRIDGE}\n\n"
        f"{instruction or DEFAULT_ATTACHMENT_INSTRUCTION}"
    )


def describe_user_turn(instruction: str | None, attachment_name: str | None = None) -> str:
    """Text shown in the transcript for a user follow-up."""
    text = (instruction or "").strip()
    if attachment_name:
        note = f"_Arquivo anexado: {attachment_name}_"
        text = f"{text}\n\n{note}" if text else note
    return text
