"""Error taxonomy for the inquiry analyst.

Every error is caught at the boundary of the operation that triggered it
(API route or UI handler) and turned into user-visible feedback.
"""


class AnalystError(Exception):
    """Base class for all inquiry analyst errors."""


class ExtractionError(AnalystError):
    """Raised when a document cannot be turned into text."""


class InvalidMessageError(AnalystError):
    """Raised when an outgoing message would be empty."""


class SessionNotStartedError(AnalystError):
    """Raised when a follow-up is attempted before the initial analysis."""

    def __init__(
        self,
        message: str = "A sessão de chat não foi iniciada. Gere uma análise inicial primeiro.",
    ) -> None:
        super().__init__(message)


class SessionAlreadyStartedError(AnalystError):
    """Raised when the initial analysis is requested on an active session."""

    def __init__(
        self,
        message: str = "Já existe uma análise em andamento. Inicie uma nova análise para recomeçar.",
    ) -> None:
        super().__init__(message)


class RequestInFlightError(AnalystError):
    """Raised when a request is dispatched while another one is running."""

    def __init__(
        self,
        message: str = "Aguarde a conclusão da resposta atual antes de enviar outra mensagem.",
    ) -> None:
        super().__init__(message)


class ModelRequestError(AnalystError):
    """Raised when dispatching a request to the model service fails.

    Attributes:
        cause: The underlying transport or service exception, if any.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class StreamInterruptedError(AnalystError):
    """Raised when a response stream fails after it started.

    Attributes:
        fragments_received: Fragments consumed before the failure.
    """

    def __init__(self, message: str, fragments_received: int = 0) -> None:
        super().__init__(message)
        self.fragments_received = fragments_received
