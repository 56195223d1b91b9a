class TailorError(Exception):
    """Base class for every failure an analysis can end in.

    Each subclass carries a ``kind`` (machine-readable) and a ``title``
    (shown to the user) so the orchestrator can turn any of them into
    a single notification.
    """

    kind = "Error"
    title = "Something went wrong"

    def __init__(self, description: str):
        super().__init__(description)
        self.description = description


class MissingInputError(TailorError):
    kind = "MissingInput"
    title = "Missing job description"


class MissingCredentialError(TailorError):
    kind = "MissingCredential"
    title = "Missing API key"


class TransportError(TailorError):
    """The completion endpoint could not be reached or answered non-2xx."""

    kind = "TransportError"
    title = "Request failed"

    def __init__(self, status: int | None, reason: str):
        if status is None:
            description = f"API call failed: {reason}"
        else:
            description = f"API call failed: {status} {reason}".rstrip()
        super().__init__(description)
        self.status = status
        self.reason = reason


class ResponseFormatError(TailorError):
    """The endpoint answered, but not in the shape we asked for."""

    kind = "ResponseFormatError"
    title = "Unexpected response"

    def __init__(self, reason: str):
        super().__init__(f"Invalid response format: {reason}")
        self.reason = reason


class ResumeFileError(TailorError):
    kind = "ResumeFile"
    title = "Could not read resume"
