from starlette.formparsers import MultiPartException


class TranscribeAgentError(Exception):
    """Base exception for the transcribe agent."""


class ParseError(TranscribeAgentError):
    """Raised when a request or backend body cannot be decoded."""


class TranscriptParseError(ParseError):
    """Raised when the backend response is not a {"text": ...} object."""


class InvalidRequestError(TranscribeAgentError):
    """Raised when a chat request carries nothing to transcribe."""


class FetchError(TranscribeAgentError):
    """Raised when the remote audio cannot be retrieved."""


class SizeExceededError(FetchError):
    """Raised when remote audio is larger than the size ceiling."""


class UploadTooLargeError(TranscribeAgentError, MultiPartException):
    """Raised when an uploaded request body exceeds the size ceiling.

    Being a MultiPartException lets the multipart parser close any file parts
    it already spooled before the limit was hit.
    """


class TranscriptionError(TranscribeAgentError):
    """Raised when audio cannot be submitted to the transcription backend."""


class FilenameDerivationError(TranscriptionError):
    """Raised when no usable file extension can be recovered from the source."""


class RequestConstructionError(TranscriptionError):
    """Raised when the backend request cannot be built (e.g. malformed URL)."""


class BackendTransportError(TranscriptionError):
    """Raised on network failure while talking to the backend."""


class ResponseReadError(TranscriptionError):
    """Raised when the backend response body cannot be fully read."""
