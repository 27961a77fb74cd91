from transcribe_agent.exceptions import FilenameDerivationError

SYNTHETIC_STEM = "audio"


def derive_filename(source: str) -> str:
    """Build the upload filename for the backend from a URL or original filename.

    Only the extension survives (the backend may pick a decoder from it), so
    ``https://host/path/clip.WAV`` becomes ``audio.WAV``.

    Raises:
        FilenameDerivationError: ``source`` has no ``.`` or ends with one.
    """
    dot = source.rfind(".")
    if dot == -1 or dot == len(source) - 1:
        raise FilenameDerivationError("invalid or missing file extension")
    return SYNTHETIC_STEM + source[dot:]
