URL_PREFIXES = ("http://", "https://")


def extract_audio_url(text: str) -> str | None:
    """Return the first whitespace-delimited token that looks like an HTTP(S) URL.

    Only the scheme prefix is checked; the token is otherwise returned as-is.
    """
    for token in text.split():
        if token.startswith(URL_PREFIXES):
            return token
    return None
