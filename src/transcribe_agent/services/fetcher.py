"""Size-bounded download of remote audio.

The ceiling is enforced twice: an advertised ``Content-Length`` above the limit
is rejected before any body byte is read, and the body itself is read through
a ``max_audio_size + 1`` byte window so a missing or lying header cannot make
us buffer more than that.
"""

import logging

import httpx

from transcribe_agent.config import Settings
from transcribe_agent.exceptions import FetchError, SizeExceededError

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 10
IDENTITY_ENCODING = {"Accept-Encoding": "identity"}


class AudioFetcher:
    """Async HTTP GET with a hard byte ceiling."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None) -> None:
        self._max_bytes = settings.max_audio_size
        self._max_mb = settings.max_audio_size_mb
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.fetch_timeout),
            follow_redirects=True,
            max_redirects=MAX_REDIRECTS,
        )

    async def fetch(self, url: str) -> bytes:
        """Download ``url`` and return its body.

        The status code is not inspected: whatever the server sends back is
        treated as the audio payload. Compression is refused and the body is
        counted as it arrives on the wire, so a compressed body cannot expand
        past the ceiling in memory.

        Raises:
            SizeExceededError: declared or actual size is over the ceiling.
            FetchError: the request could not be completed.
        """
        try:
            async with self._client.stream("GET", url, headers=IDENTITY_ENCODING) as response:
                declared = _content_length(response)
                if declared is not None and declared > self._max_bytes:
                    raise SizeExceededError(
                        f"file exceeds maximum size of {self._max_mb} MB"
                    )

                limit = self._max_bytes + 1
                buf = bytearray()
                async for chunk in response.aiter_raw():
                    buf.extend(chunk[: limit - len(buf)])
                    if len(buf) >= limit:
                        break
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            # ValueError covers IDNA failures on hosts that pass the scheme check
            raise FetchError(f"HTTP get failed: {e}") from e

        if len(buf) > self._max_bytes:
            raise SizeExceededError("downloaded file exceeds size limit")

        logger.debug("Fetched %d bytes from %s", len(buf), url)
        return bytes(buf)

    async def close(self) -> None:
        await self._client.aclose()


def _content_length(response: httpx.Response) -> int | None:
    value = response.headers.get("content-length")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
