"""Start the transcribe agent: ``python -m transcribe_agent [--whisper_server_url ...]``."""

import asyncio
import logging
import sys

from pydantic import ValidationError

from transcribe_agent.config import Settings
from transcribe_agent.main import serve

logger = logging.getLogger("transcribe_agent")


def main() -> None:
    try:
        settings = Settings(_cli_parse_args=True)
    except ValidationError as e:
        logger.critical(
            "whisper_server_url, whisper_model and max_audio_size must all be set: %s", e
        )
        sys.exit(1)

    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
