"""Run the gateway with uvicorn: `python -m omnicognitor`."""

import uvicorn

from omnicognitor.config import Settings


def main() -> None:
    settings = Settings()
    uvicorn.run(
        "omnicognitor.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
