"""Run the API with uvicorn: `python -m pokemon_api` (listens on SERVER_HOST:PORT)."""

import uvicorn

from pokemon_api.config import settings


def main() -> None:
    uvicorn.run(
        "pokemon_api.main:app",
        host=settings.server_host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
