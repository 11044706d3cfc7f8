"""Run the API server: ``python -m scrobble_insights``."""

import uvicorn

from scrobble_insights.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "scrobble_insights.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
