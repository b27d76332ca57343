import uvicorn

from .config import get_settings
from .logging_config import setup_logging


def main() -> None:
    settings = get_settings()
    setup_logging(settings)
    uvicorn.run(
        "surftracker.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
