import uvicorn

from empgen.core.config import settings


def main() -> None:
    """Serve the application; startup aborts without binding if MongoDB is unreachable."""
    uvicorn.run(
        "empgen.main:app",
        host=settings.HOST,
        port=settings.PORT,
        # Logging is configured by empgen.core.logging_config
        log_config=None,
    )


if __name__ == "__main__":
    main()
