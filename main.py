import uvicorn

from ted_exporter.core.config import load_settings


def main() -> None:
    settings = load_settings()
    uvicorn.run(
        "ted_exporter.factory:create_app",
        factory=True,
        host=settings.listen_host,
        port=settings.listen_port,
        reload=not settings.is_production and settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
