import uvicorn

from finboss.config import settings


def main() -> None:
    uvicorn.run(
        "finboss.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.app_env.lower() == "development",
        log_config=None,
    )


if __name__ == "__main__":
    main()
