import uvicorn

from message_service.config import settings


def main() -> None:
    uvicorn.run(
        app="message_service.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
