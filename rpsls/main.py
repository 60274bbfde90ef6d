import uvicorn

from rpsls.config import settings


def main() -> None:
    uvicorn.run("rpsls.app:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
