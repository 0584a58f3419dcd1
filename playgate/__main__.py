import uvicorn

from playgate.main import get_settings


def main() -> None:
    settings = get_settings()
    # sessions live in this process, so run exactly one worker
    uvicorn.run(
        "playgate.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        workers=1,
    )


if __name__ == "__main__":
    main()
