import uvicorn

from spendwise.core.config import settings


def main() -> None:
    uvicorn.run("spendwise.main:app", host=settings.app_host, port=settings.app_port, reload=settings.app_debug)


if __name__ == "__main__":
    main()
