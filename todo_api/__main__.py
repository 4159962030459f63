import uvicorn

from todo_api.config import load_settings
from todo_api.logging_setup import setup_logging
from todo_api.main import create_app


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)
    app = create_app(settings)
    # Also runnable as: uvicorn todo_api.main:create_app --factory
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
