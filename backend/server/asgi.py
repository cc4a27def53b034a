"""
ASGI entry point.

Used by uvicorn / gunicorn.
"""

from dotenv import load_dotenv

load_dotenv()

from server.app import create_app  # pylint: disable=wrong-import-position

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=app.state.config.host,
        port=app.state.config.port,
        log_level=app.state.config.log_level.lower(),
    )
