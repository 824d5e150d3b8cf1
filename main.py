import uvicorn

from studiq.core.config import settings
from studiq.main import app  # noqa: F401


if __name__ == "__main__":
    try:
        uvicorn.run(
            "studiq.main:app",
            host="0.0.0.0",
            port=settings.app.port,
            reload=not settings.app.is_production,
        )
    except Exception as e:
        print(f"An error occurred when starting the server: {e}.")
