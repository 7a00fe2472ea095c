"""Entry: start the API server."""
import logging
import uvicorn

from advent.config import API_HOST, API_PORT

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    uvicorn.run(
        "advent.api.app:app",
        host=API_HOST,
        port=API_PORT,
        reload=True,
    )
