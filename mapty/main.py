"""Entry: start the local API server."""
import logging
import uvicorn

from mapty.config import API_HOST, API_PORT

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(name)s: %(message)s")
    uvicorn.run(
        "mapty.api.app:app",
        host=API_HOST,
        port=API_PORT,
        reload=True,
    )
