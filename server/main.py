# main.py
# Entry point: serve the pairings API with uvicorn

import logging

from api import app
from config import HOST, PORT

logger = logging.getLogger("pairings.main")

# ================= Run Server =================
if __name__ == "__main__":
    import uvicorn

    logger.info(f"Pairings parser listening on {HOST}:{PORT}")

    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        log_level="info",
        access_log=True,
    )
