import os

import uvicorn

from paperbook_backend.logging_config import setup_logging, uvicorn_log_config
from paperbook_backend.settings import settings

setup_logging()

if __name__ == "__main__":
    uvicorn_log_level = os.environ.get("UVICORN_LOG_LEVEL", "info")

    uvicorn.run(
        "paperbook_backend.server:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8000")),
        log_config=uvicorn_log_config(uvicorn_log_level),
        reload=settings.DEBUG_MODE != "production",
        workers=1
    )
