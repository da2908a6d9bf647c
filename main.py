from __future__ import annotations

import os

import uvicorn

from tradebook.utils.logger import setup_logging


def main() -> None:
    setup_logging()

    port = int(os.environ.get("PORT", 8000))
    host = "0.0.0.0"

    uvicorn.run(
        "tradebook.api.webapp:app",
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":
    main()
