from __future__ import annotations

import uvicorn

from tableside.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "tableside.api.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_config=None,
        ws_ping_interval=25.0,
        ws_ping_timeout=60.0,
    )


if __name__ == "__main__":
    main()
