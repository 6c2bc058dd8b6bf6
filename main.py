import uvicorn

from app.app import CONFIG
from app.config import Env


def run() -> None:
    uvicorn.run(
        "app.app:app",
        host=CONFIG.host,
        port=CONFIG.port,
        reload=CONFIG.env == Env.local,
        log_level=CONFIG.log_level.lower(),
    )


if __name__ == "__main__":
    run()
