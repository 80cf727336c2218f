"""Run the relay with uvicorn: python -m chat_relay"""

import uvicorn

from chat_relay.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("chat_relay.main:app", host="0.0.0.0", port=settings.port)  # nosec B104


if __name__ == "__main__":
    main()
