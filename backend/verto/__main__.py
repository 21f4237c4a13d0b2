"""Run the Verto API with uvicorn: `python -m verto`."""

import uvicorn

from .services.config import config_service, ConfigValidationException


def main() -> None:
    try:
        config_service.load_and_validate()
    except ConfigValidationException as e:
        raise SystemExit(f"FATAL: {e}")

    uvicorn.run(
        "verto.main:app",
        host=config_service.get("server.host", "127.0.0.1"),
        port=config_service.get("server.port", 8000),
        reload=config_service.get("server.debug", False),
    )


if __name__ == "__main__":
    main()
