"""Run the API with uvicorn: ``python -m rift_profile``."""

import uvicorn

from rift_profile.core.config import get_global_settings


def main() -> None:
    settings = get_global_settings()
    uvicorn.run(
        "rift_profile.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
