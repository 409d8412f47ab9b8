"""Run the API with uvicorn: python -m admin_service.serve"""

import uvicorn

from admin_service.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "admin_service.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
