"""LinkedIn Clone API entry point."""

import uvicorn

from linkedin_api.config import get_settings


def main():
    """Run the API server."""
    settings = get_settings()

    uvicorn.run(
        "linkedin_api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
