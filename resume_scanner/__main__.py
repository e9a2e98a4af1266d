import uvicorn

from resume_scanner.core.config import settings


def main():
    uvicorn.run(
        "resume_scanner.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.environment == "development",
        log_config=None,
    )


if __name__ == "__main__":
    main()
