import uvicorn

from campus_coffee.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "campus_coffee.main:app",
        host="0.0.0.0",
        port=settings.app_port,
        reload=settings.is_development,
    )
