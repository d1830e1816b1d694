import uvicorn
from catalog_admin.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "catalog_admin.main:app",
        host="localhost",
        port=settings.SERVER_PORT,
        reload=True,
        log_level=settings.LOG_LEVEL.lower(),
    )
