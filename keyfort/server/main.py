import logging
import uvicorn
from fastapi import FastAPI
from .database import init_db
from .errors import register_exception_handlers
from .logging_config import configure_logging
from .routers import activity, auth, categories, settings as settings_router, vault
from .config import settings

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

register_exception_handlers(app)

@app.on_event("startup")
def on_startup():
    configure_logging(settings.LOG_LEVEL)
    init_db()
    logger.info("%s started", settings.PROJECT_NAME)

app.include_router(auth.router, prefix="/auth", tags=["Authentication"])

app.include_router(vault.router, prefix=settings.API_V1_STR, tags=["Vault"])
app.include_router(categories.router, prefix=settings.API_V1_STR, tags=["Categories"])
app.include_router(activity.router, prefix=settings.API_V1_STR, tags=["Activity"])
app.include_router(settings_router.router, prefix=settings.API_V1_STR, tags=["Settings"])

@app.get("/")
def root():
    return {"message": "KeyFort server is running"}

def run():
    uvicorn.run("keyfort.server.main:app", host="127.0.0.1", port=8000)

if __name__ == "__main__":
    run()
