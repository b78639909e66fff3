"""API gateway entrypoint."""

from fastapi import FastAPI

from libs.core.logging_setup import setup_logging
from services.api_gateway.presentation.http.routes import router
from services.api_gateway.settings import get_settings

settings = get_settings()
setup_logging(settings.log_level, log_json=settings.log_json)

app = FastAPI(title="Rescue Dispatch API", version=settings.app_version)
app.include_router(router)
