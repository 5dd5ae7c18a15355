# app/main.py
# Entry point for `uvicorn app.main:app`; configures logging from settings.
import logging

from .config import get_settings
from .factory import create_app

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app(settings=settings)
