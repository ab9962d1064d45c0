from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging_utils import setup_logging
from .container import Container, build_container
from .panel.controller import register as register_panel

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PANEL_HOST"] = getattr(settings, "PANEL_HOST", "127.0.0.1")
    app.config["PANEL_PORT"] = int(getattr(settings, "PANEL_PORT", 8080))

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))
    logger.info(f"settings={settings_module} api={getattr(settings, 'API_BASE_URL', '-')}")

    if container is None:
        container = build_container(settings=settings)
        # Restore the employee session persisted by a previous run.
        container.lifecycle.resume()

    app.extensions["timeclock"] = container
    register_panel(app, container)

    return app
