#!/usr/bin/env python3
"""
SharedSession - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Builds the session stack
3. Runs the API server

All business logic is in the modules, following black box principles.
"""

import logging
import logging.config as log_config

import uvicorn

from sharedsession.app import create_app
from sharedsession.config.provider import ConfigProvider, EnvConfigProvider
from sharedsession.logging_config import get_logging_config
from sharedsession.modules.factory import SharedSessionFactory

# Configuration provider (centralized config access)
config_provider: ConfigProvider = EnvConfigProvider()
api_config = config_provider.get_api_config()

log_config.dictConfig(get_logging_config(api_config.log_level))
logger = logging.getLogger(__name__)

components = SharedSessionFactory.build(config_provider)
app = create_app(components)


def run() -> None:
    """Run the API server with uvicorn."""
    uvicorn.run(
        "sharedsession.main:app",
        host=api_config.host,
        port=api_config.port,
        log_level=api_config.log_level.lower(),
        reload=api_config.debug,
        log_config=get_logging_config(api_config.log_level),
    )


if __name__ == "__main__":
    run()
