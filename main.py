"""Main entry point for AgentBot."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from agentbot.api import create_fastapi_app
from agentbot.api.routes import control
from agentbot.app import Application
from agentbot.config import Settings
from agentbot.logging_config import setup_logging
from sim import Sim


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent
    load_dotenv(project_root / ".env")

    settings = Settings.from_env()
    setup_logging(log_level=settings.log_level, log_file=settings.log_file)
    api_url = f"http://{settings.api_host}:{settings.api_port}"

    application = Application(settings=settings)

    # Create SIM instance
    sim = Sim(api_url=api_url)
    control.set_sim_instance(sim)

    # Create FastAPI app
    app = create_fastapi_app(application)

    # Run with uvicorn
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
