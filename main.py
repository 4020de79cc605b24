"""ASGI entrypoint: ``uvicorn main:app``."""

from meteosat_skill.api_factory import create_app

app = create_app()
