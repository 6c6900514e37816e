"""Shared test fixtures and configuration for backend tests."""
import pytest
from fastapi.testclient import TestClient

from app.config import AppConfig, CorsSettings, ServerSettings, StorageSettings
from app.generation import StaticGenerationClient
from app.main import create_app


@pytest.fixture
def config(tmp_path):
    """Development config whose public directory lives under tmp_path."""
    return AppConfig(
        server=ServerSettings(environment="development"),
        cors=CorsSettings(frontend_url="https://senyas.example.com"),
        storage=StorageSettings(public_dir=str(tmp_path / "public")),
    )


@pytest.fixture
def generator():
    """Generation client stub answering every prompt with "Hi there"."""
    return StaticGenerationClient("Hi there")


@pytest.fixture
def api_client(config, generator):
    """Provide a TestClient for an app wired to the stub generator.

    Entering the client runs the lifespan, as uvicorn would.
    """
    app = create_app(config=config, client=generator)
    with TestClient(app) as client:
        yield client
