"""Shared fixtures for integration tests."""

import pytest_asyncio

from spaceapi.client import SpaceConfig, SpaceService


@pytest_asyncio.fixture
async def space():
    """Service for the server configured by the SPACE_* environment variables."""
    async with SpaceService.from_config(SpaceConfig.from_env()) as service:
        yield service
