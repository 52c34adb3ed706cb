"""Shared test fixtures for chuk-mcp-hillshade."""

import numpy as np
import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def sample_elevation():
    """40x50 normalised elevation array with values in [0, 1]."""
    np.random.seed(42)
    return np.random.uniform(0.0, 1.0, (40, 50))


@pytest.fixture
def sample_field(sample_elevation):
    from chuk_mcp_hillshade.core.height_field import HeightField

    return HeightField(sample_elevation)


@pytest.fixture
def flat_field():
    """Uniform 10x12 field at elevation 0.5."""
    from chuk_mcp_hillshade.core.height_field import HeightField

    return HeightField(np.full((10, 12), 0.5))


@pytest.fixture
def ramp_field():
    """Field rising 0.01 per column: z[i, j] = 0.01 * j."""
    from chuk_mcp_hillshade.core.height_field import HeightField

    return HeightField(np.tile(np.arange(20, dtype=np.float64) * 0.01, (15, 1)))


@pytest.fixture
def default_params():
    from chuk_mcp_hillshade.core.parameters import ParameterSet

    return ParameterSet()


@pytest.fixture
def lit_params():
    """Parameters with all three terms active."""
    from chuk_mcp_hillshade.core.parameters import ParameterSet

    return ParameterSet(
        ambient=0.1,
        diffuse=0.7,
        specular=0.4,
        exaggeration=3.0,
        azimuth=315.0,
        elevation_angle=35.0,
    )


@pytest.fixture
def mock_artifact_store():
    """Mock artifact store."""
    store = AsyncMock()
    store.store = AsyncMock(return_value=None)
    store.retrieve = AsyncMock(return_value=b"fake-png-bytes")
    return store


@pytest.fixture
def mock_manager(mock_artifact_store):
    """HillshadeManager with mocked store."""
    from chuk_mcp_hillshade.core.hillshade_manager import HillshadeManager

    manager = HillshadeManager(workers=1)
    manager._get_store = MagicMock(return_value=mock_artifact_store)
    return manager


@pytest.fixture
def mock_mcp():
    """Mock ChukMCPServer."""
    mcp = MagicMock()
    mcp.tool = MagicMock(return_value=lambda fn: fn)
    return mcp


@pytest.fixture
def capture_tools():
    """Factory that registers a tool module on a capturing MCP stub."""

    def _capture(register, manager):
        tools = {}
        mcp = MagicMock()

        def capture_tool(**kwargs):
            def decorator(fn):
                tools[fn.__name__] = fn
                return fn

            return decorator

        mcp.tool = capture_tool
        register(mcp, manager)
        return tools

    return _capture
