"""Unit tests for tool registration with FastMCP."""

from unittest.mock import MagicMock, Mock

import pytest
from fastmcp import FastMCP

from docker_mcp.docker_wrapper.client import DockerClientWrapper
from docker_mcp.tools import register_all_tools, register_tools
from docker_mcp.utils.fastmcp_helpers import create_fastmcp_app, get_mcp_annotations
from docker_mcp.utils.safety import OperationSafety


@pytest.fixture
def mock_docker_client() -> Mock:
    """Create a mock Docker client wrapper."""
    mock = Mock(spec=DockerClientWrapper)
    mock.client = MagicMock()
    return mock


@pytest.fixture
def fastmcp_app() -> FastMCP:
    """Create a FastMCP application instance."""
    return FastMCP(name="test-docker-mcp", version="1.0.0")


def test_register_all_tools(fastmcp_app: FastMCP, mock_docker_client: Mock) -> None:
    """Every catalog tool registers on a real FastMCP app."""
    registered = register_all_tools(fastmcp_app, mock_docker_client)

    assert registered == {
        "container": [
            "list_containers",
            "create_container",
            "run_container",
            "start_container",
            "stop_container",
            "remove_container",
            "inspect_container",
            "container_logs",
        ],
        "image": ["list_images", "pull_image"],
        "network": ["list_networks"],
        "volume": ["list_volumes"],
    }


def test_register_tools_annotations() -> None:
    """Safety level, idempotency and open-world flags become MCP annotations."""
    app = MagicMock()

    def remove_thing(thing_id: str) -> dict[str, str]:
        return {"status": "removed"}

    names = register_tools(
        app,
        [("remove_thing", "Remove a thing", OperationSafety.DESTRUCTIVE, True, True, remove_thing)],
    )

    assert names == ["remove_thing"]
    app.tool.assert_called_once_with(
        name="remove_thing",
        description="Remove a thing",
        annotations={
            "readOnlyHint": False,
            "destructiveHint": True,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    app.tool.return_value.assert_called_once_with(remove_thing)


class TestGetMcpAnnotations:
    """Tests for get_mcp_annotations function."""

    @pytest.mark.parametrize(
        "safety,read_only,destructive",
        [
            (OperationSafety.SAFE, True, False),
            (OperationSafety.MODERATE, False, False),
            (OperationSafety.DESTRUCTIVE, False, True),
        ],
    )
    def test_annotations(self, safety: OperationSafety, read_only: bool, destructive: bool) -> None:
        assert get_mcp_annotations(safety) == {
            "readOnlyHint": read_only,
            "destructiveHint": destructive,
        }


class TestCreateFastmcpApp:
    """Tests for create_fastmcp_app function."""

    def test_default_name(self) -> None:
        assert create_fastmcp_app().name == "docker-mcp"

    def test_custom_name(self) -> None:
        app = create_fastmcp_app(name="my-custom-server")
        assert isinstance(app, FastMCP)
        assert app.name == "my-custom-server"
