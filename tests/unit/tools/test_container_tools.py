"""Unit tests for tools/container.py."""

from unittest.mock import Mock, patch

import pytest
from docker.errors import APIError, NotFound
from docker.errors import ImageNotFound as DockerImageNotFound

from docker_mcp.docker_wrapper.client import DockerClientWrapper
from docker_mcp.tools.container import (
    DEFAULT_LOG_TAIL,
    MAX_FOLLOW_LOG_LINES,
    create_container_logs_tool,
    create_container_tools,
    create_create_container_tool,
    create_inspect_container_tool,
    create_list_containers_tool,
    create_remove_container_tool,
    create_run_container_tool,
    create_start_container_tool,
    create_stop_container_tool,
    format_container_summary,
)
from docker_mcp.utils.errors import ContainerNotFound, DockerOperationError, ImageNotFound
from docker_mcp.utils.safety import OperationSafety

INSPECT_RESULT = {
    "Id": "abc123",
    "Name": "/web",
    "Created": "2024-01-01T00:00:00Z",
    "State": {"Status": "running"},
    "Config": {"Image": "nginx:latest"},
    "NetworkSettings": {"Ports": {"80/tcp": [{"HostIp": "0.0.0.0", "HostPort": "8080"}]}},
}


@pytest.fixture
def mock_docker_client():
    """Create a mock Docker client wrapper."""
    client = Mock(spec=DockerClientWrapper)
    client.client = Mock()
    client.client.api = Mock()
    client.client.api.inspect_container.return_value = INSPECT_RESULT
    client.client.api.create_container.return_value = {"Id": "abc123", "Warnings": []}
    return client


class TestFormatContainerSummary:
    """Test container list shaping."""

    def test_full_entry(self):
        summary = format_container_summary(
            {
                "Id": "abc123",
                "Names": ["/web", "/alias"],
                "Image": "nginx",
                "State": "running",
                "Status": "Up 5 minutes",
                "Ports": [{"PrivatePort": 80, "Type": "tcp"}],
                "Created": 1700000000,
            }
        )
        assert summary == {
            "id": "abc123",
            "name": "/web",
            "image": "nginx",
            "state": "running",
            "status": "Up 5 minutes",
            "ports": [{"PrivatePort": 80, "Type": "tcp"}],
            "created": 1700000000,
        }

    def test_sparse_entry(self):
        summary = format_container_summary({"Id": "abc123", "Names": [], "Ports": None})
        assert summary["name"] is None
        assert summary["ports"] == []


class TestListContainersTool:
    """Test list_containers."""

    def test_running_only_by_default(self, mock_docker_client):
        mock_docker_client.client.api.containers.return_value = [{"Id": "c1", "Names": ["/a"]}]
        _, _, safety, idempotent, _, list_containers = create_list_containers_tool(
            mock_docker_client
        )

        result = list_containers()

        mock_docker_client.client.api.containers.assert_called_once_with(all=False)
        assert [container["id"] for container in result] == ["c1"]
        assert safety == OperationSafety.SAFE
        assert idempotent is True

    def test_all(self, mock_docker_client):
        mock_docker_client.client.api.containers.return_value = []
        list_containers = create_list_containers_tool(mock_docker_client)[5]
        assert list_containers(all=True) == []
        mock_docker_client.client.api.containers.assert_called_once_with(all=True)

    def test_api_error(self, mock_docker_client):
        mock_docker_client.client.api.containers.side_effect = APIError("daemon error")
        list_containers = create_list_containers_tool(mock_docker_client)[5]
        with pytest.raises(DockerOperationError, match="Failed to list containers"):
            list_containers()


class TestCreateContainerTool:
    """Test create_container."""

    def test_passes_arguments(self, mock_docker_client):
        create_container = create_create_container_tool(mock_docker_client)[5]

        result = create_container(
            image="nginx:latest",
            name="web",
            command=["nginx", "-g", "daemon off;"],
            env=["A=1"],
            exposed_ports={"80/tcp": {}, "53/udp": {}},
            host_config={"PortBindings": {"80/tcp": [{"HostPort": "8080"}]}},
            labels={"app": "web"},
        )

        mock_docker_client.client.api.create_container.assert_called_once_with(
            image="nginx:latest",
            name="web",
            command=["nginx", "-g", "daemon off;"],
            entrypoint=None,
            environment=["A=1"],
            ports=[("80", "tcp"), ("53", "udp")],
            host_config={"PortBindings": {"80/tcp": [{"HostPort": "8080"}]}},
            labels={"app": "web"},
        )
        mock_docker_client.client.api.start.assert_not_called()
        assert result == {
            "id": "abc123",
            "name": "/web",
            "state": "running",
            "image": "nginx:latest",
            "created": "2024-01-01T00:00:00Z",
        }

    def test_missing_image(self, mock_docker_client):
        mock_docker_client.client.api.create_container.side_effect = DockerImageNotFound(
            "No such image"
        )
        create_container = create_create_container_tool(mock_docker_client)[5]
        with pytest.raises(ImageNotFound, match="missing:latest"):
            create_container(image="missing:latest")

    def test_name_conflict(self, mock_docker_client):
        mock_docker_client.client.api.create_container.side_effect = APIError("Conflict")
        create_container = create_create_container_tool(mock_docker_client)[5]
        with pytest.raises(DockerOperationError, match="create container from image nginx"):
            create_container(image="nginx")


class TestRunContainerTool:
    """Test run_container."""

    def test_creates_and_starts(self, mock_docker_client):
        run_container = create_run_container_tool(mock_docker_client)[5]

        result = run_container(image="nginx:latest")

        mock_docker_client.client.api.create_container.assert_called_once()
        mock_docker_client.client.api.start.assert_called_once_with("abc123")
        assert result["state"] == "running"
        assert result["ports"] == INSPECT_RESULT["NetworkSettings"]["Ports"]


class TestLifecycleTools:
    """Test start, stop, remove and inspect."""

    def test_start(self, mock_docker_client):
        start_container = create_start_container_tool(mock_docker_client)[5]
        result = start_container(container_id="abc123")
        mock_docker_client.client.api.start.assert_called_once_with("abc123")
        assert result == {"id": "abc123", "name": "/web", "state": "running"}

    def test_start_not_found(self, mock_docker_client):
        mock_docker_client.client.api.start.side_effect = NotFound("No such container")
        start_container = create_start_container_tool(mock_docker_client)[5]
        with pytest.raises(ContainerNotFound, match="ghost"):
            start_container(container_id="ghost")

    def test_stop_uses_timeout(self, mock_docker_client):
        stop_container = create_stop_container_tool(mock_docker_client)[5]
        stop_container(container_id="abc123", timeout=3)
        mock_docker_client.client.api.stop.assert_called_once_with("abc123", timeout=3)

    def test_stop_default_timeout(self, mock_docker_client):
        stop_container = create_stop_container_tool(mock_docker_client)[5]
        stop_container("abc123")
        mock_docker_client.client.api.stop.assert_called_once_with("abc123", timeout=10)

    def test_remove(self, mock_docker_client):
        name, _, safety, _, _, remove_container = create_remove_container_tool(mock_docker_client)
        result = remove_container(container_id="abc123", force=True, volumes=True)
        mock_docker_client.client.api.remove_container.assert_called_once_with(
            "abc123", v=True, force=True
        )
        assert result == {"status": "removed", "container_id": "abc123"}
        assert name == "remove_container"
        assert safety == OperationSafety.DESTRUCTIVE

    def test_remove_api_error(self, mock_docker_client):
        mock_docker_client.client.api.remove_container.side_effect = APIError("in use")
        remove_container = create_remove_container_tool(mock_docker_client)[5]
        with pytest.raises(DockerOperationError, match="Failed to remove container abc123"):
            remove_container(container_id="abc123")

    def test_inspect(self, mock_docker_client):
        inspect_container = create_inspect_container_tool(mock_docker_client)[5]
        assert inspect_container(container_id="abc123") is INSPECT_RESULT


class TestContainerLogsTool:
    """Test container_logs."""

    def test_tail(self, mock_docker_client):
        mock_docker_client.client.api.logs.return_value = b"line1\nline2\n"
        container_logs = create_container_logs_tool(mock_docker_client)[5]

        result = container_logs(container_id="abc123")

        mock_docker_client.client.api.logs.assert_called_once_with(
            "abc123", stdout=True, stderr=True, tail=DEFAULT_LOG_TAIL
        )
        assert result == {"container_id": "abc123", "logs": "line1\nline2\n", "follow": False}

    def test_invalid_utf8_replaced(self, mock_docker_client):
        mock_docker_client.client.api.logs.return_value = b"ok \xff"
        container_logs = create_container_logs_tool(mock_docker_client)[5]
        assert container_logs(container_id="abc123")["logs"] == "ok \ufffd"

    @patch("docker_mcp.tools.container.time.time", return_value=1000.0)
    def test_follow_is_bounded(self, _mock_time, mock_docker_client):
        mock_docker_client.client.api.logs.return_value = iter([b"a\nb\n", b"c\n"])
        container_logs = create_container_logs_tool(mock_docker_client)[5]

        result = container_logs(container_id="abc123", tail=5, follow=True)

        call_kwargs = mock_docker_client.client.api.logs.call_args[1]
        assert call_kwargs["follow"] is True
        assert call_kwargs["stream"] is True
        assert call_kwargs["until"] == 1005
        assert result == {"container_id": "abc123", "logs": "a\nb\nc", "follow": True}

    def test_follow_line_cap(self, mock_docker_client):
        chunk = b"x\n" * MAX_FOLLOW_LOG_LINES
        mock_docker_client.client.api.logs.return_value = iter([chunk, b"never read\n"])
        container_logs = create_container_logs_tool(mock_docker_client)[5]

        result = container_logs(container_id="abc123", follow=True)

        assert len(result["logs"].split("\n")) == MAX_FOLLOW_LOG_LINES
        assert "never read" not in result["logs"]

    def test_not_found(self, mock_docker_client):
        mock_docker_client.client.api.logs.side_effect = NotFound("No such container")
        container_logs = create_container_logs_tool(mock_docker_client)[5]
        with pytest.raises(ContainerNotFound):
            container_logs(container_id="ghost")


def test_create_container_tools_names(mock_docker_client):
    names = [tool[0] for tool in create_container_tools(mock_docker_client)]
    assert names == [
        "list_containers",
        "create_container",
        "run_container",
        "start_container",
        "stop_container",
        "remove_container",
        "inspect_container",
        "container_logs",
    ]
