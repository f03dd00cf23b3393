"""Image tools."""

from typing import Any

from docker.errors import APIError
from docker.utils import parse_repository_tag
from pydantic import BaseModel, Field

from docker_mcp.docker_wrapper.client import DockerClientWrapper
from docker_mcp.tools.base import ToolDefinition
from docker_mcp.utils.docker_error_handler import handle_docker_errors
from docker_mcp.utils.errors import DockerOperationError
from docker_mcp.utils.logger import get_logger
from docker_mcp.utils.safety import OperationSafety

logger = get_logger(__name__)

DEFAULT_TAG = "latest"


class ImageSummary(BaseModel):
    """Image as reported by the list endpoint."""

    id: str = Field(description="Image ID")
    repo_tags: list[str] = Field(description="Repository tags")
    created: int | None = Field(description="Creation time (Unix timestamp)")
    size: int | None = Field(description="Image size in bytes")
    virtual_size: int | None = Field(description="Virtual size in bytes (older daemons only)")


class PullImageOutput(BaseModel):
    """Output for a completed image pull."""

    status: str = Field(description="Always 'pulled' on success")
    image: str = Field(description="Image reference that was pulled")
    last_status: str | None = Field(description="Final progress message from the daemon")


def format_image_summary(image: dict[str, Any]) -> dict[str, Any]:
    """Shape one entry of the image list endpoint."""
    return ImageSummary(
        id=image["Id"],
        repo_tags=image.get("RepoTags") or [],
        created=image.get("Created"),
        size=image.get("Size"),
        virtual_size=image.get("VirtualSize"),
    ).model_dump()


def create_list_images_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the list_images tool."""

    def list_images(all: bool = False) -> list[dict[str, Any]]:  # noqa: A002
        """List Docker images.

        Args:
            all: Show all images (default hides intermediate images)
        """
        try:
            images = docker_client.client.api.images(all=all)  # type: ignore[no-untyped-call]
        except APIError as e:
            logger.error(f"Failed to list images: {e}")
            raise DockerOperationError(f"Failed to list images: {e}") from e
        logger.info(f"Found {len(images)} images")
        return [format_image_summary(image) for image in images]

    return (
        "list_images",
        "List Docker images",
        OperationSafety.SAFE,
        True,
        False,
        list_images,
    )


def create_pull_image_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the pull_image tool."""

    @handle_docker_errors(resource="image", operation="pull", resource_id_param="image")
    def pull_image(image: str) -> dict[str, Any]:
        """Pull an image and wait for the pull to finish.

        Args:
            image: Image name with optional tag (e.g. 'nginx:latest')

        Raises:
            DockerOperationError: If the daemon reports an error in the progress stream
        """
        repository, tag = parse_repository_tag(image)
        logger.info(f"Pulling image {repository}:{tag or DEFAULT_TAG}")

        last_status = None
        progress = docker_client.client.api.pull(  # type: ignore[no-untyped-call]
            repository, tag=tag or DEFAULT_TAG, stream=True, decode=True
        )
        for event in progress:
            if "error" in event:
                error = event.get("errorDetail", {}).get("message") or event["error"]
                logger.error(f"Failed to pull image {image}: {error}")
                raise DockerOperationError(f"Failed to pull image {image}: {error}")
            last_status = event.get("status", last_status)

        logger.info(f"Pulled image {image}")
        return PullImageOutput(status="pulled", image=image, last_status=last_status).model_dump()

    return (
        "pull_image",
        "Pull a Docker image from a registry",
        OperationSafety.MODERATE,
        True,
        True,  # talks to external registries
        pull_image,
    )


def create_image_tools(docker_client: DockerClientWrapper) -> list[ToolDefinition]:
    """Create every image tool."""
    return [
        create_list_images_tool(docker_client),
        create_pull_image_tool(docker_client),
    ]
