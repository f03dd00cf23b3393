"""Docker error handling utilities.

Maps docker SDK exceptions raised by tool functions onto the project's
exception hierarchy with consistent logging and messages.
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from docker.errors import APIError
from docker.errors import ImageNotFound as DockerImageNotFound
from docker.errors import NotFound as DockerNotFound

from docker_mcp.utils.errors import ContainerNotFound, DockerOperationError, ImageNotFound
from docker_mcp.utils.logger import get_logger
from docker_mcp.utils.messages import ERROR_CONTAINER_NOT_FOUND, ERROR_IMAGE_NOT_FOUND

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _resource_id(args: tuple[Any, ...], kwargs: dict[str, Any], param: str) -> Any:
    resource_id = kwargs.get(param)
    if resource_id is None and args:
        resource_id = args[0]
    return resource_id if resource_id is not None else "unknown"


def handle_docker_errors(
    resource: str,
    operation: str,
    resource_id_param: str = "container_id",
) -> Callable[[F], F]:
    """Decorator that handles Docker API errors consistently.

    Args:
        resource: Type of resource ("container" or "image")
        operation: Operation being performed (for error messages)
        resource_id_param: Parameter name containing the resource ID

    Example:
        @handle_docker_errors(resource="container", operation="start")
        def start_container(container_id: str) -> dict:
            ...

    Raises:
        ContainerNotFound: If container resource not found
        ImageNotFound: If image resource not found
        DockerOperationError: For all other Docker API errors
    """
    error_map = {
        "container": (ContainerNotFound, ERROR_CONTAINER_NOT_FOUND),
        "image": (ImageNotFound, ERROR_IMAGE_NOT_FOUND),
    }

    if resource not in error_map:
        valid_resources = list(error_map.keys())
        raise ValueError(f"Unknown resource type: {resource}. Must be one of {valid_resources}")

    not_found_exception, not_found_message = error_map[resource]

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except (DockerNotFound, DockerImageNotFound) as e:
                resource_id = _resource_id(args, kwargs, resource_id_param)
                logger.error(f"{resource.capitalize()} not found: {resource_id}")
                raise not_found_exception(not_found_message.format(resource_id)) from e
            except APIError as e:
                resource_id = _resource_id(args, kwargs, resource_id_param)
                error_msg = f"Failed to {operation} {resource} {resource_id}: {e}"
                logger.error(error_msg)
                raise DockerOperationError(error_msg) from e

        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = ["handle_docker_errors"]
