from fastapi import Request

from care_api.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    """The ServiceContainer built for this application by create_app()."""
    return request.app.state.container
