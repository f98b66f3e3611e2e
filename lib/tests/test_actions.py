from __future__ import annotations

import pytest

from portainer_client import actions


@pytest.mark.parametrize(
    ("enum_cls", "table"),
    [
        (actions.ContainerAction, actions.CONTAINER_ACTION_ROUTES),
        (actions.StackAction, actions.STACK_ACTION_ROUTES),
        (actions.ImageAction, actions.IMAGE_ACTION_ROUTES),
        (actions.VolumeAction, actions.VOLUME_ACTION_ROUTES),
        (actions.NetworkAction, actions.NETWORK_ACTION_ROUTES),
    ],
)
def test_every_action_has_a_route(enum_cls, table) -> None:  # noqa: ANN001
    assert set(table) == set(enum_cls)
    for method, _template in table.values():
        assert method in {"POST", "PUT", "DELETE"}


def test_container_routes() -> None:
    assert actions.route(
        actions.CONTAINER_ACTION_ROUTES, actions.ContainerAction.KILL, env_id=2, container_id="web"
    ) == ("POST", "/endpoints/2/docker/containers/web/kill")
    assert actions.route(
        actions.CONTAINER_ACTION_ROUTES, actions.ContainerAction.REMOVE, env_id=2, container_id="web"
    ) == ("DELETE", "/endpoints/2/docker/containers/web?force=true")


def test_stack_remove_route_carries_environment() -> None:
    assert actions.route(
        actions.STACK_ACTION_ROUTES, actions.StackAction.REMOVE, stack_id=7, env_id=3
    ) == ("DELETE", "/stacks/7?endpointId=3")


def test_image_pull_route() -> None:
    method, path = actions.route(
        actions.IMAGE_ACTION_ROUTES, actions.ImageAction.PULL, env_id=1, repository="nginx", tag="1.25"
    )

    assert method == "POST"
    assert path == "/endpoints/1/docker/images/create?fromImage=nginx&tag=1.25"


def test_actions_accept_plain_strings() -> None:
    assert actions.ContainerAction("restart") is actions.ContainerAction.RESTART
    with pytest.raises(ValueError):
        actions.VolumeAction("prune")
