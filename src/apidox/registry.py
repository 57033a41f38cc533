"""Resource registry -- the top-level accumulation unit of a run.

Resources are keyed by ``(name, group)`` and Actions inside a resource by
``(verb, path_template)``. The registry only grows: there is no removal, and
iteration follows first-insertion order so rendering is deterministic.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from apidox.models import Action, ActionKey, Resource, ResourceKey

logger = logging.getLogger(__name__)


class ResourceRegistry:
    """Find-or-create store for Resources and their Actions.

    The registry itself takes no locks; :class:`~apidox.recorder.Recorder`
    serialises access around each upsert.

    Example::

        registry = ResourceRegistry()
        action = registry.upsert_action(
            ResourceKey("Pokemons"),
            ActionKey("GET", "/pokemons/{id}"),
            lambda: build_action("Get a pokemon", details, request),
        )
        action.examples.append(example)
    """

    def __init__(self) -> None:
        self._resources: dict[ResourceKey, Resource] = {}

    def upsert_resource(
        self,
        resource_key: ResourceKey,
        factory: Optional[Callable[[], Resource]] = None,
    ) -> Resource:
        """Return the Resource for *resource_key*, creating it on first sight.

        Args:
            resource_key: Name and group of the resource.
            factory: Builds the Resource when missing. Defaults to a bare
                Resource carrying only the key's name and group.
        """
        resource = self._resources.get(resource_key)
        if resource is None:
            if factory is not None:
                resource = factory()
            else:
                resource = Resource(name=resource_key.name, group=resource_key.group)
            self._resources[resource_key] = resource
            logger.debug("Registered resource %s (group %s)", resource_key.name, resource_key.group)
        return resource

    def upsert_action(
        self,
        resource_key: ResourceKey,
        action_key: ActionKey,
        factory: Callable[[], Action],
        resource_factory: Optional[Callable[[], Resource]] = None,
    ) -> Action:
        """Return the Action for *action_key* inside *resource_key*.

        The Resource and the Action are each created at most once; later calls
        with the same keys return the stored objects and never call the
        factories.

        Raises:
            InvalidVerbError: Propagated from *factory* when the Action cannot
                be constructed. Nothing is stored in that case.
        """
        resource = self._resources.get(resource_key)
        if resource is not None and action_key in resource.actions:
            return resource.actions[action_key]

        action = factory()
        resource = self.upsert_resource(resource_key, resource_factory)
        resource.actions[action_key] = action
        logger.debug("Registered action %s %s", action_key.verb, action_key.path_template)
        return action

    def get_resource(self, resource_key: ResourceKey) -> Optional[Resource]:
        return self._resources.get(resource_key)

    def resources(self) -> list[Resource]:
        """All resources in first-registered order."""
        return list(self._resources.values())

    def actions(self) -> Iterator[tuple[Resource, Action]]:
        """Yield every ``(resource, action)`` pair in registration order."""
        for resource in self._resources.values():
            for action in resource.actions.values():
                yield resource, action

    def __len__(self) -> int:
        return len(self._resources)
