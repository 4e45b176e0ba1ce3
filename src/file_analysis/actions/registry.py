"""Lookup of action factories by action type."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..exceptions import ConfigurationError
from ..models.actions import ActionArgs, ActionType
from ..results import ResultsContext
from .base import Action
from .hash import MD5Action, SHA1Action, SHA256Action

log = logging.getLogger(__name__)

ActionFactory = Callable[[ActionArgs, ResultsContext], Action]

ACTION_FACTORIES: dict[ActionType, ActionFactory] = {
    ActionType.MD5: MD5Action.instantiate,
    ActionType.SHA1: SHA1Action.instantiate,
    ActionType.SHA256: SHA256Action.instantiate,
}


def instantiate_action(args: ActionArgs, info: ResultsContext) -> Action:
    """
    Build the action described by a configuration record.

    :param args: Arguments naming the action type
    :param info: Results context the action publishes into
    :returns: A freshly constructed action
    :raises ConfigurationError: If the action type is unknown or the action cannot be built
    """
    try:
        action_type = ActionType(args.type)
    except ValueError as e:
        raise ConfigurationError(f"Unknown action type: {args.type}") from e

    factory = ACTION_FACTORIES.get(action_type)
    if factory is None:
        raise ConfigurationError(f"No factory registered for action type: {action_type}")

    log.debug(f"Instantiating {action_type} action")
    return factory(args, info)
