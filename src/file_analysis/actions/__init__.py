"""Actions attachable to a file's content stream."""

from .base import Action, Notification
from .hash import HashAction, HashActionState, MD5Action, SHA1Action, SHA256Action
from .registry import ACTION_FACTORIES, instantiate_action

__all__ = [
    "ACTION_FACTORIES",
    "Action",
    "HashAction",
    "HashActionState",
    "MD5Action",
    "Notification",
    "SHA1Action",
    "SHA256Action",
    "instantiate_action",
]
