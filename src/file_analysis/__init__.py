"""Streaming hash actions for file content analysis."""

from .actions import Action, HashAction, HashActionState, MD5Action, Notification, SHA1Action, SHA256Action
from .analysis import FileAnalysis
from .exceptions import ConfigurationError, FileAnalysisError
from .hashing import HashlibState, HashState, MD5State, SHA1State, SHA256State
from .models.actions import ActionArgs, ActionType
from .results import ActionResults, ResultsContext, ResultsRecord

__all__ = [
    "Action",
    "ActionArgs",
    "ActionResults",
    "ActionType",
    "ConfigurationError",
    "FileAnalysis",
    "FileAnalysisError",
    "HashAction",
    "HashActionState",
    "HashState",
    "HashlibState",
    "MD5Action",
    "MD5State",
    "Notification",
    "ResultsContext",
    "ResultsRecord",
    "SHA1Action",
    "SHA1State",
    "SHA256Action",
    "SHA256State",
]
