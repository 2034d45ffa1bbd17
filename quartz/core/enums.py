"""
Enums — Closed vocabularies of the command grammar

Every invocation reads as <verb> <object> [parameters].
Tokens outside these sets are rejected by the resolvers.
"""

from enum import Enum
from typing import Optional


class Verb(Enum):
    """Action tokens (first word of a command)."""
    INIT = "init"
    CREATE = "create"
    DELETE = "delete"
    LIST = "list"
    SHOW = "show"
    SET = "set"
    GET = "get"
    UPDATE = "update"
    GENERATE = "generate"
    REVIEW = "review"
    COMMIT = "commit"
    USE = "use"
    SWITCH = "switch"
    SAVE = "save"
    LOAD = "load"
    MANAGE = "manage"
    HELP = "help"
    VERSION = "version"

    @classmethod
    def from_token(cls, token: str) -> Optional["Verb"]:
        """Exact-match lookup. Returns None for unknown tokens."""
        try:
            return cls(token)
        except ValueError:
            return None


class Object(Enum):
    """Resource tokens (second word of a command)."""
    PROJECT = "project"
    CONFIG = "config"
    PROFILE = "profile"
    BRANCH = "branch"
    COMMIT = "commit"
    PR = "pr"
    REVIEW = "review"
    CHANGELOG = "changelog"
    TOKEN = "token"
    LANGUAGE = "language"
    PLATFORM = "platform"
    HELP = "help"
    VERSION = "version"

    @classmethod
    def from_token(cls, token: str) -> Optional["Object"]:
        """Exact-match lookup. Returns None for unknown tokens."""
        try:
            return cls(token)
        except ValueError:
            return None


class ParameterType(Enum):
    """Type tags for parameter values."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


# Verbs typed without an object; the parser substitutes the canonical one
OBJECTLESS_VERBS = {
    Verb.HELP: Object.HELP,
    Verb.VERSION: Object.VERSION,
}

# Matched on token value so future verbs (remove, reset) are covered
DESTRUCTIVE_VERBS = frozenset({"delete", "remove", "reset"})

DEFAULT_CATEGORY = "general"
