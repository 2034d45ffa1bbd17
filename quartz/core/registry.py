"""
Command Registry — Static catalog of command definitions

Primary map keyed by (verb, object) plus three secondary indices
(verb, object, category). All four structures change together under
one lock; a definition reachable via get() is reachable via exactly
the matching bucket of each index.

The registry is an explicit instance: build it once at startup
(see quartz.commands.build_registry) and pass it by reference.
"""

import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .enums import DEFAULT_CATEGORY, Object, Verb
from .errors import RegistryConflictError
from .models import CommandDefinition


@dataclass(frozen=True)
class RegistryStats:
    """Counts for help headers and diagnostics."""
    total_commands: int
    verbs_count: int
    objects_count: int
    categories_count: int


class CommandRegistry:
    """Registration and lookup of command definitions."""

    def __init__(self):
        self._lock = threading.RLock()
        self._commands: Dict[Tuple[Verb, Object], CommandDefinition] = {}
        self._verb_index: Dict[Verb, List[CommandDefinition]] = {}
        self._object_index: Dict[Object, List[CommandDefinition]] = {}
        self._category_index: Dict[str, List[CommandDefinition]] = {}

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, key) -> bool:
        return key in self._commands

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def register(self, command: CommandDefinition) -> None:
        """
        Register a command definition.

        Raises:
            RegistryConflictError: If (verb, object) is already registered.
                The registry is left unchanged.
        """
        with self._lock:
            if command.key in self._commands:
                raise RegistryConflictError(
                    f"Command already registered: {command.name}"
                )

            self._commands[command.key] = command
            self._verb_index.setdefault(command.verb, []).append(command)
            self._object_index.setdefault(command.object, []).append(command)
            self._category_index.setdefault(_category_of(command), []).append(command)

    def register_many(self, commands) -> None:
        for command in commands:
            self.register(command)

    def unregister(self, verb: Verb, obj: Object) -> None:
        """Remove a command. No-op if it is not registered."""
        with self._lock:
            command = self._commands.pop((verb, obj), None)
            if command is None:
                return

            _remove_from_bucket(self._verb_index, command.verb, command)
            _remove_from_bucket(self._object_index, command.object, command)
            _remove_from_bucket(self._category_index, _category_of(command), command)

    def clear(self) -> None:
        """Drop every registration (test isolation)."""
        with self._lock:
            self._commands.clear()
            self._verb_index.clear()
            self._object_index.clear()
            self._category_index.clear()

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get(self, verb: Verb, obj: Object) -> Optional[CommandDefinition]:
        return self._commands.get((verb, obj))

    def has(self, verb: Verb, obj: Object) -> bool:
        return (verb, obj) in self._commands

    def list(self) -> List[CommandDefinition]:
        """All definitions in registration order."""
        return list(self._commands.values())

    def find_by_verb(self, verb: Verb) -> List[CommandDefinition]:
        return list(self._verb_index.get(verb, []))

    def find_by_object(self, obj: Object) -> List[CommandDefinition]:
        return list(self._object_index.get(obj, []))

    def find_by_category(self, category: str) -> List[CommandDefinition]:
        return list(self._category_index.get(category, []))

    def available_verbs(self) -> List[Verb]:
        return list(self._verb_index.keys())

    def available_objects(self) -> List[Object]:
        return list(self._object_index.keys())

    def available_categories(self) -> List[str]:
        return list(self._category_index.keys())

    def find_matching_verbs(self, partial: str) -> List[Verb]:
        """Registered verbs starting with partial (case-insensitive)."""
        prefix = partial.lower()
        return [v for v in self.available_verbs() if v.value.startswith(prefix)]

    def find_matching_objects(self, partial: str) -> List[Object]:
        """Registered objects starting with partial (case-insensitive)."""
        prefix = partial.lower()
        return [o for o in self.available_objects() if o.value.startswith(prefix)]

    def get_stats(self) -> RegistryStats:
        with self._lock:
            return RegistryStats(
                total_commands=len(self._commands),
                verbs_count=len(self._verb_index),
                objects_count=len(self._object_index),
                categories_count=len(self._category_index),
            )


def _category_of(command: CommandDefinition) -> str:
    return command.category or DEFAULT_CATEGORY


def _remove_from_bucket(index: Dict, key, command: CommandDefinition) -> None:
    """Remove command from index[key], pruning the bucket when it empties."""
    bucket = index.get(key)
    if bucket is None:
        return
    bucket[:] = [c for c in bucket if c.key != command.key]
    if not bucket:
        del index[key]
