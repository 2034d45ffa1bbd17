"""
Commands — Command catalog with self-registration

Each command module exports COMMANDS, a list of CommandDefinition
records binding a (verb, object) pair to its async handler.

Registry pattern enables:
- Locality: Schema definition next to implementation
- Open/Closed: Add command = add module to COMMAND_MODULES
- Isolation: build_registry() returns a fresh registry per call
"""

import importlib
from typing import List

from ..core.models import CommandDefinition
from ..core.registry import CommandRegistry

# Command modules that participate in auto-registration
# Order determines help display order
COMMAND_MODULES = [
    # Setup
    'init_cmd',
    'config_cmd',
    'platform_cmd',
    'language_cmd',
    'profile_cmd',
    # Git
    'project_cmd',
    'branch',
    # AI features
    'commit',
    'review',
    'pr',
    'changelog',
    # System
    'system',
]


def load_commands() -> List[CommandDefinition]:
    """Import every module in COMMAND_MODULES and collect its COMMANDS."""
    commands: List[CommandDefinition] = []
    for module_name in COMMAND_MODULES:
        module = importlib.import_module(f'.{module_name}', __package__)
        commands.extend(getattr(module, 'COMMANDS', []))
    return commands


def register_all(registry: CommandRegistry) -> int:
    """
    Register the built-in catalog into registry.

    Returns:
        Number of commands registered

    Raises:
        RegistryConflictError: A (verb, object) pair is already taken
    """
    commands = load_commands()
    registry.register_many(commands)
    return len(commands)


def build_registry() -> CommandRegistry:
    """Fresh registry holding the built-in catalog."""
    registry = CommandRegistry()
    register_all(registry)
    return registry


__all__ = ['COMMAND_MODULES', 'load_commands', 'register_all', 'build_registry']
