"""
Tests for CommandRegistry — Catalog registration and lookup

These tests validate:
- Every registered definition is reachable through get() and all indices
- Duplicate (verb, object) raises and leaves the registry unchanged
- Unregister keeps primary map and indices in lockstep
- Prefix matching for autocomplete
"""

import threading

import pytest

from quartz.commands import COMMAND_MODULES, build_registry, load_commands, register_all
from quartz.core.enums import DEFAULT_CATEGORY, Object, Verb
from quartz.core.errors import RegistryConflictError
from quartz.core.registry import CommandRegistry


class TestRegistration:
    """register / unregister / clear."""

    def test_registered_command_reachable_everywhere(self, empty_registry, command_factory):
        """A definition is found by key, verb, object and category."""
        cmd = command_factory(Verb.CREATE, Object.BRANCH, category="git-workflow")
        empty_registry.register(cmd)

        assert empty_registry.get(Verb.CREATE, Object.BRANCH) is cmd
        assert empty_registry.has(Verb.CREATE, Object.BRANCH)
        assert cmd in empty_registry.find_by_verb(Verb.CREATE)
        assert cmd in empty_registry.find_by_object(Object.BRANCH)
        assert cmd in empty_registry.find_by_category("git-workflow")
        assert len(empty_registry) == 1

    def test_duplicate_raises_and_leaves_registry_unchanged(self, empty_registry, command_factory):
        """Second registration of the same pair is rejected."""
        first = command_factory(Verb.CREATE, Object.BRANCH, category="git-workflow")
        second = command_factory(Verb.CREATE, Object.BRANCH, category="other")
        empty_registry.register(first)

        with pytest.raises(RegistryConflictError, match="create branch"):
            empty_registry.register(second)

        assert empty_registry.get(Verb.CREATE, Object.BRANCH) is first
        assert empty_registry.find_by_verb(Verb.CREATE) == [first]
        assert empty_registry.find_by_category("other") == []
        assert empty_registry.available_categories() == ["git-workflow"]

    def test_empty_category_uses_default(self, empty_registry, command_factory):
        cmd = command_factory(Verb.LIST, Object.BRANCH, category="")
        empty_registry.register(cmd)
        assert empty_registry.find_by_category(DEFAULT_CATEGORY) == [cmd]

    def test_unregister_prunes_indices(self, empty_registry, command_factory):
        """Removing the last command of a verb removes the verb bucket."""
        empty_registry.register(command_factory(Verb.CREATE, Object.BRANCH))
        empty_registry.register(command_factory(Verb.DELETE, Object.BRANCH))

        empty_registry.unregister(Verb.CREATE, Object.BRANCH)

        assert not empty_registry.has(Verb.CREATE, Object.BRANCH)
        assert Verb.CREATE not in empty_registry.available_verbs()
        assert len(empty_registry.find_by_object(Object.BRANCH)) == 1

    def test_unregister_missing_is_noop(self, empty_registry):
        empty_registry.unregister(Verb.CREATE, Object.BRANCH)
        assert len(empty_registry) == 0

    def test_clear(self, registry):
        registry.clear()
        assert registry.list() == []
        assert registry.get_stats().total_commands == 0

    def test_concurrent_registration(self, empty_registry, command_factory):
        """Parallel registrations of distinct pairs all land."""
        pairs = [(v, o) for v in (Verb.CREATE, Verb.DELETE, Verb.LIST) for o in (Object.BRANCH, Object.CONFIG)]
        threads = [
            threading.Thread(target=empty_registry.register, args=(command_factory(v, o),))
            for v, o in pairs
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(empty_registry) == len(pairs)
        assert sum(len(empty_registry.find_by_verb(v)) for v in empty_registry.available_verbs()) == len(pairs)


class TestLookup:
    """Queries and stats."""

    def test_list_keeps_registration_order(self, empty_registry, command_factory):
        a = command_factory(Verb.LIST, Object.BRANCH)
        b = command_factory(Verb.CREATE, Object.BRANCH)
        empty_registry.register_many([a, b])
        assert empty_registry.list() == [a, b]

    def test_find_matching_verbs_prefix(self, registry):
        assert registry.find_matching_verbs("cr") == [Verb.CREATE]
        assert registry.find_matching_verbs("GEN") == [Verb.GENERATE]

    def test_find_matching_objects_prefix(self, registry):
        assert Object.BRANCH in registry.find_matching_objects("br")
        assert registry.find_matching_objects("zzz") == []

    def test_stats(self, empty_registry, command_factory):
        empty_registry.register(command_factory(Verb.CREATE, Object.BRANCH, category="a"))
        empty_registry.register(command_factory(Verb.DELETE, Object.BRANCH, category="b"))
        stats = empty_registry.get_stats()
        assert stats.total_commands == 2
        assert stats.verbs_count == 2
        assert stats.objects_count == 1
        assert stats.categories_count == 2


class TestCatalog:
    """Self-registration of the built-in command modules."""

    def test_build_registry_returns_fresh_instances(self):
        first = build_registry()
        second = build_registry()
        assert first is not second
        assert len(first) == len(second) > 0

    def test_register_all_counts(self):
        registry = CommandRegistry()
        assert register_all(registry) == len(registry) == len(load_commands())

    def test_register_all_twice_conflicts(self, registry):
        with pytest.raises(RegistryConflictError):
            register_all(registry)

    def test_every_module_contributes(self):
        categories = {cmd.category for cmd in load_commands()}
        assert len(COMMAND_MODULES) == 12
        assert {"initialization", "configuration", "git-workflow", "ai-features", "help", "system"} <= categories

    def test_catalog_entries(self, registry):
        expected = [
            (Verb.INIT, Object.CONFIG), (Verb.SHOW, Object.CONFIG), (Verb.LIST, Object.CONFIG),
            (Verb.GET, Object.CONFIG), (Verb.SET, Object.CONFIG), (Verb.SET, Object.PLATFORM),
            (Verb.LIST, Object.PLATFORM), (Verb.USE, Object.LANGUAGE), (Verb.CREATE, Object.BRANCH),
            (Verb.DELETE, Object.BRANCH), (Verb.LIST, Object.BRANCH), (Verb.GENERATE, Object.COMMIT),
            (Verb.CREATE, Object.COMMIT), (Verb.GENERATE, Object.REVIEW), (Verb.GENERATE, Object.PR),
            (Verb.GENERATE, Object.CHANGELOG), (Verb.HELP, Object.HELP), (Verb.VERSION, Object.VERSION),
            (Verb.CREATE, Object.PROFILE), (Verb.SAVE, Object.PROFILE), (Verb.USE, Object.PROFILE),
            (Verb.LOAD, Object.PROFILE), (Verb.LIST, Object.PROFILE), (Verb.SHOW, Object.PROFILE),
            (Verb.DELETE, Object.PROFILE), (Verb.SWITCH, Object.BRANCH), (Verb.SHOW, Object.PROJECT),
        ]
        for verb, obj in expected:
            assert registry.has(verb, obj), f"{verb.value} {obj.value}"
        assert len(registry) == len(expected)

    def test_create_commit_is_deprecated(self, registry):
        cmd = registry.get(Verb.CREATE, Object.COMMIT)
        assert cmd.deprecated
        assert "generate commit" in cmd.deprecation_message
