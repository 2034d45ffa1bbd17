"""
Middleware — Built-in pipeline stages

Default order (outermost first):
  1. ContextValidation          collaborators present
  2. ConfigPrecondition         AI / platform sections configured
  3. ObjectContextPrecondition  per-object hooks (git repository)
  4. DestructiveConfirmation    delete/remove/reset ask first
  5. DryRun                     --dry-run reports and stops
  6. ErrorTranslation           hint for common failures, re-raise
  7. ExecutionLogging           start/finish with duration
  8. SlowOperationWarning       warn past a threshold

Stages 4 and 5 short-circuit by returning without awaiting next_().
"""

import asyncio
import errno
import json
import time
from typing import Any, Awaitable, Callable, Optional

from .enums import DESTRUCTIVE_VERBS, Object
from .errors import CommandValidationError, PreconditionError
from .executor import Middleware, Next
from .models import ExecutionContext, ValidationResult
from .objects import ContextHook, ObjectResolver


AI_OBJECTS = frozenset({Object.COMMIT, Object.REVIEW, Object.CHANGELOG, Object.PR})
PLATFORM_OBJECTS = frozenset({Object.PR})
GIT_OBJECTS = frozenset({
    Object.PROJECT, Object.BRANCH, Object.COMMIT, Object.PR, Object.REVIEW, Object.CHANGELOG,
})

SLOW_THRESHOLD_MS = 5000.0

# probe(cwd) -> repository info or None; may block
RepositoryProbe = Callable[[Any], Optional[Any]]
ConfirmFunction = Callable[[str, bool], Awaitable[bool]]


class ContextValidation(Middleware):
    """Fail fast when a collaborator is missing from the context."""

    name = "context-validation"

    async def invoke(self, context: ExecutionContext, next_: Next) -> None:
        if context.command is None:
            raise CommandValidationError("No command provided in execution context")
        if context.config is None:
            raise CommandValidationError("No configuration provided in execution context")
        if context.logger is None:
            raise CommandValidationError("No logger provided in execution context")
        if context.t is None:
            raise CommandValidationError("No translator provided in execution context")
        await next_()


class ConfigPrecondition(Middleware):
    """
    Admission control on configuration sections.

    Only checks presence. Objects in AI_OBJECTS need an API key and a
    model; objects in PLATFORM_OBJECTS also need a registered platform.
    """

    name = "config-precondition"

    async def invoke(self, context: ExecutionContext, next_: Next) -> None:
        obj = context.command.object
        config = context.config

        if obj in AI_OBJECTS:
            ai = config.ai
            if not ai.api_key:
                raise PreconditionError(
                    f"{ai.provider} API key is required for this command.",
                    remediation=f"export {ai.api_key_env or 'OPENAI_API_KEY'}=<key>",
                )
            if not ai.effective_model:
                raise PreconditionError(
                    "AI model is required for this command.",
                    remediation="quartz set config --key ai.model --value <model>",
                )

        if obj in PLATFORM_OBJECTS and not config.platforms:
            raise PreconditionError(
                "Platform configuration is required for this command.",
                remediation="quartz set platform --type github",
            )

        await next_()


class ObjectContextPrecondition(Middleware):
    """Run the object resolver's context hooks for the command's object."""

    name = "object-context"

    def __init__(self, resolver: ObjectResolver):
        self.resolver = resolver

    async def invoke(self, context: ExecutionContext, next_: Next) -> None:
        result = await self.resolver.validate_object_context(context.command.object, context)
        for warning in result.warnings:
            context.logger.warn(warning)
        if not result.valid:
            raise PreconditionError("; ".join(result.errors))
        await next_()


def require_repository(probe: RepositoryProbe) -> ContextHook:
    """
    Build a context hook failing outside a git repository.

    Args:
        probe: Blocking callable taking the working directory and
            returning repository info, or None outside a repository.
    """

    async def hook(context: ExecutionContext) -> ValidationResult:
        info = await asyncio.to_thread(probe, context.cwd)
        if info is None:
            return ValidationResult.failure("This command must be run inside a git repository.")
        return ValidationResult()

    return hook


class DestructiveConfirmation(Middleware):
    """Ask before delete/remove/reset unless --force was given."""

    name = "confirmation"

    def __init__(self, confirm: ConfirmFunction):
        self.confirm = confirm

    async def invoke(self, context: ExecutionContext, next_: Next) -> None:
        command = context.command
        params = command.parameters

        if command.verb.value in DESTRUCTIVE_VERBS and not params.get("force"):
            question = context.t(
                "middleware.confirm_destructive",
                verb=command.verb.value,
                object=command.object.value,
            )
            if not await self.confirm(question, False):
                context.logger.info(context.t("middleware.cancelled"))
                return

        await next_()


class DryRun(Middleware):
    """Report the intended action and stop when --dry-run is set."""

    name = "dry-run"

    async def invoke(self, context: ExecutionContext, next_: Next) -> None:
        command = context.command
        params = command.parameters

        if params.get("dry-run"):
            context.logger.info(context.t("middleware.dry_run"))
            context.logger.info(context.t("middleware.would_execute", command=command.name))
            shown = {k: v for k, v in params.items() if k != "dry-run"}
            if shown:
                context.logger.info(context.t(
                    "middleware.parameters",
                    parameters=json.dumps(shown, default=str, ensure_ascii=False),
                ))
            if command.args:
                context.logger.info(context.t("middleware.arguments", args=" ".join(command.args)))
            return

        await next_()


def translation_hint(error: BaseException) -> Optional[str]:
    """
    Translator key of a remediation hint for common failures.

    Matches exception types first, then message fragments.
    Returns None when no hint applies.
    """
    message = str(error)
    lowered = message.lower()
    code = getattr(error, "errno", None)

    if isinstance(error, FileNotFoundError) or code == errno.ENOENT or "ENOENT" in message \
            or "no such file" in lowered:
        return "errors.hint_not_found"
    if isinstance(error, PermissionError) or code == errno.EACCES or "EACCES" in message \
            or "permission denied" in lowered:
        return "errors.hint_permission"
    if isinstance(error, (ConnectionError, TimeoutError)) or "network" in lowered \
            or "timed out" in lowered or "connection" in lowered:
        return "errors.hint_network"
    if "API" in message or "token" in lowered or "401" in message \
            or "unauthorized" in lowered or "authentication" in lowered:
        return "errors.hint_auth"
    return None


class ErrorTranslation(Middleware):
    """Log failures with a remediation hint, then re-raise."""

    name = "error-translation"

    async def invoke(self, context: ExecutionContext, next_: Next) -> None:
        try:
            await next_()
        except Exception as e:
            context.logger.error(context.t("errors.command_failed", error=str(e) or type(e).__name__))
            hint = translation_hint(e)
            if hint:
                context.logger.error(context.t(hint))
            # Callers check this before reporting the failure again
            e.reported = True
            raise


class ExecutionLogging(Middleware):
    """Debug-log command start and completion."""

    name = "logging"

    async def invoke(self, context: ExecutionContext, next_: Next) -> None:
        command = context.command
        context.logger.debug(f"Executing: {command.name} {command.parameters}")

        started = time.monotonic()
        try:
            await next_()
        except Exception:
            context.logger.debug(f"Command failed after {_ms_since(started):.0f}ms")
            raise
        context.logger.debug(f"Command completed in {_ms_since(started):.0f}ms")


class SlowOperationWarning(Middleware):
    """Warn when everything downstream took longer than threshold_ms."""

    name = "performance"

    def __init__(self, threshold_ms: float = SLOW_THRESHOLD_MS):
        self.threshold_ms = threshold_ms

    async def invoke(self, context: ExecutionContext, next_: Next) -> None:
        started = time.monotonic()
        try:
            await next_()
        finally:
            duration = _ms_since(started)
            if duration > self.threshold_ms:
                context.logger.warn(context.t("middleware.slow", duration=f"{duration:.2f}"))
            context.logger.debug(f"Command execution time: {duration:.2f}ms")


def _ms_since(started: float) -> float:
    return (time.monotonic() - started) * 1000.0
