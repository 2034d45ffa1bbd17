"""
Executor — Runs the middleware chain around a command handler

Stages are an ordered list; registration order is invocation order,
outermost first. Per execution the list is folded right-to-left into
a single continuation ending in the handler call.

A stage that does not await next_() short-circuits: downstream stages
and the handler never run, nothing is raised, and the result is a
success flagged as skipped.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import replace
from functools import reduce
from typing import Awaitable, Callable, List, Union

from .models import CommandDefinition, ExecutionContext, ExecutionResult, ParsedCommand


Next = Callable[[], Awaitable[None]]
MiddlewareFunction = Callable[[ExecutionContext, Next], Awaitable[None]]


class Middleware(ABC):
    """A pipeline stage wrapping everything downstream of it."""

    name = "middleware"

    @abstractmethod
    async def invoke(self, context: ExecutionContext, next_: Next) -> None:
        """Inspect or modify context, then await next_() to continue."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class FunctionMiddleware(Middleware):
    """Adapts a plain `async def stage(context, next_)` to the contract."""

    def __init__(self, func: MiddlewareFunction):
        self.func = func
        self.name = getattr(func, "__name__", "middleware")

    async def invoke(self, context: ExecutionContext, next_: Next) -> None:
        await self.func(context, next_)


class Executor:
    """Executes command handlers through the middleware chain."""

    def __init__(self):
        self._middlewares: List[Middleware] = []

    def use(self, middleware: Union[Middleware, MiddlewareFunction]) -> None:
        """Append a stage (instance or async callable) to the chain."""
        if not isinstance(middleware, Middleware):
            middleware = FunctionMiddleware(middleware)
        self._middlewares.append(middleware)

    @property
    def middlewares(self) -> List[Middleware]:
        return list(self._middlewares)

    @property
    def middleware_count(self) -> int:
        return len(self._middlewares)

    def clear_middleware(self) -> None:
        self._middlewares = []

    async def execute(
        self,
        command: CommandDefinition,
        parsed: ParsedCommand,
        context: ExecutionContext
    ) -> ExecutionResult:
        """
        Run the chain for one command.

        Never raises: failures are reported in the ExecutionResult.
        """
        started = time.perf_counter()
        context = replace(context, command=parsed)
        reached = []

        async def terminal() -> None:
            reached.append(True)
            await self._run_handler(command, context)

        chain = self._compose(context, terminal)

        try:
            await chain()
        except Exception as e:
            return ExecutionResult(
                success=False,
                error=str(e) or type(e).__name__,
                execution_time=_elapsed_ms(started),
                exception=e,
            )

        return ExecutionResult(
            success=True,
            execution_time=_elapsed_ms(started),
            skipped=not reached,
        )

    def _compose(self, context: ExecutionContext, terminal: Next) -> Next:
        """Fold stages right-to-left into one continuation."""

        def wrap(next_: Next, stage: Middleware) -> Next:
            async def call() -> None:
                await stage.invoke(context, next_)
            return call

        return reduce(wrap, reversed(self._middlewares), terminal)

    async def _run_handler(self, command: CommandDefinition, context: ExecutionContext) -> None:
        if command.deprecated:
            warning = command.deprecation_message or f'Command "{command.name}" is deprecated'
            if context.logger is not None:
                context.logger.warn(warning)
        await command.handler(context)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0
