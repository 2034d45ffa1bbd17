"""
Prompts — Interactive confirmation

input() blocks, so it runs in a worker thread. End of input and
Ctrl-C both count as "no".
"""

import asyncio
from typing import Callable


YES_ANSWERS = ("y", "yes")
NO_ANSWERS = ("n", "no")


def ask_yes_no(message: str, default: bool = False, reader: Callable[[str], str] = input) -> bool:
    """Blocking yes/no question. Re-asks on unrecognised answers."""
    suffix = " [Y/n] " if default else " [y/N] "
    while True:
        try:
            answer = reader(message + suffix)
        except (EOFError, KeyboardInterrupt):
            return False

        answer = answer.strip().lower()
        if not answer:
            return default
        if answer in YES_ANSWERS:
            return True
        if answer in NO_ANSWERS:
            return False


async def confirm(message: str, default: bool = False) -> bool:
    """Ask the user to confirm. Returns False on EOF or interrupt."""
    return await asyncio.to_thread(ask_yes_no, message, default)
