# -*- coding: utf-8 -*-
"""Interactive resolver: asks the operator what to do with each new key."""
from __future__ import annotations

import sys
from typing import Callable, Optional, TextIO

from .exceptions import SyncError
from .merge import Accept, Decline, EditTo, Resolution

CHOICES = ("yes", "no", "edit")
DEFAULT_CHOICE = "yes"


class ConsoleResolver:
    """Blocking prompt on stdin/stdout.

    ``input_func`` and ``out`` are injectable so tests can script the answers.
    """

    def __init__(self, locale: str = "", input_func: Optional[Callable[[str], str]] = None, out: Optional[TextIO] = None) -> None:
        self.locale = locale
        self._input = input_func or input
        self._out = out or sys.stdout

    def _ask(self, prompt: str) -> str:
        try:
            return self._input(prompt)
        except EOFError as e:
            raise SyncError("Input closed while waiting for an answer (--interactive needs a terminal)") from e

    def _choice(self, key: str) -> str:
        where = f" [{self.locale}]" if self.locale else ""
        prompt = f'New string found{where}: "{key}" - add? [{"/".join(CHOICES)}] ({DEFAULT_CHOICE}): '
        while True:
            answer = self._ask(prompt).strip().lower()
            if not answer:
                return DEFAULT_CHOICE
            for choice in CHOICES:
                if answer == choice or answer == choice[0]:
                    return choice
            if answer.isdigit() and int(answer) < len(CHOICES):
                return CHOICES[int(answer)]
            self._out.write(f"Value \"{answer}\" is invalid; choose one of {', '.join(CHOICES)}.\n")

    def __call__(self, key: str, placeholder: str) -> Resolution:
        action = self._choice(key)
        if action == "no":
            return Decline()
        if action == "edit":
            text = self._ask(f'Translation for "{key}" [{key}]: ')
            # Empty answer takes the suggested default, which is the key itself.
            return EditTo(text if text != "" else key)
        return Accept()
