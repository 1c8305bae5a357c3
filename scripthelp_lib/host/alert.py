"""Console implementation of the modal/sheet primitive.

Actions are listed with their index; entering nothing or `c` picks the
cancel action, which resolves to -1 like the host dialogs do.
"""
from __future__ import annotations
import logging
from getpass import getpass
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class Alert:
    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        secret_func: Callable[[str], str] = getpass,
        output_func: Callable[[str], None] = print,
    ) -> None:
        self.title: Optional[str] = None
        self.message: Optional[str] = None
        self._actions: List[Tuple[str, bool]] = []
        self._cancel: Optional[str] = None
        self._fields: List[Tuple[str, str, bool]] = []
        self._values: List[str] = []
        self._input = input_func
        self._secret = secret_func
        self._output = output_func

    def add_action(self, title: str) -> None:
        self._actions.append((title, False))

    def add_destructive_action(self, title: str) -> None:
        self._actions.append((title, True))

    def add_cancel_action(self, title: str) -> None:
        self._cancel = title

    def add_text_field(self, placeholder: str = '', text: str = '') -> None:
        self._fields.append((placeholder, text, False))

    def add_secure_text_field(self, placeholder: str = '', text: str = '') -> None:
        self._fields.append((placeholder, text, True))

    def text_field_value(self, index: int) -> str:
        return self._values[index]

    def _header(self) -> None:
        if self.title:
            self._output(self.title)
        if self.message:
            self._output(self.message)

    def _choose(self) -> int:
        for i, (title, destructive) in enumerate(self._actions):
            self._output(f"  [{i}] {title}{' (!)' if destructive else ''}")
        if self._cancel is not None:
            self._output(f"  [c] {self._cancel}")
        while True:
            answer = self._input('> ').strip().lower()
            if answer in ('', 'c') and self._cancel is not None:
                return -1
            if answer.isdigit() and int(answer) < len(self._actions):
                return int(answer)
            self._output("Invalid choice")

    def present_alert(self) -> int:
        self._header()
        self._values = []
        for placeholder, text, secure in self._fields:
            prompt = f"{placeholder or 'Value'}{f' [{text}]' if text and not secure else ''}: "
            value = (self._secret if secure else self._input)(prompt)
            self._values.append(value or text)
        return self._choose()

    def present_sheet(self) -> int:
        self._header()
        return self._choose()
