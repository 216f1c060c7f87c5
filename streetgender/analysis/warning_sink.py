"""
Append-only collection of data-quality warnings
"""

from typing import Iterable, Iterator, List
from loguru import logger


class WarningSink:
    """Warnings recorded while building one collection, in insertion order"""

    def __init__(self):
        self._messages: List[str] = []

    def add(self, message: str):
        self._messages.append(message)

    def extend(self, messages: Iterable[str]):
        self._messages.extend(messages)

    @property
    def messages(self) -> List[str]:
        return list(self._messages)

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def flush_to_log(self, context: str = ""):
        """Emit every warning through the logger"""
        prefix = f"{context}: " if context else ""
        for message in self._messages:
            logger.warning(f"{prefix}{message}")
