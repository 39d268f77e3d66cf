"""Labels, data blocks and the symbol table that holds the labels."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

LABEL_SIZE = 31  # longest label is one shorter
DATA = ".data"
STRING = ".string"
EXTERN = ".extern"
ENTRY = ".entry"


@dataclass
class Label:
    """A symbol: its name, whether it is external, and its address."""

    name: str
    external: bool = False
    is_data: bool = False
    line: int = 0


class DataKind(Enum):
    """Which directive produced a data block."""

    STRING = "string"
    DATA = "data"


@dataclass
class DataBlock:
    """Words produced by one .string or .data directive."""

    kind: DataKind
    values: tuple[int, ...] = field(default_factory=tuple)

    @property
    def size(self) -> int:
        return len(self.values)


class SymbolTable:
    """Labels looked up by name; a later label of the same name shadows the earlier."""

    def __init__(self) -> None:
        self._labels: dict[str, Label] = {}

    def find(self, name: str) -> Label | None:
        """Return the label called name, or None."""
        return self._labels.get(name)

    def add(self, label: Label) -> None:
        """Insert a label."""
        self._labels.pop(label.name, None)
        self._labels[label.name] = label

    def __contains__(self, name: object) -> bool:
        return name in self._labels

    def __iter__(self) -> Iterator[Label]:
        return iter(list(self._labels.values()))

    def __len__(self) -> int:
        return len(self._labels)