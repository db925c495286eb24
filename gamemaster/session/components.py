"""Board components: the move buttons a session renders and collects."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

BLANK_LABEL = " "


@dataclass
class Component:
    """A selectable move. ``mark`` is the team label owning the cell, if any."""

    move_id: str
    label: str = BLANK_LABEL
    mark: Optional[str] = None
    disabled: bool = False

    @property
    def is_filled(self) -> bool:
        return self.mark is not None

    def fill(self, mark: str) -> None:
        self.mark = mark
        self.label = mark


Board = List[List[Component]]


def iter_components(board: Sequence[Sequence[Component]]) -> Iterator[Component]:
    for row in board:
        yield from row


def find_component(board: Sequence[Sequence[Component]], move_id: str) -> Component:
    for component in iter_components(board):
        if component.move_id == move_id:
            return component
    raise KeyError(f"Unknown move id: {move_id!r}")


def copy_board(board: Sequence[Sequence[Component]]) -> Board:
    return [[copy.copy(component) for component in row] for row in board]
