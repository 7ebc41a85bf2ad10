"""Keybinding registry mapping single keys to orders."""

from __future__ import annotations

from typing import Iterator, Mapping

from errors import KeybindingCollision
from interfaces import Action
from models import Order


class Menu:
    """Immutable name -> Order mapping with unique keybindings.

    Two orders bound to the same key are rejected at construction.
    """

    def __init__(self, orders: Mapping[str, Order]) -> None:
        seen: dict[str, str] = {}
        for name, order in orders.items():
            if order.keybinding in seen:
                raise KeybindingCollision(order.keybinding, seen[order.keybinding], name)
            seen[order.keybinding] = name
        self._orders = dict(orders)

    def __getitem__(self, name: str) -> Order:
        return self._orders[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._orders)

    def __len__(self) -> int:
        return len(self._orders)

    def lookup(self) -> dict[str, Order]:
        return {order.keybinding: order for order in self._orders.values()}

    def describe(self) -> Iterator[tuple[str, str, str]]:
        for name, order in self._orders.items():
            yield order.keybinding, name, order.description


def default_menu(edit: Action, copy: Action, chat: Action, retry: Action, quit: Action) -> Menu:
    return Menu(
        {
            "editAndCopy": Order("e", "edit, then copy", (edit, copy)),
            "copy": Order("space", "copy to clipboard", (copy,)),
            "chat": Order("c", "send to chat", (chat,)),
            "editAndChat": Order("a", "edit, then send to chat", (edit, chat)),
            "retry": Order("r", "discard and record again", (retry,)),
            "quit": Order("q", "quit", (quit,)),
        }
    )
