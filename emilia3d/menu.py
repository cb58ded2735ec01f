"""Keyboard driven text menus: sub menus, choices, text input and actions."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Callable, Optional, Protocol

from .config import Key

MAX_MENU_NAME = 63
MAX_INPUT_STRING = 12
FILL_CHAR = "."
DEFAULT_INPUT = "?"


class MenuAction(IntEnum):
    """What a menu item asks its parent to do after it was performed."""

    NOP = 0
    EXIT = 1
    RESUME = 2
    BACK = 3


class MenuType(IntEnum):
    """Kind of a menu item."""

    MENU = 0
    SUB = 1
    CHOOSE = 2
    INPUT = 3
    FCT = 4


class Screen(Protocol):
    """Where menus are drawn."""

    def clear_screen(self) -> None: ...

    def draw_splash(self, texture: Any) -> None: ...

    def print_row_center(self, text: str, row: float) -> None: ...

    def swap(self) -> None: ...


class Keyboard(Protocol):
    """Where menus read keys from."""

    def wait_for_key(self) -> int: ...

    def clear(self) -> None: ...


class MenuItem:
    """Base class of every menu item."""

    menu_type = MenuType.MENU

    def __init__(
        self,
        name: str = "",
        screen: Optional[Screen] = None,
        keyboard: Optional[Keyboard] = None,
    ) -> None:
        self.name = name[:MAX_MENU_NAME]
        self.screen = screen
        self.keyboard = keyboard
        self.background: Any = None

    @property
    def text(self) -> str:
        """The text shown for this item in its parent menu."""
        return self.name

    def perform(self) -> MenuAction:
        raise NotImplementedError

    def _require_keyboard(self) -> Keyboard:
        if self.keyboard is None:
            raise RuntimeError("menu has no keyboard attached")
        return self.keyboard

    def _begin_draw(self) -> Optional[Screen]:
        if self.screen is None:
            return None
        self.screen.clear_screen()
        if self.background is not None:
            self.screen.draw_splash(self.background)
        return self.screen


class MenuSub(MenuItem):
    """A menu holding sub items; without items it acts as a back, resume or exit entry."""

    menu_type = MenuType.SUB

    def __init__(
        self,
        name: str,
        screen: Optional[Screen] = None,
        keyboard: Optional[Keyboard] = None,
    ) -> None:
        super().__init__(name, screen, keyboard)
        self.current = 0
        self.action = MenuAction.NOP
        self.items: list[MenuItem] = []
        self.info_texts: list[str] = []
        self._bottom_text = ""

    def __len__(self) -> int:
        return len(self.items)

    @property
    def bottom_text(self) -> str:
        return self._bottom_text

    @bottom_text.setter
    def bottom_text(self, text: str) -> None:
        self._bottom_text = text[:MAX_MENU_NAME]

    def add_item(self, item: MenuItem) -> None:
        """Append a sub item."""
        self.items.append(item)

    def add_info_text(self, text: str) -> None:
        """Add a line shown under the menu name."""
        self.info_texts.append(text[:MAX_MENU_NAME])

    def perform(self) -> MenuAction:
        """Run the menu until it is left; return the action for the parent."""
        if not self.items:
            return self.action
        keyboard = self._require_keyboard()
        key: Optional[int] = None
        while True:
            if key == Key.DOWN:
                self.current += 1
            if key == Key.UP:
                self.current -= 1
            if self.current < 0:
                self.current = len(self.items) - 1
            if self.current >= len(self.items):
                self.current = 0

            self.draw()

            key = keyboard.wait_for_key()
            if key == Key.ESCAPE:
                return MenuAction.NOP
            if key == Key.LALT:
                return MenuAction.EXIT

            item = self.items[self.current]
            if key == Key.RETURN:
                result = item.perform()
                if result in (MenuAction.EXIT, MenuAction.RESUME):
                    keyboard.clear()
                    return MenuAction(result)
                if result == MenuAction.BACK:
                    keyboard.clear()
                    return MenuAction.NOP
            if isinstance(item, MenuChoose):
                if key == Key.LEFT:
                    item.prev()
                if key == Key.RIGHT:
                    item.next()

    def draw(self) -> None:
        """Draw the menu name, info lines, bottom line and items."""
        screen = self._begin_draw()
        if screen is None:
            return
        size = len(self.items) + len(self.info_texts) + 2
        yoffset = 10 - size / 2
        screen.print_row_center(self.text, 0 + yoffset)
        for row, info in enumerate(self.info_texts, start=1):
            screen.print_row_center(info, row + yoffset)
        screen.print_row_center(self._bottom_text, -2)
        for row, item in enumerate(self.items):
            if row == self.current:
                label = "> " + item.text[:MAX_MENU_NAME] + " <"
            else:
                label = item.text
            screen.print_row_center(label, row + 2 + yoffset)
        screen.swap()


class MenuChoose(MenuItem):
    """An item cycling through a list of alternatives."""

    menu_type = MenuType.CHOOSE

    def __init__(
        self, screen: Optional[Screen] = None, keyboard: Optional[Keyboard] = None
    ) -> None:
        super().__init__("", screen, keyboard)
        self.current = 0
        self.previous = 0
        self.texts: list[str] = []

    @property
    def text(self) -> str:
        """The current alternative, starred when it differs from the active one."""
        if not self.texts:
            return ""
        if self.current != self.previous:
            return "*" + self.texts[self.current][:61] + "*"
        return self.texts[self.current]

    def add_text(self, text: str) -> None:
        """Append an alternative."""
        self.texts.append(text[:MAX_MENU_NAME])

    def set_current(self, index: int) -> None:
        """Select an alternative and mark it as the active one."""
        self.current = index
        self.previous = index

    def perform(self) -> MenuAction:
        return self.next()

    def next(self) -> MenuAction:
        """Move to the next alternative, wrapping around."""
        if self.texts:
            self.current += 1
            if self.current >= len(self.texts):
                self.current = 0
        return MenuAction.NOP

    def prev(self) -> MenuAction:
        """Move to the previous alternative, wrapping around."""
        if self.texts:
            self.current -= 1
            if self.current < 0:
                self.current = len(self.texts) - 1
        return MenuAction.NOP


class MenuFunction(MenuItem):
    """An item that calls a function when chosen and returns its result."""

    menu_type = MenuType.FCT

    def __init__(
        self,
        name: str,
        function: Callable[[], int],
        screen: Optional[Screen] = None,
        keyboard: Optional[Keyboard] = None,
    ) -> None:
        super().__init__(name, screen, keyboard)
        self.function = function

    def perform(self) -> int:
        return self.function()


class MenuInput(MenuItem):
    """An item reading a short line of text from the keyboard."""

    menu_type = MenuType.INPUT

    def __init__(
        self,
        name: str,
        screen: Optional[Screen] = None,
        keyboard: Optional[Keyboard] = None,
    ) -> None:
        super().__init__(name, screen, keyboard)
        self._buffer = [FILL_CHAR] * MAX_INPUT_STRING
        self.action = MenuAction.BACK

    @property
    def input(self) -> str:
        """The text entered so far."""
        return "".join(self._buffer).split("\0", 1)[0]

    def draw(self) -> None:
        """Draw the item name and the input line."""
        screen = self._begin_draw()
        if screen is None:
            return
        screen.print_row_center(self.text, 8)
        screen.print_row_center(self.input, 10)
        screen.swap()

    def perform(self) -> MenuAction:
        """Read keys until return, escape or a full line; return the item's action."""
        keyboard = self._require_keyboard()
        self.draw()
        letter = 0
        while letter < MAX_INPUT_STRING:
            key = keyboard.wait_for_key()
            if key in (Key.RETURN, Key.ESCAPE):
                break
            if key in (Key.BACKSPACE, Key.DELETE):
                if letter > 0:
                    letter -= 1
                    self._buffer[letter] = FILL_CHAR
            else:
                self._buffer[letter] = chr(int(key) & 0xFF)
                letter += 1
            self.draw()

        text = self.input
        cut = text.find(FILL_CHAR)
        if cut < 0:
            cut = len(text)
        if cut < MAX_INPUT_STRING:
            self._buffer[cut] = "\0"
        if cut == 0:
            self._buffer[0] = DEFAULT_INPUT
            self._buffer[1] = "\0"
        return self.action