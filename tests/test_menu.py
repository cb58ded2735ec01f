import pytest

from emilia3d.config import Key
from emilia3d.menu import (
    MenuAction,
    MenuChoose,
    MenuFunction,
    MenuInput,
    MenuSub,
    MenuType,
)


class ScriptedKeyboard:
    def __init__(self, keys):
        self.keys = list(keys)
        self.clears = 0

    def wait_for_key(self):
        return self.keys.pop(0)

    def clear(self):
        self.clears += 1


class RecordingScreen:
    def __init__(self):
        self.rows = []
        self.swaps = 0
        self.splashes = []

    def clear_screen(self):
        self.rows = []

    def draw_splash(self, texture):
        self.splashes.append(texture)

    def print_row_center(self, text, row):
        self.rows.append((text, row))

    def swap(self):
        self.swaps += 1


def build(keys, screen=None):
    kb = ScriptedKeyboard(keys)
    main = MenuSub("main", screen, kb)
    sub = MenuSub("sub", screen, kb)
    main.add_item(sub)
    resume = MenuSub("resume", screen, kb)
    resume.action = MenuAction.RESUME
    main.add_item(resume)
    exit_item = MenuSub("exit", screen, kb)
    exit_item.action = MenuAction.EXIT
    main.add_item(exit_item)
    choose = MenuChoose(screen, kb)
    for text in ("first", "second", "third"):
        choose.add_text(text)
    sub.add_item(choose)
    sub.add_item(MenuFunction("apply", lambda: 0, screen, kb))
    back = MenuSub("back", screen, kb)
    back.action = MenuAction.BACK
    sub.add_item(back)
    sub.add_item(MenuInput("input", screen, kb))
    return main, choose, kb


def test_resume_item_returns_resume_and_clears_keyboard():
    main, _, kb = build([Key.DOWN, Key.RETURN])
    assert main.perform() == MenuAction.RESUME
    assert kb.clears == 1


def test_exit_item_returns_exit():
    main, _, _ = build([Key.DOWN, Key.DOWN, Key.RETURN])
    assert main.perform() == MenuAction.EXIT


def test_up_wraps_to_last_item():
    main, _, _ = build([Key.UP, Key.RETURN])
    assert main.perform() == MenuAction.EXIT
    assert main.current == 2


def test_escape_returns_nop():
    main, _, kb = build([Key.ESCAPE, Key.RETURN])
    assert main.perform() == MenuAction.NOP
    assert kb.keys == [Key.RETURN]


def test_left_alt_returns_exit():
    main, _, _ = build([Key.LALT])
    assert main.perform() == MenuAction.EXIT


def test_sub_menu_choice_and_back():
    keys = [Key.RETURN, Key.RETURN, Key.DOWN, Key.DOWN, Key.RETURN, Key.ESCAPE]
    main, choose, kb = build(keys)
    assert main.perform() == MenuAction.NOP
    assert choose.current == 1
    assert choose.text == "*second*"
    assert kb.keys == []
    assert kb.clears == 1


def test_left_right_on_choose_item():
    keys = [Key.RETURN, Key.LEFT, Key.ESCAPE, Key.ESCAPE]
    main, choose, _ = build(keys)
    main.perform()
    assert choose.current == 2


def test_empty_sub_returns_its_action():
    item = MenuSub("back")
    item.action = MenuAction.BACK
    assert item.perform() == MenuAction.BACK


def test_perform_without_keyboard_raises():
    menu = MenuSub("main")
    menu.add_item(MenuSub("x"))
    with pytest.raises(RuntimeError):
        menu.perform()


def test_draw_layout():
    screen = RecordingScreen()
    main, _, _ = build([], screen)
    main.background = "splash"
    main.draw()
    assert screen.rows == [
        ("main", 7.5),
        ("", -2),
        ("> sub <", 9.5),
        ("resume", 10.5),
        ("exit", 11.5),
    ]
    assert screen.splashes == ["splash"]
    assert screen.swaps == 1


def test_draw_info_text():
    screen = RecordingScreen()
    menu = MenuSub("m", screen)
    menu.add_info_text("hello")
    menu.bottom_text = "bottom"
    menu.draw()
    assert screen.rows == [("m", 8.5), ("hello", 9.5), ("bottom", -2)]


def test_name_is_truncated():
    assert MenuSub("x" * 100).text == "x" * 63
    assert MenuSub("m").menu_type == MenuType.SUB


def test_choose_wraps_both_ways():
    choose = MenuChoose()
    for text in ("a", "b"):
        choose.add_text(text)
    assert choose.text == "a"
    assert choose.next() == MenuAction.NOP
    assert choose.next() == MenuAction.NOP
    assert choose.current == 0
    choose.prev()
    assert choose.current == 1
    assert choose.text == "*b*"
    choose.set_current(1)
    assert choose.text == "b"


def test_empty_choose():
    choose = MenuChoose()
    assert choose.perform() == MenuAction.NOP
    assert choose.text == ""
    assert choose.current == 0


def test_function_item_returns_function_result():
    calls = []
    item = MenuFunction("apply", lambda: calls.append(1) or 3)
    assert item.perform() == 3
    assert calls == [1]
    assert item.menu_type == MenuType.FCT


def test_input_with_backspace():
    kb = ScriptedKeyboard([Key.A, Key.B, Key.C, Key.BACKSPACE, Key.RETURN])
    item = MenuInput("name", keyboard=kb)
    assert item.perform() == MenuAction.BACK
    assert item.input == "ab"


def test_input_empty_gives_default():
    kb = ScriptedKeyboard([Key.ESCAPE])
    item = MenuInput("name", keyboard=kb)
    item.perform()
    assert item.input == "?"


def test_input_initial_fill():
    assert MenuInput("name").input == "." * 12


def test_input_stops_when_full():
    kb = ScriptedKeyboard([Key.Z] * 12 + [Key.RETURN])
    item = MenuInput("name", keyboard=kb)
    item.perform()
    assert item.input == "z" * 12
    assert kb.keys == [Key.RETURN]


def test_input_draws_after_each_key():
    screen = RecordingScreen()
    kb = ScriptedKeyboard([Key.A, Key.RETURN])
    item = MenuInput("name", screen, kb)
    item.perform()
    assert screen.swaps == 2
    assert screen.rows == [("name", 8), ("a" + "." * 11, 10)]