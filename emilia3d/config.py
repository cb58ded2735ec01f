"""Engine configuration: screen, sound, key bindings, data paths and the config file."""

from __future__ import annotations

import logging
import os
import re
from enum import IntEnum
from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

logger = logging.getLogger(__name__)

PACKAGE_NAME = "pinball"
DEFAULT_DATA_DIR = f"/usr/local/share/{PACKAGE_NAME}"
SYSTEM_CONFIG_FILE = Path("/etc") / PACKAGE_NAME / PACKAGE_NAME

MIN_WIDTH, MAX_WIDTH = 100, 1600
MIN_HEIGHT, MAX_HEIGHT = 100, 1200
MAX_VOLUME = 8


class Key(IntEnum):
    """Keyboard key codes."""

    BACKSPACE = 8
    RETURN = 13
    ESCAPE = 27
    SPACE = 32
    NUM_0 = 48
    NUM_1 = 49
    NUM_2 = 50
    NUM_3 = 51
    NUM_4 = 52
    NUM_5 = 53
    NUM_6 = 54
    NUM_7 = 55
    NUM_8 = 56
    NUM_9 = 57
    A = 97
    B = 98
    C = 99
    D = 100
    E = 101
    F = 102
    G = 103
    H = 104
    I = 105  # noqa: E741
    J = 106
    K = 107
    L = 108
    M = 109
    N = 110
    O = 111  # noqa: E741
    P = 112
    Q = 113
    R = 114
    S = 115
    T = 116
    U = 117
    V = 118
    W = 119
    X = 120
    Y = 121
    Z = 122
    DELETE = 127
    HOME = 0x4000004A
    PAGEUP = 0x4000004B
    PAGEDOWN = 0x4000004E
    RIGHT = 0x4000004F
    LEFT = 0x40000050
    DOWN = 0x40000051
    UP = 0x40000052
    LCTRL = 0x400000E0
    LSHIFT = 0x400000E1
    LALT = 0x400000E2
    RCTRL = 0x400000E4
    RSHIFT = 0x400000E5


class TextureFilter(IntEnum):
    """Texture filtering mode; NONE disables texturing."""

    NONE = -1
    NEAREST = 0x2600
    LINEAR = 0x2601


_FILTER_CODES = {TextureFilter.LINEAR: "0", TextureFilter.NEAREST: "1"}

_SPECIAL_KEY_NAMES = {
    Key.RETURN: "return",
    Key.SPACE: "space",
    Key.LSHIFT: "left shift",
    Key.RSHIFT: "right shift",
}

DEFAULT_KEYS = {
    "leftflip": Key.LSHIFT,
    "rightflip": Key.RSHIFT,
    "bottomnudge": Key.SPACE,
    "leftnudge": Key.LCTRL,
    "rightnudge": Key.RCTRL,
    "launch": Key.RETURN,
    "reset": Key.R,
}


def key_name(key: int) -> str:
    """Human readable name of a key code, or "unknown"."""
    code = int(key)
    if Key.A <= code <= Key.Z or Key.NUM_0 <= code <= Key.NUM_9:
        return chr(code)
    return _SPECIAL_KEY_NAMES.get(code, "unknown")


def is_absolute_path(path: str) -> bool:
    """True if the path starts at a file system root."""
    if os.name == "nt" and len(path) > 2 and path[1] == ":" and path[2] == "\\":
        return True
    return path.startswith("/")


def create_directories(path: Union[str, os.PathLike], mode: int = 0o700) -> None:
    """Create every missing directory along a '/' separated path."""
    text = os.fspath(path)
    pos = 0
    while pos <= len(text):
        current = text.find("/", pos)
        if current < 0:
            current = len(text)
        if current:
            directory = text[:current]
            if not os.path.exists(directory):
                os.mkdir(directory, mode)
        pos = current + 1


def default_config_path() -> Path:
    """The per-user configuration file."""
    home = os.environ.get("HOME") or "."
    return Path(home) / ".config" / "emilia" / PACKAGE_NAME


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _clamp(value: int, low: int, high: int) -> int:
    return min(high, max(low, value))


class Config:
    """Settings for the engine, with defaults, a config file and command line flags."""

    def __init__(self, install_dir: str = DEFAULT_DATA_DIR) -> None:
        self.install_dir = install_dir
        self.data_dir = ""
        self.sub_dir = ""
        self.data_sub_dir = ""
        self.exe_dir = ""
        self.ratio = 0.0
        self.keys: dict[str, int] = {}
        self.set_defaults()

    @property
    def width_div2(self) -> int:
        return self.width // 2

    @property
    def height_div2(self) -> int:
        return self.height // 2

    def set_defaults(self) -> None:
        """Reset every setting to its default value."""
        self.set_size(640, 480)
        self.set_sound(8)
        self.set_music(8)
        self.bpp = 16
        self.gl_filter = TextureFilter.LINEAR
        self.view = 0
        self.fullscreen = False
        self.extern_gl = False
        self.set_data_dir(self.install_dir)
        self.lights = True
        self.brightness = 0.5
        self.show_fps = False
        self.fire = False
        for name, key in DEFAULT_KEYS.items():
            self.set_key(name, key)

    def set_size(self, width: int, height: int) -> None:
        """Set the screen size, clamped; a zero height means a square screen."""
        if height == 0:
            height = width
        self.width = _clamp(width, MIN_WIDTH, MAX_WIDTH)
        self.height = _clamp(height, MIN_HEIGHT, MAX_HEIGHT)

    def set_sound(self, volume: int) -> None:
        """Set the effects volume, clamped to 0..8."""
        self.sound = _clamp(volume, 0, MAX_VOLUME)

    def set_music(self, volume: int) -> None:
        """Set the music volume, clamped to 0..8."""
        self.music = _clamp(volume, 0, MAX_VOLUME)

    def get_key(self, name: str) -> int:
        """Key code bound to an action; HOME when the action is unbound."""
        return self.keys.get(name, Key.HOME)

    def set_key(self, name: str, key: int) -> None:
        """Bind an action to a key code."""
        self.keys[name] = key

    def set_data_dir(self, path: str) -> None:
        self.data_dir = path
        self.data_sub_dir = f"{self.data_dir}/{self.sub_dir}"

    def set_sub_dir(self, path: str) -> None:
        self.sub_dir = path
        self.data_sub_dir = f"{self.data_dir}/{self.sub_dir}"

    def _lines(self) -> Iterator[str]:
        yield f"size: {self.width} {self.height}"
        yield f"sound: {self.sound}"
        yield f"music: {self.music}"
        yield f"view: {self.view}"
        yield f"bpp: {self.bpp}"
        yield f"fullscreen: {int(self.fullscreen)}"
        yield f"lights: {int(self.lights)}"
        yield f"brightness: {self.brightness:g}"
        yield f"texture_filter: {_FILTER_CODES.get(self.gl_filter, '-1')}"
        yield f"showfps: {int(self.show_fps)}"
        yield f"fire: {int(self.fire)}"
        for name in sorted(self.keys):
            yield f"keyboard: {name} {int(self.keys[name])}"
        yield f"ratio: {self.ratio:g}"

    def save(self, path: Optional[Union[str, os.PathLike]] = None) -> Path:
        """Write the settings to a config file and return its path."""
        target = Path(path) if path is not None else default_config_path()
        create_directories(f"{target.parent}/")
        target.write_text("".join(line + "\n" for line in self._lines()))
        return target

    def load(self, path: Optional[Union[str, os.PathLike]] = None) -> Optional[Path]:
        """Reset to defaults, then read a config file.

        Falls back to the system-wide file; returns the file read, or None
        when neither could be opened.
        """
        self.set_defaults()
        first = Path(path) if path is not None else default_config_path()
        for candidate in (first, SYSTEM_CONFIG_FILE):
            try:
                text = Path(candidate).read_text()
            except OSError:
                continue
            self._parse(text)
            return Path(candidate)
        logger.warning("Couldn't open config file: %s; using default values", first)
        return None

    def _parse(self, text: str) -> None:
        tokens = iter(text.split())
        try:
            for word in tokens:
                if word == "size:":
                    self.width = int(next(tokens))
                    self.height = int(next(tokens))
                elif word == "sound:":
                    self.set_sound(int(next(tokens)))
                elif word == "music:":
                    self.set_music(int(next(tokens)))
                elif word == "view:":
                    self.view = int(next(tokens))
                elif word == "bpp:":
                    self.bpp = int(next(tokens))
                elif word == "fullscreen:":
                    self.fullscreen = next(tokens) != "0"
                elif word == "showfps:":
                    self.show_fps = next(tokens) != "0"
                elif word == "fire:":
                    self.fire = next(tokens) != "0"
                elif word == "lights:":
                    self.lights = next(tokens) != "0"
                elif word == "texture_filter:":
                    value = next(tokens)
                    if value == "0":
                        self.gl_filter = TextureFilter.LINEAR
                    elif value == "1":
                        self.gl_filter = TextureFilter.NEAREST
                    else:
                        self.gl_filter = TextureFilter.NONE
                elif word == "brightness:":
                    self.brightness = float(next(tokens))
                elif word == "keyboard:":
                    name = next(tokens)
                    self.set_key(name, int(next(tokens)))
                elif word == "ratio:":
                    self.ratio = float(next(tokens))
        except (StopIteration, ValueError):
            return

    def load_args(self, argv: Sequence[str]) -> list[str]:
        """Apply engine flags and return the arguments with those flags removed."""
        args = list(argv)
        a = 1
        while a < len(args):
            arg = args[a]
            if arg == "-dir":
                print(self.install_dir)
                raise SystemExit(0)
            if arg == "--fullscreen":
                self.fullscreen = True
                del args[a]
            elif arg == "--size":
                if len(args) > a + 2:
                    self.set_size(_atoi(args[a + 1]), _atoi(args[a + 2]))
                    del args[a : a + 3]
                else:
                    del args[a]
            elif arg == "--bpp":
                if len(args) > a + 1:
                    self.bpp = _atoi(args[a + 1])
                    del args[a + 1]
                del args[a]
            elif arg == "--nosound":
                self.set_sound(0)
                self.set_music(0)
                del args[a]
            elif arg == "--nolights":
                self.lights = False
                del args[a]
            elif arg == "--nearest":
                self.gl_filter = TextureFilter.NEAREST
                del args[a]
            elif arg == "--externgl":
                self.extern_gl = True
                del args[a]
            else:
                logger.debug("Unknown argument: %s", arg)
                a += 1
        return args

    def set_paths(self, argv0: str) -> None:
        """Resolve a relative install directory against the executable's location."""
        self.exe_dir = "./"
        if not self.install_dir.startswith("/"):
            cut = argv0.rfind("/")
            if os.name == "nt":
                cut = max(cut, argv0.rfind("\\"))
            path = argv0[:cut] if cut >= 0 else ""
            if is_absolute_path(argv0):
                self.exe_dir = path
            else:
                self.exe_dir = f"{os.getcwd()}/{path}"
            self.data_dir = f"{self.exe_dir}/{self.install_dir}"
        else:
            self.data_dir = self.install_dir
        self.data_sub_dir = f"{self.data_dir}/{self.sub_dir}"