from typing import Dict, Optional

from ..entities.common import Command

KEY_BINDINGS: Dict[str, Command] = {
    "space": Command.RESET_WINDOW_SIZE,
    "m": Command.TOGGLE_MIRROR,
    "g": Command.TOGGLE_EXPOSURE_MODE,
    "f": Command.TOGGLE_FULLBRIGHT,
    "up": Command.GAMMA_UP,
    "down": Command.GAMMA_DOWN,
}


def command_for_key(key: Optional[str]) -> Optional[Command]:
    if key is None:
        return None
    return KEY_BINDINGS.get(key.lower())
