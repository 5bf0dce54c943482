from pushbox.control.actions import KEY_BINDINGS, WASD_BINDINGS, Action, action_for_key
from pushbox.control.gate import INPUT_INTERVAL_MS, InputGate

__all__ = [
    "Action",
    "KEY_BINDINGS",
    "WASD_BINDINGS",
    "action_for_key",
    "INPUT_INTERVAL_MS",
    "InputGate",
]
