import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .cipher import RotationCipher
from .history import HISTORY_PATH

CONFIG_ENV = "CAESAR_TOOLS_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".caesar_tools.json"

ENV_MAPPING: Dict[str, str] = {
    "shift": "CAESAR_TOOLS_SHIFT",
    "wrap": "CAESAR_TOOLS_WRAP",
    "history": "CAESAR_TOOLS_HISTORY",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class ToolConfig:
    shift: int = 3
    wrap: bool = False
    history: bool = True
    history_path: str = str(HISTORY_PATH)

    def to_dict(self) -> Dict[str, object]:
        return {
            "shift": self.shift,
            "wrap": self.wrap,
            "history": self.history,
            "history_path": self.history_path,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "ToolConfig":
        defaults = cls()
        return cls(
            shift=int(data.get("shift", defaults.shift)),
            wrap=_coerce_bool(data.get("wrap", defaults.wrap), "wrap"),
            history=_coerce_bool(data.get("history", defaults.history), "history"),
            history_path=str(Path(str(data.get("history_path") or defaults.history_path)).expanduser()),
        )

    def build_cipher(self, shift: Optional[int] = None, wrap: Optional[bool] = None) -> RotationCipher:
        """
        Build a cipher using the configured shift policy.

        Strict by default; with `wrap` enabled out-of-range shifts are reduced
        modulo 26 instead of raising InvalidShift.
        """
        value = self.shift if shift is None else shift
        use_wrap = self.wrap if wrap is None else wrap
        if use_wrap:
            return RotationCipher.normalized(value)
        return RotationCipher(value)


def default_config_path() -> Path:
    override = os.getenv(CONFIG_ENV, "")
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def _parse_bool(value: str, name: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (1/0, true/false, yes/no, on/off), got {value!r}.")


def _coerce_bool(value: object, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return _parse_bool(value, name)
    raise ValueError(f"{name} must be a boolean, got {value!r}.")


def _merge_env(cfg: ToolConfig) -> ToolConfig:
    shift_val = os.getenv(ENV_MAPPING["shift"], "")
    if shift_val:
        try:
            cfg.shift = int(shift_val)
        except ValueError:
            raise ValueError(
                f"{ENV_MAPPING['shift']} must be an integer, got {shift_val!r}."
            ) from None
    for field_name in ("wrap", "history"):
        env_var = ENV_MAPPING[field_name]
        env_val = os.getenv(env_var, "")
        if env_val:
            setattr(cfg, field_name, _parse_bool(env_val, env_var))
    return cfg


def load_config(path: Optional[Path] = None) -> ToolConfig:
    target = path or default_config_path()
    config = ToolConfig()
    if target.exists():
        try:
            data = json.loads(target.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                config = ToolConfig.from_dict(data)
        except (OSError, ValueError, TypeError):
            # Fall back to defaults/env if file malformed.
            config = ToolConfig()
    return _merge_env(config)


def save_config(config: ToolConfig, path: Optional[Path] = None) -> Path:
    target = path or default_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(config.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
    return target
