import argparse
import json
from pathlib import Path
from typing import List, Optional, Union

from .cipher import Direction, Text, rot13
from .config import ToolConfig, default_config_path, load_config, save_config
from .cracker import brute_force, crack
from .history import log_event, read_events


def _as_display(output: Text) -> str:
    if isinstance(output, str):
        return output
    return bytes(output).decode("utf-8", errors="replace")


def _load_input(args: argparse.Namespace) -> Union[str, bytes]:
    if getattr(args, "in_file", None):
        data = Path(args.in_file).read_bytes()
        args.input_size = len(data)
        return data
    if args.text is None:
        raise argparse.ArgumentTypeError("Provide TEXT or --in-file.")
    args.input_size = len(args.text.encode("utf-8"))
    return args.text


def _emit(args: argparse.Namespace, output: Text) -> str:
    if getattr(args, "out_file", None):
        data = output.encode("utf-8") if isinstance(output, str) else bytes(output)
        Path(args.out_file).write_bytes(data)
        return f"Wrote {len(data)} bytes to {args.out_file}"
    return _as_display(output)


def _run_translate(args: argparse.Namespace, config: ToolConfig) -> str:
    direction = Direction.parse(args.direction)
    cipher = config.build_cipher(args.shift, wrap=True if args.wrap else None)
    args.shift_used = cipher.shift
    data = _load_input(args)
    return _emit(args, cipher.translate(data, direction))


def _run_rot13(args: argparse.Namespace, config: ToolConfig) -> str:
    args.input_size = len(args.text.encode("utf-8"))
    args.shift_used = 13
    return rot13(args.text)


def _run_crack(args: argparse.Namespace, config: ToolConfig) -> str:
    data = _load_input(args)
    if args.all:
        return "\n".join(
            f"shift {shift:2d}: {_as_display(plain)}" for shift, plain in brute_force(data)
        )
    lines = []
    for result in crack(data, top=args.top):
        lines.append(f"shift {result.shift:2d} (score {result.score:.2f}): {_as_display(result.plaintext)}")
    return "\n".join(lines)


def _run_config(args: argparse.Namespace, config: ToolConfig) -> str:
    path = Path(args.config) if args.config else default_config_path()
    changed = False
    if args.set_shift is not None or args.set_wrap is not None:
        shift = config.shift if args.set_shift is None else args.set_shift
        wrap = config.wrap if args.set_wrap is None else args.set_wrap
        # The saved shift must stay usable under the saved policy.
        config.build_cipher(shift, wrap=wrap)
        config.shift = shift
        config.wrap = wrap
        changed = True
    if args.set_history is not None:
        config.history = args.set_history
        changed = True
    if changed:
        save_config(config, path)

    lines = [
        f"config: {path}",
        f"shift: {config.shift}",
        f"policy: {'wrap (mod 26)' if config.wrap else 'strict [0, 26)'}",
        f"history: {'on' if config.history else 'off'} ({config.history_path})",
    ]
    if changed:
        lines.append("Configuration saved.")
    return "\n".join(lines)


def _run_history(args: argparse.Namespace, config: ToolConfig) -> str:
    events = read_events(Path(config.history_path), limit=args.limit)
    if not events:
        return "No history recorded."
    return "\n".join(json.dumps(event, ensure_ascii=False) for event in events)


def _run_gui(args: argparse.Namespace, config: ToolConfig) -> None:
    try:
        from .gui import run_gui
    except ImportError as exc:
        raise argparse.ArgumentTypeError(
            f"The window needs PyQt5 (pip install 'caesar-tools[gui]'): {exc}"
        ) from exc
    run_gui()


def _add_text_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("text", nargs="?", help="Input text (ignored if --in-file).")
    p.add_argument("--in-file", help="Read raw bytes from file.")
    p.add_argument("--out-file", help="Write raw bytes to file instead of stdout.")
    p.add_argument(
        "--shift",
        type=int,
        default=None,
        help="Shift in [0, 26). Defaults to the configured shift.",
    )
    p.add_argument(
        "--wrap",
        action="store_true",
        help="Reduce out-of-range shifts modulo 26 instead of rejecting them.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Caesar (rotation) cipher toolkit.")
    parser.add_argument(
        "--no-history", action="store_true", help="Do not record the operation in history."
    )
    parser.add_argument("--config", help="Path to the JSON settings file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    encrypt_parser = subparsers.add_parser("encrypt", help="Rotate letters forward")
    _add_text_args(encrypt_parser)
    encrypt_parser.set_defaults(func=_run_translate, direction="encrypt")

    decrypt_parser = subparsers.add_parser("decrypt", help="Rotate letters back")
    _add_text_args(decrypt_parser)
    decrypt_parser.set_defaults(func=_run_translate, direction="decrypt")

    translate_parser = subparsers.add_parser(
        "translate", help="Encrypt or decrypt depending on the message kind"
    )
    translate_parser.add_argument(
        "direction",
        choices=["encrypt", "decrypt", "plain", "cipher"],
        help="plain/encrypt: input is plaintext; cipher/decrypt: input is ciphertext.",
    )
    _add_text_args(translate_parser)
    translate_parser.set_defaults(func=_run_translate)

    rot13_parser = subparsers.add_parser("rot13", help="ROT13 convenience wrapper")
    rot13_parser.add_argument("text", help="Input text to process.")
    rot13_parser.set_defaults(func=_run_rot13)

    crack_parser = subparsers.add_parser("crack", help="Guess the shift of a ciphertext")
    crack_parser.add_argument("text", nargs="?", help="Ciphertext (ignored if --in-file).")
    crack_parser.add_argument("--in-file", help="Read ciphertext bytes from file.")
    crack_parser.add_argument(
        "--top", type=int, default=3, help="Number of ranked candidates to show (default: 3)."
    )
    crack_parser.add_argument(
        "--all", action="store_true", help="Print the decryption under every shift."
    )
    crack_parser.set_defaults(func=_run_crack)

    config_parser = subparsers.add_parser("config", help="Show or update settings")
    config_parser.add_argument("--shift", dest="set_shift", type=int, help="Default shift.")
    policy = config_parser.add_mutually_exclusive_group()
    policy.add_argument(
        "--wrap", dest="set_wrap", action="store_const", const=True, help="Normalize shifts mod 26."
    )
    policy.add_argument(
        "--strict", dest="set_wrap", action="store_const", const=False, help="Reject shifts outside [0, 26)."
    )
    record = config_parser.add_mutually_exclusive_group()
    record.add_argument(
        "--enable-history", dest="set_history", action="store_const", const=True
    )
    record.add_argument(
        "--disable-history", dest="set_history", action="store_const", const=False
    )
    config_parser.set_defaults(func=_run_config, set_wrap=None, set_history=None)

    history_parser = subparsers.add_parser("history", help="Show recent operations")
    history_parser.add_argument("--limit", type=int, default=20, help="Number of records (default: 20).")
    history_parser.set_defaults(func=_run_history)

    gui_parser = subparsers.add_parser("gui", help="Open the desktop window (needs PyQt5)")
    gui_parser.set_defaults(func=_run_gui)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config(Path(args.config) if args.config else None)
        result = args.func(args, config)
    except (ValueError, OSError, argparse.ArgumentTypeError) as exc:
        parser.error(str(exc))
    if result is not None:
        print(result)
    if args.no_history or not config.history or args.command in ("history", "config", "gui"):
        return
    log_event(
        action=args.command,
        payload={
            "direction": getattr(args, "direction", None),
            "shift": getattr(args, "shift_used", None),
            "input_size": getattr(args, "input_size", None),
            "in_file": getattr(args, "in_file", None),
            "out_file": getattr(args, "out_file", None),
        },
        path=Path(config.history_path),
    )


if __name__ == "__main__":
    main()
