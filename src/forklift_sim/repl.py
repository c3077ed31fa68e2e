"""Interactive forklift command simulator, powered by prompt_toolkit."""

from __future__ import annotations

import re
import sys
from typing import Callable, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.shortcuts import clear

from .inventory import resolve_equipment
from .notify import ConsoleNotifier
from .render import format_history, format_inventory, format_run
from .repl_highlight import CommandLexer
from .session import SimulationSession

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/case": ("Toggle case-insensitive commands", "[on|off]"),
    "/clear": ("Clear the terminal screen", ""),
    "/history": ("Show simulation history, newest first", ""),
    "/list": ("List forklifts in the inventory", ""),
    "/reset": ("Start a new session with an empty history", ""),
    "/select": ("Select the forklift to simulate", "<model-number>"),
}

SessionBox = List[SimulationSession]


class _SlashCompleter(Completer):
    """Autocomplete slash commands and model numbers after /select."""

    def __init__(self, session_box: SessionBox):
        self.session_box = session_box

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        if text.startswith("/select "):
            prefix = text[len("/select "):]
            for forklift in self.session_box[0].snapshot():
                if forklift.model_number.startswith(prefix):
                    yield Completion(
                        forklift.model_number,
                        start_position=-len(prefix),
                        display_meta=forklift.name,
                    )
            return

        for cmd, (desc, hint) in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=desc,
                )


def _handle_slash(
    line: str,
    session_box: SessionBox,
    new_session: Callable[[SimulationSession], SimulationSession],
) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    parts = stripped.split(None, 1)
    cmd = parts[0]
    arg = parts[1].strip() if len(parts) > 1 else ""
    session = session_box[0]

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/list":
        print(format_inventory(session.snapshot()))
        return True

    if cmd == "/history":
        print(format_history(session.ledger))
        return True

    if cmd == "/select":
        if not arg:
            print("Usage: /select <model-number>", file=sys.stderr)
            return True

        snapshot = session.snapshot()
        forklift = resolve_equipment(arg, snapshot)

        if forklift is None and snapshot:
            print(f"Unknown model: {arg} (see /list)", file=sys.stderr)
            return True

        session.select_equipment(arg)
        if forklift is None:
            # Empty inventory: keep the selection, runs record as unresolved.
            print(f"Selected {arg} (not in current inventory)")
        else:
            print(f"Selected {forklift.label()}")
        return True

    if cmd == "/case":
        if arg.lower() in ("on", "1", "true", "yes"):
            session.case_sensitive = False
        elif arg.lower() in ("off", "0", "false", "no"):
            session.case_sensitive = True
        elif arg == "":
            session.case_sensitive = not session.case_sensitive
        else:
            print("Usage: /case [on|off]", file=sys.stderr)
            return True

        state = "off" if session.case_sensitive else "on"
        print(f"Case-insensitive commands: {state}")
        return True

    if cmd == "/reset":
        session_box[0] = new_session(session)
        print("Session reset.")
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def _fresh_session(old: SimulationSession) -> SimulationSession:
    fresh = SimulationSession(
        inventory=old.inventory,
        notifier=old.notifier,
        case_sensitive=old.case_sensitive,
        clock=old.clock,
    )
    fresh.select_equipment(old.selected_model)
    return fresh


def handle_line(text: str, session_box: SessionBox) -> Optional[str]:
    """Process one line of input; returns rendered output for a successful run."""
    text = _normalize(text)
    if not text.strip():
        return None

    if _handle_slash(text, session_box, _fresh_session):
        return None

    session = session_box[0]
    session.set_command_text(text)
    outcome = session.simulate()

    if outcome.run is None:
        return None

    return "\n".join(format_run(outcome.run))


def repl(session: Optional[SimulationSession] = None) -> None:
    """Interactive read-simulate-print loop with prompt_toolkit."""
    if session is None:
        session = SimulationSession(notifier=ConsoleNotifier())

    # Use a mutable box so /reset can swap the session.
    session_box: SessionBox = [session]

    prompt: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        lexer=CommandLexer(lambda: session_box[0].case_sensitive),
        completer=_SlashCompleter(session_box),
        complete_while_typing=True,
    )

    print("forklift-sim: Ctrl-D to exit, / for commands")

    while True:
        current = session_box[0]
        label = current.selected_model or "no forklift"

        try:
            text = prompt.prompt(f"[{label}] > ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        rendered = handle_line(text, session_box)
        if rendered:
            print(rendered)
