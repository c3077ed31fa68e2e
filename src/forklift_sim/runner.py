"""forklift-sim command line: batch simulation or the interactive shell."""

from __future__ import annotations

import sys
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from .inventory import CachedInventory
from .notify import ConsoleNotifier
from .render import format_history
from .repl import repl
from .session import SimulationSession
from .types import SimulationOutcome
from .utils import configure_logging, ignore_case_enabled, inventory_path_from_env

USAGE = "usage: forklift-sim [--inventory PATH] [--select MODEL] [--ignore-case] [COMMAND ...]"


def make_session(
    inventory_path: Optional[str] = None,
    case_sensitive: bool = True,
    notifier=None,
) -> SimulationSession:
    inventory = CachedInventory.from_file(inventory_path) if inventory_path else None
    return SimulationSession(
        inventory=inventory,
        notifier=notifier or ConsoleNotifier(),
        case_sensitive=case_sensitive,
    )


def run(
    commands: Sequence[str],
    model_number: str,
    inventory_path: Optional[str] = None,
    case_sensitive: bool = True,
    notifier=None,
) -> Tuple[SimulationSession, List[SimulationOutcome]]:
    """Simulate each command in order against one forklift."""
    session = make_session(inventory_path, case_sensitive=case_sensitive, notifier=notifier)
    session.select_equipment(model_number)
    outcomes = []

    for command in commands:
        session.set_command_text(command)
        outcomes.append(session.simulate())

    return session, outcomes


def _parse_args(argv: Sequence[str]):
    inventory_path = None
    model_number = ""
    ignore_case = False
    commands: List[str] = []
    it = iter(argv)

    for token in it:
        if token in ("-h", "--help"):
            print(USAGE)
            raise SystemExit(0)

        if token == "--ignore-case":
            ignore_case = True
            continue

        if token.startswith("--inventory="):
            inventory_path = token.split("=", 1)[1]
            continue

        if token.startswith("--select="):
            model_number = token.split("=", 1)[1]
            continue

        if token in ("--inventory", "--select"):
            try:
                value = next(it)
            except StopIteration:
                raise SystemExit(f"{token} flag requires a value") from None

            if token == "--inventory":
                inventory_path = value
            else:
                model_number = value
            continue

        if token.startswith("--"):
            raise SystemExit(f"Unexpected argument: {token}")

        commands.append(token)

    return inventory_path, model_number, ignore_case, commands


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()

    inventory_path, model_number, ignore_case, commands = _parse_args(
        sys.argv[1:] if argv is None else argv
    )
    inventory_path = inventory_path or inventory_path_from_env()
    case_sensitive = not (ignore_case or ignore_case_enabled())

    if not commands:
        session = make_session(inventory_path, case_sensitive=case_sensitive)
        if model_number:
            session.select_equipment(model_number)
        repl(session)
        return 0

    session, outcomes = run(commands, model_number, inventory_path, case_sensitive=case_sensitive)

    print(format_history(session.ledger))

    failed = [o for o in outcomes if not o.ok]
    if failed:
        logger.debug("{} of {} commands failed", len(failed), len(outcomes))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
