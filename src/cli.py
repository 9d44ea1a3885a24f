"""Command-line interface for overbind."""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from codec import decode, encode
from constants import OVERBIND_VERSION, default_config_path, state_dir
from model import BindError, BindModel, BindGroups
from store import BindConfigFile

log = logging.getLogger(__name__)


@dataclass
class ParsedArgs:
    """Parsed command-line arguments."""

    config_path: Path
    action: str  # "edit", "check", "list" or "init"


def setup_logging() -> None:
    """Log to the XDG state directory."""
    log_dir = state_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(log_dir / "overbind.log"),
        level=logging.DEBUG,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def print_error_box(title: str, *lines: str) -> None:
    """Print a formatted error box to stderr.

    Args:
        title: The error title (will be prefixed with "Error: ")
        *lines: Additional lines to print in the box
    """
    print("=" * 60, file=sys.stderr)
    print(f"Error: {title}", file=sys.stderr)
    print("", file=sys.stderr)
    for line in lines:
        print(line, file=sys.stderr)
    print("=" * 60, file=sys.stderr)


class OverBindHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter that shows our structured help."""

    def format_help(self) -> str:
        lines = [
            "OverBind - edit keyboard remaps for the OverBind interception engine.",
            f"Version: {OVERBIND_VERSION}",
            "",
            "Usage:",
            "  overbind                              Open the bind editor",
            "  overbind --config <path>              Edit a specific bind config file",
            "",
            "Headless:",
            "  overbind --check                      Validate the bind config and exit",
            "  overbind --list                       Print the binds and exit",
            "  overbind --init                       Write the default config if missing",
            "",
            f"Default config: {default_config_path()}",
        ]
        return "\n".join(lines) + "\n"


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for overbind CLI."""
    parser = argparse.ArgumentParser(
        prog="overbind",
        formatter_class=OverBindHelpFormatter,
        add_help=True,
    )
    parser.add_argument("--config", metavar="PATH", help=argparse.SUPPRESS)

    actions = parser.add_mutually_exclusive_group()
    actions.add_argument("--check", action="store_true", help=argparse.SUPPRESS)
    actions.add_argument("--list", action="store_true", help=argparse.SUPPRESS)
    actions.add_argument("--init", action="store_true", help=argparse.SUPPRESS)
    actions.add_argument("--version", action="version", version=f"overbind {OVERBIND_VERSION}")
    return parser


def parse_args(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command line arguments."""
    args = create_parser().parse_args(sys.argv[1:] if argv is None else argv)

    if args.config:
        config_path = Path(args.config).expanduser().resolve()
    else:
        config_path = default_config_path()

    if args.check:
        action = "check"
    elif args.list:
        action = "list"
    elif args.init:
        action = "init"
    else:
        action = "edit"
    return ParsedArgs(config_path=config_path, action=action)


def load_binds(store: BindConfigFile) -> tuple[BindModel, BindGroups]:
    """Load and decode the bind config, exiting with an error box on failure."""
    try:
        return decode(store.load_records())
    except BindError as e:
        print_error_box("Invalid bind config", str(e))
        sys.exit(1)


def check_config(store: BindConfigFile) -> int:
    """Decode and re-encode the config to prove it round-trips."""
    model, groups = load_binds(store)
    try:
        encode(model)
    except BindError as e:
        print_error_box("Bind config cannot be saved as-is", str(e))
        return 1
    print(
        f"{store.path}: {len(model)} binds, {len(groups.socd_pairs())} SOCD pairs, "
        f"mash trigger group {'present' if groups.mash_trigger_group() else 'absent'}"
    )
    return 0


def list_binds(store: BindConfigFile) -> int:
    model, groups = load_binds(store)
    if not len(model):
        print("No binds configured.")
        return 0
    for bind in model:
        partner = groups.partner(bind)
        suffix = f"  (linked to {partner.id})" if partner else ""
        print(f"{bind}{suffix}")
    return 0


def init_config(store: BindConfigFile) -> int:
    try:
        written = store.ensure_exists()
    except BindError as e:
        print_error_box("Could not write default config", str(e))
        return 1
    if written:
        print(f"Wrote default config to {store.path}")
    else:
        print(f"Config already exists: {store.path}")
    return 0


def run_editor(store: BindConfigFile) -> int:
    from app import OverBindTUI
    from session import KeymapSession

    try:
        store.ensure_exists()
    except BindError as e:
        print_error_box("Could not write default config", str(e))
        return 1

    session = KeymapSession(store)
    app = OverBindTUI(session, version=OVERBIND_VERSION)
    app.run()
    if session.dirty:
        print("Exited with unsaved changes.", file=sys.stderr)
    return 0


def main() -> None:
    """Main entry point."""
    parsed = parse_args()
    setup_logging()
    log.info(f"overbind {OVERBIND_VERSION} starting: {parsed.action} {parsed.config_path}")
    store = BindConfigFile(parsed.config_path)

    if parsed.action == "check":
        sys.exit(check_config(store))
    if parsed.action == "list":
        sys.exit(list_binds(store))
    if parsed.action == "init":
        sys.exit(init_config(store))
    sys.exit(run_editor(store))


if __name__ == "__main__":
    main()
