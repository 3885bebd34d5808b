"""Command-line interface for lazyencrypt."""

import sys
import logging
import argparse
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)

from lazyencrypt import __version__
from lazyencrypt.admin.manager import SecretAdmin
from lazyencrypt.config.factory import build_admin
from lazyencrypt.config.loader import load_config, ConfigError
from lazyencrypt.config.validator import validate_config, ValidationError
from lazyencrypt.errors import LazyEncryptError, MissingFilesError, MissingSecretError
from lazyencrypt.store.sync import SyncReport, SyncStatus

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

_STATUS_STYLES = {
    SyncStatus.UPDATED: "green",
    SyncStatus.UP_TO_DATE: "cyan",
    SyncStatus.SKIPPED: "yellow",
    SyncStatus.FAILED: "red",
}


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog='lazyencrypt',
        description='Obfuscated secret storage and keyed hashing for game builds',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Save a key and publish a secret into the bundled assets
  lazyencrypt save-key MyObfuscationKey
  lazyencrypt publish "my license secret"

  # Preview obfuscation without saving
  lazyencrypt preview "my license secret" --key MyObfuscationKey

  # Copy the bundled key and secret into the runtime data directory
  lazyencrypt update

  # Hash a value with the runtime secret
  lazyencrypt hash save-slot-1

  # Use custom config file
  lazyencrypt --config /path/to/lazyencrypt.yaml update
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--config',
        type=Path,
        metavar='PATH',
        help='Path to lazyencrypt.yaml (default: ./lazyencrypt.yaml)'
    )

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    save_key = subparsers.add_parser('save-key', help='Save the obfuscation key to the bundled assets')
    save_key.add_argument('key', help='Obfuscation key')

    publish = subparsers.add_parser('publish', help='Obfuscate a secret and save it to the bundled assets')
    publish.add_argument('secret', help='Plain secret to obfuscate')
    publish.add_argument('--key', help='Obfuscation key (default: the saved key)')

    save_secret = subparsers.add_parser('save-secret', help='Save an already obfuscated secret')
    save_secret.add_argument('obfuscated', help='Obfuscated secret')
    save_secret.add_argument(
        '--escaped',
        action='store_true',
        help='Interpret backslash escapes (as printed by preview) in the value'
    )

    preview = subparsers.add_parser('preview', help='Show a secret obfuscated with a key')
    preview.add_argument('secret', help='Plain secret to obfuscate')
    preview.add_argument('--key', required=True, help='Obfuscation key')

    subparsers.add_parser('decrypt', help='Load and decrypt the secret from the bundled assets')

    subparsers.add_parser('update', help='Update the runtime key and secret from the bundled assets')

    hash_parser = subparsers.add_parser('hash', help='Compute a SHA-256 hash keyed with the runtime secret')
    hash_parser.add_argument('text', help='Input string to hash')

    return parser


def _setup_logging(config: dict) -> None:
    """
    Setup logging configuration from config.

    Args:
        config: Configuration dictionary
    """
    logging_config = config.get('logging') or {}

    level_str = str(logging_config.get('level', 'INFO')).upper()
    level = getattr(logging, level_str, logging.INFO)

    handlers = []

    if logging_config.get('console', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        handlers.append(console_handler)

    log_file = logging_config.get('file')
    if log_file:
        try:
            log_path = Path(log_file).expanduser()
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_path)
            file_handler.setLevel(level)
            file_handler.setFormatter(
                logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            )
            handlers.append(file_handler)
        except OSError as e:
            print(f"Error: Could not create log file '{log_file}': {e}", file=sys.stderr)
            sys.exit(1)

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True
    )

    # httpx logs every request URL at INFO
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)


def escape_text(text: str) -> str:
    """Render obfuscated text with control characters as backslash escapes."""
    return text.encode('unicode_escape').decode('ascii')


def unescape_text(text: str) -> str:
    """Reverse escape_text()."""
    return text.encode('latin-1', 'backslashreplace').decode('unicode_escape')


def _print_report(report: SyncReport) -> None:
    for result in report.results:
        style = _STATUS_STYLES[result.status]
        console.print(
            f"[{style}]{result.status.value:>10}[/{style}]  "
            f"{result.artifact.value}: {escape(str(result.destination))}"
        )
        if result.error is not None:
            console.print(f"            {result.error}", markup=False)


def run_command(admin: SecretAdmin, args: argparse.Namespace) -> int:
    """
    Run a single subcommand against the admin.

    Args:
        admin: Configured SecretAdmin
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    command = args.command

    if command == 'save-key':
        path = admin.save_key(args.key)
        console.print(f"Key saved to {path}", markup=False)

    elif command == 'publish':
        obfuscated = admin.publish_secret(args.secret, key=args.key)
        console.print(f"Secret saved to {admin.secret_path}", markup=False)
        console.print(f"Obfuscated: {escape_text(obfuscated)}", markup=False)

    elif command == 'save-secret':
        value = unescape_text(args.obfuscated) if args.escaped else args.obfuscated
        path = admin.save_secret(value)
        console.print(f"Secret saved to {path}", markup=False)

    elif command == 'preview':
        console.print(escape_text(admin.encrypt_preview(args.secret, args.key)), markup=False)

    elif command == 'decrypt':
        console.print(admin.load_and_decrypt_from_source(), markup=False)

    elif command == 'update':
        report = admin.force_update()
        _print_report(report)
        return 0 if report.ok else 1

    elif command == 'hash':
        try:
            console.print(admin.compute_test_hash(args.text), markup=False)
        except MissingFilesError as e:
            err_console.print(f"Error: {e}", markup=False)
            err_console.print("Run 'lazyencrypt update' to copy the bundled files first.")
            return 1
        except MissingSecretError:
            err_console.print("Error: No Secret Found!")
            return 1

    return 0


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for lazyencrypt CLI.

    Args:
        argv: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        validate_config(config)
    except (ConfigError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    _setup_logging(config)

    admin = build_admin(config)
    try:
        return run_command(admin, args)
    except LazyEncryptError as e:
        err_console.print(f"Error: {e}", markup=False)
        return 1
    except OSError as e:
        err_console.print(f"I/O error: {e}", markup=False)
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.", file=sys.stderr)
        return 130
    finally:
        close = getattr(admin.store.reader, 'close', None)
        if close is not None:
            close()


if __name__ == '__main__':
    sys.exit(main())
