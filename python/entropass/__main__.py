"""
CLI interface for Entropass.
"""

import sys
import json
import logging
import threading
import time
import click
from typing import List

from .analysis.entropy import max_entropy
from .exceptions import ConfigurationError, InsecureRandomError
from .generator.engine import (
    MASTER_OPTIONS,
    GenerationResult,
    PasswordGenerator,
    generate,
    generate_master_password,
)
from .generator.pool import DEFAULT_OPTIONS, GenerationOptions, describe_configuration, prepare_active_sets
from .methods import METHODS, Method


CLIPBOARD_CLEAR_SECONDS = 60


def copy_to_clipboard(value: str) -> None:
    """Copy a password and clear the clipboard again after a minute."""
    try:
        import pyperclip
        pyperclip.copy(value)
        click.echo("🔐 Password copied to clipboard.")

        def clear_clipboard() -> None:
            time.sleep(CLIPBOARD_CLEAR_SECONDS)
            try:
                pyperclip.copy("")
            except pyperclip.PyperclipException:
                pass

        threading.Thread(target=clear_clipboard, daemon=True).start()

    except ImportError:
        click.echo("pyperclip not installed. Install with: pip install pyperclip", err=True)
        click.echo(value)
    except Exception as e:
        click.echo(f"Could not copy to clipboard: {e}", err=True)
        click.echo(value)


def build_options(length: str, no_upper: bool, no_lower: bool, no_digits: bool,
                  no_symbols: bool, no_force_each: bool, exclude_ambiguous: bool,
                  exclude_unsafe: bool) -> GenerationOptions:
    return GenerationOptions(
        length=length,
        upper=not no_upper,
        lower=not no_lower,
        nums=not no_digits,
        symbols=not no_symbols,
        force_each=not no_force_each,
        exclude_ambiguous=exclude_ambiguous,
        exclude_code_unsafe=exclude_unsafe,
    )


def option_flags(func):
    """Character class options shared by ``generate`` and ``entropy``."""
    decorators = [
        click.option("--length", "-l", default=str(DEFAULT_OPTIONS["length"]), show_default=True,
                     help="Password length (clamped to 5-128)"),
        click.option("--no-upper", is_flag=True, help="Exclude uppercase letters"),
        click.option("--no-lower", is_flag=True, help="Exclude lowercase letters"),
        click.option("--no-digits", is_flag=True, help="Exclude digits"),
        click.option("--no-symbols", is_flag=True, help="Exclude symbols"),
        click.option("--no-force-each", is_flag=True,
                     help="Do not require one character from every class"),
        click.option("--exclude-ambiguous", "-a", is_flag=True,
                     help="Exclude ambiguous characters (i l 1 I | L o 0 O 2 Z 5 S 8 B)"),
        click.option("--exclude-unsafe", "-u", is_flag=True,
                     help="Exclude symbols that need quoting in code"),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def echo_result(result: GenerationResult, as_json: bool, quiet: bool, bound: float) -> None:
    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False))
    elif quiet:
        click.echo(result.password)
    else:
        click.echo(result.password)
        click.echo(f"  Entropy: {result.entropy_bits:.3f} bits (max {bound:.3f})")
        click.echo(f"  Method: {result.method}")


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Entropass - passwords with exactly computed entropy."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="generate")
@option_flags
@click.option("--count", "-n", default=1, type=click.IntRange(1, 100), help="Number of passwords")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.option("--copy", "-c", is_flag=True, help="Copy the password to the clipboard")
@click.option("--quiet", "-q", is_flag=True, help="Print the password only")
def generate_command(length: str, no_upper: bool, no_lower: bool, no_digits: bool,
                     no_symbols: bool, no_force_each: bool, exclude_ambiguous: bool,
                     exclude_unsafe: bool, count: int, as_json: bool, copy: bool,
                     quiet: bool) -> None:
    """Generate passwords and show their entropy."""
    options = build_options(length, no_upper, no_lower, no_digits, no_symbols,
                            no_force_each, exclude_ambiguous, exclude_unsafe)
    config = prepare_active_sets(options)

    if copy and count > 1:
        click.echo("Error: Cannot use --copy with --count above 1", err=True)
        sys.exit(1)

    try:
        results: List[GenerationResult] = [generate(options) for _ in range(count)]
    except InsecureRandomError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not results[0].ok:
        click.echo(f"Error: {results[0].error}", err=True)
        sys.exit(1)

    bound = max_entropy(config.length, config.pool_size)

    if copy:
        copy_to_clipboard(results[0].password)
        if not quiet:
            click.echo(f"  Entropy: {results[0].entropy_bits:.3f} bits (max {bound:.3f})")
            click.echo(f"  Method: {results[0].method}")
        return

    for result in results:
        echo_result(result, as_json, quiet, bound)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.option("--copy", "-c", is_flag=True, help="Copy the password to the clipboard")
def master(as_json: bool, copy: bool) -> None:
    """Generate an easy-to-type master password."""
    try:
        result = generate_master_password()
    except InsecureRandomError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if copy:
        copy_to_clipboard(result.password)
        return

    config = prepare_active_sets(MASTER_OPTIONS)
    echo_result(result, as_json, False, max_entropy(config.length, config.pool_size))


@cli.command()
@option_flags
@click.option("--method", "-m", type=click.Choice(METHODS), default=Method.REJECTION_SAMPLING,
              show_default=True, help="Sampling method to evaluate")
def entropy(length: str, no_upper: bool, no_lower: bool, no_digits: bool,
            no_symbols: bool, no_force_each: bool, exclude_ambiguous: bool,
            exclude_unsafe: bool, method: str) -> None:
    """Show the entropy of a configuration without generating."""
    options = build_options(length, no_upper, no_lower, no_digits, no_symbols,
                            no_force_each, exclude_ambiguous, exclude_unsafe)
    try:
        generator = PasswordGenerator(options)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    config = generator.config
    click.echo(f"Pool: {describe_configuration(config, options)}")
    click.echo(f"  Length: {config.length}")
    click.echo(f"  Pool size: {config.pool_size} ({', '.join(str(s) for s in config.set_sizes)})")
    click.echo(f"  Entropy ({method}): {generator.entropy(method):.3f} bits")
    click.echo(f"  Unconstrained maximum: {max_entropy(config.length, config.pool_size):.3f} bits")


def main() -> None:
    """Main entry point for the CLI application."""
    cli(auto_envvar_prefix="ENTROPASS")


if __name__ == "__main__":
    main()
