"""Command line argument parsing and the fixed texts of the command."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

PROGRAM_NAME = "rcpufetch"
VERSION = "0.0.3"
DESCRIPTION = "[ALPHA] A rusty crossplatform, but simple CLI binutil for reading CPU information."
VALID_LOGO_VENDORS = ("nvidia", "powerpc", "arm", "amd", "intel", "apple")
SUPPORTED_SHELLS = ("fish", "bash", "zsh")


class ArgumentError(ValueError):
    """Raised for unknown or malformed command line arguments."""


class UnsupportedShellError(ValueError):
    """Raised when completions are asked for a shell that is not supported."""


@dataclass
class Args:
    """Options given on the command line."""

    no_logo: bool = False
    logo: str | None = None
    license: bool = False
    help: bool = False
    version: bool = False
    completions: str | None = None


def parse_args(argv: Sequence[str]) -> Args:
    """Parse arguments (without the program name) into an Args."""
    parsed = Args()
    items = iter(argv)
    for arg in items:
        if arg in ("-h", "--help"):
            parsed.help = True
        elif arg in ("-V", "--version"):
            parsed.version = True
        elif arg == "--license":
            parsed.license = True
        elif arg in ("-n", "--no-logo"):
            parsed.no_logo = True
        elif arg in ("-l", "--logo"):
            value = next(items, None)
            if value is None:
                raise ArgumentError("Error: --logo requires a value")
            parsed.logo = value
        elif arg.startswith("--logo="):
            value = arg.removeprefix("--logo=")
            if not value:
                raise ArgumentError("Error: --logo requires a value")
            parsed.logo = value
        elif arg == "--completions":
            value = next(items, None)
            if value is None:
                raise ArgumentError(
                    "Error: --completions requires a shell name (fish, bash, zsh)"
                )
            parsed.completions = value
        else:
            raise ArgumentError(f"Error: Unknown argument '{arg}'")
    return parsed


def help_text() -> str:
    """Return usage, options and examples."""
    return "\n".join(
        [
            f"{PROGRAM_NAME} {VERSION}",
            DESCRIPTION,
            "",
            "USAGE:",
            "    rcpufetch [OPTIONS]",
            "",
            "OPTIONS:",
            "    -h, --help                   Print help information",
            "    -V, --version                Print version information",
            "        --license                Display license information",
            "        --completions <SHELL>    Generate shell completions (fish, bash, zsh)",
            "    -n, --no-logo                Disable logo display",
            "    -l, --logo <VENDOR>          Override logo display with specific vendor",
            "                                 Valid vendors: "
            + ", ".join(VALID_LOGO_VENDORS),
            "",
            "EXAMPLES:",
            "    rcpufetch                    Display CPU info with auto-detected logo",
            "    rcpufetch --no-logo          Display CPU info without logo",
            "    rcpufetch --logo intel       Display CPU info with Intel logo",
            "    rcpufetch --license          Show license information",
        ]
    )


def version_text() -> str:
    """Return the program name and version."""
    return f"{PROGRAM_NAME} {VERSION}"


def license_text() -> str:
    """Return the notice pointing to the terms of use."""
    return "\n".join(
        [
            "The terms of use for rcpufetch are given in the LICENSE file",
            "that comes with it.",
            "",
            "Type `rcpufetch --help` for assistance.",
        ]
    )


_FISH = "\n".join(
    [
        "# Fish completions for rcpufetch",
        "complete -c rcpufetch -s h -l help -d 'Print help information'",
        "complete -c rcpufetch -s V -l version -d 'Print version information'",
        "complete -c rcpufetch -l license -d 'Display license information'",
        "complete -c rcpufetch -s n -l no-logo -d 'Disable logo display'",
        "complete -c rcpufetch -s l -l logo -x -a 'nvidia powerpc arm amd intel apple' "
        "-d 'Override logo display with specific vendor'",
        "complete -c rcpufetch -l completions -x -a 'fish bash zsh' "
        "-d 'Generate shell completions'",
    ]
)

_BASH = "\n".join(
    [
        "# Bash completions for rcpufetch",
        "_rcpufetch() {",
        "    local cur prev opts",
        "    COMPREPLY=()",
        '    cur="${COMP_WORDS[COMP_CWORD]}"',
        '    prev="${COMP_WORDS[COMP_CWORD-1]}"',
        '    opts="-h --help -V --version --license -n --no-logo -l --logo --completions"',
        "",
        '    case "${prev}" in',
        "        --logo|-l)",
        '            COMPREPLY=($(compgen -W "nvidia powerpc arm amd intel apple" -- "${cur}"))',
        "            return 0",
        "            ;;",
        "        --completions)",
        '            COMPREPLY=($(compgen -W "fish bash zsh" -- "${cur}"))',
        "            return 0",
        "            ;;",
        "    esac",
        "",
        '    COMPREPLY=($(compgen -W "${opts}" -- "${cur}"))',
        "}",
        "complete -F _rcpufetch rcpufetch",
    ]
)

_ZSH = "\n".join(
    [
        "# Zsh completions for rcpufetch",
        "#compdef rcpufetch",
        "",
        "_rcpufetch() {",
        "    _arguments \\",
        "        '(-h --help){-h,--help}[Print help information]' \\",
        "        '(-V --version){-V,--version}[Print version information]' \\",
        "        '--license[Display license information]' \\",
        "        '(-n --no-logo){-n,--no-logo}[Disable logo display]' \\",
        "        '(-l --logo){-l,--logo}[Override logo display with specific vendor]"
        ":vendor:(nvidia powerpc arm amd intel apple)' \\",
        "        '--completions[Generate shell completions]:shell:(fish bash zsh)'",
        "}",
        "",
        '_rcpufetch "$@"',
    ]
)

_COMPLETIONS = {"fish": _FISH, "bash": _BASH, "zsh": _ZSH}


def completion_script(shell: str) -> str:
    """Return the completion script for fish, bash or zsh (case-insensitive)."""
    try:
        return _COMPLETIONS[shell.lower()]
    except KeyError:
        raise UnsupportedShellError(
            f"Error: Unsupported shell '{shell}'. Supported shells: fish, bash, zsh"
        ) from None