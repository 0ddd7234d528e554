"""Command entry point: parse options, detect the platform and print CPU information."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from rcpufetch.cla import (
    VALID_LOGO_VENDORS,
    ArgumentError,
    UnsupportedShellError,
    completion_script,
    help_text,
    license_text,
    parse_args,
    version_text,
)

_LOGO_VENDOR_IDS = {
    "nvidia": "NVIDIA",
    "powerpc": "PowerPC",
    "arm": "ARM",
    "amd": "AuthenticAMD",
    "intel": "GenuineIntel",
    "apple": "Apple",
}


def resolve_logo_override(logo: str | None) -> str | None:
    """Map a --logo value to a vendor id; warn on stderr and return None if unknown."""
    if logo is None:
        return None
    vendor_id = _LOGO_VENDOR_IDS.get(logo.lower())
    if vendor_id is None:
        print(
            f"Warning: Unknown logo vendor '{logo}'. "
            f"Valid options: {', '.join(VALID_LOGO_VENDORS)}",
            file=sys.stderr,
        )
    return vendor_id


def _os_name(platform: str) -> str:
    if platform.startswith("linux"):
        return "linux"
    if platform == "win32":
        return "windows"
    if platform == "darwin":
        return "macos"
    return platform


def _load_cpu_info(os_name: str):
    if os_name == "linux":
        from rcpufetch.linux import load_linux_cpu_info

        return load_linux_cpu_info()
    if os_name == "windows":
        from rcpufetch.windows import detect_windows_cpu

        return detect_windows_cpu()
    from rcpufetch.macos import load_macos_cpu_info

    return load_macos_cpu_info()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        args = parse_args(argv)
    except ArgumentError as error:
        print(error, file=sys.stderr)
        print("Try 'rcpufetch --help' for more information.", file=sys.stderr)
        return 1

    if args.help:
        print(help_text())
        return 0
    if args.version:
        print(version_text())
        return 0
    if args.license:
        print(license_text())
        return 0
    if args.completions is not None:
        try:
            print(completion_script(args.completions))
        except UnsupportedShellError as error:
            print(error, file=sys.stderr)
            return 1
        return 0

    logo_override = resolve_logo_override(args.logo)

    os_name = _os_name(sys.platform)
    if os_name not in ("linux", "windows", "macos"):
        print(f"Unsupported operating system: {os_name}", file=sys.stderr)
        return 0

    try:
        cpu_info = _load_cpu_info(os_name)
    except OSError as error:
        print(f"Error fetching CPU info: {error}", file=sys.stderr)
        return 0

    if args.no_logo:
        lines = cpu_info.render_no_logo()
    else:
        lines = cpu_info.render_with_logo(logo_override)
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())