"""Vendor ASCII logos and shared layout helpers for CPU information output."""

from __future__ import annotations

from collections.abc import Sequence

C_FG_BLACK = "\x1b[30;1m"
C_FG_RED = "\x1b[31;1m"
C_FG_GREEN = "\x1b[32;1m"
C_FG_YELLOW = "\x1b[33;1m"
C_FG_BLUE = "\x1b[34;1m"
C_FG_MAGENTA = "\x1b[35;1m"
C_FG_CYAN = "\x1b[36;1m"
C_FG_WHITE = "\x1b[37;1m"
C_FG_B_BLACK = "\x1b[90;1m"
C_FG_B_WHITE = "\x1b[97;1m"
COLOR_RESET = "\x1b[m"

SEPARATOR = "   "

_ASCII_AMD = (
    "$C2          '###############             ",
    "$C2             ,#############            ",
    "$C2                      .####            ",
    "$C2              #.      .####            ",
    "$C2            :##.      .####            ",
    "$C2           :###.      .####            ",
    "$C2           #########.   :##            ",
    "$C2           #######.       ;            ",
    "$C1                                       ",
    "$C1    ###     ###      ###   #######     ",
    "$C1   ## ##    #####  #####   ##     ##   ",
    "$C1  ##   ##   ### #### ###   ##      ##  ",
    "$C1 #########  ###  ##  ###   ##      ##  ",
    "$C1##       ## ###      ###   ##     ##   ",
    "$C1##       ## ###      ###   #######     ",
)

_ASCII_INTEL_NEW = (
    "$C1  MMM                 oddl                   MMN   ",
    "$C1  MMM                 dMMN                   MMN   ",
    "$C1  ...  ....   ...     dMMM..      .cc.       NMN   ",
    "$C1  MMM  :MMMdWMMMMMX.  dMMMMM,  .XMMMMMMNo    MMN   ",
    "$C1  MMM  :MMMp    dMMM  dMMX   .NMW      WMN.  MMN   ",
    "$C1  MMM  :MMM      WMM  dMMK   kMMXooooooNMMx  MMN   ",
    "$C1  MMM  :MMM      NMM  dMMK   dMMX            MMN   ",
    "$C1  MMM  :MMM      NMM  dMMMoo  OMM0....:Nx.   MMN   ",
    "$C1  MMM  :WWW      XWW   lONMM   'xXMMMMNOc    MMN   ",
)

_ASCII_ARM = (
    "$C1   #####  ##   # #####  ## ####  ######   ",
    "$C1 ###    ####   ###      ####  ###   ###   ",
    "$C1###       ##   ###      ###    ##    ###  ",
    "$C1 ###    ####   ###      ###    ##    ###  ",
    "$C1  ######  ##   ###      ###    ##    ###  ",
)

_ASCII_NVIDIA = (
    "$C1               'cccccccccccccccccccccccccc   ",
    "$C1               ;oooooooooooooooooooooooool   ",
    "$C1           .:::.     .oooooooooooooooooool   ",
    "$C1      .:cll;   ,c:::.     cooooooooooooool   ",
    "$C1   ,clo'      ;.   oolc:     ooooooooooool   ",
    "$C1.cloo    ;cclo .      .olc.    coooooooool   ",
    "oooo   :lo,    ;ll;    looc    :oooooooool      ",
    "oooc   ool.   ;oooc;clol    :looooooooool      ",
    ":ooc   ,ol;  ;oooooo.   .cloo;     loool      ",
    "ool;   .olc.       ,:lool        .lool      ",
    "ool:.    ,::::ccloo.        :clooool      ",
    "oolc::.            ':cclooooooool      ",
    ";oooooooooooooooooooooooool      ",
    "",
    "$C2######.  ##   ##  ##  ######   ##    ###     ",
    "$C2##   ##  ##   ##  ##  ##   ##  ##   #: :#    ",
    "$C2##   ##   ## ##   ##  ##   ##  ##  #######   ",
    "$C2##   ##    ###    ##  ######   ## ##     ##  ",
)

_ASCII_POWERPC = (
    "$C1     //////                                   //////    /////  ",
    "$C1    //// /// ,//// /// ///  /// /////  ///// /// ////////      ",
    "$C1   */////// /// ///////////// /// /// ///// ////////////       ",
    "$C1   ///     /// /// ///////// ///     ///   ///        ////.    ",
    "$C1  ///      /////   //  ///     //// ///   ///          /////   ",
)

_ASCII_APPLE = (
    "$C1                    'c.                     ",
    "$C2                 ,xNMM.                     ",
    "$C3               .OMMMMo                      ",
    "$C4               OMMM0,                       ",
    "$C5     .;loddo:' loolloddol;.                 ",
    "$C6   cKMMMMMMMMMMNWMMMMMMMMMM0:               ",
    "$C7 .KMMMMMMMMMMMMMMMMMMMMMMMWd.               ",
    "$C1 XMMMMMMMMMMMMMMMMMMMMMMMX.                 ",
    "$C2;MMMMMMMMMMMMMMMMMMMMMMMM:                  ",
    "$C3:MMMMMMMMMMMMMMMMMMMMMMMM:                  ",
    "$C4.MMMMMMMMMMMMMMMMMMMMMMMMX.                 ",
    "$C5 kMMMMMMMMMMMMMMMMMMMMMMMMWd.               ",
    "$C6 .XMMMMMMMMMMMMMMMMMMMMMMMMMMk              ",
    "$C7  .XMMMMMMMMMMMMMMMMMMMMMMMMK.              ",
    "$C1    kMMMMMMMMMMMMMMMMMMMMMMd                ",
    "$C2     ;KMMMMMMMWXXWMMMMMMMk.                 ",
    "$C3       .cooc,.    .,coo:.                   ",
)

_LOGOS: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "amd": (_ASCII_AMD, (C_FG_WHITE, C_FG_RED)),
    "intel": (_ASCII_INTEL_NEW, (C_FG_CYAN,)),
    "arm": (_ASCII_ARM, (C_FG_CYAN,)),
    "nvidia": (_ASCII_NVIDIA, (C_FG_GREEN, C_FG_WHITE)),
    "powerpc": (_ASCII_POWERPC, (C_FG_YELLOW,)),
    "apple": (
        _ASCII_APPLE,
        (C_FG_RED, C_FG_YELLOW, C_FG_GREEN, C_FG_CYAN, C_FG_BLUE, C_FG_MAGENTA, C_FG_WHITE),
    ),
}

_VENDOR_KEYS = {
    "AuthenticAMD": "amd",
    "amd": "amd",
    "GenuineIntel": "intel",
    "intel": "intel",
    "ARM": "arm",
    "arm": "arm",
    "NVIDIA": "nvidia",
    "nvidia": "nvidia",
    "PowerPC": "powerpc",
    "powerpc": "powerpc",
    "Apple": "apple",
    "apple": "apple",
}


def _colorize(line: str, colors: Sequence[str]) -> str:
    for number, color in enumerate(colors, start=1):
        line = line.replace(f"$C{number}", color)
    return line.replace("$CR", COLOR_RESET)


def get_logo_lines_for_vendor(vendor_id: str) -> list[str] | None:
    """Return the colored logo lines for a vendor id, or None if there is no logo."""
    key = _VENDOR_KEYS.get(vendor_id)
    if key is None:
        return None
    raw_lines, colors = _LOGOS[key]
    return [_colorize(line, colors) for line in raw_lines]


def format_cache_size(size_kb: int) -> str:
    """Format a size in KB as "NKB", or as megabytes with one decimal from 1000 KB up."""
    if size_kb >= 1000:
        return f"{size_kb / 1024:.1f}MB"
    return f"{size_kb}KB"


def side_by_side(logo_lines: Sequence[str], info_lines: Sequence[str]) -> list[str]:
    """Lay logo lines and info lines out in two columns."""
    width = max((len(line) for line in logo_lines), default=0)
    rows = max(len(logo_lines), len(info_lines))
    result = []
    for row in range(rows):
        logo = logo_lines[row] if row < len(logo_lines) else ""
        info = info_lines[row] if row < len(info_lines) else ""
        result.append(f"{logo.ljust(width)}{SEPARATOR}{info}")
    return result