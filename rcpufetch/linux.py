"""CPU information on Linux, gathered from /proc/cpuinfo, sysfs and uname."""

from __future__ import annotations

import subprocess
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from rcpufetch.art import SEPARATOR, format_cache_size, get_logo_lines_for_vendor
from rcpufetch.linux_probe import (
    SYS_CPU_DIR,
    CacheSize,
    byte_order,
    count_physical_cores,
    parse_cpuinfo,
    read_cache_info,
    read_max_frequency,
)

CPUINFO_PATH = Path("/proc/cpuinfo")

_TOTAL_WIDTH = 100
_NO_LOGO_WRAP_WIDTH = 80
_FLAG_LABEL = "Flags: "
_INDENT = " " * len(_FLAG_LABEL)


def _cache_text(cache: CacheSize | None) -> str:
    return "Unknown" if cache is None else format_cache_size(cache[1])


@dataclass(frozen=True)
class LinuxCpuInfo:
    """CPU details shown on Linux; cache sizes are (per core KB, total KB)."""

    model: str = ""
    vendor: str = ""
    architecture: str = ""
    byte_order: str = "Little Endian"
    flags: str = ""
    physical_cores: int = 1
    logical_cores: int = 0
    max_ghz: float | None = None
    l1d_size: CacheSize | None = None
    l1i_size: CacheSize | None = None
    l2_size: CacheSize | None = None
    l3_size: CacheSize | None = None

    def _frequency_text(self) -> str:
        return "Unknown" if self.max_ghz is None else f"{self.max_ghz:.3f} GHz"

    def _l1_text(self) -> str:
        totals = [cache[1] for cache in (self.l1i_size, self.l1d_size) if cache is not None]
        return format_cache_size(sum(totals)) if totals else "Unknown"

    def _cache_lines(self) -> list[str]:
        return [
            f"L1i Size: {_cache_text(self.l1i_size)}",
            f"L1d Size: {_cache_text(self.l1d_size)}",
            f"L1 Size: {self._l1_text()}",
            f"L2 Size: {_cache_text(self.l2_size)}",
            f"L3 Size: {_cache_text(self.l3_size)}",
        ]

    def info_lines(self) -> list[str]:
        """Return the labelled information lines, without flags."""
        return [
            f"Name: {self.model}",
            f"Architecture: {self.architecture}",
            f"Byte Order: {self.byte_order}",
            f"Vendor: {self.vendor}",
            f"Max Frequency: {self._frequency_text()}",
            f"Cores: {self.physical_cores} cores ({self.logical_cores} threads)",
            *self._cache_lines(),
        ]

    def _padded_info_lines(self) -> list[str]:
        return [
            f"Name: {self.model:<30}",
            f"Architecture: {self.architecture:<30}",
            f"Byte Order: {self.byte_order:<30}",
            f"Vendor: {self.vendor:<30}",
            f"Max Frequency: {self._frequency_text():>7}",
            f"Cores: {self.physical_cores:>2} cores ({self.logical_cores} threads)",
            *self._cache_lines(),
        ]

    def _wrapped_flags(self, wrap_width: int) -> list[str]:
        lines = []
        current = _FLAG_LABEL
        for word in self.flags.split():
            if len(current) + len(word) + 1 > wrap_width:
                lines.append(current)
                current = _INDENT + word
            elif current.rstrip().endswith(":"):
                current += word
            else:
                current += " " + word
        if current.strip():
            lines.append(current)
        return lines

    def render_with_logo(self, logo_override: str | None = None) -> list[str]:
        """Return the info and wrapped flags beside the vendor logo (or the override's)."""
        logo_lines = get_logo_lines_for_vendor(logo_override or self.vendor) or []
        info_lines = self._padded_info_lines()
        logo_width = max((len(line) for line in logo_lines), default=0)
        wrap_width = _TOTAL_WIDTH - (logo_width + len(SEPARATOR))
        flag_lines = self._wrapped_flags(wrap_width)

        rows = max(len(logo_lines), len(info_lines) + len(flag_lines))
        right_column: Iterator[str] = iter([*info_lines, *flag_lines])
        info_count = len(info_lines)

        result = []
        for row in range(rows):
            logo = logo_lines[row] if row < len(logo_lines) else ""
            info = next(right_column, "")
            if row >= info_count and not logo and info.startswith(_INDENT):
                info = info[len(_INDENT):]
            result.append(f"{logo.ljust(logo_width)}{SEPARATOR}{info}")
        return result

    def render_no_logo(self) -> list[str]:
        """Return the info lines followed by flags wrapped at 80 columns."""
        lines = self.info_lines()
        current = _FLAG_LABEL
        first = True
        for word in self.flags.split():
            if not first and len(current) + len(word) + 1 > _NO_LOGO_WRAP_WIDTH:
                lines.append(current)
                current = _INDENT + word
            elif first:
                current += word
                first = False
            else:
                current += " " + word
        lines.append(current)
        return lines


def _architecture() -> str:
    try:
        completed = subprocess.run(["uname", "-m"], capture_output=True, check=False)
    except OSError as error:
        raise OSError(f"Failed to get architecture: {error}") from error
    return completed.stdout.decode("utf-8", errors="replace").strip()


def load_linux_cpu_info(
    cpuinfo_path: Path | str = CPUINFO_PATH, sys_cpu_dir: Path | str = SYS_CPU_DIR
) -> LinuxCpuInfo:
    """Gather CPU information; raises OSError if cpuinfo or uname cannot be used."""
    try:
        content = Path(cpuinfo_path).read_text()
    except (OSError, UnicodeDecodeError) as error:
        raise OSError(f"Failed to read {cpuinfo_path}: {error}") from error

    architecture = _architecture()
    parsed = parse_cpuinfo(content)

    sys_root = Path(sys_cpu_dir)
    max_ghz = read_max_frequency(sys_root)
    if max_ghz is None:
        max_ghz = parsed.max_ghz

    l1d, l1i, l2, l3 = read_cache_info(
        sys_root / "cpu0" / "cache", count_physical_cores(content)
    )

    return LinuxCpuInfo(
        model=parsed.model,
        vendor=parsed.vendor,
        architecture=architecture,
        byte_order=byte_order(),
        flags=parsed.flags,
        physical_cores=parsed.physical_cores,
        logical_cores=parsed.logical_cores,
        max_ghz=max_ghz,
        l1d_size=l1d,
        l1i_size=l1i,
        l2_size=l2,
        l3_size=l3,
    )