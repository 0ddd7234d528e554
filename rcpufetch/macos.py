"""CPU information on macOS, gathered from sysctl and uname."""

from __future__ import annotations

import re
import subprocess
from collections.abc import Callable
from dataclasses import dataclass

from rcpufetch.art import SEPARATOR, format_cache_size, get_logo_lines_for_vendor, side_by_side

Sysctl = Callable[[str], str]
CacheInfo = tuple[int, int]

_UNSIGNED = re.compile(r"\+?[0-9]+")
_U32_MAX = 0xFFFF_FFFF
_ARM_PREFIX = "hw.optional.arm."

_TOTAL_WIDTH = 100
_NO_LOGO_WRAP_WIDTH = 80
_FLAG_LABEL = "Flags: "
_INDENT = " " * len(_FLAG_LABEL)


class SysctlError(OSError):
    """Raised when a sysctl value cannot be read or parsed."""


def _parse_u32(text: str) -> int | None:
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U32_MAX else None


def _parse_float(text: str) -> float | None:
    if "_" in text or text != text.strip():
        return None
    try:
        return float(text)
    except ValueError:
        return None


def run_sysctl(key: str) -> str:
    """Return the trimmed value of a sysctl key; raises SysctlError on failure."""
    try:
        completed = subprocess.run(["sysctl", "-n", key], capture_output=True, check=False)
    except OSError as error:
        raise SysctlError(f"Failed to execute sysctl: {error}") from error
    if completed.returncode != 0:
        raise SysctlError(f"sysctl command failed for key: {key}")
    return completed.stdout.decode("utf-8", errors="replace").strip()


def sysctl_int(sysctl: Sysctl, key: str) -> int:
    """Read a sysctl key through ``sysctl`` and parse it as an unsigned 32-bit integer."""
    value = sysctl(key)
    parsed = _parse_u32(value)
    if parsed is None:
        raise SysctlError(f"Failed to parse '{value}' as u32")
    return parsed


def _try_string(sysctl: Sysctl, key: str) -> str | None:
    try:
        return sysctl(key)
    except SysctlError:
        return None


def _try_int(sysctl: Sysctl, key: str) -> int | None:
    try:
        return sysctl_int(sysctl, key)
    except SysctlError:
        return None


def vendor_from_model(model: str) -> str:
    """Name the vendor found in a CPU brand string: Intel, AMD, Apple or Unknown."""
    lowered = model.lower()
    for needle, vendor in (("intel", "Intel"), ("amd", "AMD"), ("apple", "Apple")):
        if needle in lowered:
            return vendor
    return "Unknown"


def byte_order_label(value: str) -> str:
    """Describe a hw.byteorder value."""
    order = value.strip()
    if order == "1234":
        return "Little Endian"
    if order == "4321":
        return "Big Endian"
    return f"Unknown ({value})"


def parse_cache_info(
    cachesize: str,
    cacheconfig: str,
    perf0_l2: int | None = None,
    perf1_l2: int | None = None,
) -> tuple[CacheInfo | None, CacheInfo | None, CacheInfo | None]:
    """Return (L1, L2, L3) as (size KB, count) from hw.cachesize and hw.cacheconfig.

    When L3 is missing and the two performance levels have different L2 sizes,
    the larger one is reported as L3 with a count of 1.
    """
    sizes = cachesize.split()
    configs = cacheconfig.split()

    def level(index: int) -> CacheInfo | None:
        if len(sizes) <= index or len(configs) <= index:
            return None
        size_bytes = _parse_u32(sizes[index]) or 0
        count = _parse_u32(configs[index]) or 0
        if size_bytes > 0 and count > 0:
            return size_bytes // 1024, count
        return None

    l1, l2, l3 = level(1), level(2), level(3)
    if l3 is None and perf0_l2 is not None and perf1_l2 is not None and perf0_l2 != perf1_l2:
        l3 = (max(perf0_l2, perf1_l2) // 1024, 1)
    return l1, l2, l3


def parse_arm_flags(output: str) -> str:
    """Return the enabled hw.optional.arm.* features of a sysctl listing, comma separated."""
    enabled = []
    for line in output.splitlines():
        key, sep, value = line.partition(": ")
        if sep and value.strip() == "1" and key.startswith(_ARM_PREFIX):
            enabled.append(key.removeprefix(_ARM_PREFIX))
    return ",".join(enabled)


def _architecture() -> str:
    try:
        completed = subprocess.run(["uname", "-m"], capture_output=True, check=False)
    except OSError as error:
        raise OSError(f"Failed to execute uname: {error}") from error
    if completed.returncode != 0:
        raise OSError("uname command failed")
    return completed.stdout.decode("utf-8", errors="replace").strip()


def _arm_flags() -> str:
    try:
        completed = subprocess.run(["sysctl", _ARM_PREFIX], capture_output=True, check=False)
    except OSError:
        return ""
    if completed.returncode != 0:
        return ""
    return parse_arm_flags(completed.stdout.decode("utf-8", errors="replace"))


@dataclass(frozen=True)
class MacOSCpuInfo:
    """CPU details shown on macOS.

    Cache levels are (size KB, count); performance-level L1 caches are
    (instruction bytes, data bytes) and performance-level L2 caches are bytes.
    """

    model: str = ""
    vendor: str = "Unknown"
    architecture: str = ""
    byte_order: str = "Unknown"
    physical_cores: int = 0
    logical_cores: int = 0
    base_mhz: float | None = None
    l1_size: CacheInfo | None = None
    l2_size: CacheInfo | None = None
    l3_size: CacheInfo | None = None
    flags: str = ""
    p_core_l1: tuple[int, int] | None = None
    e_core_l1: tuple[int, int] | None = None
    p_core_l2: int | None = None
    e_core_l2: int | None = None

    def _apple_cache_lines(self) -> list[str]:
        lines = []
        for label, l1 in (("P-Core", self.p_core_l1), ("E-Core", self.e_core_l1)):
            if l1 is not None:
                l1i, l1d = l1
                lines.append(
                    f"{label} L1 Cache: {format_cache_size(l1i // 1024)} I"
                    f" + {format_cache_size(l1d // 1024)} D"
                )
        for label, l2 in (("P-Core", self.p_core_l2), ("E-Core", self.e_core_l2)):
            if l2 is not None:
                lines.append(f"{label} L2 Cache: {format_cache_size(l2 // 1024)}")
        return lines

    def _cache_lines(self) -> list[str]:
        lines = []
        for level, cache in (("L1", self.l1_size), ("L2", self.l2_size), ("L3", self.l3_size)):
            if cache is not None:
                size, count = cache
                lines.append(f"{level} Cache Size: {format_cache_size(size)} ({count} cores)")
        return lines

    def info_lines(self) -> list[str]:
        """Return the labelled information lines, without flags."""
        lines = [
            f"Name: {self.model}",
            f"Architecture: {self.architecture}",
            f"Byte Order: {self.byte_order}",
            f"Vendor: {self.vendor}",
            f"Cores: {self.physical_cores} cores ({self.logical_cores} threads)",
        ]
        if self.base_mhz is not None:
            lines.append(f"Base Frequency: {self.base_mhz:.2f} MHz")
        if self.vendor == "Apple":
            lines.extend(self._apple_cache_lines())
        else:
            lines.extend(self._cache_lines())
        return lines

    def _flag_words(self) -> list[str]:
        return [word.strip() for word in self.flags.split(",")]

    def render_with_logo(self, logo_override: str | None = None) -> list[str]:
        """Return the info and wrapped flags beside the vendor logo (or the override's)."""
        logo_lines = get_logo_lines_for_vendor(logo_override or self.vendor) or []
        info_lines = self.info_lines()

        if self.flags:
            logo_width = max((len(line) for line in logo_lines), default=0)
            wrap_width = _TOTAL_WIDTH - (logo_width + len(SEPARATOR))
            current = _FLAG_LABEL
            for word in self._flag_words():
                if len(current) + len(word) + 2 > wrap_width:
                    info_lines.append(current)
                    current = _INDENT + word
                elif current.rstrip().endswith(":"):
                    current += word
                else:
                    current += ", " + word
            if current.strip():
                info_lines.append(current)

        adjusted = []
        for row, info in enumerate(info_lines):
            logo = logo_lines[row] if row < len(logo_lines) else ""
            if not logo and info.startswith(_INDENT):
                info = info[len(_INDENT):]
            adjusted.append(info)
        return side_by_side(logo_lines, adjusted)

    def render_no_logo(self) -> list[str]:
        """Return the info lines followed by flags wrapped at 80 columns."""
        lines = self.info_lines()
        if not self.flags:
            return lines
        current = _FLAG_LABEL
        first = True
        for word in self._flag_words():
            if not first and len(current) + len(word) + 2 > _NO_LOGO_WRAP_WIDTH:
                lines.append(current)
                current = _INDENT + word
            elif first:
                current += word
                first = False
            else:
                current += ", " + word
        lines.append(current)
        return lines


def load_macos_cpu_info(sysctl: Sysctl = run_sysctl) -> MacOSCpuInfo:
    """Gather CPU information; raises SysctlError or OSError if the model or uname fails."""
    model = sysctl("machdep.cpu.brand_string")
    architecture = _architecture()

    order = _try_string(sysctl, "hw.byteorder")
    byte_order = "Unknown" if order is None else byte_order_label(order)

    physical = _try_int(sysctl, "machdep.cpu.core_count")
    if physical is None:
        physical = _try_int(sysctl, "machdep.cpu.cores_per_package") or 0
    logical = _try_int(sysctl, "machdep.cpu.thread_count")
    if logical is None:
        logical = _try_int(sysctl, "machdep.cpu.logical_per_package")
        if logical is None:
            logical = physical

    basic = _try_string(sysctl, "machdep.cpu.max_basic")
    base_mhz = None if basic is None else _parse_float(basic)

    perf0_l2 = _try_int(sysctl, "hw.perflevel0.l2cachesize")
    perf1_l2 = _try_int(sysctl, "hw.perflevel1.l2cachesize")
    l1, l2, l3 = parse_cache_info(
        _try_string(sysctl, "hw.cachesize") or "",
        _try_string(sysctl, "hw.cacheconfig") or "",
        perf0_l2,
        perf1_l2,
    )

    def perf_l1(level: int) -> tuple[int, int] | None:
        l1i = _try_int(sysctl, f"hw.perflevel{level}.l1icachesize")
        if l1i is None:
            return None
        l1d = _try_int(sysctl, f"hw.perflevel{level}.l1dcachesize")
        return None if l1d is None else (l1i, l1d)

    return MacOSCpuInfo(
        model=model,
        vendor=vendor_from_model(model),
        architecture=architecture,
        byte_order=byte_order,
        physical_cores=physical,
        logical_cores=logical,
        base_mhz=base_mhz,
        l1_size=l1,
        l2_size=l2,
        l3_size=l3,
        flags=_arm_flags(),
        p_core_l1=perf_l1(0),
        e_core_l1=perf_l1(1),
        p_core_l2=perf0_l2,
        e_core_l2=perf1_l2,
    )