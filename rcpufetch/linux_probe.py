"""Readers for the Linux CPU sources: /proc/cpuinfo and the sysfs cpu tree."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

SYS_CPU_DIR = Path("/sys/devices/system/cpu")
CPU0_CACHE_DIR = SYS_CPU_DIR / "cpu0" / "cache"

_UNSIGNED = re.compile(r"\+?[0-9]+")
_U32_MAX = 0xFFFF_FFFF
_U64_MAX = 0xFFFF_FFFF_FFFF_FFFF

CacheSize = tuple[int, int]


@dataclass(frozen=True)
class ParsedCpuInfo:
    """Facts read from /proc/cpuinfo; cache sizes are (per core KB, total KB)."""

    model: str = ""
    vendor: str = ""
    flags: str = ""
    physical_cores: int = 1
    logical_cores: int = 0
    max_ghz: float | None = None
    l1d_size: CacheSize | None = None
    l1i_size: CacheSize | None = None
    l2_size: CacheSize | None = None
    l3_size: CacheSize | None = None


def _parse_unsigned(text: str, limit: int) -> int | None:
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value <= limit else None


def _parse_float(text: str) -> float | None:
    if "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _blocks(content: str) -> Iterator[str]:
    for block in content.split("\n\n"):
        if block.strip():
            yield block


def _fields(block: str) -> Iterator[tuple[str, str]]:
    for line in block.splitlines():
        key, sep, value = line.strip().partition(":")
        if sep:
            yield key.strip(), value.strip()


def _topology(block: str) -> tuple[int | None, int | None]:
    physical_id = core_id = None
    for key, value in _fields(block):
        if key == "physical id":
            parsed = _parse_unsigned(value, _U32_MAX)
            if parsed is not None:
                physical_id = parsed
        elif key == "core id":
            parsed = _parse_unsigned(value, _U32_MAX)
            if parsed is not None:
                core_id = parsed
    return physical_id, core_id


def _physical_cores(topologies: Iterable[tuple[int | None, int | None]]) -> int:
    physical_ids: set[int] = set()
    cores: set[tuple[int, int]] = set()
    for physical_id, core_id in topologies:
        if physical_id is not None:
            physical_ids.add(physical_id)
            if core_id is not None:
                cores.add((physical_id, core_id))
    if cores:
        return len(cores)
    if physical_ids:
        return len(physical_ids)
    return 1


def parse_cpuinfo(content: str) -> ParsedCpuInfo:
    """Parse the text of /proc/cpuinfo.

    The first model name, vendor id, flags and cache size seen are kept, the
    highest "cpu MHz" is reported in GHz, and the cache size is taken as L2.
    """
    model = vendor = flags = ""
    cache_size: int | None = None
    max_mhz: float | None = None
    logical_cores = 0
    topologies = []

    for block in _blocks(content):
        logical_cores += 1
        for key, value in _fields(block):
            if key == "model name":
                model = model or value
            elif key == "vendor_id":
                vendor = vendor or value
            elif key == "flags":
                flags = flags or value
            elif key == "cache size":
                if cache_size is None:
                    tokens = value.split()
                    if tokens:
                        cache_size = _parse_unsigned(tokens[0], _U32_MAX)
            elif key == "cpu MHz":
                mhz = _parse_float(value)
                if mhz is not None:
                    max_mhz = mhz if max_mhz is None else max(max_mhz, mhz)
        topologies.append(_topology(block))

    physical_cores = _physical_cores(topologies)
    l2_size = None if cache_size is None else (cache_size, cache_size * physical_cores)

    return ParsedCpuInfo(
        model=model,
        vendor=vendor,
        flags=flags,
        physical_cores=physical_cores,
        logical_cores=logical_cores,
        max_ghz=None if max_mhz is None else max_mhz / 1000.0,
        l2_size=l2_size,
    )


def count_physical_cores(content: str) -> int:
    """Count unique (physical id, core id) pairs, falling back to physical ids, then 1."""
    return _physical_cores(_topology(block) for block in _blocks(content))


def parse_cache_size(size_str: str) -> int | None:
    """Parse a sysfs cache size such as "32K", "32KB" or "32" into KB."""
    if size_str.endswith("K"):
        number = size_str[:-1]
    elif size_str.endswith("KB"):
        number = size_str[:-2]
    else:
        number = size_str
    return _parse_unsigned(number, _U32_MAX)


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text()
    except (OSError, UnicodeDecodeError):
        return None


def read_max_frequency(sys_cpu_dir: Path | str = SYS_CPU_DIR) -> float | None:
    """Return the highest cpufreq scaling_max_freq of all cpuN entries in GHz, or None."""
    root = Path(sys_cpu_dir)
    try:
        entries = list(root.iterdir())
    except OSError:
        return None

    max_khz = 0
    for entry in entries:
        name = entry.name
        if not name.startswith("cpu") or not all(c in "0123456789" for c in name[3:]):
            continue
        text = _read_text(entry / "cpufreq" / "scaling_max_freq")
        if text is None:
            continue
        khz = _parse_unsigned(text.strip(), _U64_MAX)
        if khz is not None:
            max_khz = max(max_khz, khz)

    if max_khz > 0:
        return max_khz / 1_000_000.0
    return None


def read_cache_info(
    cache_dir: Path | str = CPU0_CACHE_DIR, physical_cores: int = 1
) -> tuple[CacheSize | None, CacheSize | None, CacheSize | None, CacheSize | None]:
    """Read one CPU's sysfs cache entries and return (L1d, L1i, L2, L3).

    Each present level is (0, total KB): L1 and L2 are multiplied by the
    physical core count, L3 is taken as shared.
    """
    sizes: dict[str, int] = {}
    root = Path(cache_dir)
    try:
        entries = sorted(root.iterdir())
    except OSError:
        entries = []

    for entry in entries:
        if not entry.name.startswith("index"):
            continue
        level = _read_text(entry / "level")
        cache_type = _read_text(entry / "type")
        size = _read_text(entry / "size")
        if level is None or cache_type is None or size is None:
            continue
        size_kb = parse_cache_size(size.strip())
        if size_kb is not None:
            sizes[f"L{level.strip()}_{cache_type.strip()}"] = size_kb

    def per_core(key: str) -> CacheSize | None:
        size_kb = sizes.get(key)
        return None if size_kb is None else (0, size_kb * physical_cores)

    l3 = sizes.get("L3_Unified")
    return (
        per_core("L1_Data"),
        per_core("L1_Instruction"),
        per_core("L2_Unified"),
        None if l3 is None else (0, l3),
    )


def byte_order() -> str:
    """Return "Little Endian" or "Big Endian" for this machine."""
    return "Little Endian" if sys.byteorder == "little" else "Big Endian"