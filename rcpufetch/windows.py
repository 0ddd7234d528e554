"""CPU information on Windows."""

from __future__ import annotations

from dataclasses import dataclass

from rcpufetch.art import get_logo_lines_for_vendor, side_by_side


@dataclass(frozen=True)
class WindowsCpuInfo:
    """CPU details shown on Windows; cache sizes are (KB, core count)."""

    model: str = "Unknown"
    vendor: str = "Unknown"
    physical_cores: int = 0
    logical_cores: int = 0
    base_mhz: float | None = None
    l1_size: tuple[int, int] | None = None
    l2_size: tuple[int, int] | None = None
    l3_size: tuple[int, int] | None = None

    def info_lines(self) -> list[str]:
        """Return the labelled information lines."""
        lines = [
            f"Name: {self.model}",
            f"Vendor: {self.vendor}",
            f"Cores: {self.physical_cores} cores ({self.logical_cores} threads)",
        ]
        if self.base_mhz is not None:
            lines.append(f"Base Frequency: {self.base_mhz:.2f} MHz")
        for level, cache in (("L1", self.l1_size), ("L2", self.l2_size), ("L3", self.l3_size)):
            if cache is not None:
                size, count = cache
                lines.append(f"{level} Cache Size: {size} KB ({count} cores)")
        return lines

    def render_with_logo(self, logo_override: str | None = None) -> list[str]:
        """Return the info lines beside the vendor logo (or the override's logo)."""
        logo = get_logo_lines_for_vendor(logo_override or self.vendor) or []
        return side_by_side(logo, self.info_lines())

    def render_no_logo(self) -> list[str]:
        """Return the info lines alone."""
        return self.info_lines()


def detect_windows_cpu() -> WindowsCpuInfo:
    """Return Windows CPU information; no probe exists yet, so every field is unknown."""
    return WindowsCpuInfo()