import subprocess
from unittest import mock

import pytest

from rcpufetch.art import get_logo_lines_for_vendor
from rcpufetch.macos import (
    MacOSCpuInfo,
    SysctlError,
    byte_order_label,
    load_macos_cpu_info,
    parse_arm_flags,
    parse_cache_info,
    run_sysctl,
    sysctl_int,
    vendor_from_model,
)

ARM_LISTING = (
    "hw.optional.arm.FEAT_AES: 1\n"
    "hw.optional.arm.FEAT_SHA256: 1\n"
    "hw.optional.arm.FEAT_BF16: 0\n"
    "hw.optional.floatingpoint: 1\n"
)


def _dict_sysctl(values):
    def sysctl(key):
        if key in values:
            return values[key]
        raise SysctlError(f"sysctl command failed for key: {key}")

    return sysctl


def _fake_run(arch="arm64", arch_code=0, flags_output=ARM_LISTING):
    def run(cmd, **kwargs):
        if cmd[0] == "uname":
            return subprocess.CompletedProcess(cmd, arch_code, stdout=f"{arch}\n".encode(), stderr=b"")
        if cmd == ["sysctl", "hw.optional.arm."]:
            return subprocess.CompletedProcess(cmd, 0, stdout=flags_output.encode(), stderr=b"")
        return subprocess.CompletedProcess(cmd, 1, stdout=b"", stderr=b"")

    return run


def _flag_words(flag_lines):
    first, *rest = flag_lines
    assert first.startswith("Flags: ")
    segments = [first[len("Flags: "):]] + [line.strip() for line in rest]
    return ", ".join(segments).split(", ")


@pytest.mark.parametrize(
    "model, vendor",
    [
        ("Apple M1 Pro", "Apple"),
        ("Intel(R) Core(TM) i7-9750H CPU", "Intel"),
        ("AMD Ryzen 9", "AMD"),
        ("APPLE m2", "Apple"),
        ("Mystery Chip", "Unknown"),
    ],
)
def test_vendor_from_model(model, vendor):
    assert vendor_from_model(model) == vendor


def test_byte_order_label():
    assert byte_order_label("1234") == "Little Endian"
    assert byte_order_label("4321") == "Big Endian"
    assert byte_order_label("77") == "Unknown (77)"


def test_parse_cache_info_levels():
    sizes = f"0 {64 * 1024} {4096 * 1024} {8192 * 1024}"
    config = "10 2 4 8"
    assert parse_cache_info(sizes, config) == ((64, 2), (4096, 4), (8192, 8))


def test_parse_cache_info_missing_or_zero():
    assert parse_cache_info("", "") == (None, None, None)
    sizes = f"0 {64 * 1024} {4096 * 1024}"
    assert parse_cache_info(sizes, "1 0 x") == (None, None, None)
    assert parse_cache_info(sizes, "1 2") == ((64, 2), None, None)


def test_parse_cache_info_perf_level_fallback():
    sizes = f"0 {64 * 1024} {4096 * 1024}"
    l1, l2, l3 = parse_cache_info(sizes, "1 2 4", 12288 * 1024, 4096 * 1024)
    assert l3 == (12288, 1)
    assert parse_cache_info(sizes, "1 2 4", 4096 * 1024, 4096 * 1024)[2] is None
    assert parse_cache_info(sizes, "1 2 4", 4096 * 1024, None)[2] is None


def test_parse_cache_info_prefers_real_l3():
    sizes = f"0 {64 * 1024} {4096 * 1024} {8192 * 1024}"
    l3 = parse_cache_info(sizes, "1 2 4 8", 12288 * 1024, 4096 * 1024)[2]
    assert l3 == (8192, 8)


def test_parse_arm_flags():
    assert parse_arm_flags(ARM_LISTING) == "FEAT_AES,FEAT_SHA256"
    assert parse_arm_flags("") == ""


def test_sysctl_int():
    sysctl = _dict_sysctl({"a": "8", "b": "abc", "c": "4294967296", "d": "+5"})
    assert sysctl_int(sysctl, "a") == 8
    assert sysctl_int(sysctl, "d") == 5
    with pytest.raises(SysctlError):
        sysctl_int(sysctl, "b")
    with pytest.raises(SysctlError):
        sysctl_int(sysctl, "c")
    with pytest.raises(SysctlError):
        sysctl_int(sysctl, "missing")


def test_run_sysctl_success():
    completed = subprocess.CompletedProcess([], 0, stdout=b"  Apple M1\n", stderr=b"")
    with mock.patch("subprocess.run", return_value=completed) as run:
        assert run_sysctl("machdep.cpu.brand_string") == "Apple M1"
    assert run.call_args.args[0] == ["sysctl", "-n", "machdep.cpu.brand_string"]


def test_run_sysctl_failure():
    completed = subprocess.CompletedProcess([], 1, stdout=b"", stderr=b"")
    with mock.patch("subprocess.run", return_value=completed):
        with pytest.raises(SysctlError, match="hw.nothing"):
            run_sysctl("hw.nothing")
    with mock.patch("subprocess.run", side_effect=FileNotFoundError("sysctl")):
        with pytest.raises(SysctlError, match="Failed to execute sysctl"):
            run_sysctl("hw.ncpu")


APPLE_VALUES = {
    "machdep.cpu.brand_string": "Apple M1",
    "hw.byteorder": "1234",
    "machdep.cpu.core_count": "8",
    "machdep.cpu.thread_count": "8",
    "hw.cachesize": f"0 {64 * 1024} {4096 * 1024}",
    "hw.cacheconfig": "1 1 4",
    "hw.perflevel0.l2cachesize": str(12288 * 1024),
    "hw.perflevel1.l2cachesize": str(4096 * 1024),
    "hw.perflevel0.l1icachesize": str(192 * 1024),
    "hw.perflevel0.l1dcachesize": str(128 * 1024),
}


def test_load_apple():
    with mock.patch("subprocess.run", side_effect=_fake_run()):
        info = load_macos_cpu_info(_dict_sysctl(APPLE_VALUES))
    assert info.model == "Apple M1"
    assert info.vendor == "Apple"
    assert info.architecture == "arm64"
    assert info.byte_order == "Little Endian"
    assert (info.physical_cores, info.logical_cores) == (8, 8)
    assert info.flags == "FEAT_AES,FEAT_SHA256"
    assert info.l3_size == (12288, 1)
    assert info.p_core_l1 == (192 * 1024, 128 * 1024)
    assert info.e_core_l1 is None
    assert info.base_mhz is None


def test_load_through_run_sysctl():
    values = {key: value for key, value in APPLE_VALUES.items()}

    def run(cmd, **kwargs):
        if cmd[:2] == ["sysctl", "-n"] and cmd[2] in values:
            return subprocess.CompletedProcess(cmd, 0, stdout=values[cmd[2]].encode(), stderr=b"")
        return _fake_run()(cmd, **kwargs)

    with mock.patch("subprocess.run", side_effect=run):
        info = load_macos_cpu_info()
    assert info.model == "Apple M1"
    assert info.physical_cores == 8


def test_load_core_fallbacks_and_byte_order():
    values = {
        "machdep.cpu.brand_string": "Intel(R) Core(TM) i5",
        "machdep.cpu.cores_per_package": "4",
        "hw.byteorder": "4321",
        "machdep.cpu.max_basic": "13",
    }
    with mock.patch("subprocess.run", side_effect=_fake_run(arch="x86_64", flags_output="")):
        info = load_macos_cpu_info(_dict_sysctl(values))
    assert info.physical_cores == 4
    assert info.logical_cores == 4
    assert info.byte_order == "Big Endian"
    assert info.base_mhz == 13.0
    assert info.flags == ""
    assert info.vendor == "Intel"


def test_load_unknown_byte_order_when_missing():
    values = {"machdep.cpu.brand_string": "Mystery"}
    with mock.patch("subprocess.run", side_effect=_fake_run()):
        info = load_macos_cpu_info(_dict_sysctl(values))
    assert info.byte_order == "Unknown"
    assert info.physical_cores == 0


def test_load_errors():
    with mock.patch("subprocess.run", side_effect=_fake_run()):
        with pytest.raises(SysctlError):
            load_macos_cpu_info(_dict_sysctl({}))
    with mock.patch("subprocess.run", side_effect=_fake_run(arch_code=1)):
        with pytest.raises(OSError, match="uname command failed"):
            load_macos_cpu_info(_dict_sysctl(APPLE_VALUES))


def test_info_lines_traditional_caches():
    info = MacOSCpuInfo(
        model="Intel(R) Core(TM) i5",
        vendor="Intel",
        architecture="x86_64",
        byte_order="Little Endian",
        physical_cores=4,
        logical_cores=8,
        base_mhz=13.0,
        l1_size=(32, 4),
        l2_size=(256, 4),
    )
    lines = info.info_lines()
    assert lines[0] == "Name: Intel(R) Core(TM) i5"
    assert lines[4] == "Cores: 4 cores (8 threads)"
    assert lines[5] == "Base Frequency: 13.00 MHz"
    assert "L2 Cache Size: 256KB (4 cores)" in lines
    assert not any(line.startswith("L3") for line in lines)


def test_info_lines_apple_uses_perf_levels():
    info = MacOSCpuInfo(
        vendor="Apple",
        l1_size=(64, 1),
        p_core_l1=(192 * 1024, 128 * 1024),
        p_core_l2=512 * 1024,
    )
    lines = info.info_lines()
    assert "P-Core L1 Cache: 192KB I + 128KB D" in lines
    assert "P-Core L2 Cache: 512KB" in lines
    assert not any("L1 Cache Size" in line for line in lines)


def test_render_no_logo_without_flags():
    info = MacOSCpuInfo(model="X", vendor="Unknown")
    assert info.render_no_logo() == info.info_lines()


def test_render_no_logo_wraps_flags():
    words = [f"FEAT_NUMBER_{n}" for n in range(20)]
    info = MacOSCpuInfo(model="X", vendor="Apple", flags=",".join(words))
    lines = info.render_no_logo()
    base = info.info_lines()
    assert lines[: len(base)] == base
    flag_lines = lines[len(base):]
    assert len(flag_lines) > 1
    assert all(len(line) <= 80 for line in flag_lines)
    assert all(line.startswith(" " * 7) for line in flag_lines[1:])
    assert _flag_words(flag_lines) == words


def test_render_with_logo_unknown_vendor_strips_indent():
    words = [f"FEAT_NUMBER_{n}" for n in range(20)]
    info = MacOSCpuInfo(model="X", vendor="Unknown", flags=",".join(words))
    lines = info.render_with_logo()
    assert all(line.startswith("   ") for line in lines)
    body = [line[3:] for line in lines]
    base = info.info_lines()
    assert body[: len(base)] == base
    flag_lines = body[len(base):]
    assert len(flag_lines) > 1
    assert not any(line.startswith(" ") for line in flag_lines)
    assert _flag_words(flag_lines) == words


def test_render_with_logo_override():
    info = MacOSCpuInfo(model="X", vendor="Unknown")
    logo = get_logo_lines_for_vendor("Apple")
    lines = info.render_with_logo("Apple")
    assert len(lines) == max(len(logo), len(info.info_lines()))
    assert lines[0].startswith(logo[0])
    assert lines[0].endswith("Name: X")
    width = max(len(line) for line in logo)
    assert all(len(line) >= width + 3 for line in lines)