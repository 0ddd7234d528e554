# rcpufetch

A small command-line tool that prints information about your CPU next to a
coloured ASCII logo of its vendor.

- **Linux**: reads `/proc/cpuinfo`, the sysfs tree under
  `/sys/devices/system/cpu` and `uname -m`. It shows the model name,
  architecture, byte order, vendor id, maximum frequency (the highest cpufreq
  `scaling_max_freq`, or else the highest `cpu MHz` in `/proc/cpuinfo`),
  physical cores and threads, the L1i/L1d/L1/L2/L3 cache sizes read from
  `cpu0`'s sysfs cache entries, and the CPU flags.
- **macOS**: queries `sysctl` and `uname -m`, covering Intel and Apple
  Silicon machines. On Apple Silicon it shows the P-core and E-core L1 and L2
  caches and the enabled `hw.optional.arm.*` features as flags.

## Installation

```
pip install .
```

## Usage

```
rcpufetch                    Display CPU info with auto-detected logo
rcpufetch --no-logo          Display CPU info without logo
rcpufetch --logo intel       Display CPU info with Intel logo
rcpufetch --license          Show a notice about the terms of use
```

### Options

| Option                   | Description                                        |
|--------------------------|----------------------------------------------------|
| `-h`, `--help`           | Print help information                             |
| `-V`, `--version`        | Print version information                          |
| `--license`              | Print a notice pointing to the terms of use        |
| `--completions <SHELL>`  | Print shell completions (`fish`, `bash`, `zsh`)    |
| `-n`, `--no-logo`        | Print the information without a logo               |
| `-l`, `--logo <VENDOR>`  | Show the logo of the given vendor instead          |

Valid logo vendors are `nvidia`, `powerpc`, `arm`, `amd`, `intel` and `apple`
(case-insensitive). The form `--logo=<VENDOR>` works as well. For an unknown
vendor name, rcpufetch prints a warning on stderr and uses the logo of the
detected vendor. An unknown option prints an error and exits with status 1.

### Shell completions

```
rcpufetch --completions bash > ~/.local/share/bash-completion/completions/rcpufetch
rcpufetch --completions zsh > ~/.zfunc/_rcpufetch
rcpufetch --completions fish > ~/.config/fish/completions/rcpufetch.fish
```

## Using it from Python

The readers and formatters can be used on their own:

```python
from rcpufetch.linux_probe import parse_cpuinfo, parse_cache_size
from rcpufetch.linux import load_linux_cpu_info

with open("/proc/cpuinfo") as handle:
    parsed = parse_cpuinfo(handle.read())
print(parsed.model, parsed.physical_cores, parsed.logical_cores)

parse_cache_size("32K")  # 32

for line in load_linux_cpu_info().render_no_logo():
    print(line)
```

`rcpufetch.macos.load_macos_cpu_info(sysctl)` takes any callable that maps a
sysctl key to its value (raising `SysctlError` when it has none), so it can be
fed recorded values. `rcpufetch.art.get_logo_lines_for_vendor(vendor_id)`
returns a vendor's coloured logo lines, and `rcpufetch.app.main(argv)` runs
the command and returns its exit status.

## Limitations

- On Windows no probe exists yet: the model and vendor are shown as
  `Unknown` and the core counts as 0.
- Other operating systems are not supported; rcpufetch prints
  `Unsupported operating system: <name>` and shows nothing else.
- Output is not adapted to the terminal: flags are wrapped at a fixed width
  (100 columns beside a logo, 80 without) and colours are always emitted.

## Running the tests

```
pip install '.[test]'
pytest
```