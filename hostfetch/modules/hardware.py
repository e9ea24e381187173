"""
Hardware probes: CPU, CPU usage, memory, swap, disks and battery.
"""

import os
import platform
import time
from pathlib import Path
from typing import List, Set

import psutil
from loguru import logger
from pydantic import BaseModel

from hostfetch.core.errors import DetectionError
from hostfetch.core.format import FormatArg
from hostfetch.modules.base import BaseModule
from hostfetch.utils.units import format_bytes, format_percent

CPU_TEMP_SENSORS = ("coretemp", "k10temp", "zenpower", "cpu_thermal", "cpu-thermal", "acpitz")

# psutil.cpu_percent(None) is meaningless right after the baseline sample
CPU_USAGE_MIN_INTERVAL = 0.2

REMOVABLE_PREFIXES = ("/media/", "/run/media/", "/mnt/", "/Volumes/")
HIDDEN_PREFIXES = ("/boot", "/snap/", "/var/lib/snapd/", "/System/Volumes/")


# CPU


class CPUResult(BaseModel):
    name: str = ""
    vendor: str = ""
    cores_physical: int = 0
    cores_logical: int = 0
    cores_online: int = 0
    frequency_min: float = 0.0
    frequency_max: float = 0.0
    temperature: float = 0.0


def read_cpuinfo(path: Path = Path("/proc/cpuinfo")) -> dict:
    """First occurrence of each ``key : value`` pair of /proc/cpuinfo."""
    values = {}
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return values
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if sep:
            values.setdefault(key.strip(), value.strip())
    return values


def cpu_temperature() -> float:
    sensors = getattr(psutil, "sensors_temperatures", None)
    if sensors is None:
        return 0.0
    try:
        readings = sensors()
    except (OSError, RuntimeError):
        return 0.0
    for sensor in CPU_TEMP_SENSORS:
        for entry in readings.get(sensor, []):
            if entry.current:
                return float(entry.current)
    return 0.0


class CPUModule(BaseModule):
    name = "CPU"
    option_name = "cpu"
    tokens = ("cpu",)
    description = "CPU name, core count and frequency"
    format_args = (
        "Name",
        "Vendor",
        "Physical core count",
        "Logical core count",
        "Online core count",
        "Min frequency (GHz)",
        "Max frequency (GHz)",
        "Temperature (°C)",
    )
    default_format = "{1}{?5}[ ({5})]{?}{?7}[ @ {7} GHz]{?}{?8}[ - {8}°C]{?}"

    def detect(self) -> CPUResult:
        result = CPUResult()
        system = platform.system()
        if system == "Linux":
            cpuinfo = read_cpuinfo()
            result.name = cpuinfo.get("model name", cpuinfo.get("Hardware", cpuinfo.get("cpu model", "")))
            result.vendor = cpuinfo.get("vendor_id", "")
        elif system == "Darwin":
            runner = self.context.runner
            result.name = runner.run_command(["sysctl", "-n", "machdep.cpu.brand_string"]).first_line()
            result.vendor = runner.run_command(["sysctl", "-n", "machdep.cpu.vendor"]).first_line()
        if not result.name:
            result.name = platform.processor()
        if not result.name:
            raise DetectionError("couldn't read the CPU name")

        result.cores_physical = psutil.cpu_count(logical=False) or 0
        result.cores_logical = psutil.cpu_count(logical=True) or 0
        if hasattr(os, "sched_getaffinity"):
            result.cores_online = len(os.sched_getaffinity(0))
        else:
            result.cores_online = result.cores_logical

        try:
            frequency = psutil.cpu_freq()
        except (OSError, NotImplementedError):
            frequency = None
        if frequency is not None:
            result.frequency_min = round(frequency.min / 1000, 2)
            result.frequency_max = round((frequency.max or frequency.current) / 1000, 2)

        if self.config.cpu_temp:
            result.temperature = cpu_temperature()
        return result

    def format_values(self, result: CPUResult) -> List[FormatArg]:
        return [
            result.name,
            result.vendor,
            result.cores_physical,
            result.cores_logical,
            result.cores_online,
            result.frequency_min,
            result.frequency_max,
            result.temperature,
        ]


class CPUUsageModule(BaseModule):
    """
    CPU usage between a baseline sample and the time the row prints.

    ``prepare`` takes the baseline early so the row does not need to sleep.
    """

    name = "CPU Usage"
    option_name = "cpu-usage"
    tokens = ("cpuusage",)
    description = "Percentage of CPU in use"
    format_args = ("CPU usage (percentage)",)

    baseline_key = "cpu-usage-baseline"

    def _baseline(self) -> float:
        psutil.cpu_percent(interval=None)
        return time.monotonic()

    def prepare(self) -> float:
        return self.context.cache.get(self.baseline_key, self._baseline)

    def detect(self) -> float:
        started = self.prepare()
        remaining = CPU_USAGE_MIN_INTERVAL - (time.monotonic() - started)
        if remaining > 0:
            time.sleep(remaining)
        return psutil.cpu_percent(interval=None)

    def format_values(self, result: float) -> List[FormatArg]:
        return [result]

    def default_output(self, result: float) -> str:
        return format_percent(result, self.config.percent_type)


# Memory and swap


class UsageResult(BaseModel):
    used: int
    total: int

    @property
    def percent(self) -> float:
        return self.used * 100 / self.total if self.total else 0.0


class _UsageModule(BaseModule):
    format_args = ("Used size", "Total size", "Percentage used")

    def format_values(self, result: UsageResult) -> List[FormatArg]:
        prefix = self.config.binary_prefix
        return [
            format_bytes(result.used, prefix),
            format_bytes(result.total, prefix),
            round(result.percent),
        ]

    def default_output(self, result: UsageResult) -> str:
        used, total, _ = self.format_values(result)
        return f"{used} / {total} ({format_percent(result.percent, self.config.percent_type)})"


class MemoryModule(_UsageModule):
    name = "Memory"
    option_name = "memory"
    tokens = ("memory",)
    description = "Used and total physical memory"

    def detect(self) -> UsageResult:
        memory = psutil.virtual_memory()
        return UsageResult(used=memory.total - memory.available, total=memory.total)


class SwapModule(_UsageModule):
    name = "Swap"
    option_name = "swap"
    tokens = ("swap",)
    description = "Used and total swap space"

    def detect(self) -> UsageResult:
        swap = psutil.swap_memory()
        return UsageResult(used=swap.used, total=swap.total)

    def default_output(self, result: UsageResult) -> str:
        if not result.total:
            return "Disabled"
        return super().default_output(result)


# Disks


class DiskResult(BaseModel):
    mountpoint: str
    filesystem: str = ""
    used: int = 0
    total: int = 0
    files_used: int = 0
    files_total: int = 0
    removable: bool = False
    hidden: bool = False

    @property
    def percent(self) -> float:
        return self.used * 100 / self.total if self.total else 0.0

    @property
    def files_percent(self) -> float:
        return self.files_used * 100 / self.files_total if self.files_total else 0.0


def _is_removable(mountpoint: str) -> bool:
    return mountpoint.startswith(REMOVABLE_PREFIXES)


def _is_hidden(mountpoint: str) -> bool:
    if mountpoint.startswith(HIDDEN_PREFIXES):
        return True
    return any(part.startswith(".") for part in Path(mountpoint).parts)


def _file_counts(mountpoint: str) -> tuple:
    if not hasattr(os, "statvfs"):
        return 0, 0
    try:
        stats = os.statvfs(mountpoint)
    except OSError:
        return 0, 0
    return stats.f_files - stats.f_ffree, stats.f_files


class DiskModule(BaseModule):
    name = "Disk"
    option_name = "disk"
    tokens = ("disk",)
    description = "Used and total space of mounted volumes"
    format_args = (
        "Size used",
        "Size total",
        "Size percentage",
        "Files used",
        "Files total",
        "Files percentage",
        "True if removable volume",
        "True if hidden volume",
        "Filesystem",
    )
    empty_message = "no mount points found"
    # Rows are labelled by mount point instead of an index
    index_rows = False

    def _selected(self, partition, seen_devices: Set[str]) -> bool:
        config = self.config
        mountpoint = partition.mountpoint
        if config.disk_folders:
            return mountpoint in config.disk_folders.split(":")
        if not partition.fstype and not config.disk_show_unknown:
            return False
        if _is_hidden(mountpoint) and not config.disk_show_hidden:
            return False
        if _is_removable(mountpoint) and not config.disk_show_removable:
            return False
        if partition.device in seen_devices and not config.disk_show_subvolumes:
            return False
        return True

    def detect(self) -> List[DiskResult]:
        disks = []
        seen_devices: Set[str] = set()
        for partition in psutil.disk_partitions(all=bool(self.config.disk_folders)):
            if not self._selected(partition, seen_devices):
                continue
            seen_devices.add(partition.device)
            try:
                usage = psutil.disk_usage(partition.mountpoint)
            except OSError as e:
                logger.debug(f"Skipping {partition.mountpoint}: {e}")
                continue
            files_used, files_total = _file_counts(partition.mountpoint)
            disks.append(
                DiskResult(
                    mountpoint=partition.mountpoint,
                    filesystem=partition.fstype,
                    used=usage.used,
                    total=usage.total,
                    files_used=files_used,
                    files_total=files_total,
                    removable=_is_removable(partition.mountpoint),
                    hidden=_is_hidden(partition.mountpoint),
                )
            )
        return disks

    def key_name(self, result: DiskResult) -> str:
        return f"{self.name} ({result.mountpoint})"

    def format_values(self, result: DiskResult) -> List[FormatArg]:
        prefix = self.config.binary_prefix
        return [
            format_bytes(result.used, prefix),
            format_bytes(result.total, prefix),
            round(result.percent),
            result.files_used,
            result.files_total,
            round(result.files_percent),
            result.removable,
            result.hidden,
            result.filesystem,
        ]

    def default_output(self, result: DiskResult) -> str:
        prefix = self.config.binary_prefix
        text = (
            f"{format_bytes(result.used, prefix)} / {format_bytes(result.total, prefix)} "
            f"({format_percent(result.percent, self.config.percent_type)})"
        )
        if result.filesystem:
            text += f" - {result.filesystem}"
        if result.removable:
            text += " [Removable]"
        return text


# Battery


class BatteryResult(BaseModel):
    manufacturer: str = ""
    model: str = ""
    technology: str = ""
    capacity: float = 0.0
    status: str = ""


def read_battery_dir(directory: Path) -> BatteryResult:
    """Read a power_supply directory in the sysfs layout."""

    def read(name: str) -> str:
        try:
            return (directory / name).read_text(encoding="utf-8").strip()
        except OSError:
            return ""

    capacity = read("capacity")
    if not capacity.isdigit():
        raise DetectionError(f"no battery capacity in {directory}")
    return BatteryResult(
        manufacturer=read("manufacturer"),
        model=read("model_name"),
        technology=read("technology"),
        capacity=float(capacity),
        status=read("status"),
    )


class BatteryModule(BaseModule):
    name = "Battery"
    option_name = "battery"
    tokens = ("battery",)
    description = "Battery charge and status"
    format_args = ("Battery manufacturer", "Battery model", "Battery technology", "Battery capacity", "Battery status")

    def detect(self) -> BatteryResult:
        if self.config.battery_dir:
            return read_battery_dir(Path(self.config.battery_dir))

        sensor = getattr(psutil, "sensors_battery", None)
        battery = sensor() if sensor is not None else None
        if battery is None:
            raise DetectionError("no batteries found")
        if battery.power_plugged:
            status = "Full" if battery.percent >= 100 else "Charging"
        else:
            status = "Discharging"
        return BatteryResult(capacity=float(battery.percent), status=status)

    def format_values(self, result: BatteryResult) -> List[FormatArg]:
        return [result.manufacturer, result.model, result.technology, result.capacity, result.status]

    def default_output(self, result: BatteryResult) -> str:
        text = format_percent(result.capacity, self.config.percent_type)
        if result.status:
            text += f" [{result.status}]"
        return text
