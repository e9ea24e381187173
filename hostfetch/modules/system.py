"""
Operating system, machine identity, time and session probes.
"""

import locale
import os
import platform
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, List

import psutil
from dateutil.relativedelta import relativedelta
from loguru import logger
from pydantic import BaseModel

from hostfetch.core.errors import DetectionError
from hostfetch.core.format import FormatArg
from hostfetch.modules.base import BaseModule

OS_RELEASE_FILES = ("/etc/os-release", "/usr/lib/os-release", "/etc/lsb-release")
DMI_DIRS = ("/sys/devices/virtual/dmi/id", "/sys/class/dmi/id")

# Values firmware vendors leave in DMI fields instead of real data
DMI_PLACEHOLDERS = frozenset(
    {
        "to be filled by o.e.m.",
        "to be filled by oem",
        "default string",
        "not applicable",
        "not specified",
        "system product name",
        "system version",
        "type1productconfigid",
        "none",
        "o.e.m.",
        "oem",
    }
)

CHASSIS_TYPES = {
    "1": "Other",
    "2": "Unknown",
    "3": "Desktop",
    "4": "Low Profile Desktop",
    "6": "Mini Tower",
    "7": "Tower",
    "8": "Portable",
    "9": "Laptop",
    "10": "Notebook",
    "11": "Hand Held",
    "13": "All in One",
    "14": "Sub Notebook",
    "17": "Main Server Chassis",
    "23": "Rack Mount Chassis",
    "24": "Sealed-case PC",
    "30": "Tablet",
    "31": "Convertible",
    "32": "Detachable",
    "35": "Mini PC",
    "36": "Stick PC",
}


# Operating system


class OSResult(BaseModel):
    sys_name: str = ""
    name: str = ""
    pretty_name: str = ""
    id: str = ""
    id_like: str = ""
    variant: str = ""
    variant_id: str = ""
    version: str = ""
    version_id: str = ""
    codename: str = ""
    build_id: str = ""
    architecture: str = ""


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse ``KEY=value`` lines of an os-release (or lsb-release) file."""
    values = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key.strip().upper()] = value
    return values


class OSModule(BaseModule):
    name = "OS"
    option_name = "os"
    tokens = ("os",)
    description = "Operating system name and version"
    format_args = (
        "System name (typically just Linux)",
        "Name of the OS",
        "Pretty name of the OS",
        "ID of the OS",
        "ID like of the OS",
        "Variant of the OS",
        "Variant ID of the OS",
        "Version of the OS",
        "Version ID of the OS",
        "Version codename of the OS",
        "Build ID of the OS",
        "Architecture of the OS",
    )
    default_format = "{3} {12}"

    def _release_files(self) -> List[str]:
        if self.config.os_file:
            return [self.config.os_file]
        return list(OS_RELEASE_FILES)

    def detect(self) -> OSResult:
        uname = platform.uname()
        result = OSResult(sys_name=uname.system, architecture=uname.machine)

        if uname.system == "Linux":
            for path in self._release_files():
                try:
                    values = parse_os_release(Path(path).read_text(encoding="utf-8"))
                except OSError:
                    continue
                logger.debug(f"Read os-release data from {path}")
                result.name = values.get("NAME", values.get("DISTRIB_ID", ""))
                result.pretty_name = values.get("PRETTY_NAME", values.get("DISTRIB_DESCRIPTION", ""))
                result.id = values.get("ID", "")
                result.id_like = values.get("ID_LIKE", "")
                result.variant = values.get("VARIANT", "")
                result.variant_id = values.get("VARIANT_ID", "")
                result.version = values.get("VERSION", values.get("DISTRIB_RELEASE", ""))
                result.version_id = values.get("VERSION_ID", "")
                result.codename = values.get("VERSION_CODENAME", values.get("DISTRIB_CODENAME", ""))
                result.build_id = values.get("BUILD_ID", "")
                break
        elif uname.system == "Darwin":
            release = platform.mac_ver()[0]
            result.name = "macOS"
            result.id = "macos"
            result.version = result.version_id = release
        elif uname.system == "Windows":
            result.name = "Windows"
            result.id = "windows"
            result.version = uname.release
            result.version_id = uname.version

        if not result.name:
            result.name = uname.system
        if not result.pretty_name:
            result.pretty_name = f"{result.name} {result.version}".strip()
        if not result.pretty_name:
            raise DetectionError("could not determine the operating system")
        return result

    def format_values(self, result: OSResult) -> List[FormatArg]:
        return [
            result.sys_name,
            result.name,
            result.pretty_name,
            result.id,
            result.id_like,
            result.variant,
            result.variant_id,
            result.version,
            result.version_id,
            result.codename,
            result.build_id,
            result.architecture,
        ]


# Kernel


class KernelResult(BaseModel):
    sys_name: str
    release: str
    version: str


class KernelModule(BaseModule):
    name = "Kernel"
    option_name = "kernel"
    tokens = ("kernel",)
    description = "Kernel name and release"
    format_args = ("Sysname", "Release", "Version")
    default_format = "{2}"

    def detect(self) -> KernelResult:
        uname = platform.uname()
        if not uname.release:
            raise DetectionError("uname returned no kernel release")
        return KernelResult(sys_name=uname.system, release=uname.release, version=uname.version)

    def format_values(self, result: KernelResult) -> List[FormatArg]:
        return [result.sys_name, result.release, result.version]


# DMI backed modules


def read_dmi(field: str, dmi_dirs=DMI_DIRS) -> str:
    """One DMI value, or "" when missing, unreadable or a vendor placeholder."""
    for directory in dmi_dirs:
        try:
            value = (Path(directory) / field).read_text(encoding="utf-8", errors="replace").strip()
        except OSError:
            continue
        if value.lower() in DMI_PLACEHOLDERS:
            return ""
        return value
    return ""


class HostResult(BaseModel):
    family: str = ""
    name: str = ""
    version: str = ""
    sku: str = ""
    vendor: str = ""


class HostModule(BaseModule):
    name = "Host"
    option_name = "host"
    tokens = ("host",)
    description = "Product name of the machine"
    format_args = ("Product family", "Product name", "Product version", "Product sku", "Product vendor")
    default_format = "{2}{?3}[ ({3})]{?}"

    def detect(self) -> HostResult:
        if platform.system() == "Darwin":
            model = self.context.runner.run_command(["sysctl", "-n", "hw.model"]).first_line()
            if model:
                return HostResult(name=model, vendor="Apple")
            raise DetectionError("sysctl hw.model returned nothing")

        result = HostResult(
            family=read_dmi("product_family"),
            name=read_dmi("product_name"),
            version=read_dmi("product_version"),
            sku=read_dmi("product_sku"),
            vendor=read_dmi("sys_vendor"),
        )
        if not result.name:
            result.name = result.family
        if not result.name:
            raise DetectionError("neither product_family nor product_name is set by the firmware")
        return result

    def format_values(self, result: HostResult) -> List[FormatArg]:
        return [result.family, result.name, result.version, result.sku, result.vendor]


class BiosResult(BaseModel):
    date: str = ""
    release: str = ""
    vendor: str = ""
    version: str = ""


class BiosModule(BaseModule):
    name = "Bios"
    option_name = "bios"
    tokens = ("bios",)
    description = "Firmware vendor and version"
    format_args = ("Bios date", "Bios release", "Bios vendor", "Bios version")
    default_format = "{3} {4}{?1}[ ({1})]{?}"

    def detect(self) -> BiosResult:
        result = BiosResult(
            date=read_dmi("bios_date"),
            release=read_dmi("bios_release"),
            vendor=read_dmi("bios_vendor"),
            version=read_dmi("bios_version"),
        )
        if not (result.vendor or result.version):
            raise DetectionError("bios_vendor and bios_version are not available")
        return result

    def format_values(self, result: BiosResult) -> List[FormatArg]:
        return [result.date, result.release, result.vendor, result.version]


class BoardResult(BaseModel):
    name: str = ""
    vendor: str = ""
    version: str = ""


class BoardModule(BaseModule):
    name = "Board"
    option_name = "board"
    tokens = ("board",)
    description = "Mainboard vendor and name"
    format_args = ("Board name", "Board vendor", "Board version")
    default_format = "{2} {1}"

    def detect(self) -> BoardResult:
        result = BoardResult(
            name=read_dmi("board_name"),
            vendor=read_dmi("board_vendor"),
            version=read_dmi("board_version"),
        )
        if not result.name:
            raise DetectionError("board_name is not available")
        return result

    def format_values(self, result: BoardResult) -> List[FormatArg]:
        return [result.name, result.vendor, result.version]


class ChassisResult(BaseModel):
    type: str = ""
    vendor: str = ""
    version: str = ""


class ChassisModule(BaseModule):
    name = "Chassis"
    option_name = "chassis"
    tokens = ("chassis",)
    description = "Chassis type"
    format_args = ("Chassis type", "Chassis vendor", "Chassis version")
    default_format = "{1}"

    def detect(self) -> ChassisResult:
        raw_type = read_dmi("chassis_type")
        result = ChassisResult(
            type=CHASSIS_TYPES.get(raw_type, raw_type),
            vendor=read_dmi("chassis_vendor"),
            version=read_dmi("chassis_version"),
        )
        if not result.type:
            raise DetectionError("chassis_type is not available")
        return result

    def format_values(self, result: ChassisResult) -> List[FormatArg]:
        return [result.type, result.vendor, result.version]


# Uptime


class UptimeResult(BaseModel):
    days: int
    hours: int
    minutes: int
    seconds: int


def split_uptime(total_seconds: float) -> UptimeResult:
    delta = relativedelta(seconds=int(total_seconds))
    return UptimeResult(
        days=delta.days, hours=delta.hours, minutes=delta.minutes, seconds=delta.seconds
    )


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


class UptimeModule(BaseModule):
    name = "Uptime"
    option_name = "uptime"
    tokens = ("uptime",)
    description = "Time since boot"
    format_args = ("Days", "Hours", "Minutes", "Seconds")

    def detect(self) -> UptimeResult:
        return split_uptime(time.time() - psutil.boot_time())

    def format_values(self, result: UptimeResult) -> List[FormatArg]:
        return [result.days, result.hours, result.minutes, result.seconds]

    def default_output(self, result: UptimeResult) -> str:
        parts = []
        if result.days:
            parts.append(_plural(result.days, "day"))
        if result.hours:
            parts.append(_plural(result.hours, "hour"))
        if result.minutes:
            parts.append(_plural(result.minutes, "min"))
        if not parts:
            parts.append(_plural(result.seconds, "sec"))
        return ", ".join(parts)


# Processes, users, locale


class ProcessesModule(BaseModule):
    name = "Processes"
    option_name = "processes"
    tokens = ("processes",)
    description = "Number of running processes"
    format_args = ("Count",)
    default_format = "{1}"

    def detect(self) -> int:
        return len(psutil.pids())

    def format_values(self, result: int) -> List[FormatArg]:
        return [result]


class UsersResult(BaseModel):
    names: List[str]


class UsersModule(BaseModule):
    name = "Users"
    option_name = "users"
    tokens = ("users",)
    description = "Users currently logged in"
    format_args = ("User names", "Number of sessions")
    default_format = "{1}"
    empty_message = "no users are logged in"

    def detect(self) -> UsersResult:
        sessions = psutil.users()
        if not sessions:
            raise DetectionError(self.empty_message)
        names: List[str] = []
        for session in sessions:
            if session.name not in names:
                names.append(session.name)
        return UsersResult(names=names)

    def format_values(self, result: UsersResult) -> List[FormatArg]:
        return [", ".join(result.names), len(result.names)]


class LocaleModule(BaseModule):
    name = "Locale"
    option_name = "locale"
    tokens = ("locale",)
    description = "Locale of the current session"
    format_args = ("Locale code",)
    default_format = "{1}"

    def detect(self) -> str:
        for variable in ("LC_ALL", "LANG", "LC_CTYPE", "LC_MESSAGES"):
            value = os.environ.get(variable)
            if value:
                return value
        language, encoding = locale.getlocale()
        if language:
            return f"{language}.{encoding}" if encoding else language
        raise DetectionError("no locale is set")

    def format_values(self, result: str) -> List[FormatArg]:
        return [result]


# Date and time


class DateTimeModule(BaseModule):
    """Current local date and time. Date and Time share its detector."""

    name = "Date & Time"
    option_name = "datetime"
    tokens = ("datetime",)
    description = "Current date and time"
    format_args = (
        "year",
        "last two digits of year",
        "month",
        "month with leading zero",
        "month name",
        "month name short",
        "week number on year",
        "weekday",
        "weekday short",
        "day in year",
        "day in month with leading zero",
        "day in month",
        "day in week",
        "hour",
        "hour with leading zero",
        "hour 12h format",
        "hour 12h format with leading zero",
        "minute",
        "minute with leading zero",
        "second",
        "second with leading zero",
    )
    default_format = "{1}-{4}-{11} {15}:{19}:{21}"

    @property
    def cache_key(self) -> str:
        return "datetime"

    def detect(self) -> datetime:
        return datetime.now()

    def format_values(self, result: datetime) -> List[FormatArg]:
        hour12 = result.hour % 12 or 12
        return [
            result.year,
            result.strftime("%y"),
            result.month,
            result.strftime("%m"),
            result.strftime("%B"),
            result.strftime("%b"),
            result.isocalendar()[1],
            result.strftime("%A"),
            result.strftime("%a"),
            result.timetuple().tm_yday,
            result.strftime("%d"),
            result.day,
            result.isoweekday(),
            result.hour,
            result.strftime("%H"),
            hour12,
            f"{hour12:02d}",
            result.minute,
            result.strftime("%M"),
            result.second,
            result.strftime("%S"),
        ]


class DateModule(DateTimeModule):
    name = "Date"
    option_name = "date"
    tokens = ("date",)
    description = "Current date"
    default_format = "{1}-{4}-{11}"


class TimeModule(DateTimeModule):
    name = "Time"
    option_name = "time"
    tokens = ("time",)
    description = "Current time"
    default_format = "{15}:{19}:{21}"
