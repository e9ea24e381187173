"""
Network probes: local interface addresses, public IP and weather.

PublicIp and Weather ask remote services and are marked slow, so the
pre-warm executor starts them before the structure runs.
"""

import socket
import urllib.error
import urllib.request
from typing import List, Optional

import psutil
from loguru import logger
from pydantic import BaseModel

from hostfetch.__version__ import __version__
from hostfetch.core.config import LocalIpCompactType
from hostfetch.core.errors import DetectionError
from hostfetch.core.format import FormatArg, render_format
from hostfetch.modules.base import BaseModule

DEFAULT_PUBLIC_IP_URL = "https://ipinfo.io/ip"
WEATHER_URL = "https://wttr.in/?format="
USER_AGENT = f"hostfetch/{__version__}"


def http_get(url: str, timeout_ms: int) -> str:
    """
    Fetch a URL and return the decoded body.

    Args:
        url: Address to fetch
        timeout_ms: Timeout in milliseconds, 0 means no timeout

    Raises:
        DetectionError: on any network or HTTP failure
    """
    timeout: Optional[float] = timeout_ms / 1000 if timeout_ms else None
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    logger.debug(f"GET {url} (timeout: {timeout}s)")
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            return response.read().decode("utf-8", errors="replace").strip()
    except urllib.error.HTTPError as e:
        raise DetectionError(f"{url} returned HTTP {e.code}") from e
    except urllib.error.URLError as e:
        raise DetectionError(f"failed to reach {url}: {e.reason}") from e
    except (socket.timeout, TimeoutError) as e:
        raise DetectionError(f"timed out waiting for {url}") from e
    except OSError as e:
        raise DetectionError(f"failed to fetch {url}: {e}") from e


# Local IP


class LocalIpResult(BaseModel):
    interface: str
    ipv4: str = ""
    ipv6: str = ""


def _is_loopback(name: str, address: str) -> bool:
    return name == "lo" or name.startswith("lo0") or address.startswith("127.") or address == "::1"


class LocalIpModule(BaseModule):
    name = "Local IP"
    option_name = "local-ip"
    tokens = ("localip",)
    description = "IP addresses of local network interfaces"
    format_args = ("Local IPv4 address", "Local IPv6 address", "Interface name")
    empty_message = "failed to detect any IP address"

    def detect(self) -> List[LocalIpResult]:
        config = self.config
        results = []
        for interface, addresses in psutil.net_if_addrs().items():
            if config.localip_name_prefix and not interface.startswith(config.localip_name_prefix):
                continue
            result = LocalIpResult(interface=interface)
            for address in addresses:
                # Scope id suffix of link local addresses, e.g. fe80::1%eth0
                ip = address.address.split("%")[0]
                if not config.localip_show_loop and _is_loopback(interface, ip):
                    continue
                if address.family == socket.AF_INET and config.localip_show_ipv4 and not result.ipv4:
                    result.ipv4 = ip
                elif address.family == socket.AF_INET6 and config.localip_show_ipv6 and not result.ipv6:
                    result.ipv6 = ip
            if result.ipv4 or result.ipv6:
                results.append(result)
        return results

    def _addresses(self, result: LocalIpResult) -> List[str]:
        addresses = [result.ipv4, result.ipv6]
        if self.config.localip_v6first:
            addresses.reverse()
        return [address for address in addresses if address]

    def key_name(self, result: LocalIpResult) -> str:
        if self.config.localip_compact_type == LocalIpCompactType.NONE:
            return f"{self.name} ({result.interface})"
        return self.name

    def format_values(self, result: LocalIpResult) -> List[FormatArg]:
        return [result.ipv4, result.ipv6, result.interface]

    def default_output(self, result: LocalIpResult) -> str:
        addresses = self._addresses(result)
        if self.config.localip_compact_type == LocalIpCompactType.MULTILINE:
            return f"{' '.join(addresses)} ({result.interface})"
        return ", ".join(addresses)

    def print_results(self, results: List[LocalIpResult]) -> None:
        if self.config.localip_compact_type != LocalIpCompactType.ONELINE:
            super().print_results(results)
            return

        # All interfaces share one row; --local-ip-format applies per interface
        args = self.args
        if args.output_format:
            text = " ".join(render_format(args.output_format, self.format_values(result)) for result in results)
        else:
            text = " ".join(
                f"{address} ({result.interface})" for result in results for address in self._addresses(result)
            )
        self.printer.print_row(self.name, 0, args.key, text)

    @property
    def index_rows(self) -> bool:
        return self.config.localip_compact_type == LocalIpCompactType.MULTILINE


# Public IP


class PublicIpModule(BaseModule):
    name = "Public IP"
    option_name = "public-ip"
    tokens = ("publicip",)
    description = "Public IP address, looked up over HTTP"
    format_args = ("Public IP address",)
    default_format = "{1}"
    slow = True

    def detect(self) -> str:
        url = self.config.public_ip_url or DEFAULT_PUBLIC_IP_URL
        address = http_get(url, self.config.public_ip_timeout)
        if not address:
            raise DetectionError(f"{url} returned an empty response")
        return address.splitlines()[0]

    def format_values(self, result: str) -> List[FormatArg]:
        return [result]


class WeatherModule(BaseModule):
    name = "Weather"
    option_name = "weather"
    tokens = ("weather",)
    description = "Current weather, looked up from wttr.in"
    format_args = ("Weather result",)
    default_format = "{1}"
    slow = True

    def detect(self) -> str:
        # wttr.in reads the %-codes of the format literally, so it is not quoted
        weather = http_get(WEATHER_URL + self.config.weather_output_format, self.config.weather_timeout)
        if not weather:
            raise DetectionError("wttr.in returned an empty response")
        return weather

    def format_values(self, result: str) -> List[FormatArg]:
        return [result]
