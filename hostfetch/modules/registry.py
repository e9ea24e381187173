"""
Module registry: structure tokens and option names to module classes.
"""

from typing import Dict, List, Optional, Type

import psutil

from hostfetch.modules import desktop, environment, hardware, misc, network, packages, system
from hostfetch.modules.base import BaseModule, UnsupportedModule

# Order of --list-modules
MODULE_CLASSES: List[Type[BaseModule]] = [
    system.OSModule,
    system.HostModule,
    system.BiosModule,
    system.BoardModule,
    system.ChassisModule,
    system.KernelModule,
    system.UptimeModule,
    system.ProcessesModule,
    packages.PackagesModule,
    environment.ShellModule,
    desktop.DisplayModule,
    desktop.BrightnessModule,
    environment.DEModule,
    desktop.WifiModule,
    desktop.WMModule,
    desktop.WMThemeModule,
    desktop.ThemeModule,
    desktop.IconsModule,
    desktop.FontModule,
    desktop.CursorModule,
    environment.TerminalModule,
    desktop.TerminalFontModule,
    hardware.CPUModule,
    hardware.CPUUsageModule,
    desktop.GPUModule,
    hardware.MemoryModule,
    hardware.SwapModule,
    hardware.DiskModule,
    hardware.BatteryModule,
    desktop.PowerAdapterModule,
    system.LocaleModule,
    network.LocalIpModule,
    network.PublicIpModule,
    network.WeatherModule,
    desktop.PlayerModule,
    desktop.MediaModule,
    system.DateTimeModule,
    system.DateModule,
    system.TimeModule,
    desktop.VulkanModule,
    desktop.OpenGLModule,
    desktop.OpenCLModule,
    system.UsersModule,
    desktop.BluetoothModule,
    desktop.SoundModule,
    desktop.GamepadModule,
    environment.EditorModule,
    misc.ColorsModule,
    misc.CommandModule,
]


class ModuleRegistry:
    """Look up module classes and build instances bound to a run's context."""

    def __init__(self, classes: Optional[List[Type[BaseModule]]] = None):
        self._classes = list(MODULE_CLASSES if classes is None else classes)
        self._by_token: Dict[str, Type[BaseModule]] = {}
        self._by_option: Dict[str, Type[BaseModule]] = {}
        for cls in self._classes:
            for token in cls.tokens:
                self._by_token[token] = cls
            if cls.option_name:
                self._by_option[cls.option_name] = cls

    def modules(self) -> List[Type[BaseModule]]:
        return list(self._classes)

    def get_by_token(self, token: str) -> Optional[Type[BaseModule]]:
        """Case-insensitive structure token lookup."""
        return self._by_token.get(token.lower())

    def get_by_option(self, option_name: str) -> Optional[Type[BaseModule]]:
        return self._by_option.get(option_name.lower())

    def option_names(self) -> List[str]:
        return list(self._by_option)

    def features(self) -> List[str]:
        """What this build can probe, for --list-features."""
        features = [f"psutil {psutil.__version__}", "urllib (public-ip, weather)", "threads"]
        for cls in self._classes:
            if not issubclass(cls, UnsupportedModule):
                features.append(f"module: {cls.name}")
        return features


__all__ = ["MODULE_CLASSES", "ModuleRegistry"]
