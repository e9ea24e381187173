"""
Desktop, graphics and peripheral modules.

These need display server, GPU or desktop bus access that has no portable
probe here. They are registered so their options parse and their tokens
resolve, and they print "not supported on this platform" as an error row.
"""

from hostfetch.modules.base import UnsupportedModule


class DisplayModule(UnsupportedModule):
    name = "Display"
    option_name = "display"
    tokens = ("display",)
    description = "Resolution and refresh rate of connected displays"
    format_args = ("Screen width", "Screen height", "Refresh rate")


class BrightnessModule(UnsupportedModule):
    name = "Brightness"
    option_name = "brightness"
    tokens = ("brightness",)
    description = "Screen brightness"
    format_args = ("Screen name", "Brightness")


class WifiModule(UnsupportedModule):
    name = "Wifi"
    option_name = "wifi"
    tokens = ("wifi",)
    description = "Connected Wi-Fi network"
    format_args = ("Interface name", "SSID", "Protocol", "Signal quality")


class WMModule(UnsupportedModule):
    name = "WM"
    option_name = "wm"
    tokens = ("wm", "windowmanager")
    description = "Window manager"
    format_args = ("WM process name", "WM pretty name", "WM protocol name")


class WMThemeModule(UnsupportedModule):
    name = "WM Theme"
    option_name = "wm-theme"
    tokens = ("wmtheme",)
    description = "Window manager theme"
    format_args = ("WM theme",)


class ThemeModule(UnsupportedModule):
    name = "Theme"
    option_name = "theme"
    tokens = ("theme",)
    description = "GTK and Qt theme"
    format_args = ("Plasma theme", "Plasma color scheme", "GTK2 theme", "GTK3 theme", "GTK4 theme")


class IconsModule(UnsupportedModule):
    name = "Icons"
    option_name = "icons"
    tokens = ("icons",)
    description = "Icon theme"
    format_args = ("Plasma icons", "GTK2 icons", "GTK3 icons", "GTK4 icons")


class FontModule(UnsupportedModule):
    name = "Font"
    option_name = "font"
    tokens = ("font",)
    description = "System font"
    format_args = ("Plasma font", "GTK2 font", "GTK3 font", "GTK4 font")


class CursorModule(UnsupportedModule):
    name = "Cursor"
    option_name = "cursor"
    tokens = ("cursor",)
    description = "Cursor theme and size"
    format_args = ("Cursor theme", "Cursor size")


class TerminalFontModule(UnsupportedModule):
    name = "Terminal Font"
    option_name = "terminal-font"
    tokens = ("terminalfont",)
    description = "Font of the terminal emulator"
    format_args = ("Terminal font", "Terminal font name", "Terminal font size", "Terminal font styles")


class GPUModule(UnsupportedModule):
    name = "GPU"
    option_name = "gpu"
    tokens = ("gpu",)
    description = "Graphics processors"
    format_args = ("GPU vendor", "GPU name", "GPU driver", "GPU temperature")


class PowerAdapterModule(UnsupportedModule):
    name = "Power Adapter"
    option_name = "poweradapter"
    tokens = ("poweradapter",)
    description = "Connected power adapter"
    format_args = ("Power adapter watts", "Power adapter name", "Power adapter manufacturer")


class PlayerModule(UnsupportedModule):
    name = "Media Player"
    option_name = "player"
    tokens = ("player",)
    description = "Active media player"
    format_args = ("Pretty player name", "Player name", "Player identifier", "URL name")


class MediaModule(UnsupportedModule):
    name = "Media"
    option_name = "media"
    tokens = ("media", "song")
    description = "Currently playing song"
    format_args = ("Pretty media name", "Media name", "Artist name", "Album name")


class VulkanModule(UnsupportedModule):
    name = "Vulkan"
    option_name = "vulkan"
    tokens = ("vulkan",)
    description = "Vulkan driver and API version"
    format_args = ("Driver", "API version", "Conformance version")


class OpenGLModule(UnsupportedModule):
    name = "OpenGL"
    option_name = "opengl"
    tokens = ("opengl",)
    description = "OpenGL version and renderer"
    format_args = ("Version", "Renderer", "Vendor", "Shading language version")


class OpenCLModule(UnsupportedModule):
    name = "OpenCL"
    option_name = "opencl"
    tokens = ("opencl",)
    description = "OpenCL version and device"
    format_args = ("Version", "Device", "Vendor")


class BluetoothModule(UnsupportedModule):
    name = "Bluetooth"
    option_name = "bluetooth"
    tokens = ("bluetooth",)
    description = "Connected bluetooth devices"
    format_args = ("Name", "Address", "Type", "Battery percentage")


class SoundModule(UnsupportedModule):
    name = "Sound"
    option_name = "sound"
    tokens = ("sound",)
    description = "Audio output devices"
    format_args = ("Main", "Name", "Volume", "Identifier")


class GamepadModule(UnsupportedModule):
    name = "Gamepad"
    option_name = "gamepad"
    tokens = ("gamepad",)
    description = "Connected gamepads"
    format_args = ("Name", "Identifier")
