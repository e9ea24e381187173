"""Version information for hostfetch."""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)

# Release information
__author__ = "hostfetch Team"
__author_email__ = "team@hostfetch.dev"
__license__ = "MIT"
__url__ = "https://github.com/hostfetch/hostfetch"
__description__ = "Configurable system information display tool"
