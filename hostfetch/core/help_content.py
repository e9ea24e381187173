"""
Static texts for `hostfetch --help [topic]` and the `--print-*` commands.
"""

DEFAULT_STRUCTURE = (
    "Title:Separator:OS:Host:Kernel:Uptime:Packages:Shell:DE:Terminal:"
    "CPU:Memory:Swap:Disk:LocalIp:Locale:Break:Colors"
)

HELP = """\
Usage: hostfetch <options>

Informative options:
  -h,  --help <command>:          Show this message, or help for a specific command
  -v,  --version:                 Show the full version of hostfetch
       --version-raw:             Show the raw version string (major.minor.patch)
       --list-config-paths:       List search paths of config files
       --list-data-paths:         List search paths of presets and logos
       --list-logos:              List available logos
       --list-modules:            List available modules
       --list-presets:            List presets hostfetch knows about
       --list-features:           List the features hostfetch was built with
       --print-config-system:     Print the default system config
       --print-config-user:       Print the default user config
       --print-structure:         Print the default structure

General options:
       --load-config <file>:      Load a config file or preset
       --load-user-config <?bool>: Load the user config files. Default is true
       --gen-config:              Generate a config file in the user config directory
       --gen-config-force:        Generate a config file, overwriting an existing one
       --thread <?bool>:          Use separate threads for slow network probes
       --stat <?bool>:            Show the time each module took to run
       --allow-slow-operations <?bool>: Allow operations that are usually very slow
       --pipe <?bool>:            Disable colors and cursor movement. Default is true if stdout is not a terminal
       --log-level <level>:       Log level on stderr: debug, info, warning or error
       --log-file <path>:         Also write logs to the given file

Logo options:
  -l,  --logo <logo>:             Set the logo source. Use "none" to disable the logo
       --logo-type <type>:        auto, builtin, file, file-raw, data, data-raw, sixel, kitty, iterm, chafa, raw or none
       --logo-width <num>:        Width of the logo in characters
       --logo-height <num>:       Height of the logo in characters
       --logo-color-[1-9] <color>: Override a color of the logo
       --logo-padding <num>:      Set the padding on the left and the right of the logo
       --logo-padding-left <num>: Set the padding on the left of the logo
       --logo-padding-right <num>: Set the padding on the right of the logo
       --logo-padding-top <num>:  Set the padding on the top of the logo
       --logo-print-remaining <?bool>: Print the remaining logo, if it has more lines than modules
       --logo-preserve-aspect-ratio <?bool>: Preserve the aspect ratio of image logos
       --file, --file-raw, --data, --data-raw, --sixel, --kitty, --chafa, --iterm, --raw <source>:
                                  Shortcuts that set the logo source and type at once

Display options:
  -s,  --structure <structure>:   Set the structure of the fetch. Default: run with --print-structure
  -c,  --color <color>:           Set the color of the keys and the title
       --color-keys <color>:      Set the color of the keys
       --color-title <color>:     Set the color of the title
       --separator <str>:         Set the separator between key and value. Default is ": "
       --set <key=value>:         Hard set the value of a key
       --set-keyless <key=value>: Hard set the value of a key, but don't print the key
       --show-errors <?bool>:     Print errors when they occur. Default is true
       --disable-linewrap <?bool>: Disable line wrap during the run
       --hide-cursor <?bool>:     Hide the cursor during the run
       --binary-prefix <prefix>:  Binary prefix for sizes: iec, si or jedec

Format options (for every module <module>):
       --<module>-key <str>:      Override the key of the module
       --<module>-format <format>: Provide a format string for the output of the module
       --<module>-error <format>: Provide a format string for errors of the module

Library options:
       --lib-<name> <path>:       Set the path of a library used by a probe

Module specific options:
       --title-fqdn <?bool>:      Show the fully qualified domain name in the title
       --separator-string <str>:  The string printed by the separator line. Default is "-"
       --cpu-temp <?bool>:        Detect and display the CPU temperature
       --gpu-temp <?bool>:        Detect and display the GPU temperature
       --battery-temp <?bool>:    Detect and display the battery temperature
       --gpu-hide-integrated <?bool>: Hide integrated GPUs
       --gpu-hide-discrete <?bool>: Hide discrete GPUs
       --shell-version <?bool>:   Show the shell version
       --terminal-version <?bool>: Show the terminal version
       --disk-folders <folders>:  Colon separated mount points to show in the disk module
       --disk-show-removable <?bool>: Show removable volumes. Default is true
       --disk-show-hidden <?bool>: Show hidden volumes
       --disk-show-subvolumes <?bool>: Show subvolumes
       --disk-show-unknown <?bool>: Show volumes of unknown type
       --bluetooth-show-disconnected <?bool>: Show disconnected bluetooth devices
       --sound-type <type>:       main, active or all
       --battery-dir <path>:      The directory the battery is read from
       --localip-v6first <?bool>: Show IPv6 addresses before IPv4 addresses
       --localip-show-ipv4 <?bool>: Show IPv4 addresses. Default is true
       --localip-show-ipv6 <?bool>: Show IPv6 addresses
       --localip-show-loop <?bool>: Show loopback addresses
       --localip-name-prefix <str>: Only show interfaces whose name starts with the prefix
       --localip-compact-type <type>: none, oneline or multiline
       --os-file <path>:          Path to the os-release file
       --player-name <str>:       The name of the media player to use
       --public-ip-url <url>:     The URL used to look up the public IP address
       --public-ip-timeout <num>: Time in ms to wait for the public IP lookup. 0 means no timeout
       --weather-output-format <str>: Output format of the weather lookup (wttr.in syntax)
       --weather-timeout <num>:   Time in ms to wait for the weather lookup. 0 means no timeout
       --gl <value>:              auto, egl, glx or osmesa
       --percent-type <num>:      1 = number, 2 = bar, 3 = both
       --command-shell <str>:     The shell used to run --command-text. Default is /bin/sh
       --command-key <str>:       The key of a command row. Can be given multiple times
       --command-text <str>:      The command a command row runs. Can be given multiple times

Parsing is not case sensitive. E.g. `--lib-PCI` is equal to `--Lib-Pci`.
On the command line, only --separator-string accepts a value starting with -.
All options can be written in a config file, with or without the leading `--`.
Run `hostfetch --help format` for a description of the format string syntax.
"""

HELP_COLOR = """\
--color <color>:
Colors are given as a sequence of color names, optionally mixed with
raw SGR codes separated by ';'. The following names are recognized:

  reset_    reset all attributes before the color
  bright_   make the color bright
  black, red, green, yellow, blue, magenta, cyan, white

Examples:
  --color red
  --color bright_cyan
  --color-keys "reset_4;bright_yellow"
"""

HELP_FORMAT = """\
A format string is a string that contains placeholders for values.
Placeholders are written as {N}, where N is the 1-based index of a value.
{} is replaced by the next value, counting from 1.
An index that does not refer to a value is replaced by nothing.

Conditional blocks are written as {?N}[content]{?}.
The content is printed only if value N is set: a non-empty string,
a non-zero number or true. Otherwise the whole block is left out.
Conditional blocks cannot be nested.

Example:
  --cpu-format "{1}{?5}[ ({5})]{?}"

Run `hostfetch --help <module>-format` to see the values a module passes.
"""

HELP_CONFIG = """\
--load-config <file>:
Loads a config file or preset. The value is first tried as a path.
If no such file exists, every data directory is searched for
presets/<file>, in the order shown by `hostfetch --list-data-paths`.
The first match is loaded. A config file may load other config files.

Config files contain one option per line. The key is separated from
the value by whitespace; quote the value to keep leading or trailing
whitespace. Lines starting with # are comments. The leading -- of a
key is optional.

User config files are read from <config dir>/hostfetch/config.conf for
every directory listed by `hostfetch --list-config-paths`, least specific
first, so the most specific file wins. Command line arguments are parsed
afterwards and always win. Set NO_CONFIG to skip all config files.
"""

CONFIG_USER = """\
# hostfetch user config
# Every line is an option of the command line, without the leading --.
# Run `hostfetch --help` for the full list.

# Modules to print, in order:
# structure Title:Separator:OS:Host:Kernel:Uptime:Packages:Shell:CPU:Memory:Disk:Break:Colors

# Colors of keys and title:
# color-keys bright_blue
# color-title bright_green

# Separator between key and value:
# separator ": "

# Custom rows:
# set Motto=Stay curious
# set-keyless Banner=hello

# Per-module format strings:
# cpu-format "{1}{?5}[ ({5})]{?}"
# memory-key RAM

# Show how long each module took:
# stat false
"""

CONFIG_SYSTEM = """\
# hostfetch system config
# Installed to /etc/xdg/hostfetch/config.conf by distributions.
# Values here are overridden by user configs and command line arguments.

# logo-type auto
# multithreading true
# show-errors true
# binary-prefix iec
"""
