"""
Format string engine for module rows.

Placeholders:

    {N}          text of the Nth argument (1-based), empty when out of range
    {}           text of the next argument, counting from 1
    {?N}...{?}   the enclosed text, only when argument N is present;
                 one surrounding [...] pair is removed from the enclosed text

Blocks do not nest. Rendering is pure: same template and arguments, same output.
"""

import re
from typing import List, Optional, Sequence, Union

FormatArg = Union[str, int, float, bool, None]

_PLACEHOLDER = re.compile(r"\{(\?)?(\d*)\}")
_BLOCK_END = "{?}"


def is_present(arg: FormatArg) -> bool:
    """Non-empty string, non-zero number or true boolean."""
    if arg is None:
        return False
    if isinstance(arg, bool):
        return arg
    if isinstance(arg, (int, float)):
        return arg != 0
    return len(str(arg)) > 0


def format_arg(arg: FormatArg) -> str:
    """Textual form of a single argument."""
    if arg is None:
        return ""
    if isinstance(arg, bool):
        return "true" if arg else "false"
    if isinstance(arg, float):
        text = f"{arg:.2f}".rstrip("0").rstrip(".")
        return text or "0"
    return str(arg)


class _Renderer:
    def __init__(self, args: Sequence[FormatArg]):
        self.args = list(args)
        self.next_index = 1

    def arg_text(self, index: Optional[int]) -> str:
        if index is None:
            index = self.next_index
            self.next_index += 1
        if index < 1 or index > len(self.args):
            return ""
        return format_arg(self.args[index - 1])

    def render(self, template: str, allow_blocks: bool = True) -> str:
        out: List[str] = []
        pos = 0
        while True:
            match = _PLACEHOLDER.search(template, pos)
            if match is None:
                out.append(template[pos:])
                break

            out.append(template[pos:match.start()])
            conditional, digits = match.group(1), match.group(2)
            pos = match.end()

            if not conditional:
                out.append(self.arg_text(int(digits) if digits else None))
                continue

            # A stray {?} closes nothing and renders as nothing
            if not digits:
                continue

            if not allow_blocks:
                out.append(match.group(0))
                continue

            end = template.find(_BLOCK_END, pos)
            if end < 0:
                end = len(template)
            block = template[pos:end]
            pos = min(end + len(_BLOCK_END), len(template))

            index = int(digits)
            if 1 <= index <= len(self.args) and is_present(self.args[index - 1]):
                if len(block) >= 2 and block.startswith("[") and block.endswith("]"):
                    block = block[1:-1]
                out.append(self.render(block, allow_blocks=False))

        return "".join(out)


def render_format(template: str, args: Sequence[FormatArg]) -> str:
    """Render ``template`` against the positional ``args``."""
    return _Renderer(args).render(template)
