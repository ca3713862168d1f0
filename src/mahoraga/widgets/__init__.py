"""Widget package for the Mahoraga terminal UI."""

from .banner import Banner
from .command_bar import CommandBar
from .feedback import ResultPanel
from .notice import ConfigRequiredNotice
from .prompt_input import CommandPalette, PromptField, PromptInput
from .spinner import AnalyzingIndicator

__all__ = [
    "AnalyzingIndicator",
    "Banner",
    "CommandBar",
    "CommandPalette",
    "ConfigRequiredNotice",
    "PromptField",
    "PromptInput",
    "ResultPanel",
]
