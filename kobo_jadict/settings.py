"""
Build options for kobo-jadict.
"""

from dataclasses import dataclass

from kobo_jadict.characters import Script
from kobo_jadict.constants import LabelStyle


@dataclass(frozen=True)
class BuildOptions:
    """
    Presentation settings chosen by the caller.

    Attributes:
        display_script: Script used for the reading shown in entry headers
        label_style: Wording for verb transitivity labels
    """
    display_script: Script = Script.HIRAGANA
    label_style: LabelStyle = LabelStyle.GRAMMATICAL

    @classmethod
    def from_flags(cls, use_katakana: bool = False, use_move_terms: bool = False) -> "BuildOptions":
        """Build options from the two command-line switches."""
        return cls(
            display_script=Script.KATAKANA if use_katakana else Script.HIRAGANA,
            label_style=LabelStyle.MOVEMENT if use_move_terms else LabelStyle.GRAMMATICAL,
        )
