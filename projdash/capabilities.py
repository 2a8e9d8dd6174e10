"""Optional external collaborators detected once per session.

The renderer and host query this value instead of probing ``PATH`` on their
own, so tests can hand in any combination.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass

VCS_COMMAND = "git"
VCS_UI_COMMAND = "lazygit"
FAST_SEARCH_COMMAND = "rg"
FUZZY_FINDER_COMMAND = "fzf"


@dataclass(frozen=True)
class Capabilities:
    has_vcs: bool = False
    has_vcs_ui: bool = False
    has_fast_search: bool = False
    has_fuzzy_finder: bool = False
    has_icon_provider: bool = False


def detect_capabilities(
    *,
    icons: bool = True,
    no_color: bool = False,
    which: Callable[[str], str | None] = shutil.which,
) -> Capabilities:
    """Probe ``PATH`` for the optional programs the dashboard can use.

    File-type tags are only drawn when color output is on and the user has
    not switched icons off.
    """
    return Capabilities(
        has_vcs=which(VCS_COMMAND) is not None,
        has_vcs_ui=which(VCS_UI_COMMAND) is not None,
        has_fast_search=which(FAST_SEARCH_COMMAND) is not None,
        has_fuzzy_finder=which(FUZZY_FINDER_COMMAND) is not None,
        has_icon_provider=bool(icons) and not no_color,
    )
