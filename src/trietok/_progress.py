"""Progress bars for long-running merge loops."""

import os

from tqdm import tqdm

_enabled: bool = True


def enable_progress() -> None:
    """Enable progress bars for all trietok operations."""
    global _enabled
    _enabled = True


def disable_progress() -> None:
    """Disable progress bars for all trietok operations."""
    global _enabled
    _enabled = False


def _is_enabled() -> bool:
    """Check the module switch; TRIETOK_DISABLE_PROGRESS=1 wins over it."""
    if os.environ.get("TRIETOK_DISABLE_PROGRESS", "").strip() == "1":
        return False
    return _enabled


def merge_progress(n_merges: int, show_progress: bool = True) -> tqdm:
    """Return a bar counting learned merges, silent when progress is off."""
    return tqdm(
        total=n_merges,
        desc="merging",
        unit="merge",
        leave=False,
        disable=not (show_progress and _is_enabled()),
    )
