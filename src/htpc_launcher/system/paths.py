"""Home directory expansion for launch commands and image paths."""

import os


def expand_tilde(path: str) -> str:
    """Expand a leading ``~`` or ``~user`` to the home directory.

    Anything else in the string is left untouched, so commands with
    arguments keep their shape.
    """
    return os.path.expanduser(path)
