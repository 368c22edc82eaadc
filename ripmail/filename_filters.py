"""Make attachment filenames safe to write to disk."""

from __future__ import annotations

from dataclasses import dataclass


def _strip_directories(name: str, separator: str) -> str:
    position = name.rfind(separator)
    if position == -1:
        return name
    if position == len(name) - 1:
        return name[:position]
    return name[position + 1 :]


@dataclass
class FilenameFilter:
    """Filename cleaner.

    ``mac`` converts Mac ``/`` separators to hyphens before filtering;
    ``paranoid`` replaces everything except ASCII letters, digits and dots.
    """

    paranoid: bool = False
    mac: bool = False

    def paranoid_filter(self, name: str) -> str:
        """Remove directory parts and, if paranoid, non-alphanumerics."""
        if name == ".":
            return "_"
        if name == "..":
            return "__"

        if "/" in name:
            name = _strip_directories(name, "/")
        elif "\\" in name:
            name = _strip_directories(name, "\\")

        if self.paranoid:
            name = "".join(
                char if char == "." or (char.isascii() and char.isalnum()) else "_"
                for char in name
            )
        return name

    def filter(self, name: str) -> str:
        """Return a cleaned version of the filename ``name``."""
        if self.mac:
            name = name.replace("/", "-")

        if len(name) > 2 and name[0] == '"' and name[-1] == '"':
            name = name[1:-1]

        slash = name.rfind("/")
        if slash != -1:
            name = name[slash + 1 :]
        else:
            backslash = name.rfind("\\")
            if backslash != -1 and name[backslash + 1 : backslash + 2] != '"':
                name = name[backslash + 1 :]

        question = name.find("?")
        if question == 0:
            name = "-" + name[1:]
        elif question > 0 and name[question - 1] != "=":
            name = name[:question]

        return self.paranoid_filter(name)