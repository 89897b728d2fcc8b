# ----------------------------------------------------------------------------------------------- #
#                 $$$$$$\   $$$$$$\ $$$$$$$$\ $$\   $$\ $$\   $$\ $$$$$$\ $$\   $$\               #
#                $$  __$$\ $$  __$$\\__$$  __|$$ |  $$ |$$$\  $$ |\_$$  _|$$ |  $$ |              #
#                $$ /  \__|$$ /  $$ |  $$ |   $$ |  $$ |$$$$\ $$ |  $$ |  \$$\ $$  |              #
#                $$ |$$$$\ $$ |  $$ |  $$ |   $$ |  $$ |$$ $$\$$ |  $$ |   \$$$$  /               #
#                $$ |\_$$ |$$ |  $$ |  $$ |   $$ |  $$ |$$ \$$$$ |  $$ |   $$  $$<                #
#                $$ |  $$ |$$ |  $$ |  $$ |   $$ |  $$ |$$ |\$$$ |  $$ |  $$  /\$$\               #
#                \$$$$$$  | $$$$$$  |  $$ |   \$$$$$$  |$$ | \$$ |$$$$$$\ $$ /  $$ |              #
#                 \______/  \______/   \__|    \______/ \__|  \__|\______|\__|  \__|              #
# ----------------------------------------------------------------------------------------------- #
# Copyright (C) GOTUNIX Networks                                                                  #
# Copyright (C) Justin Ovens                                                                      #
# LICENSE: SPDX - AGPL-3.0-or-later                                                               #
# ----------------------------------------------------------------------------------------------- #
# This program is free software: you can redistribute it and/or modify                            #
# it under the terms of the GNU Affero General Public License as                                  #
# published by the Free Software Foundation, either version 3 of the                              #
# License, or (at your option) any later version.                                                 #
#                                                                                                 #
# This program is distributed in the hope that it will be useful,                                 #
# but WITHOUT ANY WARRANTY; without even the implied warranty of                                  #
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the                                   #
# GNU Affero General Public License for more details.                                             #
#                                                                                                 #
# You should have received a copy of the GNU Affero General Public License                        #
# along with this program.  If not, see <https://www.gnu.org/licenses/>.                          #
# ----------------------------------------------------------------------------------------------- #
"""
Autosign allow-list stored as ``<puppetdir>/autosign.conf``.

One common name per line, no header. The file is always replaced whole:
new content goes to a temporary file in the same directory which is then
renamed over the original, so a crash never leaves a half-written line.
"""

import contextlib
import os
import tempfile
from pathlib import Path
from typing import List

from .errors import MissingResource, NotPresent
from .log import get_logger

logger = get_logger(__name__)


class AutosignStore:
    """Idempotent add/remove/list over the autosign file."""

    def __init__(self, path):
        self.path = Path(path)

    def _read_lines(self) -> List[str]:
        if not self.path.exists():
            return []
        with open(self.path, "r") as f:
            return [line.strip() for line in f if line.strip()]

    def _write_lines(self, lines: List[str]):
        directory = self.path.parent
        if not directory.is_dir():
            raise MissingResource("autosign directory", directory)

        fd, temp_path = tempfile.mkstemp(prefix=".autosign.", dir=str(directory))
        try:
            with os.fdopen(fd, "w") as f:
                f.writelines(f"{line}\n" for line in lines)
                f.flush()
                os.fsync(f.fileno())
            if self.path.exists():
                os.chmod(temp_path, self.path.stat().st_mode & 0o7777)
            else:
                os.chmod(temp_path, 0o644)
            os.replace(temp_path, self.path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(temp_path)
            raise

    def list(self) -> List[str]:
        """Names allowed to be signed automatically, in file order."""
        return self._read_lines()

    def add(self, name: str):
        """Add ``name``; a name already present is left alone."""
        if not name or any(c.isspace() for c in name):
            raise ValueError(f"Invalid autosign entry {name!r}")

        lines = self._read_lines()
        if name in lines:
            logger.info(f"{name} is already in autosign")
            return

        lines.append(name)
        self._write_lines(lines)
        logger.info(f"Added {name} to autosign")

    def remove(self, name: str):
        """
        Remove every line equal to ``name``, collapsing duplicate lines.

        Raises:
            NotPresent: if ``name`` is not in the file (or the file is absent)
        """
        lines = self._read_lines()
        if name not in lines:
            logger.info(f"Attempt to remove nonexistent client autosign for {name}")
            raise NotPresent(name, "client autosign")

        remaining = list(dict.fromkeys(line for line in lines if line != name))
        self._write_lines(remaining)
        logger.info(f"Removed {name} from autosign")
