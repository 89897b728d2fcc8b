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
"""Synchronous execution of the CA binary through sudo."""

import subprocess
from dataclasses import dataclass
from typing import List, Sequence

from .binaries import ResolvedBinaries
from .errors import MissingResource
from .log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Exit status and interleaved stdout/stderr of one invocation."""

    success: bool
    output: str
    command: List[str]


class CommandRunner:
    """Runs ``<sudo> -S <ca_binary> [cert] <args>`` and captures its output."""

    def __init__(self, binaries: ResolvedBinaries):
        self.binaries = binaries

    def build_command(self, args: Sequence[str]) -> List[str]:
        return [
            self.binaries.sudo_binary,
            "-S",
            self.binaries.ca_binary,
            *self.binaries.subcommand,
            *args,
        ]

    def run(self, args: Sequence[str]) -> CommandResult:
        """
        Execute the CA binary with ``args``.

        A nonzero exit is reported through ``CommandResult.success``, never
        raised. There is no timeout: a hung binary blocks the caller.
        """
        cmd = self.build_command(args)
        logger.debug(f"Executing {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError as e:
            raise MissingResource("executable", e.filename or cmd[0]) from e
        except OSError as e:
            logger.warning(f"Unable to execute {cmd[0]}: {e}")
            raise MissingResource("runnable executable", e.filename or cmd[0]) from e

        return CommandResult(success=result.returncode == 0, output=result.stdout or "", command=cmd)
