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
Error kinds raised by the Puppet CA core.

Every failure carries structured context (path, command, output) instead of
a pre-formatted message only, so callers can branch on ``kind`` and still
log something useful with ``str(exc)``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ErrorKind(Enum):
    """Closed set of outcomes the CA core reports."""

    MISSING_RESOURCE = "missing_resource"
    COMMAND_FAILURE = "command_failure"
    NOT_PRESENT = "not_present"
    PARSE_WARNING = "parse_warning"


class PuppetCAError(Exception):
    """Base class for all CA core failures."""

    kind: ErrorKind


class MissingResource(PuppetCAError):
    """A required directory, binary or file is absent or unreadable."""

    kind = ErrorKind.MISSING_RESOURCE

    def __init__(self, resource: str, path: Optional[str] = None):
        self.resource = resource
        self.path = str(path) if path is not None else None
        message = f"Unable to find {resource}"
        if self.path:
            message += f" at {self.path}"
        super().__init__(message)


class CommandFailure(PuppetCAError):
    """The CA binary exited nonzero for a reason other than a missing certificate."""

    kind = ErrorKind.COMMAND_FAILURE

    def __init__(self, command: List[str], output: str):
        self.command = list(command)
        self.output = output
        super().__init__(f"Execution of {' '.join(self.command)} failed: {output.strip()}")


class NotPresent(PuppetCAError):
    """The targeted certificate or autosign entry does not exist."""

    kind = ErrorKind.NOT_PRESENT

    def __init__(self, name: str, what: str = "client certificate"):
        self.name = name
        self.what = what
        super().__init__(f"Attempt to remove nonexistent {what} for {name}")


@dataclass(frozen=True)
class ParseWarning:
    """A line of CA output that matched neither listing grammar. Never raised."""

    line: str
    line_number: int
    kind: ErrorKind = field(default=ErrorKind.PARSE_WARNING, init=False)

    def __str__(self) -> str:
        return f"Failed to parse line {self.line_number}: {self.line}"
