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
"""Certificate records shared by the parsers, the merger and the facade."""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Optional


class CertificateState(str, Enum):
    PENDING = "pending"
    VALID = "valid"
    REVOKED = "revoked"


@dataclass
class CertificateRecord:
    """
    What is known about one certificate, keyed by common name.

    CLI-sourced records carry ``state`` and ``fingerprint``; inventory-sourced
    records carry ``serial_number`` and the validity window.
    """

    name: str
    state: Optional[CertificateState] = None
    fingerprint: Optional[str] = None
    serial_number: Optional[int] = None
    not_before: Optional[str] = None
    not_after: Optional[str] = None

    def overlay(self, other: "CertificateRecord") -> "CertificateRecord":
        """Return a copy with every field ``other`` sets taking precedence."""
        changes = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if f.name != "name" and getattr(other, f.name) is not None
        }
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.state is not None:
            data["state"] = self.state.value
        if self.fingerprint is not None:
            data["fingerprint"] = self.fingerprint
        if self.serial_number is not None:
            data["serial"] = self.serial_number
        if self.not_before is not None:
            data["not_before"] = self.not_before
        if self.not_after is not None:
            data["not_after"] = self.not_after
        return data
