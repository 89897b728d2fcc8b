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
"""Puppet CA certificate state reconciliation and lifecycle operations."""

from .autosign import AutosignStore
from .binaries import BinaryResolver, ResolvedBinaries
from .ca import PuppetCA
from .errors import (
    CommandFailure,
    ErrorKind,
    MissingResource,
    NotPresent,
    ParseWarning,
    PuppetCAError,
)
from .merge import merge_states, pending_only
from .models import CertificateRecord, CertificateState
from .parsers import CertificateListParser, InventoryParser, RevocationListParser
from .runner import CommandResult, CommandRunner
from .settings import Settings

__all__ = [
    "AutosignStore",
    "BinaryResolver",
    "CertificateListParser",
    "CertificateRecord",
    "CertificateState",
    "CommandFailure",
    "CommandResult",
    "CommandRunner",
    "ErrorKind",
    "InventoryParser",
    "MissingResource",
    "NotPresent",
    "ParseWarning",
    "PuppetCA",
    "PuppetCAError",
    "ResolvedBinaries",
    "RevocationListParser",
    "Settings",
    "merge_states",
    "pending_only",
]
