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
Location of the CA management and privilege-escalation executables.

``puppetca`` is the legacy standalone binary; ``puppet`` (2.6 and later)
needs the ``cert`` subcommand appended to every invocation.
"""

import os
import shutil
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .errors import MissingResource
from .log import get_logger
from .settings import Settings

logger = get_logger(__name__)

DEFAULT_SEARCH_PATH = ["/usr/sbin", "/opt/puppet/bin"]
LEGACY_BINARY = "puppetca"
MODERN_BINARY = "puppet"
MODERN_SUBCOMMAND = ("cert",)
SUDO_BINARY = "sudo"


@dataclass(frozen=True)
class ResolvedBinaries:
    """Result of a successful resolution, passed to the command runner."""

    ca_binary: str
    sudo_binary: str
    subcommand: Tuple[str, ...] = ()

    @property
    def is_legacy(self) -> bool:
        return not self.subcommand


def which(name: str, directories: Sequence[str]) -> Optional[str]:
    """Return the first executable ``name`` found in ``directories``."""
    if not directories:
        return None
    return shutil.which(name, path=os.pathsep.join(directories))


class BinaryResolver:
    """Finds puppetca/puppet and sudo, checking the CA exists first."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def search_path(self) -> List[str]:
        # Configured overrides take precedence over the default directories
        return list(self.settings.search_path) + [
            d for d in DEFAULT_SEARCH_PATH if d not in self.settings.search_path
        ]

    def resolve(self) -> ResolvedBinaries:
        """
        Resolve the CA binary, its invocation style and sudo.

        Returns:
            ResolvedBinaries

        Raises:
            MissingResource: if the SSL/CA directory or either binary is absent
        """
        ca_dir = self.settings.ca_dir
        if not ca_dir.is_dir():
            logger.warning("PuppetCA: SSL/CA unavailable on this machine")
            raise MissingResource("SSL/CA directory", ca_dir)

        ca_binary, subcommand = self._resolve_ca_binary()
        sudo_binary = self._resolve_sudo()

        return ResolvedBinaries(ca_binary=ca_binary, sudo_binary=sudo_binary, subcommand=subcommand)

    def _resolve_ca_binary(self) -> Tuple[str, Tuple[str, ...]]:
        search_path = self.search_path

        legacy = which(LEGACY_BINARY, search_path)
        if legacy:
            logger.debug(f"Found puppetca at {legacy}")
            return legacy, ()

        modern = which(MODERN_BINARY, search_path)
        if modern:
            logger.debug(f"Found puppet at {modern}, using '{' '.join(MODERN_SUBCOMMAND)}'")
            return modern, MODERN_SUBCOMMAND

        logger.warning("unable to find puppetca binary")
        raise MissingResource("puppetca binary", os.pathsep.join(search_path))

    def _resolve_sudo(self) -> str:
        sudo_path = self.settings.sudo_search_path
        sudo = which(SUDO_BINARY, sudo_path)
        if not sudo:
            logger.warning("unable to find sudo binary")
            raise MissingResource("sudo binary", os.pathsep.join(sudo_path))

        logger.debug(f"Found sudo at {sudo}")
        return sudo
