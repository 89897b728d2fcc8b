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
Configuration for the Puppet CA core.

Defaults can be overridden by a YAML settings file and then by environment
variables:

    PUPPETCA_SETTINGS    YAML settings file (optional)
    PUPPETCA_SSLDIR      Puppet SSL directory (default: /var/lib/puppet/ssl)
    PUPPETCA_PUPPETDIR   Puppet configuration directory (default: /etc/puppet)

Settings file keys:

    ssldir: /var/lib/puppet/ssl
    puppetdir: /etc/puppet
    search_path: [/usr/local/bin]
    sudo_search_path: [/usr/bin]
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from .errors import MissingResource

DEFAULT_SSL_DIR = "/var/lib/puppet/ssl"
DEFAULT_PUPPET_DIR = "/etc/puppet"
DEFAULT_SUDO_SEARCH_PATH = ["/usr/bin"]


@dataclass
class Settings:
    """Locations of the CA files and binary search-path overrides."""

    ssl_dir: str = DEFAULT_SSL_DIR
    puppet_dir: str = DEFAULT_PUPPET_DIR
    search_path: List[str] = field(default_factory=list)
    sudo_search_path: List[str] = field(default_factory=lambda: list(DEFAULT_SUDO_SEARCH_PATH))

    @property
    def ca_dir(self) -> Path:
        return Path(self.ssl_dir) / "ca"

    @property
    def inventory_file(self) -> Path:
        return self.ca_dir / "inventory.txt"

    @property
    def crl_file(self) -> Path:
        return self.ca_dir / "ca_crl.pem"

    @property
    def autosign_file(self) -> Path:
        return Path(self.puppet_dir) / "autosign.conf"

    @classmethod
    def load(cls, path: Optional[str] = None, environ: Optional[Dict[str, str]] = None):
        """
        Build settings from an optional YAML file and the environment.

        Args:
            path: Settings file; falls back to $PUPPETCA_SETTINGS
            environ: Environment mapping (default: os.environ)

        Returns:
            Settings instance
        """
        environ = os.environ if environ is None else environ
        settings = cls()

        path = path or environ.get("PUPPETCA_SETTINGS")
        if path:
            settings._apply_file(Path(os.path.expanduser(path)))

        if environ.get("PUPPETCA_SSLDIR"):
            settings.ssl_dir = environ["PUPPETCA_SSLDIR"]
        if environ.get("PUPPETCA_PUPPETDIR"):
            settings.puppet_dir = environ["PUPPETCA_PUPPETDIR"]

        settings.ssl_dir = os.path.expanduser(settings.ssl_dir)
        settings.puppet_dir = os.path.expanduser(settings.puppet_dir)
        return settings

    def _apply_file(self, settings_path: Path):
        if not settings_path.exists():
            raise MissingResource("settings file", settings_path)

        with open(settings_path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise MissingResource("settings mapping", settings_path)

        self.ssl_dir = data.get("ssldir") or self.ssl_dir
        self.puppet_dir = data.get("puppetdir") or self.puppet_dir
        if data.get("search_path"):
            self.search_path = _path_list(data["search_path"])
        if data.get("sudo_search_path"):
            self.sudo_search_path = _path_list(data["sudo_search_path"])


def _path_list(value) -> List[str]:
    # Accept either a YAML list or a single os.pathsep-joined string
    if isinstance(value, str):
        value = value.split(os.pathsep)
    return [os.path.expanduser(str(p)) for p in value if p]
