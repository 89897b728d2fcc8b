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
Puppet Certificate Authority (CA) operations.

Wraps the CA management binary (``puppetca`` or ``puppet cert``) run via
sudo, and the files it maintains under the Puppet SSL directory:

    <ssldir>/
    └── ca/
        ├── inventory.txt   # Every serial ever issued, with validity window
        └── ca_crl.pem      # Certificate Revocation List
    <puppetdir>/
    └── autosign.conf       # Names signed without manual approval

Usage:
    ca = PuppetCA(Settings.load())
    ca.sign("web1.example.com")
    ca.pending()
    ca.autosign("db1.example.com")
"""

from typing import Dict, List, Optional

from .autosign import AutosignStore
from .binaries import BinaryResolver
from .errors import CommandFailure, NotPresent
from .log import get_logger
from .merge import merge_states, pending_only
from .models import CertificateRecord
from .parsers import CertificateListParser, InventoryParser, RevocationListParser
from .runner import CommandRunner
from .settings import Settings

logger = get_logger(__name__)

# Later versions of puppetca return OK even if the certificate is not present;
# 0.24 reports it with this phrase and a nonzero exit.
NOT_PRESENT_PHRASE = "Could not find client certificate"
MODES = ("sign", "clean")


class PuppetCA:
    """Puppet CA manager."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        resolver: Optional[BinaryResolver] = None,
        runner: Optional[CommandRunner] = None,
        autosign_store: Optional[AutosignStore] = None,
    ):
        """
        Initialize the CA facade.

        Args:
            settings: Directory locations (default: Settings.load())
            resolver: Binary resolver (default: built from settings)
            runner: Command runner; resolved lazily on first use when omitted
            autosign_store: Autosign file store (default: <puppetdir>/autosign.conf)
        """
        self.settings = settings or Settings.load()
        self.resolver = resolver or BinaryResolver(self.settings)
        self._runner = runner
        self.autosign_store = autosign_store or AutosignStore(self.settings.autosign_file)

    @property
    def runner(self) -> CommandRunner:
        if self._runner is None:
            self._runner = CommandRunner(self.resolver.resolve())
        return self._runner

    def sign(self, certname: str):
        """Sign the pending request for ``certname``."""
        self._run_mode("sign", certname)

    def clean(self, certname: str):
        """Revoke and remove every file for ``certname``."""
        self._run_mode("clean", certname)

    def _run_mode(self, mode: str, certname: str):
        if mode not in MODES:
            raise ValueError(f"Invalid mode {mode}")

        certname = certname.lower()
        result = self.runner.run([f"--{mode}", certname])

        if result.success:
            logger.info(f"{mode}ed puppet certificate for {certname}")
            return

        if NOT_PRESENT_PHRASE in result.output:
            logger.info(f"Attempt to {mode} nonexistent client certificate for {certname}")
            raise NotPresent(certname)

        logger.warning(f"Failed to run puppetca: {result.output}")
        raise CommandFailure(result.command, result.output)

    def list(self) -> Dict[str, CertificateRecord]:
        """
        List all certificates with their merged state.

        Returns:
            Dict of common name -> CertificateRecord
        """
        result = self.runner.run(["--list", "--all"])
        if not result.success:
            logger.warning(f"Failed to run puppetca: {result.output}")
            raise CommandFailure(result.command, result.output)

        cli_records = CertificateListParser().parse(result.output)
        inventory_records = InventoryParser().parse_file(self.settings.inventory_file)
        revoked_serials = RevocationListParser().parse_file(self.settings.crl_file)

        return merge_states(cli_records, inventory_records, revoked_serials)

    def pending(self) -> Dict[str, CertificateRecord]:
        """Certificates with an outstanding signing request."""
        return pending_only(self.list())

    def autosign(self, certname: str):
        """Add ``certname`` to the autosign allow-list."""
        self.autosign_store.add(certname)

    def disable_autosign(self, certname: str):
        """Remove ``certname`` from the autosign allow-list."""
        self.autosign_store.remove(certname)

    def autosign_list(self) -> List[str]:
        """Hosts which are allowed to be signed via autosign."""
        return self.autosign_store.list()
