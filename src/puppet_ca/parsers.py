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
Parsers for the three sources of certificate state.

- ``puppetca --list --all`` output (state and fingerprint)
- ``<ssldir>/ca/inventory.txt`` (serial and validity window)
- ``<ssldir>/ca/ca_crl.pem`` (revoked serials)
"""

import re
from pathlib import Path
from typing import Dict, List, Optional, Set

from cryptography import x509

from .errors import MissingResource, ParseWarning
from .log import get_logger
from .models import CertificateRecord, CertificateState

logger = get_logger(__name__)

# Certnames contain no whitespace; trailing text such as "(certificate revoked)" is ignored
# + host1.example.com (SHA256 AB:CD:...)
SIGNED_LINE = re.compile(r"^(?P<sign>[+-])\s+(?P<name>\S+)\s+\((?P<fingerprint>[^()]+)\)")
# host3.example.com (SHA256 22:33:...)
PENDING_LINE = re.compile(r"^(?P<name>\S+)\s+\((?P<fingerprint>[^()]+)\)")
# 0x005a 2011-04-16T07:12:46GMT 2016-04-14T07:12:46GMT /CN=uuid
INVENTORY_LINE = re.compile(
    r"^(?P<serial>0[xX][0-9a-fA-F]+)\s+"
    r"(?P<not_before>\d+\S+)\s+"
    r"(?P<not_after>\d+\S+)\s+"
    r"/CN=(?P<name>\S+)"
)


class CertificateListParser:
    """Parses the CA binary's listing, one certificate per line."""

    def __init__(self):
        self.warnings: List[ParseWarning] = []

    def parse_line(self, line: str) -> Optional[CertificateRecord]:
        """Match one line against the signed grammar, then the pending one."""
        line = line.strip()

        match = SIGNED_LINE.match(line)
        if match:
            state = CertificateState.REVOKED if match["sign"] == "-" else CertificateState.VALID
            return CertificateRecord(
                name=match["name"].strip(),
                state=state,
                fingerprint=match["fingerprint"].strip(),
            )

        match = PENDING_LINE.match(line)
        if match:
            return CertificateRecord(
                name=match["name"].strip(),
                state=CertificateState.PENDING,
                fingerprint=match["fingerprint"].strip(),
            )

        return None

    def parse(self, output: str) -> Dict[str, CertificateRecord]:
        """
        Parse a full listing.

        Unparseable lines are logged and collected in ``self.warnings``;
        they never fail the whole listing.
        """
        self.warnings = []
        records: Dict[str, CertificateRecord] = {}

        for line_number, line in enumerate(output.splitlines(), start=1):
            if not line.strip():
                continue

            record = self.parse_line(line)
            if record is None:
                warning = ParseWarning(line=line, line_number=line_number)
                self.warnings.append(warning)
                logger.warning(str(warning))
                continue

            records[record.name] = record

        return records


class InventoryParser:
    """Parses the CA inventory; malformed lines are ignored."""

    def parse_line(self, line: str) -> Optional[CertificateRecord]:
        match = INVENTORY_LINE.match(line.strip())
        if not match:
            return None

        return CertificateRecord(
            name=match["name"],
            serial_number=int(match["serial"], 16),
            not_before=match["not_before"],
            not_after=match["not_after"],
        )

    def parse(self, text: str) -> Dict[str, CertificateRecord]:
        records: Dict[str, CertificateRecord] = {}
        for line in text.splitlines():
            record = self.parse_line(line)
            # A re-issued certificate appears again further down; keep the latest
            if record is not None:
                records[record.name] = record
        return records

    def parse_file(self, path: Path) -> Dict[str, CertificateRecord]:
        path = Path(path)
        try:
            text = path.read_text()
        except OSError as e:
            raise MissingResource("CA inventory file", path) from e
        return self.parse(text)


class RevocationListParser:
    """Extracts revoked serial numbers from a PEM encoded CRL."""

    def parse(self, data: bytes) -> Set[int]:
        crl = x509.load_pem_x509_crl(data)
        return {revoked.serial_number for revoked in crl}

    def parse_file(self, path: Path) -> Set[int]:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise MissingResource("CRL", path) from e

        try:
            return self.parse(data)
        except ValueError as e:
            logger.warning(f"Unable to decode CRL at {path}: {e}")
            raise MissingResource("valid CRL", path) from e
