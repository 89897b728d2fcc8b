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
Reconciliation of CLI, inventory and CRL data into one record per name.

Note that this ignores certificates which were revoked multiple times,
displaying only the last revocation state. Revocation data is never merged
into a name with a pending request: a certificate mid-request has no serial
that could appear in a CRL yet.
"""

from dataclasses import replace
from typing import AbstractSet, Dict, Mapping

from .models import CertificateRecord, CertificateState


def mark_revoked(
    inventory_records: Mapping[str, CertificateRecord], revoked_serials: AbstractSet[int]
) -> Dict[str, CertificateRecord]:
    """Copy inventory records, setting ``revoked`` where the serial is in the CRL."""
    marked = {}
    for name, record in inventory_records.items():
        if record.serial_number is not None and record.serial_number in revoked_serials:
            record = replace(record, state=CertificateState.REVOKED)
        else:
            record = replace(record)
        marked[name] = record
    return marked


def merge_states(
    cli_records: Mapping[str, CertificateRecord],
    inventory_records: Mapping[str, CertificateRecord],
    revoked_serials: AbstractSet[int],
) -> Dict[str, CertificateRecord]:
    """
    Merge the three sources into one mapping keyed by common name.

    Args:
        cli_records: Records parsed from ``--list --all`` output
        inventory_records: Records parsed from the CA inventory
        revoked_serials: Serial numbers listed in the CRL

    Returns:
        Dict of name -> merged CertificateRecord. Inputs are left untouched.
    """
    merged = mark_revoked(inventory_records, revoked_serials)

    for name, cli_record in cli_records.items():
        inventory_record = merged.get(name)

        if inventory_record is None or cli_record.state == CertificateState.PENDING:
            merged[name] = replace(cli_record)
        else:
            merged[name] = inventory_record.overlay(cli_record)

    return merged


def pending_only(records: Mapping[str, CertificateRecord]) -> Dict[str, CertificateRecord]:
    return {
        name: record for name, record in records.items() if record.state == CertificateState.PENDING
    }
