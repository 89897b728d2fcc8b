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
from puppet_ca.merge import merge_states, pending_only
from puppet_ca.models import CertificateRecord, CertificateState


def cli(name, state, fingerprint="SHA256 00:11"):
    return CertificateRecord(name=name, state=state, fingerprint=fingerprint)


def inventory(name, serial):
    return CertificateRecord(
        name=name,
        serial_number=serial,
        not_before="2011-04-16T07:12:46GMT",
        not_after="2016-04-14T07:12:46GMT",
    )


def test_pending_is_never_downgraded_by_crl():
    merged = merge_states(
        {"host": cli("host", CertificateState.PENDING)},
        {"host": inventory("host", 7)},
        {7},
    )
    assert merged["host"].state == CertificateState.PENDING
    # Inventory data for a not yet issued certificate is dropped
    assert merged["host"].serial_number is None


def test_inventory_only_revoked():
    merged = merge_states({}, {"gone": inventory("gone", 90)}, {90})
    assert merged["gone"].state == CertificateState.REVOKED
    assert merged["gone"].serial_number == 90


def test_inventory_only_not_revoked_has_no_state():
    merged = merge_states({}, {"old": inventory("old", 1)}, {2})
    assert merged["old"].state is None


def test_cli_state_wins_and_fields_are_unioned():
    merged = merge_states(
        {"web": cli("web", CertificateState.VALID, "SHA256 aa")},
        {"web": inventory("web", 5)},
        {5},
    )
    record = merged["web"]
    assert record.state == CertificateState.VALID
    assert record.fingerprint == "SHA256 aa"
    assert record.serial_number == 5
    assert record.not_after == "2016-04-14T07:12:46GMT"


def test_cli_revoked_with_unrevoked_serial():
    merged = merge_states(
        {"web": cli("web", CertificateState.REVOKED)},
        {"web": inventory("web", 5)},
        set(),
    )
    assert merged["web"].state == CertificateState.REVOKED


def test_inputs_are_not_mutated():
    inventory_records = {"gone": inventory("gone", 90)}
    merge_states({}, inventory_records, {90})
    assert inventory_records["gone"].state is None


def test_one_record_per_name():
    merged = merge_states(
        {"a": cli("a", CertificateState.VALID), "b": cli("b", CertificateState.PENDING)},
        {"a": inventory("a", 1), "c": inventory("c", 2)},
        set(),
    )
    assert sorted(merged) == ["a", "b", "c"]


def test_pending_only():
    records = {
        "p": cli("p", CertificateState.PENDING),
        "v": cli("v", CertificateState.VALID),
        "r": cli("r", CertificateState.REVOKED),
    }
    assert list(pending_only(records)) == ["p"]


def test_to_dict_only_has_populated_keys():
    merged = merge_states({}, {"gone": inventory("gone", 90)}, {90})
    assert merged["gone"].to_dict() == {
        "state": "revoked",
        "serial": 90,
        "not_before": "2011-04-16T07:12:46GMT",
        "not_after": "2016-04-14T07:12:46GMT",
    }
