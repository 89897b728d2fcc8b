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
import datetime
import stat

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from puppet_ca.runner import CommandResult
from puppet_ca.settings import Settings


def make_crl(serials):
    """Build a PEM encoded CRL revoking ``serials``."""
    key = ec.generate_private_key(ec.SECP256R1())
    now = datetime.datetime.now(datetime.timezone.utc)
    builder = (
        x509.CertificateRevocationListBuilder()
        .issuer_name(x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "Puppet CA: test")]))
        .last_update(now)
        .next_update(now + datetime.timedelta(days=1))
    )
    for serial in serials:
        revoked = x509.RevokedCertificateBuilder().serial_number(serial).revocation_date(now).build()
        builder = builder.add_revoked_certificate(revoked)
    crl = builder.sign(key, hashes.SHA256())
    return crl.public_bytes(serialization.Encoding.PEM)


def make_executable(path, body="#!/bin/sh\nexit 0\n"):
    path.write_text(body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


class FakeRunner:
    """Stands in for CommandRunner; replies with canned results keyed by first argument."""

    def __init__(self, replies=None):
        self.replies = replies or {}
        self.calls = []

    def run(self, args):
        self.calls.append(list(args))
        success, output = self.replies.get(args[0], (True, ""))
        return CommandResult(success=success, output=output, command=["sudo", "-S", "puppetca", *args])


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("PUPPETCA_SETTINGS", "PUPPETCA_SSLDIR", "PUPPETCA_PUPPETDIR"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def settings(tmp_path):
    ssl_dir = tmp_path / "ssl"
    puppet_dir = tmp_path / "puppet"
    (ssl_dir / "ca").mkdir(parents=True)
    puppet_dir.mkdir()
    return Settings(ssl_dir=str(ssl_dir), puppet_dir=str(puppet_dir), search_path=[], sudo_search_path=[])


@pytest.fixture
def crl_bytes():
    return make_crl


@pytest.fixture
def write_ca_files(settings):
    def _write(inventory="", revoked=()):
        settings.inventory_file.write_text(inventory)
        settings.crl_file.write_bytes(make_crl(revoked))

    return _write


@pytest.fixture
def bin_dir(tmp_path):
    path = tmp_path / "bin"
    path.mkdir()
    return path


@pytest.fixture
def executable():
    return make_executable


@pytest.fixture
def fake_runner():
    return FakeRunner
