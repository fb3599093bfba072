"""Persists congruences and raw observations as DER encoded, PEM armoured files.

No standard ASN.1 module describes residue classes, so we define our own minimal structures:

    Congruence ::= SEQUENCE { residue INTEGER, modulus INTEGER }
    ObservationSet ::= SEQUENCE OF Congruence

Typical usage example:

    export_congruence(reconstruct(19122025, [32, 12]), "result.pem")
    cong = import_congruence("result.pem")
    export_observations([(3, 5), (4, 7)], "evidence.pem")
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import pathlib

from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.codec.native import encoder as localize
from pyasn1.type import namedtype
from pyasn1.type import univ

from crtutils.congruence import Congruence

PEM_TYPES = {
    "CONGRUENCE": ("-----BEGIN CONGRUENCE-----", "-----END CONGRUENCE-----"),
    "OBSERVATIONS": ("-----BEGIN CONGRUENCE OBSERVATIONS-----", "-----END CONGRUENCE OBSERVATIONS-----"),
}


class CongruenceRecord(univ.Sequence):
    """A single residue class, or a single (residue, modulus) observation."""
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("residue", univ.Integer()),
        namedtype.NamedType("modulus", univ.Integer()),
    )


class ObservationSet(univ.SequenceOf):
    """Observations of one integer, in the order they were made."""
    componentType = CongruenceRecord()


def _record(r: int, m: int) -> CongruenceRecord:
    rec = CongruenceRecord()
    rec["residue"] = r
    rec["modulus"] = m
    return rec


def export_congruence(cong: Congruence, file: pathlib.Path) -> None:
    """Export a congruence to file.

    Args:
        cong: The congruence to export.
        file: The file to export the congruence to.
    """
    encdata = encoder.encode(_record(cong.r, cong.m))
    write_pem(file, "CONGRUENCE", encdata)


def import_congruence(file: pathlib.Path) -> Congruence:
    """Import a congruence from file.

    Args:
        file: The file to import the congruence from.

    Returns:
        The imported congruence.

    Raises:
        IOError: If the file has invalid PEM encoding.
        ValueError: If the stored residue class breaks 0 <= residue < modulus.
    """
    payload = read_pem(file, "CONGRUENCE")
    recdata, _ = decoder.decode(payload, asn1Spec=CongruenceRecord())
    pyrecd = localize.encode(recdata)
    return Congruence(pyrecd["residue"], pyrecd["modulus"])


def export_observations(observations: list[tuple[int, int]], file: pathlib.Path) -> None:
    """Export (residue, modulus) observations to file.

    Observations are stored as given, residues are not canonicalized.

    Args:
        observations: The observations to export.
        file: The file to export the observations to.

    Raises:
        ValueError: If an observation has a non-positive modulus.
    """
    obsdata = ObservationSet()
    obsdata.clear()  # Empty sets must still encode.
    for idx, (r, m) in enumerate(observations):
        if m <= 0:
            raise ValueError(f"Observation {idx} has non-positive modulus {m}")
        obsdata.setComponentByPosition(idx, _record(r, m))
    write_pem(file, "OBSERVATIONS", encoder.encode(obsdata))


def import_observations(file: pathlib.Path) -> list[tuple[int, int]]:
    """Import (residue, modulus) observations from file.

    Args:
        file: The file to import the observations from.

    Returns:
        The observations, in stored order.

    Raises:
        IOError: If the file has invalid PEM encoding.
        ValueError: If an observation has a non-positive modulus.
    """
    payload = read_pem(file, "OBSERVATIONS")
    obsdata, _ = decoder.decode(payload, asn1Spec=ObservationSet())
    observations = []
    for idx, rec in enumerate(localize.encode(obsdata)):
        if rec["modulus"] <= 0:
            raise ValueError(f"Observation {idx} has non-positive modulus {rec['modulus']}")
        observations.append((rec["residue"], rec["modulus"]))
    return observations


def read_pem(file: pathlib.Path, subtype: str) -> bytes:
    """Strips the armour of a congruence file and returns its DER payload.

    Blank lines inside the body end the scan, so a truncated file is reported instead of decoded partially.

    Args:
        file: The congruence or observation file.
        subtype: Key of `PEM_TYPES` naming the armour the file must carry.

    Returns:
        The raw DER bytes between the BEGIN and END lines.

    Raises:
        IOError: If the BEGIN line is not the expected one or the END line is missing.
    """
    begin, end = PEM_TYPES[subtype]
    body = []
    with open(file, "r", encoding="ascii") as f:
        first = f.readline().strip()
        if first != begin:
            raise IOError(f"{file} is not a {subtype.lower()} file: expected {begin}, found {first!r}")
        for line in map(str.strip, f):
            if line == end:
                break
            if not line:
                raise IOError(f"{file} ends before its {subtype.lower()} armour is closed by {end}")
            body.append(line)
        else:
            raise IOError(f"{file} ends before its {subtype.lower()} armour is closed by {end}")
    return base64.b64decode("".join(body))


def write_pem(file: pathlib.Path, subtype: str, data: bytes) -> None:
    """Armours a DER payload as a congruence file, base64 wrapped at 64 columns."""
    begin, end = PEM_TYPES[subtype]
    payload = base64.b64encode(data).decode()
    lines = [begin, *(payload[i:i + 64] for i in range(0, len(payload), 64)), end]
    with open(file, "w", encoding="ascii") as f:
        f.write("\n".join(lines) + "\n")
