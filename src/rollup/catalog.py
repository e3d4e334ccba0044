"""
Service Catalogs

Fixed lists of services shown on the dashboard. "Established" services
fill the top-services list; "emerging" ones fill the new-services list.
Services found in the sheets but absent from both lists still count toward
the location's total volume.
"""

from typing import Dict, FrozenSet

ESTABLISHED_SERVICES = (
    "Botox",
    "Dermal Fillers",
    "Lip Fillers",
    "Dysport",
    "Laser Hair Removal",
    "Chemical Peels",
    "Microneedling",
    "HydraFacial",
    "CoolSculpting",
    "IPL Photofacial",
    "Laser Skin Resurfacing",
    "Kybella",
    "Sculptra",
    "Tattoo Removal",
    "Microdermabrasion",
    "Medical Weight Loss",
)

EMERGING_SERVICES = (
    "Semaglutide",
    "Tirzepatide",
    "Morpheus8",
    "RF Microneedling",
    "PRP Hair Restoration",
    "IV Therapy",
    "Hormone Replacement Therapy",
    "Emsculpt NEO",
    "Exosome Therapy",
    "Polynucleotides",
)


def _index(names) -> Dict[str, str]:
    return {name.lower(): name for name in names}


ESTABLISHED_INDEX = _index(ESTABLISHED_SERVICES)
EMERGING_INDEX = _index(EMERGING_SERVICES)

ESTABLISHED: FrozenSet[str] = frozenset(ESTABLISHED_INDEX)
EMERGING: FrozenSet[str] = frozenset(EMERGING_INDEX)


def is_established(service: str) -> bool:
    return service.strip().lower() in ESTABLISHED


def is_emerging(service: str) -> bool:
    return service.strip().lower() in EMERGING
