from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..core.constants import UNKNOWN_EMPLOYEE_NAME, UNKNOWN_EMPLOYEE_ROLE
from .model import EmployeeIdentity, PunchRecord


def enrich_records(
    records: Iterable[PunchRecord],
    identities: Optional[Sequence[EmployeeIdentity]],
) -> tuple[PunchRecord, ...]:
    """Copy name/role/card from the roster onto each punch.

    Punches of users missing from the roster (or every punch, when the roster
    could not be read) get the placeholder identity.
    """

    roster = {i.user_id: i for i in identities or ()}
    out = []
    for r in records:
        who = roster.get(r.employee_id)
        out.append(
            replace(
                r,
                employee_name=who.name if who else UNKNOWN_EMPLOYEE_NAME,
                employee_role=who.role if who else UNKNOWN_EMPLOYEE_ROLE,
                employee_card_no=who.card_no if who else 0,
            )
        )
    return tuple(out)
