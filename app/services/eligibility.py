"""
Drive eligibility rules.

A student is eligible for a drive when ALL of these hold:
- not blacklisted
- branch in drive's eligible_branches (empty list = any branch)
- year in drive's eligible_years (empty list = any year)
- cgpa >= drive's min_cgpa
- backlogs <= drive's max_backlogs (None = no limit)
"""

from typing import Iterable, List


def _norm(value) -> str:
    return str(value or "").strip().lower()


def is_eligible(student: dict, drive: dict) -> bool:
    if student.get("is_blacklisted"):
        return False

    branches = drive.get("eligible_branches") or []
    if branches and _norm(student.get("branch")) not in {_norm(b) for b in branches}:
        return False

    years = drive.get("eligible_years") or []
    if years and student.get("year") not in years:
        return False

    if float(student.get("cgpa") or 0) < float(drive.get("min_cgpa") or 0):
        return False

    max_backlogs = drive.get("max_backlogs")
    if max_backlogs is not None and int(student.get("backlogs") or 0) > max_backlogs:
        return False

    return True


def filter_eligible(students: Iterable[dict], drive: dict) -> List[dict]:
    return [s for s in students if is_eligible(s, drive)]
