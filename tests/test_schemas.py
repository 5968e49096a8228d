import pytest
from pydantic import ValidationError

from app.schemas.schemas import DispatchResponse, DispatchResult, StudentRegisterRequest


def _registration(**overrides):
    data = {
        "name": "Asha Rao",
        "email": "asha@x.edu",
        "password": "longenough",
        "confirm_password": "longenough",
        "roll_no": "NFSU-042",
        "branch": "Cyber Security",
        "year": 2026,
    }
    data.update(overrides)
    return data


def test_matching_passwords_are_accepted():
    request = StudentRegisterRequest(**_registration())
    assert request.course == "M.Sc"
    assert request.backlogs == 0


def test_mismatched_passwords_are_rejected():
    with pytest.raises(ValidationError, match="Passwords do not match."):
        StudentRegisterRequest(**_registration(confirm_password="different1"))


def test_dispatch_result_counts():
    result = DispatchResult(success_count=2, total_count=5)
    assert result.failed_count == 3
    assert result.success is True

    response = DispatchResponse.from_result(result)
    assert response.message == "Sent 2 of 5 emails"
    assert response.failed_count == 3


def test_empty_dispatch_is_success():
    assert DispatchResult().success is True
    assert DispatchResult(success_count=0, total_count=1).success is False
