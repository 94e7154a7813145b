"""
Tests for domain filters used to narrow search results.
"""

import pytest

from domain.filters import Domain
from app.exceptions import ServiceValidationError

ROOMS = [
    {"id": 1, "name": "Room Ardennes", "capacity": 4, "order": 1, "is_accomodation": True},
    {"id": 2, "name": "Dormitory Meuse", "capacity": 12, "order": 2, "is_accomodation": True},
    {"id": 3, "name": "Meeting hall", "capacity": 40, "order": 3, "is_accomodation": False},
]


def matching(domain):
    filter_domain = Domain(domain)
    return [r["id"] for r in ROOMS if filter_domain.evaluate(r)]


def test_empty_domain_matches_everything():
    assert matching([]) == [1, 2, 3]
    assert matching(None) == [1, 2, 3]


def test_single_condition():
    assert matching(["capacity", ">=", 12]) == [2, 3]


def test_conditions_of_a_clause_are_joined_with_and():
    assert matching([["capacity", ">", 2], ["is_accomodation", "=", True]]) == [1, 2]


def test_clauses_are_joined_with_or():
    assert matching([[["capacity", "<", 5]], [["name", "like", "Meeting%"]]]) == [1, 3]


@pytest.mark.parametrize(
    "domain, expected",
    [
        (["id", "in", [1, 3]], [1, 3]),
        (["id", "not in", [1, 3]], [2]),
        (["name", "ilike", "%meuse"], [2]),
        (["name", "<>", "Meeting hall"], [1, 2]),
        (["is_accomodation", "is", "false"], [3]),
    ],
)
def test_operators(domain, expected):
    assert matching(domain) == expected


def test_unknown_field_fails_the_condition():
    assert matching(["surface", ">", 10]) == []


def test_unknown_operator_is_rejected():
    with pytest.raises(ServiceValidationError):
        Domain([["capacity", "~", 3]])


def test_malformed_clause_is_rejected():
    with pytest.raises(ServiceValidationError):
        Domain([["capacity", ">"], "oops"])


@pytest.mark.parametrize("domain", [5, True, "capacity", {"capacity": 4}])
def test_domain_must_be_a_list(domain):
    with pytest.raises(ServiceValidationError) as exc:
        Domain(domain)
    assert exc.value.code == "invalid_param"
