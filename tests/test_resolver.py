"""Tests for ticket ID resolution."""

import pytest
from unittest.mock import Mock

from plane_pm.errors import (
    AuthenticationError,
    InvalidTicketFormatError,
    NotFoundError,
    TicketNotFoundError,
)
from plane_pm.projects import PROJECTS
from plane_pm.resolver import (
    ResolvedTicket,
    find_by_sequence,
    normalize_collection,
    require_ticket_id,
    resolve_ticket,
)
from plane_pm.tickets import TicketId

SBS_ID = PROJECTS["SBS"]["id"]


@pytest.fixture
def client():
    """Mock Plane client whose SBS project holds one issue."""
    mock_client = Mock()
    mock_client.list_issues.return_value = [{"id": "u1", "sequence_id": 123}]
    return mock_client


class TestNormalizeCollection:
    """Tests for normalize_collection."""

    def test_bare_list(self):
        assert normalize_collection([{"id": "a"}]) == [{"id": "a"}]

    def test_envelope(self):
        assert normalize_collection({"results": [{"id": "a"}], "count": 1}) == [{"id": "a"}]

    def test_envelope_without_results(self):
        assert normalize_collection({"count": 0}) == []

    def test_empty_response(self):
        assert normalize_collection({}) == []
        assert normalize_collection(None) == []


class TestRequireTicketId:
    def test_valid(self):
        assert require_ticket_id("SBS-1") == TicketId("SBS", 1)

    def test_invalid(self):
        with pytest.raises(InvalidTicketFormatError, match="Expected format like SBS-123"):
            require_ticket_id("nope")


class TestResolveTicket:
    """Tests for resolve_ticket."""

    def test_resolves_matching_sequence(self, client):
        resolved = resolve_ticket("SBS-123", client)

        assert resolved == ResolvedTicket(project="SBS", issue_id="u1", project_id=SBS_ID)
        client.list_issues.assert_called_once_with(SBS_ID)

    def test_accepts_parsed_ticket(self, client):
        resolved = resolve_ticket(TicketId("SBS", 123), client)
        assert resolved.issue_id == "u1"

    def test_not_found(self, client):
        with pytest.raises(TicketNotFoundError) as exc_info:
            resolve_ticket("SBS-999", client)
        assert isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.ticket_id == "SBS-999"

    def test_lowercase_code_is_invalid_format(self, client):
        """Project codes are case-sensitive; nothing is fetched."""
        with pytest.raises(InvalidTicketFormatError):
            resolve_ticket("sbs-123", client)
        client.list_issues.assert_not_called()

    def test_unknown_project_is_invalid_format(self, client):
        with pytest.raises(InvalidTicketFormatError):
            resolve_ticket("ZZZ-1", client)
        client.list_issues.assert_not_called()

    def test_envelope_response(self, client):
        """Resolution behaves the same for a results envelope."""
        client.list_issues.return_value = {
            "results": [{"id": "u1", "sequence_id": 123}],
            "count": 1,
        }
        assert resolve_ticket("SBS-123", client).issue_id == "u1"

        with pytest.raises(TicketNotFoundError):
            resolve_ticket("SBS-999", client)

    def test_envelope_without_results_is_not_found(self, client):
        client.list_issues.return_value = {"count": 0}
        with pytest.raises(TicketNotFoundError):
            resolve_ticket("SBS-123", client)

    def test_duplicate_sequence_first_match_wins(self, client):
        """Sequence numbers should be unique, but if not, collection order decides."""
        client.list_issues.return_value = [
            {"id": "u0", "sequence_id": 7},
            {"id": "first", "sequence_id": 123},
            {"id": "second", "sequence_id": 123},
        ]
        assert resolve_ticket("SBS-123", client).issue_id == "first"

    def test_leading_zeros_resolve_same_issue(self, client):
        assert resolve_ticket("SBS-0123", client).issue_id == "u1"

    def test_refetches_on_every_call(self, client):
        resolve_ticket("SBS-123", client)
        resolve_ticket("SBS-123", client)
        assert client.list_issues.call_count == 2

    def test_uses_project_of_ticket(self, client):
        client.list_issues.return_value = [{"id": "m1", "sequence_id": 45}]
        resolved = resolve_ticket("MOB-45", client)
        assert resolved.project == "MOB"
        assert resolved.project_id == PROJECTS["MOB"]["id"]
        client.list_issues.assert_called_once_with(PROJECTS["MOB"]["id"])

    def test_backend_errors_propagate(self, client):
        client.list_issues.side_effect = AuthenticationError("bad key")
        with pytest.raises(AuthenticationError):
            resolve_ticket("SBS-123", client)


class TestFindBySequence:
    def test_skips_entries_without_sequence(self):
        issues = [{"id": "a"}, {"id": "b", "sequence_id": 2}]
        assert find_by_sequence(issues, 2) == {"id": "b", "sequence_id": 2}
        assert find_by_sequence(issues, 3) is None
