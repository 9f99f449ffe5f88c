"""Tests for the People API connections listing."""

import io
from types import SimpleNamespace
from unittest.mock import MagicMock

import httplib2
import pytest
from google.auth.exceptions import RefreshError, TransportError
from googleapiclient.errors import HttpError

from contacts_query.contacts_client import ContactsClient, _parse_person
from contacts_query.errors import AuthorizationError, FetchError
from contacts_query.models import Contact
from contacts_query.pipeline import QueryPipeline


def _client(response=None, error=None, page_size=500):
    svc = MagicMock()
    request = svc.people.return_value.connections.return_value.list.return_value
    if error is not None:
        request.execute.side_effect = error
    else:
        request.execute.return_value = response
    return ContactsClient(SimpleNamespace(people=svc), page_size=page_size), svc


class TestListAll:
    def test_requests_names_and_emails_only(self):
        client, svc = _client({"connections": []}, page_size=500)
        client.list_all()
        svc.people.return_value.connections.return_value.list.assert_called_once_with(
            resourceName="people/me",
            pageSize=500,
            personFields="names,emailAddresses",
        )

    def test_parses_connections(self):
        client, _ = _client({
            "connections": [
                {
                    "resourceName": "people/c1",
                    "names": [{"displayName": "Ada Lovelace"}],
                    "emailAddresses": [{"value": "ada@example.com"}],
                },
                {"resourceName": "people/c2", "names": [{"displayName": "No Mail"}]},
            ],
            "nextPageToken": "ignored",
        })
        assert client.list_all() == [
            Contact("people/c1", "Ada Lovelace", ["ada@example.com"]),
            Contact("people/c2", "No Mail", []),
        ]

    def test_empty_response(self):
        client, _ = _client({})
        assert client.list_all() == []

    def test_http_error_raises_fetch_error(self):
        err = HttpError(httplib2.Response({"status": "503"}), b"backend unavailable")
        client, _ = _client(error=err)
        with pytest.raises(FetchError, match="listing contacts failed"):
            client.list_all()

    def test_network_error_raises_fetch_error(self):
        client, _ = _client(error=ConnectionResetError("reset by peer"))
        with pytest.raises(FetchError):
            client.list_all()

    def test_unreachable_server_raises_fetch_error(self):
        client, _ = _client(error=httplib2.ServerNotFoundError("Unable to find the server at people.googleapis.com"))
        with pytest.raises(FetchError, match="Unable to find the server"):
            client.list_all()

    def test_refresh_transport_failure_raises_fetch_error(self):
        client, _ = _client(error=TransportError("refresh: connection refused"))
        with pytest.raises(FetchError, match="connection refused"):
            client.list_all()

    def test_offline_failure_is_reported_on_status_line(self):
        client, _ = _client(error=httplib2.ServerNotFoundError("no route to people.googleapis.com"))
        out = io.StringIO()
        with pytest.raises(FetchError):
            QueryPipeline(client.list_all, out=out).run()
        assert out.getvalue() == "fetching...\tlisting contacts failed: no route to people.googleapis.com\n"

    def test_refresh_failure_is_an_authorization_error(self):
        client, _ = _client(error=RefreshError("invalid_grant"))
        with pytest.raises(AuthorizationError, match="contacts-query-reauth"):
            client.list_all()


class TestParsePerson:
    def test_first_name_wins(self):
        contact = _parse_person({
            "resourceName": "people/c1",
            "names": [{"displayName": "Primary"}, {"displayName": "Secondary"}],
            "emailAddresses": [{"value": "p@example.com"}],
        })
        assert contact.name == "Primary"

    def test_no_names(self):
        contact = _parse_person({"emailAddresses": [{"value": "a@x.com"}]})
        assert contact.name == ""
        assert contact.emails == ["a@x.com"]

    def test_blank_email_entries_skipped(self):
        contact = _parse_person({"emailAddresses": [{"value": ""}, {"type": "home"}, {"value": "b@y.com"}]})
        assert contact.emails == ["b@y.com"]
