"""
Tests for the objects API client.
The requests.Session is mocked; no network access is needed.
"""
import json
from unittest.mock import MagicMock, Mock

import pytest
import requests

from cargopro.api_client import ObjectsApiClient
from cargopro.errors import MalformedResponse, NetworkUnavailable, NotFound, RequestFailed
from cargopro.models.schemas import ObjectRecord

BASE = "https://api.example.test/objects"


def make_response(status_code, body=None, text=None):
    resp = Mock()
    resp.status_code = status_code
    if text is not None:
        resp.text = text
        resp.json.side_effect = ValueError("not json")
    else:
        resp.text = json.dumps(body)
        resp.json.return_value = body
    return resp


@pytest.fixture()
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture()
def client(session):
    return ObjectsApiClient(base_url=BASE + "/", timeout=5, session=session)


def sent(session):
    """(method, url, kwargs) of the single request made."""
    session.request.assert_called_once()
    args, kwargs = session.request.call_args
    return args[0], args[1], kwargs


# ===========================================================================
# list_objects
# ===========================================================================

class TestListObjects:
    def test_decodes_array(self, client, session):
        session.request.return_value = make_response(
            200,
            [
                {"id": "1", "name": "Google Pixel 6 Pro", "data": {"color": "Cloudy White"}},
                {"id": "2", "name": "Apple iPhone 12 Mini", "data": None},
            ],
        )

        result = client.list_objects()

        assert [r.id for r in result] == ["1", "2"]
        assert result[0].data == {"color": "Cloudy White"}
        method, url, kwargs = sent(session)
        assert method == "GET"
        assert url == BASE
        assert kwargs["timeout"] == 5
        assert kwargs["headers"]["Accept"] == "application/json"

    def test_one_bad_element_fails_whole_call(self, client, session):
        session.request.return_value = make_response(
            200, [{"id": "1", "name": "ok"}, {"id": "2"}]
        )
        with pytest.raises(MalformedResponse) as exc_info:
            client.list_objects()
        assert exc_info.value.status_code == 0

    def test_non_array_body_is_malformed(self, client, session):
        session.request.return_value = make_response(200, {"error": "nope"})
        with pytest.raises(MalformedResponse):
            client.list_objects()

    def test_invalid_json_is_malformed(self, client, session):
        session.request.return_value = make_response(200, text="<html>")
        with pytest.raises(MalformedResponse):
            client.list_objects()

    def test_error_status(self, client, session):
        session.request.return_value = make_response(500, text="boom")
        with pytest.raises(RequestFailed) as exc_info:
            client.list_objects()
        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "boom"

    def test_connection_error_is_network_unavailable(self, client, session):
        session.request.side_effect = requests.ConnectionError("offline")
        with pytest.raises(NetworkUnavailable) as exc_info:
            client.list_objects()
        assert exc_info.value.status_code == 0
        assert "internet" in exc_info.value.user_message

    def test_timeout_is_network_unavailable(self, client, session):
        session.request.side_effect = requests.Timeout("slow")
        with pytest.raises(NetworkUnavailable):
            client.list_objects()


# ===========================================================================
# get / create / update / delete
# ===========================================================================

class TestSingleObject:
    def test_get_object(self, client, session):
        session.request.return_value = make_response(200, {"id": "7", "name": "Apple MacBook Pro 16"})
        record = client.get_object("7")
        assert record == ObjectRecord(id="7", name="Apple MacBook Pro 16")
        assert sent(session)[1] == f"{BASE}/7"

    def test_get_object_not_found(self, client, session):
        session.request.return_value = make_response(404, {"error": "Oject with id=99 was not found."})
        with pytest.raises(NotFound) as exc_info:
            client.get_object("99")
        assert exc_info.value.status_code == 404
        assert exc_info.value.user_message == "The requested item was not found"

    def test_get_object_other_status(self, client, session):
        session.request.return_value = make_response(503, text="down")
        with pytest.raises(RequestFailed) as exc_info:
            client.get_object("7")
        assert exc_info.value.user_message == "Service unavailable: Please try again later"

    @pytest.mark.parametrize("status", [200, 201])
    def test_create_sends_name_and_data_only(self, client, session, status):
        session.request.return_value = make_response(
            status, {"id": "ff80", "name": "X", "data": {"k": 1}, "createdAt": "2024-01-01"}
        )

        created = client.create_object(ObjectRecord(id="ignored", name="X", data={"k": 1}))

        method, url, kwargs = sent(session)
        assert method == "POST"
        assert url == BASE
        assert kwargs["json"] == {"name": "X", "data": {"k": 1}}
        assert created.id == "ff80"

    def test_create_omits_empty_data(self, client, session):
        session.request.return_value = make_response(200, {"id": "101", "name": "X"})
        client.create_object(ObjectRecord(name="X", data={}))
        assert sent(session)[2]["json"] == {"name": "X"}

    def test_create_failure(self, client, session):
        session.request.return_value = make_response(400, text="bad")
        with pytest.raises(RequestFailed) as exc_info:
            client.create_object(ObjectRecord(name="X"))
        assert exc_info.value.status_code == 400

    def test_update_puts_to_object_url(self, client, session):
        session.request.return_value = make_response(200, {"id": "ff80", "name": "Y"})

        updated = client.update_object("ff80", ObjectRecord(id="ff80", name="Y"))

        method, url, kwargs = sent(session)
        assert (method, url) == ("PUT", f"{BASE}/ff80")
        assert kwargs["json"] == {"name": "Y"}
        assert updated.name == "Y"

    def test_update_not_found(self, client, session):
        session.request.return_value = make_response(404, {"error": "missing"})
        with pytest.raises(NotFound):
            client.update_object("ff80", ObjectRecord(name="Y"))

    def test_update_malformed_body(self, client, session):
        session.request.return_value = make_response(200, {"id": "ff80"})
        with pytest.raises(MalformedResponse):
            client.update_object("ff80", ObjectRecord(name="Y"))

    def test_delete(self, client, session):
        session.request.return_value = make_response(200, {"message": "deleted"})
        assert client.delete_object("ff80") is True
        assert sent(session)[:2] == ("DELETE", f"{BASE}/ff80")

    @pytest.mark.parametrize("status,error", [(404, NotFound), (405, RequestFailed), (204, RequestFailed)])
    def test_delete_only_200_succeeds(self, client, session, status, error):
        session.request.return_value = make_response(status, text="")
        with pytest.raises(error):
            client.delete_object("ff80")


def test_context_manager_closes_session(session):
    with ObjectsApiClient(base_url=BASE, session=session) as client:
        assert client.base_url == BASE
    session.close.assert_called_once()
