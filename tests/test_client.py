"""Tests for the requests based API client."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from product_archive_client import ProductArchiveClient


def make_response(status_code, body=None, text=None):
    response = requests.Response()
    response.status_code = status_code
    response.url = "http://api.test/"
    if body is not None:
        response._content = json.dumps(body).encode()
        response.headers["content-type"] = "application/json"
    elif text is not None:
        response._content = text.encode()
        response.headers["content-type"] = "text/plain; charset=utf-8"
    else:
        response._content = b""
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return ProductArchiveClient(base_url="http://api.test/", session=session)


@pytest.mark.unit
class TestProductArchiveClient:

    def test_found_counts_as_success(self, api, session):
        session.request.return_value = make_response(302, body=[{"id": 1}])

        data, error = api.list_products()

        assert error is None
        assert data == [{"id": 1}]
        kwargs = session.request.call_args.kwargs
        assert kwargs["url"] == "http://api.test/api/v1/products"
        assert kwargs["allow_redirects"] is False

    def test_error_detail_is_reported(self, api, session):
        session.request.return_value = make_response(500, body={"detail": "No product with such id 9"})

        data, error = api.get_product(9)

        assert data is None
        assert error == {"status_code": 500, "message": "No product with such id 9"}

    def test_plain_text_body(self, api, session):
        session.request.return_value = make_response(202, text="Product with id 1 successfully deleted")

        data, error = api.delete_product(1)

        assert error is None
        assert data == "Product with id 1 successfully deleted"

    def test_update_sends_query_params(self, api, session):
        session.request.return_value = make_response(302, body={"id": 2})

        api.update_product(2, "renamed", 3, 9.5)

        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "PUT"
        assert kwargs["params"] == {"name": "renamed", "quantity": 3, "price": 9.5}

    def test_create_sends_json(self, api, session):
        session.request.return_value = make_response(201, body={"id": 4})

        api.create_product(4, "dproduct 4", 4, 40.0)

        assert session.request.call_args.kwargs["json"] == {
            "id": 4,
            "name": "dproduct 4",
            "quantity": 4,
            "price": 40.0,
            "imageUri": None,
        }

    def test_connection_error(self, api, session):
        session.request.side_effect = requests.ConnectionError("refused")

        data, error = api.list_archives()

        assert data is None
        assert error == {"status_code": None, "message": "refused"}

    def test_list_files_defaults_to_empty(self, api, session):
        session.request.return_value = make_response(500, body={"detail": "Could not load the files!"})

        data, error = api.list_files()

        assert data == []
        assert error["status_code"] == 500
